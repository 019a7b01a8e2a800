"""
Base Service
Abstract base class for the domain services.
Provides common interface, settings access and logging.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any

from speedread.config import Settings, get_settings


class BaseService(ABC):
    """
    Abstract base class for domain services.

    Each service should:
    - Own a single concern (vocabulary, text analysis, detection)
    - Receive its collaborators explicitly
    - Log its operations for debugging
    """

    def __init__(self, settings: Settings | None = None):
        """
        Initialize base service.

        Args:
            settings: Application settings (uses singleton if not provided)
        """
        self.settings = settings or get_settings()

        # Setup logging for this service
        self.logger = logging.getLogger(f"service.{self.name}")

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name for logging and identification"""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Service description for documentation"""
        pass

    def log_start(self, operation: str, context: dict | None = None) -> None:
        """Log an operation starting"""
        msg = f"[{self.name}] Starting {operation}"
        if context:
            msg += f" - Context: {context}"
        self.logger.info(msg)

    def log_complete(self, operation: str, result: Any = None) -> None:
        """Log an operation completing"""
        msg = f"[{self.name}] Completed {operation}"
        if result:
            msg += f" - Result: {result}"
        self.logger.info(msg)

    def log_error(self, error: Exception, context: dict | None = None) -> None:
        """Log a recovered or propagated error"""
        msg = f"[{self.name}] Error: {str(error)}"
        if context:
            msg += f" - Context: {context}"
        self.logger.error(msg, exc_info=True)

    def log_warning(self, message: str, data: Any = None) -> None:
        msg = f"[{self.name}] {message}"
        if data:
            msg += f" - Data: {data}"
        self.logger.warning(msg)

    def log_debug(self, message: str, data: Any = None) -> None:
        """Log debug information"""
        msg = f"[{self.name}] {message}"
        if data:
            msg += f" - Data: {data}"
        self.logger.debug(msg)
