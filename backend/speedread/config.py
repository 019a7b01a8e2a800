"""
Configuration settings for the SpeedRead vocabulary backend.
All environment variables and app settings are centralized here.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # Application
    APP_NAME: str = "SpeedRead Vocabulary Backend"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # development, staging, production

    # API Settings
    API_V1_PREFIX: str = "/api/v1"
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",  # Vite default
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173"
    ]

    # Groq (OpenAI-compatible) definition lookup
    GROQ_API_KEY: Optional[str] = None
    GROQ_BASE_URL: str = "https://api.groq.com/openai/v1"
    GROQ_MODEL: str = "llama-3.1-8b-instant"
    GROQ_MAX_TOKENS: int = 600
    GROQ_TEMPERATURE: float = 0.3
    GROQ_TIMEOUT_SECONDS: float = 20.0

    # SRS (Spaced Repetition System) Settings
    SRS_INTERVALS_DAYS: list[int] = [1, 3, 7, 14, 30, 90]
    SRS_MAX_MASTERY: int = 5

    # Review sessions
    SESSION_MAX_WORDS: int = 10
    STREAK_LOOKBACK_DAYS: int = 30
    DEFAULT_DAILY_GOAL: int = 5
    WEEKLY_PROGRESS_WINDOW_DAYS: int = 7
    DEFAULT_USER_LEVEL: str = "intermediate"

    # Text analysis
    DEFAULT_READING_WPM: int = 250
    SMOG_MIN_SENTENCES: int = 30
    TOPIC_LIMIT: int = 5
    ANALYSIS_MIN_TEXT_LENGTH: int = 10
    ANALYSIS_DEBOUNCE_MS: int = 100

    # Vocabulary detection
    DETECTION_MAX_WORDS: int = 10
    DETECTION_MIN_TEXT_LENGTH: int = 50
    DETECTION_DEBOUNCE_MS: int = 500

    # Persistence
    VOCABULARY_STORE_PATH: Optional[str] = "data/vocabulary-storage.json"
    VOCABULARY_STORE_VERSION: int = 1

    # Logging
    LOG_LEVEL: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are loaded only once.
    """
    return Settings()


# Singleton instance
settings = get_settings()
