"""
FastAPI Dependencies
Provide the service objects to the endpoints.
"""
import logging
from functools import lru_cache

from fastapi import Depends

from speedread.config import get_settings
from speedread.services.definition_service import DefinitionService
from speedread.services.detection_service import VocabularyDetectionService
from speedread.services.storage_service import VocabularyStorage
from speedread.services.text_analysis_service import TextAnalysisService
from speedread.services.vocabulary_service import VocabularyService


logger = logging.getLogger(__name__)


@lru_cache()
def get_vocabulary_service() -> VocabularyService:
    """Process-wide vocabulary service, backed by file storage when configured."""
    settings = get_settings()
    storage = None
    if settings.VOCABULARY_STORE_PATH:
        storage = VocabularyStorage(settings.VOCABULARY_STORE_PATH, settings.VOCABULARY_STORE_VERSION)
    else:
        logger.warning("VOCABULARY_STORE_PATH not set, vocabulary will not be persisted")

    return VocabularyService(
        settings=settings,
        definition_service=DefinitionService(settings),
        storage=storage
    )


@lru_cache()
def get_text_analysis_service() -> TextAnalysisService:
    return TextAnalysisService(get_settings())


def get_detection_service(
    vocabulary_service: VocabularyService = Depends(get_vocabulary_service)
) -> VocabularyDetectionService:
    return VocabularyDetectionService(vocabulary_service, get_settings())
