"""
Services Module
Domain services, the definition lookup client and persistence.
"""
from speedread.services.definition_service import DefinitionService, fallback_definition
from speedread.services.storage_service import VocabularyStorage
from speedread.services.text_analysis_service import TextAnalysisService
from speedread.services.vocabulary_service import VocabularyService
from speedread.services.detection_service import VocabularyDetectionService

__all__ = [
    "DefinitionService", "fallback_definition", "VocabularyStorage",
    "TextAnalysisService", "VocabularyService", "VocabularyDetectionService"
]
