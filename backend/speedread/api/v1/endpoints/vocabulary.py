"""
Vocabulary API Endpoints
REST API for the learner's vocabulary and word detection.
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional
import logging

from speedread.core.dependencies import get_detection_service, get_vocabulary_service
from speedread.core.exceptions import StorageError, VocabularyImportError, WordNotFoundError
from speedread.models.vocabulary import QuizQuestion, VocabularyWord
from speedread.schemas.vocabulary import (
    AddWordRequest,
    AddWordsFromTextRequest,
    AddWordsResult,
    DetectWordsRequest,
    DetectWordsResponse,
    ImportRequest,
    ImportResponse,
    MasteryUpdateRequest,
    StatsResponse,
    VocabularySettingsRequest,
    VocabularySettingsResponse,
    WordListResponse
)
from speedread.services.detection_service import VocabularyDetectionService
from speedread.services.vocabulary_service import VocabularyService


logger = logging.getLogger(__name__)

router = APIRouter()


def _storage_failure(e: StorageError) -> HTTPException:
    logger.error(f"Vocabulary storage error: {e}")
    return HTTPException(status_code=500, detail=f"Failed to save vocabulary: {str(e)}")


# ==================== DETECTION ENDPOINTS ====================

@router.post("/detect", response_model=DetectWordsResponse)
async def detect_words(
    request: DetectWordsRequest,
    detection: VocabularyDetectionService = Depends(get_detection_service)
):
    """
    Detect words in a text that are likely new to the learner.

    Uses the learner's level; words already in the vocabulary are skipped.
    """
    return DetectWordsResponse(
        words=detection.detect(request.text),
        user_level=detection.vocabulary_service.user_level
    )


# ==================== WORD ENDPOINTS ====================

@router.post("/words", response_model=VocabularyWord)
async def add_word(
    request: AddWordRequest,
    service: VocabularyService = Depends(get_vocabulary_service)
):
    """Add a word. Returns the existing entry for a known word."""
    try:
        return await service.add_word(request.word, request.context, request.source_text)
    except StorageError as e:
        raise _storage_failure(e)


@router.post("/words/from-text", response_model=list[AddWordsResult])
async def add_words_from_text(
    request: AddWordsFromTextRequest,
    detection: VocabularyDetectionService = Depends(get_detection_service)
):
    """Add several words, each with its sentence from the text as context."""
    return await detection.add_multiple_words(request.words, request.text, request.text_id)


@router.get("/words", response_model=WordListResponse)
async def list_words(
    query: Optional[str] = Query(default=None, description="Search in word, definition and tags"),
    tag: Optional[str] = Query(default=None, description="Exact tag filter"),
    service: VocabularyService = Depends(get_vocabulary_service)
):
    words = service.words
    if query:
        words = service.search_words(query)
    if tag:
        words = [w for w in words if tag in w.tags]
    return WordListResponse(words=words, total=len(words))


@router.get("/words/{word_id}", response_model=VocabularyWord)
async def get_word(
    word_id: str,
    service: VocabularyService = Depends(get_vocabulary_service)
):
    try:
        return service.get_word(word_id)
    except WordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/words/{word_id}")
async def remove_word(
    word_id: str,
    service: VocabularyService = Depends(get_vocabulary_service)
):
    try:
        service.remove_word(word_id)
    except WordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageError as e:
        raise _storage_failure(e)
    return {"status": "removed", "word_id": word_id}


@router.post("/words/{word_id}/mastery", response_model=VocabularyWord)
async def update_mastery(
    word_id: str,
    request: MasteryUpdateRequest,
    service: VocabularyService = Depends(get_vocabulary_service)
):
    """Record a review answer for a single word."""
    try:
        word = service.update_word_mastery(word_id, request.correct)
    except StorageError as e:
        raise _storage_failure(e)
    if word is None:
        raise HTTPException(status_code=404, detail=f"Word not found: {word_id}")
    return word


# ==================== REVIEW & STATS ====================

@router.get("/review", response_model=WordListResponse)
async def get_words_for_review(
    service: VocabularyService = Depends(get_vocabulary_service)
):
    """Words due today, earliest due first."""
    words = service.get_words_for_review()
    return WordListResponse(words=words, total=len(words))


@router.get("/stats", response_model=StatsResponse)
async def get_stats(
    service: VocabularyService = Depends(get_vocabulary_service)
):
    stats = service.update_stats(persist=False)
    return StatsResponse(stats=stats, due_for_review=len(service.get_words_for_review()))


@router.get("/quiz", response_model=list[QuizQuestion])
async def get_quiz(
    count: int = Query(default=5, ge=1, le=20),
    service: VocabularyService = Depends(get_vocabulary_service)
):
    return service.generate_quiz(count)


# ==================== SETTINGS ====================

@router.get("/settings", response_model=VocabularySettingsResponse)
async def get_vocabulary_settings(
    service: VocabularyService = Depends(get_vocabulary_service)
):
    return VocabularySettingsResponse(user_level=service.user_level, daily_goal=service.daily_goal)


@router.put("/settings", response_model=VocabularySettingsResponse)
async def update_vocabulary_settings(
    request: VocabularySettingsRequest,
    service: VocabularyService = Depends(get_vocabulary_service)
):
    try:
        if request.user_level is not None:
            service.set_user_level(request.user_level)
        if request.daily_goal is not None:
            service.set_daily_goal(request.daily_goal)
    except StorageError as e:
        raise _storage_failure(e)
    return VocabularySettingsResponse(user_level=service.user_level, daily_goal=service.daily_goal)


# ==================== IMPORT / EXPORT ====================

@router.get("/export")
async def export_vocabulary(
    service: VocabularyService = Depends(get_vocabulary_service)
):
    return {"data": service.export_vocabulary()}


@router.post("/import", response_model=ImportResponse)
async def import_vocabulary(
    request: ImportRequest,
    service: VocabularyService = Depends(get_vocabulary_service)
):
    try:
        imported = service.import_vocabulary(request.data)
    except VocabularyImportError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError as e:
        raise _storage_failure(e)
    return ImportResponse(imported=imported, total_words=len(service.words))
