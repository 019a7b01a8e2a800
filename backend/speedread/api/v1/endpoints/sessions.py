"""
Review Session API Endpoints
REST API for spaced repetition review sessions.
"""
from fastapi import APIRouter, Depends, HTTPException
import logging

from speedread.core.dependencies import get_vocabulary_service
from speedread.core.exceptions import SessionStateError, StorageError
from speedread.models.vocabulary import AnswerOutcome
from speedread.schemas.vocabulary import (
    AnswerRequest,
    CompleteSessionRequest,
    SessionHistoryResponse,
    SessionResponse,
    StartSessionRequest
)
from speedread.services.vocabulary_service import VocabularyService


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/start", response_model=SessionResponse)
async def start_session(
    request: StartSessionRequest,
    service: VocabularyService = Depends(get_vocabulary_service)
):
    """
    Start a review session.

    Picks up to 10 due words, earliest due first.
    """
    try:
        session = service.start_review_session(request.session_type)
    except StorageError as e:
        logger.error(f"Error starting session: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to save session: {str(e)}")

    return SessionResponse(status="in_progress", session=session, current_word=session.current_word)


@router.get("/current", response_model=SessionResponse)
async def get_current_session(
    service: VocabularyService = Depends(get_vocabulary_service)
):
    session = service.current_session
    if session is None:
        return SessionResponse(status="none")
    return SessionResponse(status="in_progress", session=session, current_word=session.current_word)


@router.post("/answer", response_model=AnswerOutcome)
async def answer_question(
    request: AnswerRequest,
    service: VocabularyService = Depends(get_vocabulary_service)
):
    """
    Answer the current question.

    The session completes automatically after the last word.
    """
    try:
        return service.answer(request.word_id, request.correct)
    except SessionStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StorageError as e:
        logger.error(f"Error recording answer: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to save answer: {str(e)}")


@router.post("/complete", response_model=SessionResponse)
async def complete_session(
    request: CompleteSessionRequest,
    service: VocabularyService = Depends(get_vocabulary_service)
):
    """Complete the current session. Does nothing when none is open."""
    try:
        session = service.complete_session(request.results)
    except StorageError as e:
        logger.error(f"Error completing session: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to save session: {str(e)}")

    if session is None:
        return SessionResponse(status="none")
    return SessionResponse(status="completed", session=session)


@router.get("/history", response_model=SessionHistoryResponse)
async def get_session_history(
    service: VocabularyService = Depends(get_vocabulary_service)
):
    return SessionHistoryResponse(sessions=service.sessions, total=len(service.sessions))
