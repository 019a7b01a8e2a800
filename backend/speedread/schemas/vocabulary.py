"""
Vocabulary Schemas
Request and response schemas for vocabulary API endpoints.
"""
from typing import Optional
from pydantic import BaseModel, Field

from speedread.models.vocabulary import (
    ReviewResult,
    SessionType,
    UserLevel,
    VocabularySession,
    VocabularyStats,
    VocabularyWord
)


# ==================== REQUEST SCHEMAS ====================

class DetectWordsRequest(BaseModel):
    """Request to detect new words in a text."""
    text: str = Field(..., description="Reading text")


class AddWordRequest(BaseModel):
    """Request to add a single word."""
    word: str = Field(..., min_length=1, description="Word to add")
    context: str = Field(default="", description="Sentence the word was found in")
    source_text: Optional[str] = Field(default=None, description="Id of the source text")


class AddWordsFromTextRequest(BaseModel):
    """Request to add several words found in a text."""
    words: list[str] = Field(..., min_length=1, max_length=10)
    text: str = Field(..., min_length=1)
    text_id: Optional[str] = None


class MasteryUpdateRequest(BaseModel):
    """Request to record a review answer outside a session."""
    correct: bool


class StartSessionRequest(BaseModel):
    """Request to start a review session."""
    session_type: SessionType = SessionType.REVIEW


class AnswerRequest(BaseModel):
    """Request to answer the current session question."""
    word_id: str
    correct: bool


class CompleteSessionRequest(BaseModel):
    """Request to complete the current session, optionally with batch results."""
    results: list[ReviewResult] = Field(default_factory=list)


class VocabularySettingsRequest(BaseModel):
    """Request to change learner settings."""
    user_level: Optional[UserLevel] = None
    daily_goal: Optional[int] = Field(default=None, ge=1, le=100)


class ImportRequest(BaseModel):
    """Request containing an export payload."""
    data: str


# ==================== RESPONSE SCHEMAS ====================

class DetectWordsResponse(BaseModel):
    """Detected candidate words."""
    words: list[str]
    user_level: UserLevel


class AddWordsResult(BaseModel):
    word: str
    success: bool


class WordListResponse(BaseModel):
    """Response containing a list of words."""
    words: list[VocabularyWord]
    total: int


class SessionResponse(BaseModel):
    """Response containing a session."""
    status: str = Field(..., description="in_progress, completed, or none")
    session: Optional[VocabularySession] = None
    current_word: Optional[VocabularyWord] = None


class SessionHistoryResponse(BaseModel):
    sessions: list[VocabularySession]
    total: int


class StatsResponse(BaseModel):
    stats: VocabularyStats
    due_for_review: int


class ImportResponse(BaseModel):
    imported: int
    total_words: int


class VocabularySettingsResponse(BaseModel):
    user_level: UserLevel
    daily_goal: int
