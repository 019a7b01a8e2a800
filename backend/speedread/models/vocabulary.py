"""
Vocabulary Models
Defines vocabulary word, review session and statistics structures.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Optional
from pydantic import AfterValidator, BaseModel, Field


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Naive timestamps are taken as UTC; aware ones are converted."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UTCDatetime = Annotated[datetime, AfterValidator(ensure_utc)]


class UserLevel(str, Enum):
    """Reader proficiency level, ordered from beginner to expert"""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"

    @property
    def rank(self) -> int:
        return list(UserLevel).index(self)


class SessionType(str, Enum):
    """Kind of vocabulary session"""
    DISCOVERY = "discovery"
    REVIEW = "review"
    QUIZ = "quiz"


class WordDefinition(BaseModel):
    """Definition payload returned by the definition lookup service"""
    definition: str = Field(..., min_length=1)
    part_of_speech: str = Field(..., description="Noun, verb, adjective, etc.")
    pronunciation: Optional[str] = None
    etymology: Optional[str] = None
    examples: list[str] = Field(default_factory=list)
    synonyms: list[str] = Field(default_factory=list)
    antonyms: list[str] = Field(default_factory=list)


class VocabularyWord(BaseModel):
    """A learned term tracked by the spaced repetition scheduler"""
    id: str
    word: str
    definition: str
    part_of_speech: str
    pronunciation: Optional[str] = None
    etymology: Optional[str] = None
    difficulty: UserLevel = UserLevel.BEGINNER
    examples: list[str] = Field(default_factory=list)
    synonyms: list[str] = Field(default_factory=list)
    antonyms: list[str] = Field(default_factory=list)
    context_sentence: str = ""
    source_text: Optional[str] = Field(default=None, description="Id of the text the word came from")

    # Review tracking
    date_added: UTCDatetime = Field(default_factory=utcnow)
    last_reviewed: Optional[UTCDatetime] = None
    review_count: int = Field(default=0, ge=0)
    mastery_level: int = Field(default=0, ge=0, le=5, description="0 = new, 5 = retired from review")
    next_review: UTCDatetime = Field(default_factory=utcnow)

    tags: list[str] = Field(default_factory=list)


class ReviewResult(BaseModel):
    """Outcome of a single answer inside a review session"""
    word_id: str
    correct: bool
    answered_at: UTCDatetime = Field(default_factory=utcnow)


class VocabularySession(BaseModel):
    """A bounded review session"""
    id: str
    user_id: str = "current-user"
    words: list[VocabularyWord] = Field(default_factory=list)
    session_type: SessionType = SessionType.REVIEW
    correct_answers: int = Field(default=0, ge=0)
    total_questions: int = Field(default=0, ge=0)
    duration: int = Field(default=0, ge=0, description="Elapsed milliseconds, set on completion")
    created_at: UTCDatetime = Field(default_factory=utcnow)

    # In-progress tracking
    results: list[ReviewResult] = Field(default_factory=list)
    position: int = Field(default=0, ge=0)

    @property
    def current_word(self) -> Optional[VocabularyWord]:
        if self.position < len(self.words):
            return self.words[self.position]
        return None


class VocabularyStats(BaseModel):
    """Aggregate statistics, recomputed from words and sessions"""
    total_words: int = 0
    words_learned: int = 0
    words_reviewing: int = 0
    words_mastered: int = 0
    average_mastery: float = 0.0
    streak_days: int = 0
    weekly_goal: int = 35
    weekly_progress: int = 0


class AnswerOutcome(BaseModel):
    """Result of answering one question of the current session"""
    word: Optional[VocabularyWord] = None
    correct: bool
    next_word: Optional[VocabularyWord] = None
    session_complete: bool = False
    session: Optional[VocabularySession] = None


class QuizQuestion(BaseModel):
    """Multiple choice definition question"""
    word: str
    question: str
    correct_answer: str
    options: list[str]
    context: str = ""


class WordRoot(BaseModel):
    """Greek or Latin word root"""
    root: str
    meaning: str
    origin: str
    examples: list[str]


class VocabularySnapshot(BaseModel):
    """Everything persisted between runs"""
    words: list[VocabularyWord] = Field(default_factory=list)
    sessions: list[VocabularySession] = Field(default_factory=list)
    current_session: Optional[VocabularySession] = None
    stats: VocabularyStats = Field(default_factory=VocabularyStats)
    daily_goal: int = Field(default=5, ge=1)
    user_level: UserLevel = UserLevel.INTERMEDIATE
