"""
Text Analysis Models
Readability scores, vocabulary breakdown and the aggregated analysis report.
"""
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class DifficultyLevel(str, Enum):
    """Derived difficulty label of a text"""
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"


class ReadabilityScores(BaseModel):
    """Raw readability metrics"""
    flesch_kincaid: int = Field(..., ge=0, le=100)
    smog_index: float = Field(..., ge=0)
    sentence_count: int = 0
    word_count: int = 0
    syllable_count: int = 0


class WordFrequency(BaseModel):
    """A word and how often it appears"""
    word: str
    count: int


class Topic(BaseModel):
    """A ranked topic term"""
    word: str
    score: float
    frequency: int


class VocabularyAnalysis(BaseModel):
    """Vocabulary complexity breakdown"""
    total_words: int = 0
    unique_words: int = 0
    vocabulary_level: int = Field(default=0, ge=0, le=100, description="% of unique words outside the common set")
    most_frequent_words: list[WordFrequency] = Field(default_factory=list)


class TextAnalysis(BaseModel):
    """Complete analysis report for a text. Immutable once computed."""
    model_config = ConfigDict(frozen=True)

    flesch_kincaid: int
    smog_index: float
    vocabulary_analysis: VocabularyAnalysis
    topics: list[Topic] = Field(default_factory=list)
    estimated_time: int = Field(default=0, ge=0, description="Estimated reading minutes")
    difficulty_level: DifficultyLevel
    recommendations: list[str] = Field(default_factory=list)
