"""
Pydantic Models Module
Contains data models for all entities in the application.
"""
from speedread.models.vocabulary import (
    UserLevel, SessionType, WordDefinition, VocabularyWord, ReviewResult,
    VocabularySession, VocabularyStats, AnswerOutcome, QuizQuestion,
    WordRoot, VocabularySnapshot
)
from speedread.models.text_analysis import (
    DifficultyLevel, ReadabilityScores, WordFrequency, Topic,
    VocabularyAnalysis, TextAnalysis
)

__all__ = [
    "UserLevel", "SessionType", "WordDefinition", "VocabularyWord", "ReviewResult",
    "VocabularySession", "VocabularyStats", "AnswerOutcome", "QuizQuestion",
    "WordRoot", "VocabularySnapshot",
    "DifficultyLevel", "ReadabilityScores", "WordFrequency", "Topic",
    "VocabularyAnalysis", "TextAnalysis"
]
