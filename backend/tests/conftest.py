"""
Pytest configuration and fixtures for tests.
"""
import pytest
from unittest.mock import AsyncMock
from datetime import datetime, timedelta, timezone

from speedread.config import Settings
from speedread.models.vocabulary import VocabularySession, VocabularyWord, WordDefinition
from speedread.services.text_analysis_service import TextAnalysisService
from speedread.services.vocabulary_service import VocabularyService


FIXED_NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Controllable clock returning aware UTC datetimes."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def test_settings():
    """Settings isolated from the environment's persistence and API key."""
    return Settings(
        GROQ_API_KEY=None,
        VOCABULARY_STORE_PATH=None,
        ANALYSIS_DEBOUNCE_MS=10,
        DETECTION_DEBOUNCE_MS=10
    )


@pytest.fixture
def clock():
    return FakeClock(FIXED_NOW)


@pytest.fixture
def sample_definition():
    return WordDefinition(
        definition="Involving many carefully arranged parts or details",
        part_of_speech="adjective",
        pronunciation="/ɪˈlæbərət/",
        examples=["The wedding had an elaborate ceremony."],
        synonyms=["complex", "intricate"],
        antonyms=["simple"]
    )


@pytest.fixture
def mock_definition_service(sample_definition):
    """Mock definition lookup service."""
    service = AsyncMock()
    service.lookup_definition.return_value = sample_definition
    return service


@pytest.fixture
def vocabulary_service(test_settings, mock_definition_service, clock):
    """In-memory vocabulary service with a fixed clock."""
    return VocabularyService(
        settings=test_settings,
        definition_service=mock_definition_service,
        storage=None,
        clock=clock
    )


@pytest.fixture
def text_analysis_service(test_settings):
    return TextAnalysisService(test_settings)


@pytest.fixture
def make_word():
    """Factory for vocabulary words with controllable review state."""
    def _make_word(
        word_id: str,
        word: str | None = None,
        mastery: int = 0,
        next_review: datetime | None = None,
        review_count: int = 0,
        date_added: datetime | None = None,
        definition: str | None = None,
        tags: list[str] | None = None
    ) -> VocabularyWord:
        return VocabularyWord(
            id=word_id,
            word=word or f"word{word_id}",
            definition=definition or f"Definition of {word or word_id}",
            part_of_speech="noun",
            context_sentence=f"A sentence with {word or word_id}.",
            date_added=date_added or FIXED_NOW - timedelta(days=30),
            review_count=review_count,
            mastery_level=mastery,
            next_review=next_review or FIXED_NOW,
            tags=tags or []
        )
    return _make_word


@pytest.fixture
def make_session():
    """Factory for completed sessions created a number of days before FIXED_NOW."""
    def _make_session(days_ago: int, session_id: str | None = None) -> VocabularySession:
        return VocabularySession(
            id=session_id or f"session_{days_ago}",
            created_at=FIXED_NOW - timedelta(days=days_ago, hours=1)
        )
    return _make_session


@pytest.fixture
def fixed_now():
    return FIXED_NOW
