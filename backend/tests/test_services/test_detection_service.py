"""
Tests for VocabularyDetectionService
Tests new-word detection and adding detected words with their context.
"""
import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from speedread.core.exceptions import StorageError
from speedread.services.detection_service import VocabularyDetectionService


READING_TEXT = (
    "The ephemeral festival drew laconic visitors. "
    "Magnificent crowds gathered every summer."
)


@pytest.fixture
def detection_service(vocabulary_service, test_settings):
    return VocabularyDetectionService(vocabulary_service, test_settings)


class TestDetect:
    """Test candidate word detection."""

    def test_detects_unknown_words_in_order(self, detection_service):
        words = detection_service.detect(READING_TEXT)

        assert words[:4] == ["ephemeral", "festival", "drew", "laconic"]
        assert "magnificent" not in words

    def test_short_text_ignored(self, detection_service):
        assert detection_service.detect("An ephemeral and laconic remark.") == []

    def test_existing_vocabulary_excluded(self, detection_service, vocabulary_service, make_word):
        vocabulary_service.words = [make_word("1", word="Laconic")]

        assert "laconic" not in detection_service.detect(READING_TEXT)

    def test_user_level_respected(self, detection_service, vocabulary_service):
        vocabulary_service.set_user_level("beginner")
        assert "magnificent" in detection_service.detect(READING_TEXT)

    def test_limited_to_ten_words(self, detection_service):
        text = " ".join(f"unusual{chr(97 + i)}term" for i in range(15))
        assert len(detection_service.detect(text)) == 10

    @pytest.mark.asyncio
    async def test_debounced_detection_keeps_latest(self, detection_service):
        first = detection_service.detect_debounced(READING_TEXT)
        second = detection_service.detect_debounced("Quixotic plans. " + READING_TEXT)

        results = await asyncio.gather(first, second)

        assert results[0] is None
        assert "quixotic" in results[1]


class TestAddDetectedWords:
    """Test adding detected words to the vocabulary."""

    @pytest.mark.asyncio
    async def test_add_word_with_context(self, detection_service, vocabulary_service, mock_definition_service):
        added = await detection_service.add_word_to_vocabulary("laconic", READING_TEXT, "text-9")

        assert added is True
        word = vocabulary_service.find_word("laconic")
        assert word.context_sentence == "The ephemeral festival drew laconic visitors"
        assert word.source_text == "text-9"
        mock_definition_service.lookup_definition.assert_awaited_once_with(
            "laconic", "The ephemeral festival drew laconic visitors"
        )

    @pytest.mark.asyncio
    async def test_empty_text_rejected(self, detection_service, vocabulary_service):
        assert await detection_service.add_word_to_vocabulary("laconic", "") is False
        assert vocabulary_service.words == []

    @pytest.mark.asyncio
    async def test_failure_reported_not_raised(self, detection_service, vocabulary_service):
        with patch.object(vocabulary_service, "add_word", AsyncMock(side_effect=StorageError("disk full"))):
            added = await detection_service.add_word_to_vocabulary("laconic", READING_TEXT)

        assert added is False

    @pytest.mark.asyncio
    async def test_add_multiple_words(self, detection_service, vocabulary_service):
        results = await detection_service.add_multiple_words(["ephemeral", "laconic"], READING_TEXT, "text-1")

        assert results == [
            {"word": "ephemeral", "success": True},
            {"word": "laconic", "success": True},
        ]
        assert [w.word for w in vocabulary_service.words] == ["ephemeral", "laconic"]
