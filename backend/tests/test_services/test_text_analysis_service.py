"""
Tests for TextAnalysisService
Tests per-text caching and debounced analysis.
"""
import asyncio
from unittest.mock import patch

import pytest

from speedread.models.text_analysis import DifficultyLevel
from speedread.utils.text_analysis import analyze_text


SAMPLE_TEXT = (
    "Speed reading trains the eyes to move quickly. Readers practice chunking words. "
    "Chunking words improves reading speed and comprehension."
)


class TestAnalysisCache:
    """Test caching by text id."""

    def test_analyze_current_text_caches(self, text_analysis_service):
        analysis = text_analysis_service.analyze_current_text("t1", SAMPLE_TEXT)

        assert text_analysis_service.cache_size == 1
        assert text_analysis_service.get_cached("t1") is analysis
        assert analysis.topics

    def test_get_analysis_returns_cached_entry(self, text_analysis_service):
        """Test the cache is keyed by id, not by content."""
        first = text_analysis_service.get_analysis("t1", SAMPLE_TEXT)
        second = text_analysis_service.get_analysis("t1", "Completely different content here.")

        assert second is first
        assert text_analysis_service.cache_size == 1

    def test_analysis_computed_once(self, text_analysis_service):
        with patch("speedread.services.text_analysis_service.analyze_text", wraps=analyze_text) as mock_analyze:
            text_analysis_service.get_analysis("t1", SAMPLE_TEXT)
            text_analysis_service.get_analysis("t1", SAMPLE_TEXT)

        mock_analyze.assert_called_once()

    def test_cache_grows_per_distinct_text(self, text_analysis_service):
        for i in range(3):
            text_analysis_service.get_analysis(f"t{i}", SAMPLE_TEXT)
        assert text_analysis_service.cache_size == 3

    @pytest.mark.parametrize("content", ["", "short"])
    def test_short_content_not_analyzed(self, text_analysis_service, content):
        assert text_analysis_service.get_analysis("t1", content) is None
        assert text_analysis_service.cache_size == 0

    def test_reanalysis_replaces_entry(self, text_analysis_service):
        text_analysis_service.analyze_current_text("t1", SAMPLE_TEXT)
        updated = text_analysis_service.analyze_current_text("t1", "The cat sat. The dog ran.")

        assert text_analysis_service.get_cached("t1") is updated
        assert updated.difficulty_level == DifficultyLevel.BEGINNER

    def test_custom_wpm(self, text_analysis_service):
        text = " ".join(["word"] * 600)
        assert text_analysis_service.analyze_current_text("slow", text, wpm=100).estimated_time == 6
        assert text_analysis_service.analyze_current_text("default", text).estimated_time == 3

    def test_clear_cache(self, text_analysis_service):
        text_analysis_service.get_analysis("t1", SAMPLE_TEXT)
        text_analysis_service.clear_cache()
        assert text_analysis_service.get_cached("t1") is None


class TestDebouncedAnalysis:

    @pytest.mark.asyncio
    async def test_only_latest_edit_analyzed(self, text_analysis_service):
        first = text_analysis_service.analyze_debounced("draft-1", SAMPLE_TEXT)
        second = text_analysis_service.analyze_debounced("draft-2", SAMPLE_TEXT)

        results = await asyncio.gather(first, second)

        assert results[0] is None
        assert results[1] is not None
        assert text_analysis_service.get_cached("draft-1") is None
        assert text_analysis_service.get_cached("draft-2") is results[1]
