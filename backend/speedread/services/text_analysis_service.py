"""
Text Analysis Service
Caches analysis reports by text id for the lifetime of the process.
"""
from typing import Optional

from speedread.config import Settings
from speedread.models.text_analysis import TextAnalysis
from speedread.services.base_service import BaseService
from speedread.utils.debounce import Debouncer
from speedread.utils.text_analysis import analyze_text


class TextAnalysisService(BaseService):
    """
    Text Analysis Service - readability, vocabulary and topics per text.

    Results are kept in an unbounded dict keyed by text id; the number of
    entries is the number of distinct texts analyzed.
    """

    def __init__(self, settings: Settings | None = None):
        super().__init__(settings=settings)
        self._analyses: dict[str, TextAnalysis] = {}
        self._debouncer = Debouncer(self.settings.ANALYSIS_DEBOUNCE_MS)

    @property
    def name(self) -> str:
        return "text_analysis"

    @property
    def description(self) -> str:
        return "Analyzes text readability, vocabulary complexity and topics"

    @property
    def cache_size(self) -> int:
        return len(self._analyses)

    def get_cached(self, text_id: str) -> Optional[TextAnalysis]:
        return self._analyses.get(text_id)

    def clear_cache(self) -> None:
        self._analyses.clear()

    def analyze_current_text(
        self,
        text_id: str,
        content: str,
        wpm: Optional[int] = None
    ) -> TextAnalysis:
        """Analyze content and store the result under text_id."""
        wpm = wpm or self.settings.DEFAULT_READING_WPM
        self.log_start("analysis", {"text_id": text_id, "length": len(content), "wpm": wpm})

        analysis = analyze_text(
            content,
            wpm,
            topic_limit=self.settings.TOPIC_LIMIT,
            smog_min_sentences=self.settings.SMOG_MIN_SENTENCES
        )
        self._analyses[text_id] = analysis

        self.log_complete("analysis", {"text_id": text_id, "difficulty": analysis.difficulty_level.value})
        return analysis

    def get_analysis(
        self,
        text_id: str,
        content: str,
        wpm: Optional[int] = None
    ) -> Optional[TextAnalysis]:
        """
        Cached analysis for text_id, computing it on first request.

        Returns None when nothing is cached and the content is too short
        to be worth analyzing.
        """
        cached = self._analyses.get(text_id)
        if cached is not None:
            self.log_debug(f"Cache hit for text {text_id}")
            return cached

        if not content or len(content) < self.settings.ANALYSIS_MIN_TEXT_LENGTH:
            return None

        return self.analyze_current_text(text_id, content, wpm)

    async def analyze_debounced(
        self,
        text_id: str,
        content: str,
        wpm: Optional[int] = None
    ) -> Optional[TextAnalysis]:
        """get_analysis after input quiescence; None if superseded."""
        return await self._debouncer.schedule(self.get_analysis, text_id, content, wpm)
