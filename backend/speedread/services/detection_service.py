"""
Vocabulary Detection Service
Finds candidate words in a text for the reader's level and adds the chosen
ones to the vocabulary.
"""
from typing import Optional

from speedread.config import Settings
from speedread.core.exceptions import SpeedReadError
from speedread.services.base_service import BaseService
from speedread.services.vocabulary_service import VocabularyService
from speedread.utils.debounce import Debouncer
from speedread.utils.vocabulary_analysis import analyze_vocabulary_difficulty, find_context_sentence


class VocabularyDetectionService(BaseService):
    """
    Detection Service - new-word candidates for a reading text.

    Candidates exclude words the learner already has. Detection on live
    input goes through a debouncer so only the latest text is analyzed.
    """

    def __init__(self, vocabulary_service: VocabularyService, settings: Settings | None = None):
        super().__init__(settings=settings)
        self.vocabulary_service = vocabulary_service
        self._debouncer = Debouncer(self.settings.DETECTION_DEBOUNCE_MS)

    @property
    def name(self) -> str:
        return "detection"

    @property
    def description(self) -> str:
        return "Detects unfamiliar words in a text for the learner's level"

    def detect(self, text: str) -> list[str]:
        """Unknown words in text that are not yet in the vocabulary."""
        if not text or len(text) < self.settings.DETECTION_MIN_TEXT_LENGTH:
            return []

        limit = self.settings.DETECTION_MAX_WORDS
        unknown = analyze_vocabulary_difficulty(text, self.vocabulary_service.user_level)
        new_words = [w for w in unknown if self.vocabulary_service.find_word(w) is None]

        self.log_debug(f"Detected {len(new_words)} new words", new_words)
        return new_words[:limit]

    async def detect_debounced(self, text: str) -> Optional[list[str]]:
        """detect() after input quiescence; None if superseded."""
        return await self._debouncer.schedule(self.detect, text)

    async def add_word_to_vocabulary(
        self,
        word: str,
        text: str,
        text_id: Optional[str] = None
    ) -> bool:
        """Add word using the sentence of text it appears in as context."""
        if not text:
            return False

        context = find_context_sentence(text, word)
        try:
            await self.vocabulary_service.add_word(word, context, text_id)
            return True
        except SpeedReadError as e:
            self.log_error(e, {"word": word})
            return False

    async def add_multiple_words(
        self,
        words: list[str],
        text: str,
        text_id: Optional[str] = None
    ) -> list[dict]:
        """Add words one after another; returns per-word success."""
        results = []
        for word in words:
            success = await self.add_word_to_vocabulary(word, text, text_id)
            results.append({"word": word, "success": success})
        return results
