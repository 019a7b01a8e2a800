"""
Vocabulary Service
Owns the learner's words and review sessions and runs the spaced
repetition review loop.

Responsibilities:
- Add words with definitions (falling back when lookup fails)
- Update mastery from review answers
- Run bounded review sessions and keep their history
- Recompute aggregate statistics after every change
- Persist the whole state after every change
"""
import json
import random
import uuid
from datetime import datetime, timedelta
from typing import Callable, Optional

from pydantic import ValidationError

from speedread.config import Settings
from speedread.core.exceptions import (
    DefinitionLookupError,
    SessionStateError,
    VocabularyImportError,
    WordNotFoundError
)
from speedread.models.vocabulary import (
    AnswerOutcome,
    QuizQuestion,
    ReviewResult,
    SessionType,
    UserLevel,
    VocabularySession,
    VocabularySnapshot,
    VocabularyStats,
    VocabularyWord,
    ensure_utc,
    utcnow
)
from speedread.services.base_service import BaseService
from speedread.services.definition_service import DefinitionService, fallback_definition
from speedread.services.storage_service import VocabularyStorage
from speedread.utils.readability import round_half_up
from speedread.utils.srs_algorithm import SRSAlgorithm
from speedread.utils.vocabulary_analysis import (
    extract_tags,
    generate_vocabulary_quiz,
    get_difficulty_level
)


class VocabularyService(BaseService):
    """
    Vocabulary Service - words, review sessions and stats.

    All state lives on the instance. Mutations replace whole collections
    and finish by recomputing stats and saving, so readers always see a
    consistent state.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        definition_service: DefinitionService | None = None,
        storage: VocabularyStorage | None = None,
        clock: Callable[[], datetime] = utcnow,
        srs: SRSAlgorithm | None = None
    ):
        super().__init__(settings=settings)
        self.definition_service = definition_service or DefinitionService(self.settings)
        self.storage = storage
        self.clock = clock
        self.srs = srs or SRSAlgorithm(
            intervals=self.settings.SRS_INTERVALS_DAYS,
            max_mastery=self.settings.SRS_MAX_MASTERY
        )

        self.words: list[VocabularyWord] = []
        self.sessions: list[VocabularySession] = []
        self.current_session: Optional[VocabularySession] = None
        self.daily_goal: int = self.settings.DEFAULT_DAILY_GOAL
        self.user_level: UserLevel = UserLevel(self.settings.DEFAULT_USER_LEVEL)
        self.stats = VocabularyStats(weekly_goal=self.daily_goal * 7)

    @property
    def name(self) -> str:
        return "vocabulary"

    @property
    def description(self) -> str:
        return "Manages vocabulary words and SRS review sessions"

    # ==================== PERSISTENCE ====================

    def snapshot(self) -> VocabularySnapshot:
        return VocabularySnapshot(
            words=self.words,
            sessions=self.sessions,
            current_session=self.current_session,
            stats=self.stats,
            daily_goal=self.daily_goal,
            user_level=self.user_level
        )

    def load(self) -> bool:
        """
        Restore state from storage.

        Returns False when nothing was persisted yet. Storage errors
        propagate to the caller.
        """
        if self.storage is None:
            return False

        snapshot = self.storage.load()
        if snapshot is None:
            return False

        self.words = list(snapshot.words)
        self.sessions = list(snapshot.sessions)
        self.current_session = snapshot.current_session
        self.daily_goal = snapshot.daily_goal
        self.user_level = snapshot.user_level
        self.update_stats(persist=False)

        self.log_complete("load", {"words": len(self.words), "sessions": len(self.sessions)})
        return True

    def _persist(self) -> None:
        if self.storage is not None:
            self.storage.save(self.snapshot())

    # ==================== WORDS ====================

    def find_word(self, word: str) -> Optional[VocabularyWord]:
        """Case-insensitive lookup by surface form."""
        lowered = word.lower()
        return next((w for w in self.words if w.word.lower() == lowered), None)

    def get_word(self, word_id: str) -> VocabularyWord:
        for word in self.words:
            if word.id == word_id:
                return word
        raise WordNotFoundError(word_id)

    async def add_word(
        self,
        word: str,
        context: str,
        source_text: Optional[str] = None
    ) -> VocabularyWord:
        """
        Add a word with its definition.

        Returns the existing entry when the word is already known
        (case-insensitive). A failed definition lookup is replaced by a
        fallback definition.
        """
        existing = self.find_word(word)
        if existing:
            self.log_debug(f"Word already in vocabulary: {word}")
            return existing

        self.log_start("add_word", {"word": word})
        try:
            definition = await self.definition_service.lookup_definition(word, context)
        except DefinitionLookupError as e:
            self.log_warning("Definition lookup failed, using fallback", {"word": word, "reason": e.reason})
            definition = fallback_definition(word)

        # Another add may have completed while the lookup was awaited
        existing = self.find_word(word)
        if existing:
            return existing

        now = self.clock()
        vocabulary_word = VocabularyWord(
            id=uuid.uuid4().hex,
            word=word,
            context_sentence=context,
            source_text=source_text,
            difficulty=get_difficulty_level(word),
            date_added=now,
            review_count=0,
            mastery_level=0,
            next_review=self.srs.calculate_next_review(0, now),
            tags=extract_tags(word, definition.definition),
            **definition.model_dump()
        )

        self.words = [*self.words, vocabulary_word]
        self.update_stats()

        self.log_complete("add_word", {"word": word, "id": vocabulary_word.id})
        return vocabulary_word

    def remove_word(self, word_id: str) -> None:
        self.get_word(word_id)
        self.words = [w for w in self.words if w.id != word_id]
        self.update_stats()

    def update_word_mastery(self, word_id: str, correct: bool) -> Optional[VocabularyWord]:
        """
        Apply a review answer to a word.

        Unknown ids are ignored with a warning so that one bad id never
        aborts a review session.
        """
        target = next((w for w in self.words if w.id == word_id), None)
        if target is None:
            self.log_warning("Ignoring mastery update for unknown word", {"word_id": word_id})
            return None

        now = self.clock()
        mastery = self.srs.apply_answer(target.mastery_level, correct)
        updated = target.model_copy(update={
            "mastery_level": mastery,
            "review_count": target.review_count + 1,
            "last_reviewed": now,
            "next_review": self.srs.calculate_next_review(mastery, now)
        })

        self.words = [updated if w.id == word_id else w for w in self.words]
        self.update_stats()
        return updated

    def get_words_for_review(self) -> list[VocabularyWord]:
        return self.srs.get_words_for_review(self.words, self.clock())

    def search_words(self, query: str) -> list[VocabularyWord]:
        """Words whose surface form, definition or tags contain query."""
        lowered = query.lower()
        return [
            w for w in self.words
            if lowered in w.word.lower()
            or lowered in w.definition.lower()
            or any(lowered in tag.lower() for tag in w.tags)
        ]

    def get_words_by_tag(self, tag: str) -> list[VocabularyWord]:
        return [w for w in self.words if tag in w.tags]

    def generate_quiz(self, count: int = 5, rng: Optional[random.Random] = None) -> list[QuizQuestion]:
        """Definition quiz over words not yet mastered."""
        available = [w for w in self.words if w.mastery_level < self.srs.max_mastery]
        return generate_vocabulary_quiz(available, count, rng)

    # ==================== SESSIONS ====================

    def start_review_session(self, session_type: SessionType = SessionType.REVIEW) -> VocabularySession:
        """Open a session over the earliest-due words."""
        batch = self.get_words_for_review()[:self.settings.SESSION_MAX_WORDS]

        session = VocabularySession(
            id=uuid.uuid4().hex,
            words=batch,
            session_type=session_type,
            correct_answers=0,
            total_questions=len(batch),
            duration=0,
            created_at=self.clock()
        )
        if self.current_session is not None:
            self.log_warning("Replacing unfinished session", {"session_id": self.current_session.id})
        self.current_session = session
        self._persist()

        self.log_start("review_session", {"session_id": session.id, "words": len(batch)})
        return session

    def answer(self, word_id: str, correct: bool) -> AnswerOutcome:
        """
        Record an answer for the current session.

        Advances to the next word of the batch, or completes the session
        when the batch is exhausted. Only the current word can be answered;
        any other id (outside the batch, already answered or unknown) is
        logged and ignored, leaving mastery and position unchanged.

        Raises:
            SessionStateError: no session is open
        """
        session = self.current_session
        if session is None:
            raise SessionStateError("No review session in progress")

        current = session.current_word
        if current is None or current.id != word_id:
            self.log_warning("Answer ignored, word is not the current question", {
                "session_id": session.id,
                "word_id": word_id,
                "expected": current.id if current else None
            })
            return AnswerOutcome(correct=correct, next_word=current)

        word = self.update_word_mastery(word_id, correct)
        position = session.position + 1
        session = session.model_copy(update={
            "results": [*session.results, ReviewResult(word_id=word_id, correct=correct, answered_at=self.clock())],
            "correct_answers": session.correct_answers + (1 if correct else 0),
            "position": position
        })
        self.current_session = session

        if position >= len(session.words):
            completed = self.complete_session()
            return AnswerOutcome(word=word, correct=correct, session_complete=True, session=completed)

        self._persist()
        return AnswerOutcome(word=word, correct=correct, next_word=session.words[position])

    def complete_session(self, results: Optional[list[ReviewResult]] = None) -> Optional[VocabularySession]:
        """
        Finalize the current session and append it to the history.

        Results passed here are applied to the words first; answers recorded
        through answer() were applied already. Calling this with no open
        session does nothing and returns None.
        """
        session = self.current_session
        if session is None:
            self.log_debug("complete_session called without an open session")
            return None

        results = list(results or [])
        for result in results:
            self.update_word_mastery(result.word_id, result.correct)

        all_results = [*session.results, *results]
        now = self.clock()
        completed = session.model_copy(update={
            "results": all_results,
            "correct_answers": sum(1 for r in all_results if r.correct),
            "duration": max(0, int((now - session.created_at).total_seconds() * 1000))
        })

        self.sessions = [*self.sessions, completed]
        self.current_session = None
        self.update_stats()

        self.log_complete("review_session", {
            "session_id": completed.id,
            "correct": completed.correct_answers,
            "total": completed.total_questions
        })
        return completed

    # ==================== STATS ====================

    def calculate_streak(self, today: Optional[datetime] = None) -> int:
        """
        Consecutive days with at least one session, walking back from today.

        Today may be empty without breaking the streak; any earlier empty
        day ends it.
        """
        today_date = ensure_utc(today or self.clock()).date()
        session_days = {ensure_utc(s.created_at).date() for s in self.sessions}

        streak = 0
        for offset in range(self.settings.STREAK_LOOKBACK_DAYS):
            day = today_date - timedelta(days=offset)
            if day in session_days:
                streak += 1
            elif offset > 0:
                break
        return streak

    def update_stats(self, persist: bool = True) -> VocabularyStats:
        """Recompute all stats from the word and session collections."""
        now = self.clock()
        words = self.words
        max_mastery = self.srs.max_mastery

        average = sum(w.mastery_level for w in words) / len(words) if words else 0.0
        week_ago = now - timedelta(days=self.settings.WEEKLY_PROGRESS_WINDOW_DAYS)

        self.stats = VocabularyStats(
            total_words=len(words),
            words_learned=sum(1 for w in words if w.review_count > 0),
            words_reviewing=sum(1 for w in words if 0 < w.mastery_level < max_mastery),
            words_mastered=sum(1 for w in words if w.mastery_level == max_mastery),
            average_mastery=round_half_up(average * 10) / 10,
            streak_days=self.calculate_streak(now),
            weekly_goal=self.daily_goal * 7,
            weekly_progress=sum(1 for w in words if w.date_added >= week_ago)
        )

        if persist:
            self._persist()
        return self.stats

    # ==================== SETTINGS ====================

    def set_user_level(self, level: UserLevel | str) -> None:
        self.user_level = UserLevel(level)
        self._persist()

    def set_daily_goal(self, goal: int) -> None:
        if goal < 1:
            raise ValueError("Daily goal must be at least 1")
        self.daily_goal = goal
        self.update_stats()

    # ==================== IMPORT / EXPORT ====================

    def export_vocabulary(self) -> str:
        return json.dumps({
            "words": [w.model_dump(mode="json") for w in self.words],
            "stats": self.stats.model_dump(mode="json"),
            "export_date": self.clock().isoformat()
        })

    def import_vocabulary(self, data: str) -> int:
        """
        Merge words from an export payload.

        Words whose id is already present are skipped.

        Returns:
            Number of words added

        Raises:
            VocabularyImportError: payload is not a valid export
        """
        try:
            imported = json.loads(data)
        except json.JSONDecodeError as e:
            raise VocabularyImportError(f"Import data is not valid JSON: {e}") from e

        if not isinstance(imported, dict) or not isinstance(imported.get("words"), list):
            raise VocabularyImportError("Import data has no 'words' list")

        try:
            incoming = [VocabularyWord.model_validate(w) for w in imported["words"]]
        except ValidationError as e:
            raise VocabularyImportError(f"Invalid word in import data: {e}") from e

        known_ids = {w.id for w in self.words}
        new_words = []
        for word in incoming:
            if word.id not in known_ids:
                known_ids.add(word.id)
                new_words.append(word)

        self.words = [*self.words, *new_words]
        self.update_stats()

        self.log_complete("import", {"added": len(new_words), "skipped": len(incoming) - len(new_words)})
        return len(new_words)
