"""
Tests for VocabularyService
Tests word management, mastery updates, review sessions, stats and persistence.
"""
import json
from datetime import timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from speedread.core.exceptions import (
    DefinitionLookupError,
    SessionStateError,
    VocabularyImportError,
    WordNotFoundError
)
from speedread.models.vocabulary import ReviewResult, SessionType, UserLevel
from speedread.services.definition_service import DefinitionService
from speedread.services.storage_service import VocabularyStorage
from speedread.services.vocabulary_service import VocabularyService


@pytest.fixture
def due_words(make_word, fixed_now):
    """Three due words, oldest first, plus one scheduled for next week."""
    return [
        make_word("w1", word="ephemeral", next_review=fixed_now - timedelta(days=3)),
        make_word("w2", word="laconic", next_review=fixed_now - timedelta(days=2)),
        make_word("w3", word="sanguine", next_review=fixed_now - timedelta(days=1)),
        make_word("w4", word="future", next_review=fixed_now + timedelta(days=7)),
    ]


class TestVocabularyServiceProperties:

    def test_service_name(self, vocabulary_service):
        assert vocabulary_service.name == "vocabulary"

    def test_defaults(self, vocabulary_service):
        assert vocabulary_service.words == []
        assert vocabulary_service.current_session is None
        assert vocabulary_service.daily_goal == 5
        assert vocabulary_service.user_level == UserLevel.INTERMEDIATE
        assert vocabulary_service.stats.weekly_goal == 35


class TestAddWord:
    """Test adding words with definition lookup."""

    @pytest.mark.asyncio
    async def test_add_word(self, vocabulary_service, mock_definition_service, fixed_now):
        """Test a new word gets its definition and initial schedule."""
        word = await vocabulary_service.add_word(
            "elaborate", "The plan was elaborate.", source_text="text-1"
        )

        mock_definition_service.lookup_definition.assert_awaited_once_with(
            "elaborate", "The plan was elaborate."
        )
        assert word.definition == "Involving many carefully arranged parts or details"
        assert word.part_of_speech == "adjective"
        assert word.synonyms == ["complex", "intricate"]
        assert word.difficulty == UserLevel.INTERMEDIATE
        assert word.mastery_level == 0
        assert word.review_count == 0
        assert word.source_text == "text-1"
        assert word.date_added == fixed_now
        assert word.next_review == fixed_now + timedelta(days=1)
        assert vocabulary_service.words == [word]
        assert vocabulary_service.stats.total_words == 1

    @pytest.mark.asyncio
    async def test_duplicate_is_case_insensitive(self, vocabulary_service, mock_definition_service):
        """Test adding a known word returns the existing entry."""
        first = await vocabulary_service.add_word("Elaborate", "context")
        second = await vocabulary_service.add_word("elaborate", "other context")

        assert second is first
        assert len(vocabulary_service.words) == 1
        mock_definition_service.lookup_definition.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_fallback_definition_on_lookup_failure(self, vocabulary_service, mock_definition_service):
        """Test a failed lookup still adds the word with a fallback definition."""
        mock_definition_service.lookup_definition.side_effect = DefinitionLookupError("zephyr", "offline")

        word = await vocabulary_service.add_word("zephyr", "A zephyr blew.")

        assert word.definition == 'A word with specific meaning in context: "zephyr"'
        assert word.part_of_speech == "unknown"
        assert word.pronunciation == "/zephyr/"
        assert len(word.examples) == 3
        assert vocabulary_service.find_word("zephyr") is not None

    @pytest.mark.asyncio
    async def test_builtin_fallback_definition(self, vocabulary_service, mock_definition_service):
        mock_definition_service.lookup_definition.side_effect = DefinitionLookupError("magnificent", "offline")

        word = await vocabulary_service.add_word("magnificent", "A magnificent view.")

        assert word.definition == "Extremely beautiful, elaborate, or impressive"
        assert "splendid" in word.synonyms

    @pytest.mark.asyncio
    async def test_empty_completion_falls_back(self, test_settings, clock):
        """Test a completion without choices still yields a fallback word."""
        definition_service = DefinitionService(test_settings)
        client = MagicMock()
        client.chat.completions.create = AsyncMock(return_value=MagicMock(choices=[]))
        definition_service._client = client
        service = VocabularyService(settings=test_settings, definition_service=definition_service, clock=clock)

        word = await service.add_word("zephyr", "A zephyr blew.")

        assert word.definition == 'A word with specific meaning in context: "zephyr"'
        assert service.find_word("zephyr") is not None


class TestWordManagement:

    def test_get_word(self, vocabulary_service, due_words):
        vocabulary_service.words = due_words
        assert vocabulary_service.get_word("w2").word == "laconic"

    def test_get_unknown_word_raises(self, vocabulary_service):
        with pytest.raises(WordNotFoundError):
            vocabulary_service.get_word("missing")

    def test_remove_word(self, vocabulary_service, due_words):
        vocabulary_service.words = due_words
        vocabulary_service.remove_word("w1")

        assert [w.id for w in vocabulary_service.words] == ["w2", "w3", "w4"]
        assert vocabulary_service.stats.total_words == 3

    def test_remove_unknown_word_raises(self, vocabulary_service, due_words):
        vocabulary_service.words = due_words
        with pytest.raises(WordNotFoundError):
            vocabulary_service.remove_word("missing")
        assert len(vocabulary_service.words) == 4

    def test_search_words(self, vocabulary_service, make_word):
        vocabulary_service.words = [
            make_word("1", word="telescope", tags=["root:tele"]),
            make_word("2", word="ephemeral", definition="Lasting a very short time"),
            make_word("3", word="laconic"),
        ]

        assert [w.id for w in vocabulary_service.search_words("TELE")] == ["1"]
        assert [w.id for w in vocabulary_service.search_words("short time")] == ["2"]
        assert vocabulary_service.search_words("zzz") == []

    def test_get_words_by_tag(self, vocabulary_service, make_word):
        vocabulary_service.words = [
            make_word("1", tags=["technical"]),
            make_word("2", tags=["academic"]),
        ]
        assert [w.id for w in vocabulary_service.get_words_by_tag("technical")] == ["1"]

    def test_quiz_excludes_mastered_words(self, vocabulary_service, make_word):
        vocabulary_service.words = [
            make_word("1", word="alpha", mastery=5),
            make_word("2", word="bravo", mastery=1),
            make_word("3", word="charlie", mastery=2),
        ]

        quiz = vocabulary_service.generate_quiz(count=5)

        assert sorted(q.word for q in quiz) == ["bravo", "charlie"]


class TestMasteryUpdates:
    """Test SRS transitions applied to stored words."""

    def test_correct_answer(self, vocabulary_service, due_words, fixed_now):
        vocabulary_service.words = due_words

        updated = vocabulary_service.update_word_mastery("w1", True)

        assert updated.mastery_level == 1
        assert updated.review_count == 1
        assert updated.last_reviewed == fixed_now
        assert updated.next_review == fixed_now + timedelta(days=3)
        assert vocabulary_service.get_word("w1") == updated

    def test_incorrect_answer_at_zero(self, vocabulary_service, due_words, fixed_now):
        vocabulary_service.words = due_words

        updated = vocabulary_service.update_word_mastery("w1", False)

        assert updated.mastery_level == 0
        assert updated.review_count == 1
        assert updated.next_review == fixed_now + timedelta(days=1)

    def test_mastery_capped_at_five(self, vocabulary_service, make_word, fixed_now):
        vocabulary_service.words = [make_word("1", mastery=5)]

        updated = vocabulary_service.update_word_mastery("1", True)

        assert updated.mastery_level == 5
        assert updated.next_review == fixed_now + timedelta(days=90)

    def test_unknown_word_ignored(self, vocabulary_service, due_words):
        vocabulary_service.words = due_words

        assert vocabulary_service.update_word_mastery("missing", True) is None
        assert vocabulary_service.words == due_words

    def test_words_for_review(self, vocabulary_service, due_words):
        vocabulary_service.words = list(reversed(due_words))
        assert [w.id for w in vocabulary_service.get_words_for_review()] == ["w1", "w2", "w3"]


class TestReviewSessions:
    """Test the review session lifecycle."""

    def test_start_session(self, vocabulary_service, due_words, fixed_now):
        vocabulary_service.words = due_words

        session = vocabulary_service.start_review_session()

        assert [w.id for w in session.words] == ["w1", "w2", "w3"]
        assert session.total_questions == 3
        assert session.correct_answers == 0
        assert session.results == []
        assert session.position == 0
        assert session.created_at == fixed_now
        assert session.session_type == SessionType.REVIEW
        assert session.current_word.id == "w1"
        assert vocabulary_service.current_session == session

    def test_session_limited_to_ten_words(self, vocabulary_service, make_word, fixed_now):
        vocabulary_service.words = [
            make_word(f"{i:02d}", next_review=fixed_now - timedelta(days=20 - i))
            for i in range(15)
        ]

        session = vocabulary_service.start_review_session()

        assert len(session.words) == 10
        assert [w.id for w in session.words] == [f"{i:02d}" for i in range(10)]

    def test_empty_session_when_nothing_due(self, vocabulary_service, make_word, fixed_now):
        vocabulary_service.words = [make_word("1", next_review=fixed_now + timedelta(days=2))]

        session = vocabulary_service.start_review_session()

        assert session.words == []
        assert session.total_questions == 0

    def test_answer_flow(self, vocabulary_service, due_words, clock):
        """Test answering every word completes the session."""
        vocabulary_service.words = due_words[1:3]
        vocabulary_service.start_review_session()
        clock.advance(minutes=2)

        first = vocabulary_service.answer("w2", True)
        assert first.correct is True
        assert first.word.mastery_level == 1
        assert first.next_word.id == "w3"
        assert not first.session_complete
        assert vocabulary_service.current_session.position == 1

        second = vocabulary_service.answer("w3", False)
        assert second.session_complete
        assert second.next_word is None
        assert second.session.correct_answers == 1
        assert second.session.total_questions == 2
        assert second.session.duration == 120_000
        assert [r.word_id for r in second.session.results] == ["w2", "w3"]
        assert vocabulary_service.current_session is None
        assert vocabulary_service.sessions == [second.session]

    def test_answer_without_session_raises(self, vocabulary_service):
        with pytest.raises(SessionStateError):
            vocabulary_service.answer("w1", True)

    def test_answer_unknown_word_ignored(self, vocabulary_service, due_words):
        vocabulary_service.words = due_words
        vocabulary_service.start_review_session()

        outcome = vocabulary_service.answer("missing", True)

        assert outcome.word is None
        assert outcome.next_word.id == "w1"
        assert vocabulary_service.current_session.position == 0
        assert vocabulary_service.current_session.correct_answers == 0

    def test_repeated_answer_applied_once(self, vocabulary_service, due_words):
        """Test answering an already answered word does not change mastery again."""
        vocabulary_service.words = due_words
        vocabulary_service.start_review_session()
        vocabulary_service.answer("w1", True)

        outcome = vocabulary_service.answer("w1", True)

        assert outcome.word is None
        assert outcome.next_word.id == "w2"
        assert vocabulary_service.get_word("w1").mastery_level == 1
        assert vocabulary_service.get_word("w1").review_count == 1
        assert [r.word_id for r in vocabulary_service.current_session.results] == ["w1"]

    def test_answer_outside_batch_ignored(self, vocabulary_service, due_words):
        vocabulary_service.words = due_words
        vocabulary_service.start_review_session()

        vocabulary_service.answer("w4", True)

        assert vocabulary_service.get_word("w4").mastery_level == 0
        assert vocabulary_service.current_session.results == []

    def test_complete_with_batch_results(self, vocabulary_service, due_words, clock):
        """Test finalizing a session with results submitted in one batch."""
        vocabulary_service.words = due_words
        vocabulary_service.start_review_session()
        clock.advance(minutes=5)

        session = vocabulary_service.complete_session([
            ReviewResult(word_id="w1", correct=True),
            ReviewResult(word_id="w2", correct=True),
            ReviewResult(word_id="w3", correct=False),
        ])

        assert session.correct_answers == 2
        assert session.duration == 300_000
        assert vocabulary_service.get_word("w1").mastery_level == 1
        assert vocabulary_service.get_word("w3").review_count == 1
        assert vocabulary_service.current_session is None
        assert vocabulary_service.sessions == [session]

    def test_complete_is_idempotent(self, vocabulary_service, due_words):
        vocabulary_service.words = due_words
        vocabulary_service.start_review_session()

        assert vocabulary_service.complete_session() is not None
        assert vocabulary_service.complete_session() is None
        assert len(vocabulary_service.sessions) == 1

    def test_complete_without_session(self, vocabulary_service):
        assert vocabulary_service.complete_session() is None
        assert vocabulary_service.sessions == []


class TestStats:
    """Test statistics and streak calculation."""

    def test_streak_today_exempt(self, vocabulary_service, make_session):
        vocabulary_service.sessions = [make_session(1), make_session(2)]
        assert vocabulary_service.calculate_streak() == 2

    def test_streak_includes_today(self, vocabulary_service, make_session):
        vocabulary_service.sessions = [make_session(0), make_session(1), make_session(2)]
        assert vocabulary_service.calculate_streak() == 3

    def test_streak_stops_at_gap(self, vocabulary_service, make_session):
        vocabulary_service.sessions = [make_session(1), make_session(2), make_session(4)]
        assert vocabulary_service.calculate_streak() == 2

    def test_streak_broken_yesterday(self, vocabulary_service, make_session):
        vocabulary_service.sessions = [make_session(2), make_session(3)]
        assert vocabulary_service.calculate_streak() == 0

    def test_multiple_sessions_same_day_count_once(self, vocabulary_service, make_session):
        vocabulary_service.sessions = [make_session(1, "a"), make_session(1, "b")]
        assert vocabulary_service.calculate_streak() == 1

    def test_streak_uses_utc_days(self, vocabulary_service, make_session, fixed_now):
        vocabulary_service.sessions = [make_session(0), make_session(1)]
        local_evening = fixed_now.astimezone(timezone(timedelta(hours=-14)))

        assert local_evening.day == 18
        assert vocabulary_service.calculate_streak(local_evening) == 2

    def test_update_stats(self, vocabulary_service, make_word, fixed_now):
        vocabulary_service.words = [
            make_word("1", mastery=0, review_count=0, date_added=fixed_now - timedelta(days=2)),
            make_word("2", mastery=2, review_count=1),
            make_word("3", mastery=5, review_count=3),
        ]

        stats = vocabulary_service.update_stats()

        assert stats.total_words == 3
        assert stats.words_learned == 2
        assert stats.words_reviewing == 1
        assert stats.words_mastered == 1
        assert stats.average_mastery == 2.3
        assert stats.weekly_goal == 35
        assert stats.weekly_progress == 1

    def test_empty_stats(self, vocabulary_service):
        stats = vocabulary_service.update_stats()
        assert stats.total_words == 0
        assert stats.average_mastery == 0.0

    def test_average_mastery_rounds_half_up(self, vocabulary_service, make_word):
        vocabulary_service.words = [make_word(str(i), mastery=m) for i, m in enumerate([0, 0, 0, 1])]

        assert vocabulary_service.update_stats().average_mastery == 0.3

    def test_daily_goal_drives_weekly_goal(self, vocabulary_service):
        vocabulary_service.set_daily_goal(3)
        assert vocabulary_service.stats.weekly_goal == 21

    def test_invalid_daily_goal(self, vocabulary_service):
        with pytest.raises(ValueError):
            vocabulary_service.set_daily_goal(0)

    def test_set_user_level(self, vocabulary_service):
        vocabulary_service.set_user_level("expert")
        assert vocabulary_service.user_level == UserLevel.EXPERT


class TestImportExport:

    def test_round_trip_into_fresh_service(self, vocabulary_service, due_words, test_settings, mock_definition_service, clock):
        vocabulary_service.words = due_words
        exported = vocabulary_service.export_vocabulary()

        other = VocabularyService(test_settings, mock_definition_service, clock=clock)
        assert other.import_vocabulary(exported) == 4
        assert [w.id for w in other.words] == ["w1", "w2", "w3", "w4"]
        assert other.stats.total_words == 4

    def test_export_payload(self, vocabulary_service, due_words):
        vocabulary_service.words = due_words
        payload = json.loads(vocabulary_service.export_vocabulary())

        assert set(payload) == {"words", "stats", "export_date"}
        assert len(payload["words"]) == 4

    def test_existing_ids_skipped(self, vocabulary_service, due_words):
        vocabulary_service.words = due_words
        exported = vocabulary_service.export_vocabulary()

        assert vocabulary_service.import_vocabulary(exported) == 0
        assert len(vocabulary_service.words) == 4

    @pytest.mark.parametrize("payload", ["not json", '{"stats": {}}', '{"words": [{"id": "x"}]}', "[]"])
    def test_invalid_import(self, vocabulary_service, payload):
        with pytest.raises(VocabularyImportError):
            vocabulary_service.import_vocabulary(payload)
        assert vocabulary_service.words == []


class TestPersistence:
    """Test state survives a restart through file storage."""

    @pytest.fixture
    def storage(self, tmp_path):
        return VocabularyStorage(tmp_path / "vocabulary.json")

    @pytest.fixture
    def persistent_service(self, test_settings, mock_definition_service, storage, clock):
        return VocabularyService(test_settings, mock_definition_service, storage=storage, clock=clock)

    def test_load_without_storage(self, vocabulary_service):
        assert vocabulary_service.load() is False

    def test_load_empty_store(self, persistent_service):
        assert persistent_service.load() is False

    @pytest.mark.asyncio
    async def test_restart_restores_state(self, persistent_service, test_settings, mock_definition_service, storage, clock, due_words):
        await persistent_service.add_word("elaborate", "An elaborate plan.")
        persistent_service.words = [*persistent_service.words, *due_words]
        persistent_service.set_daily_goal(4)
        persistent_service.start_review_session()

        restarted = VocabularyService(test_settings, mock_definition_service, storage=storage, clock=clock)

        assert restarted.load() is True
        assert restarted.words == persistent_service.words
        assert restarted.daily_goal == 4
        assert restarted.current_session == persistent_service.current_session
        assert restarted.stats.total_words == 5
