"""
Spaced Repetition System (SRS) Algorithm
Fixed-interval scheduler driven by a 0-5 mastery level.

Each word carries a mastery level that moves one step per review:
- Correct answer: mastery + 1, capped at 5
- Incorrect answer: mastery - 1, floored at 0

The next review is the last review plus the interval for the new level:

Mastery | Interval
   0    |  1 day
   1    |  3 days
   2    |  7 days
   3    | 14 days
   4    | 30 days
   5    | 90 days (retired from the due queue)

A word is due when its next review falls on or before today's UTC date
and it is not yet mastered.
"""
from datetime import datetime, timedelta
from typing import Optional, Sequence

from speedread.config import settings
from speedread.models.vocabulary import VocabularyWord, utcnow


SRS_INTERVALS: list[int] = [1, 3, 7, 14, 30, 90]
MIN_MASTERY = 0
MAX_MASTERY = 5


class SRSAlgorithm:
    """
    Mastery-level spaced repetition.

    Intervals and the mastery ceiling come from settings so a deployment
    can tune them without code changes.
    """

    def __init__(
        self,
        intervals: Optional[Sequence[int]] = None,
        max_mastery: Optional[int] = None
    ):
        self.intervals = list(intervals or settings.SRS_INTERVALS_DAYS)
        self.max_mastery = max_mastery if max_mastery is not None else settings.SRS_MAX_MASTERY

    def clamp_mastery(self, mastery: int) -> int:
        return max(MIN_MASTERY, min(self.max_mastery, mastery))

    def apply_answer(self, mastery: int, correct: bool) -> int:
        """
        New mastery level after a review.

        Args:
            mastery: Current mastery level
            correct: Whether the answer was correct

        Returns:
            Mastery level within [0, max_mastery]
        """
        mastery = self.clamp_mastery(mastery)
        if correct:
            return min(mastery + 1, self.max_mastery)
        return max(mastery - 1, MIN_MASTERY)

    def interval_days(self, mastery: int) -> int:
        """Interval for a mastery level, index clamped to the table."""
        index = max(0, min(mastery, len(self.intervals) - 1))
        return self.intervals[index]

    def calculate_next_review(self, mastery: int, last_reviewed: datetime) -> datetime:
        """Next review timestamp for a word reviewed at last_reviewed."""
        return last_reviewed + timedelta(days=self.interval_days(mastery))

    def is_due(self, word: VocabularyWord, today: Optional[datetime] = None) -> bool:
        """Check if a word is due for review (UTC date granularity)."""
        today = today or utcnow()
        return (
            word.next_review.date() <= today.date()
            and word.mastery_level < self.max_mastery
        )

    def get_words_for_review(
        self,
        words: Sequence[VocabularyWord],
        today: Optional[datetime] = None
    ) -> list[VocabularyWord]:
        """Due words, earliest next review first."""
        today = today or utcnow()
        due = [w for w in words if self.is_due(w, today)]
        due.sort(key=lambda w: w.next_review)
        return due

    def days_until_review(self, word: VocabularyWord, today: Optional[datetime] = None) -> int:
        """Get days until next review (negative if overdue)."""
        today = today or utcnow()
        return (word.next_review.date() - today.date()).days

    def get_priority(self, word: VocabularyWord, today: Optional[datetime] = None) -> str:
        """
        Get review priority based on how overdue the word is.

        Returns:
            'high' if very overdue, 'normal' if due, 'low' if not due yet
        """
        days = self.days_until_review(word, today)

        if days < -7:
            return "high"  # Very overdue
        elif days <= 0:
            return "normal"  # Due now
        else:
            return "low"  # Not due yet


def calculate_spaced_repetition(mastery: int, last_reviewed: datetime) -> datetime:
    """
    Convenience function to calculate the next review.

    Args:
        mastery: Mastery level after the review
        last_reviewed: When the review happened

    Returns:
        Next review timestamp
    """
    return srs_algorithm.calculate_next_review(mastery, last_reviewed)


def get_words_for_review(
    words: Sequence[VocabularyWord],
    today: Optional[datetime] = None
) -> list[VocabularyWord]:
    return srs_algorithm.get_words_for_review(words, today)


# Singleton instance
srs_algorithm = SRSAlgorithm()
