"""
Sample Data
Randomized demo and test data. Not used when loading persisted state.
"""
import random
import uuid
from datetime import datetime, timedelta
from typing import Optional

from speedread.models.vocabulary import (
    SessionType,
    VocabularySession,
    VocabularyWord,
    utcnow
)
from speedread.utils.srs_algorithm import srs_algorithm
from speedread.utils.vocabulary_analysis import DIFFICULTY_WORDS, extract_tags, get_difficulty_level


SAMPLE_PARTS_OF_SPEECH = ["noun", "verb", "adjective", "adverb"]


def generate_sample_vocabulary(
    count: int = 10,
    now: Optional[datetime] = None,
    seed: Optional[int] = None
) -> list[VocabularyWord]:
    """Words drawn from the difficulty lists with random review history."""
    rng = random.Random(seed)
    now = now or utcnow()
    pool = sorted({w for words in DIFFICULTY_WORDS.values() for w in words if len(w) > 3})
    chosen = rng.sample(pool, min(count, len(pool)))

    words = []
    for term in chosen:
        mastery = rng.randint(0, 5)
        added = now - timedelta(days=rng.randint(0, 60))
        reviewed = None
        review_count = 0
        if mastery > 0:
            reviewed = added + timedelta(days=rng.randint(0, max(0, (now - added).days)))
            review_count = rng.randint(mastery, mastery + 4)
        definition = f"Sample definition of {term}"

        words.append(VocabularyWord(
            id=uuid.UUID(int=rng.getrandbits(128)).hex,
            word=term,
            definition=definition,
            part_of_speech=rng.choice(SAMPLE_PARTS_OF_SPEECH),
            difficulty=get_difficulty_level(term),
            examples=[f"The {term} appeared in the sample text."],
            context_sentence=f"A sample sentence using {term}.",
            date_added=added,
            last_reviewed=reviewed,
            review_count=review_count,
            mastery_level=mastery,
            next_review=srs_algorithm.calculate_next_review(mastery, reviewed or added),
            tags=extract_tags(term, definition)
        ))

    return words


def generate_sample_sessions(
    words: list[VocabularyWord],
    days: int = 7,
    now: Optional[datetime] = None,
    seed: Optional[int] = None
) -> list[VocabularySession]:
    """One completed review session per day for the last `days` days."""
    rng = random.Random(seed)
    now = now or utcnow()

    sessions = []
    for offset in range(days, 0, -1):
        batch = rng.sample(words, min(len(words), 10))
        total = len(batch)
        sessions.append(VocabularySession(
            id=uuid.UUID(int=rng.getrandbits(128)).hex,
            words=batch,
            session_type=SessionType.REVIEW,
            correct_answers=rng.randint(0, total),
            total_questions=total,
            duration=rng.randint(30_000, 600_000),
            created_at=now - timedelta(days=offset),
            position=total
        ))

    return sessions
