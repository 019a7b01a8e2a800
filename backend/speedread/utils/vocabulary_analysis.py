"""
Vocabulary Analysis
Detects words above a reader's level and derives word metadata
(difficulty, roots, tags) and definition quizzes.
"""
import random
import re
from typing import Optional, Union

from speedread.models.vocabulary import QuizQuestion, UserLevel, VocabularyWord, WordRoot


# Common word roots and their meanings
WORD_ROOTS: list[WordRoot] = [
    WordRoot(root="bio", meaning="life", origin="Greek", examples=["biology", "biography", "antibiotic"]),
    WordRoot(root="geo", meaning="earth", origin="Greek", examples=["geography", "geology", "geometry"]),
    WordRoot(root="tele", meaning="far, distant", origin="Greek", examples=["telephone", "television", "telescope"]),
    WordRoot(root="auto", meaning="self", origin="Greek", examples=["automobile", "automatic", "autobiography"]),
    WordRoot(root="micro", meaning="small", origin="Greek", examples=["microscope", "microphone", "microwave"]),
    WordRoot(root="photo", meaning="light", origin="Greek", examples=["photograph", "photosynthesis", "photogenic"]),
    WordRoot(root="phono", meaning="sound", origin="Greek", examples=["phonograph", "telephone", "symphony"]),
    WordRoot(root="graph", meaning="writing", origin="Greek", examples=["paragraph", "autograph", "telegraph"]),
    WordRoot(root="scope", meaning="to see", origin="Greek", examples=["telescope", "microscope", "stethoscope"]),
    WordRoot(root="meter", meaning="measure", origin="Greek", examples=["thermometer", "speedometer", "diameter"]),
]

# Level-keyed word lists. Levels are cumulative: a reader knows every list
# up to and including their own.
DIFFICULTY_WORDS: dict[UserLevel, list[str]] = {
    UserLevel.BEGINNER: [
        "cat", "dog", "house", "car", "book", "water", "food", "happy", "big", "small"
    ],
    UserLevel.INTERMEDIATE: [
        "magnificent", "elaborate", "substantial", "consequently", "furthermore",
        "establish", "demonstrate", "significant"
    ],
    UserLevel.ADVANCED: [
        "ubiquitous", "perfunctory", "surreptitious", "perspicacious", "recalcitrant",
        "obstreperous", "truculent"
    ],
    UserLevel.EXPERT: [
        "sesquipedalian", "grandiloquent", "perspicacious", "magnanimous",
        "pusillanimous", "obsequious"
    ],
}

MIN_INTERESTING_LENGTH = 3
DEFAULT_DETECTION_LIMIT = 10
CONTEXT_FALLBACK_LENGTH = 200

_WORD_RE = re.compile(r"\b[a-z]+\b")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


def known_words_for_level(level: Union[UserLevel, str]) -> set[str]:
    """Union of the word lists from beginner up to and including level."""
    level = UserLevel(level)
    known: set[str] = set()
    for list_level, words in DIFFICULTY_WORDS.items():
        if list_level.rank <= level.rank:
            known.update(words)
    return known


def analyze_vocabulary_difficulty(
    text: str,
    user_level: Union[UserLevel, str] = UserLevel.INTERMEDIATE,
    limit: int = DEFAULT_DETECTION_LIMIT
) -> list[str]:
    """
    Find words in text that are likely unknown to a reader at user_level.

    Returns first occurrences in text order, deduplicated, at most limit.
    """
    known = known_words_for_level(user_level)
    unknown: list[str] = []
    seen: set[str] = set()

    for word in _WORD_RE.findall(text.lower()):
        if len(word) > MIN_INTERESTING_LENGTH and word not in known and word not in seen:
            seen.add(word)
            unknown.append(word)

    return unknown[:limit]


def get_difficulty_level(word: str) -> UserLevel:
    """Hardest list a word appears in, beginner when unlisted."""
    word = word.lower()
    for level in (UserLevel.EXPERT, UserLevel.ADVANCED, UserLevel.INTERMEDIATE):
        if word in DIFFICULTY_WORDS[level]:
            return level
    return UserLevel.BEGINNER


def find_word_roots(word: str) -> list[WordRoot]:
    """Roots contained in word, or whose examples contain it."""
    lowered = word.lower()
    return [
        root for root in WORD_ROOTS
        if root.root in lowered or any(lowered in example for example in root.examples)
    ]


def extract_tags(word: str, definition: str) -> list[str]:
    tags: list[str] = []

    if len(word) > 10:
        tags.append("long-word")
    if "technical" in definition:
        tags.append("technical")
    if "academic" in definition:
        tags.append("academic")

    for root in find_word_roots(word):
        tags.append(f"root:{root.root}")

    return tags


def find_context_sentence(text: str, word: str) -> str:
    """First sentence mentioning word, else the opening of the text."""
    lowered = word.lower()
    for sentence in _SENTENCE_SPLIT_RE.split(text):
        if lowered in sentence.lower():
            return sentence.strip()
    return text[:CONTEXT_FALLBACK_LENGTH].strip()


def generate_vocabulary_quiz(
    words: list[VocabularyWord],
    count: int = 5,
    rng: Optional[random.Random] = None
) -> list[QuizQuestion]:
    """
    Build definition questions for a random sample of words.

    Each question offers the correct definition plus up to three
    definitions borrowed from other words, in shuffled order.
    """
    rng = rng or random.Random()
    quiz_words = rng.sample(words, min(count, len(words)))

    questions = []
    for word in quiz_words:
        others = [w.definition for w in words if w.id != word.id]
        distractors = rng.sample(others, min(3, len(others)))
        options = [word.definition] + distractors
        rng.shuffle(options)

        questions.append(QuizQuestion(
            word=word.word,
            question=f'What does "{word.word}" mean?',
            correct_answer=word.definition,
            options=options,
            context=word.context_sentence
        ))

    return questions
