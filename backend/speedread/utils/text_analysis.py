"""
Text Analysis
Aggregates readability, vocabulary complexity and topic extraction into a
single report with a difficulty label and reading recommendations.
"""
import math
import re
from collections import Counter

from speedread.models.text_analysis import (
    DifficultyLevel,
    TextAnalysis,
    Topic,
    VocabularyAnalysis,
    WordFrequency
)
from speedread.utils.readability import (
    SMOG_MIN_SENTENCES,
    calculate_flesch_kincaid,
    calculate_smog,
    round_half_up
)


DEFAULT_WPM = 250
DEFAULT_TOPIC_LIMIT = 5
MOST_FREQUENT_LIMIT = 10

# Reference set of very common English words, independent of reader level
COMMON_WORDS = frozenset([
    "the", "of", "and", "a", "to", "in", "is", "you", "that", "it", "he", "was", "for", "on",
    "are", "as", "with", "his", "they", "i", "at", "be", "this", "have", "from", "or", "one",
    "had", "by", "word", "but", "not", "what", "all", "were", "we", "when", "your", "can",
    "said", "there", "each", "which", "she", "do", "how", "their", "if", "will", "up", "other",
    "about", "out", "many", "then", "them", "these", "so", "some", "her", "would", "make",
    "like", "him", "into", "time", "has", "look", "two", "more", "write", "go", "see",
    "number", "no", "way", "could", "people", "my", "than", "first", "water", "been", "call",
    "who", "its", "now", "find", "long", "down", "day", "did", "get", "come", "made", "may",
    "part", "over", "new", "sound", "take", "only", "little", "work", "know", "place", "year",
    "live", "me", "back", "give", "most", "very", "after", "thing", "our", "just", "name",
    "good", "sentence", "man", "think", "say", "great", "where", "help", "through", "much",
    "before", "line", "right", "too", "mean", "old", "any", "same", "tell", "boy", "follow",
    "came", "want", "show", "also", "around", "form", "three", "small", "set", "put", "end",
    "does", "another", "well", "large", "must", "big", "even", "such", "because", "turn",
    "here", "why", "ask", "went", "men", "read", "need", "land", "different", "home", "us",
    "move", "try", "kind", "hand", "picture", "again", "change", "off", "play", "spell",
    "air", "away", "animal", "house", "point", "page", "letter", "mother", "answer", "found",
    "study", "still", "learn", "should", "world", "high", "every", "near", "add", "food",
    "between", "own", "below", "country", "plant", "last", "school", "father", "keep", "tree",
    "never", "start", "city", "earth", "eye", "light", "thought", "head", "under", "story",
    "saw", "left", "few", "while", "along", "might", "close", "something", "seem", "next",
    "hard", "open", "example", "begin", "life", "always", "those", "both", "paper",
    "together", "got", "group", "often", "run", "important", "until", "children", "side",
    "feet", "car", "mile", "night", "walk", "white", "sea", "began", "grow", "took", "river",
    "four", "carry", "state", "once", "book", "hear", "stop", "without", "second", "later",
    "miss", "idea", "enough", "eat", "face", "watch", "far", "really", "almost", "let",
    "above", "girl", "sometimes", "mountain", "cut", "young", "talk", "soon", "list", "song",
    "being", "leave", "family", "an", "dog", "cat", "sat", "happy"
])

# Stop words dropped before topic scoring
STOP_WORDS = frozenset([
    "this", "that", "with", "have", "will", "you", "they", "are", "for", "any", "can", "had",
    "her", "was", "one", "our", "out", "day", "get", "has", "him", "his", "how", "man", "new",
    "now", "old", "see", "two", "way", "who", "boy", "did", "its", "let", "put", "say", "she",
    "too", "use", "from", "been", "were", "their", "there", "which", "would", "about",
    "into", "than", "then", "them", "these", "some", "what", "when", "your", "also", "more"
])

_NON_WORD_RE = re.compile(r"[^\w]")
_PUNCTUATION_RE = re.compile(r"[^\w\s]")


def analyze_vocabulary(text: str) -> VocabularyAnalysis:
    """Word counts and the share of unique words outside COMMON_WORDS."""
    words = text.lower().split()
    freq: Counter = Counter()
    for word in words:
        clean = _NON_WORD_RE.sub("", word)
        if clean:
            freq[clean] += 1

    unique_words = list(freq)
    if unique_words:
        common_count = sum(1 for w in unique_words if w in COMMON_WORDS)
        level = round_half_up((1 - common_count / len(unique_words)) * 100)
        level = max(0, min(100, level))
    else:
        level = 0

    return VocabularyAnalysis(
        total_words=len(words),
        unique_words=len(unique_words),
        vocabulary_level=level,
        most_frequent_words=[
            WordFrequency(word=w, count=c) for w, c in freq.most_common(MOST_FREQUENT_LIMIT)
        ]
    )


def extract_topics(text: str, limit: int = DEFAULT_TOPIC_LIMIT) -> list[Topic]:
    """
    Rank terms with a single-document TF-IDF approximation.

    score = (freq / total) * ln(total / freq), where total counts the
    filtered tokens. There is no corpus, so the IDF part is a frequency
    proxy that favors terms that are repeated but not dominant.
    """
    tokens = _PUNCTUATION_RE.sub(" ", text.lower()).split()
    filtered = [t for t in tokens if len(t) > 3 and t not in STOP_WORDS]
    if not filtered:
        return []

    total = len(filtered)
    freq = Counter(filtered)
    topics = [
        Topic(word=word, score=(count / total) * math.log(total / count), frequency=count)
        for word, count in freq.items()
    ]
    topics.sort(key=lambda t: t.score, reverse=True)
    return topics[:limit]


def estimate_reading_time(word_count: int, wpm: int = DEFAULT_WPM) -> int:
    """Minutes to read word_count words at wpm, rounded up."""
    if wpm <= 0:
        raise ValueError("wpm must be positive")
    return math.ceil(word_count / wpm)


def determine_difficulty(flesch_kincaid: float, smog_index: float) -> DifficultyLevel:
    avg_score = (flesch_kincaid + smog_index * 10) / 2
    if avg_score >= 80:
        return DifficultyLevel.BEGINNER
    elif avg_score >= 60:
        return DifficultyLevel.INTERMEDIATE
    elif avg_score >= 40:
        return DifficultyLevel.ADVANCED
    return DifficultyLevel.EXPERT


def build_recommendations(
    flesch_kincaid: int,
    vocabulary_level: int,
    estimated_time: int,
    topics: list[Topic]
) -> list[str]:
    recommendations = []

    if flesch_kincaid < 30:
        recommendations.append("This text is quite complex. Consider using speed reading techniques.")
    if vocabulary_level > 70:
        recommendations.append("Rich vocabulary content - great for expanding your word knowledge.")
    if estimated_time > 15:
        recommendations.append("Long read - consider breaking into multiple sessions.")
    if topics:
        recommendations.append(f"Key topics: {', '.join(t.word for t in topics[:3])}")

    return recommendations


def analyze_text(
    text: str,
    wpm: int = DEFAULT_WPM,
    topic_limit: int = DEFAULT_TOPIC_LIMIT,
    smog_min_sentences: int = SMOG_MIN_SENTENCES
) -> TextAnalysis:
    """
    Full analysis report for a text.

    Empty or very short text yields zero scores and no topics rather
    than an error.
    """
    flesch_kincaid = calculate_flesch_kincaid(text)
    smog_index = calculate_smog(text, smog_min_sentences)
    vocabulary = analyze_vocabulary(text)
    topics = extract_topics(text, topic_limit)
    estimated_time = estimate_reading_time(vocabulary.total_words, wpm)

    return TextAnalysis(
        flesch_kincaid=flesch_kincaid,
        smog_index=smog_index,
        vocabulary_analysis=vocabulary,
        topics=topics,
        estimated_time=estimated_time,
        difficulty_level=determine_difficulty(flesch_kincaid, smog_index),
        recommendations=build_recommendations(
            flesch_kincaid, vocabulary.vocabulary_level, estimated_time, topics
        )
    )
