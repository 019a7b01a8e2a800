"""
Readability Scoring
Flesch-Kincaid reading ease and SMOG index computed from raw text.

Flesch reading ease:
    206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words)
Clamped to 0-100, higher means easier.

SMOG:
    1.0430 * sqrt(polysyllables * 30 / sentences) + 3.1291
Only meaningful with 30+ sentences. Shorter texts fall back to
Flesch-Kincaid / 10, a rough approximation rather than a real SMOG grade.
"""
import math
import re

from speedread.models.text_analysis import ReadabilityScores


SMOG_MIN_SENTENCES = 30

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_SILENT_SUFFIX_RE = re.compile(r"(?:[^laeiouy]es|ed|[^laeiouy]e)$")
_LEADING_Y_RE = re.compile(r"^y")
_VOWEL_GROUP_RE = re.compile(r"[aeiouy]{1,2}")


def round_half_up(value: float) -> int:
    """Round to nearest integer, .5 going up."""
    return int(math.floor(value + 0.5))


def split_sentences(text: str) -> list[str]:
    """Split on runs of . ! ? and drop blank pieces."""
    return [s for s in _SENTENCE_SPLIT_RE.split(text) if s.strip()]


def split_words(text: str) -> list[str]:
    """Whitespace tokenization. Punctuation stays attached to words."""
    return text.split()


def count_syllables(word: str) -> int:
    """
    Heuristic syllable count.

    Words of three characters or fewer are one syllable. Otherwise a trailing
    silent -es/-ed/-e and a leading 'y' are dropped and vowel groups of one
    or two letters are counted, with a minimum of one.
    """
    word = word.lower()
    if len(word) <= 3:
        return 1

    word = _SILENT_SUFFIX_RE.sub("", word)
    word = _LEADING_Y_RE.sub("", word)

    matches = _VOWEL_GROUP_RE.findall(word)
    return len(matches) if matches else 1


def calculate_flesch_kincaid(text: str) -> int:
    """Flesch reading ease score, 0 (hardest) to 100 (easiest)."""
    sentences = split_sentences(text)
    words = split_words(text)

    if not sentences or not words:
        return 0

    syllables = sum(count_syllables(w) for w in words)
    avg_sentence_length = len(words) / len(sentences)
    avg_syllables_per_word = syllables / len(words)

    score = 206.835 - (1.015 * avg_sentence_length) - (84.6 * avg_syllables_per_word)
    return max(0, min(100, round_half_up(score)))


def calculate_smog(text: str, min_sentences: int = SMOG_MIN_SENTENCES) -> float:
    """SMOG index, or Flesch-Kincaid / 10 for texts under min_sentences."""
    sentences = split_sentences(text)
    if len(sentences) < min_sentences:
        return calculate_flesch_kincaid(text) / 10

    words = split_words(text)
    polysyllables = sum(1 for w in words if count_syllables(w) >= 3)
    smog = 1.0430 * math.sqrt(polysyllables * (30 / len(sentences))) + 3.1291
    return float(round_half_up(smog))


def score_readability(text: str) -> ReadabilityScores:
    """All readability metrics for a text in one model."""
    words = split_words(text)
    return ReadabilityScores(
        flesch_kincaid=calculate_flesch_kincaid(text),
        smog_index=calculate_smog(text),
        sentence_count=len(split_sentences(text)),
        word_count=len(words),
        syllable_count=sum(count_syllables(w) for w in words)
    )
