"""Flesch Reading Ease scoring.

Pure function of the visible text; knows nothing about HTML.
"""

import re
from dataclasses import dataclass

from analyzer.extraction.text import split_sentences, split_words

# Returned when the text has no words or no sentences
SENTINEL_SCORE = 50
SENTINEL_GRADE = "N/A"

_NON_LETTERS = re.compile(r"[^a-z]")
_SILENT_ENDINGS = re.compile(r"(?:[^laeiouy]es|ed|[^laeiouy]e)$")
_LEADING_Y = re.compile(r"^y")
_VOWEL_GROUPS = re.compile(r"[aeiouy]{1,2}")


@dataclass(frozen=True)
class ReadabilityResult:
    score: int
    grade: str


def count_syllables(word: str) -> int:
    """Estimate syllables in a single word (floor of 1)."""
    word = _NON_LETTERS.sub("", word.lower())
    if len(word) <= 3:
        return 1
    word = _SILENT_ENDINGS.sub("", word)
    word = _LEADING_Y.sub("", word)
    return max(1, len(_VOWEL_GROUPS.findall(word)))


def readability_grade(score: int) -> str:
    """Map a 0-100 reading-ease score to a label."""
    if score >= 80:
        return "Easy"
    if score >= 60:
        return "Standard"
    if score >= 40:
        return "Hard"
    return "Very Hard"


def calculate_readability(text: str) -> ReadabilityResult:
    """
    Compute Flesch Reading Ease for text.

    206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words),
    clamped to [0, 100] and rounded half up.

    Args:
        text: Visible page text

    Returns:
        ReadabilityResult; the sentinel (50, "N/A") when there is nothing to score
    """
    sentences = split_sentences(text)
    words = split_words(text)

    if not sentences or not words:
        return ReadabilityResult(score=SENTINEL_SCORE, grade=SENTINEL_GRADE)

    syllables = sum(count_syllables(w) for w in words)
    flesch = 206.835 - 1.015 * (len(words) / len(sentences)) - 84.6 * (syllables / len(words))

    score = max(0, min(100, int(flesch + 0.5) if flesch >= 0 else 0))
    return ReadabilityResult(score=score, grade=readability_grade(score))
