"""Tests for text segmentation and Flesch reading ease."""

import pytest

from analyzer.extraction.readability import (
    SENTINEL_GRADE,
    SENTINEL_SCORE,
    calculate_readability,
    count_syllables,
    readability_grade,
)
from analyzer.extraction.text import first_words, split_sentences, split_words


class TestSplitSentences:
    """Tests for split_sentences function."""

    def test_keeps_terminators(self) -> None:
        """Each sentence keeps its punctuation."""
        assert split_sentences("One. Two? Three!") == ["One.", "Two?", "Three!"]

    def test_terminator_runs(self) -> None:
        """Runs like '?!' or '...' end a single sentence."""
        assert split_sentences("Really?! Yes... Fine") == ["Really?!", "Yes...", "Fine"]

    def test_drops_empty_fragments(self) -> None:
        """Punctuation-only fragments are not sentences."""
        assert split_sentences("Hello. . ! ") == ["Hello."]

    def test_empty(self) -> None:
        assert split_sentences("") == []


class TestWords:
    def test_split_words(self) -> None:
        assert split_words("  a  b\nc ") == ["a", "b", "c"]

    def test_first_words(self) -> None:
        assert first_words("one two three four", 2) == "one two"


class TestCountSyllables:
    """Tests for the syllable estimate."""

    @pytest.mark.parametrize(
        ("word", "expected"),
        [
            ("cat", 1),
            ("the", 1),
            ("water", 2),
            ("happy", 2),
            ("computer", 3),
        ],
    )
    def test_common_words(self, word: str, expected: int) -> None:
        assert count_syllables(word) == expected

    def test_floor_of_one(self) -> None:
        """Words with no vowel groups still count one syllable."""
        assert count_syllables("rhythm") >= 1
        assert count_syllables("") == 1


class TestCalculateReadability:
    """Tests for calculate_readability function."""

    def test_simple_text_scores_high(self) -> None:
        """Short sentences of short words are easy to read."""
        text = "The cat sat on the mat. The dog ran to the park. We had fun."
        result = calculate_readability(text)

        assert result.score >= 80
        assert result.grade == "Easy"

    def test_complex_text_scores_low(self) -> None:
        """Long polysyllabic sentences are hard to read."""
        text = (
            "Comprehensive institutional accountability necessitates extraordinary "
            "organizational transparency regarding administrative responsibilities "
            "and international regulatory considerations."
        )
        result = calculate_readability(text)

        assert result.score <= 50
        assert result.grade in ("Hard", "Very Hard")

    def test_score_is_clamped(self) -> None:
        """Scores never leave 0-100."""
        easy = calculate_readability("Go. Run. Sit. Eat. Nap.")
        hard = calculate_readability(
            "Incomprehensibility characterizes institutionalization "
            "notwithstanding multidimensional interdisciplinary"
        )

        assert easy.score == 100
        assert hard.score == 0

    def test_empty_text_returns_sentinel(self) -> None:
        """No words means no score: the sentinel is returned."""
        result = calculate_readability("")

        assert result.score == SENTINEL_SCORE == 50
        assert result.grade == SENTINEL_GRADE == "N/A"

    def test_whitespace_only_returns_sentinel(self) -> None:
        result = calculate_readability("   \n\t ")

        assert (result.score, result.grade) == (50, "N/A")

    def test_deterministic(self) -> None:
        """Same text, same score."""
        text = "Compost turns scraps into soil. It takes a few months."
        assert calculate_readability(text) == calculate_readability(text)


class TestReadabilityGrade:
    @pytest.mark.parametrize(
        ("score", "grade"),
        [
            (100, "Easy"),
            (80, "Easy"),
            (79, "Standard"),
            (60, "Standard"),
            (59, "Hard"),
            (40, "Hard"),
            (39, "Very Hard"),
            (0, "Very Hard"),
        ],
    )
    def test_boundaries(self, score: int, grade: str) -> None:
        assert readability_grade(score) == grade
