"""Tests for content structure checks."""

import pytest

from analyzer.checks.content_structure import (
    check_content_length,
    check_faq_section,
    check_has_lists,
    check_single_h1,
    check_subheadings,
)
from analyzer.models import Category
from tests.fixtures import body, check_context


def words(count: int) -> str:
    return "<p>" + " ".join(["word"] * count) + "</p>"


class TestSingleH1:
    """Tests for the single-h1 check."""

    def test_exactly_one_h1(self) -> None:
        """One H1 earns full marks."""
        result = check_single_h1(check_context(body("<h1>Topic</h1><p>Text.</p>")))

        assert result.passed is True
        assert result.score == 10
        assert result.max_score == 10
        assert result.category == Category.CONTENT_STRUCTURE

    def test_no_h1(self) -> None:
        """No H1 fails."""
        result = check_single_h1(check_context(body("<h2>Sub</h2>")))

        assert result.passed is False
        assert result.score == 0

    def test_multiple_h1(self) -> None:
        """Several H1s fail and the count is reported."""
        result = check_single_h1(check_context(body("<h1>One</h1><h1>Two</h1>")))

        assert result.passed is False
        assert result.score == 0
        assert "2" in result.details


class TestSubheadings:
    """Tests for the subheadings check."""

    def test_h2s_and_h3(self) -> None:
        """Two H2s and an H3 earn full marks."""
        ctx = check_context(body("<h2>A</h2><h3>A.1</h3><h2>B</h2>"))
        result = check_subheadings(ctx)

        assert (result.score, result.passed) == (10, True)

    def test_h2s_only(self) -> None:
        """Two H2s without H3 still pass with partial credit."""
        result = check_subheadings(check_context(body("<h2>A</h2><h2>B</h2>")))

        assert (result.score, result.passed) == (7, True)

    def test_single_h2(self) -> None:
        """One H2 gets partial credit but fails."""
        result = check_subheadings(check_context(body("<h2>A</h2><h3>A.1</h3>")))

        assert (result.score, result.passed) == (5, False)

    def test_no_subheadings(self) -> None:
        result = check_subheadings(check_context(body("<p>Flat text.</p>")))

        assert (result.score, result.passed) == (0, False)


class TestContentLength:
    """Tests for the content-length check."""

    @pytest.mark.parametrize(
        ("word_count", "score", "passed"),
        [
            (1500, 10, True),
            (1499, 7, True),
            (800, 7, True),
            (799, 3, False),
            (400, 3, False),
            (399, 0, False),
            (0, 0, False),
        ],
    )
    def test_tiers(self, word_count: int, score: int, passed: bool) -> None:
        """Score follows the word-count tiers; passing needs 800 words."""
        result = check_content_length(check_context(body(words(word_count))))

        assert result.score == score
        assert result.passed is passed
        assert str(word_count) in result.details


class TestFAQSection:
    """Tests for the faq-section check."""

    def test_faq_schema(self) -> None:
        """FAQPage structured data earns full marks."""
        html = body(
            '<script type="application/ld+json">{"@type": "FAQPage"}</script><p>Questions.</p>'
        )
        result = check_faq_section(check_context(html))

        assert (result.score, result.passed) == (20, True)

    def test_qa_page_schema(self) -> None:
        html = body('<script type="application/ld+json">{"@type": "QAPage"}</script>')
        result = check_faq_section(check_context(html))

        assert result.score == 20

    def test_faq_heading_without_schema(self) -> None:
        """An FAQ heading passes with reduced credit."""
        result = check_faq_section(check_context(body("<h2>FAQ</h2><p>Ask away.</p>")))

        assert (result.score, result.passed) == (15, True)

    def test_question_answer_pairs(self) -> None:
        """Three question-then-answer pairs count as FAQ content."""
        html = body(
            "<p>What is compost? Compost is decomposed organic matter.</p>"
            "<p>How long does it take? It usually takes two to six months.</p>"
            "<p>Why compost at home? Home composting reduces landfill waste.</p>"
        )
        result = check_faq_section(check_context(html))

        assert (result.score, result.passed) == (15, True)
        assert "3" in result.details

    def test_two_pairs_not_enough(self) -> None:
        html = body(
            "<p>What is compost? Compost is decomposed organic matter.</p>"
            "<p>How long does it take? It usually takes two to six months.</p>"
        )
        result = check_faq_section(check_context(html))

        assert (result.score, result.passed) == (0, False)

    def test_no_faq(self) -> None:
        result = check_faq_section(check_context(body("<p>Plain statement.</p>")))

        assert result.passed is False
        assert result.max_score == 20


class TestHasLists:
    """Tests for the has-lists check."""

    def test_two_lists(self) -> None:
        html = body("<ul><li>a</li></ul><ol><li>b</li></ol>")
        result = check_has_lists(check_context(html))

        assert (result.score, result.passed) == (6, True)

    def test_one_list(self) -> None:
        result = check_has_lists(check_context(body("<ul><li>a</li></ul>")))

        assert (result.score, result.passed) == (0, False)
