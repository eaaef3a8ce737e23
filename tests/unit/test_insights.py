"""Tests for insight extraction: citations, questions, entities, snippets, gaps."""

import pytest

from analyzer.extraction.parser import ParsedPage, parse_page
from analyzer.insights import generator
from analyzer.insights.citations import extract_questions, page_topic, simulate_citations
from analyzer.insights.entities import extract_entities
from analyzer.insights.gaps import (
    CHECK_GAPS,
    GAP_PATTERNS,
    PLATFORM_TIPS,
    generate_platform_tips,
    identify_content_gaps,
)
from analyzer.insights.generator import generate_insights
from analyzer.insights.snippets import find_quotable_snippets
from analyzer.models import (
    Category,
    Check,
    Confidence,
    EntityType,
    Platform,
    Priority,
    SnippetStrength,
    SnippetType,
)
from tests.fixtures import PAGE_URL, rich_article_html


def make_check(check_id: str, passed: bool) -> Check:
    return Check(
        id=check_id,
        category=Category.CONTENT_STRUCTURE,
        name=check_id,
        passed=passed,
        score=10 if passed else 0,
        max_score=10,
        details="",
    )


def page_with(text: str, title: str = "Composting Guide | GardenCo") -> ParsedPage:
    return parse_page(
        f"<html><head><title>{title}</title></head><body><p>{text}</p></body></html>",
        PAGE_URL,
    )


class TestPageTopic:
    def test_strips_site_suffix(self) -> None:
        assert page_topic(page_with("x")) == "Composting Guide"

    def test_falls_back_to_domain(self) -> None:
        page = parse_page("<body><p>No title.</p></body>", PAGE_URL)

        assert page_topic(page) == "gardenguide.example.com"


class TestSimulateCitations:
    """Tests for simulate_citations function."""

    def test_statistic_then_definition(self) -> None:
        page = page_with(
            "Compost is a mixture of decayed organic material used as fertilizer. "
            "Home composting cuts household food waste by about 30 percent each year. "
            "Thanks for reading."
        )
        previews = simulate_citations(page)

        assert [p.confidence for p in previews] == [Confidence.HIGH, Confidence.MEDIUM]
        assert previews[0].query == "What are the key statistics about Composting Guide?"
        assert previews[0].citation == (
            "Home composting cuts household food waste by about 30 percent each year."
        )
        assert previews[0].source == "gardenguide.example.com"
        assert previews[1].query == "What is Compost?"

    def test_quotable_fallback(self) -> None:
        """Without statistics or definitions a quotable sentence is used."""
        page = page_with("Gardeners turn their compost piles every single week in summer.")
        previews = simulate_citations(page)

        assert len(previews) == 1
        assert previews[0].confidence == Confidence.LOW
        assert previews[0].query == "Tell me about Composting Guide"

    def test_at_most_three(self) -> None:
        page = parse_page(rich_article_html(), PAGE_URL)

        assert len(simulate_citations(page)) <= 3

    def test_empty_page(self) -> None:
        assert simulate_citations(page_with("")) == []


class TestExtractQuestions:
    """Tests for extract_questions function."""

    def test_title_and_body(self) -> None:
        text = "What is compost? It is decayed matter. Why does it smell? Because it is wet."
        questions = extract_questions(text, "How to Compost at Home")

        assert questions == ["How to Compost at Home?", "What is compost?", "Why does it smell?"]

    def test_non_question_title_ignored(self) -> None:
        assert extract_questions("No questions here.", "Composting Guide") == []

    def test_case_insensitive_dedupe(self) -> None:
        text = "What is compost? what is compost?"

        assert extract_questions(text, "") == ["What is compost?"]

    def test_capped(self) -> None:
        text = " ".join(f"What is item {i}?" for i in range(10))
        questions = extract_questions(text, "What is composting")

        assert len(questions) == 6
        assert questions[0] == "What is composting?"
        assert questions[-1] == "What is item 4?"


class TestExtractEntities:
    """Tests for extract_entities function."""

    TEXT = (
        "Denver is a city in Colorado. Acme Corp makes compost bins. "
        "Acme Corp opened a store in Denver. Jane Smith said compost helps soil. "
        "Jane Smith wrote a gardening book."
    )

    def test_entities_and_types(self) -> None:
        entities = extract_entities(self.TEXT)

        assert [(e.name, e.type, e.mentions) for e in entities] == [
            ("Acme Corp", EntityType.ORGANIZATION, 2),
            ("Denver", EntityType.LOCATION, 2),
            ("Jane Smith", EntityType.PERSON, 2),
        ]

    def test_single_mentions_dropped(self) -> None:
        names = [e.name for e in extract_entities(self.TEXT)]

        assert "Colorado" not in names

    def test_leading_stopwords_stripped(self) -> None:
        entities = extract_entities("In March we started. By March the pile was ready.")

        assert [(e.name, e.type) for e in entities] == [("March", EntityType.DATE)]

    def test_deterministic(self) -> None:
        """Same text, same entities in the same order."""
        assert extract_entities(self.TEXT) == extract_entities(self.TEXT)

    def test_context_is_first_sentence(self) -> None:
        denver = next(e for e in extract_entities(self.TEXT) if e.name == "Denver")

        assert denver.context == "Denver is a city in Colorado."

    def test_empty_text(self) -> None:
        assert extract_entities("") == []


class TestFindQuotableSnippets:
    """Tests for find_quotable_snippets function."""

    TEXT = (
        "Compost reduces household waste by 30% in most homes. "
        "Mulch is defined as material spread on soil surfaces. "
        "According to the survey, gardeners prefer compost. "
        "Compost might improve your garden soil over time. "
        "Short one."
    )

    def test_strong_then_weak(self) -> None:
        snippets = find_quotable_snippets(self.TEXT)

        assert [(s.type, s.strength) for s in snippets] == [
            (SnippetType.STATISTIC, SnippetStrength.STRONG),
            (SnippetType.DEFINITION, SnippetStrength.STRONG),
            (SnippetType.CLAIM, SnippetStrength.STRONG),
            (SnippetType.CLAIM, SnippetStrength.WEAK),
        ]

    def test_weak_snippet_has_suggestion(self) -> None:
        weak = [s for s in find_quotable_snippets(self.TEXT) if s.strength == SnippetStrength.WEAK]

        assert weak[0].text == "Compost might improve your garden soil over time"
        assert weak[0].suggestion is not None
        assert '"might"' in weak[0].suggestion

    def test_caps(self) -> None:
        stat = "Composting cuts household waste by 30% in most homes. "
        hedge = "Composting might improve your garden soil over time. "
        snippets = find_quotable_snippets(stat * 8 + hedge * 5)

        assert sum(s.strength == SnippetStrength.STRONG for s in snippets) == 5
        assert sum(s.strength == SnippetStrength.WEAK for s in snippets) == 3


class TestContentGaps:
    """Tests for identify_content_gaps function."""

    def test_failed_checks_first(self) -> None:
        checks = [make_check(gap.check_id, passed=False) for gap in CHECK_GAPS]
        gaps = identify_content_gaps("Plain text.", checks)

        assert len(gaps) == len(CHECK_GAPS) + len(GAP_PATTERNS)
        assert [g.topic for g in gaps[:3]] == [
            "FAQ Section",
            "Statistics & Data",
            "Structured Data",
        ]
        assert all(g.priority == Priority.HIGH for g in gaps[:3])

    def test_present_patterns_not_reported(self) -> None:
        checks = [make_check(gap.check_id, passed=True) for gap in CHECK_GAPS]
        text = (
            "Compost vs mulch. Step 1: gather leaves. Pros and cons follow. "
            '"Compost is the best soil amendment there is," the gardener said. '
            "Key takeaways below."
        )

        assert identify_content_gaps(text, checks) == []

    def test_missing_check_counts_as_gap(self) -> None:
        """A check absent from the results is treated as not passed."""
        topics = [g.topic for g in identify_content_gaps("vs", [])]

        assert "FAQ Section" in topics


class TestPlatformTips:
    def test_implemented_flags(self) -> None:
        checks = [make_check("statistics", True), make_check("faq-section", False)]
        tips = generate_platform_tips(checks)

        assert len(tips) == len(PLATFORM_TIPS)
        assert tips[0].platform == Platform.PERPLEXITY
        assert tips[0].implemented is True
        assert tips[1].platform == Platform.CHATGPT
        assert tips[1].implemented is False


class TestGenerateInsights:
    """Tests for generate_insights function."""

    def test_rich_page(self) -> None:
        page = parse_page(rich_article_html(), PAGE_URL)
        insights = generate_insights(page, [])

        assert insights.citation_previews
        assert insights.quotable_snippets
        assert len(insights.platform_tips) == len(PLATFORM_TIPS)
        assert set(insights.to_dict()) == {
            "citation_previews",
            "questions_answered",
            "entities",
            "quotable_snippets",
            "content_gaps",
            "platform_tips",
        }

    def test_failing_extractor_empties_only_its_section(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def explode(text: str) -> list:
            raise ValueError("bad text")

        monkeypatch.setattr(generator, "extract_entities", explode)
        page = parse_page(rich_article_html(), PAGE_URL)

        insights = generate_insights(page, [])

        assert insights.entities == []
        assert insights.platform_tips
