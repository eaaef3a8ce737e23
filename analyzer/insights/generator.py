"""Build the insights bundle.

Insights never affect the score, so a failing extractor only empties its
own section.
"""

from collections.abc import Callable
from typing import TypeVar

import structlog

from analyzer.extraction.parser import ParsedPage
from analyzer.insights.citations import extract_questions, simulate_citations
from analyzer.insights.entities import extract_entities
from analyzer.insights.gaps import generate_platform_tips, identify_content_gaps
from analyzer.insights.snippets import find_quotable_snippets
from analyzer.models import Check, Insights

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def _safe(name: str, url: str, func: Callable[[], list[T]]) -> list[T]:
    try:
        return func()
    except Exception as e:
        logger.warning("insight_failed", insight=name, url=url, error=str(e))
        return []


def generate_insights(page: ParsedPage, checks: list[Check]) -> Insights:
    text = page.visible_text
    return Insights(
        citation_previews=_safe("citation_previews", page.url, lambda: simulate_citations(page)),
        questions_answered=_safe(
            "questions_answered", page.url, lambda: extract_questions(text, page.title)
        ),
        entities=_safe("entities", page.url, lambda: extract_entities(text)),
        quotable_snippets=_safe(
            "quotable_snippets", page.url, lambda: find_quotable_snippets(text)
        ),
        content_gaps=_safe("content_gaps", page.url, lambda: identify_content_gaps(text, checks)),
        platform_tips=_safe("platform_tips", page.url, lambda: generate_platform_tips(checks)),
    )
