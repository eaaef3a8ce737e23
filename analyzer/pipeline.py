"""Analysis pipeline orchestration.

fetch -> parse -> checks -> aggregate -> recommendations -> insights
-> optional narrative blend. Everything after the fetch is pure and
synchronous; the fetch and the narrative call are the only I/O.
"""

import asyncio
import dataclasses
from datetime import UTC, datetime

import httpx
import structlog

from analyzer.checks.battery import run_all_checks
from analyzer.extraction.parser import ParsedPage, parse_page
from analyzer.extraction.readability import calculate_readability
from analyzer.fetcher import fetch_page
from analyzer.fixes.generator import generate_recommendations, top_recommendations
from analyzer.insights.generator import generate_insights
from analyzer.models import AnalysisResult, Check, PageMetadata
from analyzer.narrative.models import NarrativeAnalysis, NarrativeRequest
from analyzer.narrative.providers import NarrativeProvider, get_provider
from analyzer.scoring.aggregator import aggregate, blend_scores, score_to_grade
from analyzer.url import validate_url
from api.config import (
    NARRATIVE_SCORE_WEIGHT,
    RULE_BASED_SCORE_WEIGHT,
    Settings,
    get_settings,
)
from api.exceptions import AnalyzerError, InternalAnalysisError

logger = structlog.get_logger(__name__)

NARRATIVE_HEADING_LEVEL = 3
NARRATIVE_MAX_HEADINGS = 10


def analyze_html(
    html: str,
    url: str,
    load_time_ms: int,
    max_workers: int = 0,
) -> AnalysisResult:
    """
    Run the rule-based analysis over already-fetched HTML.

    Deterministic for fixed (html, url, load_time_ms), apart from the
    timestamp. Never raises on malformed or empty HTML.

    Args:
        html: Raw page HTML
        url: Page URL (for domain and external-link classification)
        load_time_ms: Measured fetch duration
        max_workers: Thread pool size for the check battery (0 = sequential)

    Returns:
        AnalysisResult without a narrative analysis
    """
    return analyze_page(parse_page(html, url), load_time_ms, max_workers=max_workers)


def analyze_page(page: ParsedPage, load_time_ms: int, max_workers: int = 0) -> AnalysisResult:
    """Rule-based analysis of an already-parsed page."""
    url = page.url
    checks = run_all_checks(page, load_time_ms, max_workers=max_workers)
    summary = aggregate(checks)

    recommendations = generate_recommendations(checks)
    readability = calculate_readability(page.visible_text)

    metadata = PageMetadata(
        title=page.title,
        description=page.description,
        word_count=page.word_count,
        load_time_ms=load_time_ms,
        domain=page.domain,
        readability_score=readability.score,
        readability_grade=readability.grade,
    )

    return AnalysisResult(
        url=url,
        timestamp=datetime.now(UTC).isoformat(),
        score=summary.score,
        rule_based_score=summary.score,
        grade=summary.grade,
        categories=summary.categories,
        checks=checks,
        metadata=metadata,
        top_recommendations=top_recommendations(recommendations),
        all_recommendations=recommendations,
        insights=generate_insights(page, checks),
    )


def build_narrative_request(
    page: ParsedPage,
    checks: list[Check],
) -> NarrativeRequest:
    """Summarize a page for the narrative analyzer."""
    passed = {c.id for c in checks if c.passed}
    headings = [
        h.text for h in page.headings if h.level <= NARRATIVE_HEADING_LEVEL and h.text
    ][:NARRATIVE_MAX_HEADINGS]
    return NarrativeRequest(
        url=page.url,
        title=page.title,
        content=page.visible_text,
        word_count=page.word_count,
        has_schema="schema-markup" in passed,
        has_faq="faq-section" in passed,
        has_author="author-info" in passed,
        headings=headings,
    )


async def run_narrative_analysis(
    provider: NarrativeProvider,
    request: NarrativeRequest,
    timeout_seconds: float,
) -> NarrativeAnalysis | None:
    """
    Call the narrative provider under a timeout.

    Returns None when the call times out, fails, or yields a degraded result.
    """
    try:
        analysis = await asyncio.wait_for(provider.analyze(request), timeout=timeout_seconds)
    except TimeoutError:
        logger.warning(
            "narrative_analysis_timeout", url=request.url, timeout_seconds=timeout_seconds
        )
        return None
    except Exception as e:
        logger.warning("narrative_analysis_failed", url=request.url, error=str(e))
        return None

    if not analysis.is_usable:
        logger.info("narrative_analysis_degraded", url=request.url)
        return None
    return analysis


async def analyze_url(
    url: str,
    include_ai: bool = True,
    settings: Settings | None = None,
    provider: NarrativeProvider | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AnalysisResult:
    """
    Fetch and analyze one page.

    Args:
        url: Absolute http(s) URL
        include_ai: Whether to call the narrative analyzer
        settings: Settings override (defaults to get_settings())
        provider: Narrative provider override (defaults to the configured one)
        transport: httpx transport for the page fetch (tests)

    Returns:
        AnalysisResult, blended with the narrative score when one is available

    Raises:
        InvalidURLError: Before any fetch, for malformed or non-http(s) URLs
        FetchError: When the page cannot be fetched
        InternalAnalysisError: On an unexpected failure after the fetch
    """
    settings = settings or get_settings()
    url = validate_url(url)

    fetched = await fetch_page(
        url,
        timeout=settings.fetch_timeout_seconds,
        user_agent=settings.fetch_user_agent,
        max_redirects=settings.fetch_max_redirects,
        transport=transport,
    )

    try:
        page = parse_page(fetched.html, url)
        result = analyze_page(page, fetched.load_time_ms, max_workers=settings.check_workers)
    except AnalyzerError:
        raise
    except Exception as e:
        logger.exception("analysis_failed", url=url, error=str(e))
        raise InternalAnalysisError() from e

    if include_ai and (provider is not None or settings.narrative_enabled):
        provider = provider or get_provider(settings)
        narrative = await run_narrative_analysis(
            provider,
            build_narrative_request(page, result.checks),
            settings.narrative_timeout_seconds,
        )
        if narrative is not None:
            score = blend_scores(
                narrative.ai_readiness_score,
                result.rule_based_score,
                external_weight=NARRATIVE_SCORE_WEIGHT,
                rule_weight=RULE_BASED_SCORE_WEIGHT,
            )
            result = dataclasses.replace(
                result,
                score=score,
                grade=score_to_grade(score),
                narrative_analysis=narrative,
            )
    elif include_ai:
        logger.debug("narrative_analysis_skipped", url=url, reason="no_api_key")

    logger.info(
        "analysis_completed",
        url=url,
        score=result.score,
        rule_based_score=result.rule_based_score,
        grade=result.grade,
        narrative=result.narrative_analysis is not None,
        load_time_ms=fetched.load_time_ms,
    )
    return result
