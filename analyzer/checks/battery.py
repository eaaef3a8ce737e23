"""The check registry and battery runner."""

from concurrent.futures import ThreadPoolExecutor

import structlog

from analyzer.checks import ai_factors, citation_readiness, content_structure, credibility
from analyzer.checks import technical_seo
from analyzer.checks.base import CheckContext, RegisteredCheck
from analyzer.extraction.parser import ParsedPage
from analyzer.models import Category, Check

logger = structlog.get_logger(__name__)


# Fixed order; results are always reported in this order.
CHECK_REGISTRY: list[RegisteredCheck] = [
    # Content structure
    RegisteredCheck(content_structure.SINGLE_H1, content_structure.check_single_h1),
    RegisteredCheck(content_structure.SUBHEADINGS, content_structure.check_subheadings),
    RegisteredCheck(content_structure.CONTENT_LENGTH, content_structure.check_content_length),
    RegisteredCheck(content_structure.FAQ_SECTION, content_structure.check_faq_section),
    RegisteredCheck(content_structure.HAS_LISTS, content_structure.check_has_lists),
    # Citation readiness
    RegisteredCheck(citation_readiness.STATISTICS_CHECK, citation_readiness.check_statistics),
    RegisteredCheck(
        citation_readiness.QUOTABLE_STATEMENTS, citation_readiness.check_quotable_statements
    ),
    RegisteredCheck(citation_readiness.SPECIFIC_CLAIMS, citation_readiness.check_specific_claims),
    RegisteredCheck(
        citation_readiness.SENTENCE_CLARITY, citation_readiness.check_sentence_clarity
    ),
    RegisteredCheck(citation_readiness.DATES_TIMELINES, citation_readiness.check_dates_timelines),
    # Technical SEO
    RegisteredCheck(technical_seo.SCHEMA_MARKUP, technical_seo.check_schema_markup),
    RegisteredCheck(technical_seo.META_TITLE, technical_seo.check_meta_title),
    RegisteredCheck(technical_seo.META_DESCRIPTION, technical_seo.check_meta_description),
    RegisteredCheck(technical_seo.OPEN_GRAPH, technical_seo.check_open_graph),
    RegisteredCheck(technical_seo.CANONICAL_URL, technical_seo.check_canonical_url),
    RegisteredCheck(technical_seo.PAGE_SPEED, technical_seo.check_page_speed),
    RegisteredCheck(technical_seo.MOBILE_VIEWPORT, technical_seo.check_mobile_viewport),
    RegisteredCheck(technical_seo.IMAGE_ALT_TEXT, technical_seo.check_image_alt_text),
    # Credibility signals
    RegisteredCheck(credibility.AUTHOR_INFO, credibility.check_author_info),
    RegisteredCheck(credibility.PUBLISH_DATE, credibility.check_publish_date),
    RegisteredCheck(credibility.ABOUT_SECTION, credibility.check_about_section),
    RegisteredCheck(credibility.SOURCE_CITATIONS, credibility.check_source_citations),
    RegisteredCheck(credibility.EXTERNAL_LINKS, credibility.check_external_links),
    # AI-specific factors
    RegisteredCheck(ai_factors.UPFRONT_ANSWER, ai_factors.check_upfront_answer),
    RegisteredCheck(ai_factors.TABLE_OF_CONTENTS, ai_factors.check_table_of_contents),
    RegisteredCheck(ai_factors.SUMMARY_SECTION, ai_factors.check_summary_section),
    RegisteredCheck(ai_factors.NO_PAYWALL, ai_factors.check_no_paywall),
    RegisteredCheck(ai_factors.ACCESSIBILITY, ai_factors.check_accessibility),
]


def category_max_scores(
    registry: list[RegisteredCheck] | None = None,
) -> dict[Category, int]:
    """Sum of max_score per category for a registry."""
    totals = {category: 0 for category in Category}
    for entry in registry if registry is not None else CHECK_REGISTRY:
        totals[entry.spec.category] += entry.spec.max_score
    return totals


def _run_one(entry: RegisteredCheck, ctx: CheckContext) -> Check:
    try:
        result = entry.func(ctx)
    except Exception as e:
        logger.warning(
            "check_failed",
            check_id=entry.spec.id,
            url=ctx.page.url,
            error=str(e),
            error_type=type(e).__name__,
        )
        return entry.spec.failed(f"Check could not be completed: {type(e).__name__}.")

    # Re-clamp in case a check built its result by hand
    return entry.spec.result(result.score, result.details, passed=result.passed)


def run_all_checks(
    page: ParsedPage,
    load_time_ms: int,
    specs: list[RegisteredCheck] | None = None,
    max_workers: int = 0,
) -> list[Check]:
    """
    Run every registered check against a parsed page.

    Each check runs in isolation: an exception inside one check becomes a
    failed, zero-score result and never aborts the battery.

    Args:
        page: Parsed page
        load_time_ms: Measured fetch duration
        specs: Registry to run (defaults to CHECK_REGISTRY)
        max_workers: 0 runs sequentially, otherwise the thread pool size

    Returns:
        One Check per registry entry, in registry order
    """
    registry = specs if specs is not None else CHECK_REGISTRY
    ctx = CheckContext(page=page, load_time_ms=load_time_ms)

    # Warm shared derived values before any fan-out
    _ = ctx.text_lower, ctx.words, ctx.sentences, page.word_count, page.html_lower

    if max_workers > 0 and len(registry) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(lambda entry: _run_one(entry, ctx), registry))
    else:
        results = [_run_one(entry, ctx) for entry in registry]

    logger.debug(
        "checks_completed",
        url=page.url,
        total=len(results),
        passed=sum(1 for c in results if c.passed),
    )
    return results
