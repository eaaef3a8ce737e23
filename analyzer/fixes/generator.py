"""Turn failed checks into prioritized recommendations."""

import structlog

from analyzer.fixes.templates import FIX_TEMPLATES, FixTemplate
from analyzer.models import Check, Priority, Recommendation

logger = structlog.get_logger(__name__)

DEFAULT_TOP_LIMIT = 5
URGENT_PRIORITIES = frozenset([Priority.CRITICAL, Priority.HIGH])


def generate_recommendations(
    checks: list[Check],
    templates: dict[str, FixTemplate] | None = None,
) -> list[Recommendation]:
    """
    Map failed checks to recommendations.

    Failed checks without a template are skipped. The result is sorted by
    priority (critical first); the sort is stable, so checks of equal
    priority keep their input order.

    Args:
        checks: Check results in battery order
        templates: Template table (defaults to FIX_TEMPLATES)

    Returns:
        Recommendations ordered by priority
    """
    table = templates if templates is not None else FIX_TEMPLATES

    recommendations = []
    for check in checks:
        if check.passed:
            continue
        template = table.get(check.id)
        if template is None:
            continue
        recommendations.append(template.to_recommendation(check.id))

    recommendations.sort(key=lambda r: r.priority.rank)

    logger.debug(
        "recommendations_generated",
        failed_checks=sum(1 for c in checks if not c.passed),
        recommendations=len(recommendations),
    )
    return recommendations


def top_recommendations(
    recommendations: list[Recommendation],
    limit: int = DEFAULT_TOP_LIMIT,
    high_priority_only: bool = False,
) -> list[Recommendation]:
    """First `limit` recommendations, optionally only critical/high ones."""
    if high_priority_only:
        recommendations = [r for r in recommendations if r.priority in URGENT_PRIORITIES]
    return recommendations[:limit]
