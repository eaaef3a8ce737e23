"""Aggregate check results into category scores, an overall score and a grade.

Rounding is half-up everywhere so that identical inputs always produce
identical integers (Python's built-in round() uses banker's rounding).
"""

import math
from dataclasses import dataclass

from analyzer.models import Category, CategoryScore, CategoryStatus, Check

# Minimum score for each letter grade, best first
GRADE_THRESHOLDS = (
    (90, "A"),
    (80, "B"),
    (70, "C"),
    (60, "D"),
)
FAILING_GRADE = "F"

GOOD_THRESHOLD = 70
WARNING_THRESHOLD = 40


@dataclass(frozen=True)
class ScoreSummary:
    categories: dict[Category, CategoryScore]
    score: int
    grade: str


def round_half_up(value: float) -> int:
    # Epsilon absorbs float noise from weighted sums landing just under .5
    return int(math.floor(value + 0.5 + 1e-9))


def percentage(score: int, max_score: int) -> int:
    """round(100 * score / max_score), 0 when max_score is 0."""
    if max_score <= 0:
        return 0
    return round_half_up(100 * score / max_score)


def category_status(percent: int) -> CategoryStatus:
    if percent >= GOOD_THRESHOLD:
        return CategoryStatus.GOOD
    if percent >= WARNING_THRESHOLD:
        return CategoryStatus.WARNING
    return CategoryStatus.POOR


def score_to_grade(score: int) -> str:
    """Letter grade for a 0-100 score; boundary values take the higher grade."""
    for minimum, grade in GRADE_THRESHOLDS:
        if score >= minimum:
            return grade
    return FAILING_GRADE


def calculate_category_scores(checks: list[Check]) -> dict[Category, CategoryScore]:
    """Sum scores per category. Every category is present, in enum order."""
    totals = {category: [0, 0] for category in Category}
    for check in checks:
        totals[check.category][0] += check.score
        totals[check.category][1] += check.max_score

    scores = {}
    for category, (score, max_score) in totals.items():
        percent = percentage(score, max_score)
        scores[category] = CategoryScore(
            score=score,
            max_score=max_score,
            percentage=percent,
            status=category_status(percent),
        )
    return scores


def calculate_overall_score(categories: dict[Category, CategoryScore]) -> int:
    total = sum(c.score for c in categories.values())
    total_max = sum(c.max_score for c in categories.values())
    return percentage(total, total_max)


def aggregate(checks: list[Check]) -> ScoreSummary:
    """Category scores, overall rule-based score and grade for a check list."""
    categories = calculate_category_scores(checks)
    score = calculate_overall_score(categories)
    return ScoreSummary(categories=categories, score=score, grade=score_to_grade(score))


def blend_scores(
    external_score: int | float,
    rule_based_score: int,
    external_weight: float = 0.6,
    rule_weight: float = 0.4,
) -> int:
    """
    Blend an external narrative score with the rule-based score.

    Only a valid external score (> 0) participates; otherwise the
    rule-based score is returned unchanged.
    """
    if not external_score or external_score <= 0:
        return rule_based_score
    external = min(100.0, float(external_score))
    blended = round_half_up(external * external_weight + rule_based_score * rule_weight)
    return max(0, min(100, blended))
