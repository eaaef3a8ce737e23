"""Content gaps and platform tips.

Gaps come from two places: content patterns the page never uses, and
checks that already failed. Platform tips are a fixed list whose
`implemented` flags are read off check outcomes.
"""

import re
from dataclasses import dataclass

from analyzer.checks.patterns import SUMMARY_KEYWORD
from analyzer.models import Check, ContentGap, Platform, PlatformTip, Priority


@dataclass(frozen=True)
class GapPattern:
    """Content pattern whose absence is worth flagging."""

    topic: str
    pattern: re.Pattern[str]
    reason: str
    suggestion: str
    priority: Priority


GAP_PATTERNS: tuple[GapPattern, ...] = (
    GapPattern(
        topic="Comparison",
        pattern=re.compile(
            r"\b(?:vs\.?|versus|compared (?:to|with)|comparison|better than|"
            r"differences? between)\b",
            re.I,
        ),
        reason="AI is often asked to compare options",
        suggestion="Add a comparison with alternatives, ideally as a table",
        priority=Priority.MEDIUM,
    ),
    GapPattern(
        topic="Step-by-Step Guide",
        pattern=re.compile(
            r"\bstep\s*\d|\bstep[- ]by[- ]step\b|\bhow to\b|\bfirst,|\bnext,|\bfinally,", re.I
        ),
        reason="How-to queries favor numbered steps",
        suggestion="Add numbered instructions for the main task",
        priority=Priority.MEDIUM,
    ),
    GapPattern(
        topic="Pros and Cons",
        pattern=re.compile(
            r"\bpros\b|\bcons\b|\badvantages?\b|\bdisadvantages?\b|\bdrawbacks?\b|\bbenefits\b",
            re.I,
        ),
        reason="Balanced pros and cons are frequently quoted",
        suggestion="Add a pros and cons list",
        priority=Priority.LOW,
    ),
    GapPattern(
        topic="Expert Quotes",
        pattern=re.compile(
            r"[\"“][^\"”]{20,}[\"”]|\b(?:said|says|told|explains)\b", re.I
        ),
        reason="Attributed quotes add authority",
        suggestion="Quote a named expert with their credentials",
        priority=Priority.MEDIUM,
    ),
    GapPattern(
        topic="Summary",
        pattern=SUMMARY_KEYWORD.pattern,
        reason="Summaries give AI a compact answer to quote",
        suggestion="Add a Key Takeaways section near the top or bottom",
        priority=Priority.MEDIUM,
    ),
)


@dataclass(frozen=True)
class CheckGap:
    """Gap reported when a check failed."""

    check_id: str
    topic: str
    reason: str
    suggestion: str
    priority: Priority


CHECK_GAPS: tuple[CheckGap, ...] = (
    CheckGap(
        check_id="faq-section",
        topic="FAQ Section",
        reason="FAQs are highly cited by AI",
        suggestion="Add 5-10 common questions with concise answers",
        priority=Priority.HIGH,
    ),
    CheckGap(
        check_id="statistics",
        topic="Statistics & Data",
        reason="AI prefers specific numbers",
        suggestion="Add percentages, metrics, or data points",
        priority=Priority.HIGH,
    ),
    CheckGap(
        check_id="schema-markup",
        topic="Structured Data",
        reason="Schema helps AI understand the content type",
        suggestion="Add JSON-LD schema markup",
        priority=Priority.HIGH,
    ),
)


@dataclass(frozen=True)
class PlatformTipRule:
    platform: Platform
    tip: str
    check_id: str


PLATFORM_TIPS: tuple[PlatformTipRule, ...] = (
    PlatformTipRule(Platform.PERPLEXITY, "Include statistics and source citations", "statistics"),
    PlatformTipRule(Platform.CHATGPT, "Add FAQ sections with clear Q&A format", "faq-section"),
    PlatformTipRule(Platform.GOOGLE_AI, "Use Schema.org structured data", "schema-markup"),
    PlatformTipRule(Platform.ALL, "Answer questions in the first paragraph", "upfront-answer"),
    PlatformTipRule(
        Platform.CLAUDE, "Organize content under clear, descriptive headings", "subheadings"
    ),
    PlatformTipRule(Platform.PERPLEXITY, "Show publish and update dates", "publish-date"),
    PlatformTipRule(Platform.CHATGPT, "Attribute content to a named author", "author-info"),
)


def _passed(checks: list[Check], check_id: str) -> bool:
    return any(c.id == check_id and c.passed for c in checks)


def identify_content_gaps(text: str, checks: list[Check]) -> list[ContentGap]:
    """Failed-check gaps first (in table order), then missing content patterns."""
    gaps = [
        ContentGap(
            topic=gap.topic, reason=gap.reason, suggestion=gap.suggestion, priority=gap.priority
        )
        for gap in CHECK_GAPS
        if not _passed(checks, gap.check_id)
    ]
    gaps.extend(
        ContentGap(
            topic=gap.topic, reason=gap.reason, suggestion=gap.suggestion, priority=gap.priority
        )
        for gap in GAP_PATTERNS
        if not gap.pattern.search(text)
    )
    return gaps


def generate_platform_tips(checks: list[Check]) -> list[PlatformTip]:
    return [
        PlatformTip(
            platform=rule.platform, tip=rule.tip, implemented=_passed(checks, rule.check_id)
        )
        for rule in PLATFORM_TIPS
    ]
