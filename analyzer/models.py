"""Data models for a single-page readiness analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from analyzer.narrative.models import NarrativeAnalysis


class Category(StrEnum):
    """The five fixed check groupings."""

    CONTENT_STRUCTURE = "content_structure"
    CITATION_READINESS = "citation_readiness"
    TECHNICAL_SEO = "technical_seo"
    CREDIBILITY_SIGNALS = "credibility_signals"
    AI_SPECIFIC_FACTORS = "ai_specific_factors"


class CategoryStatus(StrEnum):
    """Category health derived from its percentage."""

    GOOD = "good"  # >= 70
    WARNING = "warning"  # >= 40
    POOR = "poor"


class Priority(StrEnum):
    """Recommendation priority, most urgent first."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    Priority.CRITICAL: 0,
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}


class Confidence(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Check:
    """Outcome of one heuristic check. Invariant: 0 <= score <= max_score."""

    id: str
    category: Category
    name: str
    passed: bool
    score: int
    max_score: int
    details: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "category": self.category.value,
            "name": self.name,
            "passed": self.passed,
            "score": self.score,
            "max_score": self.max_score,
            "details": self.details,
        }


@dataclass(frozen=True)
class CategoryScore:
    """Summed score for one category."""

    score: int
    max_score: int
    percentage: int
    status: CategoryStatus

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "max_score": self.max_score,
            "percentage": self.percentage,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class Recommendation:
    """Remediation guidance for a failed check."""

    id: str
    category: str
    priority: Priority
    title: str
    description: str
    impact: str
    how_to_fix: str
    code_example: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "category": self.category,
            "priority": self.priority.value,
            "title": self.title,
            "description": self.description,
            "impact": self.impact,
            "how_to_fix": self.how_to_fix,
        }
        if self.code_example:
            data["code_example"] = self.code_example
        return data


@dataclass(frozen=True)
class PageMetadata:
    """Page-level facts reported alongside the score."""

    title: str
    description: str
    word_count: int
    load_time_ms: int
    domain: str
    readability_score: int
    readability_grade: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "word_count": self.word_count,
            "load_time_ms": self.load_time_ms,
            "domain": self.domain,
            "readability_score": self.readability_score,
            "readability_grade": self.readability_grade,
        }


# =============================================================================
# Insights
# =============================================================================


class EntityType(StrEnum):
    PERSON = "person"
    ORGANIZATION = "organization"
    PRODUCT = "product"
    CONCEPT = "concept"
    LOCATION = "location"
    DATE = "date"


class SnippetType(StrEnum):
    STATISTIC = "statistic"
    DEFINITION = "definition"
    FACT = "fact"
    CLAIM = "claim"
    ANSWER = "answer"


class SnippetStrength(StrEnum):
    STRONG = "strong"
    MEDIUM = "medium"
    WEAK = "weak"


class Platform(StrEnum):
    CHATGPT = "ChatGPT"
    PERPLEXITY = "Perplexity"
    CLAUDE = "Claude"
    GOOGLE_AI = "Google AI"
    ALL = "All"


@dataclass(frozen=True)
class CitationPreview:
    """How an AI assistant might quote the page for a query."""

    query: str
    citation: str
    source: str
    confidence: Confidence

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "citation": self.citation,
            "source": self.source,
            "confidence": self.confidence.value,
        }


@dataclass(frozen=True)
class ExtractedEntity:
    name: str
    type: EntityType
    mentions: int
    context: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type.value,
            "mentions": self.mentions,
            "context": self.context,
        }


@dataclass(frozen=True)
class QuotableSnippet:
    text: str
    type: SnippetType
    strength: SnippetStrength
    suggestion: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "text": self.text,
            "type": self.type.value,
            "strength": self.strength.value,
        }
        if self.suggestion:
            data["suggestion"] = self.suggestion
        return data


@dataclass(frozen=True)
class ContentGap:
    topic: str
    reason: str
    suggestion: str
    priority: Priority

    def to_dict(self) -> dict[str, Any]:
        return {
            "topic": self.topic,
            "reason": self.reason,
            "suggestion": self.suggestion,
            "priority": self.priority.value,
        }


@dataclass(frozen=True)
class PlatformTip:
    platform: Platform
    tip: str
    implemented: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "platform": self.platform.value,
            "tip": self.tip,
            "implemented": self.implemented,
        }


@dataclass(frozen=True)
class Insights:
    """Secondary findings that never affect the score."""

    citation_previews: list[CitationPreview] = field(default_factory=list)
    questions_answered: list[str] = field(default_factory=list)
    entities: list[ExtractedEntity] = field(default_factory=list)
    quotable_snippets: list[QuotableSnippet] = field(default_factory=list)
    content_gaps: list[ContentGap] = field(default_factory=list)
    platform_tips: list[PlatformTip] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "citation_previews": [p.to_dict() for p in self.citation_previews],
            "questions_answered": list(self.questions_answered),
            "entities": [e.to_dict() for e in self.entities],
            "quotable_snippets": [s.to_dict() for s in self.quotable_snippets],
            "content_gaps": [g.to_dict() for g in self.content_gaps],
            "platform_tips": [t.to_dict() for t in self.platform_tips],
        }


# =============================================================================
# Result
# =============================================================================


@dataclass(frozen=True)
class AnalysisResult:
    """Complete output of one analysis call."""

    url: str
    timestamp: str
    score: int
    rule_based_score: int
    grade: str
    categories: dict[Category, CategoryScore]
    checks: list[Check]
    metadata: PageMetadata
    top_recommendations: list[Recommendation]
    all_recommendations: list[Recommendation]
    insights: Insights
    narrative_analysis: NarrativeAnalysis | None = None

    def get_check(self, check_id: str) -> Check | None:
        """Look up a check by id."""
        for check in self.checks:
            if check.id == check_id:
                return check
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        data: dict[str, Any] = {
            "url": self.url,
            "timestamp": self.timestamp,
            "score": self.score,
            "rule_based_score": self.rule_based_score,
            "grade": self.grade,
            "categories": {
                category.value: category_score.to_dict()
                for category, category_score in self.categories.items()
            },
            "checks": [c.to_dict() for c in self.checks],
            "metadata": self.metadata.to_dict(),
            "top_recommendations": [r.to_dict() for r in self.top_recommendations],
            "all_recommendations": [r.to_dict() for r in self.all_recommendations],
            "insights": self.insights.to_dict(),
        }
        if self.narrative_analysis is not None:
            data["narrative_analysis"] = self.narrative_analysis.model_dump(mode="json")
        return data
