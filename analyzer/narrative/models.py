"""Structured narrative analysis returned by the external text-generation service.

Field names are snake_case in Python and accept the service's camelCase keys
on input. Lists default to empty so a partially filled response still
validates.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

FALLBACK_SCORE = 50
FALLBACK_SUMMARY = "AI analysis temporarily unavailable. Using rule-based analysis."


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


def _lower(value: Any) -> Any:
    return value.strip().lower() if isinstance(value, str) else value


class ContentUnderstanding(_CamelModel):
    main_topic: str = ""
    target_audience: str = ""
    content_type: str = ""
    key_messages: list[str] = Field(default_factory=list)


class SampleCitation(_CamelModel):
    user_query: str
    ai_response: str = ""
    cited_text: str = ""
    confidence: Literal["high", "medium", "low"] = "medium"

    normalize_confidence = field_validator("confidence", mode="before")(_lower)


class CitationSimulation(_CamelModel):
    likely_queries: list[str] = Field(default_factory=list)
    sample_citations: list[SampleCitation] = Field(default_factory=list)


class Improvement(_CamelModel):
    category: str
    issue: str
    recommendation: str
    priority: Literal["critical", "high", "medium", "low"] = "medium"
    example_fix: str | None = None

    normalize_priority = field_validator("priority", mode="before")(_lower)


class MissingContent(_CamelModel):
    topic: str
    reason: str = ""
    suggested_content: str = ""


class RewriteSuggestion(_CamelModel):
    original: str
    improved: str
    reason: str = ""


class CompetitiveAnalysis(_CamelModel):
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    opportunities: list[str] = Field(default_factory=list)


class NarrativeAnalysis(_CamelModel):
    """Qualitative analysis plus a 0-100 readiness score."""

    summary: str
    ai_readiness_score: int = Field(ge=0, le=100)
    content_understanding: ContentUnderstanding = Field(default_factory=ContentUnderstanding)
    citation_simulation: CitationSimulation = Field(default_factory=CitationSimulation)
    improvements: list[Improvement] = Field(default_factory=list)
    missing_content: list[MissingContent] = Field(default_factory=list)
    rewrite_suggestions: list[RewriteSuggestion] = Field(default_factory=list)
    competitive_analysis: CompetitiveAnalysis = Field(default_factory=CompetitiveAnalysis)

    # Set on fallback results; never part of the service's response
    degraded: bool = False

    @field_validator("ai_readiness_score", mode="before")
    @classmethod
    def coerce_score(cls, value: Any) -> Any:
        """Accept floats and numeric strings; clamp to 0-100."""
        if isinstance(value, str):
            value = value.strip()
        try:
            number = float(value)
        except (TypeError, ValueError):
            return value
        return max(0, min(100, int(number + 0.5)))

    @property
    def is_usable(self) -> bool:
        """Whether the score may be blended into the final result."""
        return not self.degraded and self.ai_readiness_score > 0

    @classmethod
    def fallback(cls, title: str = "", reason: str = "") -> "NarrativeAnalysis":
        """Degraded placeholder used whenever the service cannot be used."""
        return cls(
            summary=FALLBACK_SUMMARY,
            ai_readiness_score=FALLBACK_SCORE,
            content_understanding=ContentUnderstanding(
                main_topic=title or "Unknown",
                target_audience="General audience",
                content_type="webpage",
                key_messages=["Content analysis pending"],
            ),
            improvements=[
                Improvement(
                    category="technical",
                    issue="AI analysis could not be completed",
                    recommendation=reason or "Try again or check API configuration",
                    priority="high",
                )
            ],
            competitive_analysis=CompetitiveAnalysis(weaknesses=["Unable to analyze"]),
            degraded=True,
        )


class NarrativeRequest(BaseModel):
    """What the service is given about a page."""

    url: str
    title: str
    content: str
    word_count: int
    has_schema: bool
    has_faq: bool
    has_author: bool
    headings: list[str] = Field(default_factory=list)
