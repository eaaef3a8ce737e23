"""Analyze endpoint schemas."""

from pydantic import BaseModel, Field, field_validator


class AnalyzeRequest(BaseModel):
    """Body of POST /v1/analyze."""

    url: str = Field(..., max_length=2048, description="Absolute http(s) URL to analyze")
    include_ai: bool = Field(default=True, description="Blend in the narrative analysis")

    @field_validator("url")
    @classmethod
    def strip_url(cls, v: str) -> str:
        """Trim whitespace; scheme and host are checked by the analyzer."""
        return v.strip()
