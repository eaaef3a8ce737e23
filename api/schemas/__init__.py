"""Response envelopes shared by the HTTP routes."""

from typing import Any

from pydantic import BaseModel, Field

from api.exceptions import ErrorCategory


class ErrorBody(BaseModel):
    code: str = Field(..., description="Stable machine-readable error code")
    message: str = Field(..., description="Human-readable explanation")
    category: ErrorCategory
    details: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    """Body of every non-2xx response, as produced by ``AnalyzerError.to_dict``."""

    error: ErrorBody


class ServiceHealth(BaseModel):
    """Liveness payload with the scoring configuration this process runs."""

    status: str = "healthy"
    timestamp: str
    version: str
    uptime_seconds: int
    check_count: int = Field(..., description="Number of registered readiness checks")
    max_points: int = Field(..., description="Sum of every check's maximum score")
    narrative_enabled: bool = Field(..., description="Whether an AI provider key is configured")


class ApiRoot(BaseModel):
    """Index of the versioned API."""

    version: str
    analyzer_version: str
    endpoints: list[str]
