"""Typed errors raised by the analyzer and rendered by the API.

Each error carries an HTTP-like status code and a user-facing category.
The categories matter to callers: "couldn't reach the site", "site took too
long" and "site blocked the request" each lead to different advice.
"""

from enum import StrEnum
from typing import Any

from fastapi import status


class ErrorCategory(StrEnum):
    """User-facing classification of a fatal error."""

    INVALID_INPUT = "invalid_input"
    UNREACHABLE = "unreachable"
    TIMEOUT = "timeout"
    BLOCKED = "blocked"
    RATE_LIMITED = "rate_limited"
    INTERNAL = "internal"


class AnalyzerError(Exception):
    """Base exception for the readiness analyzer."""

    def __init__(
        self,
        message: str,
        code: str = "error",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        category: ErrorCategory = ErrorCategory.INTERNAL,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.category = category
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the API error envelope body."""
        body: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
        }
        if self.details:
            body["details"] = self.details
        return body


class InvalidURLError(AnalyzerError):
    """URL is malformed or not http(s)."""

    def __init__(self, url: str, reason: str = "Please enter a valid http or https URL."):
        super().__init__(
            message=f"Invalid URL. {reason}",
            code="invalid_url",
            status_code=status.HTTP_400_BAD_REQUEST,
            category=ErrorCategory.INVALID_INPUT,
            details={"url": url},
        )


class FetchError(AnalyzerError):
    """The page could not be fetched."""

    def __init__(
        self,
        url: str,
        message: str,
        code: str = "connection_failed",
        status_code: int = status.HTTP_502_BAD_GATEWAY,
        category: ErrorCategory = ErrorCategory.UNREACHABLE,
        details: dict[str, Any] | None = None,
    ):
        self.url = url
        super().__init__(
            message=message,
            code=code,
            status_code=status_code,
            category=category,
            details={"url": url, **(details or {})},
        )


class FetchTimeoutError(FetchError):
    """The site did not respond within the fetch timeout."""

    def __init__(self, url: str, timeout_seconds: float):
        super().__init__(
            url,
            "The page took too long to load. Please try again or try a different URL.",
            code="fetch_timeout",
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            category=ErrorCategory.TIMEOUT,
            details={"timeout_seconds": timeout_seconds},
        )


class DNSResolutionError(FetchError):
    """The host name could not be resolved."""

    def __init__(self, url: str):
        super().__init__(
            url,
            "Could not find that website. Please check the URL and try again.",
            code="dns_failure",
            status_code=status.HTTP_400_BAD_REQUEST,
        )


class ConnectionRefusedFetchError(FetchError):
    """The host refused the connection."""

    def __init__(self, url: str):
        super().__init__(
            url,
            "Could not connect to the website. It may be down or blocking our requests.",
            code="connection_refused",
        )


class TLSFetchError(FetchError):
    """TLS handshake or certificate verification failed."""

    def __init__(self, url: str):
        super().__init__(
            url,
            "SSL certificate error. The website may have security issues.",
            code="tls_failure",
        )


class ConnectionFetchError(FetchError):
    """Any other transport-level failure."""

    def __init__(self, url: str, reason: str):
        super().__init__(
            url,
            "Could not reach the website. Please check the URL and try again.",
            code="connection_failed",
            details={"reason": reason},
        )


# Upstream statuses that mean the site actively refused us
BLOCKING_STATUS_CODES = frozenset({401, 403, 429, 451})


class HTTPStatusFetchError(FetchError):
    """The site answered with a non-2xx status."""

    def __init__(self, url: str, upstream_status: int):
        self.upstream_status = upstream_status
        if upstream_status in BLOCKING_STATUS_CODES:
            message = (
                f"The website blocked our request (HTTP {upstream_status}). "
                "It may not allow automated access."
            )
            category = ErrorCategory.BLOCKED
        else:
            message = f"The website returned an error (HTTP {upstream_status})."
            category = ErrorCategory.UNREACHABLE
        super().__init__(
            url,
            message,
            code="http_status",
            category=category,
            details={"upstream_status": upstream_status},
        )


class EmptyResponseError(FetchError):
    """The site answered with an empty body."""

    def __init__(self, url: str):
        super().__init__(
            url,
            "The website returned an empty page.",
            code="empty_response",
        )


class RateLimitError(AnalyzerError):
    """Rate limit exceeded."""

    def __init__(
        self,
        message: str = "Rate limit reached. Please try again later.",
        retry_after: int | None = None,
    ):
        super().__init__(
            message=message,
            code="rate_limit_exceeded",
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            category=ErrorCategory.RATE_LIMITED,
            details={"retry_after": retry_after} if retry_after is not None else None,
        )


class NarrativeUnavailableError(AnalyzerError):
    """Narrative analysis cannot run. Never fatal to an analysis."""

    def __init__(self, reason: str):
        super().__init__(
            message=f"Narrative analysis unavailable: {reason}",
            code="narrative_unavailable",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )


class InternalAnalysisError(AnalyzerError):
    """Unexpected failure inside the analysis pipeline."""

    def __init__(self, message: str = "An internal analysis error occurred. Please try again."):
        super().__init__(message=message, code="internal_error")
