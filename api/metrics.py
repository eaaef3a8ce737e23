"""Prometheus metrics for the analyzer API."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware

# Request metrics
REQUEST_COUNT = Counter(
    "readiness_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

REQUEST_LATENCY = Histogram(
    "readiness_http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 45.0, 90.0],
)

REQUEST_IN_PROGRESS = Gauge(
    "readiness_http_requests_in_progress",
    "HTTP requests currently being processed",
    ["method"],
)

# Error metrics
ERROR_COUNT = Counter(
    "readiness_errors_total",
    "Unhandled application errors",
    ["error_type", "endpoint"],
)

# Analysis metrics
ANALYSES_TOTAL = Counter(
    "readiness_analyses_total",
    "Completed page analyses",
    ["grade", "narrative"],
)

ANALYSIS_FAILURES_TOTAL = Counter(
    "readiness_analysis_failures_total",
    "Analyses that ended in an error, by user-facing category",
    ["category", "code"],
)

ANALYSIS_SCORE = Histogram(
    "readiness_analysis_score",
    "Final readiness score of completed analyses",
    buckets=[10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
)

# Requests that never matched a route share one label
UNMATCHED_ENDPOINT = "unmatched"


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    metrics: bytes = generate_latest()
    return metrics


def get_metrics_content_type() -> str:
    """Get the content type for Prometheus metrics."""
    content_type: str = CONTENT_TYPE_LATEST
    return content_type


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware to collect request metrics."""

    # Paths to exclude from metrics
    EXCLUDE_PATHS = {"/metrics", "/api/health", "/favicon.ico"}

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        if request.url.path in self.EXCLUDE_PATHS:
            return await call_next(request)

        method = request.method
        in_progress = REQUEST_IN_PROGRESS.labels(method=method)
        in_progress.inc()
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            ERROR_COUNT.labels(
                error_type=type(e).__name__,
                endpoint=self._endpoint(request),
            ).inc()
            raise
        finally:
            in_progress.dec()

        endpoint = self._endpoint(request)
        REQUEST_COUNT.labels(
            method=method,
            endpoint=endpoint,
            status_code=str(response.status_code),
        ).inc()
        REQUEST_LATENCY.labels(method=method, endpoint=endpoint).observe(
            time.perf_counter() - start_time
        )
        return response

    @staticmethod
    def _endpoint(request: Request) -> str:
        """Route template for the request, so arbitrary paths don't become labels."""
        route = request.scope.get("route")
        path = getattr(route, "path", None)
        return path if isinstance(path, str) else UNMATCHED_ENDPOINT


def record_analysis(grade: str, score: int, narrative: bool) -> None:
    """Record a completed analysis."""
    ANALYSES_TOTAL.labels(grade=grade, narrative="blended" if narrative else "none").inc()
    ANALYSIS_SCORE.observe(score)


def record_analysis_failure(category: str, code: str) -> None:
    """Record an analysis that ended in a typed error."""
    ANALYSIS_FAILURES_TOTAL.labels(category=category, code=code).inc()
