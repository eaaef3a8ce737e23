"""Tests for metrics module."""

from unittest.mock import MagicMock

import pytest
from httpx import AsyncClient
from prometheus_client import REGISTRY

from api.metrics import (
    UNMATCHED_ENDPOINT,
    MetricsMiddleware,
    get_metrics,
    get_metrics_content_type,
    record_analysis,
    record_analysis_failure,
)
from tests.fixtures import PAGE_URL, html_transport, rich_article_html


def sample(name: str, labels: dict[str, str]) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


class TestMetricsOutput:
    """Tests for metrics output generation."""

    def test_get_metrics_returns_bytes(self) -> None:
        assert isinstance(get_metrics(), bytes)

    def test_get_metrics_content_type(self) -> None:
        content_type = get_metrics_content_type()
        assert "text/plain" in content_type or "openmetrics" in content_type

    def test_get_metrics_contains_custom_metrics(self) -> None:
        output = get_metrics().decode("utf-8")
        assert "readiness_http_requests_total" in output
        assert "readiness_analyses_total" in output
        assert "readiness_analysis_score" in output

    @pytest.mark.asyncio
    async def test_metrics_endpoint(self, client: AsyncClient) -> None:
        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "readiness_http_requests_total" in response.text


class TestMetricsMiddleware:
    """Tests for metrics middleware."""

    def test_exclude_paths(self) -> None:
        middleware = MetricsMiddleware(MagicMock())

        assert "/metrics" in middleware.EXCLUDE_PATHS
        assert "/api/health" in middleware.EXCLUDE_PATHS

    @pytest.mark.asyncio
    async def test_labels_by_route_template(self, client: AsyncClient) -> None:
        labels = {"method": "GET", "endpoint": "/v1/", "status_code": "200"}
        before = sample("readiness_http_requests_total", labels)

        await client.get("/v1/")

        assert sample("readiness_http_requests_total", labels) == before + 1

    @pytest.mark.asyncio
    async def test_unmatched_paths_share_a_label(self, client: AsyncClient) -> None:
        labels = {"method": "GET", "endpoint": UNMATCHED_ENDPOINT, "status_code": "404"}
        before = sample("readiness_http_requests_total", labels)

        await client.get("/v1/does-not-exist")
        await client.get("/another/missing/path")

        assert sample("readiness_http_requests_total", labels) == before + 2


class TestAnalysisMetrics:
    """Tests for analysis counters."""

    def test_record_analysis(self) -> None:
        labels = {"grade": "B", "narrative": "blended"}
        before = sample("readiness_analyses_total", labels)
        scored_before = sample("readiness_analysis_score_count", {})

        record_analysis("B", 84, narrative=True)

        assert sample("readiness_analyses_total", labels) == before + 1
        assert sample("readiness_analysis_score_count", {}) == scored_before + 1

    def test_record_analysis_failure(self) -> None:
        labels = {"category": "timeout", "code": "fetch_timeout"}
        before = sample("readiness_analysis_failures_total", labels)

        record_analysis_failure("timeout", "fetch_timeout")

        assert sample("readiness_analysis_failures_total", labels) == before + 1

    @pytest.mark.asyncio
    async def test_analyze_endpoint_records_result(
        self, client: AsyncClient, use_fetch_transport
    ) -> None:
        use_fetch_transport(html_transport(rich_article_html()))
        labels = {"grade": "A", "narrative": "none"}
        before = sample("readiness_analyses_total", labels)

        await client.post("/v1/analyze", json={"url": PAGE_URL})

        assert sample("readiness_analyses_total", labels) == before + 1

    @pytest.mark.asyncio
    async def test_error_handler_records_failure(self, client: AsyncClient) -> None:
        labels = {"category": "invalid_input", "code": "invalid_url"}
        before = sample("readiness_analysis_failures_total", labels)

        await client.post("/v1/analyze", json={"url": "not a url"})

        assert sample("readiness_analysis_failures_total", labels) == before + 1
