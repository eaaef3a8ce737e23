"""Tests for optional Sentry reporting."""

from unittest.mock import patch

import pytest

from api import sentry
from api.config import Settings
from api.exceptions import (
    FetchTimeoutError,
    InternalAnalysisError,
    InvalidURLError,
    RateLimitError,
)

DSN = "https://key@sentry.example/1"


@pytest.fixture
def enabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sentry, "_enabled", True)


@pytest.fixture
def disabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sentry, "_enabled", False)


class TestIsReportable:
    @pytest.mark.parametrize(
        "exc",
        [
            InvalidURLError("nope"),
            FetchTimeoutError("https://example.com", 20.0),
            RateLimitError(retry_after=30),
        ],
    )
    def test_typed_failures_are_not_reported(self, exc: Exception) -> None:
        assert sentry.is_reportable(exc) is False

    @pytest.mark.parametrize("exc", [InternalAnalysisError(), KeyError("checks")])
    def test_internal_and_unexpected_are_reported(self, exc: Exception) -> None:
        assert sentry.is_reportable(exc) is True


class TestFilterEvent:
    def test_drops_expected_failure(self) -> None:
        exc = FetchTimeoutError("https://example.com", 20.0)

        assert sentry.filter_event({}, {"exc_info": (type(exc), exc, None)}) is None

    def test_scrubs_credentials(self) -> None:
        event = {
            "request": {
                "headers": {
                    "authorization": "Bearer sk-test",
                    "x-api-key": "abc",
                    "user-agent": "curl/8.0",
                }
            }
        }

        result = sentry.filter_event(event, {})

        assert result is not None
        assert result["request"]["headers"] == {
            "authorization": "[Filtered]",
            "x-api-key": "[Filtered]",
            "user-agent": "curl/8.0",
        }

    def test_event_without_request(self) -> None:
        assert sentry.filter_event({"message": "boom"}, {}) == {"message": "boom"}


class TestFilterTransaction:
    @pytest.mark.parametrize("name", sorted(sentry.UNTRACKED_TRANSACTIONS))
    def test_operational_routes_dropped(self, name: str) -> None:
        assert sentry.filter_transaction({"transaction": name}, {}) is None

    def test_analyze_kept(self) -> None:
        event = {"transaction": "/v1/analyze"}

        assert sentry.filter_transaction(event, {}) is event


class TestInitSentry:
    def test_no_dsn(self, disabled) -> None:
        with patch("api.sentry.sentry_sdk.init") as mock_init:
            assert sentry.init_sentry(Settings(sentry_dsn=None)) is False

        mock_init.assert_not_called()
        assert sentry.is_initialized() is False

    def test_initializes_once(self, disabled) -> None:
        settings = Settings(sentry_dsn=DSN)

        with patch("api.sentry.sentry_sdk.init") as mock_init:
            assert sentry.init_sentry(settings) is True
            assert sentry.init_sentry(settings) is True

        mock_init.assert_called_once()
        kwargs = mock_init.call_args.kwargs
        assert kwargs["release"] == sentry.RELEASE
        assert kwargs["environment"] == "test"
        assert kwargs["send_default_pii"] is False
        assert kwargs["before_send"] is sentry.filter_event

    @pytest.mark.parametrize(
        ("env", "override", "expected"),
        [
            ("production", None, 0.1),
            ("development", None, 1.0),
            ("production", 0.5, 0.5),
        ],
    )
    def test_traces_sample_rate(self, env: str, override: float | None, expected: float) -> None:
        settings = Settings(env=env, sentry_traces_sample_rate=override)

        assert sentry.traces_sample_rate(settings) == expected


class TestScopeHelpers:
    def test_disabled_helpers_do_nothing(self, disabled) -> None:
        with (
            patch("api.sentry.sentry_sdk.set_tag") as mock_tag,
            patch("api.sentry.sentry_sdk.capture_exception") as mock_capture,
        ):
            sentry.tag_target("https://www.example.com/page")
            assert sentry.capture_exception(ValueError("boom")) is None

        mock_tag.assert_not_called()
        mock_capture.assert_not_called()

    def test_tag_target_uses_domain(self, enabled) -> None:
        with patch("api.sentry.sentry_sdk.set_tag") as mock_tag:
            sentry.tag_target("https://www.example.com/page")

        mock_tag.assert_called_once_with("target_domain", "example.com")

    def test_tag_target_skips_unparseable(self, enabled) -> None:
        with patch("api.sentry.sentry_sdk.set_tag") as mock_tag:
            sentry.tag_target("not a url")

        mock_tag.assert_not_called()

    def test_capture_returns_event_id(self, enabled) -> None:
        with patch("api.sentry.sentry_sdk.capture_exception", return_value="evt-1"):
            assert sentry.capture_exception(ValueError("boom")) == "evt-1"
