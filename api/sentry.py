"""Optional error reporting through Sentry.

Nothing is sent unless ``SENTRY_DSN`` is set. Typed analysis failures (bad
URLs, unreachable or blocking sites, rate limits) are outcomes of user input
and are dropped; only internal errors and unexpected exceptions are reported.
"""

from __future__ import annotations

from typing import Any

import sentry_sdk
import structlog
from sentry_sdk.integrations import Integration
from sentry_sdk.integrations.asyncio import AsyncioIntegration
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.httpx import HttpxIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from analyzer import __version__
from analyzer.url import extract_domain
from api.config import Settings, get_settings
from api.exceptions import AnalyzerError, InternalAnalysisError

logger = structlog.get_logger(__name__)

RELEASE = f"readiness-analyzer@{__version__}"
SENSITIVE_HEADERS = ("authorization", "cookie", "x-api-key")
UNTRACKED_TRANSACTIONS = frozenset(["/api/health", "/metrics"])
FILTERED = "[Filtered]"

_enabled = False


def _integrations() -> list[Integration]:
    return [
        FastApiIntegration(transaction_style="endpoint"),
        StarletteIntegration(transaction_style="endpoint"),
        HttpxIntegration(),
        AsyncioIntegration(),
        # No breadcrumbs or events from stdlib logging
        LoggingIntegration(level=None, event_level=None),
    ]


def traces_sample_rate(settings: Settings) -> float:
    if settings.sentry_traces_sample_rate is not None:
        return settings.sentry_traces_sample_rate
    return 0.1 if settings.is_production else 1.0


def init_sentry(settings: Settings | None = None) -> bool:
    """Start the SDK once per process. Returns whether reporting is active."""
    global _enabled

    settings = settings or get_settings()
    if not settings.sentry_dsn:
        logger.info("sentry_disabled", reason="no_dsn")
        return False
    if _enabled:
        return True

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.env,
        release=RELEASE,
        traces_sample_rate=traces_sample_rate(settings),
        send_default_pii=False,
        integrations=_integrations(),
        before_send=filter_event,
        before_send_transaction=filter_transaction,
    )
    _enabled = True
    logger.info("sentry_initialized", environment=settings.env, release=RELEASE)
    return True


def is_initialized() -> bool:
    return _enabled


def is_reportable(exc: BaseException | None) -> bool:
    """Only internal failures and non-analyzer exceptions are worth an event."""
    if isinstance(exc, AnalyzerError):
        return isinstance(exc, InternalAnalysisError)
    return True


def scrub_headers(event: dict[str, Any]) -> None:
    headers = event.get("request", {}).get("headers")
    if not isinstance(headers, dict):
        return
    for name in SENSITIVE_HEADERS:
        if name in headers:
            headers[name] = FILTERED


def filter_event(event: dict[str, Any], hint: dict[str, Any]) -> dict[str, Any] | None:
    exc_info = hint.get("exc_info")
    if exc_info and not is_reportable(exc_info[1]):
        return None
    scrub_headers(event)
    return event


def filter_transaction(
    event: dict[str, Any], hint: dict[str, Any]  # noqa: ARG001
) -> dict[str, Any] | None:
    if event.get("transaction") in UNTRACKED_TRANSACTIONS:
        return None
    return event


def set_tag(key: str, value: str) -> None:
    if _enabled:
        sentry_sdk.set_tag(key, value)


def tag_target(url: str) -> None:
    """Tag the current scope with the domain being analyzed."""
    domain = extract_domain(url)
    if domain:
        set_tag("target_domain", domain)


def capture_exception(exception: BaseException) -> str | None:
    """Report an exception. Returns the event id, or None when reporting is off."""
    if not _enabled:
        return None
    event_id: str | None = sentry_sdk.capture_exception(exception)
    return event_id
