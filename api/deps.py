"""FastAPI dependencies for dependency injection."""

from typing import Annotated

import httpx
from fastapi import Depends, Request

from analyzer.narrative.providers import NarrativeProvider
from api.config import Settings, get_settings
from api.rate_limit import InMemoryRateLimiter, RateLimiter

__all__ = [
    "SettingsDep",
    "RateLimiterDep",
    "NarrativeProviderDep",
    "FetchTransportDep",
]


SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_rate_limiter(request: Request) -> RateLimiter:
    """The app-wide rate limiter, created on first use."""
    limiter: RateLimiter | None = getattr(request.app.state, "rate_limiter", None)
    if limiter is None:
        settings = get_settings()
        limiter = InMemoryRateLimiter(
            limit=settings.rate_limit_requests,
            window_seconds=settings.rate_limit_window_seconds,
        )
        request.app.state.rate_limiter = limiter
    return limiter


RateLimiterDep = Annotated[RateLimiter, Depends(get_rate_limiter)]


def get_narrative_provider() -> NarrativeProvider | None:
    """Narrative provider override; None uses the configured provider."""
    return None


NarrativeProviderDep = Annotated[NarrativeProvider | None, Depends(get_narrative_provider)]


def get_fetch_transport() -> httpx.AsyncBaseTransport | None:
    """Transport override for page fetches; None uses the network."""
    return None


FetchTransportDep = Annotated[httpx.AsyncBaseTransport | None, Depends(get_fetch_transport)]


def client_key(request: Request) -> str:
    """Identify the caller by its direct socket address."""
    return request.client.host if request.client else "unknown"
