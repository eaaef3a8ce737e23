"""Pytest configuration and fixtures."""

import os
from collections.abc import AsyncGenerator, Callable, Generator

import httpx
import pytest
import structlog
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

# Set test environment before any app code runs; never call a real provider
os.environ["ENV"] = "test"
os.environ["ANTHROPIC_API_KEY"] = ""
os.environ["OPENROUTER_API_KEY"] = ""
os.environ["RATE_LIMIT_REQUESTS"] = "100"

from analyzer.narrative.providers import NarrativeProvider  # noqa: E402
from api.config import Settings  # noqa: E402


@pytest.fixture(autouse=True)
def _restore_structlog_config() -> Generator[None, None, None]:
    """Undo logging setup done inside a test, so loggers never keep a closed capture stream."""
    config = structlog.get_config()
    yield
    structlog.configure(**config)


@pytest.fixture
def settings() -> Settings:
    """Fresh settings read from the test environment."""
    from api.config import get_settings

    get_settings.cache_clear()  # Use test env, not stale or .env values
    return get_settings()


@pytest.fixture
def app(settings: Settings) -> Generator[FastAPI, None, None]:
    """A new application per test, so rate-limit counts never leak."""
    from api.main import create_app

    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def use_fetch_transport(app: FastAPI) -> Callable[[httpx.AsyncBaseTransport], None]:
    """Route the analyze endpoint's page fetches through a mock transport."""
    from api.deps import get_fetch_transport

    def install(transport: httpx.AsyncBaseTransport) -> None:
        app.dependency_overrides[get_fetch_transport] = lambda: transport

    return install


@pytest.fixture
def use_narrative_provider(app: FastAPI) -> Callable[[NarrativeProvider], None]:
    """Give the analyze endpoint a specific narrative provider."""
    from api.deps import get_narrative_provider

    def install(provider: NarrativeProvider) -> None:
        app.dependency_overrides[get_narrative_provider] = lambda: provider

    return install
