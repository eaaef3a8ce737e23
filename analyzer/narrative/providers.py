"""Narrative analysis providers: a unified interface over text-generation APIs.

A provider never raises. Any failure (no API key, transport error, non-200
reply, malformed JSON) returns `NarrativeAnalysis.fallback(...)`, which is
flagged `degraded` so the pipeline leaves it out of the result.
"""

import asyncio
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass

import httpx
import structlog

from analyzer.narrative.models import NarrativeAnalysis, NarrativeRequest
from analyzer.narrative.prompts import build_prompt, parse_response_text
from api.config import Settings
from api.exceptions import NarrativeUnavailableError

logger = structlog.get_logger(__name__)

ANTHROPIC_BASE_URL = "https://api.anthropic.com"
ANTHROPIC_VERSION = "2023-06-01"
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


@dataclass
class ProviderConfig:
    """Configuration for a narrative provider."""

    api_key: str | None = None
    model: str = "claude-sonnet-4-20250514"
    base_url: str = ""
    timeout_seconds: float = 45.0
    max_tokens: int = 4000
    max_chars: int = 8000


class NarrativeProvider(ABC):
    """Abstract base class for narrative providers."""

    name: str = "base"

    def __init__(
        self,
        config: ProviderConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config
        self.transport = transport

    async def analyze(self, request: NarrativeRequest) -> NarrativeAnalysis:
        """Analyze one page. Returns a degraded fallback on any failure."""
        start_time = time.perf_counter()
        try:
            if not self.config.api_key:
                raise NarrativeUnavailableError("API key not configured")
            text = await self._complete(build_prompt(request, self.config.max_chars))
            analysis = parse_response_text(text)
        except Exception as e:
            logger.warning(
                "narrative_analysis_failed",
                provider=self.name,
                url=request.url,
                error=str(e),
                error_type=type(e).__name__,
            )
            return NarrativeAnalysis.fallback(title=request.title)

        logger.info(
            "narrative_analysis_completed",
            provider=self.name,
            url=request.url,
            score=analysis.ai_readiness_score,
            latency_ms=int((time.perf_counter() - start_time) * 1000),
        )
        return analysis

    @abstractmethod
    async def _complete(self, prompt: str) -> str:
        """Send a prompt and return the reply text."""
        ...

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.config.timeout_seconds, transport=self.transport)


class AnthropicNarrativeProvider(NarrativeProvider):
    """Anthropic Messages API."""

    name = "anthropic"

    def __init__(
        self,
        config: ProviderConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(config, transport)
        if not self.config.base_url:
            self.config.base_url = ANTHROPIC_BASE_URL

    async def _complete(self, prompt: str) -> str:
        headers = {
            "x-api-key": self.config.api_key or "",
            "anthropic-version": ANTHROPIC_VERSION,
            "content-type": "application/json",
        }
        payload = {
            "model": self.config.model,
            "max_tokens": self.config.max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }

        async with self._client() as client:
            response = await client.post(
                f"{self.config.base_url}/v1/messages", headers=headers, json=payload
            )

        if response.status_code != 200:
            raise NarrativeUnavailableError(f"HTTP {response.status_code}: {response.text[:200]}")

        data = response.json()
        for block in data.get("content", []):
            if block.get("type") == "text":
                return str(block["text"])
        raise NarrativeUnavailableError("No text block in response")


class OpenRouterNarrativeProvider(NarrativeProvider):
    """OpenRouter chat completions API."""

    name = "openrouter"

    def __init__(
        self,
        config: ProviderConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(config, transport)
        if not self.config.base_url:
            self.config.base_url = OPENROUTER_BASE_URL

    async def _complete(self, prompt: str) -> str:
        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
            "X-Title": "AI Readiness Analyzer",
        }
        payload = {
            "model": self.config.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.config.max_tokens,
        }

        async with self._client() as client:
            response = await client.post(
                f"{self.config.base_url}/chat/completions", headers=headers, json=payload
            )

        if response.status_code != 200:
            raise NarrativeUnavailableError(f"HTTP {response.status_code}: {response.text[:200]}")

        data = response.json()
        return str(data["choices"][0]["message"]["content"])


class MockNarrativeProvider(NarrativeProvider):
    """Mock provider for testing."""

    name = "mock"

    def __init__(
        self,
        response: NarrativeAnalysis | str | None = None,
        should_fail: bool = False,
        delay_seconds: float = 0.0,
    ):
        super().__init__(ProviderConfig(api_key="mock"))
        self.response = response
        self.should_fail = should_fail
        self.delay_seconds = delay_seconds
        self.calls: list[NarrativeRequest] = []

    async def analyze(self, request: NarrativeRequest) -> NarrativeAnalysis:
        self.calls.append(request)
        return await super().analyze(request)

    async def _complete(self, prompt: str) -> str:
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        if self.should_fail:
            raise httpx.ConnectError("Simulated network failure")
        if isinstance(self.response, str):
            return self.response
        analysis = self.response or NarrativeAnalysis(
            summary="Clear, well-structured page with citable facts.",
            ai_readiness_score=80,
        )
        return analysis.model_dump_json(by_alias=True)


def get_provider(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> NarrativeProvider:
    """Build the configured provider from settings."""
    config = ProviderConfig(
        api_key=settings.narrative_api_key,
        model=settings.narrative_model,
        timeout_seconds=settings.narrative_timeout_seconds,
        max_tokens=settings.narrative_max_tokens,
        max_chars=settings.narrative_max_chars,
    )
    if settings.narrative_provider == "openrouter":
        return OpenRouterNarrativeProvider(config, transport)
    return AnthropicNarrativeProvider(config, transport)
