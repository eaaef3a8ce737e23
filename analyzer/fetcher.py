"""Single-page HTTP fetch with typed failures.

One attempt, no retries. Every transport failure is mapped onto a
FetchError subclass so callers can tell a timeout from a DNS failure from
a site that blocks the request.
"""

import socket
import ssl
import time
from dataclasses import dataclass
from datetime import UTC, datetime

import httpx
import structlog

from api.exceptions import (
    ConnectionFetchError,
    ConnectionRefusedFetchError,
    DNSResolutionError,
    EmptyResponseError,
    FetchError,
    FetchTimeoutError,
    HTTPStatusFetchError,
    TLSFetchError,
)

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 20.0
DEFAULT_MAX_REDIRECTS = 5
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

_DNS_MARKERS = ("name or service not known", "getaddrinfo", "nodename nor servname", "no address")
_TLS_MARKERS = ("certificate", "ssl", "tls")


@dataclass
class FetchResult:
    """Result of fetching a page."""

    url: str
    final_url: str  # After redirects
    status_code: int
    content_type: str | None
    html: str
    load_time_ms: int
    fetched_at: datetime


def _cause_chain(exc: BaseException) -> list[BaseException]:
    chain = []
    current: BaseException | None = exc
    while current is not None and current not in chain:
        chain.append(current)
        current = current.__cause__ or current.__context__
    return chain


def classify_request_error(url: str, exc: httpx.RequestError) -> FetchError:
    """Map an httpx transport error onto the fetch error taxonomy."""
    chain = _cause_chain(exc)
    message = " ".join(str(e) for e in chain).lower()

    if any(isinstance(e, ssl.SSLError) for e in chain) or any(
        marker in message for marker in _TLS_MARKERS
    ):
        return TLSFetchError(url)
    if any(isinstance(e, socket.gaierror) for e in chain) or any(
        marker in message for marker in _DNS_MARKERS
    ):
        return DNSResolutionError(url)
    if any(isinstance(e, ConnectionRefusedError) for e in chain) or "refused" in message:
        return ConnectionRefusedFetchError(url)
    return ConnectionFetchError(url, reason=str(exc) or type(exc).__name__)


async def fetch_page(
    url: str,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    user_agent: str = DEFAULT_USER_AGENT,
    max_redirects: int = DEFAULT_MAX_REDIRECTS,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FetchResult:
    """
    Fetch a page's HTML.

    Args:
        url: Validated absolute http(s) URL
        timeout: Whole-request timeout in seconds
        user_agent: User-Agent header to send
        max_redirects: Redirect hops to follow
        transport: Optional httpx transport (e.g. MockTransport in tests)

    Returns:
        FetchResult with the body and elapsed time

    Raises:
        FetchError: Typed subclass describing why the page could not be fetched
    """
    fetched_at = datetime.now(UTC)
    start = time.perf_counter()

    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            max_redirects=max_redirects,
            transport=transport,
        ) as client:
            response = await client.get(
                url,
                headers={
                    "User-Agent": user_agent,
                    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                    "Accept-Language": "en-US,en;q=0.5",
                },
            )
    except httpx.TimeoutException as e:
        logger.warning("fetch_timeout", url=url, timeout_seconds=timeout)
        raise FetchTimeoutError(url, timeout_seconds=timeout) from e
    except httpx.RequestError as e:
        error = classify_request_error(url, e)
        logger.warning("fetch_failed", url=url, code=error.code, error=str(e))
        raise error from e

    load_time_ms = int((time.perf_counter() - start) * 1000)

    if not 200 <= response.status_code < 300:
        logger.warning("fetch_bad_status", url=url, status_code=response.status_code)
        raise HTTPStatusFetchError(url, upstream_status=response.status_code)

    html = response.text
    if not html.strip():
        logger.warning("fetch_empty_response", url=url)
        raise EmptyResponseError(url)

    logger.info(
        "page_fetched",
        url=url,
        final_url=str(response.url),
        status_code=response.status_code,
        load_time_ms=load_time_ms,
        bytes=len(response.content),
    )
    return FetchResult(
        url=url,
        final_url=str(response.url),
        status_code=response.status_code,
        content_type=response.headers.get("content-type"),
        html=html,
        load_time_ms=load_time_ms,
        fetched_at=fetched_at,
    )
