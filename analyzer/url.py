"""URL validation and domain helpers."""

from urllib.parse import urljoin, urlparse

from api.exceptions import InvalidURLError

ALLOWED_SCHEMES = frozenset(["http", "https"])


def validate_url(url: str) -> str:
    """
    Validate an absolute http(s) URL before any fetch is attempted.

    Args:
        url: Candidate URL from the caller

    Returns:
        The stripped URL

    Raises:
        InvalidURLError: If the URL is empty, relative, or not http(s)
    """
    if not url or not isinstance(url, str) or not url.strip():
        raise InvalidURLError(str(url), "URL is required.")

    url = url.strip()
    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise InvalidURLError(url) from e

    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        raise InvalidURLError(url)
    if not parsed.hostname:
        raise InvalidURLError(url)
    if any(ch.isspace() for ch in parsed.netloc):
        raise InvalidURLError(url)

    return url


def extract_domain(url: str) -> str:
    """Get the lower-cased host of a URL without a leading www."""
    try:
        host = urlparse(url).hostname or ""
    except ValueError:
        return ""
    host = host.lower()
    if host.startswith("www."):
        host = host[4:]
    return host


def is_external_link(href: str, page_url: str) -> bool:
    """Check if a link points at a different domain than the page."""
    if not href:
        return False
    resolved = urljoin(page_url, href)
    try:
        parsed = urlparse(resolved)
    except ValueError:
        return False
    if parsed.scheme not in ALLOWED_SCHEMES:
        return False
    link_domain = extract_domain(resolved)
    return bool(link_domain) and link_domain != extract_domain(page_url)
