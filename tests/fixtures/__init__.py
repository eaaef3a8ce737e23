"""Test fixtures: sample pages and mock fetch transports."""

from tests.fixtures.pages import (
    EMPTY_BODY_HTML,
    MALFORMED_HTML,
    MINIMAL_HTML,
    PAGE_URL,
    body,
    check_context,
    html_transport,
    raising_transport,
    rich_article_html,
    timeout_transport,
)

__all__ = [
    # Pages
    "PAGE_URL",
    "rich_article_html",
    "EMPTY_BODY_HTML",
    "MALFORMED_HTML",
    "MINIMAL_HTML",
    "body",
    "check_context",
    # Transports
    "html_transport",
    "raising_transport",
    "timeout_transport",
]
