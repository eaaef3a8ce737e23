"""Credibility signal checks: authorship, dates, sources and outbound links."""

from urllib.parse import urlparse

from analyzer.checks.base import CheckContext, CheckSpec
from analyzer.checks.patterns import (
    ABOUT_HREF,
    ABOUT_LINK_TEXT,
    AUTHOR_BYLINE,
    AUTHOR_MARKUP,
    CITATION_MARKERS,
    PUBLISH_DATE_MARKUP,
    PUBLISH_DATE_TEXT,
)
from analyzer.models import Category, Check

AUTHOR_INFO = CheckSpec("author-info", Category.CREDIBILITY_SIGNALS, "Author Information", 15)
PUBLISH_DATE = CheckSpec("publish-date", Category.CREDIBILITY_SIGNALS, "Publish Date", 12)
ABOUT_SECTION = CheckSpec("about-section", Category.CREDIBILITY_SIGNALS, "About Page Link", 8)
SOURCE_CITATIONS = CheckSpec(
    "source-citations", Category.CREDIBILITY_SIGNALS, "Source Citations", 12
)
EXTERNAL_LINKS = CheckSpec("external-links", Category.CREDIBILITY_SIGNALS, "External Links", 8)

BYLINE_SCORE = 10
MIN_EXTERNAL_LINKS = 2


def check_author_info(ctx: CheckContext) -> Check:
    if AUTHOR_MARKUP.found(ctx.page.raw_html):
        return AUTHOR_INFO.result(15, "Author declared in structured data or rel=author.")
    if AUTHOR_BYLINE.found(ctx.text):
        return AUTHOR_INFO.result(
            BYLINE_SCORE, "Author byline found. Add author schema markup.", passed=True
        )
    return AUTHOR_INFO.failed("No author information found.")


def check_publish_date(ctx: CheckContext) -> Check:
    if PUBLISH_DATE_MARKUP.found(ctx.page.raw_html):
        return PUBLISH_DATE.result(12, "Machine-readable publish date found.")
    if PUBLISH_DATE_TEXT.found(ctx.text):
        return PUBLISH_DATE.result(12, "Publish or update date shown on the page.")
    return PUBLISH_DATE.failed("No publish or update date found.")


def _link_path(href: str) -> str:
    try:
        return urlparse(href).path
    except ValueError:
        return ""


def check_about_section(ctx: CheckContext) -> Check:
    for link in ctx.page.links:
        if ABOUT_HREF.found(_link_path(link.href)) or ABOUT_LINK_TEXT.found(link.text):
            return ABOUT_SECTION.result(8, f"Links to {link.href}.")
    return ABOUT_SECTION.failed("No link to an about or company page.")


def check_source_citations(ctx: CheckContext) -> Check:
    count = CITATION_MARKERS.count(ctx.text) + ctx.page.count_tags("cite")
    if count >= CITATION_MARKERS.threshold:
        return SOURCE_CITATIONS.result(12, f"{count} source citations found.")
    return SOURCE_CITATIONS.failed(f"{count} source citations found. Cite your sources.")


def check_external_links(ctx: CheckContext) -> Check:
    count = sum(1 for link in ctx.page.links if link.is_external)
    if count >= MIN_EXTERNAL_LINKS:
        return EXTERNAL_LINKS.result(8, f"{count} links to other domains.")
    if count == 1:
        return EXTERNAL_LINKS.result(4, "1 link to another domain.")
    return EXTERNAL_LINKS.failed("No links to other domains.")
