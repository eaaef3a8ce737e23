"""HTML parsing into a read-only page view.

BeautifulSoup's `html.parser` backend tolerates tag soup: unknown tags are
kept as plain elements and unclosed tags are closed by the tree builder, so
parsing never fails on malformed markup.
"""

import re
from dataclasses import dataclass, field
from functools import cached_property

from bs4 import BeautifulSoup, Comment, Tag

from analyzer.extraction.schema import extract_schema_types
from analyzer.extraction.text import normalize_whitespace, split_words
from analyzer.url import extract_domain, is_external_link

# Subtrees excluded from visible text
HIDDEN_TAGS = ("script", "style", "noscript", "iframe", "template")

_HEADING_RE = re.compile(r"^h([1-6])$")


@dataclass(frozen=True)
class Heading:
    level: int
    text: str


@dataclass(frozen=True)
class Link:
    href: str
    text: str
    is_external: bool


@dataclass(frozen=True)
class Image:
    has_alt_text: bool
    alt_text: str


@dataclass
class ParsedPage:
    """Derived view over a parsed document."""

    url: str
    domain: str
    title: str
    description: str
    title_tag: str
    meta_description: str
    visible_text: str
    lang: str | None
    headings: list[Heading] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    images: list[Image] = field(default_factory=list)
    schema_types: list[str] = field(default_factory=list)
    raw_html: str = field(default="", repr=False)
    document: BeautifulSoup | None = field(default=None, repr=False, compare=False)

    @cached_property
    def word_count(self) -> int:
        return len(split_words(self.visible_text))

    @cached_property
    def text_lower(self) -> str:
        return self.visible_text.lower()

    @cached_property
    def html_lower(self) -> str:
        return self.raw_html.lower()

    def heading_count(self, level: int) -> int:
        return sum(1 for h in self.headings if h.level == level)

    def heading_texts(self, max_level: int = 6) -> list[str]:
        return [h.text for h in self.headings if h.level <= max_level and h.text]

    def count_tags(self, *names: str) -> int:
        """Count elements with any of the given tag names."""
        if self.document is None:
            return 0
        return len(self.document.find_all(list(names)))

    def find_meta(self, *, name: str | None = None, property: str | None = None) -> str | None:
        if self.document is None:
            return None
        return get_meta_content(self.document, name=name, property=property)


def get_meta_content(
    soup: BeautifulSoup, name: str | None = None, property: str | None = None
) -> str | None:
    """Get content from a meta tag by name or property (case-insensitive)."""
    if name:
        tag = soup.find("meta", attrs={"name": re.compile(f"^{re.escape(name)}$", re.I)})
    elif property:
        tag = soup.find("meta", attrs={"property": re.compile(f"^{re.escape(property)}$", re.I)})
    else:
        return None

    if isinstance(tag, Tag) and tag.get("content"):
        content = tag["content"]
        return content.strip() if isinstance(content, str) else " ".join(content).strip()
    return None


def extract_visible_text(html: str) -> str:
    """Extract readable body text, skipping script/style/noscript/iframe content."""
    soup = BeautifulSoup(html, "html.parser")

    for tag in soup.find_all(HIDDEN_TAGS):
        tag.decompose()

    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()

    root = soup.body
    if root is None:
        # No <body>: drop head-only content so the title isn't counted as text
        for tag in soup.find_all(["head", "title", "meta", "link"]):
            tag.decompose()
        root = soup

    return normalize_whitespace(root.get_text(separator=" ", strip=True))


def _extract_title(soup: BeautifulSoup) -> tuple[str, str]:
    """Return (display title, <title> text)."""
    title_tag = ""
    tag = soup.find("title")
    if tag:
        title_tag = normalize_whitespace(tag.get_text())

    og_title = get_meta_content(soup, property="og:title")
    if og_title:
        return og_title, title_tag
    if title_tag:
        return title_tag, title_tag

    h1 = soup.find("h1")
    if h1:
        return normalize_whitespace(h1.get_text()), title_tag
    return "", title_tag


def _extract_headings(soup: BeautifulSoup) -> list[Heading]:
    headings = []
    for tag in soup.find_all(_HEADING_RE):
        match = _HEADING_RE.match(tag.name)
        if match:
            headings.append(
                Heading(level=int(match.group(1)), text=normalize_whitespace(tag.get_text()))
            )
    return headings


def _extract_links(soup: BeautifulSoup, url: str) -> list[Link]:
    links = []
    for a_tag in soup.find_all("a", href=True):
        href = a_tag["href"]
        if isinstance(href, list):
            href = " ".join(href)
        href = href.strip()
        links.append(
            Link(
                href=href,
                text=normalize_whitespace(a_tag.get_text()),
                is_external=is_external_link(href, url),
            )
        )
    return links


def _extract_images(soup: BeautifulSoup) -> list[Image]:
    images = []
    for img in soup.find_all("img"):
        alt = img.get("alt")
        alt_text = alt.strip() if isinstance(alt, str) else ""
        images.append(Image(has_alt_text=bool(alt_text), alt_text=alt_text))
    return images


def parse_page(html: str, url: str) -> ParsedPage:
    """
    Parse raw HTML into a ParsedPage.

    Args:
        html: Raw HTML (may be malformed or empty)
        url: Source URL, used for the domain and external-link classification

    Returns:
        ParsedPage view over the document
    """
    soup = BeautifulSoup(html or "", "html.parser")

    title, title_tag = _extract_title(soup)
    meta_description = get_meta_content(soup, name="description") or ""
    description = get_meta_content(soup, property="og:description") or meta_description

    html_tag = soup.find("html")
    lang = None
    if isinstance(html_tag, Tag):
        lang_val = html_tag.get("lang") or html_tag.get("xml:lang")
        lang = lang_val.strip() if isinstance(lang_val, str) and lang_val.strip() else None

    return ParsedPage(
        url=url,
        domain=extract_domain(url),
        title=title,
        description=description,
        title_tag=title_tag,
        meta_description=meta_description,
        visible_text=extract_visible_text(html or ""),
        lang=lang,
        headings=_extract_headings(soup),
        links=_extract_links(soup, url),
        images=_extract_images(soup),
        schema_types=extract_schema_types(soup),
        raw_html=html or "",
        document=soup,
    )
