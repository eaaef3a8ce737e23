"""Technical SEO checks: structured data, meta tags and page performance."""

from bs4 import Tag

from analyzer.checks.base import CheckContext, CheckSpec
from analyzer.extraction.parser import ParsedPage
from analyzer.models import Category, Check

SCHEMA_MARKUP = CheckSpec("schema-markup", Category.TECHNICAL_SEO, "Schema Markup", 20)
META_TITLE = CheckSpec("meta-title", Category.TECHNICAL_SEO, "Meta Title", 10)
META_DESCRIPTION = CheckSpec("meta-description", Category.TECHNICAL_SEO, "Meta Description", 10)
OPEN_GRAPH = CheckSpec("open-graph", Category.TECHNICAL_SEO, "Open Graph Tags", 8)
CANONICAL_URL = CheckSpec("canonical-url", Category.TECHNICAL_SEO, "Canonical URL", 6)
PAGE_SPEED = CheckSpec("page-speed", Category.TECHNICAL_SEO, "Page Load Speed", 10)
MOBILE_VIEWPORT = CheckSpec("mobile-viewport", Category.TECHNICAL_SEO, "Mobile Viewport", 6)
IMAGE_ALT_TEXT = CheckSpec("image-alt-text", Category.TECHNICAL_SEO, "Image Alt Text", 6)

RICH_SCHEMA_TYPES = frozenset(
    [
        "Article",
        "NewsArticle",
        "BlogPosting",
        "FAQPage",
        "HowTo",
        "Product",
        "Review",
        "Organization",
    ]
)
BASIC_SCHEMA_SCORE = 12

TITLE_LENGTH = (30, 60)
DESCRIPTION_LENGTH = (120, 160)
PRESENT_BUT_OFF_LENGTH_SCORE = 5

OPEN_GRAPH_PROPERTIES = ("og:title", "og:description", "og:image")

# (exclusive upper bound in ms, score) from fastest to slowest
PAGE_SPEED_TIERS = ((1500, 10), (3000, 7), (5000, 3))
PAGE_SPEED_PASS_MS = 3000

MIN_ALT_TEXT_RATIO = 0.8


def has_link_rel(page: ParsedPage, rel: str) -> bool:
    """Check for a <link> whose rel list contains `rel`."""
    if page.document is None:
        return False
    for tag in page.document.find_all("link"):
        if not isinstance(tag, Tag):
            continue
        values = tag.get("rel") or []
        if isinstance(values, str):
            values = values.split()
        if rel in (v.lower() for v in values) and tag.get("href"):
            return True
    return False


def check_schema_markup(ctx: CheckContext) -> Check:
    types = ctx.page.schema_types
    rich = sorted(RICH_SCHEMA_TYPES.intersection(types))
    if rich:
        return SCHEMA_MARKUP.result(20, f"Rich structured data found: {', '.join(rich)}.")
    if types:
        return SCHEMA_MARKUP.result(
            BASIC_SCHEMA_SCORE,
            f"Structured data found ({', '.join(types)}). Add Article or FAQPage schema.",
        )
    return SCHEMA_MARKUP.failed("No JSON-LD or microdata structured data found.")


def _check_length(spec: CheckSpec, value: str, bounds: tuple[int, int], label: str) -> Check:
    low, high = bounds
    if not value:
        return spec.failed(f"No {label} found.")
    length = len(value)
    if low <= length <= high:
        return spec.result(spec.max_score, f"{label.capitalize()} is {length} characters.")
    return spec.result(
        PRESENT_BUT_OFF_LENGTH_SCORE,
        f"{label.capitalize()} is {length} characters. Aim for {low}-{high}.",
    )


def check_meta_title(ctx: CheckContext) -> Check:
    return _check_length(META_TITLE, ctx.page.title_tag, TITLE_LENGTH, "title tag")


def check_meta_description(ctx: CheckContext) -> Check:
    return _check_length(
        META_DESCRIPTION, ctx.page.meta_description, DESCRIPTION_LENGTH, "meta description"
    )


def check_open_graph(ctx: CheckContext) -> Check:
    present = [p for p in OPEN_GRAPH_PROPERTIES if ctx.page.find_meta(property=p)]
    missing = [p for p in OPEN_GRAPH_PROPERTIES if p not in present]
    score = int(OPEN_GRAPH.max_score * len(present) / len(OPEN_GRAPH_PROPERTIES) + 0.5)
    if not missing:
        return OPEN_GRAPH.result(score, "og:title, og:description and og:image present.")
    return OPEN_GRAPH.result(score, f"Missing Open Graph tags: {', '.join(missing)}.")


def check_canonical_url(ctx: CheckContext) -> Check:
    if has_link_rel(ctx.page, "canonical"):
        return CANONICAL_URL.result(6, "Canonical URL declared.")
    return CANONICAL_URL.failed('No <link rel="canonical"> found.')


def check_page_speed(ctx: CheckContext) -> Check:
    load_time = ctx.load_time_ms
    score = 0
    for limit, tier_score in PAGE_SPEED_TIERS:
        if load_time < limit:
            score = tier_score
            break
    return PAGE_SPEED.result(
        score, f"Page loaded in {load_time}ms.", passed=load_time < PAGE_SPEED_PASS_MS
    )


def check_mobile_viewport(ctx: CheckContext) -> Check:
    if ctx.page.find_meta(name="viewport"):
        return MOBILE_VIEWPORT.result(6, "Viewport meta tag present.")
    return MOBILE_VIEWPORT.failed("No viewport meta tag found.")


def check_image_alt_text(ctx: CheckContext) -> Check:
    images = ctx.page.images
    if not images:
        return IMAGE_ALT_TEXT.result(6, "No images on the page.")

    with_alt = sum(1 for img in images if img.has_alt_text)
    ratio = with_alt / len(images)
    details = f"{with_alt} of {len(images)} images have alt text."
    if ratio >= MIN_ALT_TEXT_RATIO:
        return IMAGE_ALT_TEXT.result(6, details)
    return IMAGE_ALT_TEXT.failed(details)
