"""Content structure checks: headings, length, FAQ and lists."""

from analyzer.checks.base import CheckContext, CheckSpec
from analyzer.checks.patterns import FAQ_KEYWORD, QUESTION_ANSWER
from analyzer.models import Category, Check

SINGLE_H1 = CheckSpec("single-h1", Category.CONTENT_STRUCTURE, "Single H1 Heading", 10)
SUBHEADINGS = CheckSpec("subheadings", Category.CONTENT_STRUCTURE, "Subheading Structure", 10)
CONTENT_LENGTH = CheckSpec("content-length", Category.CONTENT_STRUCTURE, "Content Length", 10)
FAQ_SECTION = CheckSpec("faq-section", Category.CONTENT_STRUCTURE, "FAQ Section", 20)
HAS_LISTS = CheckSpec("has-lists", Category.CONTENT_STRUCTURE, "Lists and Bullet Points", 6)

# (minimum words, score) from best to worst
CONTENT_LENGTH_TIERS = ((1500, 10), (800, 7), (400, 3))
CONTENT_LENGTH_PASS = 800

FAQ_SCHEMA_TYPES = frozenset(["FAQPage", "QAPage"])
FAQ_TEXT_SCORE = 15
MIN_LISTS = 2


def check_single_h1(ctx: CheckContext) -> Check:
    count = ctx.page.heading_count(1)
    if count == 1:
        return SINGLE_H1.result(10, "Page has exactly one H1 heading.")
    if count == 0:
        return SINGLE_H1.failed("No H1 heading found. Add one H1 that states the page topic.")
    return SINGLE_H1.failed(f"Found {count} H1 headings. Use exactly one.")


def check_subheadings(ctx: CheckContext) -> Check:
    h2 = ctx.page.heading_count(2)
    h3 = ctx.page.heading_count(3)
    details = f"{h2} H2 and {h3} H3 headings."

    if h2 >= 2 and h3 >= 1:
        return SUBHEADINGS.result(10, details, passed=True)
    if h2 >= 2:
        return SUBHEADINGS.result(7, details + " Add H3 subsections for depth.", passed=True)
    if h2 == 1:
        return SUBHEADINGS.result(5, details + " Use at least two H2 sections.", passed=False)
    return SUBHEADINGS.failed(details + " Break content into H2 sections.")


def check_content_length(ctx: CheckContext) -> Check:
    word_count = ctx.page.word_count
    score = 0
    for minimum, tier_score in CONTENT_LENGTH_TIERS:
        if word_count >= minimum:
            score = tier_score
            break

    return CONTENT_LENGTH.result(
        score,
        f"{word_count} words. Comprehensive pages have {CONTENT_LENGTH_PASS}+ words.",
        passed=word_count >= CONTENT_LENGTH_PASS,
    )


def check_faq_section(ctx: CheckContext) -> Check:
    if FAQ_SCHEMA_TYPES.intersection(ctx.page.schema_types):
        return FAQ_SECTION.result(20, "FAQ section with FAQPage structured data.")

    keyword = FAQ_KEYWORD.found(ctx.text) or any(
        FAQ_KEYWORD.found(h) for h in ctx.page.heading_texts()
    )
    qa_pairs = QUESTION_ANSWER.count(ctx.text)

    if keyword or qa_pairs >= QUESTION_ANSWER.threshold:
        return FAQ_SECTION.result(
            FAQ_TEXT_SCORE,
            f"FAQ content found ({qa_pairs} question-answer pairs). Add FAQPage schema.",
            passed=True,
        )
    return FAQ_SECTION.failed("No FAQ section found.")


def check_has_lists(ctx: CheckContext) -> Check:
    count = ctx.page.count_tags("ul", "ol")
    if count >= MIN_LISTS:
        return HAS_LISTS.result(6, f"{count} lists found.")
    return HAS_LISTS.failed(
        f"{count} lists found. Use bullet or numbered lists for scannable content."
    )
