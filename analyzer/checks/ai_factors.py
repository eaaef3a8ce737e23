"""AI-specific factors: answer placement, navigation, access and accessibility."""

from analyzer.checks.base import CheckContext, CheckSpec
from analyzer.checks.patterns import (
    DEFINITION_SENTENCE,
    DIRECT_ANSWER,
    PAYWALL_MARKUP,
    PAYWALL_TEXT,
    SUMMARY_KEYWORD,
    TOC_KEYWORD,
    TOC_MIN_ANCHORS,
    UPFRONT_WORD_WINDOW,
)
from analyzer.extraction.text import first_words
from analyzer.models import Category, Check

UPFRONT_ANSWER = CheckSpec("upfront-answer", Category.AI_SPECIFIC_FACTORS, "Upfront Answer", 15)
TABLE_OF_CONTENTS = CheckSpec(
    "table-of-contents", Category.AI_SPECIFIC_FACTORS, "Table of Contents", 10
)
SUMMARY_SECTION = CheckSpec("summary-section", Category.AI_SPECIFIC_FACTORS, "Summary Section", 12)
NO_PAYWALL = CheckSpec("no-paywall", Category.AI_SPECIFIC_FACTORS, "Content Accessibility", 10)
ACCESSIBILITY = CheckSpec("accessibility", Category.AI_SPECIFIC_FACTORS, "Accessibility", 10)

DIRECT_ANSWER_SCORE = 10
DEFINITION_BONUS = 5

LANG_POINTS = 4
ARIA_LABEL_POINTS = 3
ARIA_ROLE_POINTS = 3
ACCESSIBILITY_PASS = 7


def check_upfront_answer(ctx: CheckContext) -> Check:
    opening = first_words(ctx.text, UPFRONT_WORD_WINDOW)
    if not DIRECT_ANSWER.found(opening):
        return UPFRONT_ANSWER.failed(
            f"No direct answer in the first {UPFRONT_WORD_WINDOW} words. Lead with the answer."
        )

    score = DIRECT_ANSWER_SCORE
    details = f"Direct answer found in the first {UPFRONT_WORD_WINDOW} words."
    if ctx.sentences and DEFINITION_SENTENCE.found(ctx.sentences[0]):
        score += DEFINITION_BONUS
        details += " The opening sentence is a definition."
    return UPFRONT_ANSWER.result(score, details, passed=True)


def check_table_of_contents(ctx: CheckContext) -> Check:
    if TOC_KEYWORD.found(ctx.text):
        return TABLE_OF_CONTENTS.result(10, "Table of contents found.")

    anchors = sum(1 for link in ctx.page.links if link.href.startswith("#") and len(link.href) > 1)
    if anchors >= TOC_MIN_ANCHORS:
        return TABLE_OF_CONTENTS.result(10, f"{anchors} same-page anchor links found.")
    return TABLE_OF_CONTENTS.failed("No table of contents or jump links found.")


def check_summary_section(ctx: CheckContext) -> Check:
    if SUMMARY_KEYWORD.found(ctx.text):
        return SUMMARY_SECTION.result(12, "Summary or key takeaways section found.")
    return SUMMARY_SECTION.failed("No summary or key takeaways section.")


def check_no_paywall(ctx: CheckContext) -> Check:
    if PAYWALL_TEXT.found(ctx.text) or PAYWALL_MARKUP.found(ctx.page.raw_html):
        return NO_PAYWALL.failed("Paywall or subscription gate detected.")
    return NO_PAYWALL.result(10, "No paywall detected.")


def check_accessibility(ctx: CheckContext) -> Check:
    score = 0
    found = []

    if ctx.page.lang:
        score += LANG_POINTS
        found.append(f"lang={ctx.page.lang}")

    document = ctx.page.document
    if document is not None:
        if document.find(attrs={"aria-label": True}) or document.find(
            attrs={"aria-labelledby": True}
        ):
            score += ARIA_LABEL_POINTS
            found.append("ARIA labels")
        if document.find(attrs={"role": True}):
            score += ARIA_ROLE_POINTS
            found.append("ARIA roles")

    details = f"Found: {', '.join(found)}." if found else "No lang attribute or ARIA markup."
    return ACCESSIBILITY.result(score, details, passed=score >= ACCESSIBILITY_PASS)
