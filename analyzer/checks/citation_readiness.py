"""Citation readiness checks.

These look at how easily an assistant can lift a precise, attributable
statement out of the page: numbers, short declarative sentences, evidence
phrasing and dates.
"""

from analyzer.checks.base import CheckContext, CheckSpec
from analyzer.checks.patterns import (
    CLEAR_SENTENCE_RATIO,
    DATES,
    EVIDENCE_PHRASES,
    HEDGING,
    MAX_COMMAS_PER_SENTENCE,
    MAX_WORDS_PER_SENTENCE,
    QUOTABLE_MAX_WORDS,
    QUOTABLE_MIN_COUNT,
    QUOTABLE_MIN_WORDS,
    STATISTICS,
)
from analyzer.extraction.text import is_question, split_words
from analyzer.models import Category, Check

STATISTICS_CHECK = CheckSpec("statistics", Category.CITATION_READINESS, "Statistics and Data", 15)
QUOTABLE_STATEMENTS = CheckSpec(
    "quotable-statements", Category.CITATION_READINESS, "Quotable Statements", 15
)
SPECIFIC_CLAIMS = CheckSpec("specific-claims", Category.CITATION_READINESS, "Specific Claims", 12)
SENTENCE_CLARITY = CheckSpec("sentence-clarity", Category.CITATION_READINESS, "Sentence Clarity", 8)
DATES_TIMELINES = CheckSpec(
    "dates-timelines", Category.CITATION_READINESS, "Dates and Timelines", 8
)


def is_quotable(sentence: str) -> bool:
    """Declarative, 8-25 words, no hedging."""
    if is_question(sentence):
        return False
    word_count = len(split_words(sentence))
    if not QUOTABLE_MIN_WORDS <= word_count <= QUOTABLE_MAX_WORDS:
        return False
    return not HEDGING.found(sentence)


def is_clear(sentence: str) -> bool:
    return (
        sentence.count(",") <= MAX_COMMAS_PER_SENTENCE
        and len(split_words(sentence)) <= MAX_WORDS_PER_SENTENCE
    )


def check_statistics(ctx: CheckContext) -> Check:
    count = STATISTICS.count(ctx.text)
    if count >= STATISTICS.threshold:
        return STATISTICS_CHECK.result(15, f"{count} statistics or data points found.")
    return STATISTICS_CHECK.failed(
        f"{count} statistics found. Include at least {STATISTICS.threshold} concrete numbers."
    )


def check_quotable_statements(ctx: CheckContext) -> Check:
    count = sum(1 for s in ctx.sentences if is_quotable(s))
    if count >= QUOTABLE_MIN_COUNT:
        return QUOTABLE_STATEMENTS.result(15, f"{count} quotable statements found.")
    return QUOTABLE_STATEMENTS.failed(
        f"{count} quotable statements found. Write short, confident declarative sentences."
    )


def check_specific_claims(ctx: CheckContext) -> Check:
    count = EVIDENCE_PHRASES.count(ctx.text)
    if count >= EVIDENCE_PHRASES.threshold:
        return SPECIFIC_CLAIMS.result(12, f"{count} evidence-backed claims found.")
    return SPECIFIC_CLAIMS.failed(
        f"{count} evidence-backed claims found. Attribute claims to research or data."
    )


def check_sentence_clarity(ctx: CheckContext) -> Check:
    sentences = ctx.sentences
    if not sentences:
        return SENTENCE_CLARITY.failed("No sentences to evaluate.")

    clear = sum(1 for s in sentences if is_clear(s))
    ratio = clear / len(sentences)
    percent = int(ratio * 100 + 0.5)
    if ratio >= CLEAR_SENTENCE_RATIO:
        return SENTENCE_CLARITY.result(8, f"{percent}% of sentences are clear and concise.")
    return SENTENCE_CLARITY.failed(
        f"Only {percent}% of sentences are clear. Shorten long, comma-heavy sentences."
    )


def check_dates_timelines(ctx: CheckContext) -> Check:
    count = DATES.count(ctx.text)
    if count >= DATES.threshold:
        return DATES_TIMELINES.result(8, f"{count} date references found.")
    return DATES_TIMELINES.failed(f"{count} date references found. Anchor facts in time.")
