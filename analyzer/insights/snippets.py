"""Quotable snippet detection."""

from analyzer.checks.patterns import DEFINITION_PHRASE, EVIDENCE_PHRASES, HEDGING, STATISTICS
from analyzer.extraction.text import is_question, sentence_body, split_sentences
from analyzer.models import QuotableSnippet, SnippetStrength, SnippetType

MAX_STRONG = 5
MAX_WEAK = 3

SNIPPET_MIN_CHARS = 30
SNIPPET_MAX_CHARS = 200

HEDGE_SUGGESTION = (
    'Remove "{word}" and state the point directly, backed by a number or a source.'
)


def _classify(sentence: str) -> SnippetType | None:
    if STATISTICS.found(sentence):
        return SnippetType.STATISTIC
    if DEFINITION_PHRASE.found(sentence):
        return SnippetType.DEFINITION
    if EVIDENCE_PHRASES.found(sentence):
        return SnippetType.CLAIM
    return None


def find_quotable_snippets(text: str) -> list[QuotableSnippet]:
    """
    Sentences an assistant could quote, plus hedged ones worth rewriting.

    Strong snippets contain a statistic, a definition or an evidence-backed
    claim. Weak snippets contain hedging words and carry a suggestion.
    Strong snippets come first.
    """
    strong: list[QuotableSnippet] = []
    weak: list[QuotableSnippet] = []

    for raw in split_sentences(text):
        if is_question(raw):
            continue
        sentence = sentence_body(raw)
        if not SNIPPET_MIN_CHARS < len(sentence) < SNIPPET_MAX_CHARS:
            continue

        hedge = HEDGING.pattern.search(sentence)
        if hedge:
            if len(weak) < MAX_WEAK:
                weak.append(
                    QuotableSnippet(
                        text=sentence,
                        type=_classify(sentence) or SnippetType.CLAIM,
                        strength=SnippetStrength.WEAK,
                        suggestion=HEDGE_SUGGESTION.format(word=hedge.group().lower()),
                    )
                )
            continue

        snippet_type = _classify(sentence)
        if snippet_type is not None and len(strong) < MAX_STRONG:
            strong.append(
                QuotableSnippet(text=sentence, type=snippet_type, strength=SnippetStrength.STRONG)
            )

        if len(strong) >= MAX_STRONG and len(weak) >= MAX_WEAK:
            break

    return strong + weak
