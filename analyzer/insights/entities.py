"""Named-entity extraction by capitalized n-gram frequency.

No NLP model: runs of capitalized words are counted, and anything mentioned
at least twice is kept and typed from keywords in its surrounding sentence.
Output order is fully determined by the text.
"""

import re
from collections import Counter

from analyzer.extraction.text import split_sentences
from analyzer.models import EntityType, ExtractedEntity

MIN_MENTIONS = 2
MAX_ENTITIES = 10
MAX_CONTEXT_CHARS = 150

# One to four capitalized tokens in a row
CAPITALIZED_RUN_RE = re.compile(
    r"\b[A-Z][A-Za-z0-9&'.-]*[A-Za-z0-9](?:\s+[A-Z][A-Za-z0-9&'-]*[A-Za-z0-9]){0,3}\b"
)

# Capitalized only because they start a sentence or a heading
STOPWORDS = frozenset(
    """
    a an the this that these those it its in on at to for of and or but if when
    what why how who where which while with without from by as is are was were be
    you your we our they their he she his her i my me us there here then than so
    also just all any each every some most more many much no not yes do does did
    can could should would will may might must new first last next key faq faqs
    """.split()
)

MONTHS = frozenset(
    """
    january february march april may june july august september october november
    december monday tuesday wednesday thursday friday saturday sunday
    """.split()
)

ORGANIZATION_SUFFIXES = (
    "inc",
    "inc.",
    "corp",
    "corp.",
    "llc",
    "ltd",
    "ltd.",
    "company",
    "group",
    "university",
    "institute",
    "association",
    "foundation",
    "agency",
    "bank",
)

# Checked in order; first match wins
CONTEXT_KEYWORDS: tuple[tuple[EntityType, re.Pattern[str]], ...] = (
    (
        EntityType.ORGANIZATION,
        re.compile(
            r"\b(?:company|companies|organization|corporation|startup|firm|founded|"
            r"headquartered|acquired|nonprofit)\b",
            re.I,
        ),
    ),
    (
        EntityType.PERSON,
        re.compile(
            r"\b(?:said|says|ceo|founder|author|wrote|dr\.|professor|according to|"
            r"explains|told)\b",
            re.I,
        ),
    ),
    (
        EntityType.LOCATION,
        re.compile(
            r"\b(?:city|country|state|located|based in|region|capital|province)\b", re.I
        ),
    ),
    (
        EntityType.PRODUCT,
        re.compile(
            r"\b(?:app|software|platform|tool|product|device|model|version|plugin|service)\b",
            re.I,
        ),
    ),
)


def _clean_candidate(raw: str) -> str | None:
    tokens = raw.split()
    while tokens and tokens[0].lower().rstrip(".") in STOPWORDS:
        tokens.pop(0)
    while tokens and tokens[-1].lower().rstrip(".") in STOPWORDS:
        tokens.pop()
    if not tokens:
        return None
    name = " ".join(tokens).rstrip(".")
    if len(name) < 2 or name.isdigit():
        return None
    return name


def _classify(name: str, context: str) -> EntityType:
    words = name.lower().split()
    if any(w in MONTHS for w in words):
        return EntityType.DATE
    if words[-1] in ORGANIZATION_SUFFIXES:
        return EntityType.ORGANIZATION
    for entity_type, pattern in CONTEXT_KEYWORDS:
        if pattern.search(context):
            if entity_type == EntityType.PERSON and not 2 <= len(words) <= 3:
                continue
            return entity_type
    return EntityType.CONCEPT


def extract_entities(text: str) -> list[ExtractedEntity]:
    """
    Find recurring named entities in visible text.

    Args:
        text: Visible page text

    Returns:
        Up to ten entities, most mentioned first, ties broken by name
    """
    counts: Counter[str] = Counter()
    first_context: dict[str, str] = {}

    for sentence in split_sentences(text):
        for match in CAPITALIZED_RUN_RE.finditer(sentence):
            name = _clean_candidate(match.group())
            if name is None:
                continue
            counts[name] += 1
            first_context.setdefault(name, sentence[:MAX_CONTEXT_CHARS])

    entities = [
        ExtractedEntity(
            name=name,
            type=_classify(name, first_context[name]),
            mentions=mentions,
            context=first_context[name],
        )
        for name, mentions in counts.items()
        if mentions >= MIN_MENTIONS
    ]
    entities.sort(key=lambda e: (-e.mentions, e.name))
    return entities[:MAX_ENTITIES]
