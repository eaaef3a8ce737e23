"""Citation-preview simulation and question extraction.

A citation preview frames a high-signal sentence from the page as the
answer an assistant might give to a plausible query.
"""

import re

from analyzer.checks.citation_readiness import is_quotable
from analyzer.checks.patterns import DEFINITION_PHRASE, DEFINITION_SENTENCE, STATISTICS
from analyzer.extraction.parser import ParsedPage
from analyzer.extraction.text import normalize_whitespace, sentence_body, split_sentences
from analyzer.models import CitationPreview, Confidence

MAX_PREVIEWS = 3
MAX_QUESTIONS = 6
MAX_BODY_QUESTIONS = 5

PREVIEW_MIN_CHARS = 40
PREVIEW_MAX_CHARS = 250

QUESTION_RE = re.compile(r"\b(?:what|how|why|when|where|who|which)\s+[^.?!]+\?", re.I)
TITLE_QUESTION_RE = re.compile(r"\b(?:how to|what is|what are|why)\b", re.I)

# Subject of a definition: text before "is a", "refers to", ...
_SUBJECT_RE = re.compile(
    r"^(.{2,60}?)\s+(?:is an?|is the|are|refers to|means|is defined as|is a type of)\s", re.I
)


def page_topic(page: ParsedPage) -> str:
    """Best short label for what the page is about."""
    for candidate in (page.title, *page.heading_texts(max_level=1)):
        if candidate:
            # Drop site-name suffixes like "Topic | Brand"
            return re.split(r"\s+[|\-–]\s+", candidate)[0].strip()
    return page.domain


def _definition_subject(sentence: str) -> str | None:
    match = _SUBJECT_RE.match(sentence)
    if not match:
        return None
    subject = match.group(1).strip()
    return re.sub(r"^(?:the|a|an)\s+", "", subject, flags=re.I) or None


def _candidate_sentences(text: str) -> list[str]:
    return [
        sentence_body(s)
        for s in split_sentences(text)
        if not s.endswith("?") and PREVIEW_MIN_CHARS <= len(s) <= PREVIEW_MAX_CHARS
    ]


def simulate_citations(page: ParsedPage) -> list[CitationPreview]:
    """
    Pick up to three sentences an assistant would likely quote.

    Statistic-backed sentences get high confidence, definitions medium. If
    neither exists, the first quotable sentence is used with low confidence.
    """
    topic = page_topic(page)
    previews: list[CitationPreview] = []
    seen: set[str] = set()

    def add(query: str, sentence: str, confidence: Confidence) -> None:
        if sentence in seen or len(previews) >= MAX_PREVIEWS:
            return
        seen.add(sentence)
        previews.append(
            CitationPreview(
                query=query,
                citation=sentence + ".",
                source=page.domain,
                confidence=confidence,
            )
        )

    sentences = _candidate_sentences(page.visible_text)

    for sentence in sentences:
        if STATISTICS.found(sentence):
            add(f"What are the key statistics about {topic}?", sentence, Confidence.HIGH)

    for sentence in sentences:
        if DEFINITION_SENTENCE.found(sentence) or DEFINITION_PHRASE.found(sentence):
            subject = _definition_subject(sentence) or topic
            add(f"What is {subject}?", sentence, Confidence.MEDIUM)

    if not previews:
        for sentence in sentences:
            if is_quotable(sentence):
                add(f"Tell me about {topic}", sentence, Confidence.LOW)
                break

    return previews


def extract_questions(text: str, title: str) -> list[str]:
    """Questions the page appears to answer, from its title and body."""
    questions: list[str] = []

    title = normalize_whitespace(title)
    if title and TITLE_QUESTION_RE.search(title):
        questions.append(title if title.endswith("?") else title + "?")

    body_questions = [normalize_whitespace(m.group()) for m in QUESTION_RE.finditer(text)]
    questions.extend(body_questions[:MAX_BODY_QUESTIONS])

    unique: list[str] = []
    seen: set[str] = set()
    for question in questions:
        key = question.lower()
        if key not in seen:
            seen.add(key)
            unique.append(question)
    return unique[:MAX_QUESTIONS]
