"""Plain-text segmentation helpers shared by checks and insights."""

import re

# A sentence runs up to (and includes) a run of terminators, or to end of text
SENTENCE_RE = re.compile(r"[^.!?]+(?:[.!?]+|$)")
WHITESPACE_RE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces."""
    return WHITESPACE_RE.sub(" ", text).strip()


def split_words(text: str) -> list[str]:
    """Split on whitespace, dropping empty tokens."""
    return [w for w in text.split() if w]


def split_sentences(text: str) -> list[str]:
    """
    Split text on runs of `.`, `!` and `?`.

    Each sentence keeps its terminator so callers can tell questions
    from statements. Whitespace-only fragments are dropped.
    """
    sentences = []
    for match in SENTENCE_RE.finditer(text):
        sentence = match.group().strip()
        if sentence.rstrip(".!?").strip():
            sentences.append(sentence)
    return sentences


def sentence_body(sentence: str) -> str:
    """Sentence text without its terminator."""
    return sentence.rstrip(".!?").strip()


def is_question(sentence: str) -> bool:
    return sentence.endswith("?")


def first_words(text: str, count: int) -> str:
    """The first `count` words of text, rejoined with spaces."""
    return " ".join(split_words(text)[:count])
