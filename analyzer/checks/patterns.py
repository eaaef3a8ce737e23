"""Pattern table for text and markup heuristics.

Every regex used by the check battery lives here with its threshold, so a
pattern's intent can be tested on its own. Patterns are English-only.
Thresholds are empirical tuning values; change them only with a reason.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class SignalPattern:
    """A named regex plus the match count needed to count as present."""

    id: str
    pattern: re.Pattern[str]
    description: str
    threshold: int = 1

    def count(self, text: str) -> int:
        return sum(1 for _ in self.pattern.finditer(text))

    def found(self, text: str) -> bool:
        return self.pattern.search(text) is not None

    def meets_threshold(self, text: str) -> bool:
        return self.count(text) >= self.threshold


_MONTHS = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)"
)

# =============================================================================
# Content structure
# =============================================================================

FAQ_KEYWORD = SignalPattern(
    id="faq_keyword",
    pattern=re.compile(r"\bfaqs?\b|\bfrequently asked\b", re.I),
    description="FAQ heading or label",
)

QUESTION_ANSWER = SignalPattern(
    id="question_answer",
    pattern=re.compile(
        r"\b(?:what|how|why|when|where|who|which|can|does|do|is|are|should)\b"
        r"[^.?!]{3,150}\?\s+[A-Za-z][^.?!]{10,}",
        re.I,
    ),
    description="A question immediately followed by an answer sentence",
    threshold=3,
)

# =============================================================================
# Citation readiness
# =============================================================================

STATISTICS = SignalPattern(
    id="statistics",
    pattern=re.compile(
        r"\d+(?:\.\d+)?\s?%"
        r"|[$€£]\s?\d[\d,]*(?:\.\d+)?"
        r"|\b\d+(?:\.\d+)?\s*(?:million|billion|trillion|thousand|percent)\b",
        re.I,
    ),
    description="Percentages, currency amounts, or numbers with a scale word",
    threshold=3,
)

HEDGING = SignalPattern(
    id="hedging",
    pattern=re.compile(r"\b(?:might|maybe|perhaps|probably|possibly|could be|may be)\b", re.I),
    description="Hedging words that make a sentence unquotable",
)

EVIDENCE_PHRASES = SignalPattern(
    id="evidence_phrases",
    pattern=re.compile(
        r"\b(?:research (?:shows|suggests|indicates|found|finds)"
        r"|stud(?:y|ies) (?:shows?|found|finds|suggests?|indicates?)"
        r"|according to"
        r"|data (?:shows|suggests|indicates)"
        r"|surveys? (?:found|finds|shows)"
        r"|experts? (?:say|says|agree)"
        r"|evidence (?:shows|suggests)"
        r"|reports? (?:found|finds|shows?))\b",
        re.I,
    ),
    description="Phrases that attribute a claim to evidence",
    threshold=2,
)

DATES = SignalPattern(
    id="dates",
    pattern=re.compile(
        rf"\b{_MONTHS}\.?\s+\d{{1,2}}(?:st|nd|rd|th)?(?:,?\s+\d{{4}})?\b"
        rf"|\b{_MONTHS}\s+(?:19|20)\d{{2}}\b"
        r"|\b\d{4}-\d{2}-\d{2}\b"
        r"|\b\d{1,2}/\d{1,2}/\d{2,4}\b"
        r"|\b(?:in|since|by|until|during|as of)\s+(?:19|20)\d{2}\b"
        r"|\bQ[1-4]\s+(?:19|20)\d{2}\b",
        re.I,
    ),
    description="Calendar dates, ISO dates, or year references",
    threshold=2,
)

# Sentence clarity limits
MAX_COMMAS_PER_SENTENCE = 3
MAX_WORDS_PER_SENTENCE = 35
CLEAR_SENTENCE_RATIO = 0.7

# Quotable statement limits
QUOTABLE_MIN_WORDS = 8
QUOTABLE_MAX_WORDS = 25
QUOTABLE_MIN_COUNT = 5

# =============================================================================
# Credibility
# =============================================================================

AUTHOR_MARKUP = SignalPattern(
    id="author_markup",
    pattern=re.compile(
        r'"author"\s*:|itemprop\s*=\s*["\']author["\']|rel\s*=\s*["\']author["\']', re.I
    ),
    description="Author declared in schema, microdata, or rel=author (raw HTML)",
)

AUTHOR_BYLINE = SignalPattern(
    id="author_byline",
    pattern=re.compile(
        r"\b(?:[Ww]ritten [Bb]y|[Bb]y|[Aa]uthor:?|[Rr]eviewed [Bb]y)\s+"
        r"[A-Z][a-z]+(?:\s+[A-Z]\.)?(?:\s+[A-Z][a-z]+)+"
    ),
    description="Byline such as 'By Jane Doe'",
)

PUBLISH_DATE_MARKUP = SignalPattern(
    id="publish_date_markup",
    pattern=re.compile(
        r'datePublished|article:published_time|<time[^>]+datetime\s*=', re.I
    ),
    description="Machine-readable publish date (raw HTML)",
)

PUBLISH_DATE_TEXT = SignalPattern(
    id="publish_date_text",
    pattern=re.compile(
        rf"\b(?:published|updated|posted|last updated)\s*(?:on|:)?\s*(?:{_MONTHS}\b|\d)",
        re.I,
    ),
    description="Visible 'Published on ...' style date",
)

ABOUT_HREF = SignalPattern(
    id="about_href",
    pattern=re.compile(
        r"(?:^|/)(?:about(?:[_-]?us)?|company|(?:our[_-]?)?team|(?:our[_-]?)?story"
        r"|who[_-]we[_-]are)(?:[/?#.]|$)",
        re.I,
    ),
    description="Link path segment naming an about/company page",
)

ABOUT_LINK_TEXT = SignalPattern(
    id="about_link_text",
    pattern=re.compile(
        r"^\s*(?:about(?:\s+us)?|our\s+(?:team|story|company)|who\s+we\s+are|company)\s*$",
        re.I,
    ),
    description="Link label that is just 'About', 'Our team' and the like",
)

CITATION_MARKERS = SignalPattern(
    id="citation_markers",
    pattern=re.compile(r"\[\d{1,3}\]|\bsources?\s*:|\baccording to\b", re.I),
    description="Footnote markers, 'Source:' labels, attributions",
    threshold=2,
)

# =============================================================================
# AI-specific factors
# =============================================================================

UPFRONT_WORD_WINDOW = 200

DIRECT_ANSWER = SignalPattern(
    id="direct_answer",
    pattern=re.compile(
        r"\b(?:is an?|is the|are|refers to|means|is defined as|simply put|in short"
        r"|the answer is|in summary)\b",
        re.I,
    ),
    description="Direct-answer phrasing in the opening text",
)

DEFINITION_SENTENCE = SignalPattern(
    id="definition_sentence",
    pattern=re.compile(
        r"^[^,;:]{2,80}?\s(?:is an?|is the|are|refers to|means|is defined as)\s", re.I
    ),
    description="Sentence that opens by defining its subject",
)

DEFINITION_PHRASE = SignalPattern(
    id="definition_phrase",
    pattern=re.compile(r"\b(?:is defined as|refers to|is a type of|means)\b", re.I),
    description="Definition language anywhere in a sentence",
)

TOC_KEYWORD = SignalPattern(
    id="toc_keyword",
    pattern=re.compile(
        r"\btable of contents\b|\bin this (?:article|guide|post)\b|\bjump to\b|\bon this page\b",
        re.I,
    ),
    description="Table-of-contents label",
)

TOC_MIN_ANCHORS = 4

SUMMARY_KEYWORD = SignalPattern(
    id="summary_keyword",
    pattern=re.compile(r"\bkey takeaways?\b|\bsummary\b|\btl;?dr\b", re.I),
    description="Summary or key-takeaways section",
)

PAYWALL_TEXT = SignalPattern(
    id="paywall_text",
    pattern=re.compile(
        r"\bsubscribe to (?:continue|read|keep reading|unlock)\b"
        r"|\bsubscribers? only\b|\bfor subscribers\b"
        r"|\bpremium (?:content|article|members?)\b"
        r"|\bsign in to (?:continue|read)\b"
        r"|\bmembers? only\b"
        r"|\bunlock (?:this|the full) (?:article|story|content)\b"
        r"|\bto continue reading\b|\balready a subscriber\b",
        re.I,
    ),
    description="Subscription-gate language in visible text",
)

PAYWALL_MARKUP = SignalPattern(
    id="paywall_markup",
    pattern=re.compile(r'(?:class|id)\s*=\s*["\'][^"\']*\bpaywall', re.I),
    description="Paywall container in markup",
)
