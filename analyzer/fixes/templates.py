"""Remediation templates keyed by check id.

Not every check has a template. A failing check without one is purely
diagnostic and produces no recommendation.
"""

from dataclasses import dataclass

from analyzer.models import Priority, Recommendation


@dataclass(frozen=True)
class FixTemplate:
    """Static remediation guidance for one check."""

    category: str  # Display label, e.g. "Technical"
    priority: Priority
    title: str
    description: str
    impact: str
    how_to_fix: str
    code_example: str | None = None

    def to_recommendation(self, check_id: str) -> Recommendation:
        return Recommendation(
            id=check_id,
            category=self.category,
            priority=self.priority,
            title=self.title,
            description=self.description,
            impact=self.impact,
            how_to_fix=self.how_to_fix,
            code_example=self.code_example,
        )


FIX_TEMPLATES: dict[str, FixTemplate] = {
    "schema-markup": FixTemplate(
        category="Technical",
        priority=Priority.CRITICAL,
        title="Add Schema.org Markup",
        description="Structured data helps AI understand your content.",
        impact="High - significantly improves AI discoverability",
        how_to_fix="Add JSON-LD structured data (Article, FAQPage or HowTo) to your page.",
        code_example=(
            '<script type="application/ld+json">\n'
            '{"@context": "https://schema.org", "@type": "Article",\n'
            ' "headline": "[TITLE]", "author": {"@type": "Person", "name": "[AUTHOR]"},\n'
            ' "datePublished": "[YYYY-MM-DD]"}\n'
            "</script>"
        ),
    ),
    "faq-section": FixTemplate(
        category="Content",
        priority=Priority.HIGH,
        title="Add FAQ Section",
        description="FAQs are highly cited by AI assistants.",
        impact="High - FAQs provide ready-made citation material",
        how_to_fix="Add 5-10 frequently asked questions with concise answers.",
        code_example=(
            "<h2>Frequently Asked Questions</h2>\n"
            "<h3>[QUESTION]?</h3>\n"
            "<p>[ONE OR TWO SENTENCE ANSWER]</p>"
        ),
    ),
    "statistics": FixTemplate(
        category="Content",
        priority=Priority.HIGH,
        title="Add Statistics",
        description="AI prefers citing specific numbers and data.",
        impact="High - statistics make content more authoritative",
        how_to_fix="Include specific percentages, dollar amounts, or measurable outcomes.",
    ),
    "author-info": FixTemplate(
        category="Credibility",
        priority=Priority.HIGH,
        title="Add Author Information",
        description="Author attribution increases credibility.",
        impact="Medium - helps AI trust your content",
        how_to_fix="Add the author's name, bio and credentials, plus author schema markup.",
    ),
    "upfront-answer": FixTemplate(
        category="AI Optimization",
        priority=Priority.HIGH,
        title="Answer Questions Upfront",
        description="AI prefers content that answers directly.",
        impact="High - the first paragraph is often quoted",
        how_to_fix="Start with a clear answer or definition in your first paragraph.",
        code_example="<p>[TOPIC] is [ONE-SENTENCE DEFINITION].</p>",
    ),
    "meta-description": FixTemplate(
        category="Technical",
        priority=Priority.MEDIUM,
        title="Improve Meta Description",
        description="The meta description helps AI understand page content.",
        impact="Medium - improves content discovery",
        how_to_fix="Write a 120-160 character description summarizing your content.",
        code_example='<meta name="description" content="[120-160 CHARACTER SUMMARY]">',
    ),
    "meta-title": FixTemplate(
        category="Technical",
        priority=Priority.MEDIUM,
        title="Optimize Page Title",
        description="The title is the first signal of what a page covers.",
        impact="Medium - clearer topic matching",
        how_to_fix="Write a descriptive 30-60 character <title> containing the main topic.",
        code_example="<title>[PRIMARY TOPIC]: [BENEFIT OR QUALIFIER]</title>",
    ),
    "single-h1": FixTemplate(
        category="Content",
        priority=Priority.MEDIUM,
        title="Use a Single H1 Heading",
        description="One H1 tells AI exactly what the page is about.",
        impact="Medium - clarifies the page topic",
        how_to_fix="Keep exactly one H1 that states the page topic; demote others to H2.",
    ),
    "subheadings": FixTemplate(
        category="Content",
        priority=Priority.MEDIUM,
        title="Add Subheadings",
        description="Headings split content into sections AI can retrieve on their own.",
        impact="Medium - improves passage-level retrieval",
        how_to_fix="Organize content under at least two H2 sections with H3 subsections.",
    ),
    "content-length": FixTemplate(
        category="Content",
        priority=Priority.MEDIUM,
        title="Expand Content Depth",
        description="Thin pages rarely answer enough questions to be cited.",
        impact="Medium - more coverage means more citable passages",
        how_to_fix="Expand the page to 800+ words covering the topic comprehensively.",
    ),
    "publish-date": FixTemplate(
        category="Credibility",
        priority=Priority.MEDIUM,
        title="Show Publish Date",
        description="AI favors content it can tell is current.",
        impact="Medium - freshness is a trust signal",
        how_to_fix="Display a published or updated date and mark it up with datePublished.",
        code_example='<time datetime="[YYYY-MM-DD]">Published [MONTH DAY, YEAR]</time>',
    ),
    "source-citations": FixTemplate(
        category="Credibility",
        priority=Priority.MEDIUM,
        title="Cite Your Sources",
        description="Referenced claims are easier for AI to trust and repeat.",
        impact="Medium - strengthens credibility",
        how_to_fix="Attribute facts with 'according to' phrasing, footnotes or <cite> tags.",
    ),
    "summary-section": FixTemplate(
        category="AI Optimization",
        priority=Priority.MEDIUM,
        title="Add Key Takeaways",
        description="A summary gives AI a compact, quotable overview.",
        impact="Medium - summaries are frequently quoted",
        how_to_fix="Add a 'Key Takeaways' or 'Summary' section with 3-5 bullet points.",
    ),
    "quotable-statements": FixTemplate(
        category="Content",
        priority=Priority.MEDIUM,
        title="Write Quotable Statements",
        description="Short, confident sentences are easy to lift into an answer.",
        impact="Medium - more sentences AI can quote verbatim",
        how_to_fix="Rewrite key points as 8-25 word declarative sentences without hedging.",
    ),
    "open-graph": FixTemplate(
        category="Technical",
        priority=Priority.LOW,
        title="Add Open Graph Tags",
        description="Open Graph tags describe the page to crawlers and previews.",
        impact="Low - improves how the page is summarized",
        how_to_fix="Add og:title, og:description and og:image meta tags.",
        code_example=(
            '<meta property="og:title" content="[TITLE]">\n'
            '<meta property="og:description" content="[DESCRIPTION]">\n'
            '<meta property="og:image" content="[IMAGE URL]">'
        ),
    ),
    "mobile-viewport": FixTemplate(
        category="Technical",
        priority=Priority.LOW,
        title="Add Mobile Viewport",
        description="Mobile-friendly pages are preferred by search systems.",
        impact="Low - baseline technical hygiene",
        how_to_fix="Add a responsive viewport meta tag.",
        code_example='<meta name="viewport" content="width=device-width, initial-scale=1">',
    ),
}


def get_template(check_id: str) -> FixTemplate | None:
    return FIX_TEMPLATES.get(check_id)
