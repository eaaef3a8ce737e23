"""Prompt construction and response parsing for the narrative analyzer."""

import json
import re

from pydantic import ValidationError

from analyzer.narrative.models import NarrativeAnalysis, NarrativeRequest

TRUNCATION_MARKER = "\n\n[Content truncated for analysis...]"
MAX_PROMPT_HEADINGS = 10

_CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.I)

RESPONSE_SHAPE = """{
  "summary": "2-3 sentence assessment of how AI-ready this content is",
  "aiReadinessScore": <number 0-100>,
  "contentUnderstanding": {
    "mainTopic": "...", "targetAudience": "...", "contentType": "...",
    "keyMessages": ["3-5 main points"]
  },
  "citationSimulation": {
    "likelyQueries": ["5-7 queries where this page could be cited"],
    "sampleCitations": [
      {"userQuery": "...", "aiResponse": "...", "citedText": "...",
       "confidence": "high|medium|low"}
    ]
  },
  "improvements": [
    {"category": "content|structure|credibility|technical", "issue": "...",
     "recommendation": "...", "priority": "critical|high|medium|low", "exampleFix": "..."}
  ],
  "missingContent": [{"topic": "...", "reason": "...", "suggestedContent": "..."}],
  "rewriteSuggestions": [{"original": "...", "improved": "...", "reason": "..."}],
  "competitiveAnalysis": {"strengths": [], "weaknesses": [], "opportunities": []}
}"""


class ResponseParseError(ValueError):
    """The service's reply was not a valid narrative analysis."""


def truncate_content(content: str, max_chars: int) -> str:
    if len(content) <= max_chars:
        return content
    return content[:max_chars] + TRUNCATION_MARKER


def build_prompt(request: NarrativeRequest, max_chars: int) -> str:
    """Render the analysis prompt for one page."""
    headings = ", ".join(request.headings[:MAX_PROMPT_HEADINGS])
    return f"""You are an expert in AI search optimization, helping websites get cited by \
AI assistants like ChatGPT, Perplexity, Claude and Google AI Overviews.

Analyze this webpage as if you were an AI assistant deciding whether to cite it.

Page information:
- URL: {request.url}
- Title: {request.title}
- Word count: {request.word_count}
- Has schema markup: {str(request.has_schema).lower()}
- Has FAQ section: {str(request.has_faq).lower()}
- Has author info: {str(request.has_author).lower()}
- Headings: {headings}

Page content:
{truncate_content(request.content, max_chars)}

Respond with this JSON structure:
{RESPONSE_SHAPE}

Be specific and actionable. Quote actual text when suggesting rewrites. Provide at least \
3 sample citations, 5 improvements and 2 rewrites.

Return ONLY valid JSON, no markdown or other formatting."""


def parse_response_text(text: str) -> NarrativeAnalysis:
    """
    Parse the service's text reply into a NarrativeAnalysis.

    Tolerates a surrounding markdown code fence.

    Raises:
        ResponseParseError: If the reply is not JSON or fails validation
    """
    cleaned = _CODE_FENCE_RE.sub("", text.strip())
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Response is not JSON: {e}") from e
    if not isinstance(data, dict):
        raise ResponseParseError("Response is not a JSON object")
    try:
        return NarrativeAnalysis.model_validate(data)
    except ValidationError as e:
        raise ResponseParseError(f"Response failed validation: {e.error_count()} errors") from e
