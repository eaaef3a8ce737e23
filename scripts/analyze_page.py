"""Analyze a single page from the command line.

Usage:
    python scripts/analyze_page.py https://example.com/article
    python scripts/analyze_page.py https://example.com --no-ai --json
    python scripts/analyze_page.py https://example.com --timeout 10
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from analyzer.models import AnalysisResult  # noqa: E402
from analyzer.pipeline import analyze_url  # noqa: E402
from api.config import get_settings  # noqa: E402
from api.exceptions import AnalyzerError  # noqa: E402
from api.logging import setup_logging  # noqa: E402

EXIT_OK = 0
EXIT_FAILED = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Score a web page for AI search readiness")
    parser.add_argument("url", help="Absolute http(s) URL to analyze")
    parser.add_argument(
        "--no-ai",
        action="store_true",
        help="Skip the narrative analysis even if an API key is configured",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full result as JSON instead of a summary",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Fetch timeout in seconds (default from FETCH_TIMEOUT_SECONDS)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def format_summary(result: AnalysisResult) -> str:
    """Human-readable report."""
    lines = [
        "=" * 72,
        f"AI READINESS: {result.url}",
        "=" * 72,
        f"Score: {result.score}/100  Grade: {result.grade}",
    ]
    if result.narrative_analysis is not None:
        lines.append(
            f"  (rule-based {result.rule_based_score}, "
            f"AI {result.narrative_analysis.ai_readiness_score})"
        )

    meta = result.metadata
    lines += [
        f"Title: {meta.title or '-'}",
        f"Words: {meta.word_count}  Load time: {meta.load_time_ms}ms  "
        f"Readability: {meta.readability_score} ({meta.readability_grade})",
        "",
        "CATEGORIES:",
    ]
    for category, score in result.categories.items():
        lines.append(
            f"  {category.value:<22} {score.score:>3}/{score.max_score:<3} "
            f"{score.percentage:>3}%  {score.status.value}"
        )

    lines += ["", "CHECKS:"]
    for check in result.checks:
        mark = "PASS" if check.passed else "FAIL"
        lines.append(
            f"  [{mark}] {check.name:<26} {check.score:>2}/{check.max_score:<2} {check.details}"
        )

    if result.top_recommendations:
        lines += ["", "TOP RECOMMENDATIONS:"]
        for rec in result.top_recommendations:
            lines.append(f"  [{rec.priority.value}] {rec.title}: {rec.how_to_fix}")

    lines.append("=" * 72)
    return "\n".join(lines)


async def run(args: argparse.Namespace) -> int:
    settings = get_settings()
    if args.timeout is not None:
        settings = settings.model_copy(update={"fetch_timeout_seconds": args.timeout})

    try:
        result = await analyze_url(args.url, include_ai=not args.no_ai, settings=settings)
    except AnalyzerError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_FAILED

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(format_summary(result))
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level="DEBUG" if args.verbose else "WARNING")
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
