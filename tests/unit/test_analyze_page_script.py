"""Tests for the analyze_page command-line script."""

import importlib.util
import json
from pathlib import Path
from types import ModuleType

import pytest

from analyzer.pipeline import analyze_html
from api.exceptions import FetchTimeoutError
from tests.fixtures import PAGE_URL, rich_article_html

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "scripts" / "analyze_page.py"


@pytest.fixture
def script() -> ModuleType:
    spec = importlib.util.spec_from_file_location("analyze_page", SCRIPT_PATH)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def fake_analyze(script: ModuleType, monkeypatch: pytest.MonkeyPatch) -> list[dict]:
    """Replace the network-backed pipeline with a canned rich-page result."""
    calls: list[dict] = []

    async def analyze_url(url: str, include_ai: bool = True, settings=None, **kwargs):
        calls.append({"url": url, "include_ai": include_ai, "settings": settings})
        return analyze_html(rich_article_html(), url, load_time_ms=300)

    monkeypatch.setattr(script, "analyze_url", analyze_url)
    return calls


class TestBuildParser:
    def test_defaults(self, script: ModuleType) -> None:
        args = script.build_parser().parse_args([PAGE_URL])

        assert args.url == PAGE_URL
        assert (args.no_ai, args.json, args.timeout, args.verbose) == (False, False, None, False)

    def test_flags(self, script: ModuleType) -> None:
        args = script.build_parser().parse_args([PAGE_URL, "--no-ai", "--json", "--timeout", "5"])

        assert args.no_ai is True
        assert args.json is True
        assert args.timeout == 5.0


class TestFormatSummary:
    def test_summary_sections(self, script: ModuleType) -> None:
        result = analyze_html(rich_article_html(), PAGE_URL, load_time_ms=300)

        text = script.format_summary(result)

        assert f"AI READINESS: {PAGE_URL}" in text
        assert f"Grade: {result.grade}" in text
        assert "CATEGORIES:" in text
        assert "content_structure" in text
        assert "[PASS] Single H1 Heading" in text


class TestMain:
    """Tests for the main entrypoint."""

    def test_summary_output(
        self, script: ModuleType, fake_analyze: list[dict], capsys: pytest.CaptureFixture
    ) -> None:
        exit_code = script.main([PAGE_URL])

        assert exit_code == script.EXIT_OK
        assert "CHECKS:" in capsys.readouterr().out
        assert fake_analyze[0]["include_ai"] is True

    def test_json_output(
        self, script: ModuleType, fake_analyze: list[dict], capsys: pytest.CaptureFixture
    ) -> None:
        exit_code = script.main([PAGE_URL, "--json", "--no-ai"])

        assert exit_code == script.EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert data["url"] == PAGE_URL
        assert len(data["checks"]) == 28
        assert fake_analyze[0]["include_ai"] is False

    def test_timeout_override(self, script: ModuleType, fake_analyze: list[dict]) -> None:
        script.main([PAGE_URL, "--timeout", "7.5"])

        assert fake_analyze[0]["settings"].fetch_timeout_seconds == 7.5

    def test_error_exit(
        self,
        script: ModuleType,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture,
    ) -> None:
        async def analyze_url(url: str, **kwargs):
            raise FetchTimeoutError(url, timeout_seconds=20.0)

        monkeypatch.setattr(script, "analyze_url", analyze_url)

        exit_code = script.main([PAGE_URL])

        assert exit_code == script.EXIT_FAILED
        assert "Error: The page took too long" in capsys.readouterr().err
