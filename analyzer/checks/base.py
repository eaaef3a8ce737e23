"""Check definitions and the per-analysis input bundle."""

from collections.abc import Callable
from dataclasses import dataclass
from functools import cached_property

from analyzer.extraction.parser import ParsedPage
from analyzer.extraction.text import split_sentences, split_words
from analyzer.models import Category, Check


@dataclass
class CheckContext:
    """Everything a check may inspect. Built once per analysis."""

    page: ParsedPage
    load_time_ms: int

    @cached_property
    def text(self) -> str:
        return self.page.visible_text

    @cached_property
    def text_lower(self) -> str:
        return self.page.text_lower

    @cached_property
    def words(self) -> list[str]:
        return split_words(self.page.visible_text)

    @cached_property
    def sentences(self) -> list[str]:
        return split_sentences(self.page.visible_text)


@dataclass(frozen=True)
class CheckSpec:
    """Fixed identity and point value of one check."""

    id: str
    category: Category
    name: str
    max_score: int

    def result(self, score: int, details: str, passed: bool | None = None) -> Check:
        """
        Build this check's result.

        Scores are clamped to [0, max_score]. When `passed` is omitted the
        check passes only at full marks.
        """
        score = max(0, min(self.max_score, int(score)))
        if passed is None:
            passed = score == self.max_score
        return Check(
            id=self.id,
            category=self.category,
            name=self.name,
            passed=passed,
            score=score,
            max_score=self.max_score,
            details=details,
        )

    def failed(self, details: str) -> Check:
        """A zero-score failed result."""
        return self.result(0, details, passed=False)


CheckFunc = Callable[[CheckContext], Check]


@dataclass(frozen=True)
class RegisteredCheck:
    spec: CheckSpec
    func: CheckFunc
