"""Result data structures produced by the test runner."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .errors import CompilerError


class TestResult:
    """Outcome of executing a single test case: either ``Pass`` or ``Fail``."""

    __test__ = False

    @property
    def passed(self) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class Pass(TestResult):
    artifact: str

    @property
    def passed(self) -> bool:
        return True

    def __str__(self) -> str:
        return self.artifact


@dataclass(frozen=True)
class Fail(TestResult):
    error: CompilerError

    @property
    def passed(self) -> bool:
        return False

    def __str__(self) -> str:
        return str(self.error)


@dataclass(frozen=True)
class Summary:
    """Pass/fail tallies split by the group each case was expected in."""

    expected_passes: int
    unexpected_passes: int
    expected_failures: int
    unexpected_failures: int
    total: int

    @property
    def ok(self) -> bool:
        return self.unexpected_passes == 0 and self.unexpected_failures == 0

    def rows(self) -> Sequence[tuple[str, int]]:
        return (
            ("Expected Passes:", self.expected_passes),
            ("Unexpected Passes:", self.unexpected_passes),
            ("Expected Failures:", self.expected_failures),
            ("Unexpected Failures:", self.unexpected_failures),
            ("Total:", self.total),
        )


def count_passes(results: Sequence[TestResult]) -> int:
    return sum(1 for result in results if result.passed)


def count_failures(results: Sequence[TestResult]) -> int:
    return sum(1 for result in results if not result.passed)


def summarize(valid: Sequence[TestResult], invalid: Sequence[TestResult]) -> Summary:
    """Tally results; valid cases should pass and invalid cases should fail."""

    return Summary(
        expected_passes=count_passes(valid),
        unexpected_passes=count_passes(invalid),
        expected_failures=count_failures(invalid),
        unexpected_failures=count_failures(valid),
        total=len(valid) + len(invalid),
    )
