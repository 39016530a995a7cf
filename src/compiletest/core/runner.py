"""Run the valid and invalid groups of a suite through a compiler."""
from __future__ import annotations

import logging
from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple

from compiletest.reporting import (
    build_report,
    print_case_result,
    print_group_header,
    print_summary,
    write_json_report,
)
from compiletest.suite.loader import load_test_set

from .errors import CompilerError, PassFailureError, is_expected_failure
from .models import DEFAULT_CONFIG, CompilerConfig, TestCase, TestSet
from .results import Fail, Pass, Summary, TestResult, summarize
from .selection import (
    DEFAULT_SELECTION,
    INVALID,
    VALID,
    AllFrom,
    Selection,
    SkipGroup,
    resolve_selection,
    select_invalid,
    select_valid,
    selection_file,
)

logger = logging.getLogger(__name__)

Compiler = Callable[[TestCase, CompilerConfig], str]
CompileStep = Callable[[TestCase], str]
RunResults = Tuple[List[TestResult], List[TestResult]]


class SuiteRun(NamedTuple):
    valid: List[TestResult]
    invalid: List[TestResult]
    summary: Summary


def run_group(
    label: str,
    compile_case: CompileStep,
    cases: Sequence[TestCase],
    *,
    use_color: bool = True,
    quiet: bool = False,
) -> List[TestResult]:
    """Compile each case in order and classify the outcome.

    Expected compiler failures and foreign exceptions both become ``Fail``
    results so the remaining cases still run. Structural errors such as a
    malformed suite propagate to the caller. ``quiet`` suppresses the
    terminal lines.
    """

    if not cases:
        return []
    if not quiet:
        print_group_header(label)
    results: List[TestResult] = []
    for index, case in enumerate(cases):
        result = _run_case(compile_case, case)
        logger.debug("%s case %d -> %s", label, index, "pass" if result.passed else "fail")
        if not quiet:
            print_case_result(index, result, use_color=use_color)
        results.append(result)
    return results


def _run_case(compile_case: CompileStep, case: TestCase) -> TestResult:
    try:
        return Pass(compile_case(case))
    except CompilerError as exc:
        if getattr(exc, "kind", None) is None:
            return Fail(PassFailureError("", _fault_text(exc)))
        if not is_expected_failure(exc):
            raise
        return Fail(exc)
    except Exception as exc:
        return Fail(PassFailureError("", _fault_text(exc)))


def _fault_text(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


def report_summary(
    valid: Sequence[TestResult],
    invalid: Sequence[TestResult],
    *,
    use_color: bool = True,
    quiet: bool = False,
) -> Summary:
    """Tally both groups and print the summary table unless ``quiet``."""

    summary = summarize(valid, invalid)
    if not quiet:
        print_summary(summary, use_color=use_color)
    return summary


def run_suite(
    selection: Selection,
    config: CompilerConfig,
    compiler: Compiler,
    *,
    load: Callable[[str], TestSet] = load_test_set,
    use_color: bool = True,
    report_format: str = "terminal",
    report_path: Optional[str] = None,
) -> SuiteRun:
    """Load ``selection``, run both groups and report.

    Terminal output is printed only for the ``terminal`` format; the ``json``
    format writes the report alone so stdout stays parseable.
    """

    tests = resolve_selection(selection, load)
    quiet = report_format != "terminal"

    def compile_case(case: TestCase) -> str:
        return compiler(case, config)

    valid = run_group("Valid", compile_case, tests.valid, use_color=use_color, quiet=quiet)
    invalid = run_group("Invalid", compile_case, tests.invalid, use_color=use_color, quiet=quiet)
    summary = report_summary(valid, invalid, use_color=use_color, quiet=quiet)
    if report_format == "json":
        payload = build_report(
            valid, invalid, summary, suite=selection_file(selection), config=config.to_mapping()
        )
        write_json_report(payload, report_path)
    return SuiteRun(valid, invalid, summary)


def run_tests(
    selection: Selection,
    config: CompilerConfig,
    compiler: Compiler,
    *,
    load: Callable[[str], TestSet] = load_test_set,
    use_color: bool = True,
    report_format: str = "terminal",
    report_path: Optional[str] = None,
) -> RunResults:
    """Same as :func:`run_suite`, returning only the (valid, invalid) result lists."""

    outcome = run_suite(
        selection,
        config,
        compiler,
        load=load,
        use_color=use_color,
        report_format=report_format,
        report_path=report_path,
    )
    return outcome.valid, outcome.invalid


def run_default(compiler: Compiler, *, config: CompilerConfig = DEFAULT_CONFIG) -> RunResults:
    """Run every case of the default suite file."""

    return run_tests(DEFAULT_SELECTION, config, compiler)


def run_valid(
    indices: Sequence[int], compiler: Compiler, *, config: CompilerConfig = DEFAULT_CONFIG
) -> RunResults:
    """Run the chosen valid cases of the default suite; invalid cases are skipped."""

    return run_tests(SkipGroup(INVALID, select_valid(indices)), config, compiler)


def run_invalid(
    indices: Sequence[int], compiler: Compiler, *, config: CompilerConfig = DEFAULT_CONFIG
) -> RunResults:
    """Run the chosen invalid cases of the default suite; valid cases are skipped."""

    return run_tests(SkipGroup(VALID, select_invalid(indices)), config, compiler)


def run_test_file(path: str, config: CompilerConfig, compiler: Compiler) -> RunResults:
    """Run every case found in ``path``."""

    return run_tests(AllFrom(path), config, compiler)
