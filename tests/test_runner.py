from __future__ import annotations

import json
from pathlib import Path

import pytest

from compiletest.core import (
    DEFAULT_CONFIG,
    ASTParseError,
    AllFrom,
    AssemblyFailedError,
    CompilerConfig,
    CompilerError,
    Fail,
    NoValidTestsError,
    Pass,
    PassFailureError,
    Register,
    SuiteParseError,
    TestSet,
    WrapperFailureError,
)
from compiletest.core.runner import (
    run_default,
    run_group,
    run_invalid,
    run_suite,
    run_test_file,
    run_tests,
    run_valid,
)


def _load(path: str) -> TestSet:
    return TestSet.of([1, 2, 3], ["x", "y"])


def test_run_group_passes_every_case(capsys) -> None:
    results = run_group("Valid", lambda case: f"ok {case}", ["a", "b"], use_color=False)
    assert results == [Pass("ok a"), Pass("ok b")]
    output = capsys.readouterr().out
    assert "Testing Valid" in output
    assert "Test    Result" in output
    assert "   0    Pass" in output
    assert "   1    Pass" in output


def test_run_group_empty_prints_nothing(capsys) -> None:
    assert run_group("Valid", lambda case: "never", [], use_color=False) == []
    assert capsys.readouterr().out == ""


def test_expected_failures_never_abort(capsys) -> None:
    calls = []

    def compile_case(case):
        calls.append(case)
        raise ASTParseError(f"bad {case}")

    results = run_group("Invalid", compile_case, ["a", "b", "c"], use_color=False)
    assert calls == ["a", "b", "c"]
    assert all(isinstance(result, Fail) for result in results)
    assert all(isinstance(result.error, ASTParseError) for result in results)
    output = capsys.readouterr().out
    assert "   2    Fail    AST parse failure" in output


@pytest.mark.parametrize(
    "error, description",
    [
        (AssemblyFailedError("ld failed"), "Assembly failure"),
        (PassFailureError("flatten-program", "wrong output"), "Pass failure in flatten-program"),
        (WrapperFailureError("runtime.c", "segfault"), "Wrapper failure in runtime.c"),
    ],
)
def test_each_expected_kind_becomes_failure(capsys, error, description) -> None:
    def compile_case(case):
        raise error

    (result,) = run_group("Valid", compile_case, ["a"], use_color=False)
    assert result == Fail(error)
    assert f"   0    Fail    {description}" in capsys.readouterr().out


def test_foreign_exceptions_are_wrapped(capsys) -> None:
    def compile_case(case):
        if case == "b":
            return "fine"
        raise RuntimeError(f"boom {case}")

    results = run_group("Valid", compile_case, ["a", "b", "c"], use_color=False)
    assert len(results) == 3
    assert results[1] == Pass("fine")
    for result in (results[0], results[2]):
        assert isinstance(result, Fail)
        assert isinstance(result.error, PassFailureError)
        assert result.error.wrapped
    assert str(results[0]) == "Error: boom a"
    output = capsys.readouterr().out
    assert "   0    Fail    Error: boom a" in output
    assert "   2    Fail    Error: boom c" in output


def test_foreign_exception_without_text_uses_type_name() -> None:
    def compile_case(case):
        raise KeyError

    (result,) = run_group("Valid", compile_case, ["a"], use_color=False)
    assert str(result) == "Error: KeyError"


class _UntypedError(CompilerError):
    pass


@pytest.mark.parametrize("error", [CompilerError("custom"), _UntypedError("custom")])
def test_compiler_error_without_kind_is_a_case_failure(capsys, error) -> None:
    calls = []

    def compile_case(case):
        calls.append(case)
        raise error

    results = run_group("Valid", compile_case, ["a", "b"], use_color=False)
    assert calls == ["a", "b"]
    assert len(results) == 2
    for result in results:
        assert isinstance(result, Fail)
        assert isinstance(result.error, PassFailureError)
        assert result.error.wrapped
    assert str(results[0]) == "Error: Compiler error: custom"
    assert "   1    Fail    Error: Compiler error: custom" in capsys.readouterr().out


def test_quiet_run_group_prints_nothing(capsys) -> None:
    results = run_group("Valid", lambda case: "ok", ["a"], use_color=False, quiet=True)
    assert results == [Pass("ok")]
    assert capsys.readouterr().out == ""


def test_structural_error_from_compiler_propagates() -> None:
    def compile_case(case):
        raise SuiteParseError("broken")

    with pytest.raises(SuiteParseError):
        run_group("Valid", compile_case, ["a", "b"], use_color=False)


def test_structural_error_aborts_run_before_summary(capsys) -> None:
    calls = []

    def compiler(case, config):
        calls.append(case)
        raise NoValidTestsError()

    with pytest.raises(NoValidTestsError):
        run_tests(AllFrom("suite.ss"), DEFAULT_CONFIG, compiler, load=_load, use_color=False)
    assert calls == [1]
    assert "Testing Summary" not in capsys.readouterr().out


def test_run_tests_passes_config_through(capsys) -> None:
    config = CompilerConfig(frame_pointer_register=Register.RSP)
    seen = []

    def compiler(case, cfg):
        seen.append(cfg)
        if isinstance(case, int):
            return str(case)
        raise ASTParseError("not a number")

    valid, invalid = run_tests(AllFrom("suite.ss"), config, compiler, load=_load, use_color=False)
    assert valid == [Pass("1"), Pass("2"), Pass("3")]
    assert [result.passed for result in invalid] == [False, False]
    assert all(cfg is config for cfg in seen)
    output = capsys.readouterr().out
    assert output.index("Testing Valid") < output.index("Testing Invalid") < output.index("Testing Summary")
    assert f"{'Expected Passes:':<24}{3:4d}" in output
    assert f"{'Expected Failures:':<24}{2:4d}" in output
    assert f"{'Total:':<24}{5:4d}" in output


def test_run_tests_indexes_over_selected_cases(capsys) -> None:
    from compiletest.core.selection import select_valid

    seen = []

    def compiler(case, config):
        seen.append(case)
        return "ok"

    valid, _ = run_tests(select_valid([2], AllFrom("suite.ss")), DEFAULT_CONFIG, compiler, load=_load, use_color=False)
    assert valid == [Pass("ok")]
    assert seen[0] == 3
    assert "   0    Pass" in capsys.readouterr().out


def _echo(case, config):
    return str(case)


def test_run_test_file_reads_suite(write_suite) -> None:
    suite = write_suite("(valid 1 2)\n(invalid 3)\n")
    valid, invalid = run_test_file(str(suite), DEFAULT_CONFIG, _echo)
    assert valid == [Pass("1"), Pass("2")]
    assert invalid == [Pass("3")]


def test_run_valid_skips_invalid_group(tmp_path: Path, monkeypatch, capsys) -> None:
    (tmp_path / "test-suite.ss").write_text("(valid 10 11 12)\n(invalid 20 21)\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    valid, invalid = run_valid([2, 0], _echo)
    assert valid == [Pass("12"), Pass("10")]
    assert invalid == []
    assert "Testing Invalid" not in capsys.readouterr().out


def test_run_invalid_skips_valid_group(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "test-suite.ss").write_text("(valid 10 11 12)\n(invalid 20 21)\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    valid, invalid = run_invalid([1], _echo)
    assert valid == []
    assert invalid == [Pass("21")]


def test_missing_valid_group_is_fatal(write_suite) -> None:
    suite = write_suite("(invalid 1)\n")
    with pytest.raises(NoValidTestsError):
        run_test_file(str(suite), DEFAULT_CONFIG, _echo)


def test_run_default_uses_default_suite_file(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "test-suite.ss").write_text("(valid 1)\n(invalid 2 3)\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    valid, invalid = run_default(_echo)
    assert valid == [Pass("1")]
    assert invalid == [Pass("2"), Pass("3")]


def test_run_suite_returns_summary(capsys) -> None:
    def compiler(case, config):
        return str(case)

    outcome = run_suite(AllFrom("suite.ss"), DEFAULT_CONFIG, compiler, load=_load, use_color=False)
    assert outcome.valid == [Pass("1"), Pass("2"), Pass("3")]
    assert outcome.summary.expected_passes == 3
    assert outcome.summary.unexpected_passes == 2
    assert not outcome.summary.ok


def test_json_format_writes_only_the_report(capsys) -> None:
    def compiler(case, config):
        return str(case)

    run_tests(AllFrom("suite.ss"), DEFAULT_CONFIG, compiler, load=_load, use_color=False, report_format="json")
    payload = json.loads(capsys.readouterr().out)
    assert payload["summary"]["total"] == 5
