"""Terminal rendering of per-case lines and the summary table."""
from __future__ import annotations

from colorama import Fore, Style

from compiletest.core.errors import PassFailureError
from compiletest.core.results import Fail, Summary, TestResult

RULE = "-" * 27


def print_group_header(label: str) -> None:
    print(f"\nTesting {label}")
    print("Test    Result")
    print(RULE)


def print_case_result(index: int, result: TestResult, *, use_color: bool = True) -> None:
    reset = Style.RESET_ALL if use_color else ""
    if isinstance(result, Fail):
        color = Fore.RED if use_color else ""
        print(f"{index:4d}    {color}Fail{reset}    {describe_failure(result)}")
    else:
        color = Fore.GREEN if use_color else ""
        print(f"{index:4d}    {color}Pass{reset}")


def describe_failure(result: Fail) -> str:
    error = result.error
    if isinstance(error, PassFailureError) and error.wrapped:
        return str(error)
    return error.short_description()


def print_summary(summary: Summary, *, use_color: bool = True) -> None:
    color = Fore.CYAN if use_color else ""
    reset = Style.RESET_ALL if use_color else ""
    print(f"\n{color}Testing Summary{reset}")
    print(RULE)
    for label, value in summary.rows():
        print(f"{label:<24}{value:4d}")
    print()
