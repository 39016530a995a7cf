"""Closed set of errors raised by compilers and the suite loader."""
from __future__ import annotations

from enum import Enum
from typing import Dict


class ErrorKind(Enum):
    """Every error kind a compiler or the loader may raise."""

    ASSEMBLY_FAILED = "assembly_failed"
    AST_PARSE = "ast_parse"
    PASS_FAILURE = "pass_failure"
    WRAPPER_FAILURE = "wrapper_failure"
    SUITE_PARSE = "suite_parse"
    NO_VALID_TESTS = "no_valid_tests"
    NO_INVALID_TESTS = "no_invalid_tests"


# True: recorded as a failed case. False: aborts the whole run.
_EXPECTED_FAILURE_KINDS: Dict[ErrorKind, bool] = {
    ErrorKind.ASSEMBLY_FAILED: True,
    ErrorKind.AST_PARSE: True,
    ErrorKind.PASS_FAILURE: True,
    ErrorKind.WRAPPER_FAILURE: True,
    ErrorKind.SUITE_PARSE: False,
    ErrorKind.NO_VALID_TESTS: False,
    ErrorKind.NO_INVALID_TESTS: False,
}


class CompilerError(Exception):
    """Base class for all errors in the closed set."""

    kind: ErrorKind

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def short_description(self) -> str:
        return "Compiler error"

    def __str__(self) -> str:
        if self.message:
            return f"{self.short_description()}: {self.message}"
        return self.short_description()


class AssemblyFailedError(CompilerError):
    """The generated assembly could not be assembled or linked."""

    kind = ErrorKind.ASSEMBLY_FAILED

    def short_description(self) -> str:
        return "Assembly failure"


class ASTParseError(CompilerError):
    """The compiler rejected the structure of a test program."""

    kind = ErrorKind.AST_PARSE

    def short_description(self) -> str:
        return "AST parse failure"


class PassFailureError(CompilerError):
    """A compiler pass produced the wrong output.

    An empty ``pass_name`` marks a fault that was not a ``CompilerError``
    and got wrapped by the runner.
    """

    kind = ErrorKind.PASS_FAILURE

    def __init__(self, pass_name: str, message: str = "") -> None:
        super().__init__(message)
        self.pass_name = pass_name

    @property
    def wrapped(self) -> bool:
        return not self.pass_name

    def short_description(self) -> str:
        if self.wrapped:
            return "Error"
        return f"Pass failure in {self.pass_name}"


class WrapperFailureError(CompilerError):
    """The wrapper around compiled code did not behave as expected."""

    kind = ErrorKind.WRAPPER_FAILURE

    def __init__(self, wrapper: str, message: str = "") -> None:
        super().__init__(message)
        self.wrapper = wrapper

    def short_description(self) -> str:
        return f"Wrapper failure in {self.wrapper}"


class SuiteParseError(CompilerError):
    """The test-suite file itself is malformed."""

    kind = ErrorKind.SUITE_PARSE

    def short_description(self) -> str:
        return "Test suite parse error"


class NoValidTestsError(CompilerError):
    kind = ErrorKind.NO_VALID_TESTS

    def short_description(self) -> str:
        return "No valid tests found"


class NoInvalidTestsError(CompilerError):
    kind = ErrorKind.NO_INVALID_TESTS

    def short_description(self) -> str:
        return "No invalid tests found"


def is_expected_failure(error: CompilerError) -> bool:
    """Return True when ``error`` counts as a per-case failure.

    Errors that carry no kind, such as a bare ``CompilerError``, are per-case.
    """

    kind = getattr(error, "kind", None)
    if kind is None:
        return True
    return _EXPECTED_FAILURE_KINDS[kind]
