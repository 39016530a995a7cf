"""Core models and helpers exposed at the package level."""
from .errors import (
    ASTParseError,
    AssemblyFailedError,
    CompilerError,
    ErrorKind,
    NoInvalidTestsError,
    NoValidTestsError,
    PassFailureError,
    SuiteParseError,
    WrapperFailureError,
    is_expected_failure,
)
from .models import DEFAULT_CONFIG, DEFAULT_TEST_FILE, CompilerConfig, Register, TestCase, TestSet
from .results import Fail, Pass, Summary, TestResult, summarize
from .selection import (
    DEFAULT_SELECTION,
    AllFrom,
    SelectInvalid,
    SelectValid,
    Selection,
    SkipGroup,
    select_indices,
)

__all__ = [
    "ASTParseError",
    "AllFrom",
    "AssemblyFailedError",
    "CompilerConfig",
    "CompilerError",
    "DEFAULT_CONFIG",
    "DEFAULT_SELECTION",
    "DEFAULT_TEST_FILE",
    "ErrorKind",
    "Fail",
    "NoInvalidTestsError",
    "NoValidTestsError",
    "Pass",
    "PassFailureError",
    "Register",
    "SelectInvalid",
    "SelectValid",
    "Selection",
    "SkipGroup",
    "Summary",
    "SuiteParseError",
    "TestCase",
    "TestResult",
    "TestSet",
    "WrapperFailureError",
    "is_expected_failure",
    "select_indices",
    "summarize",
]
