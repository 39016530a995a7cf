"""Test-suite file readers."""
from .loader import find_tests, load_test_set
from .sexp import Symbol, format_datum, parse_sexps

__all__ = [
    "Symbol",
    "find_tests",
    "format_datum",
    "load_test_set",
    "parse_sexps",
]
