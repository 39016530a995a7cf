"""Built-in compilers for smoke runs and scaffolding."""
from __future__ import annotations

from typing import Dict

from compiletest.core.errors import ASTParseError
from compiletest.core.models import CompilerConfig, TestCase
from compiletest.core.runner import Compiler
from compiletest.suite.sexp import format_datum


def echo_compiler(case: TestCase, config: CompilerConfig) -> str:
    """Accept every program and return its source text."""

    return format_datum(case)


def reject_compiler(case: TestCase, config: CompilerConfig) -> str:
    """Reject every program."""

    raise ASTParseError(f"rejected {format_datum(case)}")


BUILTIN_COMPILERS: Dict[str, Compiler] = {
    "echo": echo_compiler,
    "reject": reject_compiler,
}
