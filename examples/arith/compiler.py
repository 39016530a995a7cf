"""Toy compiler for integer arithmetic, used to demo compiletest.

Run with::

    compiletest run examples/arith/test-suite.ss --compiler examples/arith/compiler.py:compile_program
"""
from __future__ import annotations

from compiletest.core import ASTParseError, CompilerConfig
from compiletest.suite import Symbol

BINARY_OPS = {"+": "addq", "-": "subq", "*": "imulq"}


def compile_program(case, config: CompilerConfig) -> str:
    result = config.return_value_register.value
    lines = _emit(case, result)
    return "\n".join(lines)


def _emit(expr, target: str) -> list[str]:
    if isinstance(expr, int) and not isinstance(expr, bool):
        return [f"movq ${expr}, %{target}"]
    if not isinstance(expr, tuple) or not expr or not isinstance(expr[0], Symbol):
        raise ASTParseError(f"not an arithmetic expression: {expr!r}")
    op, args = expr[0], expr[1:]
    if op == "-" and len(args) == 1:
        return _emit(args[0], target) + [f"negq %{target}"]
    if op not in BINARY_OPS or len(args) != 2:
        raise ASTParseError(f"unsupported form ({op} ...) with {len(args)} operand(s)")
    left, right = args
    return (
        _emit(right, target)
        + ["pushq %" + target]
        + _emit(left, target)
        + ["popq %r11", f"{BINARY_OPS[op]} %r11, %{target}"]
    )
