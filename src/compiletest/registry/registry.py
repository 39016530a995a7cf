"""Compiler registry implementation."""
from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Iterable

from compiletest.core.runner import Compiler
from compiletest.utils.importing import import_string, load_from_source


class CompilerRegistry:
    """Stores compiler functions by name."""

    def __init__(self) -> None:
        self._compilers: Dict[str, Compiler] = {}

    def register(self, name: str, compiler: Compiler) -> Compiler:
        if name in self._compilers:
            raise ValueError(f"Compiler '{name}' already registered")
        self._compilers[name] = compiler
        return compiler

    def update_or_register(self, name: str, compiler: Compiler) -> Compiler:
        self._compilers[name] = compiler
        return compiler

    def get(self, name: str) -> Compiler:
        try:
            return self._compilers[name]
        except KeyError as exc:
            raise KeyError(f"Compiler '{name}' is not registered") from exc

    def __contains__(self, name: str) -> bool:
        return name in self._compilers

    def names(self) -> Iterable[str]:
        return tuple(sorted(self._compilers))


registry = CompilerRegistry()


def register_compiler(name: str) -> Callable[[Compiler], Compiler]:
    """Decorator registering the decorated function under ``name``."""

    def decorator(compiler: Compiler) -> Compiler:
        return registry.register(name, compiler)

    return decorator


def load_builtins() -> None:
    from . import builtins  # noqa: WPS433

    for name, compiler in builtins.BUILTIN_COMPILERS.items():
        registry.update_or_register(name, compiler)


def resolve_compiler(spec: str) -> Compiler:
    """Return the compiler named by ``spec``.

    ``spec`` is a registered name, a ``module:attr`` import path, or
    ``path/to/file.py:func``.
    """

    if spec in registry:
        return registry.get(spec)
    target, sep, attr = spec.rpartition(":")
    if sep and target.endswith(".py"):
        return load_from_source(Path(target), attr)
    compiler = import_string(spec)
    if not callable(compiler):
        raise TypeError(f"'{spec}' is not callable")
    return compiler
