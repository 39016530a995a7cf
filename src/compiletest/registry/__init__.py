"""Compiler registry public API."""
from .registry import (
    CompilerRegistry,
    load_builtins,
    register_compiler,
    registry,
    resolve_compiler,
)

__all__ = [
    "CompilerRegistry",
    "registry",
    "register_compiler",
    "resolve_compiler",
    "load_builtins",
]
