"""S-expression reader for test-suite files."""
from __future__ import annotations

import re
import sys
from typing import Any, List, Tuple

from lark import Lark, Transformer, UnexpectedEOF, UnexpectedInput
from lark.exceptions import VisitError

from compiletest.core.errors import SuiteParseError

SEXP_GRAMMAR = r"""
start: _datum*

_datum: form
      | quoted
      | STRING
      | ATOM

form: "(" _datum* ")"
    | "[" _datum* "]"

quoted: "'" _datum

STRING: /"(\\[\s\S]|[^"\\])*"/
ATOM: /[^\s()\[\]'";]+/
COMMENT: /;[^\n]*/

%import common.WS
%ignore WS
%ignore COMMENT
"""

_INTEGER = re.compile(r"[+-]?[0-9]+\Z")
_DECIMAL = re.compile(r"[+-]?([0-9]+\.[0-9]*|\.[0-9]+|[0-9]+)([eE][+-]?[0-9]+)?\Z")

# Line continuation: a backslash, trailing blanks, the newline and leading blanks.
_ESCAPE = re.compile(r"\\(?:x([0-9a-fA-F]+);|[ \t]*\r?\n[ \t]*|(.))", re.DOTALL)
_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "t": "\t",
    "n": "\n",
    "v": "\v",
    "f": "\f",
    "r": "\r",
    "0": "\0",
    "\"": "\"",
    "'": "'",
    "\\": "\\",
}
_ENCODED = {char: "\\" + name for name, char in _ESCAPES.items() if name not in {"'", "0"}}


class Symbol(str):
    """A bare identifier, kept apart from string literals."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Symbol({str.__repr__(self)})"


QUOTE = Symbol("quote")


class _SexpTransformer(Transformer):
    def start(self, items: List[Any]) -> List[Any]:
        return list(items)

    def form(self, items: List[Any]) -> Tuple[Any, ...]:
        return tuple(items)

    def quoted(self, items: List[Any]) -> Tuple[Any, ...]:
        (datum,) = items
        return (QUOTE, datum)

    def STRING(self, token: Any) -> str:
        return decode_string(str(token)[1:-1])

    def ATOM(self, token: Any) -> Any:
        text = str(token)
        if text == "#t":
            return True
        if text == "#f":
            return False
        if _INTEGER.match(text):
            return int(text)
        if _DECIMAL.match(text):
            return float(text)
        return Symbol(text)


def decode_string(body: str) -> str:
    """Apply Scheme string escapes to the text between the quotes."""

    return _ESCAPE.sub(_unescape, body)


def _unescape(match: re.Match[str]) -> str:
    hex_digits, char = match.group(1), match.group(2)
    if hex_digits is not None:
        code = int(hex_digits, 16)
        if code > sys.maxunicode:
            raise ValueError(f"Character code \\x{hex_digits}; is out of range")
        return chr(code)
    if char is None:
        return ""
    try:
        return _ESCAPES[char]
    except KeyError:
        raise ValueError(f"Unknown string escape \\{char}") from None


_parser = Lark(SEXP_GRAMMAR, parser="lalr")


def parse_sexps(text: str) -> List[Any]:
    """Parse every top-level datum in ``text``."""

    try:
        tree = _parser.parse(text)
    except UnexpectedEOF as exc:
        raise SuiteParseError("unexpected end of input") from exc
    except UnexpectedInput as exc:
        raise SuiteParseError(f"line {exc.line}, column {exc.column}: {_describe(exc)}") from exc
    try:
        return _SexpTransformer().transform(tree)
    except VisitError as exc:
        raise SuiteParseError(str(exc.orig_exc)) from exc


def _describe(exc: UnexpectedInput) -> str:
    lines = str(exc).strip().splitlines()
    return lines[0] if lines else exc.__class__.__name__


def format_datum(value: Any) -> str:
    """Render a parsed datum back to s-expression text."""

    if isinstance(value, bool):
        return "#t" if value else "#f"
    if isinstance(value, Symbol):
        return str(value)
    if isinstance(value, str):
        return encode_string(value)
    if isinstance(value, (tuple, list)):
        if len(value) == 2 and value[0] == QUOTE and isinstance(value[0], Symbol):
            return "'" + format_datum(value[1])
        return "(" + " ".join(format_datum(item) for item in value) + ")"
    return str(value)


def encode_string(value: str) -> str:
    """Quote ``value`` as a Scheme string literal."""

    parts = []
    for char in value:
        if char in _ENCODED:
            parts.append(_ENCODED[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            parts.append(f"\\x{ord(char):x};")
        else:
            parts.append(char)
    return '"' + "".join(parts) + '"'
