"""Load test-suite files into a ``TestSet``."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Sequence

import yaml
from jsonschema import Draft7Validator

from compiletest.core.errors import NoInvalidTestsError, NoValidTestsError, SuiteParseError
from compiletest.core.models import TestCase, TestSet

from .sexp import Symbol, parse_sexps

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}

SUITE_SCHEMA = {
    "type": "object",
    "properties": {
        "valid": {"type": "array"},
        "invalid": {"type": "array"},
        "description": {"type": "string"},
    },
}
_validator = Draft7Validator(SUITE_SCHEMA)


def load_test_set(path: str) -> TestSet:
    """Read the valid and invalid groups from the suite at ``path``."""

    suite_path = Path(path).expanduser()
    try:
        text = suite_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise SuiteParseError(f"{suite_path} is not valid UTF-8 (byte offset {exc.start})") from exc
    if suite_path.suffix.lower() in YAML_SUFFIXES:
        tests = _load_yaml_suite(text)
    else:
        tests = find_tests(parse_sexps(text))
    logger.debug(
        "Loaded %d valid / %d invalid case(s) from %s", len(tests.valid), len(tests.invalid), suite_path
    )
    return tests


def find_tests(forms: Sequence[Any]) -> TestSet:
    """Pick the first ``(valid ...)`` and ``(invalid ...)`` forms."""

    valid = _find_group(forms, "valid")
    if not valid:
        raise NoValidTestsError()
    invalid = _find_group(forms, "invalid")
    if not invalid:
        raise NoInvalidTestsError()
    return TestSet.of(valid, invalid)


def _find_group(forms: Sequence[Any], label: str) -> Sequence[TestCase]:
    for form in forms:
        if isinstance(form, tuple) and form and isinstance(form[0], Symbol) and form[0] == label:
            return form[1:]
    return ()


def _load_yaml_suite(text: str) -> TestSet:
    try:
        raw = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise SuiteParseError(str(exc)) from exc
    if not isinstance(raw, Mapping):
        raise SuiteParseError("Suite file must contain a mapping at the top level")
    errors = sorted(_validator.iter_errors(raw), key=lambda e: list(e.path))
    if errors:
        messages = "; ".join(f"{'/'.join(map(str, err.path)) or 'root'}: {err.message}" for err in errors)
        raise SuiteParseError(f"Suite schema validation failed: {messages}")
    valid = raw.get("valid") or []
    if not valid:
        raise NoValidTestsError()
    invalid = raw.get("invalid") or []
    if not invalid:
        raise NoInvalidTestsError()
    return TestSet.of(_freeze(valid), _freeze(invalid))


def _freeze(value: Any) -> Any:
    if isinstance(value, list):
        return tuple(_freeze(item) for item in value)
    return value
