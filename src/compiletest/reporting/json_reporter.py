"""Machine-readable report of a finished run."""
from __future__ import annotations

import datetime as dt
import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from jsonschema import Draft7Validator

from compiletest.core.results import Fail, Summary, TestResult

from .schema import JSON_SCHEMA_V1, SCHEMA_VERSION

_validator = Draft7Validator(JSON_SCHEMA_V1)


def build_report(
    valid: Sequence[TestResult],
    invalid: Sequence[TestResult],
    summary: Summary,
    *,
    suite: str,
    config: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "schema_version": SCHEMA_VERSION,
        "generated_at": dt.datetime.now(dt.timezone.utc).isoformat().replace("+00:00", "Z"),
        "suite": suite,
        "summary": {
            "expected_passes": summary.expected_passes,
            "unexpected_passes": summary.unexpected_passes,
            "expected_failures": summary.expected_failures,
            "unexpected_failures": summary.unexpected_failures,
            "total": summary.total,
        },
        "cases": _cases("valid", valid) + _cases("invalid", invalid),
    }
    if config is not None:
        payload["config"] = dict(config)
    _validator.validate(payload)
    return payload


def _cases(group: str, results: Sequence[TestResult]) -> List[Dict[str, Any]]:
    entries: List[Dict[str, Any]] = []
    for index, result in enumerate(results):
        entry: Dict[str, Any] = {
            "group": group,
            "index": index,
            "status": "pass" if result.passed else "fail",
            "detail": str(result),
        }
        if isinstance(result, Fail):
            entry["error_kind"] = result.error.kind.value
        entries.append(entry)
    return entries


def write_json_report(payload: Mapping[str, Any], path: Optional[str]) -> None:
    """Write ``payload`` to ``path``, or print it when no path is given."""

    text = json.dumps(payload, indent=2)
    if path:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    else:
        print(text)
