"""JSON schema definition for reporter output."""
from __future__ import annotations

SCHEMA_VERSION = "1.0.0"

JSON_SCHEMA_V1 = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "compiletest report",
    "type": "object",
    "required": ["schema_version", "generated_at", "suite", "summary", "cases"],
    "properties": {
        "schema_version": {"type": "string"},
        "generated_at": {"type": "string", "format": "date-time"},
        "suite": {"type": "string"},
        "config": {"type": "object"},
        "summary": {
            "type": "object",
            "required": [
                "expected_passes",
                "unexpected_passes",
                "expected_failures",
                "unexpected_failures",
                "total",
            ],
            "properties": {
                "expected_passes": {"type": "integer"},
                "unexpected_passes": {"type": "integer"},
                "expected_failures": {"type": "integer"},
                "unexpected_failures": {"type": "integer"},
                "total": {"type": "integer"},
            },
        },
        "cases": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["group", "index", "status", "detail"],
                "properties": {
                    "group": {"enum": ["valid", "invalid"]},
                    "index": {"type": "integer", "minimum": 0},
                    "status": {"enum": ["pass", "fail"]},
                    "detail": {"type": "string"},
                    "error_kind": {"type": "string"},
                },
            },
        },
    },
}
