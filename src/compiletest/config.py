"""YAML loader for compiler register configuration."""
from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml
from jsonschema import Draft7Validator

from compiletest.core.models import DEFAULT_CONFIG, CompilerConfig, Register

_REGISTER_FIELDS = (
    "frame_pointer_register",
    "allocation_pointer_register",
    "return_address_register",
    "return_value_register",
)

CONFIG_SCHEMA = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        **{name: {"type": "string", "minLength": 1} for name in _REGISTER_FIELDS},
        "parameter_registers": {"type": "array", "items": {"type": "string"}},
    },
}
_validator = Draft7Validator(CONFIG_SCHEMA)


def load_config(path: str) -> CompilerConfig:
    """Load a config file; keys left out keep their default registers."""

    config_path = Path(path).expanduser().resolve()
    raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, Mapping):
        raise ValueError("Config file must contain a mapping at the top level")
    return config_from_mapping(raw)


def config_from_mapping(raw: Mapping[str, Any], base: CompilerConfig = DEFAULT_CONFIG) -> CompilerConfig:
    errors = sorted(_validator.iter_errors(dict(raw)), key=lambda e: list(e.path))
    if errors:
        messages = "; ".join(f"{'/'.join(map(str, err.path)) or 'root'}: {err.message}" for err in errors)
        raise ValueError(f"Config schema validation failed: {messages}")
    overrides: Dict[str, Any] = {}
    for name in _REGISTER_FIELDS:
        if name in raw:
            overrides[name] = Register.parse(raw[name])
    if "parameter_registers" in raw:
        overrides["parameter_registers"] = tuple(Register.parse(item) for item in raw["parameter_registers"])
    return replace(base, **overrides)
