"""JSON schema validation for configuration payloads."""

from __future__ import annotations

import json
from importlib import resources
from typing import Any

import jsonschema

from ..errors import ScriptError
from ..exit_codes import ERR_VALIDATION

CONFIG_SCHEMA = "config.schema.json"


def load_schema(name: str = CONFIG_SCHEMA) -> dict[str, Any]:
    return json.loads(resources.files(__package__).joinpath(name).read_text(encoding="utf-8"))


def validate(payload: Any, name: str = CONFIG_SCHEMA) -> None:
    try:
        jsonschema.validate(payload, load_schema(name))
    except jsonschema.ValidationError as exc:
        pointer = "/".join(str(p) for p in exc.absolute_path)
        loc = pointer or "<root>"
        raise ScriptError(
            f"schema validation failed for {name} at {loc}: {exc.message}",
            ERR_VALIDATION,
            kind="validation",
        ) from exc


__all__ = ["CONFIG_SCHEMA", "load_schema", "validate"]
