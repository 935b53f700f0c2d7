"""JSON Schema validation for solver payloads shipped with the package."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

import jsonschema

from .errors import SchemaValidationError


_SCHEMA_ROOT = Path(__file__).resolve().parent / "schemas"
_TRACE_SCHEMA = "solve_trace.schema.json"


def load_schema(schema_path: str) -> Dict[str, Any]:
    """Load a schema relative to the bundled ``schemas`` directory."""

    resolved = (_SCHEMA_ROOT / schema_path).resolve()
    try:
        return json.loads(resolved.read_text("utf-8"))
    except FileNotFoundError as exc:
        raise SchemaValidationError("schema-not-found", schema_path) from exc


@lru_cache(maxsize=None)
def _validator(schema_path: str) -> Any:
    schema = load_schema(schema_path)
    validator_cls = jsonschema.validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def iter_trace_errors(payload: Any) -> List[str]:
    """Return human-readable violations of the SolveTrace schema, sorted by path."""

    validator = _validator(_TRACE_SCHEMA)
    errors = sorted(validator.iter_errors(payload), key=lambda exc: list(exc.absolute_path))
    messages = []
    for exc in errors:
        path = "/".join(str(part) for part in exc.absolute_path) or "<root>"
        messages.append(f"{path}: {exc.message}")
    return messages


def validate_trace_payload(payload: Any) -> None:
    """Validate a decoded SolveTrace payload.

    Raises :class:`SchemaValidationError` with code ``invariant-violation``
    and the first violation as detail.
    """

    validator = _validator(_TRACE_SCHEMA)
    try:
        validator.validate(payload)
    except jsonschema.ValidationError as exc:
        raise SchemaValidationError("invariant-violation", exc.message) from exc


__all__ = [
    "SchemaValidationError",
    "iter_trace_errors",
    "load_schema",
    "validate_trace_payload",
]
