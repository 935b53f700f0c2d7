"""Error types and payload contracts shared by the solver."""

from __future__ import annotations

from .errors import (
    InputShapeError,
    SchemaValidationError,
    ValidationIssue,
    ValidationReport,
    make_error,
    make_report,
    make_warning,
)
from .schema_validator import iter_trace_errors, validate_trace_payload

__all__ = [
    "InputShapeError",
    "SchemaValidationError",
    "ValidationIssue",
    "ValidationReport",
    "iter_trace_errors",
    "make_error",
    "make_report",
    "make_warning",
    "validate_trace_payload",
]
