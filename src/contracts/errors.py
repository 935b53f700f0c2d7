"""Shared error types for the solver and its payload contracts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

SEVERITY_ERROR = "ERROR"
SEVERITY_WARN = "WARN"


class InputShapeError(ValueError):
    """Raised when puzzle text cannot be mapped onto a 9x9 grid."""

    def __init__(self, code: str, detail: Optional[str] = None) -> None:
        self.code = code
        self.detail = detail
        message = code if detail is None else f"{code}:{detail}"
        super().__init__(message)


class SchemaValidationError(RuntimeError):
    """Exception raised when a payload fails schema validation."""

    def __init__(self, code: str, detail: Optional[str] = None) -> None:
        self.code = code
        self.detail = detail
        message = code if detail is None else f"{code}:{detail}"
        super().__init__(message)


@dataclass(frozen=True)
class ValidationIssue:
    """Single finding produced by a grid or payload check."""

    code: str
    msg: str
    path: str
    severity: str


@dataclass(frozen=True)
class ValidationReport:
    """Aggregate result of a validation run."""

    ok: bool
    errors: List[ValidationIssue]
    warnings: List[ValidationIssue]


def make_error(code: str, msg: str, path: str) -> ValidationIssue:
    """Construct an error-level :class:`ValidationIssue`."""

    return ValidationIssue(code=code, msg=msg, path=path, severity=SEVERITY_ERROR)


def make_warning(code: str, msg: str, path: str) -> ValidationIssue:
    """Construct a warning-level :class:`ValidationIssue`."""

    return ValidationIssue(code=code, msg=msg, path=path, severity=SEVERITY_WARN)


def make_report(issues: List[ValidationIssue]) -> ValidationReport:
    errors = [issue for issue in issues if issue.severity == SEVERITY_ERROR]
    warnings = [issue for issue in issues if issue.severity == SEVERITY_WARN]
    return ValidationReport(ok=not errors, errors=errors, warnings=warnings)


__all__ = [
    "SEVERITY_ERROR",
    "SEVERITY_WARN",
    "InputShapeError",
    "SchemaValidationError",
    "ValidationIssue",
    "ValidationReport",
    "make_error",
    "make_report",
    "make_warning",
]
