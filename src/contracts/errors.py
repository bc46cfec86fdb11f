"""Shared error types for problem construction, validation and search."""

from __future__ import annotations


from dataclasses import dataclass
from typing import List

SEVERITY_ERROR = "ERROR"
SEVERITY_WARN = "WARN"


class InvalidProblemError(ValueError):
    """Raised when a problem state cannot be built from the given data."""


class SearchBudgetExceeded(RuntimeError):
    """Raised by :meth:`ProblemSolver.solve` when a configured budget runs out."""

    def __init__(self, reason: str, *, expanded: int, elapsed_ms: int) -> None:
        self.reason = reason
        self.expanded = expanded
        self.elapsed_ms = elapsed_ms
        super().__init__(f"{reason}: expanded={expanded} elapsed_ms={elapsed_ms}")


@dataclass(frozen=True)
class ValidationIssue:
    """Single validation finding produced by a schema or invariant check."""

    code: str
    msg: str
    path: str
    severity: str


@dataclass(frozen=True)
class ValidationReport:
    """Aggregate result of validating a problem document."""

    ok: bool
    errors: List[ValidationIssue]
    warnings: List[ValidationIssue]
    timings_ms: dict[str, int]


class ProblemValidationError(ValueError):
    """Raised when a problem document fails validation."""

    def __init__(self, report: ValidationReport) -> None:
        self.report = report
        first = report.errors[0] if report.errors else None
        message = "invalid problem document" if first is None else f"{first.code}:{first.path}:{first.msg}"
        super().__init__(message)


def make_error(code: str, msg: str, path: str) -> ValidationIssue:
    """Construct an error-level :class:`ValidationIssue`."""

    return ValidationIssue(code=code, msg=msg, path=path, severity=SEVERITY_ERROR)


def make_warning(code: str, msg: str, path: str) -> ValidationIssue:
    """Construct a warning-level :class:`ValidationIssue`."""

    return ValidationIssue(code=code, msg=msg, path=path, severity=SEVERITY_WARN)


__all__ = [
    "SEVERITY_ERROR",
    "SEVERITY_WARN",
    "InvalidProblemError",
    "ProblemValidationError",
    "SearchBudgetExceeded",
    "ValidationIssue",
    "ValidationReport",
    "make_error",
    "make_warning",
]
