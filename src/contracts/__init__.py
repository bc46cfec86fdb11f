"""Error types and problem document validation.

The validator lives in :mod:`contracts.validator` and is imported explicitly
because it depends on :mod:`problems`, which itself depends on the error types
exported here.
"""

from __future__ import annotations

from .errors import (
    InvalidProblemError,
    ProblemValidationError,
    SearchBudgetExceeded,
    ValidationIssue,
    ValidationReport,
)

__all__ = [
    "InvalidProblemError",
    "ProblemValidationError",
    "SearchBudgetExceeded",
    "ValidationIssue",
    "ValidationReport",
]
