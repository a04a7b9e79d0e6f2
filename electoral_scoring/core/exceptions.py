"""
Custom Exceptions - Ranking Electoral
electoral_scoring/core/exceptions.py

Custom exception classes for the scoring engine boundary.
"""

from typing import Any, Iterable, Optional


class ScoringException(Exception):
    """Base exception for scoring operations."""

    pass


class InvalidEnumError(ScoringException):
    """Categorical value outside its closed enumeration."""

    def __init__(self, field: str, value: Any, allowed: Optional[Iterable[str]] = None):
        self.field = field
        self.value = value
        self.allowed = list(allowed) if allowed is not None else []
        message = f"Invalid value {value!r} for {field}"
        if self.allowed:
            message += f" (expected one of: {', '.join(self.allowed)})"
        super().__init__(message)


class InvalidCandidateDataError(ScoringException):
    """Candidate record bundle is structurally invalid."""

    def __init__(self, message: str = "Invalid candidate data", errors: Optional[list] = None):
        self.message = message
        self.errors = errors or []
        super().__init__(message)


class WeightValidationError(ScoringException):
    """Weight set cannot be used for a composite."""

    def __init__(self, message: str = "Invalid weights"):
        self.message = message
        super().__init__(message)
