"""
Core Package - Ranking Electoral
electoral_scoring/core/__init__.py

Core infrastructure: exceptions.
"""

from electoral_scoring.core.exceptions import (
    InvalidCandidateDataError,
    InvalidEnumError,
    ScoringException,
    WeightValidationError,
)

__all__ = [
    "InvalidCandidateDataError",
    "InvalidEnumError",
    "ScoringException",
    "WeightValidationError",
]
