"""Validation of derived datasets."""

from .integrity import (
    IntegrityError,
    IntegrityIssue,
    IntegrityReport,
    check_integrity,
)

__all__ = [
    "IntegrityError",
    "IntegrityIssue",
    "IntegrityReport",
    "check_integrity",
]
