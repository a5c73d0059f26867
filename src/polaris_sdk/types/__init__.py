"""Shared types."""

from .validation import ValidationIssue, ValidationResult

__all__ = ["ValidationIssue", "ValidationResult"]
