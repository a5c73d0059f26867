"""Polaris SDK error types."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error source categories."""

    CONFIG = "CONFIG"
    VALIDATION = "VALIDATION"


@dataclass
class PolarisError(Exception):
    """Structured error with context. Base exception for all SDK errors."""

    # Identity
    code: str  # e.g., "ACCOUNT_INVALID"
    category: ErrorCategory

    # Messages
    message: str  # Human-readable summary
    detail: str | None = None  # Extended explanation
    suggestion: str | None = None  # Actionable fix

    cause: "PolarisError | None" = None

    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """Set Exception message."""
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.detail:
            return f"polaris: {self.message}: {self.detail}"
        return f"polaris: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logs and diagnostics.

        Returns:
            Dictionary representation of the error
        """
        return {
            "code": self.code,
            "category": self.category.value,
            "message": self.message,
            "detail": self.detail,
            "suggestion": self.suggestion,
            "timestamp": self.timestamp.isoformat(),
            "cause": self.cause.to_dict() if self.cause else None,
        }


@dataclass
class ErrorTemplate:
    """Template for creating errors."""

    code: str
    category: ErrorCategory
    message_template: str  # "Invalid service account {field}"
    detail_template: str | None = None
    suggestion_template: str | None = None
