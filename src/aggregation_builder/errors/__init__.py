"""
Error handling system for the aggregation builder.

This module provides the error taxonomy raised while building and running
aggregation pipelines, plus the context utilities used to enrich messages.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Union


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Categories of errors."""

    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    EXECUTION = "execution"


# Type definitions for error context
ErrorContextValue = Union[str, int, float, bool, List[str], Dict[str, str], None]
ErrorContextDict = Dict[str, ErrorContextValue]
ErrorSuggestions = List[str]


class AggregationBuilderError(Exception):
    """
    Base exception for all aggregation builder errors.

    Carries a category, a severity, structured context and suggested fixes
    so callers can report problems without parsing the message.
    """

    def __init__(
        self,
        message: str,
        *,
        error_code: str | None = None,
        category: ErrorCategory | None = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: ErrorContextDict | None = None,
        suggestions: ErrorSuggestions | None = None,
        timestamp: datetime | None = None,
        cause: Exception | None = None,
    ):
        """
        Initialize a builder error.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            category: Error category for classification
            severity: Error severity level
            context: Additional context information
            suggestions: Suggested actions to resolve the error
            timestamp: When the error occurred (defaults to now)
            cause: The underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.category = category
        self.severity = severity
        self.context = context or {}
        self.suggestions = suggestions or []
        self.timestamp = timestamp or datetime.now(timezone.utc)
        self.cause = cause

    def __str__(self) -> str:
        """Return string representation of the error."""
        parts = [self.message]

        if self.error_code:
            parts.append(f"[{self.error_code}]")

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f"Context: {context_str}")

        if self.suggestions:
            parts.append(f"Suggestions: {'; '.join(self.suggestions)}")

        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            "message": self.message,
            "error_code": self.error_code,
            "category": self.category.value if self.category else None,
            "severity": self.severity.value if self.severity else None,
            "context": self.context,
            "suggestions": self.suggestions,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "cause": str(self.cause) if self.cause else None,
        }


class ValidationError(AggregationBuilderError):
    """Raised when a stage argument is malformed or misses a required field."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        stage: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(
            message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.MEDIUM,
            **kwargs,
        )
        self.field = field
        self.value = value
        self.stage = stage
        if stage:
            self.context["stage"] = stage
        if field:
            self.context["field"] = field
        if value is not None:
            self.context["value"] = str(value)


class ConfigurationError(AggregationBuilderError):
    """Raised when the builder configuration or collection handle is invalid."""

    def __init__(self, message: str, **kwargs: Any):
        if "severity" not in kwargs:
            kwargs["severity"] = ErrorSeverity.HIGH
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            **kwargs,
        )


class ExecutionError(AggregationBuilderError):
    """
    Raised by collections when an aggregation fails.

    The executor never raises or wraps this itself; whatever the collection
    raises reaches the caller unchanged.
    """

    def __init__(
        self,
        message: str,
        *,
        stage_count: int | None = None,
        **kwargs: Any,
    ):
        super().__init__(
            message,
            category=ErrorCategory.EXECUTION,
            severity=ErrorSeverity.HIGH,
            **kwargs,
        )
        self.stage_count = stage_count
        if stage_count is not None:
            self.context["stage_count"] = stage_count


from .context import (  # noqa: E402
    ErrorContext,
    SuggestionGenerator,
    build_validation_context,
)

__all__ = [
    "AggregationBuilderError",
    "ConfigurationError",
    "ErrorCategory",
    "ErrorContext",
    "ErrorContextDict",
    "ErrorContextValue",
    "ErrorSeverity",
    "ErrorSuggestions",
    "ExecutionError",
    "SuggestionGenerator",
    "ValidationError",
    "build_validation_context",
]
