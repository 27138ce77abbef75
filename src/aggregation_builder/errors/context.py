"""
Error context builders and suggestion generators.

This module provides utilities for building structured error context
and generating helpful error suggestions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Union, cast

if TYPE_CHECKING:
    from . import ErrorContextDict
else:
    # Type alias for runtime
    ErrorContextDict = Dict[
        str, Union[str, int, float, bool, List[str], Dict[str, str], None]
    ]


class ErrorContext:
    """
    Structured error context for better error messages.
    """

    def __init__(self, **kwargs: Any):
        """
        Initialize error context with key-value pairs.

        Args:
            **kwargs: Context key-value pairs
        """
        self.context: ErrorContextDict = dict(kwargs)

    def add(self, key: str, value: Any) -> None:
        """
        Add a context value.

        Args:
            key: Context key
            value: Context value
        """
        self.context[key] = value

    def to_dict(self) -> ErrorContextDict:
        """
        Convert context to dictionary.

        Returns:
            Dictionary representation of context
        """
        return cast(ErrorContextDict, self.context.copy())

    def __repr__(self) -> str:
        """Return string representation."""
        return f"ErrorContext({self.context})"


class SuggestionGenerator:
    """
    Generator for helpful error suggestions.
    """

    @staticmethod
    def suggest_fix_for_missing_field(stage: str, field: str) -> List[str]:
        """
        Generate suggestions for a required stage field that is missing.

        Args:
            stage: Stage name (e.g. "lookup")
            field: Name of the missing field

        Returns:
            List of suggestion strings
        """
        return [
            f"Pass a value for '{field}' when adding the {stage} stage",
            f"'{field}' cannot be None",
        ]

    @staticmethod
    def suggest_fix_for_invalid_argument(stage: str, received: Any) -> List[str]:
        """
        Generate suggestions for a stage that received a non-mapping argument.

        Args:
            stage: Stage name
            received: The offending argument

        Returns:
            List of suggestion strings
        """
        return [
            f"Pass a dict to the {stage} stage",
            f"Received {type(received).__name__} instead",
        ]

    @staticmethod
    def suggest_fix_for_invalid_collection(collection: Any) -> List[str]:
        """
        Generate suggestions for a collection handle without aggregate().

        Args:
            collection: The rejected handle

        Returns:
            List of suggestion strings
        """
        return [
            "Pass a collection object exposing an aggregate(pipeline) method",
            f"Got {type(collection).__name__}",
            "Use skip_model_check=True to bypass this check",
        ]


def build_validation_context(stage: str, field: str | None = None) -> ErrorContextDict:
    """
    Build error context for stage validation errors.

    Args:
        stage: Stage name
        field: Optional offending field

    Returns:
        Error context dictionary
    """
    context = ErrorContext(stage=stage, operator=f"${stage}")
    if field is not None:
        context.add("field", field)
    return context.to_dict()
