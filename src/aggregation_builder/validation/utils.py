"""
Utility functions for stage parameter validation and sanitization.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Mapping


def is_absent(value: Any) -> bool:
    """Return True if ``value`` counts as not supplied."""
    return value is None


def is_empty_value(value: Any) -> bool:
    """
    Return True for values sanitization strips: None, NaN and "".

    Args:
        value: Value to check

    Returns:
        True if the value is semantically absent
    """
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and value == ""


def omit_empty(params: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of ``params`` without empty values.

    Only the top level is sanitized; nested documents are kept as given.

    Args:
        params: Stage parameter mapping

    Returns:
        New dict, insertion order preserved
    """
    return {key: value for key, value in params.items() if not is_empty_value(value)}


def normalize_field_name(name: str) -> str:
    """Strip one trailing underscore used to pass reserved words (``from_``)."""
    if len(name) > 1 and name.endswith("_") and not name.endswith("__"):
        return name[:-1]
    return name
