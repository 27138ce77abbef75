"""
Configuration validation functions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from ..models import BuilderConfig


def validate_builder_config(config: BuilderConfig) -> List[str]:
    """
    Validate builder configuration.

    Args:
        config: Builder configuration to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors: List[str] = []

    for flag in ("skip_model_check", "sanitize", "verbose"):
        if not isinstance(getattr(config, flag), bool):
            errors.append(f"Builder config '{flag}' must be a boolean")

    indent = config.indent
    if isinstance(indent, bool) or not isinstance(indent, int):
        errors.append("Builder config 'indent' must be an integer")
    elif indent < 0:
        errors.append("Builder config 'indent' cannot be negative")
    elif indent > 16:
        errors.append("Builder config 'indent' is too large (max 16)")

    return errors
