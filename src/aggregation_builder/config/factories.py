"""
Configuration factory functions for creating preset configurations.

This module provides factory functions for creating BuilderConfig instances
with preset behaviour for library use, strict pass-through and tests.
"""

from __future__ import annotations

from typing import Any

from ..models import BuilderConfig


def create_default_config(**overrides: Any) -> BuilderConfig:
    """
    Create a BuilderConfig with the default behaviour.

    The collection handle is checked for ``aggregate`` and empty values are
    stripped from stage bodies.

    Args:
        **overrides: Configuration parameters to override defaults

    Returns:
        BuilderConfig instance

    Example:
        >>> config = create_default_config(indent=2)
    """
    return BuilderConfig(
        skip_model_check=overrides.pop("skip_model_check", False),
        sanitize=overrides.pop("sanitize", True),
        **overrides,
    )


def create_strict_config(**overrides: Any) -> BuilderConfig:
    """
    Create a BuilderConfig that records stage bodies exactly as given.

    Args:
        **overrides: Configuration parameters to override defaults

    Returns:
        BuilderConfig instance with sanitization disabled

    Example:
        >>> config = create_strict_config()
        >>> config.sanitize
        False
    """
    return BuilderConfig(
        skip_model_check=overrides.pop("skip_model_check", False),
        sanitize=overrides.pop("sanitize", False),
        **overrides,
    )


def create_test_config(**overrides: Any) -> BuilderConfig:
    """
    Create a BuilderConfig for tests that use stand-in collection objects.

    Args:
        **overrides: Configuration parameters to override defaults

    Returns:
        BuilderConfig instance that skips the collection check and stays quiet
    """
    return BuilderConfig(
        skip_model_check=overrides.pop("skip_model_check", True),
        sanitize=overrides.pop("sanitize", True),
        verbose=overrides.pop("verbose", False),
        **overrides,
    )
