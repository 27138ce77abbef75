"""
Builder configuration presets and validation.
"""

from .factories import create_default_config, create_strict_config, create_test_config
from .validators import validate_builder_config

__all__ = [
    "create_default_config",
    "create_strict_config",
    "create_test_config",
    "validate_builder_config",
]
