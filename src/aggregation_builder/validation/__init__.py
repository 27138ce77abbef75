"""
Stage argument validation.
"""

from .stage_validator import StageValidator
from .utils import is_absent, is_empty_value, normalize_field_name, omit_empty

__all__ = [
    "StageValidator",
    "is_absent",
    "is_empty_value",
    "normalize_field_name",
    "omit_empty",
]
