"""
Builder configuration model.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import ConfigurationError
from .base import BaseModel


@dataclass(frozen=True)
class BuilderConfig(BaseModel):
    """Configuration shared by a builder and the executors it creates.

    Attributes:
        skip_model_check: Accept collection handles without ``aggregate``.
        sanitize: Drop None, NaN and empty-string values from stage bodies.
        indent: Indentation used when rendering a pipeline.
        verbose: Write logs to stdout when no logger is injected.

    Example:
        >>> config = BuilderConfig(sanitize=False)
        >>> config.validate()
    """

    skip_model_check: bool = False
    sanitize: bool = True
    indent: int = 4
    verbose: bool = True

    def validate(self) -> None:
        """Raise ConfigurationError if any setting is invalid."""
        from ..config.validators import validate_builder_config

        errors = validate_builder_config(self)
        if errors:
            raise ConfigurationError(
                errors[0],
                context={"errors": errors},
                suggestions=["Use create_default_config() for sane defaults"],
            )
