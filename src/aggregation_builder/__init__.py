"""
Aggregation Builder - fluent, validated construction of aggregation pipelines.

Stages are validated when they are added and the finished pipeline is run
only when requested:

    >>> from aggregation_builder import PipelineBuilder
    >>> executor = PipelineBuilder(cats).match({"color": "black"}).limit(1).build()
    >>> cats_found = await executor.print().execute()
"""

__version__ = "1.0.0"

from .builder import PipelineBuilder
from .config import (
    create_default_config,
    create_strict_config,
    create_test_config,
    validate_builder_config,
)
from .errors import (
    AggregationBuilderError,
    ConfigurationError,
    ErrorCategory,
    ErrorSeverity,
    ExecutionError,
    ValidationError,
)
from .execution import PipelineExecutor
from .logging import PipelineLogger
from .models import (
    STAGE_SPECS,
    BuilderConfig,
    StageDescriptor,
    StageKind,
    StageSpec,
    TargetCollection,
)

__all__ = [
    # Builder and executor
    "PipelineBuilder",
    "PipelineExecutor",
    # Errors
    "AggregationBuilderError",
    "ConfigurationError",
    "ExecutionError",
    "ValidationError",
    "ErrorCategory",
    "ErrorSeverity",
    # Logging
    "PipelineLogger",
    # Models
    "BuilderConfig",
    "StageDescriptor",
    "StageKind",
    "StageSpec",
    "STAGE_SPECS",
    "TargetCollection",
    # Config
    "create_default_config",
    "create_strict_config",
    "create_test_config",
    "validate_builder_config",
]
