"""
Models for the aggregation builder.
"""

from .base import BaseModel
from .config import BuilderConfig
from .enums import ArgumentShape, StageKind
from .stages import STAGE_SPECS, StageDescriptor, StageSpec, get_stage_spec
from .types import PipelineDocument, StageParams, TargetCollection, supports_aggregation

__all__ = [
    "BaseModel",
    "BuilderConfig",
    "ArgumentShape",
    "StageKind",
    "STAGE_SPECS",
    "StageDescriptor",
    "StageSpec",
    "get_stage_spec",
    "PipelineDocument",
    "StageParams",
    "TargetCollection",
    "supports_aggregation",
]
