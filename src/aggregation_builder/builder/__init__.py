"""
Pipeline builder.
"""

from .pipeline_builder import PipelineBuilder

__all__ = ["PipelineBuilder"]
