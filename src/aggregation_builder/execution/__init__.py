"""
Pipeline execution.
"""

from .executor import PipelineExecutor

__all__ = ["PipelineExecutor"]
