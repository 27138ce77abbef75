"""
Deferred execution of a finished aggregation pipeline.

The PipelineExecutor holds a collection handle and an immutable pipeline.
It can render the pipeline for diagnostics and submit it to the
collection's ``aggregate`` any number of times.
"""

from __future__ import annotations

import json
from inspect import isawaitable
from typing import Any, Iterable, Optional, Tuple

from ..logging import PipelineLogger
from ..models import PipelineDocument, StageDescriptor


class PipelineExecutor:
    """
    Runs a finished pipeline against a collection.

    Failures raised by the collection propagate unchanged; the executor
    adds no retry, timeout or wrapping.

    Args:
        collection: Handle exposing ``aggregate(pipeline)``
        pipeline: Ordered stage descriptors
        logger: Logger receiving renderings and submission notes
        indent: Indentation used by ``render``
    """

    def __init__(
        self,
        collection: Any,
        pipeline: Iterable[StageDescriptor],
        logger: Optional[PipelineLogger] = None,
        indent: int = 4,
    ):
        self._collection = collection
        self._pipeline: Tuple[StageDescriptor, ...] = tuple(pipeline)
        self.logger = logger or PipelineLogger()
        self.indent = indent

    @property
    def collection(self) -> Any:
        return self._collection

    @property
    def pipeline(self) -> Tuple[StageDescriptor, ...]:
        return self._pipeline

    def __len__(self) -> int:
        return len(self._pipeline)

    def to_list(self) -> PipelineDocument:
        """Return a fresh copy of the pipeline as the store expects it."""
        return [stage.to_dict() for stage in self._pipeline]

    def render(self) -> str:
        """Render the pipeline as indented JSON."""
        return json.dumps(self.to_list(), indent=self.indent, default=str)

    def print(self) -> PipelineExecutor:
        """Write the rendered pipeline to the logger and return self."""
        self.logger.info(f"Aggregation pipeline:\n{self.render()}")
        return self

    inspect = print

    async def execute(self) -> Any:
        """
        Submit the pipeline to the collection and return its result.

        Awaits the value returned by ``aggregate`` when it is awaitable,
        so both async and sync collections are supported.
        """
        self.logger.pipeline_submitted(
            type(self._collection).__name__, len(self._pipeline)
        )
        with self.logger.time_operation("aggregate"):
            result = self._collection.aggregate(self.to_list())
            if isawaitable(result):
                result = await result
        return result
