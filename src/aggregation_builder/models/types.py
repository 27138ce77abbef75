"""
Type definitions and protocols for the aggregation builder.
"""

from typing import Any, Dict, List, Mapping, Protocol, runtime_checkable

# A pipeline as handed to the store: one single-key dict per stage
PipelineDocument = List[Dict[str, Any]]

# Parameter record of a stage, keyed by the store's field names
StageParams = Mapping[str, Any]


@runtime_checkable
class TargetCollection(Protocol):
    """Protocol for collections that can run an aggregation pipeline.

    ``aggregate`` may return an awaitable (async drivers) or the result
    itself (sync drivers); the executor handles both.
    """

    def aggregate(self, pipeline: PipelineDocument) -> Any:
        """Run the pipeline and return its result records."""
        ...


def supports_aggregation(collection: Any) -> bool:
    """Return True if ``collection`` exposes a callable ``aggregate``."""
    return callable(getattr(collection, "aggregate", None))
