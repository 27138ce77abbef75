"""
Stage models for the aggregation builder.

This module defines the per-stage argument specification table and the
immutable descriptor that a builder appends for every stage.

Key Components:
    - **StageSpec**: Argument shape, required and optional fields of a stage
    - **STAGE_SPECS**: One StageSpec per StageKind
    - **StageDescriptor**: One stage of a pipeline, e.g. ``{"$limit": 1}``

Example:
    >>> from aggregation_builder.models.stages import StageDescriptor
    >>> from aggregation_builder.models.enums import StageKind
    >>> StageDescriptor(StageKind.LIMIT, 1).to_dict()
    {'$limit': 1}
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ..errors import ValidationError
from .base import BaseModel
from .enums import ArgumentShape, StageKind


@dataclass(frozen=True)
class StageSpec:
    """Argument specification of one stage kind.

    Attributes:
        kind: Stage kind this spec describes.
        shape: How the stage method's argument is shaped.
        required: Field names that must be present and not None. For
            MAPPING and SCALAR stages this is the argument's own name.
        optional: Declared optional fields (RECORD stages only).
        sanitize: Whether empty values may be stripped from the body.
        wrap_key: Key a SCALAR argument is wrapped under, if any.
    """

    kind: StageKind
    shape: ArgumentShape
    required: Tuple[str, ...] = ()
    optional: Tuple[str, ...] = ()
    sanitize: bool = False
    wrap_key: Optional[str] = None

    @property
    def name(self) -> str:
        return self.kind.value

    @property
    def fields(self) -> Tuple[str, ...]:
        """All declared record fields, required first."""
        return self.required + self.optional


def _mapping(kind: StageKind, argument: str, sanitize: bool = True) -> StageSpec:
    return StageSpec(kind, ArgumentShape.MAPPING, (argument,), sanitize=sanitize)


def _record(
    kind: StageKind, required: Tuple[str, ...], optional: Tuple[str, ...] = ()
) -> StageSpec:
    return StageSpec(kind, ArgumentShape.RECORD, required, optional, sanitize=True)


def _scalar(kind: StageKind, argument: str, wrap_key: Optional[str] = None) -> StageSpec:
    return StageSpec(kind, ArgumentShape.SCALAR, (argument,), wrap_key=wrap_key)


STAGE_SPECS: Dict[StageKind, StageSpec] = {
    spec.kind: spec
    for spec in (
        _mapping(StageKind.MATCH, "filter"),
        _mapping(StageKind.PROJECT, "projection"),
        _mapping(StageKind.ADD_FIELDS, "newFields"),
        _record(StageKind.BUCKET, ("groupBy", "boundaries"), ("default", "output")),
        _record(
            StageKind.BUCKET_AUTO, ("groupBy", "buckets"), ("output", "granularity")
        ),
        _record(
            StageKind.COLL_STATS,
            (),
            ("latencyStats", "storageStats", "count", "queryExecStats"),
        ),
        _scalar(StageKind.COUNT, "count"),
        # facet bodies are complete sub-pipelines and pass through untouched
        _mapping(StageKind.FACET, "facet", sanitize=False),
        _mapping(StageKind.GEO_NEAR, "geoNear"),
        _record(
            StageKind.GRAPH_LOOKUP,
            ("from", "startWith", "connectFromField", "as"),
            ("connectToField", "maxDepth", "depthField", "restrictSearchWithMatch"),
        ),
        _mapping(StageKind.GROUP, "group"),
        StageSpec(StageKind.INDEX_STATS, ArgumentShape.NONE),
        _scalar(StageKind.LIMIT, "count"),
        _record(StageKind.LOOKUP, ("from", "localField", "foreignField", "as")),
        _scalar(StageKind.OUT, "out"),
        _mapping(StageKind.REDACT, "redact"),
        _mapping(StageKind.REPLACE_ROOT, "replaceRoot"),
        _scalar(StageKind.SAMPLE, "size", wrap_key="size"),
        _scalar(StageKind.SKIP, "count"),
        _mapping(StageKind.SORT, "sort"),
        _scalar(StageKind.SORT_BY_COUNT, "pathToField"),
        _record(
            StageKind.UNWIND, ("path",), ("includeArrayIndex", "preserveNullAndEmptyArrays")
        ),
    )
}


def get_stage_spec(kind: StageKind) -> StageSpec:
    """Return the StageSpec for a stage kind."""
    return STAGE_SPECS[kind]


@dataclass(frozen=True)
class StageDescriptor(BaseModel):
    """One stage of an aggregation pipeline.

    The body is deep-copied on creation and on every read, so a descriptor
    never changes after it has been appended to a pipeline.

    Attributes:
        kind: Stage kind.
        body: Stage parameters (a mapping, or a scalar for scalar stages).
    """

    kind: StageKind
    body: Any = field(default=None, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "body", copy.deepcopy(self.body))
        self.validate()

    def validate(self) -> None:
        if not isinstance(self.kind, StageKind):
            raise ValidationError(
                f"Unknown stage kind: {self.kind!r}",
                value=self.kind,
            )

    @property
    def name(self) -> str:
        return self.kind.value

    @property
    def operator(self) -> str:
        return self.kind.operator

    def to_dict(self) -> Dict[str, Any]:
        """Return the stage as the store expects it, e.g. ``{"$limit": 1}``."""
        return {self.operator: copy.deepcopy(self.body)}

    def __str__(self) -> str:
        return f"StageDescriptor({self.operator}={self.body!r})"
