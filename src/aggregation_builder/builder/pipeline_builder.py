"""
Fluent builder for aggregation pipelines.

This module provides the PipelineBuilder, which records one validated stage
per method call and hands the finished pipeline to a PipelineExecutor.

Example:
    >>> builder = PipelineBuilder(cats)
    >>> executor = (
    ...     builder.match({"color": "black"})
    ...     .project({"_id": False, "name": True})
    ...     .limit(1)
    ...     .build()
    ... )
    >>> executor.to_list()
    [{'$match': {'color': 'black'}}, {'$project': {'_id': False, 'name': True}}, {'$limit': 1}]
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ..errors import ConfigurationError, SuggestionGenerator
from ..execution import PipelineExecutor
from ..logging import PipelineLogger
from ..models import (
    ArgumentShape,
    BuilderConfig,
    PipelineDocument,
    StageDescriptor,
    StageKind,
    StageParams,
    get_stage_spec,
    supports_aggregation,
)
from ..validation import StageValidator, omit_empty


class PipelineBuilder:
    """
    Builds an aggregation pipeline one stage at a time.

    Each stage method validates its argument, optionally strips empty
    values, appends exactly one StageDescriptor and returns the builder.
    A failed call appends nothing.

    Args:
        collection: Handle exposing ``aggregate(pipeline)``
        skip_model_check: Accept a handle without ``aggregate``
        sanitize: Drop None, NaN and "" values from stage bodies
        config: Full configuration; overrides the two flags above
        logger: Logger for advisories and diagnostics

    Raises:
        ConfigurationError: If the configuration is invalid, or the handle
            cannot aggregate and the check is not skipped
    """

    def __init__(
        self,
        collection: Any,
        *,
        skip_model_check: bool = False,
        sanitize: bool = True,
        config: Optional[BuilderConfig] = None,
        logger: Optional[PipelineLogger] = None,
    ):
        if config is None:
            config = BuilderConfig(skip_model_check=skip_model_check, sanitize=sanitize)
        config.validate()

        if not config.skip_model_check and not supports_aggregation(collection):
            raise ConfigurationError(
                "handle is not a valid aggregation-capable collection",
                context={"collection_type": type(collection).__name__},
                suggestions=SuggestionGenerator.suggest_fix_for_invalid_collection(
                    collection
                ),
            )

        self.collection = collection
        self.config = config
        self.logger = logger or PipelineLogger(verbose=config.verbose)
        self.validator = StageValidator(self.logger)
        self._stages: List[StageDescriptor] = []

        self.logger.debug(
            "Created pipeline builder", collection=type(collection).__name__
        )

    # Pipeline access
    @property
    def stages(self) -> Tuple[StageDescriptor, ...]:
        """Snapshot of the stages recorded so far."""
        return tuple(self._stages)

    def to_list(self) -> PipelineDocument:
        """Return the pipeline as the store expects it."""
        return [stage.to_dict() for stage in self._stages]

    def __len__(self) -> int:
        return len(self._stages)

    def __repr__(self) -> str:
        operators = ", ".join(stage.operator for stage in self._stages)
        return f"PipelineBuilder([{operators}])"

    # Stage recording
    def _append(self, kind: StageKind, body: Any) -> PipelineBuilder:
        self._stages.append(StageDescriptor(kind, body))
        self.logger.stage_added(kind.value, len(self._stages) - 1)
        return self

    def _sanitized(self, kind: StageKind, body: StageParams) -> Dict[str, Any]:
        if self.config.sanitize and get_stage_spec(kind).sanitize:
            return omit_empty(body)
        return dict(body)

    def _add_stage(self, kind: StageKind, argument: Any) -> PipelineBuilder:
        spec = get_stage_spec(kind)
        self.validator.check_argument(spec, argument)

        if spec.shape is ArgumentShape.MAPPING:
            return self._append(kind, self._sanitized(kind, argument))
        if spec.wrap_key:
            return self._append(kind, {spec.wrap_key: argument})
        return self._append(kind, argument)

    def _add_record(
        self, kind: StageKind, params: Optional[StageParams], fields: Dict[str, Any]
    ) -> PipelineBuilder:
        spec = get_stage_spec(kind)
        record = self.validator.collect_record(spec, params, fields)
        return self._append(kind, self._sanitized(kind, record))

    # Stages
    def match(self, filter: Optional[StageParams] = None) -> PipelineBuilder:
        """Add a ``$match`` stage filtering documents by ``filter``."""
        return self._add_stage(StageKind.MATCH, filter)

    def project(self, projection: Optional[StageParams] = None) -> PipelineBuilder:
        """Add a ``$project`` stage."""
        return self._add_stage(StageKind.PROJECT, projection)

    def add_fields(self, new_fields: Optional[StageParams] = None) -> PipelineBuilder:
        """Add an ``$addFields`` stage."""
        return self._add_stage(StageKind.ADD_FIELDS, new_fields)

    def bucket(
        self, params: Optional[StageParams] = None, **fields: Any
    ) -> PipelineBuilder:
        """
        Add a ``$bucket`` stage.

        Required: ``groupBy``, ``boundaries``. Optional: ``default``
        (pass as ``default_`` when using keywords), ``output``.
        """
        return self._add_record(StageKind.BUCKET, params, fields)

    def bucket_auto(
        self, params: Optional[StageParams] = None, **fields: Any
    ) -> PipelineBuilder:
        """
        Add a ``$bucketAuto`` stage.

        Required: ``groupBy``, ``buckets``. Optional: ``output``,
        ``granularity``.
        """
        return self._add_record(StageKind.BUCKET_AUTO, params, fields)

    def coll_stats(
        self, params: Optional[StageParams] = None, **fields: Any
    ) -> PipelineBuilder:
        """Add a ``$collStats`` stage; every field is optional."""
        return self._add_record(StageKind.COLL_STATS, params, fields)

    def count(self, count: Optional[str] = None) -> PipelineBuilder:
        """Add a ``$count`` stage writing the count to field ``count``."""
        return self._add_stage(StageKind.COUNT, count)

    def facet(self, facet: Optional[StageParams] = None) -> PipelineBuilder:
        """
        Add a ``$facet`` stage.

        ``facet`` maps output names to complete sub-pipelines. The
        sub-pipelines are recorded as given and are not validated.
        """
        self.logger.warning(
            "facet expects a complete sub-pipeline mapping; its stages are not validated"
        )
        return self._add_stage(StageKind.FACET, facet)

    def geo_near(self, geo_near: Optional[StageParams] = None) -> PipelineBuilder:
        """Add a ``$geoNear`` stage."""
        return self._add_stage(StageKind.GEO_NEAR, geo_near)

    def graph_lookup(
        self, params: Optional[StageParams] = None, **fields: Any
    ) -> PipelineBuilder:
        """
        Add a ``$graphLookup`` stage.

        Required: ``from``, ``startWith``, ``connectFromField``, ``as``.
        """
        return self._add_record(StageKind.GRAPH_LOOKUP, params, fields)

    def group(self, group: Optional[StageParams] = None) -> PipelineBuilder:
        """Add a ``$group`` stage."""
        return self._add_stage(StageKind.GROUP, group)

    def index_stats(self) -> PipelineBuilder:
        """Add an ``$indexStats`` stage."""
        return self._append(StageKind.INDEX_STATS, {})

    def limit(self, count: Optional[int] = None) -> PipelineBuilder:
        """Add a ``$limit`` stage."""
        return self._add_stage(StageKind.LIMIT, count)

    def lookup(
        self, params: Optional[StageParams] = None, **fields: Any
    ) -> PipelineBuilder:
        """
        Add a ``$lookup`` stage.

        Required: ``from``, ``localField``, ``foreignField``, ``as``. Use
        ``from_`` and ``as_`` when passing them as keywords.
        """
        return self._add_record(StageKind.LOOKUP, params, fields)

    def out(self, out: Any = None) -> PipelineBuilder:
        """Add an ``$out`` stage writing to collection ``out``."""
        return self._add_stage(StageKind.OUT, out)

    def redact(self, redact: Optional[StageParams] = None) -> PipelineBuilder:
        """Add a ``$redact`` stage."""
        return self._add_stage(StageKind.REDACT, redact)

    def replace_root(
        self, replace_root: Optional[StageParams] = None
    ) -> PipelineBuilder:
        """Add a ``$replaceRoot`` stage, e.g. ``{"newRoot": "$doc"}``."""
        return self._add_stage(StageKind.REPLACE_ROOT, replace_root)

    def sample(self, size: Optional[int] = None) -> PipelineBuilder:
        """Add a ``$sample`` stage of ``size`` random documents."""
        return self._add_stage(StageKind.SAMPLE, size)

    def skip(self, count: Optional[int] = None) -> PipelineBuilder:
        """Add a ``$skip`` stage."""
        return self._add_stage(StageKind.SKIP, count)

    def sort(self, sort: Optional[StageParams] = None) -> PipelineBuilder:
        """Add a ``$sort`` stage."""
        return self._add_stage(StageKind.SORT, sort)

    def sort_by_count(self, path_to_field: Any = None) -> PipelineBuilder:
        """Add a ``$sortByCount`` stage grouping by ``path_to_field``."""
        return self._add_stage(StageKind.SORT_BY_COUNT, path_to_field)

    def unwind(
        self, params: Optional[StageParams] = None, **fields: Any
    ) -> PipelineBuilder:
        """
        Add an ``$unwind`` stage.

        Required: ``path``. Optional: ``includeArrayIndex``,
        ``preserveNullAndEmptyArrays``.
        """
        return self._add_record(StageKind.UNWIND, params, fields)

    # Finalization
    def build(self) -> PipelineExecutor:
        """
        Return an executor for the stages recorded so far.

        The executor holds its own copy of the pipeline; later calls on
        this builder do not change it.
        """
        return PipelineExecutor(
            self.collection,
            tuple(self._stages),
            logger=self.logger,
            indent=self.config.indent,
        )

    async def build_and_execute(self) -> Any:
        """Build the pipeline and run it once."""
        return await self.build().execute()
