"""
Enums for the aggregation builder models.

Key Components:
    - **StageKind**: The aggregation stages the builder can emit
    - **ArgumentShape**: How a stage method's argument is shaped

Example:
    >>> from aggregation_builder.models.enums import StageKind
    >>> StageKind.ADD_FIELDS.value
    'addFields'
    >>> StageKind.ADD_FIELDS.operator
    '$addFields'
"""

from enum import Enum


class StageKind(Enum):
    """Enumeration of supported aggregation stages.

    The value is the stage name as the store spells it, without the
    leading ``$``.
    """

    MATCH = "match"
    PROJECT = "project"
    ADD_FIELDS = "addFields"
    BUCKET = "bucket"
    BUCKET_AUTO = "bucketAuto"
    COLL_STATS = "collStats"
    COUNT = "count"
    FACET = "facet"
    GEO_NEAR = "geoNear"
    GRAPH_LOOKUP = "graphLookup"
    GROUP = "group"
    INDEX_STATS = "indexStats"
    LIMIT = "limit"
    LOOKUP = "lookup"
    OUT = "out"
    REDACT = "redact"
    REPLACE_ROOT = "replaceRoot"
    SAMPLE = "sample"
    SKIP = "skip"
    SORT = "sort"
    SORT_BY_COUNT = "sortByCount"
    UNWIND = "unwind"

    @property
    def operator(self) -> str:
        """Pipeline operator key, e.g. ``$match``."""
        return f"${self.value}"


class ArgumentShape(Enum):
    """Enumeration of stage argument shapes.

    - MAPPING: the argument is the stage body itself
    - RECORD: the argument is a record of declared fields
    - SCALAR: the argument is a single value
    - NONE: the stage takes no argument
    """

    MAPPING = "mapping"
    RECORD = "record"
    SCALAR = "scalar"
    NONE = "none"
