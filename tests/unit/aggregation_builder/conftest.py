"""
Shared fixtures for aggregation_builder tests.
"""

import pytest

from aggregation_builder import PipelineBuilder
from aggregation_builder.config import create_strict_config
from aggregation_builder.logging import PipelineLogger


class FakeAsyncCollection:
    """Collection whose aggregate() returns a coroutine, like async drivers."""

    def __init__(self, results=None):
        self.results = results if results is not None else [{"name": "Lilly"}]
        self.calls = []

    async def aggregate(self, pipeline):
        self.calls.append(pipeline)
        return list(self.results)


class FakeSyncCollection:
    """Collection whose aggregate() returns the records directly."""

    def __init__(self, results=None):
        self.results = results if results is not None else [{"total": 3}]
        self.calls = []

    def aggregate(self, pipeline):
        self.calls.append(pipeline)
        return list(self.results)


class FailingCollection:
    """Collection whose aggregate() always fails with ``error``."""

    def __init__(self, error):
        self.error = error
        self.calls = []

    async def aggregate(self, pipeline):
        self.calls.append(pipeline)
        raise self.error


class PlainObject:
    """Handle without an aggregate method."""

    aggregate = None


@pytest.fixture
def collection():
    """Async fake collection fixture."""
    return FakeAsyncCollection()


@pytest.fixture
def sync_collection():
    """Sync fake collection fixture."""
    return FakeSyncCollection()


@pytest.fixture
def logger():
    """Quiet PipelineLogger fixture."""
    return PipelineLogger(verbose=False, name="TestAggregationLogger")


@pytest.fixture
def builder(collection, logger):
    """Sanitizing builder bound to the async fake collection."""
    return PipelineBuilder(collection, logger=logger)


@pytest.fixture
def strict_builder(collection, logger):
    """Builder that records stage bodies without sanitization."""
    return PipelineBuilder(collection, config=create_strict_config(), logger=logger)


@pytest.fixture
def not_a_collection():
    """Object that cannot run aggregations."""
    return PlainObject()


@pytest.fixture
def failing_collection():
    """Factory for collections that raise the given error on aggregate()."""
    return FailingCollection
