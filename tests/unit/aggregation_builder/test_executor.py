"""
Tests for PipelineExecutor rendering and deferred execution.

Coroutines are driven with asyncio.run so no async test plugin is needed.
"""

import asyncio
import json
from datetime import datetime
from unittest.mock import patch

import pytest

from aggregation_builder import PipelineBuilder, PipelineExecutor
from aggregation_builder.errors import ExecutionError
from aggregation_builder.models import StageDescriptor, StageKind


@pytest.fixture
def executor(builder):
    """Executor for a three-stage pipeline."""
    return (
        builder.match({"color": "black"})
        .project({"_id": False, "name": True})
        .limit(1)
        .build()
    )


class TestExecutorState:
    """Test executor construction and read-only state."""

    def test_pipeline_is_tuple(self, collection, logger):
        """Test the pipeline is stored as an immutable tuple."""
        stages = [StageDescriptor(StageKind.LIMIT, 1)]
        executor = PipelineExecutor(collection, stages, logger=logger)
        stages.append(StageDescriptor(StageKind.SKIP, 2))

        assert executor.pipeline == (StageDescriptor(StageKind.LIMIT, 1),)
        assert len(executor) == 1

    def test_properties_are_read_only(self, executor):
        """Test collection and pipeline cannot be reassigned."""
        with pytest.raises(AttributeError):
            executor.pipeline = ()
        with pytest.raises(AttributeError):
            executor.collection = None

    def test_default_logger(self, collection):
        """Test an executor without a logger creates one."""
        executor = PipelineExecutor(collection, [])

        assert executor.logger is not None
        assert executor.to_list() == []


class TestRender:
    """Test pipeline rendering for diagnostics."""

    def test_render_is_indented_json(self, executor):
        """Test render output parses back to the pipeline."""
        rendered = executor.render()

        assert json.loads(rendered) == executor.to_list()
        assert '\n    {' in rendered

    def test_render_keeps_non_json_values(self, builder):
        """Test values JSON cannot encode are rendered as text."""
        moment = datetime(2024, 1, 2, 3, 4, 5)
        executor = builder.match({"born": {"$gte": moment}}).build()

        assert str(moment) in executor.render()

    def test_print_logs_and_returns_self(self, executor):
        """Test print writes the rendering to the logger."""
        with patch.object(executor.logger.logger, "info") as mock_info:
            result = executor.print()

        assert result is executor
        mock_info.assert_called_once()
        message = mock_info.call_args[0][0]
        assert '"$match"' in message
        assert '"$limit": 1' in message

    def test_default_print_writes_stdout(self, collection, capsys):
        """Test print reaches stdout when no logger is injected."""
        PipelineBuilder(collection).limit(1).build().print()

        captured = capsys.readouterr()
        assert '"$limit": 1' in captured.out

    def test_inspect_is_print(self, executor):
        """Test inspect is an alias of print."""
        assert PipelineExecutor.inspect is PipelineExecutor.print
        assert executor.inspect() is executor


class TestExecute:
    """Test submitting the pipeline to the collection."""

    def test_execute_delegates_pipeline(self, executor, collection):
        """Test execute passes exactly the built pipeline to aggregate()."""
        result = asyncio.run(executor.execute())

        assert result == [{"name": "Lilly"}]
        assert collection.calls == [
            [
                {"$match": {"color": "black"}},
                {"$project": {"_id": False, "name": True}},
                {"$limit": 1},
            ]
        ]

    def test_execute_with_sync_collection(self, sync_collection, logger):
        """Test a non-awaitable aggregate() result is returned as is."""
        executor = PipelineBuilder(sync_collection, logger=logger).count("n").build()

        result = asyncio.run(executor.execute())

        assert result == [{"total": 3}]
        assert sync_collection.calls == [[{"$count": "n"}]]

    def test_execute_twice_submits_equal_pipelines(self, executor, collection):
        """Test repeated runs submit the same structure."""
        asyncio.run(executor.execute())
        asyncio.run(executor.execute())

        assert len(collection.calls) == 2
        assert collection.calls[0] == collection.calls[1]
        assert collection.calls[0] is not collection.calls[1]

    def test_collection_mutation_does_not_leak(self, executor, collection):
        """Test a collection that mutates its argument cannot change the executor."""
        asyncio.run(executor.execute())
        collection.calls[0].clear()

        assert len(executor.to_list()) == 3

    def test_print_then_execute(self, executor, collection):
        """Test print chains into execute."""
        result = asyncio.run(executor.print().execute())

        assert result == [{"name": "Lilly"}]

    def test_failure_propagates_unchanged(self, failing_collection, logger):
        """Test collection errors reach the caller as the same object."""
        error = ExecutionError("aggregation failed", stage_count=1)
        executor = (
            PipelineBuilder(failing_collection(error), logger=logger).limit(1).build()
        )

        with pytest.raises(ExecutionError) as exc_info:
            asyncio.run(executor.execute())

        assert exc_info.value is error

    def test_foreign_failure_not_wrapped(self, failing_collection, logger):
        """Test driver exceptions are not converted to ExecutionError."""
        error = RuntimeError("connection reset")
        executor = (
            PipelineBuilder(failing_collection(error), logger=logger).limit(1).build()
        )

        with pytest.raises(RuntimeError) as exc_info:
            asyncio.run(executor.execute())

        assert exc_info.value is error

    def test_build_and_execute(self, builder, collection):
        """Test the build-then-run shortcut."""
        result = asyncio.run(builder.unwind({"path": "$paws"}).build_and_execute())

        assert result == [{"name": "Lilly"}]
        assert collection.calls == [[{"$unwind": {"path": "$paws"}}]]

    def test_execute_logs_submission(self, executor):
        """Test execute logs the stage count."""
        with patch.object(executor.logger.logger, "info") as mock_info:
            asyncio.run(executor.execute())

        mock_info.assert_called_once()
        assert "stage_count=3" in mock_info.call_args[0][0]
