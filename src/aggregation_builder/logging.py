"""
Logging for the aggregation builder.

This module provides the logger that builders and executors receive by
injection. Advisories (such as the facet note) and pipeline renderings are
written here. Each instance owns a child of the named logger, so configuring
one instance never touches another.
"""

import itertools
import logging
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Dict, Generator, Optional, Union

_instance_ids = itertools.count(1)


class PipelineLogger:
    """
    Simple, focused logging for pipeline construction and execution.

    Features:
    - Basic logging levels (DEBUG, INFO, WARNING, ERROR)
    - Console and file output
    - Simple context management
    - Performance timing
    """

    def __init__(
        self,
        name: str = "aggregation_builder",
        level: int = logging.INFO,
        log_file: Optional[str] = None,
        verbose: bool = True,
    ):
        self.name = name
        self.level = level
        self.log_file = log_file
        self.verbose = verbose

        # Per-instance child logger; records still propagate to the named parent
        self.logger = logging.getLogger(f"{name}.{next(_instance_ids)}")
        self.logger.setLevel(level)

        # Setup handlers
        self._setup_handlers()

        # Performance tracking
        self._timers: Dict[str, datetime] = {}

    def _setup_handlers(self) -> None:
        """Setup logging handlers."""
        if self.verbose:
            console_handler = logging.StreamHandler(sys.stdout)
            console_formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%H:%M:%S",
            )
            console_handler.setFormatter(console_formatter)
            console_handler.setLevel(self.level)
            self.logger.addHandler(console_handler)

        if self.log_file:
            file_handler = logging.FileHandler(self.log_file)
            file_formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
            file_handler.setFormatter(file_formatter)
            file_handler.setLevel(self.level)
            self.logger.addHandler(file_handler)

    # Basic logging methods
    def debug(self, message: str, **kwargs: Union[str, int, float, bool, None]) -> None:
        """Log debug message."""
        self.logger.debug(self._format_message(message, kwargs))

    def info(self, message: str, **kwargs: Union[str, int, float, bool, None]) -> None:
        """Log info message."""
        self.logger.info(self._format_message(message, kwargs))

    def warning(
        self, message: str, **kwargs: Union[str, int, float, bool, None]
    ) -> None:
        """Log warning message."""
        self.logger.warning(self._format_message(message, kwargs))

    def error(self, message: str, **kwargs: Union[str, int, float, bool, None]) -> None:
        """Log error message."""
        self.logger.error(self._format_message(message, kwargs))

    def _format_message(
        self, message: str, kwargs: Dict[str, Union[str, int, float, bool, None]]
    ) -> str:
        """Format message with keyword arguments."""
        if not kwargs:
            return message
        kwargs_str = ", ".join(f"{k}={v}" for k, v in kwargs.items())
        return f"{message} ({kwargs_str})"

    # Performance timing
    @contextmanager
    def time_operation(self, operation_name: str) -> Generator[None, None, None]:
        """Context manager for timing operations."""
        start_time = datetime.now(timezone.utc)
        self._timers[operation_name] = start_time
        try:
            yield
        finally:
            duration = (datetime.now(timezone.utc) - start_time).total_seconds()
            self.debug(f"Operation '{operation_name}' took {duration:.3f}s")
            self._timers.pop(operation_name, None)

    # Stage logging
    def stage_added(self, stage: str, position: int) -> None:
        """Log a stage appended to a pipeline."""
        self.debug(f"Added ${stage} stage", position=position)

    def pipeline_submitted(self, collection: str, stage_count: int) -> None:
        """Log a pipeline handed to a collection."""
        self.info(
            f"Submitting aggregation to {collection}", stage_count=stage_count
        )

    # Utility methods
    def set_level(self, level: int) -> None:
        """Set logging level."""
        self.level = level
        self.logger.setLevel(level)
        for handler in self.logger.handlers:
            handler.setLevel(level)

    def add_handler(self, handler: logging.Handler) -> None:
        """Add a custom logging handler."""
        self.logger.addHandler(handler)

    def remove_handler(self, handler: logging.Handler) -> None:
        """Remove a logging handler."""
        self.logger.removeHandler(handler)

    def clear_handlers(self) -> None:
        """Clear all logging handlers."""
        self.logger.handlers.clear()

    def close(self) -> None:
        """Close all logging handlers, especially file handlers."""
        for handler in self.logger.handlers[:]:
            handler.close()
            self.logger.removeHandler(handler)
