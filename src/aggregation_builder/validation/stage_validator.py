"""
Stage validator for aggregation stage arguments.

This module checks the syntactic shape of each stage's argument before a
builder records the stage. It never inspects stage semantics.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from ..errors import SuggestionGenerator, ValidationError, build_validation_context
from ..logging import PipelineLogger
from ..models import ArgumentShape, StageSpec
from .utils import is_absent, normalize_field_name


class StageValidator:
    """
    Validates stage arguments against their StageSpec.

    Every check raises ``ValidationError`` naming the stage and, where it
    applies, the offending field.
    """

    def __init__(self, logger: Optional[PipelineLogger] = None):
        """
        Initialize the stage validator.

        Args:
            logger: Optional logger instance for validation messages
        """
        self.logger = logger or PipelineLogger()

    def check_argument(self, spec: StageSpec, argument: Any) -> None:
        """
        Check the argument of a MAPPING or SCALAR stage.

        Args:
            spec: Stage specification
            argument: The value passed to the stage method

        Raises:
            ValidationError: If the argument is missing or is not a mapping
                where one is required
        """
        field = spec.required[0]
        if is_absent(argument):
            self._raise_missing(spec, field)
        if spec.shape is ArgumentShape.MAPPING and not isinstance(argument, Mapping):
            self._raise_not_mapping(spec, argument)

    def collect_record(
        self, spec: StageSpec, params: Any, fields: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Merge and check the arguments of a RECORD stage.

        Keyword ``fields`` override keys of ``params``; a trailing underscore
        on a keyword is stripped. Only the fields the stage declares are kept,
        in declaration order.

        Args:
            spec: Stage specification
            params: Positional parameter mapping, or None
            fields: Keyword fields

        Returns:
            The declared fields that were supplied

        Raises:
            ValidationError: If ``params`` is not a mapping or a required
                field is missing. Fields the stage does not declare are
                logged at debug level and dropped.
        """
        if params is None:
            params = {}
        elif not isinstance(params, Mapping):
            self._raise_not_mapping(spec, params)

        merged: Dict[str, Any] = dict(params)
        for name, value in fields.items():
            merged[normalize_field_name(name)] = value

        unknown = [name for name in merged if name not in spec.fields]
        if unknown:
            self.logger.debug(
                f"Ignoring undeclared fields of ${spec.name}", fields=", ".join(unknown)
            )

        self.check_required(spec, merged)
        return {name: merged[name] for name in spec.fields if name in merged}

    def check_required(self, spec: StageSpec, params: Mapping[str, Any]) -> None:
        """
        Check that every required field is present and not None.

        Raises:
            ValidationError: For the first missing field
        """
        for field in spec.required:
            if is_absent(params.get(field)):
                self._raise_missing(spec, field)

    def missing_fields(self, spec: StageSpec, params: Mapping[str, Any]) -> List[str]:
        """Return the required fields absent from ``params``."""
        return [field for field in spec.required if is_absent(params.get(field))]

    def _raise_missing(self, spec: StageSpec, field: str) -> None:
        raise ValidationError(
            f"Field {field} is required in stage {spec.name}",
            field=field,
            stage=spec.name,
            context=build_validation_context(spec.name, field),
            suggestions=SuggestionGenerator.suggest_fix_for_missing_field(
                spec.name, field
            ),
        )

    def _raise_not_mapping(self, spec: StageSpec, argument: Any) -> None:
        raise ValidationError(
            f"Parameter must be a mapping in stage {spec.name}",
            value=argument,
            stage=spec.name,
            context=build_validation_context(spec.name),
            suggestions=SuggestionGenerator.suggest_fix_for_invalid_argument(
                spec.name, argument
            ),
        )
