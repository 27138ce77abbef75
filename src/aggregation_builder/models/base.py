"""
Base class for the aggregation builder models.

Provides shared validation, serialization and representation for the
dataclass models (stage descriptors, builder configuration).
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from typing import Any, Dict


@dataclass(frozen=True)
class BaseModel(ABC):
    """
    Base class for all builder models with common functionality.

    Subclasses are frozen dataclasses that implement ``validate``.
    """

    @abstractmethod
    def validate(self) -> None:
        """Validate the model and raise if it is invalid."""
        pass

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary.

        Nested models that have a ``to_dict`` method are converted
        recursively.
        """
        result: Dict[str, Any] = {}
        for field_info in fields(self):
            value = getattr(self, field_info.name)
            if hasattr(value, "to_dict"):
                result[field_info.name] = value.to_dict()
            else:
                result[field_info.name] = value
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert model to JSON string.

        Values JSON cannot encode natively (dates, object ids, enums) are
        rendered with ``str``.
        """
        return json.dumps(self.to_dict(), default=str, indent=indent)

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({', '.join(f'{k}={v}' for k, v in self.to_dict().items())})"
