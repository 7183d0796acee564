"""Shared value types for the search layer.

Defines index schemas, the shape of search hits and the acknowledgments
returned by writes and updates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel

M = TypeVar("M", bound=BaseModel)


class FieldType(str, Enum):
    """Engine field types used by the declared mappings."""

    KEYWORD = "keyword"
    TEXT = "text"
    DATE = "date"
    INTEGER = "integer"
    BOOLEAN = "boolean"


@dataclass(frozen=True, slots=True)
class IndexDefinition:
    """A named index bound to an explicit field -> type mapping."""

    name: str
    fields: Mapping[str, FieldType] = field(default_factory=dict)

    def mapping(self) -> Dict[str, Any]:
        return {"properties": {name: {"type": FieldType(t).value} for name, t in self.fields.items()}}

    def renamed(self, name: str) -> IndexDefinition:
        """Return the same schema under another index name (names come from config)."""
        return IndexDefinition(name=name, fields=dict(self.fields))


@dataclass(slots=True)
class SearchHit:
    """Represents a single search hit."""

    document_id: str
    score: float
    source: Dict[str, Any] = field(default_factory=dict)
    index: Optional[str] = None

    def to_model(self, model: Type[M]) -> M:
        return model.model_validate(self.source)


@dataclass(slots=True)
class WriteResult:
    """Acknowledgment of an accepted write (not a visibility guarantee)."""

    document_id: str
    result: str
    version: Optional[int] = None


class UpdateOutcome(str, Enum):
    """Explicit result code of a point update."""

    UPDATED = "updated"
    NOOP = "noop"

    @property
    def changed(self) -> bool:
        return self is UpdateOutcome.UPDATED
