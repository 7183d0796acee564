"""Searchable document models and their declared index schemas.

Mappings are written out by hand rather than inferred from the models, so
what the engine stores is explicit (keyword vs analyzed text).
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from elasticdemo.search.base_search import FieldType, IndexDefinition


class FileRecord(BaseModel):
    """A file attached to a company section, denormalized for search."""

    id: str
    company_id: UUID
    company_name: str
    section_id: str
    section_name: str
    section_number: str
    file_name: str
    content_type: str
    title: str
    file_text: str
    created_on: datetime


class CatalogItem(BaseModel):
    """A catalog entry (a book in the demo data)."""

    id: UUID = Field(default_factory=uuid4)
    title: str
    description: str


FILE_RECORD_SCHEMA = IndexDefinition(
    name="epfiles",
    fields={
        "id": FieldType.KEYWORD,
        "company_id": FieldType.KEYWORD,
        "company_name": FieldType.TEXT,
        "section_id": FieldType.KEYWORD,
        "section_name": FieldType.TEXT,
        "section_number": FieldType.TEXT,
        "file_name": FieldType.TEXT,
        "content_type": FieldType.KEYWORD,
        "title": FieldType.TEXT,
        "file_text": FieldType.TEXT,
        "created_on": FieldType.DATE,
    },
)

CATALOG_ITEM_SCHEMA = IndexDefinition(
    name="books",
    fields={
        "id": FieldType.KEYWORD,
        "title": FieldType.TEXT,
        "description": FieldType.TEXT,
    },
)
