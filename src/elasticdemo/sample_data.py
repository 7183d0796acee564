"""Synthetic documents for the demo workflow.

String fields are filled as `<FieldName><hex uuid>` so every value is unique
and easy to trace back to the field it came from.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional

from elasticdemo.models import CatalogItem, FileRecord

FILE_TEXT_TEMPLATE = "The cat runs and jumps all morning long {now}"


def _filler(field_name: str) -> str:
    return f"{field_name}{uuid.uuid4().hex}"


def generate_file_records(count: int, now: Optional[datetime] = None) -> List[FileRecord]:
    """Build `count` file records sharing the same timestamp and body text."""
    now = now or datetime.now()
    text = FILE_TEXT_TEMPLATE.format(now=now)
    return [
        FileRecord(
            id=_filler("Id"),
            company_id=uuid.uuid4(),
            company_name=_filler("CompanyName"),
            section_id=_filler("SectionId"),
            section_name=_filler("SectionName"),
            section_number=_filler("SectionNumber"),
            file_name=_filler("FileName"),
            content_type=_filler("ContentType"),
            title=_filler("Title"),
            file_text=text,
            created_on=now,
        )
        for _ in range(count)
    ]


def generate_catalog_items(count: int, start: int = 0) -> List[CatalogItem]:
    """Build catalog items titled `Title - i` / `Description - i`."""
    return [
        CatalogItem(title=f"Title - {i}", description=f"Description - {i}")
        for i in range(start, start + count)
    ]
