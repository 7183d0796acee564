"""The demo workflow: index, search, update, verify.

Writes are acknowledged before they are searchable, so every read that
depends on a previous write is wrapped in `retry_until`.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Dict, List, Optional

from elasticdemo.config import Settings
from elasticdemo.models import CATALOG_ITEM_SCHEMA, FILE_RECORD_SCHEMA
from elasticdemo.sample_data import generate_catalog_items, generate_file_records
from elasticdemo.search.base_search import SearchHit, UpdateOutcome
from elasticdemo.search.consistency import retry_until
from elasticdemo.search.queries import term
from elasticdemo.search.store import DocumentStore

logger = logging.getLogger(__name__)

ANY_MATCH_TEXT = "runs and jumps"
SCRIPTED_VALUES = {"title": "new title", "description": "new desc"}
REPLACED_VALUES = {"title": "Updated from update", "description": "also update from update"}


@dataclass
class DemoReport:
    """What a demo run wrote, found and changed."""

    catalog_index: str
    file_index: str
    files_written: int = 0
    items_written: int = 0
    phrase_hits: List[SearchHit] = field(default_factory=list)
    match_hits: List[SearchHit] = field(default_factory=list)
    any_hits: List[SearchHit] = field(default_factory=list)
    updated_by_query: int = 0
    replace_outcome: Optional[UpdateOutcome] = None
    first_item: Dict[str, Any] = field(default_factory=dict)
    last_item: Dict[str, Any] = field(default_factory=dict)


async def run_demo(store: DocumentStore, settings: Settings) -> DemoReport:
    es = settings.elasticsearch
    poll = partial(
        retry_until,
        interval=settings.consistency.interval,
        timeout=settings.consistency.timeout,
        max_attempts=settings.consistency.max_attempts,
    )

    catalog_index = await store.indices.create_or_replace(CATALOG_ITEM_SCHEMA.renamed(es.catalog_index))
    file_index = es.file_index
    await store.indices.ensure(FILE_RECORD_SCHEMA.renamed(file_index))
    report = DemoReport(catalog_index=catalog_index, file_index=file_index)

    files = generate_file_records(settings.demo.file_count)
    items = generate_catalog_items(settings.demo.catalog_count)

    # Disjoint indices, so the two collections are written concurrently
    file_results, item_results = await asyncio.gather(
        store.documents.upsert_many(file_index, files),
        store.documents.upsert_many(catalog_index, items),
    )
    report.files_written = len(file_results)
    report.items_written = len(item_results)

    title = files[0].title
    report.phrase_hits = await poll(lambda: store.queries.search_phrase(file_index, "title", title))
    logger.info(f"Exact title search for {title} found {len(report.phrase_hits)} match(es)")

    logger.info(f"Analyzed search for {ANY_MATCH_TEXT}")
    report.match_hits = await poll(
        lambda: store.queries.search_match(file_index, "file_text", ANY_MATCH_TEXT, offset=0, limit=10)
    )
    logger.info(
        f"Found {len(report.match_hits)} match(es), "
        f"high score = {report.match_hits[0].score}, low score = {report.match_hits[-1].score}"
    )

    file_name = files[0].file_name
    report.any_hits = await poll(
        lambda: store.queries.search_any(
            file_index, file_name, "file_text", ["title", "file_name"], offset=0, limit=10
        )
    )
    logger.info(f"Boolean OR search for {file_name} found {len(report.any_hits)} match(es)")

    first_id = str(items[0].id)
    report.updated_by_query = await poll(
        lambda: store.updates.assign_fields(catalog_index, term("id", first_id), SCRIPTED_VALUES)
    )

    last_id = str(items[-1].id)
    report.replace_outcome = await poll(
        lambda: store.updates.replace(catalog_index, last_id, REPLACED_VALUES),
        is_ready=lambda outcome: outcome.changed,
    )

    report.first_item = await store.documents.get(catalog_index, first_id)
    report.last_item = await store.documents.get(catalog_index, last_id)
    return report
