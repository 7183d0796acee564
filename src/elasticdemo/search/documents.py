"""Document writes (upserts) and point reads."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Union

from elasticsearch import AsyncElasticsearch
from pydantic import BaseModel

from elasticdemo.exceptions import QueryRejectedError, WriteRejectedError
from elasticdemo.search.base_search import WriteResult
from elasticdemo.search.client import engine_errors, response_body

logger = logging.getLogger(__name__)

Document = Union[BaseModel, Mapping[str, Any]]


def to_source(document: Document) -> Dict[str, Any]:
    """Serialize a model or mapping into a JSON-ready `_source` dict."""
    if isinstance(document, BaseModel):
        return document.model_dump(mode="json")
    if isinstance(document, Mapping):
        return dict(document)
    raise WriteRejectedError(f"Unsupported document type: {type(document).__name__}")


class DocumentWriter:
    """Indexes documents into a named index.

    A document carrying an `id` is written under that id, so writing it again
    overwrites instead of duplicating. Without one, the engine assigns an id.
    """

    def __init__(self, client: AsyncElasticsearch) -> None:
        self._client = client

    async def upsert(self, index: str, document: Document) -> WriteResult:
        source = to_source(document)
        doc_id = source.get("id")
        kwargs: Dict[str, Any] = {"index": index, "document": source}
        if doc_id is not None and str(doc_id):
            kwargs["id"] = str(doc_id)
        with engine_errors(WriteRejectedError):
            resp = response_body(await self._client.index(**kwargs))
        return WriteResult(
            document_id=str(resp.get("_id", doc_id)),
            result=str(resp.get("result", "")),
            version=resp.get("_version"),
        )

    async def upsert_many(self, index: str, documents: Iterable[Document]) -> List[WriteResult]:
        """Upsert documents one by one, logging each confirmation."""
        results: List[WriteResult] = []
        for document in documents:
            res = await self.upsert(index, document)
            title = to_source(document).get("title", "")
            logger.info(f"Inserted {title}, has Id {res.document_id}")
            results.append(res)
        return results

    async def get(self, index: str, document_id: str) -> Dict[str, Any]:
        """Return the stored `_source` of a document by id."""
        with engine_errors(QueryRejectedError, index=index, document_id=document_id):
            resp = response_body(await self._client.get(index=index, id=document_id))
        return dict(resp.get("_source") or {})
