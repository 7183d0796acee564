"""Search tools for FastMCP.

Thin wrappers over the shared `DocumentStore`: three query shapes, point
reads and the two update paths.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from fastmcp import FastMCP

from elasticdemo.search.base_search import SearchHit
from elasticdemo.search.queries import DEFAULT_PAGE_SIZE, term


def _serialize_hit(hit: SearchHit) -> Dict[str, Any]:
    return {
        "id": hit.document_id,
        "score": hit.score,
        "index": hit.index,
        "source": dict(hit.source),
    }


def _hits_payload(hits: List[SearchHit]) -> Dict[str, Any]:
    return {"count": len(hits), "hits": [_serialize_hit(h) for h in hits]}


def register_search_tools(mcp: FastMCP, get_state: Callable[[], Any]) -> None:
    """Register search tools on the given FastMCP instance.

    The `get_state` callable should return an object with attribute `store`
    (a `DocumentStore`).
    """

    def _store() -> Any:
        state = get_state()
        store = getattr(state, "store", None) if state is not None else None
        if store is None:
            raise RuntimeError(
                "Search store is not configured. Set ELASTICDEMO_ELASTICSEARCH__URI in env/.env."
            )
        return store

    @mcp.tool
    async def search_phrase(
        index: str, field: str, text: str, offset: int = 0, limit: int = DEFAULT_PAGE_SIZE
    ) -> Dict[str, Any]:
        """Find documents whose `field` contains `text` as a contiguous phrase."""
        hits = await _store().queries.search_phrase(index, field, text, offset=offset, limit=limit)
        return _hits_payload(hits)

    @mcp.tool
    async def search_match(
        index: str, field: str, text: str, offset: int = 0, limit: int = DEFAULT_PAGE_SIZE
    ) -> Dict[str, Any]:
        """Analyzed full-text search on one field (word order does not matter)."""
        hits = await _store().queries.search_match(index, field, text, offset=offset, limit=limit)
        return _hits_payload(hits)

    @mcp.tool
    async def search_any(
        index: str,
        text: str,
        match_field: str,
        phrase_fields: List[str],
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> Dict[str, Any]:
        """Boolean OR search.

        Parameters
        ----------
        index: str
            Index name.
        text: str
            Text matched against every clause.
        match_field: str
            Field searched with an analyzed match.
        phrase_fields: list[str]
            Fields searched with a phrase match.
        """
        hits = await _store().queries.search_any(
            index, text, match_field, phrase_fields, offset=offset, limit=limit
        )
        return _hits_payload(hits)

    @mcp.tool
    async def get_document(index: str, document_id: str) -> Dict[str, Any]:
        """Fetch a stored document by id."""
        source = await _store().documents.get(index, document_id)
        return {"id": document_id, "source": source}

    @mcp.tool
    async def assign_fields_by_id(
        index: str, document_id: str, values: Dict[str, Any], id_field: Optional[str] = "id"
    ) -> Dict[str, Any]:
        """Set field values on documents whose `id_field` equals `document_id` (scripted update).

        Returns {"updated": n}; 0 means no document matched.
        """
        updated = await _store().updates.assign_fields(
            index, term(id_field or "id", document_id), values
        )
        return {"updated": updated}

    @mcp.tool
    async def replace_document(index: str, document_id: str, values: Dict[str, Any]) -> Dict[str, Any]:
        """Merge `values` into a document by id. Result is "updated" or "noop"."""
        outcome = await _store().updates.replace(index, document_id, values)
        return {"id": document_id, "result": outcome.value}
