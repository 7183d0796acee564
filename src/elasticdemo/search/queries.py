"""Query builders and the executor that runs them.

Builders are pure functions returning engine query bodies:

- `phrase`: tokens must appear contiguously and in order (`match_phrase`).
- `match`: analyzed, order-independent, relevance ranked (`match`).
- `term`: exact value on a keyword field.
- `any_of` / `match_or_phrases`: boolean OR, a document matches if any clause does.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Sequence

from elasticsearch import AsyncElasticsearch

from elasticdemo.exceptions import QueryRejectedError
from elasticdemo.search.base_search import SearchHit
from elasticdemo.search.client import engine_errors, response_body

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
# Engine default for index.max_result_window
MAX_PAGE_SIZE = 10_000

Query = Dict[str, Any]


def _check_field(field: str) -> str:
    name = (field or "").strip()
    if not name:
        raise QueryRejectedError("Query field name must not be empty")
    return name


def phrase(field: str, text: str) -> Query:
    return {"match_phrase": {_check_field(field): {"query": text}}}


def match(field: str, text: str) -> Query:
    return {"match": {_check_field(field): {"query": text}}}


def term(field: str, value: Any) -> Query:
    return {"term": {_check_field(field): {"value": value}}}


def any_of(*clauses: Query) -> Query:
    if not clauses:
        raise QueryRejectedError("any_of() needs at least one clause")
    return {"bool": {"should": list(clauses), "minimum_should_match": 1}}


def match_or_phrases(text: str, match_field: str, phrase_fields: Sequence[str]) -> Query:
    """Analyzed match on `match_field` OR a phrase match on each of `phrase_fields`."""
    return any_of(match(match_field, text), *(phrase(f, text) for f in phrase_fields))


def _to_hit(raw: Dict[str, Any]) -> SearchHit:
    return SearchHit(
        document_id=str(raw.get("_id", "")),
        score=float(raw.get("_score") or 0.0),
        source=dict(raw.get("_source") or {}),
        index=raw.get("_index"),
    )


class QueryExecutor:
    """Runs queries against an index and returns ranked hits."""

    def __init__(self, client: AsyncElasticsearch) -> None:
        self._client = client

    async def search(
        self,
        index: str,
        query: Query,
        *,
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> List[SearchHit]:
        """Execute `query` and return one page of hits, best score first.

        An empty list means nothing matched; it is not an error.
        """
        if offset < 0:
            raise QueryRejectedError(f"offset must be >= 0, got {offset}")
        if not 1 <= limit <= MAX_PAGE_SIZE:
            raise QueryRejectedError(f"limit must be between 1 and {MAX_PAGE_SIZE}, got {limit}")
        with engine_errors(QueryRejectedError):
            resp = response_body(
                await self._client.search(index=index, query=query, from_=offset, size=limit)
            )
        raw_hits = (resp.get("hits") or {}).get("hits") or []
        hits = [_to_hit(h) for h in raw_hits]
        # stable: ties keep engine order
        hits.sort(key=lambda h: h.score, reverse=True)
        logger.debug(f"Query on {index} returned {len(hits)} hit(s)")
        return hits

    async def search_phrase(self, index: str, field: str, text: str, **page: int) -> List[SearchHit]:
        return await self.search(index, phrase(field, text), **page)

    async def search_match(self, index: str, field: str, text: str, **page: int) -> List[SearchHit]:
        return await self.search(index, match(field, text), **page)

    async def search_any(
        self,
        index: str,
        text: str,
        match_field: str,
        phrase_fields: Sequence[str],
        **page: int,
    ) -> List[SearchHit]:
        return await self.search(index, match_or_phrases(text, match_field, phrase_fields), **page)
