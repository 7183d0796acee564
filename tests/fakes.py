"""In-memory stand-in for `AsyncElasticsearch` used by the tests.

Implements just enough of the engine for the query bodies built by
`elasticdemo.search.queries`: lowercase word tokenization, `match`,
`match_phrase`, `term` and `bool.should`. Writes become searchable on
refresh; `hidden_searches` delays that to simulate eventual consistency.
"""

from __future__ import annotations

import copy
import re
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from elastic_transport import ApiResponseMeta, HttpHeaders, NodeConfig
from elasticsearch import BadRequestError, NotFoundError

_TOKEN_RE = re.compile(r"\w+")


def api_error(cls: type, status: int, message: str) -> Exception:
    meta = ApiResponseMeta(
        status=status,
        http_version="1.1",
        headers=HttpHeaders(),
        duration=0.0,
        node=NodeConfig("http", "localhost", 9200),
    )
    return cls(message=message, meta=meta, body={"error": {"type": message}})


def tokens(value: Any) -> List[str]:
    return _TOKEN_RE.findall(str(value).lower())


def _contains_run(haystack: List[str], needle: List[str]) -> bool:
    n = len(needle)
    return n > 0 and any(haystack[i : i + n] == needle for i in range(len(haystack) - n + 1))


def score(query: Dict[str, Any], source: Dict[str, Any]) -> float:
    """Return a positive score when `source` matches `query`, else 0."""
    (kind, body), = query.items()
    if kind == "bool":
        clauses = body.get("should", [])
        scores = [score(c, source) for c in clauses]
        matched = [s for s in scores if s > 0]
        return sum(matched) if len(matched) >= body.get("minimum_should_match", 1) else 0.0
    (field, params), = body.items()
    if field not in source:
        return 0.0
    if kind == "term":
        return 1.0 if str(source[field]) == str(params["value"]) else 0.0
    field_tokens = tokens(source[field])
    query_tokens = tokens(params["query"])
    if kind == "match":
        hits = [t for t in set(query_tokens) if t in field_tokens]
        return float(len(hits)) / (1 + len(field_tokens)) * 10 if hits else 0.0
    if kind == "match_phrase":
        return float(len(query_tokens)) if _contains_run(field_tokens, query_tokens) else 0.0
    raise api_error(BadRequestError, 400, f"parsing_exception: unknown query [{kind}]")


class _Index:
    def __init__(self, mappings: Optional[Dict[str, Any]] = None) -> None:
        self.mappings = mappings or {"properties": {}}
        self.docs: Dict[str, Dict[str, Any]] = {}
        self.versions: Dict[str, int] = {}
        self.searchable: Dict[str, Dict[str, Any]] = {}

    def refresh(self) -> None:
        self.searchable = copy.deepcopy(self.docs)


class FakeIndices:
    def __init__(self, es: FakeElasticsearch) -> None:
        self._es = es

    async def exists(self, *, index: str) -> bool:
        self._es._maybe_fail("indices.exists")
        return index in self._es.store

    async def delete(self, *, index: str, ignore_unavailable: bool = False) -> Dict[str, Any]:
        self._es._maybe_fail("indices.delete")
        if index not in self._es.store:
            if ignore_unavailable:
                return {"acknowledged": True}
            raise api_error(NotFoundError, 404, "index_not_found_exception")
        del self._es.store[index]
        return {"acknowledged": True}

    async def create(self, *, index: str, mappings: Dict[str, Any]) -> Dict[str, Any]:
        self._es._maybe_fail("indices.create")
        if index in self._es.store:
            raise api_error(BadRequestError, 400, "resource_already_exists_exception")
        for name, spec in mappings.get("properties", {}).items():
            if spec.get("type") not in {"keyword", "text", "date", "integer", "boolean"}:
                raise api_error(BadRequestError, 400, f"mapper_parsing_exception: {name}")
        self._es.store[index] = _Index(copy.deepcopy(mappings))
        return {"acknowledged": True, "shards_acknowledged": True, "index": index}

    async def refresh(self, *, index: str) -> Dict[str, Any]:
        self._es._maybe_fail("indices.refresh")
        self._es._index(index).refresh()
        return {"_shards": {"total": 1, "successful": 1, "failed": 0}}


class FakeElasticsearch:
    """Async client double; every call is recorded in `calls`."""

    def __init__(self) -> None:
        self.store: Dict[str, _Index] = {}
        self.indices = FakeIndices(self)
        self.calls: List[str] = []
        self.fail_next: Optional[Exception] = None
        self.fail_on: Dict[str, Exception] = {}
        self.hidden_searches = 0
        self.alive = True
        self.closed = False

    def _maybe_fail(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail_on:
            raise self.fail_on.pop(name)
        if self.fail_next is not None:
            exc, self.fail_next = self.fail_next, None
            raise exc

    def _index(self, index: str) -> _Index:
        if index not in self.store:
            raise api_error(NotFoundError, 404, "index_not_found_exception")
        return self.store[index]

    def _visible(self, index: str) -> Dict[str, Dict[str, Any]]:
        idx = self._index(index)
        if self.hidden_searches > 0:
            self.hidden_searches -= 1
        else:
            idx.refresh()
        return idx.searchable

    def _validate(self, idx: _Index, source: Dict[str, Any]) -> None:
        for name, spec in idx.mappings.get("properties", {}).items():
            if name not in source or source[name] is None:
                continue
            value = source[name]
            if spec["type"] == "date":
                try:
                    datetime.fromisoformat(str(value))
                except ValueError:
                    raise api_error(BadRequestError, 400, f"document_parsing_exception: {name}") from None
            if spec["type"] == "integer" and not isinstance(value, int):
                raise api_error(BadRequestError, 400, f"document_parsing_exception: {name}")

    async def ping(self) -> bool:
        self._maybe_fail("ping")
        return self.alive

    async def close(self) -> None:
        self.closed = True

    async def index(self, *, index: str, document: Dict[str, Any], id: Optional[str] = None) -> Dict[str, Any]:
        self._maybe_fail("index")
        idx = self.store.setdefault(index, _Index())
        self._validate(idx, document)
        doc_id = id or uuid.uuid4().hex
        result = "updated" if doc_id in idx.docs else "created"
        idx.docs[doc_id] = copy.deepcopy(document)
        idx.versions[doc_id] = idx.versions.get(doc_id, 0) + 1
        return {"_index": index, "_id": doc_id, "_version": idx.versions[doc_id], "result": result}

    async def get(self, *, index: str, id: str) -> Dict[str, Any]:
        self._maybe_fail("get")
        idx = self._index(index)
        if id not in idx.docs:
            raise api_error(NotFoundError, 404, "not_found")
        return {"_index": index, "_id": id, "found": True, "_source": copy.deepcopy(idx.docs[id])}

    async def search(self, *, index: str, query: Dict[str, Any], from_: int = 0, size: int = 10) -> Dict[str, Any]:
        self._maybe_fail("search")
        visible = self._visible(index)
        scored = [(score(query, src), doc_id, src) for doc_id, src in visible.items()]
        matched = sorted((s for s in scored if s[0] > 0), key=lambda s: s[0], reverse=True)
        page = matched[from_ : from_ + size]
        return {
            "hits": {
                "total": {"value": len(matched), "relation": "eq"},
                "hits": [
                    {"_index": index, "_id": doc_id, "_score": s, "_source": copy.deepcopy(src)}
                    for s, doc_id, src in page
                ],
            }
        }

    async def update_by_query(
        self,
        *,
        index: str,
        query: Dict[str, Any],
        script: Dict[str, Any],
        refresh: bool = False,
    ) -> Dict[str, Any]:
        self._maybe_fail("update_by_query")
        idx = self._index(index)
        targets = [doc_id for doc_id, src in self._visible(index).items() if score(query, src) > 0]
        # the scripts under test only copy params onto _source
        for doc_id in targets:
            idx.docs[doc_id].update(copy.deepcopy(script.get("params", {})))
            idx.versions[doc_id] = idx.versions.get(doc_id, 0) + 1
        if refresh:
            idx.refresh()
        return {"total": len(targets), "updated": len(targets), "noops": 0, "failures": []}

    async def update(self, *, index: str, id: str, doc: Dict[str, Any]) -> Dict[str, Any]:
        self._maybe_fail("update")
        idx = self._index(index)
        if id not in idx.docs:
            raise api_error(NotFoundError, 404, "document_missing_exception")
        current = idx.docs[id]
        if all(current.get(k) == v for k, v in doc.items()):
            return {"_index": index, "_id": id, "_version": idx.versions[id], "result": "noop"}
        self._validate(idx, doc)
        current.update(copy.deepcopy(doc))
        idx.versions[id] += 1
        return {"_index": index, "_id": id, "_version": idx.versions[id], "result": "updated"}
