"""DocumentStore: one connection handle shared by all search components."""

from __future__ import annotations

import logging
from typing import Any, Optional

from elasticsearch import AsyncElasticsearch

from elasticdemo.config import ElasticsearchConfig
from elasticdemo.exceptions import EngineUnavailableError, RequestRejectedError
from elasticdemo.search.client import engine_errors, open_client
from elasticdemo.search.documents import DocumentWriter
from elasticdemo.search.indices import IndexManager
from elasticdemo.search.queries import QueryExecutor
from elasticdemo.search.updates import UpdateEngine

logger = logging.getLogger(__name__)


class DocumentStore:
    """Bundles the search components around a single client.

    The client is never replaced after construction, so components can share
    it without locking. Use as an async context manager to close it.
    """

    def __init__(self, client: AsyncElasticsearch, *, config: Optional[ElasticsearchConfig] = None) -> None:
        self._client = client
        self.config = config
        self.indices = IndexManager(client)
        self.documents = DocumentWriter(client)
        self.queries = QueryExecutor(client)
        self.updates = UpdateEngine(client)

    @classmethod
    def from_config(cls, cfg: ElasticsearchConfig) -> DocumentStore:
        return cls(open_client(cfg), config=cfg)

    @property
    def client(self) -> AsyncElasticsearch:
        return self._client

    async def ping(self) -> None:
        """Fail with `EngineUnavailableError` unless the cluster answers."""
        with engine_errors(RequestRejectedError):
            alive = await self._client.ping()
        if not alive:
            uri = self.config.uri if self.config else "search engine"
            raise EngineUnavailableError(f"Cannot reach {uri}")

    async def close(self) -> None:
        await self._client.close()

    async def __aenter__(self) -> DocumentStore:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
