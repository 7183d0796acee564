"""Index lifecycle: create-or-replace, ensure, delete and refresh."""

from __future__ import annotations

import logging

from elasticsearch import AsyncElasticsearch

from elasticdemo.exceptions import SchemaRejectedError
from elasticdemo.search.base_search import IndexDefinition
from elasticdemo.search.client import engine_errors, response_body

logger = logging.getLogger(__name__)


class IndexManager:
    """Creates and removes index definitions with explicit mappings."""

    def __init__(self, client: AsyncElasticsearch) -> None:
        self._client = client

    async def exists(self, name: str) -> bool:
        with engine_errors(SchemaRejectedError):
            return bool(await self._client.indices.exists(index=name))

    async def delete(self, name: str) -> None:
        """Delete an index; a missing index is not an error."""
        with engine_errors(SchemaRejectedError):
            await self._client.indices.delete(index=name, ignore_unavailable=True)

    async def create_or_replace(self, definition: IndexDefinition) -> str:
        """Drop `definition.name` if present, then create it with the declared mapping.

        Returns the index name acknowledged by the engine.
        """
        await self.delete(definition.name)
        with engine_errors(SchemaRejectedError):
            resp = response_body(
                await self._client.indices.create(
                    index=definition.name, mappings=definition.mapping()
                )
            )
        if not resp.get("acknowledged", False):
            raise SchemaRejectedError(f"Index creation not acknowledged: {definition.name}")
        name = resp.get("index") or definition.name
        logger.info(f"Created index {name}")
        return name

    async def ensure(self, definition: IndexDefinition) -> bool:
        """Create the index only when missing. Returns True if it was created."""
        if await self.exists(definition.name):
            return False
        with engine_errors(SchemaRejectedError):
            await self._client.indices.create(
                index=definition.name, mappings=definition.mapping()
            )
        logger.info(f"Created index {definition.name}")
        return True

    async def refresh(self, name: str) -> None:
        """Make every acknowledged write visible to search right now."""
        with engine_errors(SchemaRejectedError):
            await self._client.indices.refresh(index=name)
