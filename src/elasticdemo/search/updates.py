"""Update paths: scripted update-by-query and point replace by id."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Mapping

from elasticsearch import AsyncElasticsearch

from elasticdemo.exceptions import QueryRejectedError, WriteRejectedError
from elasticdemo.search.base_search import UpdateOutcome
from elasticdemo.search.client import engine_errors, response_body
from elasticdemo.search.queries import Query

logger = logging.getLogger(__name__)

_FIELD_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def assignment_script(fields: Mapping[str, Any]) -> str:
    """Build a painless script setting each field from the matching param."""
    if not fields:
        raise QueryRejectedError("No fields to assign")
    parts = []
    for name in fields:
        if not _FIELD_RE.match(name):
            raise QueryRejectedError(f"Invalid field name for script: {name!r}")
        parts.append(f"ctx._source.{name} = params.{name};")
    return "".join(parts)


class UpdateEngine:
    """Mutates stored documents.

    The two paths are independent: `update_by_query` runs a server-side
    script over every match of a filter, `replace` merges new values into one
    document addressed by id.
    """

    def __init__(self, client: AsyncElasticsearch) -> None:
        self._client = client

    async def update_by_query(
        self,
        index: str,
        query: Query,
        script: str,
        params: Mapping[str, Any],
    ) -> int:
        """Run `script` on every document matched by `query`.

        Returns the number of documents modified; 0 means nothing matched.
        """
        with engine_errors(QueryRejectedError):
            resp = response_body(
                await self._client.update_by_query(
                    index=index,
                    query=query,
                    script={"source": script, "lang": "painless", "params": dict(params)},
                    refresh=True,
                )
            )
        updated = int(resp.get("updated") or 0)
        if updated == 0:
            logger.info(f"Update by query on {index} matched no documents")
        else:
            logger.info(f"Update by query on {index} modified {updated} document(s)")
        return updated

    async def assign_fields(self, index: str, query: Query, values: Mapping[str, Any]) -> int:
        """Set `values` on every document matched by `query`."""
        return await self.update_by_query(index, query, assignment_script(values), values)

    async def replace(self, index: str, document_id: str, values: Mapping[str, Any]) -> UpdateOutcome:
        """Merge `values` into the document stored under `document_id`.

        Returns `UpdateOutcome.NOOP` when the values equal what is stored.
        """
        doc: Dict[str, Any] = dict(values)
        with engine_errors(WriteRejectedError, index=index, document_id=document_id):
            resp = response_body(await self._client.update(index=index, id=document_id, doc=doc))
        result = str(resp.get("result", ""))
        try:
            outcome = UpdateOutcome(result)
        except ValueError:
            raise WriteRejectedError(f"Unexpected update result {result!r} for {document_id}") from None
        logger.info(f"Update of {document_id} in {index}: {outcome.value}")
        return outcome
