"""Client-side contract for driving an Elasticsearch cluster.

Components share one immutable client handle, see `DocumentStore`.
"""

from .base_search import FieldType, IndexDefinition, SearchHit, UpdateOutcome, WriteResult
from .client import engine_errors, open_client
from .consistency import retry_until
from .documents import DocumentWriter
from .indices import IndexManager
from .queries import QueryExecutor
from .store import DocumentStore
from .updates import UpdateEngine

__all__ = [
    "DocumentStore",
    "DocumentWriter",
    "FieldType",
    "IndexDefinition",
    "IndexManager",
    "QueryExecutor",
    "SearchHit",
    "UpdateEngine",
    "UpdateOutcome",
    "WriteResult",
    "engine_errors",
    "open_client",
    "retry_until",
]
