"""Custom exception hierarchy for elasticdemo.

These exceptions allow callers to discriminate error categories
and handle them appropriately while preserving the original context.
"""

from __future__ import annotations

from typing import Any, Optional


class ElasticDemoError(Exception):
    """Base class for all elasticdemo exceptions."""


class ConfigError(ElasticDemoError):
    """Raised when configuration loading or validation fails."""


class SearchError(ElasticDemoError):
    """Raised for search indexing/query issues."""


class EngineUnavailableError(SearchError):
    """Raised when the search engine cannot be reached or is overloaded (connection, timeout, 5xx, 429)."""


class RequestRejectedError(SearchError):
    """Raised when the engine refuses a malformed request. Never retried."""


class SchemaRejectedError(RequestRejectedError):
    """Raised when the engine rejects an index mapping."""


class WriteRejectedError(RequestRejectedError):
    """Raised when a document does not fit the index schema or is malformed."""


class QueryRejectedError(RequestRejectedError):
    """Raised for malformed queries, bad field references or bad pagination."""


class DocumentNotFoundError(SearchError):
    """Raised when a document addressed by id does not exist."""

    def __init__(self, index: str, document_id: str) -> None:
        super().__init__(f"Document '{document_id}' not found in index '{index}'")
        self.index = index
        self.document_id = document_id


class VisibilityTimeoutError(SearchError):
    """Raised when a polled operation never reports a ready result."""

    def __init__(self, attempts: int, elapsed: float, last_result: Optional[Any] = None) -> None:
        super().__init__(f"Result not visible after {attempts} attempt(s) in {elapsed:.2f}s")
        self.attempts = attempts
        self.elapsed = elapsed
        self.last_result = last_result
