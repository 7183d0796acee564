"""Connection factory and error translation for the Elasticsearch client.

Every component talks to the engine through the `AsyncElasticsearch` handle
built here, and wraps each call in `engine_errors` so client exceptions
surface as the `elasticdemo.exceptions` taxonomy.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional, Type

from elasticsearch import (
    ApiError,
    AsyncElasticsearch,
    NotFoundError,
    SerializationError,
    TransportError,
)

from elasticdemo.config import ElasticsearchConfig
from elasticdemo.exceptions import (
    DocumentNotFoundError,
    EngineUnavailableError,
    RequestRejectedError,
)


def open_client(cfg: ElasticsearchConfig) -> AsyncElasticsearch:
    """Create an `AsyncElasticsearch` client from configuration.

    No network call happens here; the first request opens the connection.
    """
    kwargs: Dict[str, Any] = {
        "request_timeout": cfg.request_timeout,
        "node_class": cfg.node_class,
    }
    if cfg.username:
        kwargs["basic_auth"] = (cfg.username, cfg.password or "")
    # TLS options are only accepted for https nodes
    if cfg.uri.lower().startswith("https://"):
        kwargs["verify_certs"] = cfg.verify_ssl
    return AsyncElasticsearch(cfg.uri, **kwargs)


@contextmanager
def engine_errors(
    rejected: Type[RequestRejectedError],
    *,
    index: Optional[str] = None,
    document_id: Optional[str] = None,
) -> Iterator[None]:
    """Translate client exceptions raised inside the block.

    Parameters
    ----------
    rejected:
        Error raised when the engine refuses the request (4xx).
    index, document_id:
        When a document id is given, a 404 becomes `DocumentNotFoundError`.
    """
    try:
        yield
    except NotFoundError as exc:
        if document_id is not None:
            raise DocumentNotFoundError(index or "", document_id) from exc
        raise rejected(str(exc)) from exc
    except ApiError as exc:
        # 429 means the cluster is shedding load
        if exc.meta.status >= 500 or exc.meta.status == 429:
            raise EngineUnavailableError(str(exc)) from exc
        raise rejected(str(exc)) from exc
    except SerializationError as exc:
        raise rejected(str(exc)) from exc
    except TransportError as exc:
        raise EngineUnavailableError(str(exc)) from exc


def response_body(resp: Any) -> Dict[str, Any]:
    """Return the decoded JSON body of a client response (or a plain dict)."""
    body = getattr(resp, "body", resp)
    return body if isinstance(body, dict) else {}
