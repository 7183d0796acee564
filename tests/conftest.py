import pytest

from elasticdemo.search.store import DocumentStore
from fakes import FakeElasticsearch


@pytest.fixture
def fake_es() -> FakeElasticsearch:
    return FakeElasticsearch()


@pytest.fixture
def store(fake_es: FakeElasticsearch) -> DocumentStore:
    return DocumentStore(fake_es)  # type: ignore[arg-type]
