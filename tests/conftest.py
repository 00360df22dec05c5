import os, sys
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

import pytest
from fastapi.testclient import TestClient

from content_planner.config import Settings
from content_planner.main import create_app
from content_planner.schemas import ArticleIn
from content_planner.services.store import ArticleStore, get_store


@pytest.fixture(scope="function")
def store(tmp_path):
    """A READY store on a throwaway SQLite file, disposed after each test."""
    s = ArticleStore(f"sqlite:///{tmp_path / 'planner.db'}")
    s.initialize()
    assert s.ready, "SQLite store failed to initialize"
    try:
        yield s
    finally:
        s.dispose()


@pytest.fixture(scope="function")
def unready_store():
    """A store with no DATABASE_URL: permanently UNAVAILABLE."""
    s = ArticleStore(None)
    s.initialize()
    return s


def _client_for(store: ArticleStore) -> TestClient:
    app = create_app(Settings())
    app.dependency_overrides[get_store] = lambda: store
    return TestClient(app)


@pytest.fixture
def client(store):
    return _client_for(store)


@pytest.fixture
def unready_client(unready_store):
    return _client_for(unready_store)


@pytest.fixture
def make_article():
    """Factory for valid upsert payloads."""

    def _make(article_id: str = "A01", **overrides) -> ArticleIn:
        data = {
            "article_id": article_id,
            "title": f"Article {article_id}",
            "keyword": "teleprompter",
            "intent": "Informational",
            "funnel": "TOFU",
            "description": "A planned article",
            "priority": "High",
            "word_count": 1500,
            "category": "Platform Guides",
            "week": 1,
        }
        data.update(overrides)
        return ArticleIn(**data)

    return _make
