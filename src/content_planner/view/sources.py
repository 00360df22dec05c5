"""Where a PlanningView gets its records from.

Both sources speak plain JSON-shaped dicts so the view does not care whether
the store is in-process (the server-rendered `/api/view`) or behind HTTP
(the CLI talking to a running server).
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

import httpx

from content_planner.errors import StoreError
from content_planner.schemas import ArticleIn, ArticlePatch
from content_planner.services.store import ArticleStore

# Failures a view treats as "source unavailable" rather than a crash
SOURCE_ERRORS = (StoreError, httpx.HTTPError, ValueError)


class ArticleSource(Protocol):
    def list_articles(self) -> List[Dict[str, Any]]: ...

    def stats(self) -> Dict[str, int]: ...

    def bulk_upsert(self, articles: List[Dict[str, Any]]) -> int: ...

    def patch_article(self, pk: int, changes: Dict[str, Any]) -> Dict[str, Any]: ...


class StoreSource:
    """Adapter over an in-process ArticleStore."""

    def __init__(self, store: ArticleStore):
        self.store = store

    def list_articles(self) -> List[Dict[str, Any]]:
        return [a.model_dump(mode="json") for a in self.store.list_articles()]

    def stats(self) -> Dict[str, int]:
        return self.store.stats().model_dump()

    def bulk_upsert(self, articles: List[Dict[str, Any]]) -> int:
        return self.store.bulk_upsert([ArticleIn.model_validate(a) for a in articles])

    def patch_article(self, pk: int, changes: Dict[str, Any]) -> Dict[str, Any]:
        patched = self.store.patch_article(pk, ArticlePatch.model_validate(changes))
        return patched.model_dump(mode="json")


class HttpSource:
    """Client for the articles API of a running server.

    Pass `client` to reuse an existing httpx.Client (e.g. a FastAPI TestClient);
    otherwise one is created for `base_url` and closed by `close()`.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        *,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ):
        self._owns_client = client is None
        self.client = client or httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        resp = self.client.request(method, path, **kwargs)
        resp.raise_for_status()
        return resp.json()

    def list_articles(self) -> List[Dict[str, Any]]:
        data = self._request("GET", "/api/articles")
        if not isinstance(data, list):
            raise ValueError(f"Expected a list of articles, got {type(data).__name__}")
        return data

    def stats(self) -> Dict[str, int]:
        return self._request("GET", "/api/stats")

    def bulk_upsert(self, articles: List[Dict[str, Any]]) -> int:
        data = self._request("POST", "/api/articles/bulk", json={"articles": articles})
        return int(data.get("count", 0))

    def patch_article(self, pk: int, changes: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PATCH", f"/api/articles/{pk}", json=changes)

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "HttpSource":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
