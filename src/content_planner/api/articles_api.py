"""
Article plans API.

CRUD over the record store:
- List plans (ordered by week, then article_id)
- Retrieve a plan by its numeric id
- Create/upsert a plan by its natural `article_id`
- Patch status / notes / week
- Delete a plan
- Bulk upsert (all-or-nothing)
- Priority/status counts

Store failures are raised as `StoreError` subclasses; `register_error_handlers`
turns them into `{"error": message}` responses with the matching status code.
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from content_planner.errors import StoreError
from content_planner.schemas import (
    ArticleIn,
    ArticlePatch,
    ArticleRead,
    BulkRequest,
    BulkResult,
    DeleteResult,
    Stats,
)
from content_planner.services.store import ArticleStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["articles"])


@router.get("/articles", summary="List article plans", response_model=List[ArticleRead])
def list_articles(store: ArticleStore = Depends(get_store)) -> List[ArticleRead]:
    """Every plan ordered by (week, article_id). Empty while the database is unavailable."""
    return store.list_articles()


@router.get("/articles/{pk}", summary="Get an article plan", response_model=ArticleRead)
def get_article(pk: int, store: ArticleStore = Depends(get_store)) -> ArticleRead:
    return store.get_article(pk)


@router.post("/articles", summary="Create or upsert an article plan", response_model=ArticleRead)
def upsert_article(payload: ArticleIn, store: ArticleStore = Depends(get_store)) -> ArticleRead:
    """Insert a new plan, or merge into the one sharing `article_id`.

    `status` and `notes` keep their stored values when omitted.
    """
    return store.upsert_article(payload)


@router.post("/articles/bulk", summary="Bulk upsert article plans", response_model=BulkResult)
def bulk_upsert(body: BulkRequest, store: ArticleStore = Depends(get_store)) -> BulkResult:
    count = store.bulk_upsert(body.articles)
    return BulkResult(count=count)


@router.patch("/articles/{pk}", summary="Update status, notes or week", response_model=ArticleRead)
def patch_article(
    pk: int, patch: ArticlePatch, store: ArticleStore = Depends(get_store)
) -> ArticleRead:
    return store.patch_article(pk, patch)


@router.delete("/articles/{pk}", summary="Delete an article plan", response_model=DeleteResult)
def delete_article(pk: int, store: ArticleStore = Depends(get_store)) -> DeleteResult:
    store.delete_article(pk)
    return DeleteResult()


@router.get("/stats", summary="Counts by priority and status", response_model=Stats)
def stats(store: ArticleStore = Depends(get_store)) -> Stats:
    return store.stats()


def _store_error_response(request: Request, exc: StoreError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StoreError, _store_error_response)


__all__ = ["router", "register_error_handlers"]
