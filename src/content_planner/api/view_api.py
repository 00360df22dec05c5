"""Dashboard view endpoints.

`GET /api/view` loads the plans through a PlanningView backed by the
in-process store and returns the filtered, grouped view model together with
the loaded snapshot. Only a request with `seed=true` (the page's first load)
may push the fallback plan into an empty store.

`POST /api/view/render` filters and groups a snapshot the client already
holds. It never touches the store, so filter and layout changes cannot
reload or re-seed anything.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from content_planner.schemas import ArticleRead
from content_planner.services.store import ArticleStore, get_store
from content_planner.view.filters import ArticleFilter, apply_filters, category_options
from content_planner.view.planning import PlanningView
from content_planner.view.render import render
from content_planner.view.sources import StoreSource

router = APIRouter(tags=["view"])


class RenderRequest(BaseModel):
    articles: List[ArticleRead]
    mode: str = "list"
    q: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[str] = None
    funnel: Optional[str] = None
    status: Optional[str] = None


def _filter_from(q, category, priority, funnel, status) -> Dict[str, Any]:
    return {
        "search": q or "",
        "category": category or None,
        "priority": priority or None,
        "funnel": funnel or None,
        "status": status or None,
    }


@router.get("/view", summary="Load the plans and return the dashboard view")
def dashboard_view(
    mode: str = Query("list", description="One of: 'list', 'calendar', 'category'"),
    q: Optional[str] = Query(None, description="Search title, keyword and description"),
    category: Optional[str] = Query(None),
    priority: Optional[str] = Query(None),
    funnel: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    seed: bool = Query(False, description="Seed an empty store with the built-in plan"),
    store: ArticleStore = Depends(get_store),
) -> Dict[str, Any]:
    view = PlanningView(StoreSource(store), mode=mode)
    view.load(seed=seed)
    view.refresh_stats()
    view.set_filter(**_filter_from(q, category, priority, funnel, status))
    return {
        "view": view.render().to_dict(),
        "records": [r.model_dump(mode="json") for r in view.all_records],
        "stats": view.stats.model_dump(),
        "categories": view.category_options(),
        "fallback": view.using_fallback,
    }


@router.post("/view/render", summary="Filter and group a loaded snapshot")
def render_snapshot(req: RenderRequest) -> Dict[str, Any]:
    flt = ArticleFilter(**_filter_from(req.q, req.category, req.priority, req.funnel, req.status))
    return {
        "view": render(apply_filters(req.articles, flt), req.mode).to_dict(),
        "categories": category_options(req.articles),
    }
