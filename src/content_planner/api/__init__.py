# src/content_planner/api/__init__.py
"""API package exports for FastAPI routers."""

from __future__ import annotations

from .articles_api import register_error_handlers
from .articles_api import router as articles_router
from .view_api import router as view_router

__all__ = [
    "articles_router",
    "view_router",
    "register_error_handlers",
    "get_routers",
]


def get_routers():
    """Return the routers mounted under /api."""
    return [articles_router, view_router]
