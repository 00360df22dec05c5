from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from content_planner import __version__
from content_planner.api import get_routers, register_error_handlers
from content_planner.config import Settings, configure_logging
from content_planner.services.store import (
    ArticleStore,
    StoreState,
    configure_store,
    get_store,
)

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="Content Planner",
        version=__version__,
        docs_url="/docs",
        redoc_url=None,
    )
    app.state.settings = settings

    @app.on_event("startup")
    def _startup() -> None:
        """Initialize the store; a failure leaves it UNAVAILABLE but the app keeps serving."""
        store = configure_store(settings)
        state = store.initialize()
        if state is not StoreState.READY:
            logger.warning("Starting without a database (store is %s)", state.value)

    @app.on_event("shutdown")
    def _shutdown() -> None:
        get_store().dispose()

    @app.get("/health")
    def health(store: ArticleStore = Depends(get_store)) -> dict:
        return {"status": "ok", "dbReady": store.ready, "store": store.state.value}

    # CORS for local dev (adjust as needed)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost", "http://127.0.0.1", "http://localhost:3000", "http://127.0.0.1:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    for router in get_routers():
        app.include_router(router, prefix="/api")

    # Static hosting (dashboard page at /); mounted last so API routes win
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="static")
    else:
        logger.warning("Static directory %s not found; dashboard page disabled", static_dir)

    return app


def run(settings: Optional[Settings] = None) -> None:
    import uvicorn

    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


app = create_app()
