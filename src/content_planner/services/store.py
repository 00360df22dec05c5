"""Record store for article plans.

The store owns its SQLAlchemy engine and an explicit readiness state:

  UNINITIALIZED -> initialize() -> READY | UNAVAILABLE

While the store is not READY, `list_articles()` and `stats()` degrade to
empty results so read-only pages keep rendering; every other operation
raises `ServiceUnavailableError` so writes never silently no-op.
"""
from __future__ import annotations

import enum
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterable, Iterator, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from content_planner.config import Settings
from content_planner.db.models import ArticlePlan, DEFAULT_STATUS
from content_planner.db.session import make_engine, make_session_factory, ping, session_scope
from content_planner.db_init import init_db
from content_planner.errors import (
    NotFoundError,
    ServiceUnavailableError,
    StoreError,
    ValidationFailure,
    WriteFailure,
)
from content_planner.schemas import (
    ArticleIn,
    ArticlePatch,
    ArticleRead,
    PRIORITIES,
    STATUSES,
    Stats,
)
from content_planner.services.merge import apply_updates, plan_patch, plan_upsert

logger = logging.getLogger(__name__)


class StoreState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    UNAVAILABLE = "unavailable"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ArticleStore:
    def __init__(
        self,
        database_url: Optional[str] = None,
        *,
        echo: bool = False,
        sslmode: Optional[str] = None,
    ):
        self.database_url = database_url
        self.echo = echo
        self.sslmode = sslmode
        self.state = StoreState.UNINITIALIZED
        self._engine: Optional[Engine] = None
        self._sessions: Optional[sessionmaker] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "ArticleStore":
        return cls(
            settings.database_url, echo=settings.sql_echo, sslmode=settings.db_sslmode
        )

    # -------- Lifecycle --------
    @property
    def ready(self) -> bool:
        return self.state is StoreState.READY

    def initialize(self) -> StoreState:
        """Connect, create the schema and move to READY, or to UNAVAILABLE on any failure."""
        if not self.database_url:
            logger.warning("No DATABASE_URL set - database features are unavailable")
            self.state = StoreState.UNAVAILABLE
            return self.state

        try:
            engine = make_engine(self.database_url, echo=self.echo, sslmode=self.sslmode)
            self._engine = engine
            init_db(engine)
            ping(engine)
        except Exception as exc:
            logger.error("Database init failed: %s", exc)
            logger.info("App will still run, but database features will be unavailable")
            self.dispose()
            self.state = StoreState.UNAVAILABLE
            return self.state

        self._sessions = make_session_factory(engine)
        self.state = StoreState.READY
        logger.info("Database initialized (%s)", engine.url.get_backend_name())
        return self.state

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
        self._engine = None
        self._sessions = None
        if self.state is StoreState.READY:
            self.state = StoreState.UNAVAILABLE

    def _require_ready(self) -> None:
        if not self.ready:
            raise ServiceUnavailableError()

    @contextmanager
    def _transaction(self) -> Iterator[Session]:
        """One commit-or-rollback unit; engine errors become store errors."""
        self._require_ready()
        try:
            with session_scope(self._sessions) as session:
                yield session
        except DataError as exc:
            raise ValidationFailure(str(exc.orig)) from exc
        except IntegrityError as exc:
            raise WriteFailure(str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            raise WriteFailure(str(exc)) from exc

    # -------- Reads --------
    def list_articles(self) -> List[ArticleRead]:
        """All plans ordered by (week, article_id); [] while not ready."""
        if not self.ready:
            return []
        try:
            with self._sessions() as session:
                rows = session.execute(
                    select(ArticlePlan).order_by(ArticlePlan.week, ArticlePlan.article_id)
                ).scalars()
                return [ArticleRead.model_validate(r) for r in rows]
        except SQLAlchemyError as exc:
            logger.exception("Listing articles failed")
            raise StoreError(str(exc)) from exc

    def get_article(self, pk: int) -> ArticleRead:
        with self._transaction() as session:
            row = session.get(ArticlePlan, pk)
            if row is None:
                raise NotFoundError()
            return ArticleRead.model_validate(row)

    def stats(self) -> Stats:
        """Totals by priority and status; all zeros when empty, unready or failing."""
        if not self.ready:
            return Stats()
        try:
            with self._sessions() as session:
                total = session.execute(select(func.count(ArticlePlan.id))).scalar_one()
                by_priority = dict(
                    session.execute(
                        select(ArticlePlan.priority, func.count(ArticlePlan.id)).group_by(
                            ArticlePlan.priority
                        )
                    ).all()
                )
                by_status = dict(
                    session.execute(
                        select(ArticlePlan.status, func.count(ArticlePlan.id)).group_by(
                            ArticlePlan.status
                        )
                    ).all()
                )
        except SQLAlchemyError:
            logger.exception("Stats query failed; reporting zeros")
            return Stats()

        counts = {f"{p.lower()}_priority": by_priority.get(p, 0) for p in PRIORITIES}
        counts.update({s: by_status.get(s, 0) for s in STATUSES})
        return Stats(total=total, **counts)

    # -------- Writes --------
    def _upsert_in(self, session: Session, payload: ArticleIn) -> ArticlePlan:
        plan = plan_upsert(payload)
        now = _utcnow()
        row = session.execute(
            select(ArticlePlan).where(ArticlePlan.article_id == payload.article_id)
        ).scalar_one_or_none()

        if row is None:
            values = apply_updates({"status": DEFAULT_STATUS, "notes": None}, plan)
            row = ArticlePlan(
                article_id=payload.article_id, created_at=now, updated_at=now, **values
            )
            session.add(row)
        else:
            current = {name: getattr(row, name) for name in plan}
            for name, value in apply_updates(current, plan).items():
                setattr(row, name, value)
            row.updated_at = now

        # Surface constraint errors on this record, not at commit time
        session.flush()
        session.refresh(row)
        return row

    def upsert_article(self, payload: ArticleIn) -> ArticleRead:
        with self._transaction() as session:
            row = self._upsert_in(session, payload)
            return ArticleRead.model_validate(row)

    def bulk_upsert(self, payloads: Iterable[ArticleIn]) -> int:
        """Upsert every payload in one transaction; any failure rolls back all of them."""
        count = 0
        with self._transaction() as session:
            for payload in payloads:
                self._upsert_in(session, payload)
                count += 1
        logger.info("Bulk upsert applied %d article(s)", count)
        return count

    def patch_article(self, pk: int, patch: ArticlePatch) -> ArticleRead:
        with self._transaction() as session:
            row = session.get(ArticlePlan, pk)
            if row is None:
                raise NotFoundError()
            plan = plan_patch(patch)
            current = {name: getattr(row, name) for name in plan}
            for name, value in apply_updates(current, plan).items():
                setattr(row, name, value)
            row.updated_at = _utcnow()
            session.flush()
            session.refresh(row)
            return ArticleRead.model_validate(row)

    def delete_article(self, pk: int) -> None:
        """Permanent delete; a missing id is not an error."""
        with self._transaction() as session:
            session.execute(delete(ArticlePlan).where(ArticlePlan.id == pk))


# --------------------------------------------------------------------------------------
# Process-wide store (FastAPI dependency)
# --------------------------------------------------------------------------------------
_store: Optional[ArticleStore] = None


def configure_store(settings: Settings) -> ArticleStore:
    """Replace the process-wide store; the caller decides when to initialize it."""
    global _store
    if _store is not None:
        _store.dispose()
    _store = ArticleStore.from_settings(settings)
    return _store


def get_store() -> ArticleStore:
    global _store
    if _store is None:
        _store = ArticleStore.from_settings(Settings.from_env())
    return _store


__all__ = ["ArticleStore", "StoreState", "configure_store", "get_store"]
