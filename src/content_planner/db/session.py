"""Engine and session construction.

The store owns its engine, so nothing here is created at import time:
callers build an engine from a URL with `make_engine()` and a session
factory with `make_session_factory()`.
"""
from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


def make_engine(url: str, *, echo: bool = False, sslmode: Optional[str] = None) -> Engine:
    is_sqlite = url.startswith("sqlite")
    is_postgres = url.startswith("postgresql")

    engine_kwargs = {
        "future": True,
        "echo": echo,
        "pool_pre_ping": True,
    }
    if is_sqlite:
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        # An in-memory database only exists on a single connection
        if url in ("sqlite://", "sqlite:///:memory:"):
            engine_kwargs["poolclass"] = StaticPool
    if is_postgres and sslmode:
        engine_kwargs["connect_args"] = {"sslmode": sslmode}

    eng = create_engine(url, **engine_kwargs)

    if is_postgres:

        @event.listens_for(eng, "connect")
        def _set_pg_timezone(dbapi_connection, connection_record):  # type: ignore[unused-ignore]
            cur = dbapi_connection.cursor()
            cur.execute("SET TIME ZONE 'UTC'")
            cur.close()

    # If SQLite file path points to a nested folder, ensure parent exists
    if is_sqlite and url.startswith("sqlite:///") and ":memory:" not in url:
        db_path = url.replace("sqlite:///", "", 1)
        Path(db_path).expanduser().parent.mkdir(parents=True, exist_ok=True)

    return eng


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True,
    )


@contextmanager
def session_scope(factory: sessionmaker) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def ping(engine: Engine) -> bool:
    """Simple connectivity check."""
    with engine.connect() as conn:
        return conn.execute(text("SELECT 1")).scalar() == 1
