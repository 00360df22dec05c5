"""Runtime configuration.

Values come from the process environment; a `.env` file in the working
directory is loaded first if present. Nothing here is required: without
DATABASE_URL the app still boots and the store stays unavailable.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_PORT = 3000
DEFAULT_STATIC_DIR = str(Path(__file__).with_name("static"))

_TRUTHY = {"1", "true", "yes", "on"}


def _flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def normalize_database_url(url: Optional[str]) -> Optional[str]:
    """Return a SQLAlchemy-ready URL, or None when nothing usable is configured.

    Hosted Postgres providers hand out `postgres://` URLs, which SQLAlchemy
    no longer accepts; those are rewritten to the psycopg driver.
    """
    if url is None:
        return None
    url = url.strip()
    if not url:
        return None
    if url.startswith("postgres://"):
        return "postgresql+psycopg://" + url[len("postgres://"):]
    if url.startswith("postgresql://"):
        return "postgresql+psycopg://" + url[len("postgresql://"):]
    return url


@dataclass(frozen=True)
class Settings:
    database_url: Optional[str] = None
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    sql_echo: bool = False
    db_sslmode: Optional[str] = None
    static_dir: str = DEFAULT_STATIC_DIR

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Load settings from environment variables.

        Supported env vars:
          - DATABASE_URL (optional)
          - HOST, PORT
          - LOG_LEVEL
          - SQL_ECHO
          - DB_SSLMODE (Postgres only, e.g. "require")
          - STATIC_DIR
        """
        port_env = os.getenv("PORT", "").strip()
        return cls(
            database_url=normalize_database_url(os.getenv("DATABASE_URL")),
            host=os.getenv("HOST", "0.0.0.0").strip() or "0.0.0.0",
            port=int(port_env) if port_env.isdigit() else DEFAULT_PORT,
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
            sql_echo=_flag("SQL_ECHO"),
            db_sslmode=os.getenv("DB_SSLMODE") or None,
            static_dir=os.getenv("STATIC_DIR") or DEFAULT_STATIC_DIR,
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
