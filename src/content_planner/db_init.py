import logging
from pathlib import Path

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from content_planner.db.models import Base

# Alembic is optional at runtime; fall back to create_all if unavailable
try:
    from alembic import command as alembic_command
    from alembic.config import Config as AlembicConfig

    _ALEMBIC_AVAILABLE = True
except ImportError:  # pragma: no cover - if alembic not installed in env
    _ALEMBIC_AVAILABLE = False

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]
ALEMBIC_INI = PROJECT_ROOT / "alembic.ini"


def _alembic_config_for_engine(engine: Engine) -> "AlembicConfig":
    """
    Build an Alembic Config pointing to the project's alembic.ini and
    attach the current SQLAlchemy URL so 'alembic' CLI settings are not required.
    """
    cfg = AlembicConfig(str(ALEMBIC_INI))
    cfg.set_main_option(
        "sqlalchemy.url",
        engine.url.render_as_string(hide_password=False).replace("%", "%%"),
    )
    if not cfg.get_main_option("script_location"):
        cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    cfg.attributes["configure_logger"] = False
    return cfg


def init_db(engine: Engine) -> None:
    """
    Initialize database schema.

    Strategy:
      - If Alembic and alembic.ini are available AND the database already has
        an 'alembic_version' table, run migrations to 'head'.
      - If Alembic is available BUT no 'alembic_version' table exists, create all
        tables from ORM metadata and then stamp the DB to 'head'.
      - Otherwise (installed without the migration scripts), create_all().
    """
    if not (_ALEMBIC_AVAILABLE and ALEMBIC_INI.exists()):
        logger.info("Alembic not available. Creating ORM tables with create_all().")
        Base.metadata.create_all(engine)
        return

    try:
        cfg = _alembic_config_for_engine(engine)
        if inspect(engine).has_table("alembic_version"):
            logger.info("Alembic version table found. Applying migrations to head...")
            alembic_command.upgrade(cfg, "head")
        else:
            logger.info(
                "No alembic_version table detected. Creating ORM tables, then stamping head..."
            )
            Base.metadata.create_all(engine)
            alembic_command.stamp(cfg, "head")
        logger.info("Schema ready.")
    except Exception:
        # Never leave the app without tables in dev/CI
        logger.exception(
            "Database initialization via Alembic failed; falling back to create_all()."
        )
        Base.metadata.create_all(engine)
