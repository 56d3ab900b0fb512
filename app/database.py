"""Database session and base model setup."""
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from app.config import get_settings


logger = logging.getLogger(__name__)

settings = get_settings()
_is_sqlite = settings.database_url.startswith("sqlite")

if _is_sqlite and ":memory:" not in settings.database_url:
    # SQLite will not create missing parent directories for the database file.
    _db_path = settings.database_url.split("///", 1)[-1]
    Path(_db_path).parent.mkdir(parents=True, exist_ok=True)

engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    future=True,
    connect_args={"check_same_thread": False} if _is_sqlite else {},
)


if _is_sqlite:
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        """Enable foreign key enforcement for SQLite."""
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class Base(DeclarativeBase):
    """Declarative base for SQLAlchemy models."""


SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def get_db():
    """
    FastAPI dependency yielding one database session per request.

    The session is committed once the request handler returns and rolled back
    if it raises; the exception is re-raised after the rollback.
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception as err:
        logger.debug("Rolling back request session after %s", type(err).__name__)
        db.rollback()
        raise
    finally:
        db.close()


def _alembic_config(database_url: str | None = None) -> Config:
    """Build an Alembic config pointing at ``migrations/`` and the target database."""

    project_root = Path(__file__).resolve().parent.parent
    cfg = Config(str(project_root / "alembic.ini"))
    cfg.set_main_option("script_location", str(project_root / "migrations"))
    cfg.set_main_option("sqlalchemy.url", database_url or settings.database_url)
    return cfg


def run_migrations(target_revision: str = "head", database_url: str | None = None) -> None:
    """Upgrade the accounts/sessions schema to ``target_revision``."""

    cfg = _alembic_config(database_url)
    logger.info("Applying migrations up to %s", target_revision)
    command.upgrade(cfg, target_revision)
