"""SQLAlchemy engine and session factory.

When DATABASE_URL is configured, provides:
- an engine for the configured database (PostgreSQL via psycopg in prod)
- a session factory; the SQL repo opens one transaction per store call
- a lifespan hook for startup/shutdown

When DATABASE_URL is None (no database configured), engine and
session_factory are None and the app falls back to the in-memory repo.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from msusers.core.config import SETTINGS

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all table models."""


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(engine, expire_on_commit=False)


# --- Engine and session factory (None when no DATABASE_URL) ---

if SETTINGS.database_url:
    engine: Engine | None = create_engine(
        SETTINGS.database_url,
        echo=SETTINGS.is_dev,  # log SQL in dev only
        pool_pre_ping=True,
    )
    session_factory: sessionmaker[Session] | None = build_session_factory(engine)
else:
    engine = None
    session_factory = None


def ping(target: Engine | None = None) -> bool:
    """Return True if the database answers a trivial query."""
    target = target if target is not None else engine
    if target is None:
        return False
    try:
        with target.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.warning("Database ping failed", exc_info=True)
        return False
    return True


@contextmanager
def lifespan_db() -> Iterator[None]:
    """Startup/shutdown hook for the database engine.

    Call from FastAPI's lifespan context manager.
    """
    if engine is None:
        logger.info("No DATABASE_URL configured, using in-memory user store")
        yield
        return

    if SETTINGS.is_dev:
        # Dev convenience only; other environments run `alembic upgrade head`.
        import msusers.db.tables  # noqa: F401

        Base.metadata.create_all(engine)

    logger.info("Database engine created: %s", engine.url.render_as_string())
    try:
        yield
    finally:
        engine.dispose()
        logger.info("Database engine disposed")
