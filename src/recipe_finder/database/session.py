"""Database engine and session management.

The engine and session factory are built once per application by
``create_app`` and stored on ``app.state``; request handlers receive a session
through the ``get_db`` dependency.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from recipe_finder.database.models import BaseDatabaseModel
from recipe_finder.observability.logging import get_logger


if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from recipe_finder.core.config import Settings

logger = get_logger(__name__)


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or ":memory:" in url


def _enable_sqlite_foreign_keys(dbapi_connection: object, _record: object) -> None:
    cursor = dbapi_connection.cursor()  # type: ignore[attr-defined]
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(settings: Settings) -> Engine:
    """Create the SQLAlchemy engine for the configured database.

    SQLite connections are shared across threads (FastAPI runs sync handlers in
    a threadpool) and an in-memory database is pinned to a single connection so
    every session sees the same tables.

    Args:
        settings: Application settings.

    Returns:
        Configured engine.
    """
    url = settings.database_url
    kwargs: dict[str, object] = {"echo": settings.database.echo}

    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if _is_memory_sqlite(url):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = settings.database.pool_pre_ping
        kwargs["pool_recycle"] = 3600

    engine = create_engine(url, **kwargs)

    if url.startswith("sqlite"):
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    logger.debug("Database engine created", dialect=engine.dialect.name)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Build the session factory bound to ``engine``."""
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


def create_tables(engine: Engine) -> None:
    """Create every table registered on the model metadata."""
    BaseDatabaseModel.metadata.create_all(bind=engine)
    logger.info("Database tables ensured", dialect=engine.dialect.name)


def check_database_health(engine: Engine) -> bool:
    """Check if the database is available and responding.

    Returns:
        True if a trivial query succeeds, False otherwise.
    """
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning(
            "Database health check failed",
            error=str(e)[:200],
            error_type=type(e).__name__,
        )
        return False
    return True


def get_db(request: Request) -> Iterator[Session]:
    """FastAPI dependency yielding a session that is always closed."""
    db: Session = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
