"""Shared test fixtures for the Recipe Finder tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from recipe_finder.database.session import (
    create_db_engine,
    create_session_factory,
    create_tables,
)
from recipe_finder.observability.logging import clear_context
from tests.factories.settings import SettingsFactory


if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine
    from sqlalchemy.orm import Session

    from recipe_finder.core.config import Settings


@pytest.fixture
def settings() -> Settings:
    """Settings pinned to test values (in-memory SQLite, no CSRF)."""
    return SettingsFactory.build()


@pytest.fixture
def engine(settings: Settings) -> Iterator[Engine]:
    """A fresh in-memory database with every table created."""
    engine = create_db_engine(settings)
    create_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def db_session(engine: Engine) -> Iterator[Session]:
    """A session bound to the in-memory database."""
    session = create_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def _reset_log_context() -> Iterator[None]:
    """Keep request-scoped logging fields from leaking between tests."""
    clear_context()
    yield
    clear_context()
