"""Unit test fixtures.

Unit tests use mocks or an in-memory SQLite database and never make network
calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from recipe_finder.database.models import Recipe, User


if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.orm import Session


pytestmark = pytest.mark.unit


@pytest.fixture
def add_recipe(db_session: Session) -> Callable[..., Recipe]:
    """Insert a recipe row and return it."""
    counter = iter(range(1, 10_000))

    def _add(title: str, external_id: int | None = None, **fields: Any) -> Recipe:
        recipe = Recipe(
            external_id=external_id if external_id is not None else 500_000 + next(counter),
            title=title,
            **fields,
        )
        db_session.add(recipe)
        db_session.commit()
        return recipe

    return _add


@pytest.fixture
def user(db_session: Session) -> User:
    """A stored user (the password hash is irrelevant here)."""
    user = User(name="Ava", email="ava@example.com", password_hash="x")
    db_session.add(user)
    db_session.commit()
    return user
