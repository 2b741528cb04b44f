"""Relational persistence: ORM models and session management."""

from recipe_finder.database import models, session


__all__ = [
    "models",
    "session",
]
