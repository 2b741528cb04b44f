"""Favorite model definition.

Links one user to one recipe. The composite primary key is the uniqueness
guarantee for a (user, recipe) pair.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recipe_finder.database.models.base import BaseDatabaseModel, utcnow


if TYPE_CHECKING:
    from recipe_finder.database.models.recipe import Recipe
    from recipe_finder.database.models.user import User


class Favorite(BaseDatabaseModel):
    """SQLAlchemy ORM model for the 'favorites' table."""

    __tablename__ = "favorites"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    recipe_id: Mapped[int] = mapped_column(
        ForeignKey("recipes.id", ondelete="CASCADE"),
        primary_key=True,
    )
    # Python-side default keeps sub-second ordering on every backend
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )
    user: Mapped[User] = relationship(back_populates="favorites")
    recipe: Mapped[Recipe] = relationship(back_populates="favorites")
