"""Recipe, ingredient and dish type models.

Recipes are keyed by the recipe provider's id (``external_id``). Ingredients
attach through an association object carrying amount and unit; dish types
attach through a plain join table. Ingredient and dish type rows are shared
between recipes.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Table,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recipe_finder.database.models.base import BaseDatabaseModel


if TYPE_CHECKING:
    from recipe_finder.database.models.favorite import Favorite


recipe_dish_types = Table(
    "recipe_dish_types",
    BaseDatabaseModel.metadata,
    Column(
        "recipe_id",
        ForeignKey("recipes.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "dish_type_id",
        ForeignKey("dish_types.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Recipe(BaseDatabaseModel):
    """SQLAlchemy ORM model for the 'recipes' table."""

    __tablename__ = "recipes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    external_id: Mapped[int] = mapped_column(BigInteger, unique=True, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    ready_in_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    servings: Mapped[int | None] = mapped_column(Integer, nullable=True)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    instructions: Mapped[str | None] = mapped_column(Text, nullable=True)
    source_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
    dish_types: Mapped[list[DishType]] = relationship(
        secondary=recipe_dish_types,
        back_populates="recipes",
        order_by="DishType.name",
    )
    ingredients: Mapped[list[RecipeIngredient]] = relationship(
        back_populates="recipe",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    favorites: Mapped[list[Favorite]] = relationship(
        back_populates="recipe",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Ingredient(BaseDatabaseModel):
    """SQLAlchemy ORM model for the 'ingredients' table."""

    __tablename__ = "ingredients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    external_id: Mapped[int | None] = mapped_column(
        BigInteger,
        unique=True,
        nullable=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    recipe_ingredients: Mapped[list[RecipeIngredient]] = relationship(
        back_populates="ingredient",
    )


class RecipeIngredient(BaseDatabaseModel):
    """SQLAlchemy ORM model for the 'recipe_ingredients' association table.

    One row per (recipe, ingredient) pair with the amount and unit used by that
    recipe.
    """

    __tablename__ = "recipe_ingredients"

    recipe_id: Mapped[int] = mapped_column(
        ForeignKey("recipes.id", ondelete="CASCADE"),
        primary_key=True,
    )
    ingredient_id: Mapped[int] = mapped_column(
        ForeignKey("ingredients.id"),
        primary_key=True,
    )
    amount: Mapped[float | None] = mapped_column(
        Numeric(10, 2, asdecimal=False),
        nullable=True,
    )
    unit: Mapped[str | None] = mapped_column(String(50), nullable=True)
    recipe: Mapped[Recipe] = relationship(back_populates="ingredients")
    ingredient: Mapped[Ingredient] = relationship(
        back_populates="recipe_ingredients",
        lazy="joined",
    )


class DishType(BaseDatabaseModel):
    """SQLAlchemy ORM model for the 'dish_types' table."""

    __tablename__ = "dish_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    recipes: Mapped[list[Recipe]] = relationship(
        secondary=recipe_dish_types,
        back_populates="dish_types",
    )
