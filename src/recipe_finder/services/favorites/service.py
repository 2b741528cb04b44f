"""Per-user favorite recipes.

Every query is scoped to the caller's user id; a user can never read or
change another user's favorites.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from sqlalchemy import delete, exists, func, select
from sqlalchemy.exc import IntegrityError

from recipe_finder.core.exceptions import ConflictException, NotFoundException
from recipe_finder.database.models import Favorite, Recipe
from recipe_finder.observability.logging import get_logger
from recipe_finder.services.favorites.models import FavoritesPage
from recipe_finder.services.recipes.service import escape_like, with_relations


if TYPE_CHECKING:
    from sqlalchemy.orm import Session


logger = get_logger(__name__)

ALREADY_FAVORITED = "Recipe is already in your favorites"
NOT_IN_FAVORITES = "Recipe not found in your favorites"


class FavoritesService:
    """Add, remove, check and list a user's favorite recipes."""

    def __init__(
        self,
        session: Session,
        *,
        default_limit: int = 20,
        max_limit: int = 100,
    ) -> None:
        self._session = session
        self.default_limit = default_limit
        self.max_limit = max_limit

    def add(self, user_id: int, recipe_id: int) -> Favorite:
        """Favorite a recipe.

        Raises:
            NotFoundException: If the recipe does not exist.
            ConflictException: If the recipe is already a favorite.
        """
        if self._session.get(Recipe, recipe_id) is None:
            raise NotFoundException("Recipe", recipe_id)

        if self.is_favorited(user_id, recipe_id):
            raise ConflictException(ALREADY_FAVORITED)

        favorite = Favorite(user_id=user_id, recipe_id=recipe_id)
        self._session.add(favorite)
        try:
            self._session.commit()
        except IntegrityError:
            # A concurrent request inserted the same pair first
            self._session.rollback()
            raise ConflictException(ALREADY_FAVORITED) from None

        logger.info("Favorite added", user_id=user_id, recipe_id=recipe_id)
        return favorite

    def remove(self, user_id: int, recipe_id: int) -> None:
        """Unfavorite a recipe.

        Raises:
            NotFoundException: If the recipe is not among the user's favorites.
        """
        result = self._session.execute(
            delete(Favorite).where(
                Favorite.user_id == user_id,
                Favorite.recipe_id == recipe_id,
            )
        )
        if result.rowcount == 0:  # type: ignore[attr-defined]
            self._session.rollback()
            raise NotFoundException("Favorite", message=NOT_IN_FAVORITES)

        self._session.commit()
        logger.info("Favorite removed", user_id=user_id, recipe_id=recipe_id)

    def is_favorited(self, user_id: int, recipe_id: int) -> bool:
        """Whether the user has favorited the recipe."""
        stmt = select(
            exists().where(
                Favorite.user_id == user_id,
                Favorite.recipe_id == recipe_id,
            )
        )
        return bool(self._session.scalar(stmt))

    def list(
        self,
        user_id: int,
        *,
        search: str | None = None,
        sort_by_name: bool = False,
        page: int = 1,
        limit: int | None = None,
    ) -> FavoritesPage:
        """List the user's favorited recipes, one page at a time.

        Args:
            user_id: Owner of the favorites.
            search: Case-insensitive substring filter on the recipe title.
            sort_by_name: Sort by title ascending instead of most recently
                favorited first.
            page: 1-based page number.
            limit: Page size, clamped to ``max_limit``.
        """
        limit = min(limit or self.default_limit, self.max_limit)
        page = max(page, 1)

        conditions = [Favorite.user_id == user_id]
        search = (search or "").strip() or None
        if search:
            conditions.append(
                Recipe.title.ilike(f"%{escape_like(search)}%", escape="\\")
            )

        total = self._session.scalar(
            select(func.count())
            .select_from(Favorite)
            .join(Recipe, Recipe.id == Favorite.recipe_id)
            .where(*conditions)
        ) or 0

        if sort_by_name:
            order_by = (Recipe.title.asc(), Recipe.id.asc())
        else:
            order_by = (Favorite.created_at.desc(), Recipe.id.desc())

        stmt = (
            with_relations(select(Recipe))
            .join(Favorite, Favorite.recipe_id == Recipe.id)
            .where(*conditions)
            .order_by(*order_by)
            .limit(limit)
            .offset((page - 1) * limit)
        )
        items = list(self._session.scalars(stmt).unique())

        return FavoritesPage(
            items=items,
            total=total,
            current_page=page,
            last_page=max(math.ceil(total / limit), 1),
            per_page=limit,
        )
