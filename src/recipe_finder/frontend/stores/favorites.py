"""Favorites store for the saved recipes view."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError

from recipe_finder.frontend.models import Recipe
from recipe_finder.frontend.stores.base import ActionResult
from recipe_finder.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_finder.frontend.gateway import ApiGateway
    from recipe_finder.frontend.notifications import NotificationChannel


logger = get_logger(__name__)


class FavoritesStore:
    """The current page of saved recipes and a per-recipe saved flag."""

    def __init__(self, gateway: ApiGateway, notifications: NotificationChannel) -> None:
        self._gateway = gateway
        self._notifications = notifications

        self.recipes: list[Recipe] = []
        self.total = 0
        self.current_page = 1
        self.last_page = 1
        self.search = ""
        self.sort_by_name = False
        self.loading = False
        self.saved: dict[int, bool] = {}

    def is_saved(self, recipe_id: int) -> bool:
        return self.saved.get(recipe_id, False)

    async def load(
        self,
        *,
        search: str | None = None,
        sort_by_name: bool | None = None,
        page: int = 1,
        limit: int | None = None,
    ) -> ActionResult:
        """Fetch one page of favorites with the given (or current) filters."""
        if search is not None:
            self.search = search
        if sort_by_name is not None:
            self.sort_by_name = sort_by_name

        self.loading = True
        result = await self._gateway.fetch_favorites(
            search=self.search or None,
            sort_by_name=self.sort_by_name,
            limit=limit,
            page=page,
        )
        self.loading = False

        if not result.success:
            message = result.error or "Fetching favorites failed."
            self._notifications.error(message)
            return ActionResult(success=False, message=message)

        try:
            recipes = [Recipe.model_validate(item) for item in result.data["data"]]
            total = int(result.data["total"])
            current_page = int(result.data["current_page"])
            last_page = int(result.data["last_page"])
        except (KeyError, TypeError, ValueError, ValidationError):
            logger.warning("Malformed favorites response")
            return ActionResult(success=False, message="Fetching favorites failed.")

        self.recipes = recipes
        self.total = total
        self.current_page = current_page
        self.last_page = last_page
        for recipe in recipes:
            self.saved[recipe.id] = True
        return ActionResult(success=True, message=f"{total} saved recipes")

    async def save(self, recipe: Recipe) -> ActionResult:
        """Favorite a recipe."""
        result = await self._gateway.store_favorite(recipe.id)
        if not result.success:
            message = result.error or "Adding to favorites failed."
            self._notifications.error(message)
            return ActionResult(success=False, message=message)

        self.saved[recipe.id] = True
        message = result.data.get("message") or "Recipe saved"
        self._notifications.success(message)
        return ActionResult(success=True, message=message)

    async def remove(self, recipe_id: int) -> ActionResult:
        """Unfavorite a recipe and drop it from the current page."""
        result = await self._gateway.delete_favorite(recipe_id)
        if not result.success:
            message = result.error or "Removing from favorites failed."
            self._notifications.error(message)
            return ActionResult(success=False, message=message)

        self.saved[recipe_id] = False
        before = len(self.recipes)
        self.recipes = [r for r in self.recipes if r.id != recipe_id]
        if len(self.recipes) < before:
            self.total = max(self.total - 1, 0)
        message = result.data.get("message") or "Recipe removed"
        self._notifications.success(message)
        return ActionResult(success=True, message=message)

    async def toggle(self, recipe: Recipe) -> ActionResult:
        if self.is_saved(recipe.id):
            return await self.remove(recipe.id)
        return await self.save(recipe)

    async def check(self, recipe_id: int) -> bool:
        """Refresh and return the saved flag of one recipe."""
        result = await self._gateway.check_favorite(recipe_id)
        if not result.success or not isinstance(result.data, dict):
            return self.is_saved(recipe_id)
        flag = bool(result.data.get("is_favorited"))
        self.saved[recipe_id] = flag
        return flag
