"""Recipe search store.

Searches are sequenced: each call takes the next sequence number and only
the response to the latest issued search is applied. A slow response that
arrives after a newer search started is dropped, so typing "pa", "pas",
"pasta" never ends with the results for "pa" on screen.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Final

from pydantic import ValidationError

from recipe_finder.frontend.models import Recipe, placeholder_recipe
from recipe_finder.frontend.stores.base import ActionResult
from recipe_finder.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_finder.frontend.gateway import ApiGateway
    from recipe_finder.frontend.notifications import NotificationChannel


logger = get_logger(__name__)

DEBOUNCE_DELAY: Final[float] = 0.3
LOAD_FAILED: Final[str] = "Failed to load recipes."


class RecipeSearchStore:
    """Search results, loading and error state, and the selected recipe."""

    def __init__(
        self,
        gateway: ApiGateway,
        notifications: NotificationChannel,
        *,
        debounce_delay: float = DEBOUNCE_DELAY,
    ) -> None:
        self._gateway = gateway
        self._notifications = notifications
        self.debounce_delay = debounce_delay

        self.recipes: list[Recipe] = []
        self.source: str | None = None
        self.loading = False
        self.error = ""
        self.query = ""
        self.active_recipe: Recipe = placeholder_recipe()

        self._issued = 0
        self._debounce_task: asyncio.Task[ActionResult | None] | None = None

    @property
    def latest_sequence(self) -> int:
        """Sequence number of the most recently issued search."""
        return self._issued

    async def search(self, query: str = "") -> ActionResult | None:
        """Run a search and apply its result if it is still the latest.

        Returns:
            The action result, or None when a newer search superseded this one.
        """
        self._issued += 1
        sequence = self._issued
        self.query = query
        self.loading = True
        self.error = ""

        result = await self._gateway.fetch_recipes(query)

        if sequence != self._issued:
            logger.debug("Discarding stale search response", sequence=sequence)
            return None

        self.loading = False
        if not result.success:
            self.recipes = []
            self.source = None
            self.error = LOAD_FAILED
            self._notifications.error(result.error or LOAD_FAILED)
            return ActionResult(success=False, message=result.error or LOAD_FAILED)

        try:
            self.recipes = [Recipe.model_validate(item) for item in result.data["data"]]
        except (KeyError, TypeError, ValidationError):
            logger.warning("Malformed recipe search response")
            self.recipes = []
            self.source = None
            self.error = LOAD_FAILED
            return ActionResult(success=False, message=LOAD_FAILED)

        self.source = result.data.get("source")
        return ActionResult(success=True, message=f"{len(self.recipes)} recipes found")

    async def search_debounced(self, query: str) -> ActionResult | None:
        """Search after ``debounce_delay`` unless another keystroke comes first.

        Returns:
            The search result, or None when superseded by a later keystroke.
        """
        self.cancel_pending()
        task = asyncio.create_task(self._delayed_search(query))
        self._debounce_task = task
        try:
            return await task
        except asyncio.CancelledError:
            if task.cancelled() and not _current_task_cancelling():
                return None
            raise

    async def _delayed_search(self, query: str) -> ActionResult | None:
        await asyncio.sleep(self.debounce_delay)
        return await self.search(query)

    def cancel_pending(self) -> None:
        """Drop a debounced search that has not fired yet."""
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()
        self._debounce_task = None

    def clear_search(self) -> None:
        self.cancel_pending()
        # Invalidate any response still in flight
        self._issued += 1
        self.recipes = []
        self.source = None
        self.query = ""
        self.error = ""
        self.loading = False

    def set_active_recipe(self, recipe: Recipe) -> None:
        self.active_recipe = recipe

    def clear_active_recipe(self) -> None:
        self.active_recipe = placeholder_recipe()

    @property
    def has_active_recipe(self) -> bool:
        return self.active_recipe.id != 0

    @property
    def has_recipes(self) -> bool:
        return bool(self.recipes)

    @property
    def has_error(self) -> bool:
        return self.error != ""

    def recipes_by_time(self, min_minutes: int, max_minutes: int) -> list[Recipe]:
        """Recipes ready within ``[min_minutes, max_minutes]``."""
        return [
            recipe
            for recipe in self.recipes
            if recipe.ready_in_minutes is not None
            and min_minutes <= recipe.ready_in_minutes <= max_minutes
        ]

    def recipes_by_dish_type(self, dish_type: str) -> list[Recipe]:
        return [recipe for recipe in self.recipes if dish_type in recipe.dish_types]


def _current_task_cancelling() -> bool:
    task = asyncio.current_task()
    return task is not None and task.cancelling() > 0

