"""Result types of the favorites service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from recipe_finder.database.models import Recipe


@dataclass(frozen=True, slots=True)
class FavoritesPage:
    """One page of a user's favorited recipes."""

    items: list[Recipe] = field(default_factory=list)
    total: int = 0
    current_page: int = 1
    last_page: int = 1
    per_page: int = 20

    @property
    def count(self) -> int:
        """Number of recipes on this page."""
        return len(self.items)
