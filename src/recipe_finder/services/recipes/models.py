"""Result types of the recipe service."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from recipe_finder.database.models import Recipe


class RecipeSource(StrEnum):
    """Where the recipes of a search response came from."""

    API = "api"
    DATABASE = "database"


@dataclass(frozen=True, slots=True)
class RecipeSearchResult:
    """Canonical recipes returned by a search, with their origin."""

    source: RecipeSource
    recipes: list[Recipe] = field(default_factory=list)
