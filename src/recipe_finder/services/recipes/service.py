"""Recipe search with reconciliation into the local catalog.

A search first asks Spoonacular. Fresh results are upserted into the database
(recipes by provider id, dish types by name, ingredients by provider id or
name) and the canonical rows are returned. When the provider is unreachable,
errors, or returns nothing, the local catalog is searched instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload, selectinload
from starlette.concurrency import run_in_threadpool

from recipe_finder.clients.spoonacular import SpoonacularError
from recipe_finder.core.config import UpsertPolicy
from recipe_finder.database.models import (
    DishType,
    Ingredient,
    Recipe,
    RecipeIngredient,
)
from recipe_finder.observability.logging import get_logger
from recipe_finder.services.recipes.models import RecipeSearchResult, RecipeSource


if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from sqlalchemy.sql import Select

    from recipe_finder.clients.spoonacular import (
        SpoonacularClient,
        SpoonacularIngredient,
        SpoonacularRecipe,
    )


logger = get_logger(__name__)

# (kind, key): ("id", 1001) for provider ids, ("name", "salt") otherwise
IngredientKey = tuple[str, int | str]


def escape_like(value: str, escape: str = "\\") -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return (
        value.replace(escape, escape * 2)
        .replace("%", f"{escape}%")
        .replace("_", f"{escape}_")
    )


def with_relations(stmt: Select[tuple[Recipe]]) -> Select[tuple[Recipe]]:
    """Eager-load the relations rendered in the recipe resource."""
    return stmt.options(
        selectinload(Recipe.dish_types),
        selectinload(Recipe.ingredients).joinedload(RecipeIngredient.ingredient),
    )


def _ingredient_key(item: SpoonacularIngredient) -> IngredientKey:
    if item.id is not None:
        return ("id", item.id)
    return ("name", item.name.strip().lower())


class RecipeService:
    """Search recipes and keep the local catalog in sync with the provider.

    Args:
        session: Database session for the current request.
        client: Spoonacular client; when None every search uses the local
            catalog.
        results_limit: Default number of recipes per search.
        upsert_policy: What happens to core fields of already stored recipes.
    """

    def __init__(
        self,
        session: Session,
        client: SpoonacularClient | None,
        *,
        results_limit: int = 10,
        upsert_policy: UpsertPolicy = UpsertPolicy.KEEP_FIRST,
    ) -> None:
        self._session = session
        self._client = client
        self.results_limit = results_limit
        self.upsert_policy = upsert_policy

    async def search(
        self,
        query: str | None,
        limit: int | None = None,
    ) -> RecipeSearchResult:
        """Search recipes, preferring fresh provider data.

        Args:
            query: Free text; blank means "anything" (random provider batch,
                random local order).
            limit: Maximum number of recipes; defaults to ``results_limit``.

        Returns:
            The canonical recipes and whether they came from the provider.
        """
        query = (query or "").strip() or None
        limit = limit or self.results_limit

        items = await self._fetch(query, limit)
        if items:
            try:
                recipes = await run_in_threadpool(self._persist, items)
            except SQLAlchemyError:
                logger.exception(
                    "Failed to store provider recipes, falling back to local catalog",
                    query=query,
                )
            else:
                return RecipeSearchResult(source=RecipeSource.API, recipes=recipes)

        recipes = await run_in_threadpool(self.search_local, query, limit)
        logger.info(
            "Served recipes from local catalog",
            query=query,
            count=len(recipes),
        )
        return RecipeSearchResult(source=RecipeSource.DATABASE, recipes=recipes)

    async def _fetch(self, query: str | None, limit: int) -> list[SpoonacularRecipe]:
        if self._client is None:
            return []
        try:
            return await self._client.fetch_recipes(query, number=limit)
        except SpoonacularError as e:
            logger.warning(
                "Spoonacular unavailable, falling back to local catalog",
                query=query,
                error=str(e),
                error_type=type(e).__name__,
            )
            return []

    def search_local(self, query: str | None, limit: int) -> list[Recipe]:
        """Case-insensitive title search over stored recipes."""
        stmt = with_relations(select(Recipe)).limit(limit)
        if query:
            pattern = f"%{escape_like(query)}%"
            stmt = stmt.where(Recipe.title.ilike(pattern, escape="\\")).order_by(
                Recipe.id
            )
        else:
            stmt = stmt.order_by(func.random())
        return list(self._session.scalars(stmt).unique())

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------

    def _persist(self, items: list[SpoonacularRecipe]) -> list[Recipe]:
        """Upsert a provider batch and return the canonical rows in order."""
        # Duplicates collapse: first position, last payload
        batch: dict[int, SpoonacularRecipe] = {}
        for item in items:
            batch[item.id] = item

        try:
            self._upsert_batch(list(batch.values()))
            self._session.commit()
        except SQLAlchemyError:
            self._session.rollback()
            raise

        stmt = (
            with_relations(select(Recipe))
            .where(Recipe.external_id.in_(batch.keys()))
            .execution_options(populate_existing=True)
        )
        by_external_id = {r.external_id: r for r in self._session.scalars(stmt).unique()}
        recipes = [by_external_id[eid] for eid in batch if eid in by_external_id]

        logger.info(
            "Reconciled provider recipes",
            count=len(recipes),
            policy=str(self.upsert_policy),
        )
        return recipes

    def _upsert_batch(self, items: list[SpoonacularRecipe]) -> None:
        external_ids = [item.id for item in items]
        recipes = {
            r.external_id: r
            for r in self._session.scalars(
                select(Recipe)
                .where(Recipe.external_id.in_(external_ids))
                .options(
                    selectinload(Recipe.dish_types),
                    selectinload(Recipe.ingredients).joinedload(
                        RecipeIngredient.ingredient
                    ),
                )
            ).unique()
        }
        dish_types = self._load_dish_types(items)
        ingredients = self._load_ingredients(items)

        for item in items:
            recipe = recipes.get(item.id)
            if recipe is None:
                recipe = Recipe(external_id=item.id)
                self._apply_core_fields(recipe, item)
                self._session.add(recipe)
                recipes[item.id] = recipe
            elif self.upsert_policy is UpsertPolicy.OVERWRITE:
                self._apply_core_fields(recipe, item)

            self._attach_dish_types(recipe, item, dish_types)
            self._attach_ingredients(recipe, item, ingredients)

    @staticmethod
    def _apply_core_fields(recipe: Recipe, item: SpoonacularRecipe) -> None:
        recipe.title = item.title
        recipe.image = item.image
        recipe.ready_in_minutes = item.ready_in_minutes
        recipe.servings = item.servings
        recipe.summary = item.summary
        recipe.instructions = item.instructions
        recipe.source_url = item.source_url

    def _load_dish_types(self, items: list[SpoonacularRecipe]) -> dict[str, DishType]:
        names = {name for item in items for name in item.dish_types}
        if not names:
            return {}
        return {
            d.name: d
            for d in self._session.scalars(
                select(DishType).where(DishType.name.in_(names))
            )
        }

    def _load_ingredients(
        self,
        items: list[SpoonacularRecipe],
    ) -> dict[IngredientKey, Ingredient]:
        ids: set[int] = set()
        names: set[str] = set()
        for item in items:
            for ingredient in item.extended_ingredients:
                if ingredient.id is not None:
                    ids.add(ingredient.id)
                else:
                    names.add(ingredient.name.strip().lower())

        cache: dict[IngredientKey, Ingredient] = {}
        if ids:
            for row in self._session.scalars(
                select(Ingredient).where(Ingredient.external_id.in_(ids))
            ):
                cache[("id", row.external_id)] = row  # type: ignore[index]
        if names:
            for row in self._session.scalars(
                select(Ingredient).where(
                    Ingredient.external_id.is_(None),
                    func.lower(Ingredient.name).in_(names),
                )
            ):
                cache.setdefault(("name", row.name.lower()), row)
        return cache

    def _attach_dish_types(
        self,
        recipe: Recipe,
        item: SpoonacularRecipe,
        cache: dict[str, DishType],
    ) -> None:
        attached = {d.name for d in recipe.dish_types}
        for name in item.dish_types:
            if name in attached:
                continue
            dish_type = cache.get(name)
            if dish_type is None:
                dish_type = DishType(name=name)
                self._session.add(dish_type)
                cache[name] = dish_type
            recipe.dish_types.append(dish_type)
            attached.add(name)

    def _attach_ingredients(
        self,
        recipe: Recipe,
        item: SpoonacularRecipe,
        cache: dict[IngredientKey, Ingredient],
    ) -> None:
        # Duplicate ingredients in one recipe collapse, last entry wins
        entries: dict[IngredientKey, SpoonacularIngredient] = {}
        for entry in item.extended_ingredients:
            entries[_ingredient_key(entry)] = entry

        links = {id(link.ingredient): link for link in recipe.ingredients}
        for key, entry in entries.items():
            ingredient = cache.get(key)
            if ingredient is None:
                ingredient = Ingredient(external_id=entry.id, name=entry.name.strip())
                self._session.add(ingredient)
                cache[key] = ingredient

            link = links.get(id(ingredient))
            if link is None:
                link = RecipeIngredient(
                    ingredient=ingredient,
                    amount=entry.amount,
                    unit=entry.unit,
                )
                recipe.ingredients.append(link)
                links[id(ingredient)] = link
            else:
                link.amount = entry.amount
                link.unit = entry.unit
