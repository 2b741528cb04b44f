"""Spoonacular recipe API client.

Fetches recipe batches either by free-text search (``complexSearch``) or at
random (``random``). The API is treated as unreliable: every failure surfaces
as a :class:`SpoonacularError` subclass for the caller to recover from.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

import httpx
import orjson
from pydantic import ValidationError

from recipe_finder.clients.spoonacular.exceptions import (
    SpoonacularResponseError,
    SpoonacularUnavailableError,
)
from recipe_finder.clients.spoonacular.schemas import SpoonacularRecipe
from recipe_finder.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_finder.core.config import Settings

logger = get_logger(__name__)


class SpoonacularClient:
    """HTTP client for the Spoonacular recipe API.

    Example:
        ```python
        client = SpoonacularClient.from_settings(settings)
        await client.initialize()

        recipes = await client.fetch_recipes("pasta", number=10)

        await client.shutdown()
        ```
    """

    SEARCH_ENDPOINT: Final[str] = "/recipes/complexSearch"
    RANDOM_ENDPOINT: Final[str] = "/recipes/random"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.spoonacular.com",
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Spoonacular API key, sent as the ``apiKey`` query parameter.
            base_url: API root URL.
            timeout: Per-request timeout in seconds.
            http_client: HTTP client to use instead of creating one.
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = http_client
        self._owns_http_client = http_client is None

    @property
    def configured(self) -> bool:
        """Whether an API key is set."""
        return bool(self.api_key)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        http_client: httpx.AsyncClient | None = None,
    ) -> SpoonacularClient:
        """Build a client from application settings."""
        return cls(
            api_key=settings.SPOONACULAR_API_KEY,
            base_url=settings.spoonacular.base_url,
            timeout=settings.spoonacular.timeout,
            http_client=http_client,
        )

    async def initialize(self) -> None:
        """Initialize the HTTP client if not provided."""
        if self._http is None:
            self._http = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers={"Accept": "application/json"},
            )
        if not self.api_key:
            logger.warning("SPOONACULAR_API_KEY is not set; searches will fall back")
        logger.info("SpoonacularClient initialized", base_url=self.base_url)

    async def shutdown(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_http_client and self._http is not None:
            await self._http.aclose()
            self._http = None
        logger.debug("SpoonacularClient shutdown")

    async def fetch_recipes(
        self,
        query: str | None,
        number: int,
    ) -> list[SpoonacularRecipe]:
        """Fetch a batch of recipes.

        Args:
            query: Free-text search; a random batch is fetched when empty.
            number: Maximum number of recipes to request.

        Returns:
            The recipes that passed schema validation, in provider order.

        Raises:
            SpoonacularUnavailableError: If the API cannot be reached.
            SpoonacularResponseError: If the API answers with an error status
                or a body that is not a JSON object.
        """
        if self._http is None:
            msg = "Client not initialized. Call initialize() first."
            raise RuntimeError(msg)

        if query:
            url = f"{self.base_url}{self.SEARCH_ENDPOINT}"
            params: dict[str, Any] = {
                "query": query,
                "addRecipeInformation": "true",
                "fillIngredients": "true",
                "number": number,
                "apiKey": self.api_key,
            }
        else:
            url = f"{self.base_url}{self.RANDOM_ENDPOINT}"
            params = {"number": number, "apiKey": self.api_key}

        logger.debug("Fetching recipes from Spoonacular", query=query, number=number)

        try:
            response = await self._http.get(url, params=params)
        except httpx.TimeoutException as e:
            logger.warning("Request to Spoonacular timed out", query=query)
            msg = f"Spoonacular request timed out: {e}"
            raise SpoonacularUnavailableError(msg) from e
        except httpx.RequestError as e:
            logger.warning("Failed to connect to Spoonacular", error=str(e))
            msg = f"Failed to connect to Spoonacular: {e}"
            raise SpoonacularUnavailableError(msg) from e

        if not response.is_success:
            logger.warning(
                "Spoonacular returned error",
                status_code=response.status_code,
                query=query,
            )
            msg = f"Spoonacular returned HTTP {response.status_code}"
            raise SpoonacularResponseError(response.status_code, msg)

        try:
            body = orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            msg = "Spoonacular returned a body that is not JSON"
            raise SpoonacularResponseError(response.status_code, msg) from e

        if not isinstance(body, dict):
            msg = "Spoonacular returned an unexpected payload"
            raise SpoonacularResponseError(response.status_code, msg)

        recipes = self._parse_items(body)
        logger.info(
            "Fetched recipes from Spoonacular",
            query=query,
            requested=number,
            received=len(recipes),
        )
        return recipes

    def _parse_items(self, body: dict[str, Any]) -> list[SpoonacularRecipe]:
        """Read items from ``results``, else ``recipes``, skipping invalid ones."""
        items = body.get("results")
        if items is None:
            items = body.get("recipes")
        if not isinstance(items, list):
            return []

        recipes: list[SpoonacularRecipe] = []
        for index, item in enumerate(items):
            try:
                recipes.append(SpoonacularRecipe.model_validate(item))
            except ValidationError as e:
                logger.warning(
                    "Skipping invalid Spoonacular recipe",
                    index=index,
                    errors=e.error_count(),
                )
        return recipes
