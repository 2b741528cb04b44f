"""Client-side views of the API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ClientModel(BaseModel):
    """Base for payloads received by the client; unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class User(ClientModel):
    """The signed-in user as returned by login and profile update."""

    id: int
    name: str
    email: str


class Ingredient(ClientModel):
    """An ingredient line of a recipe."""

    id: int | None = None
    name: str
    amount: float | None = None
    unit: str | None = None


class Recipe(ClientModel):
    """A recipe card as rendered by the search and saved views."""

    model_config = ConfigDict(alias_generator=to_camel)

    id: int
    title: str
    image: str | None = None
    ready_in_minutes: int | None = None
    servings: int | None = None
    dish_types: list[str] = Field(default_factory=list)
    summary: str | None = None
    extended_ingredients: list[Ingredient] = Field(default_factory=list)
    instructions: str | None = None
    source_url: str | None = None


NO_DATA = "No Data"


def placeholder_recipe() -> Recipe:
    """The recipe shown by the detail view when none is selected."""
    return Recipe(
        id=0,
        title=NO_DATA,
        image=NO_DATA,
        ready_in_minutes=0,
        servings=0,
        summary=NO_DATA,
        instructions=NO_DATA,
        source_url=NO_DATA,
    )
