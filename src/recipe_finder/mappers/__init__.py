"""Data mappers from ORM rows to API schemas."""

from recipe_finder.mappers.recipe import (
    build_favorite_list_response,
    build_recipe_list_response,
    build_recipe_resource,
)


__all__ = [
    "build_favorite_list_response",
    "build_recipe_list_response",
    "build_recipe_resource",
]
