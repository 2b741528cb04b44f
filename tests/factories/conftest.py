"""Factory configuration and exports.

This module exports all factories for convenient importing in tests.
"""

from tests.factories.auth import DEFAULT_PASSWORD, RegisterRequestFactory
from tests.factories.settings import (
    SPOONACULAR_TEST_URL,
    TEST_JWT_SECRET,
    SettingsFactory,
)
from tests.factories.spoonacular import (
    SpoonacularIngredientFactory,
    SpoonacularRecipeFactory,
)


__all__ = [
    "DEFAULT_PASSWORD",
    "SPOONACULAR_TEST_URL",
    "TEST_JWT_SECRET",
    "RegisterRequestFactory",
    "SettingsFactory",
    "SpoonacularIngredientFactory",
    "SpoonacularRecipeFactory",
]
