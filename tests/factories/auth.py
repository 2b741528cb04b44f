"""Auth-related factories for generating test data.

Uses polyfactory for consistent test data generation.
"""

from __future__ import annotations

from typing import Any

from polyfactory import PostGenerated
from polyfactory.factories.pydantic_factory import ModelFactory

from recipe_finder.schemas.auth import RegisterRequest


DEFAULT_PASSWORD = "correct-horse-battery"


def _confirmation(_name: str, values: dict[str, Any]) -> str:
    return values["password"]


class RegisterRequestFactory(ModelFactory[RegisterRequest]):
    """Factory for generating registration bodies."""

    __model__ = RegisterRequest

    password_confirmation = PostGenerated(_confirmation)

    @classmethod
    def name(cls) -> str:
        return cls.__faker__.first_name()

    @classmethod
    def email(cls) -> str:
        """Generate a unique email address."""
        return cls.__faker__.unique.email()

    @classmethod
    def password(cls) -> str:
        return DEFAULT_PASSWORD

    @classmethod
    def payload(cls, **kwargs: Any) -> dict[str, Any]:
        """Build a JSON body for the register endpoint."""
        return cls.build(**kwargs).model_dump()
