"""User accounts."""

from recipe_finder.services.users.service import UserService


__all__ = ["UserService"]
