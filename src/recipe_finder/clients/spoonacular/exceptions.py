"""Spoonacular client exceptions.

Both are caught by the recipe service, which falls back to the local catalog.
"""

from __future__ import annotations


class SpoonacularError(Exception):
    """Base exception for Spoonacular client errors."""


class SpoonacularUnavailableError(SpoonacularError):
    """Raised when Spoonacular cannot be reached (connection error, timeout)."""


class SpoonacularResponseError(SpoonacularError):
    """Raised when Spoonacular answers with a non-2xx status or unreadable body."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        super().__init__(message)
