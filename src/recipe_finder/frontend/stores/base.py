"""Shared store result type."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ActionResult:
    """What a store action reports back to the view."""

    success: bool
    message: str
