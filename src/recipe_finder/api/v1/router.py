"""API router aggregating all endpoint routers.

All routes are mounted under ``api.prefix`` (``/api`` by default).
"""

from __future__ import annotations

from fastapi import APIRouter

from recipe_finder.api.v1.endpoints import auth, csrf, favorites, health, recipes


router = APIRouter()

router.include_router(health.router)
router.include_router(csrf.router)
router.include_router(auth.router)
router.include_router(recipes.router)
router.include_router(favorites.router)
