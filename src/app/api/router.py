"""API router aggregating the resource routers (mounted under ``api.prefix``)."""

from __future__ import annotations

from fastapi import APIRouter

from app.api.endpoints import auth, categories, recipes, users


router = APIRouter()

router.include_router(auth.router)
router.include_router(categories.router)
router.include_router(recipes.router)
router.include_router(users.router)
