"""Versioned API route modules."""

from fastapi import APIRouter

from dungeonforge.api.routes.catalog import router as catalog_router
from dungeonforge.api.routes.dungeon import router as dungeon_router
from dungeonforge.api.routes.fov import router as fov_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(dungeon_router, tags=["Dungeon"])
api_router.include_router(fov_router, tags=["FOV"])
api_router.include_router(catalog_router, tags=["Catalog"])

__all__ = ["api_router"]
