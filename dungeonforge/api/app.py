"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dungeonforge.api.level_store import LevelStore
from dungeonforge.api.routes import api_router
from dungeonforge.config import GenerationConfig
from dungeonforge.errors import DungeonError
from dungeonforge.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: GenerationConfig | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = GenerationConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        store = LevelStore(_config)
        app.state.level_store = store
        logger.info("API server started.")
        yield
        store.clear()
        app.state.level_store = None
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Dungeonforge",
        description=(
            "Deterministic procedural dungeon levels.\n\n"
            "## API Groups\n\n"
            "- **Dungeon** - Generated cell grids, glyph maps, colours and monsters\n"
            "- **FOV** - Visible cells from a position on a generated level\n"
            "- **Catalog** - Cell kinds and horde definitions\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Dungeon", "description": "Levels keyed by width, height and seed. Same key, same level."},
            {"name": "FOV", "description": "Shadowcast field of view over the vision-blocking flags of a level."},
            {"name": "Catalog", "description": "Static definitions the generator draws from."},
        ],
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DungeonError)
    async def dungeon_error_handler(request: Request, exc: DungeonError) -> JSONResponse:
        logger.warning("Rejected %s: %s", request.url.path, exc)
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    app.include_router(api_router)

    return app
