"""FastAPI dependencies: the app's level cache and the level a request names.

The :class:`LevelStore` lives on ``app.state`` for the lifetime of the app,
so two apps built in one process never share cached levels.
"""

from __future__ import annotations

from fastapi import Depends, Query, Request

from dungeonforge.api.level_store import LevelStore
from dungeonforge.api.schemas import MAX_SIDE
from dungeonforge.engine.builder import GenerationResult
from dungeonforge.systems.rng import parse_seed


def get_level_store(request: Request) -> LevelStore:
    store: LevelStore | None = getattr(request.app.state, "level_store", None)
    if store is None:
        raise RuntimeError("LevelStore not initialized: app lifespan has not run.")
    return store


def get_level(
    width: int = Query(79, ge=1, le=MAX_SIDE),
    height: int = Query(29, ge=1, le=MAX_SIDE),
    seed: str = Query("1"),
    store: LevelStore = Depends(get_level_store),
) -> GenerationResult:
    """The cached level for the ``width``/``height``/``seed`` query, built on first use."""
    return store.get(width, height, parse_seed(seed))
