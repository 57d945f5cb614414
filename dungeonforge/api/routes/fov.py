"""POST /api/v1/fov: what is visible from a cell of a generated level."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from dungeonforge.ai.fov import visible_cells
from dungeonforge.api.dependencies import get_level_store
from dungeonforge.api.level_store import LevelStore
from dungeonforge.api.schemas import FovRequest, FovResponse
from dungeonforge.systems.rng import parse_seed

router = APIRouter()


@router.post("/fov", response_model=FovResponse)
def post_fov(
    body: FovRequest,
    store: LevelStore = Depends(get_level_store),
) -> FovResponse:
    result = store.get(body.width, body.height, parse_seed(body.seed))
    with result.lock:
        seen = visible_cells(result.dungeon.flags, body.x, body.y, body.radius)
    return FovResponse(origin=(body.x, body.y), cells=sorted(seen, key=lambda p: (p[1], p[0])))
