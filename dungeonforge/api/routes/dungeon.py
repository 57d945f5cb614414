"""GET /api/v1/dungeon and /api/v1/dungeon/colors: generated level data."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from dungeonforge.api.dependencies import get_level
from dungeonforge.api.schemas import (
    CellColorSchema,
    ColorResponse,
    ColorSchema,
    CreatureSchema,
    DungeonResponse,
)
from dungeonforge.core.models import CellColor, ColorLayer
from dungeonforge.engine.builder import GenerationResult
from dungeonforge.utils.rle import rle_encode

router = APIRouter()


def _color(layer: ColorLayer) -> ColorSchema:
    r, g, b = layer.as_tuple()
    return ColorSchema(r=r, g=g, b=b, alpha=layer.alpha, dancing=layer.dancing is not None)


def _cell_color(color: CellColor) -> CellColorSchema:
    return CellColorSchema(fg=_color(color.fg), bg=_color(color.bg))


@router.get("/dungeon", response_model=DungeonResponse)
def get_dungeon(result: GenerationResult = Depends(get_level)) -> DungeonResponse:
    with result.lock:
        dungeon = result.dungeon
        return DungeonResponse(
            width=dungeon.width,
            height=dungeon.height,
            seed=str(result.seed),
            types=rle_encode([int(t) for t in dungeon.types.values()]),
            terrain=rle_encode([int(t) for t in dungeon.terrain.values()]),
            flags=rle_encode(dungeon.flags.values()),
            glyphs=result.render().splitlines(),
            creatures=[
                CreatureSchema(
                    x=c.x, y=c.y, monster=c.template.name, glyph=c.template.glyph,
                    hp=c.hp, horde=c.horde,
                )
                for c in result.creatures
            ],
        )


@router.get("/dungeon/colors", response_model=ColorResponse)
def get_dungeon_colors(result: GenerationResult = Depends(get_level)) -> ColorResponse:
    with result.lock:
        return ColorResponse(
            width=result.width,
            height=result.height,
            colors=[_cell_color(c) for c in result.color_grid.values()],
            lit_colors=[_cell_color(c) for c in result.lit_color_grid.values()],
            light=[_color(c) if c is not None else None for c in result.light_color_grid.values()],
        )
