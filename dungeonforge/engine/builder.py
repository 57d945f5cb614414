"""Level builder: runs every generation phase in order on one context."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field

from dungeonforge.config import GenerationConfig
from dungeonforge.core.dungeon import Dungeon
from dungeonforge.core.enums import CellType
from dungeonforge.core.features import ATMOSPHERE_LAYER, TERRAIN_LAYER
from dungeonforge.core.grid import Grid
from dungeonforge.core.models import CellColor, ColorLayer, Creature
from dungeonforge.systems.accretion import accrete_rooms
from dungeonforge.systems.compositor import apply_light, flatten_layers
from dungeonforge.systems.context import GenerationContext
from dungeonforge.systems.generator import HordeGenerator
from dungeonforge.systems.lighting import light_dungeon
from dungeonforge.systems.liquids import design_lakes
from dungeonforge.systems.terrain_detail import TerrainDetailGenerator, merge_terrain
from dungeonforge.systems.walls import finish_walls

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GenerationResult:
    """A finished level.

    The grids are not copied on access. Hosts sharing one result between
    threads hold ``lock`` while reading or writing it.
    """

    seed: int | str
    dungeon: Dungeon
    atmosphere: Grid[CellType]
    glyphs: Grid[str]
    kinds: Grid[CellType]
    color_grid: Grid[CellColor]
    light_color_grid: Grid[ColorLayer | None]
    lit_color_grid: Grid[CellColor]
    creatures: list[Creature]
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def width(self) -> int:
        return self.dungeon.width

    @property
    def height(self) -> int:
        return self.dungeon.height

    def render(self, with_creatures: bool = True) -> str:
        """Glyph map as text, one line per row."""
        rows = [list(r) for r in self.glyphs.rows()]
        if with_creatures:
            for c in self.creatures:
                rows[c.y][c.x] = c.template.glyph
        return "\n".join("".join(r) for r in rows)


class LevelBuilder:
    """Builds one level from a :class:`GenerationContext`."""

    __slots__ = ("_ctx",)

    def __init__(self, ctx: GenerationContext) -> None:
        self._ctx = ctx

    def build(self, seed: int | str) -> GenerationResult:
        ctx = self._ctx
        t0 = time.perf_counter()
        dungeon = Dungeon(ctx.width, ctx.height)

        accrete_rooms(ctx, dungeon.types)
        finish_walls(dungeon.types, diagonals=False)
        design_lakes(ctx, dungeon)

        details = TerrainDetailGenerator(ctx, dungeon)
        merge_terrain(dungeon, details.run_layer(TERRAIN_LAYER))
        atmosphere = details.run_layer(ATMOSPHERE_LAYER)

        finish_walls(dungeon.types, diagonals=True)

        for layer in (dungeon.types, dungeon.terrain, atmosphere):
            dungeon.accumulate_flags(layer)

        flat = flatten_layers(ctx, [dungeon.types, dungeon.terrain, atmosphere])
        light = light_dungeon(ctx, flat.kinds, dungeon.flags)
        creatures = HordeGenerator(ctx, dungeon).populate()

        logger.info(
            "Generated %dx%d level for seed %r in %.2fs",
            ctx.width, ctx.height, seed, time.perf_counter() - t0,
        )
        return GenerationResult(
            seed=seed,
            dungeon=dungeon,
            atmosphere=atmosphere,
            glyphs=flat.glyphs,
            kinds=flat.kinds,
            color_grid=flat.colors,
            light_color_grid=light,
            lit_color_grid=apply_light(flat.colors, light),
            creatures=creatures,
        )


def generate_dungeon(
    width: int,
    height: int,
    seed: int | str,
    config: GenerationConfig | None = None,
) -> GenerationResult:
    """Generate a complete level. Same inputs always give the same level."""
    ctx = GenerationContext.create(width, height, seed, config)
    return LevelBuilder(ctx).build(seed)
