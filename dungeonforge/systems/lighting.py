"""Static light map painted from glowing cells.

Every cell whose flattened kind glows paints a point light: a radius is
drawn from the light's range, the cells visible from the source within
that radius receive the light's colour scaled by a linear falloff, and
overlapping lights add up. Computed once per level.
"""

from __future__ import annotations

import logging
import math

from dungeonforge.ai.fov import visible_cells
from dungeonforge.core.cells import CELLS
from dungeonforge.core.enums import CellType
from dungeonforge.core.grid import Grid
from dungeonforge.core.models import ColorLayer, DancingColor, LightSource
from dungeonforge.systems.context import GenerationContext

logger = logging.getLogger(__name__)

LightGrid = Grid["ColorLayer | None"]


def new_light_grid(width: int, height: int) -> LightGrid:
    return Grid(width, height, None)


def paint_light(
    ctx: GenerationContext,
    light: LightSource,
    x: int,
    y: int,
    flags: Grid[int],
    light_grid: LightGrid,
) -> int:
    """Add one point light at ``(x, y)`` to ``light_grid``. Returns cells lit.

    Intensity is 100% at the source and ``light.fade`` percent at the
    radius. The source cell is tagged to dance with the light's variance.
    """
    rng = ctx.rng
    radius = rng.randint(light.min_radius, light.max_radius) / 100
    variance = light.variance
    overall = rng.randrange(0, variance.overall)
    red = light.base.r + overall + rng.randrange(0, variance.r)
    green = light.base.g + overall + rng.randrange(0, variance.g)
    blue = light.base.b + overall + rng.randrange(0, variance.b)

    lit = 0
    for cx, cy in sorted(visible_cells(flags, x, y, radius), key=lambda p: (p[1], p[0])):
        distance = math.hypot(cx - x, cy - y)
        if radius > 0:
            if distance > radius:
                continue
            multiplier = 100 - (100 - light.fade) * distance / radius
        elif distance > 0:
            continue
        else:
            multiplier = 100
        cell = light_grid.get(cx, cy)
        if cell is None:
            cell = ColorLayer(0.0, 0.0, 0.0)
            light_grid.set(cx, cy, cell)
        cell.r += red * multiplier / 100
        cell.g += green * multiplier / 100
        cell.b += blue * multiplier / 100
        lit += 1

    source = light_grid.get(x, y)
    if source is None:
        source = ColorLayer(0.0, 0.0, 0.0)
        light_grid.set(x, y, source)
    source.dancing = DancingColor(variance, ctx.config.light_dance_period)
    return lit


def light_dungeon(
    ctx: GenerationContext,
    kinds: Grid[CellType],
    flags: Grid[int],
) -> LightGrid:
    """Paint every glowing cell of the flattened level, in row-major order."""
    light_grid = new_light_grid(ctx.width, ctx.height)
    sources = 0
    for x, y, cell_type in kinds.cells():
        glow = CELLS[cell_type].glow
        if glow is None:
            continue
        paint_light(ctx, glow, x, y, flags, light_grid)
        sources += 1
    logger.info("Painted %d light sources", sources)
    return light_grid
