"""Lakes of water, lava or chasm, stamped without cutting the level apart.

Candidate lakes come from the lake automaton at shrinking sizes. A lake is
committed only where it leaves every passable cell reachable from every
other and every door still open on both sides, and is then ringed with a
halo ("wreath") of its secondary kind.
"""

from __future__ import annotations

import logging

from dungeonforge.core.cells import blocks_passage, priority_of
from dungeonforge.core.dungeon import Dungeon
from dungeonforge.core.enums import CellType, LiquidType
from dungeonforge.core.grid import Grid
from dungeonforge.systems.context import GenerationContext
from dungeonforge.systems.shapes import make_lake

logger = logging.getLogger(__name__)

# liquid kind -> (body, wreath)
LIQUIDS: dict[LiquidType, tuple[CellType, CellType | None]] = {
    LiquidType.DEEP_WATER: (CellType.LAKE, CellType.SHALLOW_WATER),
    LiquidType.LAVA: (CellType.LAVA, None),
    LiquidType.CHASM: (CellType.CHASM, CellType.CHASM_EDGE),
}

_CARDINAL = ((0, -1), (1, 0), (0, 1), (-1, 0))
_AXES = ((0, 1), (1, 0))


def lake_cells(lake: Grid[bool], left: int, top: int) -> list[tuple[int, int]]:
    """Dungeon coordinates covered by ``lake`` anchored at ``(left, top)``, row-major."""
    return [(left + x, top + y) for x, y, inside in lake.cells() if inside]


def _flood_passable(
    types: Grid[CellType],
    start: tuple[int, int],
    blocked: set[tuple[int, int]],
) -> set[tuple[int, int]]:
    width, height = types.width, types.height
    reached = {start}
    stack = [start]
    while stack:
        x, y = stack.pop()
        for dx, dy in _CARDINAL:
            nxt = (x + dx, y + dy)
            nx, ny = nxt
            if (
                0 <= nx < width and 0 <= ny < height
                and nxt not in reached
                and nxt not in blocked
                and not blocks_passage(types.get(nx, ny))
            ):
                reached.add(nxt)
                stack.append(nxt)
    return reached


def _open_after(types: Grid[CellType], covered: set[tuple[int, int]], x: int, y: int) -> bool:
    return (
        types.in_bounds(x, y)
        and (x, y) not in covered
        and not blocks_passage(types.get(x, y))
    )


def _strands_door(types: Grid[CellType], covered: set[tuple[int, int]]) -> bool:
    """True if some uncovered door would lose its last open axis."""
    for x, y, t in types.cells():
        if t != CellType.DOOR or (x, y) in covered:
            continue
        if not any(
            _open_after(types, covered, x + dx, y + dy)
            and _open_after(types, covered, x - dx, y - dy)
            for dx, dy in _AXES
        ):
            return True
    return False


def lake_disrupts_passability(
    types: Grid[CellType],
    lake: Grid[bool],
    left: int,
    top: int,
) -> bool:
    """True if stamping ``lake`` at ``(left, top)`` would strand a passable cell.

    Lake cells count as impassable. A door must keep open cells on both
    sides along at least one axis. The flood starts from the first
    remaining passable cell in row-major order.
    """
    covered = set(lake_cells(lake, left, top))
    if _strands_door(types, covered):
        return True
    passable = [
        (x, y) for x, y, t in types.cells()
        if (x, y) not in covered and not blocks_passage(t)
    ]
    if not passable:
        return False
    reached = _flood_passable(types, passable[0], covered)
    return len(reached) != len(passable)


def create_wreath(
    types: Grid[CellType],
    cells: list[tuple[int, int]],
    liquid: CellType,
    wreath: CellType,
    width: int,
) -> dict[tuple[int, int], CellType]:
    """Ring ``cells`` with ``wreath`` out to a circular radius of ``width``.

    A cell is overwritten only when its kind has lower priority than the
    wreath. Lake cells are visited in row-major order. Returns the previous
    kind of every overwritten cell.
    """
    wreath_priority = priority_of(wreath)
    r2 = width * width
    previous: dict[tuple[int, int], CellType] = {}
    for lx, ly in cells:
        for dy in range(-width, width + 1):
            for dx in range(-width, width + 1):
                if dx * dx + dy * dy > r2:
                    continue
                x, y = lx + dx, ly + dy
                if not types.in_bounds(x, y):
                    continue
                current = types.get(x, y)
                if current == liquid or priority_of(current) >= wreath_priority:
                    continue
                previous[(x, y)] = current
                types.set(x, y, wreath)
    return previous


def prune_orphan_wreath(
    dungeon: Dungeon,
    previous: dict[tuple[int, int], CellType],
    previous_terrain: dict[tuple[int, int], CellType],
) -> int:
    """Revert wreath cells cut from the main floor that made solid ground passable.

    Returns the number of cells reverted.
    """
    types = dungeon.types
    new_ground = {pos for pos, kind in previous.items() if blocks_passage(kind)}
    if not new_ground:
        return 0
    start = next(
        ((x, y) for x, y, t in types.cells()
         if (x, y) not in new_ground and not blocks_passage(t)),
        None,
    )
    reached = _flood_passable(types, start, set()) if start is not None else set()
    reverted = 0
    for pos in sorted(new_ground, key=lambda p: (p[1], p[0])):
        if pos not in reached:
            types.set(pos[0], pos[1], previous[pos])
            dungeon.terrain.set(pos[0], pos[1], previous_terrain[pos])
            reverted += 1
    return reverted


def fill_lake(
    ctx: GenerationContext,
    dungeon: Dungeon,
    cells: list[tuple[int, int]],
    liquid: LiquidType,
) -> None:
    """Commit a lake body and its wreath to both the type and terrain layers."""
    body, wreath = LIQUIDS[liquid]
    for x, y in cells:
        dungeon.types.set(x, y, body)
        dungeon.terrain.set(x, y, body)
    if wreath is None:
        return
    previous = create_wreath(dungeon.types, cells, body, wreath, ctx.config.wreath_width)
    previous_terrain = {}
    for (x, y) in previous:
        previous_terrain[(x, y)] = dungeon.terrain.get(x, y)
        dungeon.terrain.set(x, y, wreath)
    reverted = prune_orphan_wreath(dungeon, previous, previous_terrain)
    if reverted:
        logger.debug("Reverted %d unreachable %s cells", reverted, wreath.name.lower())


def design_lakes(ctx: GenerationContext, dungeon: Dungeon) -> int:
    """Place up to one lake per candidate size. Returns the number placed."""
    cfg = ctx.config
    rng = ctx.rng
    liquid = LiquidType(rng.randint(0, len(LiquidType) - 1))

    placed = 0
    lake_h, lake_w = cfg.lake_max_height, cfg.lake_max_width
    while lake_h >= cfg.lake_min_height:
        lake = make_lake(ctx, lake_w, lake_h)
        if lake.width:
            max_left = ctx.width - lake.width - 1
            max_top = ctx.height - lake.height - 1
            for _ in range(cfg.lake_placement_attempts):
                if max_left < 1 or max_top < 1:
                    break
                left = rng.randint(1, max_left)
                top = rng.randint(1, max_top)
                if lake_disrupts_passability(dungeon.types, lake, left, top):
                    continue
                fill_lake(ctx, dungeon, lake_cells(lake, left, top), liquid)
                placed += 1
                logger.info("Placed %dx%d %s lake at (%d, %d)",
                            lake.width, lake.height, liquid.name.lower(), left, top)
                break
            else:
                logger.debug("No safe spot for a %dx%d lake", lake.width, lake.height)
        lake_h -= cfg.lake_shrink_step
        lake_w -= cfg.lake_shrink_step
    return placed
