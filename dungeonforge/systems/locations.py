"""Random location search and local topology probes on a dungeon."""

from __future__ import annotations

from typing import Collection

from dungeonforge.core.cells import blocks_passage
from dungeonforge.core.dungeon import Dungeon
from dungeonforge.core.enums import CIRCULAR, CellFlag, CellType
from dungeonforge.core.models import Vector2
from dungeonforge.systems.context import GenerationContext


def random_matching_location(
    ctx: GenerationContext,
    dungeon: Dungeon,
    required_types: Collection[CellType] = (),
    required_liquids: Collection[CellType] = (),
    terrain: CellType | None = None,
    forbidden_flags: int = 0,
    require_passable: bool = False,
) -> Vector2 | None:
    """Sample random cells until one satisfies every constraint.

    ``required_types`` and ``required_liquids`` restrict the base and
    terrain layers when non-empty. ``terrain`` pins the terrain layer to one
    kind. Gives up after ``location_search_attempts`` samples.
    """
    width, height = dungeon.width, dungeon.height
    rng = ctx.rng
    for _ in range(ctx.config.location_search_attempts):
        i = rng.randrange(0, width * height)
        x, y = i % width, i // width
        if required_types and dungeon.types.get(x, y) not in required_types:
            continue
        if required_liquids and dungeon.terrain.get(x, y) not in required_liquids:
            continue
        if terrain is not None and dungeon.terrain.get(x, y) != terrain:
            continue
        if forbidden_flags and dungeon.flags.get(x, y) & forbidden_flags:
            continue
        if require_passable and dungeon.flags.get(x, y) & CellFlag.OBSTRUCTS_PASSIBILITY:
            continue
        return Vector2(x, y)
    return None


def _passable_or_door(dungeon: Dungeon, x: int, y: int) -> bool:
    if not dungeon.in_bounds(x, y):
        return False
    cell_type = dungeon.types.get(x, y)
    return cell_type == CellType.DOOR or not blocks_passage(cell_type)


def impassable_arc_count(dungeon: Dungeon, x: int, y: int) -> int:
    """Number of separate impassable arcs around ``(x, y)``.

    Walks the eight neighbours clockwise and counts passable/impassable
    transitions. A cell with more than one arc sits in a chokepoint, where
    a monster would block the way.
    """
    transitions = 0
    prev = CIRCULAR[-1]
    for d in CIRCULAR:
        pdx, pdy = prev.offset
        dx, dy = d.offset
        if _passable_or_door(dungeon, x + pdx, y + pdy) != _passable_or_door(dungeon, x + dx, y + dy):
            transitions += 1
        prev = d
    return transitions // 2
