"""Room accretion: grow a connected layout one room at a time.

Each room is drawn into a full-size scratch grid (the *hyperspace*), given
at most one door site per cardinal direction, then slid across the real
dungeon in random order until one of its doors lines up with a cell that
could serve as a door for the existing layout. Rooms never touch existing
open cells except through that door. After accretion, shortcut doors are
cut wherever two open cells sit on opposite sides of a single rock cell
but lie far apart by path.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from dungeonforge.ai.pathfinding import path_distance
from dungeonforge.core.cells import blocks_passage
from dungeonforge.core.enums import CARDINALS, CellType, Direction
from dungeonforge.core.grid import Grid
from dungeonforge.core.models import DoorSite, Vector2
from dungeonforge.errors import ConfigurationError
from dungeonforge.systems.context import GenerationContext
from dungeonforge.systems.shapes import make_room

logger = logging.getLogger(__name__)

DoorSites = list["DoorSite | None"]


@dataclass(slots=True)
class RoomDesign:
    """A room staged in hyperspace, waiting to be placed."""

    hyperspace: Grid[CellType]
    door_sites: DoorSites
    cells: list[tuple[int, int]] = field(default_factory=list)


def door_site_direction(grid: Grid[CellType], x: int, y: int) -> Direction | None:
    """Direction a door at ``(x, y)`` would face, or None if it cannot be one.

    A door site is a rock cell with exactly one open cardinal neighbour,
    and that neighbour is floor. The door faces away from the open side
    and the cell it faces must lie inside the grid.
    """
    if grid.get(x, y) != CellType.ROCK:
        return None
    open_side: Direction | None = None
    for d in CARDINALS:
        dx, dy = d.offset
        nx, ny = x + dx, y + dy
        if grid.in_bounds(nx, ny) and grid.get(nx, ny) != CellType.ROCK:
            if open_side is not None:
                return None
            open_side = d
    if open_side is None:
        return None
    ox, oy = open_side.offset
    if grid.get(x + ox, y + oy) != CellType.FLOOR:
        return None
    facing = open_side.opposite
    fx, fy = facing.offset
    if not grid.in_bounds(x + fx, y + fy):
        return None
    return facing


def choose_door_sites(
    ctx: GenerationContext,
    hyperspace: Grid[CellType],
    cells: list[tuple[int, int]],
) -> DoorSites:
    """Pick one door site per direction whose outward ray stays clear of the room."""
    trace = ctx.config.door_trace_length
    xs = [c[0] for c in cells]
    ys = [c[1] for c in cells]
    candidates: dict[Direction, list[DoorSite]] = {d: [] for d in CARDINALS}

    for y in range(max(0, min(ys) - 1), min(hyperspace.height, max(ys) + 2)):
        for x in range(max(0, min(xs) - 1), min(hyperspace.width, max(xs) + 2)):
            facing = door_site_direction(hyperspace, x, y)
            if facing is None:
                continue
            dx, dy = facing.offset
            clear = True
            for k in range(1, trace + 1):
                tx, ty = x + dx * k, y + dy * k
                if not hyperspace.in_bounds(tx, ty):
                    break
                if hyperspace.get(tx, ty) != CellType.ROCK:
                    clear = False
                    break
            if clear:
                candidates[facing].append(DoorSite(x, y, facing))

    return [ctx.rng.choice(candidates[d]) if candidates[d] else None for d in CARDINALS]


def attach_hallway(
    ctx: GenerationContext,
    hyperspace: Grid[CellType],
    door_sites: DoorSites,
    cells: list[tuple[int, int]],
) -> DoorSites:
    """Extend a random door into a straight hallway and move the doors to its end.

    The door on the far side of the room is dropped. Returns the door sites
    unchanged when no door has room for a hallway.
    """
    cfg = ctx.config
    order = list(CARDINALS)
    ctx.rng.shuffle(order)

    chosen: Direction | None = None
    for d in order:
        site = door_sites[d]
        if site is None:
            continue
        dx, dy = d.offset
        reach = cfg.horizontal_hallway_max if dx else cfg.vertical_hallway_max
        if hyperspace.in_bounds(site.x + dx * reach, site.y + dy * reach):
            chosen = d
            break
    if chosen is None:
        return door_sites

    site = door_sites[chosen]
    dx, dy = chosen.offset
    if dx:
        length = ctx.rng.randint(cfg.horizontal_hallway_min, cfg.horizontal_hallway_max)
    else:
        length = ctx.rng.randint(cfg.vertical_hallway_min, cfg.vertical_hallway_max)

    x, y = site.x, site.y
    for _ in range(length):
        hyperspace.set(x, y, CellType.FLOOR)
        cells.append((x, y))
        x += dx
        y += dy
    end_x, end_y = x - dx, y - dy

    relocated: DoorSites = [None] * len(CARDINALS)
    for d in CARDINALS:
        if d == chosen.opposite or door_sites[d] is None:
            continue
        ox, oy = d.offset
        nx, ny = end_x + ox, end_y + oy
        if hyperspace.in_bounds(nx, ny) and hyperspace.get(nx, ny) == CellType.ROCK:
            relocated[d] = DoorSite(nx, ny, d)
    return relocated


def design_room(ctx: GenerationContext) -> RoomDesign:
    """Draw a random room, centred in a fresh hyperspace, with its door sites."""
    mask = make_room(ctx)
    if mask.width > ctx.width or mask.height > ctx.height:
        raise ConfigurationError(
            f"{mask.width}x{mask.height} room does not fit a {ctx.width}x{ctx.height} dungeon"
        )
    hyperspace = Grid(ctx.width, ctx.height, CellType.ROCK)
    left = ctx.width // 2 - mask.width // 2
    top = ctx.height // 2 - mask.height // 2
    cells: list[tuple[int, int]] = []
    for x, y, inside in mask.cells():
        if inside:
            hyperspace.set(left + x, top + y, CellType.FLOOR)
            cells.append((left + x, top + y))

    door_sites = choose_door_sites(ctx, hyperspace, cells)
    if ctx.rng.next_float() < ctx.config.hallway_chance:
        door_sites = attach_hallway(ctx, hyperspace, door_sites, cells)
    return RoomDesign(hyperspace, door_sites, cells)


def room_fits_at(types: Grid[CellType], cells: list[tuple[int, int]], ox: int, oy: int) -> bool:
    """True if every shifted room cell has only rock in its 8-neighbourhood."""
    for cx, cy in cells:
        x, y = cx + ox, cy + oy
        for ny in (y - 1, y, y + 1):
            for nx in (x - 1, x, x + 1):
                if not types.in_bounds(nx, ny) or types.get(nx, ny) != CellType.ROCK:
                    return False
    return True


def insert_room(
    types: Grid[CellType],
    hyperspace: Grid[CellType],
    start_x: int,
    start_y: int,
    ox: int,
    oy: int,
) -> int:
    """Copy the floor region of ``hyperspace`` containing the start cell into ``types``.

    Uses an explicit worklist. Returns the number of cells copied.
    """
    copied = 0
    seen = {(start_x, start_y)}
    stack = [(start_x, start_y)]
    while stack:
        hx, hy = stack.pop()
        if hyperspace.get(hx, hy) != CellType.FLOOR:
            continue
        if types.get(hx + ox, hy + oy) == CellType.ROCK:
            types.set(hx + ox, hy + oy, CellType.FLOOR)
            copied += 1
        for d in CARDINALS:
            dx, dy = d.offset
            nxt = (hx + dx, hy + dy)
            if nxt not in seen and hyperspace.in_bounds(*nxt):
                seen.add(nxt)
                stack.append(nxt)
    return copied


def place_room(ctx: GenerationContext, types: Grid[CellType], design: RoomDesign) -> bool:
    """Attach ``design`` to the layout at the first matching door, in random order."""
    width = ctx.width
    order = list(range(width * ctx.height))
    ctx.rng.shuffle(order)

    for idx in order:
        x, y = idx % width, idx // width
        facing = door_site_direction(types, x, y)
        if facing is None:
            continue
        site = design.door_sites[facing.opposite]
        if site is None:
            continue
        ox, oy = x - site.x, y - site.y
        if not room_fits_at(types, design.cells, ox, oy):
            continue
        fx, fy = facing.offset
        insert_room(types, design.hyperspace, site.x + fx, site.y + fy, ox, oy)
        types.set(x, y, CellType.DOOR)
        return True
    return False


def add_loops(ctx: GenerationContext, types: Grid[CellType]) -> int:
    """Cut doors through single rock cells that separate far-apart open cells.

    Both axes are tried; a cell qualifies when the cells on either side of it
    along an axis are open and the path between them is long.
    """
    threshold = ctx.config.loop_distance_threshold
    width, height = ctx.width, ctx.height
    order = list(range(width * height))
    ctx.rng.shuffle(order)

    loops = 0
    for idx in order:
        x, y = idx % width, idx // width
        if types.get(x, y) != CellType.ROCK:
            continue
        for axis in (Direction.NORTH, Direction.EAST):
            dx, dy = axis.offset
            ax, ay, bx, by = x + dx, y + dy, x - dx, y - dy
            if not (types.in_bounds(ax, ay) and types.in_bounds(bx, by)):
                continue
            if types.get(ax, ay) == CellType.ROCK or types.get(bx, by) == CellType.ROCK:
                continue
            distance = path_distance(Vector2(ax, ay), Vector2(bx, by), types, blocks_passage)
            if distance > threshold:
                types.set(x, y, CellType.DOOR)
        if types.get(x, y) == CellType.DOOR:
            loops += 1
    return loops


def accrete_rooms(ctx: GenerationContext, types: Grid[CellType]) -> int:
    """Fill ``types`` with up to ``room_attempts`` connected rooms plus loops.

    Returns the number of rooms placed.
    """
    first = design_room(ctx)
    for x, y in first.cells:
        types.set(x, y, CellType.FLOOR)
    placed = 1

    for attempt in range(ctx.config.room_attempts - 1):
        design = design_room(ctx)
        if place_room(ctx, types, design):
            placed += 1
        else:
            logger.debug("Room attempt %d found no matching door", attempt)

    loops = add_loops(ctx, types)
    logger.info("Accreted %d rooms and %d loop doors", placed, loops)
    return placed
