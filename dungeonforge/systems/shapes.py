"""Room and lake shapes as boolean masks.

Every shape is a ``Grid[bool]`` cropped so that each edge touches at least
one True cell. Shapes depend only on the RNG stream they are drawn from.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from math import isqrt

from dungeonforge.core.enums import RoomType
from dungeonforge.core.grid import Grid
from dungeonforge.systems.context import GenerationContext
from dungeonforge.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)

_CAVE_ATTEMPTS = 10

_NEIGHBOURS_8 = ((-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0), (-1, 1), (0, 1), (1, 1))


@dataclass(frozen=True, slots=True)
class CellularRule:
    """Birth/death thresholds on the live 8-neighbour count.

    A dead cell comes alive with at least ``birth`` live neighbours; a live
    cell dies with fewer than ``survival``.
    """

    birth: int
    survival: int


ROOM_RULE = CellularRule(birth=5, survival=2)
LAKE_RULE = CellularRule(birth=5, survival=5)


def run_automaton(
    rng: DeterministicRNG,
    width: int,
    height: int,
    rule: CellularRule,
    iterations: int,
    fill_threshold: float = 0.5,
) -> Grid[bool]:
    """Random fill followed by ``iterations`` synchronous CA generations."""
    cells = [rng.random() > fill_threshold for _ in range(width * height)]
    for _ in range(iterations):
        nxt = list(cells)
        for y in range(height):
            for x in range(width):
                live = 0
                for dx, dy in _NEIGHBOURS_8:
                    nx, ny = x + dx, y + dy
                    if 0 <= nx < width and 0 <= ny < height and cells[ny * width + nx]:
                        live += 1
                i = y * width + x
                if cells[i]:
                    if live < rule.survival:
                        nxt[i] = False
                elif live >= rule.birth:
                    nxt[i] = True
        cells = nxt
    return Grid.from_values(width, height, cells)


def largest_blob(mask: Grid[bool]) -> Grid[bool]:
    """Keep the largest 4-connected True region, cropped to its bounding box.

    Ties go to the region found first in row-major order. An all-False
    mask yields a 0x0 grid.
    """
    width, height = mask.width, mask.height
    cells = mask.values()
    labels = [0] * (width * height)
    best_label = 0
    best_size = 0
    next_label = 0
    for start in range(width * height):
        if not cells[start] or labels[start]:
            continue
        next_label += 1
        labels[start] = next_label
        size = 0
        stack = [start]
        while stack:
            i = stack.pop()
            size += 1
            x, y = i % width, i // width
            for nx, ny in ((x, y - 1), (x + 1, y), (x, y + 1), (x - 1, y)):
                if 0 <= nx < width and 0 <= ny < height:
                    j = ny * width + nx
                    if cells[j] and not labels[j]:
                        labels[j] = next_label
                        stack.append(j)
        if size > best_size:
            best_size = size
            best_label = next_label

    if not best_size:
        return Grid(0, 0, False)

    members = [i for i, label in enumerate(labels) if label == best_label]
    xs = [i % width for i in members]
    ys = [i // width for i in members]
    min_x, max_x, min_y, max_y = min(xs), max(xs), min(ys), max(ys)
    out = Grid(max_x - min_x + 1, max_y - min_y + 1, False)
    for x, y in zip(xs, ys):
        out.set(x - min_x, y - min_y, True)
    return out


def make_cave_room(ctx: GenerationContext) -> Grid[bool]:
    """Organic cave: a cellular automaton blob of 5-11 cells per side."""
    cfg = ctx.config
    for _ in range(_CAVE_ATTEMPTS):
        width = ctx.rng.randint(cfg.cave_min_size, cfg.cave_max_size)
        height = ctx.rng.randint(cfg.cave_min_size, cfg.cave_max_size)
        cells = run_automaton(ctx.rng, width, height, ROOM_RULE,
                              cfg.ca_iterations, cfg.room_fill_threshold)
        blob = largest_blob(cells)
        if blob.width:
            return blob
    logger.debug("Cave automaton died out %d times; using a single cell", _CAVE_ATTEMPTS)
    return Grid(1, 1, True)


def make_circle_room(ctx: GenerationContext) -> Grid[bool]:
    max_radius = max(2, isqrt(min(ctx.width, ctx.height)))
    radius = ctx.rng.randint(2, max_radius)
    size = 2 * radius + 1
    limit = radius * radius + radius
    out = Grid(size, size, False)
    for y in range(size):
        for x in range(size):
            dx, dy = x - radius, y - radius
            if dx * dx + dy * dy < limit:
                out.set(x, y, True)
    return out


def make_cross_room(ctx: GenerationContext) -> Grid[bool]:
    """Two overlapping centred bars, each mirror-symmetric about both axes."""
    rng = ctx.rng
    major_w = rng.randint(4, 8)
    major_h = rng.randint(4, 5)
    minor_w = rng.randint(4, 5)
    minor_h = major_h - 1
    # Matching parity keeps the narrow bar centred on the wide one.
    if (major_w - minor_w) % 2:
        minor_w -= 1
    if minor_w >= major_w:
        minor_w = major_w - 2
    if (major_h - minor_h) % 2:
        minor_h -= 1

    left = (major_w - minor_w) // 2
    top = (major_h - minor_h) // 2
    out = Grid(major_w, major_h, False)
    for y in range(major_h):
        in_bar = top <= y < top + minor_h
        for x in range(major_w):
            if in_bar or left <= x < left + minor_w:
                out.set(x, y, True)
    return out


ROOM_MAKERS = {
    RoomType.CAVE: make_cave_room,
    RoomType.CIRCLE: make_circle_room,
    RoomType.CROSS: make_cross_room,
}


def make_room(ctx: GenerationContext, room_type: RoomType | None = None) -> Grid[bool]:
    """Draw a room of ``room_type``, or of a uniformly chosen type."""
    if room_type is None:
        room_type = RoomType(ctx.rng.randint(0, len(RoomType) - 1))
    return ROOM_MAKERS[room_type](ctx)


def make_lake(ctx: GenerationContext, max_width: int, max_height: int) -> Grid[bool]:
    """Lake blob no larger than ``max_width`` x ``max_height``; may be 0x0."""
    cfg = ctx.config
    cells = run_automaton(ctx.rng, max_width, max_height, LAKE_RULE,
                          cfg.ca_iterations, cfg.lake_fill_threshold)
    return largest_blob(cells)
