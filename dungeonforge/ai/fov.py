"""Field of view by recursive shadowcasting.

The plane around the origin is split into eight octants. Each octant is
scanned column by column moving away from the origin, and within a column
from the diagonal toward the axis, while a view cone ``[left, right]`` of
slopes shrinks as obstructions are met.

Usage:
    seen = set()
    compute_fov(dungeon.flags, x, y, 8, lambda cx, cy: seen.add((cx, cy)))
"""

from __future__ import annotations

from typing import Callable

from dungeonforge.core.enums import CellFlag
from dungeonforge.core.grid import Grid
from dungeonforge.errors import OutOfBoundsError

Visit = Callable[[int, int], None]

# (xx, xy, yx, yy): grid offset = (xc*xx + yc*xy, xc*yx + yc*yy)
OCTANT_TRANSFORMS: tuple[tuple[int, int, int, int], ...] = (
    (1, 0, 0, 1),
    (0, 1, 1, 0),
    (0, -1, 1, 0),
    (-1, 0, 0, 1),
    (-1, 0, 0, -1),
    (0, -1, -1, 0),
    (0, 1, -1, 0),
    (1, 0, 0, -1),
)


def compute_fov(
    flags: Grid[int],
    origin_x: int,
    origin_y: int,
    max_radius: float | None,
    visit: Visit,
    blocking: int = CellFlag.OBSTRUCTS_VISION,
) -> None:
    """Call ``visit(x, y)`` for every cell visible from the origin.

    A cell blocks sight when its flags share a bit with ``blocking``. Only
    cells with ``dx*dx + dy*dy <= max_radius**2`` are visited; pass None
    for no limit. The origin is visited first. Cells on octant borders may
    be visited more than once, so ``visit`` should be idempotent.
    """
    width, height = flags.width, flags.height
    if not flags.in_bounds(origin_x, origin_y):
        raise OutOfBoundsError(origin_x, origin_y, width, height)

    if max_radius is None:
        columns = max(width, height)
        r2 = float("inf")
    else:
        columns = int(max_radius) + 1
        r2 = max_radius * max_radius

    visit(origin_x, origin_y)

    def cast(start: int, left: float, right: float, transform: tuple[int, int, int, int]) -> None:
        xx, xy, yx, yy = transform
        previous_blocked = False
        saved_right = -1.0
        for xc in range(start, columns + 1):
            for yc in range(xc, -1, -1):
                gx = origin_x + xc * xx + yc * xy
                gy = origin_y + xc * yx + yc * yy
                if not (0 <= gx < width and 0 <= gy < height):
                    continue

                left_block = (yc + 0.5) / (xc - 0.5)
                right_block = (yc - 0.5) / (xc + 0.5)
                if right_block > left:
                    continue
                if left_block < right:
                    break

                if xc * xc + yc * yc <= r2:
                    visit(gx, gy)

                blocked = flags.get(gx, gy) & blocking
                if previous_blocked:
                    if blocked:
                        saved_right = right_block
                    else:
                        previous_blocked = False
                        left = saved_right
                elif blocked:
                    if left_block <= left:
                        cast(xc + 1, left, left_block, transform)
                    previous_blocked = True
                    saved_right = right_block
            if previous_blocked:
                break

    for transform in OCTANT_TRANSFORMS:
        cast(1, 1.0, 0.0, transform)


def visible_cells(
    flags: Grid[int],
    origin_x: int,
    origin_y: int,
    max_radius: float | None = None,
) -> set[tuple[int, int]]:
    """Convenience wrapper collecting :func:`compute_fov` results into a set."""
    seen: set[tuple[int, int]] = set()
    compute_fov(flags, origin_x, origin_y, max_radius, lambda x, y: seen.add((x, y)))
    return seen
