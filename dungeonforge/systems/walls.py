"""Rock/wall reclassification by exposure to open cells."""

from __future__ import annotations

from dungeonforge.core.cells import CELLS
from dungeonforge.core.enums import CellType
from dungeonforge.core.grid import Grid

_CARDINAL = ((0, -1), (1, 0), (0, 1), (-1, 0))
_ALL = _CARDINAL + ((1, -1), (1, 1), (-1, 1), (-1, -1))


def finish_walls(types: Grid[CellType], diagonals: bool) -> int:
    """Turn exposed rock into wall and buried wall back into rock.

    A cell is exposed when a neighbour (cardinal, plus diagonal when
    ``diagonals`` is set) does not block both movement and sight. Rock and
    wall are both solid, so the result does not depend on scan order and a
    second run changes nothing. Returns the number of cells changed.
    """
    offsets = _ALL if diagonals else _CARDINAL
    width, height = types.width, types.height
    changed = 0
    for y in range(height):
        for x in range(width):
            current = types.get(x, y)
            if current != CellType.ROCK and current != CellType.WALL:
                continue
            exposed = False
            for dx, dy in offsets:
                nx, ny = x + dx, y + dy
                if 0 <= nx < width and 0 <= ny < height and not CELLS[types.get(nx, ny)].is_solid:
                    exposed = True
                    break
            if exposed and current == CellType.ROCK:
                types.set(x, y, CellType.WALL)
                changed += 1
            elif not exposed and current == CellType.WALL:
                types.set(x, y, CellType.ROCK)
                changed += 1
    return changed
