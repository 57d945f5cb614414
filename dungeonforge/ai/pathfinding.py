"""A* pathfinding over any grid with an impassability predicate.

Provides a `Pathfinder` class and the `path_distance` shortcut used by
loop injection and by callers that only need a step count.

Usage:
    pf = Pathfinder(dungeon.types, blocks_passage)
    path = pf.find_path(start, goal)          # list[Vector2] or None
    steps = path_distance(start, goal, grid, blocks_passage)   # int or math.inf
"""

from __future__ import annotations

import heapq
import math
from typing import Callable, Generic, TypeVar

from dungeonforge.core.grid import Grid
from dungeonforge.core.models import Vector2
from dungeonforge.errors import OutOfBoundsError

T = TypeVar("T")

# Cardinal directions only; every step costs 1.
_DIRS = ((1, 0), (-1, 0), (0, 1), (0, -1))


class Pathfinder(Generic[T]):
    """A* pathfinder over a :class:`Grid`.

    ``impassable`` receives a cell value and returns True when the cell
    cannot be entered. The start cell is never tested. Read-only, so one
    instance may serve concurrent callers as long as nobody writes the grid.
    """

    __slots__ = ("_grid", "_impassable", "_max_nodes")

    def __init__(
        self,
        grid: Grid[T],
        impassable: Callable[[T], bool],
        max_nodes: int | None = None,
    ) -> None:
        self._grid = grid
        self._impassable = impassable
        self._max_nodes = max_nodes

    def _check(self, pos: Vector2) -> None:
        if not self._grid.in_bounds(pos.x, pos.y):
            raise OutOfBoundsError(pos.x, pos.y, self._grid.width, self._grid.height)

    def find_path(self, start: Vector2, goal: Vector2) -> list[Vector2] | None:
        """Compute an A* path from *start* to *goal*.

        Returns the positions after *start* up to and including *goal*, or
        None if the goal is unreachable (or the node budget runs out).
        """
        self._check(start)
        self._check(goal)
        if start == goal:
            return []

        grid = self._grid
        impassable = self._impassable
        if impassable(grid.get(goal.x, goal.y)):
            return None

        width, height = grid.width, grid.height
        limit = self._max_nodes if self._max_nodes is not None else width * height

        # A* open set: (f_score, counter, x, y)
        counter = 0
        open_heap: list[tuple[int, int, int, int]] = []
        heapq.heappush(open_heap, (0, counter, start.x, start.y))

        g_score: dict[tuple[int, int], int] = {(start.x, start.y): 0}
        came_from: dict[tuple[int, int], tuple[int, int]] = {}
        closed: set[tuple[int, int]] = set()
        nodes_explored = 0

        gx, gy = goal.x, goal.y

        while open_heap and nodes_explored < limit:
            _, _, cx, cy = heapq.heappop(open_heap)
            ckey = (cx, cy)

            if cx == gx and cy == gy:
                return self._reconstruct(came_from, ckey)

            if ckey in closed:
                continue
            closed.add(ckey)
            nodes_explored += 1

            current_g = g_score[ckey]

            for dx, dy in _DIRS:
                nx, ny = cx + dx, cy + dy
                nkey = (nx, ny)
                if nkey in closed or not (0 <= nx < width and 0 <= ny < height):
                    continue
                if impassable(grid.get(nx, ny)):
                    continue

                tentative_g = current_g + 1
                if tentative_g < g_score.get(nkey, math.inf):
                    g_score[nkey] = tentative_g
                    came_from[nkey] = ckey
                    h = abs(nx - gx) + abs(ny - gy)  # Manhattan heuristic
                    counter += 1
                    heapq.heappush(open_heap, (tentative_g + h, counter, nx, ny))

        return None

    def distance(self, start: Vector2, goal: Vector2) -> int | float:
        """Number of steps from *start* to *goal*, or ``math.inf``."""
        path = self.find_path(start, goal)
        if path is None:
            return math.inf
        return len(path)

    @staticmethod
    def _reconstruct(
        came_from: dict[tuple[int, int], tuple[int, int]],
        current: tuple[int, int],
    ) -> list[Vector2]:
        """Walk back through came_from to build the path."""
        path: list[Vector2] = []
        while current in came_from:
            path.append(Vector2(current[0], current[1]))
            current = came_from[current]
        path.reverse()
        return path


def path_distance(
    start: Vector2,
    end: Vector2,
    grid: Grid[T],
    impassable: Callable[[T], bool],
) -> int | float:
    """Shortest 4-connected step count between two cells, ``math.inf`` if none."""
    return Pathfinder(grid, impassable).distance(start, end)
