"""Unit tests for A* pathfinding and path distance."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import math

import pytest

from dungeonforge.ai.pathfinding import Pathfinder, path_distance
from dungeonforge.core.cells import blocks_passage
from dungeonforge.core.enums import CellType
from dungeonforge.core.grid import Grid
from dungeonforge.core.models import Vector2
from dungeonforge.errors import OutOfBoundsError


def _grid(w: int = 10, h: int = 10) -> Grid:
    return Grid(w, h, CellType.FLOOR)


def _pf(g: Grid) -> Pathfinder:
    return Pathfinder(g, blocks_passage)


# ---------------------------------------------------------------------------
# Basic A* tests
# ---------------------------------------------------------------------------

class TestAStarBasic:
    def test_straight_line_path(self):
        path = _pf(_grid()).find_path(Vector2(0, 0), Vector2(4, 0))
        assert path is not None
        assert len(path) == 4
        assert path[-1] == Vector2(4, 0)

    def test_same_start_and_goal(self):
        assert _pf(_grid()).find_path(Vector2(3, 3), Vector2(3, 3)) == []

    def test_adjacent_goal(self):
        assert _pf(_grid()).find_path(Vector2(5, 5), Vector2(6, 5)) == [Vector2(6, 5)]

    def test_path_around_wall(self):
        """A* should navigate around a wall."""
        g = _grid()
        # Wall from (3,0) to (3,4) blocks the straight horizontal path
        for y in range(5):
            g.set(3, y, CellType.WALL)
        path = _pf(g).find_path(Vector2(2, 2), Vector2(4, 2))
        assert path is not None
        assert len(path) > 2
        assert path[-1] == Vector2(4, 2)
        for step in path:
            assert not blocks_passage(g.get(step.x, step.y)), f"Step {step} is on a wall"

    def test_no_path_through_walls(self):
        """Completely walled off goal gives None."""
        g = _grid()
        for dx, dy in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            g.set(5 + dx, 5 + dy, CellType.WALL)
        assert _pf(g).find_path(Vector2(0, 0), Vector2(5, 5)) is None

    def test_unwalkable_goal(self):
        g = _grid()
        g.set(5, 5, CellType.WALL)
        assert _pf(g).find_path(Vector2(0, 0), Vector2(5, 5)) is None

    def test_path_excludes_start(self):
        path = _pf(_grid()).find_path(Vector2(0, 0), Vector2(2, 0))
        assert Vector2(0, 0) not in path

    def test_path_is_contiguous(self):
        g = _grid()
        for y in range(1, 10):
            g.set(5, y, CellType.WALL)
        path = _pf(g).find_path(Vector2(0, 9), Vector2(9, 9))
        prev = Vector2(0, 9)
        for step in path:
            assert prev.manhattan(step) == 1
            prev = step

    def test_no_diagonal_moves(self):
        path = _pf(_grid()).find_path(Vector2(0, 0), Vector2(3, 3))
        assert len(path) == 6


class TestDoorsAndLiquids:
    def test_doors_are_passable(self):
        g = Grid(7, 3, CellType.WALL)
        for x in range(7):
            g.set(x, 1, CellType.FLOOR)
        g.set(3, 1, CellType.DOOR)
        assert path_distance(Vector2(0, 1), Vector2(6, 1), g, blocks_passage) == 6

    def test_lake_blocks(self):
        g = Grid(7, 3, CellType.WALL)
        for x in range(7):
            g.set(x, 1, CellType.FLOOR)
        g.set(3, 1, CellType.LAKE)
        assert path_distance(Vector2(0, 1), Vector2(6, 1), g, blocks_passage) == math.inf

    def test_shallow_water_passable(self):
        g = Grid(5, 1, CellType.SHALLOW_WATER)
        assert path_distance(Vector2(0, 0), Vector2(4, 0), g, blocks_passage) == 4


class TestLimitsAndErrors:
    def test_node_budget(self):
        g = _grid(30, 30)
        assert Pathfinder(g, blocks_passage, max_nodes=3).find_path(Vector2(0, 0), Vector2(29, 29)) is None

    def test_out_of_bounds(self):
        with pytest.raises(OutOfBoundsError):
            _pf(_grid()).find_path(Vector2(0, 0), Vector2(10, 0))

    def test_distance_matches_path(self):
        g = _grid()
        pf = _pf(g)
        assert pf.distance(Vector2(1, 1), Vector2(4, 6)) == 8
