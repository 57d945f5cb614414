"""Tests for the wall finishing pass."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from dungeonforge.core.enums import CellType
from dungeonforge.core.grid import Grid
from dungeonforge.systems.walls import finish_walls

R, F, W = CellType.ROCK, CellType.FLOOR, CellType.WALL


def _room() -> Grid:
    """7x7 rock with a 3x3 floor in the middle."""
    g = Grid(7, 7, R)
    for y in range(2, 5):
        for x in range(2, 5):
            g.set(x, y, F)
    return g


class TestFinishWalls:
    def test_cardinal_pass_skips_corners(self):
        g = _room()
        assert finish_walls(g, diagonals=False) == 12
        assert g.get(2, 1) == W
        assert g.get(1, 3) == W
        assert g.get(1, 1) == R
        assert g.get(0, 0) == R

    def test_diagonal_pass_closes_corners(self):
        g = _room()
        assert finish_walls(g, diagonals=True) == 16
        for x, y in ((1, 1), (5, 1), (1, 5), (5, 5)):
            assert g.get(x, y) == W

    def test_idempotent(self):
        g = _room()
        finish_walls(g, diagonals=True)
        snapshot = g.copy()
        assert finish_walls(g, diagonals=True) == 0
        assert g == snapshot

    def test_buried_wall_becomes_rock(self):
        g = _room()
        g.set(0, 6, W)
        finish_walls(g, diagonals=True)
        assert g.get(0, 6) == R

    def test_floor_untouched(self):
        g = _room()
        finish_walls(g, diagonals=True)
        assert g.count(F) == 9

    def test_door_exposes_rock(self):
        g = Grid(5, 5, R)
        g.set(2, 2, CellType.DOOR)
        finish_walls(g, diagonals=False)
        assert g.get(2, 1) == W

    def test_lake_exposes_rock(self):
        g = Grid(5, 5, R)
        g.set(2, 2, CellType.LAKE)
        finish_walls(g, diagonals=True)
        assert g.get(1, 1) == W
