"""Tests for lake placement, wreaths and the connectivity guard."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from dungeonforge.core.cells import blocks_passage
from dungeonforge.core.dungeon import Dungeon
from dungeonforge.core.enums import CellType, LiquidType
from dungeonforge.core.grid import Grid
from dungeonforge.systems.context import GenerationContext
from dungeonforge.systems.liquids import (
    create_wreath,
    design_lakes,
    fill_lake,
    lake_cells,
    lake_disrupts_passability,
    prune_orphan_wreath,
)

R, F = CellType.ROCK, CellType.FLOOR


def _corridor() -> Grid:
    """20x14 rock with a horizontal corridor on row 5, x in 2..17."""
    g = Grid(20, 14, R)
    for x in range(2, 18):
        g.set(x, 5, F)
    return g


def _square_lake(size: int = 3) -> Grid:
    return Grid(size, size, True)


class TestLakeCells:
    def test_row_major_offsets(self):
        lake = Grid.from_rows([[True, False], [True, True]])
        assert lake_cells(lake, 4, 6) == [(4, 6), (4, 7), (5, 7)]


class TestConnectivityGuard:
    def test_cutting_corridor_disrupts(self):
        assert lake_disrupts_passability(_corridor(), _square_lake(), 8, 4)

    def test_away_from_corridor_is_safe(self):
        assert not lake_disrupts_passability(_corridor(), _square_lake(), 8, 8)

    def test_covering_corridor_end_is_safe(self):
        assert not lake_disrupts_passability(_corridor(), _square_lake(), 15, 4)

    def test_no_passable_cells(self):
        assert not lake_disrupts_passability(Grid(20, 14, R), _square_lake(), 3, 3)

    def test_door_left_facing_lake_disrupts(self):
        g = _corridor()
        g.set(14, 5, CellType.DOOR)
        assert lake_disrupts_passability(g, _square_lake(), 15, 4)

    def test_door_away_from_lake_is_safe(self):
        g = _corridor()
        g.set(10, 5, CellType.DOOR)
        assert not lake_disrupts_passability(g, _square_lake(), 15, 4)

    def test_door_under_lake_is_safe(self):
        g = _corridor()
        g.set(16, 5, CellType.DOOR)
        assert not lake_disrupts_passability(g, _square_lake(), 15, 4)

    def test_door_keeping_other_axis_is_safe(self):
        g = _corridor()
        g.set(14, 5, CellType.DOOR)
        g.set(14, 4, F)
        g.set(14, 6, F)
        assert not lake_disrupts_passability(g, _square_lake(), 15, 4)


class TestWreath:
    def test_cardinal_ring_of_width_one(self):
        g = Grid(9, 9, F)
        g.set(4, 4, CellType.LAKE)
        previous = create_wreath(g, [(4, 4)], CellType.LAKE, CellType.SHALLOW_WATER, 1)
        assert set(previous) == {(4, 3), (5, 4), (4, 5), (3, 4)}
        assert all(kind == F for kind in previous.values())
        assert g.get(4, 3) == CellType.SHALLOW_WATER
        assert g.get(5, 5) == F
        assert g.get(4, 4) == CellType.LAKE

    def test_higher_priority_kept(self):
        g = Grid(9, 9, F)
        g.set(4, 4, CellType.LAKE)
        g.set(4, 3, CellType.WALL)
        previous = create_wreath(g, [(4, 4)], CellType.LAKE, CellType.SHALLOW_WATER, 1)
        assert (4, 3) not in previous
        assert g.get(4, 3) == CellType.WALL

    def test_rock_is_covered(self):
        g = Grid(9, 9, R)
        g.set(4, 4, CellType.LAKE)
        previous = create_wreath(g, [(4, 4)], CellType.LAKE, CellType.SHALLOW_WATER, 2)
        assert len(previous) == 12
        assert all(kind == R for kind in previous.values())


class TestPruneOrphans:
    def test_unreachable_new_ground_reverted(self):
        d = Dungeon(12, 12)
        for x in range(2, 5):
            d.types.set(x, 2, F)
        d.types.set(5, 2, CellType.SHALLOW_WATER)
        d.types.set(8, 8, CellType.SHALLOW_WATER)
        d.terrain.set(5, 2, CellType.SHALLOW_WATER)
        d.terrain.set(8, 8, CellType.SHALLOW_WATER)
        previous = {(5, 2): R, (8, 8): R}
        previous_terrain = {(5, 2): CellType.EMPTY, (8, 8): CellType.EMPTY}

        assert prune_orphan_wreath(d, previous, previous_terrain) == 1
        assert d.types.get(8, 8) == R
        assert d.terrain.get(8, 8) == CellType.EMPTY
        assert d.types.get(5, 2) == CellType.SHALLOW_WATER

    def test_covered_floor_never_reverted(self):
        d = Dungeon(12, 12)
        d.types.set(2, 2, F)
        d.types.set(8, 8, CellType.SHALLOW_WATER)
        assert prune_orphan_wreath(d, {(8, 8): F}, {(8, 8): CellType.EMPTY}) == 0


class TestFillLake:
    def test_lava_has_no_wreath(self):
        ctx = GenerationContext.create(20, 14, 1)
        d = Dungeon(20, 14)
        d.types.fill(F)
        fill_lake(ctx, d, [(5, 5), (6, 5)], LiquidType.LAVA)
        assert d.types.get(5, 5) == CellType.LAVA
        assert d.terrain.get(6, 5) == CellType.LAVA
        assert d.types.get(7, 5) == F
        assert d.terrain.get(7, 5) == CellType.EMPTY

    def test_water_mirrors_wreath_to_terrain(self):
        ctx = GenerationContext.create(20, 14, 1)
        d = Dungeon(20, 14)
        d.types.fill(F)
        fill_lake(ctx, d, [(10, 7)], LiquidType.DEEP_WATER)
        assert d.types.get(10, 7) == CellType.LAKE
        assert d.types.get(11, 7) == CellType.SHALLOW_WATER
        assert d.terrain.get(11, 7) == CellType.SHALLOW_WATER


def _passable_regions(types: Grid) -> int:
    cells = {(x, y) for x, y, t in types.cells() if not blocks_passage(t)}
    regions = 0
    while cells:
        regions += 1
        stack = [cells.pop()]
        while stack:
            x, y = stack.pop()
            for n in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
                if n in cells:
                    cells.remove(n)
                    stack.append(n)
    return regions


class TestDesignLakes:
    @staticmethod
    def _open_level(seed):
        ctx = GenerationContext.create(60, 30, seed)
        d = Dungeon(60, 30)
        for y in range(1, 29):
            for x in range(1, 59):
                d.types.set(x, y, F)
        return ctx, d

    def test_open_level_gets_lakes(self):
        total = 0
        for seed in range(5):
            ctx, d = self._open_level(seed)
            total += design_lakes(ctx, d)
        assert total >= 1

    def test_level_stays_connected(self):
        for seed in range(5):
            ctx, d = self._open_level(seed)
            design_lakes(ctx, d)
            assert _passable_regions(d.types) == 1, f"seed {seed}"

    def test_deterministic(self):
        ctx_a, a = self._open_level("lakes")
        ctx_b, b = self._open_level("lakes")
        design_lakes(ctx_a, a)
        design_lakes(ctx_b, b)
        assert a.types == b.types
        assert a.terrain == b.terrain
