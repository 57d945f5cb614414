"""Tests for recursive shadowcasting field of view."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from dungeonforge.ai.fov import compute_fov, visible_cells
from dungeonforge.core.enums import CellFlag
from dungeonforge.core.grid import Grid
from dungeonforge.errors import OutOfBoundsError

BLOCK = int(CellFlag.OBSTRUCTS_VISION)


def _open(w: int = 21, h: int = 21) -> Grid:
    return Grid(w, h, 0)


class TestOpenGround:
    def test_radius_is_a_disk(self):
        seen = visible_cells(_open(), 10, 10, 5)
        expected = {
            (x, y) for x in range(21) for y in range(21)
            if (x - 10) ** 2 + (y - 10) ** 2 <= 25
        }
        assert seen == expected

    def test_unlimited_sees_everything(self):
        seen = visible_cells(_open(15, 9), 3, 4)
        assert len(seen) == 15 * 9

    def test_origin_visited_first(self):
        order = []
        compute_fov(_open(), 7, 8, 3, lambda x, y: order.append((x, y)))
        assert order[0] == (7, 8)

    def test_clipped_at_grid_edge(self):
        seen = visible_cells(_open(), 0, 0, 4)
        assert all(0 <= x < 21 and 0 <= y < 21 for x, y in seen)
        assert (4, 0) in seen and (0, 4) in seen


class TestBlockers:
    def test_blocker_casts_shadow(self):
        flags = _open()
        flags.set(12, 10, BLOCK)
        with_block = visible_cells(flags, 10, 10, 8)
        without = visible_cells(_open(), 10, 10, 8)
        assert with_block <= without
        assert (12, 10) in with_block
        assert (15, 10) not in with_block
        assert (15, 10) in without

    def test_mirror_symmetry(self):
        right = _open()
        right.set(12, 10, BLOCK)
        left = _open()
        left.set(8, 10, BLOCK)
        seen_right = visible_cells(right, 10, 10, 8)
        seen_left = visible_cells(left, 10, 10, 8)
        assert {(20 - x, y) for x, y in seen_right} == seen_left

    def test_walled_room_contains_view(self):
        flags = _open(15, 15)
        for i in range(3, 12):
            for x, y in ((i, 3), (i, 11), (3, i), (11, i)):
                flags.set(x, y, BLOCK)
        seen = visible_cells(flags, 7, 7)
        assert all(3 <= x <= 11 and 3 <= y <= 11 for x, y in seen)
        assert (3, 3) in seen or (4, 3) in seen

    def test_origin_inside_blocker_still_sees_neighbours(self):
        flags = _open()
        flags.set(10, 10, BLOCK)
        seen = visible_cells(flags, 10, 10, 2)
        assert (10, 10) in seen
        assert (11, 10) in seen

    def test_custom_blocking_mask(self):
        flags = _open()
        flags.set(12, 10, int(CellFlag.OBSTRUCTS_PASSIBILITY))
        sight = visible_cells(flags, 10, 10, 8)
        assert (15, 10) in sight
        passage = set()
        compute_fov(flags, 10, 10, 8, lambda x, y: passage.add((x, y)),
                    blocking=CellFlag.OBSTRUCTS_PASSIBILITY)
        assert (15, 10) not in passage


class TestErrors:
    def test_origin_out_of_bounds(self):
        with pytest.raises(OutOfBoundsError):
            visible_cells(_open(), 21, 0)
        with pytest.raises(OutOfBoundsError):
            visible_cells(_open(), 0, -1)
