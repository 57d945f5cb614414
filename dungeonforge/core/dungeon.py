"""The dungeon: three co-indexed grids describing one level."""

from __future__ import annotations

from dungeonforge.core.cells import CELLS
from dungeonforge.core.enums import CellFlag, CellType
from dungeonforge.core.grid import Grid


class Dungeon:
    """Type, terrain and flag grids of one level.

    ``types`` is the authoritative base layer and starts as solid rock.
    ``terrain`` holds decorative overlays (EMPTY where there is none).
    ``flags`` is the OR of the flags of every kind layered on a cell; it
    only ever gains bits.
    """

    __slots__ = ("width", "height", "types", "terrain", "flags")

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.types: Grid[CellType] = Grid(width, height, CellType.ROCK)
        self.terrain: Grid[CellType] = Grid(width, height, CellType.EMPTY)
        self.flags: Grid[int] = Grid(width, height, int(CellFlag.NONE))

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def add_flag(self, x: int, y: int, flag: CellFlag) -> None:
        self.flags.set(x, y, self.flags.get(x, y) | int(flag))

    def has_flag(self, x: int, y: int, flag: CellFlag) -> bool:
        return bool(self.flags.get(x, y) & flag)

    def accumulate_flags(self, layer: Grid[CellType]) -> None:
        """OR the flags of every kind in ``layer`` into the flag grid."""
        for x, y, cell_type in layer.cells():
            if cell_type != CellType.EMPTY:
                flags = CELLS[cell_type].flags
                if flags:
                    self.add_flag(x, y, flags)

    def is_passable(self, x: int, y: int) -> bool:
        return not self.flags.get(x, y) & CellFlag.OBSTRUCTS_PASSIBILITY
