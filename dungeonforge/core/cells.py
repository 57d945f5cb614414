"""Catalog of cell kinds: glyph, compositing priority, flags, colours and glow.

Higher ``priority`` wins when two kinds compete for the same cell in one
layer. Flags from every layer are OR-ed into the dungeon's flag grid.
"""

from __future__ import annotations

from dataclasses import dataclass

from dungeonforge.core.enums import CellFlag, CellType
from dungeonforge.core.models import RGB, LightSource, Variance

_BLOCKS = CellFlag.OBSTRUCTS_PASSIBILITY | CellFlag.OBSTRUCTS_VISION
_SOLID = _BLOCKS | CellFlag.NEVER_PASSABLE

_BLACK = RGB(0, 0, 0)
_FLOOR_BG = RGB.from_hex("#23232b")


@dataclass(frozen=True, slots=True)
class CellKind:
    cell_type: CellType
    name: str
    glyph: str
    priority: int
    flags: CellFlag = CellFlag.NONE
    fg: RGB = _BLACK
    bg: RGB = _BLACK
    alpha: float = 1.0
    dances: bool = False
    glow: LightSource | None = None

    @property
    def obstructs_passability(self) -> bool:
        return bool(self.flags & CellFlag.OBSTRUCTS_PASSIBILITY)

    @property
    def is_solid(self) -> bool:
        """Blocks both movement and sight; walls form only against non-solid cells."""
        return (self.flags & _BLOCKS) == _BLOCKS


def _kind(cell_type: CellType, glyph: str, priority: int, **kw) -> CellKind:
    return CellKind(cell_type, cell_type.name.lower(), glyph, priority, **kw)


CELLS: dict[CellType, CellKind] = {
    k.cell_type: k
    for k in (
        _kind(CellType.EMPTY, " ", -1, alpha=0.0),
        _kind(CellType.ROCK, "#", 15, flags=_SOLID),
        _kind(CellType.FLOOR, "·", 9, fg=RGB.from_hex("#bfbfbf"), bg=_FLOOR_BG),
        _kind(CellType.DOOR, "+", 16, flags=CellFlag.OBSTRUCTS_VISION,
              bg=RGB.from_hex("#583b30")),
        _kind(CellType.WALL, "#", 18, flags=_SOLID, bg=RGB.from_hex("#f5e3cd")),
        _kind(CellType.LAKE, "~", 20, flags=CellFlag.OBSTRUCTS_PASSIBILITY,
              bg=RGB.from_hex("#5e5eca"), dances=True),
        _kind(CellType.SHALLOW_WATER, "~", 17, bg=RGB.from_hex("#70a0ed"), dances=True),
        _kind(CellType.LAVA, "~", 20,
              flags=CellFlag.OBSTRUCTS_PASSIBILITY | CellFlag.NEVER_PASSABLE,
              fg=RGB(20, 20, 20), bg=RGB(150, 60, 0), dances=True,
              glow=LightSource(200, 200, 10, RGB(0, 0, 0), Variance(overall=20))),
        _kind(CellType.CHASM, " ", 20,
              flags=CellFlag.OBSTRUCTS_PASSIBILITY | CellFlag.NEVER_PASSABLE),
        _kind(CellType.CHASM_EDGE, ":", 17, fg=RGB(60, 60, 80), bg=RGB(20, 20, 30)),
        _kind(CellType.GRANITE, "g", 10, flags=_BLOCKS),
        _kind(CellType.CRYSTAL_WALL, "#", 10, flags=_SOLID,
              fg=RGB(200, 220, 255), bg=RGB(120, 140, 200)),
        _kind(CellType.LUMINESCENT_FUNGUS, '"', 10,
              fg=RGB(255, 255, 0), bg=RGB(0, 128, 0)),
        _kind(CellType.GRASS, '"', 10, fg=RGB.from_hex("#8bc34a"), bg=_FLOOR_BG),
        _kind(CellType.DEAD_GRASS, '"', 10, fg=RGB.from_hex("#8c542b"), bg=_FLOOR_BG),
        _kind(CellType.FOLIAGE, "γ", 10, flags=CellFlag.OBSTRUCTS_VISION,
              fg=RGB.from_hex("#8bc34a"), bg=_FLOOR_BG),
        _kind(CellType.DEAD_FOLIAGE, "γ", 10, flags=CellFlag.OBSTRUCTS_VISION,
              fg=RGB.from_hex("#8c542b"), bg=_FLOOR_BG),
        _kind(CellType.RUBBLE, ",", 11, fg=RGB.from_hex("#bfbfbf"), bg=_FLOOR_BG),
        _kind(CellType.TORCH_WALL, "#", 11, flags=_SOLID,
              fg=RGB(255, 255, 0), bg=RGB(255, 0, 0),
              glow=LightSource(1000, 1000, 20, RGB(10, 5, 1), Variance(0, 10, 7, 0))),
        _kind(CellType.LIGHT_POOL, "x", 0, flags=CellFlag.YIELD_LETTER,
              bg=RGB(220, 220, 220), alpha=0.1,
              glow=LightSource(200, 200, 10, RGB(25, 25, 20))),
    )
}


def priority_of(cell_type: CellType) -> int:
    return CELLS[cell_type].priority


def blocks_passage(cell_type: CellType) -> bool:
    return CELLS[cell_type].obstructs_passability
