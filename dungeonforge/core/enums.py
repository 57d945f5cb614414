"""Enumerations used throughout the generator."""

from __future__ import annotations

from enum import IntEnum, IntFlag, unique


@unique
class Direction(IntEnum):
    """Compass directions. The first four are the cardinals."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3
    NORTH_EAST = 4
    SOUTH_EAST = 5
    SOUTH_WEST = 6
    NORTH_WEST = 7

    @property
    def offset(self) -> tuple[int, int]:
        return _OFFSETS[self]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


_OFFSETS = {
    Direction.NORTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
    Direction.NORTH_EAST: (1, -1),
    Direction.SOUTH_EAST: (1, 1),
    Direction.SOUTH_WEST: (-1, 1),
    Direction.NORTH_WEST: (-1, -1),
}

_OPPOSITES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.EAST: Direction.WEST,
    Direction.SOUTH: Direction.NORTH,
    Direction.WEST: Direction.EAST,
    Direction.NORTH_EAST: Direction.SOUTH_WEST,
    Direction.SOUTH_EAST: Direction.NORTH_WEST,
    Direction.SOUTH_WEST: Direction.NORTH_EAST,
    Direction.NORTH_WEST: Direction.SOUTH_EAST,
}

CARDINALS: tuple[Direction, ...] = (
    Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST,
)

# Clockwise ring starting at north; consecutive entries are adjacent cells.
CIRCULAR: tuple[Direction, ...] = (
    Direction.NORTH, Direction.NORTH_EAST, Direction.EAST, Direction.SOUTH_EAST,
    Direction.SOUTH, Direction.SOUTH_WEST, Direction.WEST, Direction.NORTH_WEST,
)


class CellFlag(IntFlag):
    """Per-cell property bits. Flags only accumulate during generation."""

    NONE = 0
    OBSTRUCTS_PASSIBILITY = 1
    OBSTRUCTS_VISION = 2
    YIELD_LETTER = 4
    HAS_MONSTER = 8
    NEVER_PASSABLE = 16


@unique
class CellType(IntEnum):
    """Identifier of a cell kind. EMPTY is the 'nothing here' sentinel."""

    EMPTY = -1
    ROCK = 0
    FLOOR = 1
    DOOR = 2
    WALL = 3
    LAKE = 4
    SHALLOW_WATER = 5
    LAVA = 6
    CHASM = 7
    CHASM_EDGE = 8
    GRANITE = 9
    CRYSTAL_WALL = 10
    LUMINESCENT_FUNGUS = 11
    GRASS = 12
    DEAD_GRASS = 13
    FOLIAGE = 14
    DEAD_FOLIAGE = 15
    RUBBLE = 16
    TORCH_WALL = 17
    LIGHT_POOL = 18


@unique
class LiquidType(IntEnum):
    """Kinds of liquid a lake can be filled with."""

    DEEP_WATER = 0
    LAVA = 1
    CHASM = 2


@unique
class RoomType(IntEnum):
    """Room shape families produced by the shape synthesizer."""

    CAVE = 0
    CIRCLE = 1
    CROSS = 2


@unique
class MonsterType(IntEnum):
    RAT = 0
    KOBOLD = 1
    JACKAL = 2
    EEL = 3
