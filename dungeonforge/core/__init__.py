"""Core data models and level representation."""

from dungeonforge.core.cells import CELLS, CellKind
from dungeonforge.core.dungeon import Dungeon
from dungeonforge.core.enums import CellFlag, CellType, Direction, LiquidType, MonsterType, RoomType
from dungeonforge.core.grid import Grid
from dungeonforge.core.models import CellColor, ColorLayer, Creature, DoorSite, LightSource, Vector2

__all__ = [
    "CELLS",
    "CellColor",
    "CellFlag",
    "CellKind",
    "CellType",
    "ColorLayer",
    "Creature",
    "Direction",
    "DoorSite",
    "Dungeon",
    "Grid",
    "LightSource",
    "LiquidType",
    "MonsterType",
    "RoomType",
    "Vector2",
]
