"""Core data models: Vector2, colours, lights, door sites and creatures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from dungeonforge.core.enums import Direction

if TYPE_CHECKING:
    from dungeonforge.core.monsters import MonsterTemplate


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable 2D integer coordinate."""

    x: int = 0
    y: int = 0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def manhattan(self, other: Vector2) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(frozen=True, slots=True)
class RGB:
    """Integer colour triple, channels in 0..255."""

    r: int = 0
    g: int = 0
    b: int = 0

    @classmethod
    def from_hex(cls, value: str) -> RGB:
        value = value.lstrip("#")
        return cls(int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


@dataclass(frozen=True, slots=True)
class Variance:
    """Per-channel deviation plus an overall shift applied to every channel."""

    r: int = 0
    g: int = 0
    b: int = 0
    overall: int = 0


@dataclass(frozen=True, slots=True)
class DancingColor:
    """Animation hint: the renderer oscillates a colour within ``deviations``."""

    deviations: Variance
    period: int


@dataclass(slots=True)
class ColorLayer:
    """One colour layer (foreground, background or light) of a cell."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    alpha: float = 1.0
    dancing: DancingColor | None = None

    def as_tuple(self) -> tuple[int, int, int]:
        return (round(self.r), round(self.g), round(self.b))


@dataclass(slots=True)
class CellColor:
    fg: ColorLayer = field(default_factory=ColorLayer)
    bg: ColorLayer = field(default_factory=ColorLayer)


@dataclass(frozen=True, slots=True)
class LightSource:
    """Glow emitted by a cell kind.

    Radii are in hundredths of a cell. ``fade`` is the percentage of
    intensity left at the edge of the radius.
    """

    min_radius: int
    max_radius: int
    fade: int
    base: RGB
    variance: Variance = Variance()


@dataclass(frozen=True, slots=True)
class DoorSite:
    """Boundary cell of a room design where a door may connect it."""

    x: int
    y: int
    direction: Direction


@dataclass(slots=True)
class Creature:
    """A monster placed in the dungeon."""

    x: int
    y: int
    template: MonsterTemplate
    horde: int = -1
    hp: int = 0

    def __post_init__(self) -> None:
        if self.hp <= 0:
            self.hp = self.template.max_hp
