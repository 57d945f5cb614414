"""Static monster and horde templates."""

from __future__ import annotations

from dataclasses import dataclass

from dungeonforge.core.enums import CellType, MonsterType
from dungeonforge.core.models import RGB


@dataclass(frozen=True, slots=True)
class MonsterTemplate:
    monster_type: MonsterType
    name: str
    glyph: str
    color: RGB
    max_hp: int = 100
    defense: int = 100
    accuracy: int = 100
    damage: tuple[int, ...] = (1,)
    regen: int = 1
    move_speed: int = 1
    attack_speed: int = 100
    blood: str = "rubble"


@dataclass(frozen=True, slots=True)
class HordeTemplate:
    """A pack led by ``leader``. ``spawns_in`` pins the leader to one terrain kind."""

    leader: MonsterType
    members: tuple[MonsterType, ...] = ()
    member_count: tuple[int, int] = (0, 0)
    min_level: int = 1
    max_level: int = 1
    frequency: int = 100
    spawns_in: CellType | None = None


MONSTER_CATALOG: dict[MonsterType, MonsterTemplate] = {
    MonsterType.RAT: MonsterTemplate(MonsterType.RAT, "rat", "r", RGB(100, 100, 100)),
    MonsterType.KOBOLD: MonsterTemplate(MonsterType.KOBOLD, "kobold", "k", RGB(60, 45, 30)),
    MonsterType.JACKAL: MonsterTemplate(MonsterType.JACKAL, "jackal", "j", RGB(60, 42, 27)),
    MonsterType.EEL: MonsterTemplate(MonsterType.EEL, "eel", "e", RGB(30, 12, 12)),
}

HORDE_CATALOG: tuple[HordeTemplate, ...] = (
    HordeTemplate(MonsterType.RAT, min_level=1, max_level=5, frequency=150),
    HordeTemplate(MonsterType.KOBOLD, min_level=1, max_level=6, frequency=150),
    HordeTemplate(MonsterType.JACKAL, (MonsterType.JACKAL,), (1, 3),
                  min_level=1, max_level=6, frequency=50),
    HordeTemplate(MonsterType.EEL, min_level=1, max_level=6, frequency=50,
                  spawns_in=CellType.LAKE),
)
