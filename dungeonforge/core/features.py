"""Catalog of decorative terrain features and the generators that seed them.

A feature spreads outward from an anchor cell with a starting percent
chance that drops by ``decrement`` every step. ``propagation_terrains``
restricts which base kinds it may spread into; without it the feature
only spreads into cells that do not block movement. A ``successor`` is
spawned at the same anchor once the feature has spread.
"""

from __future__ import annotations

from dataclasses import dataclass

from dungeonforge.core.enums import CellType


@dataclass(frozen=True, slots=True)
class DungeonFeature:
    name: str
    tile: CellType
    start: int = 0
    decrement: int = 0
    propagation_terrains: frozenset[CellType] | None = None
    successor: str | None = None

    @property
    def propagates(self) -> bool:
        return self.start > 0


@dataclass(frozen=True, slots=True)
class AutoGenerator:
    """How often a feature is seeded on a level.

    The count at a given depth is ``(intercept + depth * slope) / 100``
    clamped to ``max_number``, then raised one at a time while a
    ``frequency`` percent roll succeeds.
    """

    feature: str
    layer: int
    required_types: frozenset[CellType]
    frequency: int
    min_intercept: int
    min_slope: int
    max_number: int
    required_liquids: frozenset[CellType] = frozenset()


TERRAIN_LAYER = 0
ATMOSPHERE_LAYER = 1

_NON_SOLID = frozenset(t for t in CellType if t not in (CellType.WALL, CellType.ROCK))

DUNGEON_FEATURES: dict[str, DungeonFeature] = {
    f.name: f
    for f in (
        DungeonFeature("grass", CellType.GRASS, 75, 10,
                       frozenset({CellType.FLOOR, CellType.DEAD_GRASS}), "foliage"),
        DungeonFeature("dead_grass", CellType.DEAD_GRASS, 75, 10,
                       frozenset({CellType.FLOOR, CellType.GRASS}), "dead_foliage"),
        DungeonFeature("foliage", CellType.FOLIAGE, 50, 30,
                       frozenset({CellType.FLOOR, CellType.DEAD_GRASS, CellType.GRASS})),
        DungeonFeature("dead_foliage", CellType.DEAD_FOLIAGE, 50, 30,
                       frozenset({CellType.FLOOR, CellType.DEAD_GRASS, CellType.GRASS})),
        DungeonFeature("rubble", CellType.RUBBLE, 45, 23),
        DungeonFeature("torch_wall", CellType.TORCH_WALL),
        DungeonFeature("light_pool", CellType.LIGHT_POOL, 66, 20, _NON_SOLID),
        # Catalogued but never seeded by a generator.
        DungeonFeature("granite", CellType.GRANITE, 80, 70),
        DungeonFeature("crystal_wall", CellType.CRYSTAL_WALL, 200, 50),
        DungeonFeature("luminescent_fungus", CellType.LUMINESCENT_FUNGUS, 60, 8,
                       frozenset({CellType.FLOOR})),
    )
}

AUTO_GENERATORS: tuple[AutoGenerator, ...] = (
    AutoGenerator("grass", TERRAIN_LAYER, frozenset({CellType.FLOOR}), 10, 1000, -80, 20),
    AutoGenerator("dead_grass", TERRAIN_LAYER, frozenset({CellType.FLOOR}), 0, 500, 100, 10),
    AutoGenerator("rubble", TERRAIN_LAYER, frozenset({CellType.FLOOR}), 0, 0, 0, 4),
    AutoGenerator("torch_wall", TERRAIN_LAYER, frozenset({CellType.WALL}), 100, 100, 70, 10),
    AutoGenerator("light_pool", ATMOSPHERE_LAYER, _NON_SOLID, 70, 70, 70, 2),
)
