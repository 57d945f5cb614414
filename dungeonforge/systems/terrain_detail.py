"""Terrain detail: decorative features spread over the finished layout.

Each auto-generator seeds its feature a depth-dependent number of times.
From every anchor the feature spreads breadth-first with a percent chance
that decays each step, then its successor (if any) spreads again inside
the footprint just drawn. Footprints are composited onto a staging layer
by priority.

All generation is deterministic via the context's RNG stream.
"""

from __future__ import annotations

import logging

from dungeonforge.core.cells import blocks_passage, priority_of
from dungeonforge.core.dungeon import Dungeon
from dungeonforge.core.enums import CellType
from dungeonforge.core.features import (
    AUTO_GENERATORS,
    DUNGEON_FEATURES,
    AutoGenerator,
    DungeonFeature,
)
from dungeonforge.core.grid import Grid
from dungeonforge.systems.context import GenerationContext
from dungeonforge.systems.locations import random_matching_location

logger = logging.getLogger(__name__)

_CARDINAL = ((0, -1), (1, 0), (0, 1), (-1, 0))

Footprint = set[tuple[int, int]]


def feature_chain(feature: DungeonFeature, limit: int) -> list[DungeonFeature]:
    """The feature followed by its successors, at most ``limit`` stages."""
    chain = [feature]
    while chain[-1].successor is not None and len(chain) < limit:
        chain.append(DUNGEON_FEATURES[chain[-1].successor])
    return chain


def composite(staging: Grid[CellType], layer: Grid[CellType]) -> None:
    """Draw ``layer`` onto ``staging`` wherever it is at least as important."""
    for x, y, cell_type in layer.cells():
        if cell_type == CellType.EMPTY:
            continue
        current = staging.get(x, y)
        if current == CellType.EMPTY or priority_of(cell_type) >= priority_of(current):
            staging.set(x, y, cell_type)


class TerrainDetailGenerator:
    """Seeds catalogued features on a level and spreads them.

    Deterministic: all randomness via the context's RNG stream.
    """

    __slots__ = ("_ctx", "_dungeon")

    def __init__(self, ctx: GenerationContext, dungeon: Dungeon) -> None:
        self._ctx = ctx
        self._dungeon = dungeon

    def spawn_count(self, gen: AutoGenerator) -> int:
        """Depth-scaled base count, then bumped while frequency rolls succeed."""
        rng = self._ctx.rng
        depth = self._ctx.config.depth
        count = max(0, min((gen.min_intercept + depth * gen.min_slope) // 100, gen.max_number))
        while count < gen.max_number and rng.chance(gen.frequency):
            count += 1
        return count

    def run_layer(self, layer: int) -> Grid[CellType]:
        """Run every generator of ``layer`` and return the staged features."""
        ctx = self._ctx
        staging: Grid[CellType] = Grid(ctx.width, ctx.height, CellType.EMPTY)
        for gen in AUTO_GENERATORS:
            if gen.layer != layer:
                continue
            feature = DUNGEON_FEATURES[gen.feature]
            count = self.spawn_count(gen)
            spawned = 0
            for _ in range(count):
                loc = random_matching_location(
                    ctx, self._dungeon,
                    required_types=gen.required_types,
                    required_liquids=gen.required_liquids,
                )
                if loc is None:
                    continue
                composite(staging, self.spawn_feature(loc.x, loc.y, feature))
                spawned += 1
            logger.debug("Spawned %d/%d %s features", spawned, count, feature.name)
        return staging

    def spawn_feature(self, x: int, y: int, feature: DungeonFeature) -> Grid[CellType]:
        """Spread ``feature`` and its successors from ``(x, y)`` into a fresh layer."""
        ctx = self._ctx
        out: Grid[CellType] = Grid(ctx.width, ctx.height, CellType.EMPTY)
        footprint: Footprint | None = None
        for stage in feature_chain(feature, ctx.config.feature_chain_limit):
            cells, spread = self._spread(x, y, stage, footprint)
            for cx, cy in cells:
                out.set(cx, cy, stage.tile)
            if not spread:
                break
            footprint = cells
        return out

    def _accepts(self, feature: DungeonFeature, x: int, y: int, footprint: Footprint | None) -> bool:
        if footprint is not None and (x, y) not in footprint:
            return False
        cell_type = self._dungeon.types.get(x, y)
        if feature.propagation_terrains is not None:
            return cell_type in feature.propagation_terrains
        return not blocks_passage(cell_type)

    def _spread(
        self,
        x: int,
        y: int,
        feature: DungeonFeature,
        footprint: Footprint | None,
    ) -> tuple[Footprint, bool]:
        """Breadth-first probabilistic spread. Returns (cells, whether it succeeded).

        A non-propagating feature always succeeds with just its anchor.
        """
        cells: Footprint = {(x, y)}
        if not feature.propagates:
            return cells, True

        ctx = self._ctx
        rng = ctx.rng
        width, height = ctx.width, ctx.height
        probability = feature.start
        frontier = [(x, y)]
        steps = 0
        spread = False
        while frontier and probability > 0 and steps < ctx.config.feature_max_steps:
            steps += 1
            grown: list[tuple[int, int]] = []
            for cx, cy in frontier:
                for dx, dy in _CARDINAL:
                    nx, ny = cx + dx, cy + dy
                    if not (0 <= nx < width and 0 <= ny < height) or (nx, ny) in cells:
                        continue
                    if not self._accepts(feature, nx, ny, footprint):
                        continue
                    if rng.chance(probability):
                        cells.add((nx, ny))
                        grown.append((nx, ny))
                        spread = True
            probability -= feature.decrement
            frontier = grown
        return cells, spread


def merge_terrain(dungeon: Dungeon, staging: Grid[CellType]) -> None:
    """Fold staged features into the terrain layer; higher priority wins."""
    terrain = dungeon.terrain
    for x, y, cell_type in staging.cells():
        if cell_type == CellType.EMPTY:
            continue
        current = terrain.get(x, y)
        if current == CellType.EMPTY or priority_of(cell_type) >= priority_of(current):
            terrain.set(x, y, cell_type)
