"""Horde generator: picks monster packs by weight and places them on the level."""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from dungeonforge.core.dungeon import Dungeon
from dungeonforge.core.enums import CIRCULAR, CellFlag, MonsterType
from dungeonforge.core.models import Creature
from dungeonforge.core.monsters import HORDE_CATALOG, MONSTER_CATALOG, HordeTemplate
from dungeonforge.systems.context import GenerationContext
from dungeonforge.systems.locations import impassable_arc_count, random_matching_location
from dungeonforge.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)

HordePredicate = Callable[[HordeTemplate], bool]

_SPAWN_FORBIDDEN = CellFlag.HAS_MONSTER | CellFlag.NEVER_PASSABLE


def choose_horde(
    rng: DeterministicRNG,
    catalog: Sequence[HordeTemplate],
    depth: int,
    forbidden: Sequence[HordePredicate] = (),
    required: Sequence[HordePredicate] = (),
) -> int | None:
    """Roulette-wheel pick of a catalog index, weighted by frequency.

    Hordes outside their level range, matching any ``forbidden`` predicate
    or failing a ``required`` one are left out. Returns None when nothing
    is eligible.
    """
    buckets: list[tuple[int, int]] = []  # (cumulative start, catalog index)
    total = 0
    for index, horde in enumerate(catalog):
        if horde.frequency <= 0 or not horde.min_level <= depth <= horde.max_level:
            continue
        if any(p(horde) for p in forbidden):
            continue
        if not all(p(horde) for p in required):
            continue
        buckets.append((total, index))
        total += horde.frequency
    if not total:
        return None

    draw = rng.randrange(0, total)
    for start, index in reversed(buckets):
        if start <= draw:
            return index
    return None


class HordeGenerator:
    """Spawns the initial monster population of a level.

    Deterministic: all randomness via the context's RNG stream.
    """

    __slots__ = ("_ctx", "_dungeon", "_catalog")

    def __init__(
        self,
        ctx: GenerationContext,
        dungeon: Dungeon,
        catalog: Sequence[HordeTemplate] = HORDE_CATALOG,
    ) -> None:
        self._ctx = ctx
        self._dungeon = dungeon
        self._catalog = catalog

    def populate(self) -> list[Creature]:
        """Spawn ``config.monster_count()`` hordes; failed spawns are skipped."""
        creatures: list[Creature] = []
        target = self._ctx.config.monster_count()
        hordes = 0
        for horde_id in range(target):
            spawned = self.spawn_horde(horde_id)
            if spawned:
                hordes += 1
                creatures.extend(spawned)
        logger.info("Spawned %d creatures in %d/%d hordes", len(creatures), hordes, target)
        return creatures

    def spawn_horde(
        self,
        horde_id: int,
        forbidden: Sequence[HordePredicate] = (),
        required: Sequence[HordePredicate] = (),
    ) -> list[Creature]:
        """Place one horde, leader first. Returns [] when no placement is found."""
        ctx = self._ctx
        dungeon = self._dungeon
        for _ in range(ctx.config.horde_placement_attempts):
            index = choose_horde(ctx.rng, self._catalog, ctx.config.depth, forbidden, required)
            if index is None:
                return []
            horde = self._catalog[index]
            loc = random_matching_location(
                ctx, dungeon,
                terrain=horde.spawns_in,
                forbidden_flags=_SPAWN_FORBIDDEN,
                require_passable=horde.spawns_in is None,
            )
            if loc is None or impassable_arc_count(dungeon, loc.x, loc.y) > 1:
                continue
            break
        else:
            logger.debug("Horde %d found no spawn point", horde_id)
            return []

        leader = self._place(loc.x, loc.y, horde.leader, horde_id)
        return [leader, *self._spawn_members(horde, leader, horde_id)]

    def _spawn_members(self, horde: HordeTemplate, leader: Creature, horde_id: int) -> list[Creature]:
        """Place followers on free cells around the leader until space runs out."""
        if not horde.members:
            return []
        rng = self._ctx.rng
        dungeon = self._dungeon
        low, high = horde.member_count
        members: list[Creature] = []
        for _ in range(rng.randint(low, high)):
            offset = rng.randrange(0, len(CIRCULAR))
            spot = None
            for k in range(len(CIRCULAR)):
                dx, dy = CIRCULAR[(offset + k) % len(CIRCULAR)].offset
                x, y = leader.x + dx, leader.y + dy
                if self._can_hold(horde, x, y):
                    spot = (x, y)
                    break
            if spot is None:
                break
            members.append(self._place(spot[0], spot[1], rng.choice(horde.members), horde_id))
        return members

    def _can_hold(self, horde: HordeTemplate, x: int, y: int) -> bool:
        dungeon = self._dungeon
        if not dungeon.in_bounds(x, y) or dungeon.flags.get(x, y) & _SPAWN_FORBIDDEN:
            return False
        if horde.spawns_in is not None:
            return dungeon.terrain.get(x, y) == horde.spawns_in
        return dungeon.is_passable(x, y)

    def _place(self, x: int, y: int, monster: MonsterType, horde_id: int) -> Creature:
        self._dungeon.add_flag(x, y, CellFlag.HAS_MONSTER)
        return Creature(x, y, MONSTER_CATALOG[monster], horde_id)
