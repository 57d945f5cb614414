"""Tests for horde selection and monster placement."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from dungeonforge.core.dungeon import Dungeon
from dungeonforge.core.enums import CellFlag, CellType, MonsterType
from dungeonforge.core.monsters import HORDE_CATALOG, HordeTemplate
from dungeonforge.systems.context import GenerationContext
from dungeonforge.systems.generator import HordeGenerator, choose_horde
from dungeonforge.systems.rng import DeterministicRNG

F = CellType.FLOOR


def _open_dungeon(seed=1, lake: bool = False):
    """20x14 floor with a rock border, optionally a 6x6 lake in the middle."""
    ctx = GenerationContext.create(20, 14, seed)
    d = Dungeon(20, 14)
    for y in range(1, 13):
        for x in range(1, 19):
            d.types.set(x, y, F)
    if lake:
        for y in range(4, 10):
            for x in range(7, 13):
                d.types.set(x, y, CellType.LAKE)
                d.terrain.set(x, y, CellType.LAKE)
    d.accumulate_flags(d.types)
    d.accumulate_flags(d.terrain)
    return ctx, d


def _is(monster):
    return lambda h: h.leader == monster


# ---------------------------------------------------------------------------
# Weighted choice
# ---------------------------------------------------------------------------

class TestChooseHorde:
    def test_frequency_weights(self):
        catalog = (
            HordeTemplate(MonsterType.RAT, frequency=100),
            HordeTemplate(MonsterType.KOBOLD, frequency=300),
        )
        rng = DeterministicRNG(2024)
        picks = [choose_horde(rng, catalog, 1) for _ in range(10_000)]
        share = picks.count(1) / len(picks)
        assert 0.72 < share < 0.78

    def test_level_range_filter(self):
        catalog = (
            HordeTemplate(MonsterType.RAT, min_level=1, max_level=2),
            HordeTemplate(MonsterType.KOBOLD, min_level=5, max_level=9),
        )
        rng = DeterministicRNG(1)
        assert {choose_horde(rng, catalog, 1) for _ in range(200)} == {0}
        assert {choose_horde(rng, catalog, 6) for _ in range(200)} == {1}
        assert choose_horde(rng, catalog, 3) is None

    def test_zero_frequency_never_chosen(self):
        catalog = (
            HordeTemplate(MonsterType.RAT, frequency=0),
            HordeTemplate(MonsterType.KOBOLD, frequency=10),
        )
        rng = DeterministicRNG(3)
        assert {choose_horde(rng, catalog, 1) for _ in range(200)} == {1}

    def test_forbidden_and_required(self):
        rng = DeterministicRNG(4)
        picks = {choose_horde(rng, HORDE_CATALOG, 1, forbidden=[_is(MonsterType.RAT)]) for _ in range(300)}
        assert 0 not in picks
        picks = {choose_horde(rng, HORDE_CATALOG, 1, required=[_is(MonsterType.EEL)]) for _ in range(50)}
        assert picks == {3}

    def test_nothing_eligible(self):
        rng = DeterministicRNG(5)
        assert choose_horde(rng, HORDE_CATALOG, 1, required=[lambda h: False]) is None
        assert choose_horde(rng, (), 1) is None


# ---------------------------------------------------------------------------
# Placement
# ---------------------------------------------------------------------------

class TestHordeGenerator:
    def test_populate_places_on_free_cells(self):
        ctx, d = _open_dungeon(7)
        creatures = HordeGenerator(ctx, d).populate()
        assert creatures
        positions = [(c.x, c.y) for c in creatures]
        assert len(positions) == len(set(positions))
        for c in creatures:
            assert d.has_flag(c.x, c.y, CellFlag.HAS_MONSTER)
            assert d.is_passable(c.x, c.y)

    def test_hp_from_template(self):
        ctx, d = _open_dungeon(8)
        for c in HordeGenerator(ctx, d).populate():
            assert c.hp == c.template.max_hp

    def test_jackal_pack(self):
        ctx, d = _open_dungeon(9)
        pack = HordeGenerator(ctx, d).spawn_horde(4, required=[_is(MonsterType.JACKAL)])
        assert 2 <= len(pack) <= 4
        leader = pack[0]
        assert all(c.horde == 4 for c in pack)
        assert all(c.template.monster_type == MonsterType.JACKAL for c in pack)
        for member in pack[1:]:
            assert max(abs(member.x - leader.x), abs(member.y - leader.y)) == 1

    def test_eel_spawns_in_lake(self):
        ctx, d = _open_dungeon(10, lake=True)
        spawned = HordeGenerator(ctx, d).spawn_horde(0, required=[_is(MonsterType.EEL)])
        assert len(spawned) == 1
        eel = spawned[0]
        assert d.terrain.get(eel.x, eel.y) == CellType.LAKE

    def test_eel_without_lake_fails(self):
        ctx, d = _open_dungeon(11)
        assert HordeGenerator(ctx, d).spawn_horde(0, required=[_is(MonsterType.EEL)]) == []

    def test_land_hordes_avoid_lake(self):
        ctx, d = _open_dungeon(12, lake=True)
        gen = HordeGenerator(ctx, d)
        for horde_id in range(10):
            for c in gen.spawn_horde(horde_id, forbidden=[_is(MonsterType.EEL)]):
                assert d.types.get(c.x, c.y) == F

    def test_chokepoints_avoided(self):
        ctx = GenerationContext.create(20, 14, 13)
        d = Dungeon(20, 14)
        for x in range(2, 18):
            d.types.set(x, 7, F)
        d.accumulate_flags(d.types)
        creatures = HordeGenerator(ctx, d).spawn_horde(0, required=[_is(MonsterType.RAT)])
        for c in creatures:
            assert c.x in (2, 17)

    def test_deterministic(self):
        a = HordeGenerator(*_open_dungeon("hordes")).populate()
        b = HordeGenerator(*_open_dungeon("hordes")).populate()
        assert [(c.x, c.y, c.template.name) for c in a] == [(c.x, c.y, c.template.name) for c in b]
