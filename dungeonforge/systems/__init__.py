"""Generation systems: RNG, shapes, accretion, liquids, features, colour, light, hordes."""

from dungeonforge.systems.context import GenerationContext
from dungeonforge.systems.generator import HordeGenerator
from dungeonforge.systems.rng import DeterministicRNG
from dungeonforge.systems.terrain_detail import TerrainDetailGenerator

__all__ = ["DeterministicRNG", "GenerationContext", "HordeGenerator", "TerrainDetailGenerator"]
