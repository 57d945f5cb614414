"""dungeonforge: procedural dungeon levels with lakes, terrain features, light and monsters."""

from dungeonforge.ai.fov import compute_fov
from dungeonforge.ai.pathfinding import path_distance
from dungeonforge.config import GenerationConfig
from dungeonforge.engine.builder import GenerationResult, generate_dungeon
from dungeonforge.errors import ConfigurationError, DungeonError, OutOfBoundsError

__all__ = [
    "ConfigurationError",
    "DungeonError",
    "GenerationConfig",
    "GenerationResult",
    "OutOfBoundsError",
    "compute_fov",
    "generate_dungeon",
    "path_distance",
]
