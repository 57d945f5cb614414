"""Engine layer: the level builder that drives every generation phase."""

from dungeonforge.engine.builder import GenerationResult, LevelBuilder, generate_dungeon

__all__ = ["GenerationResult", "LevelBuilder", "generate_dungeon"]
