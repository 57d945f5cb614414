"""Generation configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass

from dungeonforge.errors import ConfigurationError


@dataclass(frozen=True)
class GenerationConfig:
    """Immutable tuning constants for one generation run."""

    # Dimensions
    min_width: int = 16
    min_height: int = 14

    # Accretion
    room_attempts: int = 50
    hallway_chance: float = 0.15
    horizontal_hallway_min: int = 4
    horizontal_hallway_max: int = 15
    vertical_hallway_min: int = 2
    vertical_hallway_max: int = 9
    door_trace_length: int = 10          # clear rock cells required outside a door site
    loop_distance_threshold: int = 20    # path steps before a shortcut door is cut

    # Cellular automata
    ca_iterations: int = 5
    cave_min_size: int = 5
    cave_max_size: int = 11
    room_fill_threshold: float = 0.5     # a cell starts alive when a roll exceeds this
    lake_fill_threshold: float = 0.45

    # Lakes
    lake_max_height: int = 15
    lake_max_width: int = 30
    lake_min_height: int = 10
    lake_shrink_step: int = 2
    lake_placement_attempts: int = 20
    wreath_width: int = 2

    # Features
    depth: int = 1
    feature_max_steps: int = 100
    feature_chain_limit: int = 4

    # Population
    location_search_attempts: int = 500
    horde_placement_attempts: int = 50
    base_monsters: int = 6
    monsters_per_depth: int = 3
    max_monsters: int = 20

    # Colour
    noise_period: int = 4
    color_dance_period: int = 100
    light_dance_period: int = 20000

    # Runtime
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000

    def validate(self, width: int | None = None, height: int | None = None) -> None:
        """Raise :class:`ConfigurationError` when values cannot produce a level."""
        if not 0.0 <= self.hallway_chance <= 1.0:
            raise ConfigurationError(f"hallway_chance must be in [0, 1], got {self.hallway_chance}")
        if self.horizontal_hallway_min < 1 or self.horizontal_hallway_min > self.horizontal_hallway_max:
            raise ConfigurationError("invalid horizontal hallway bounds")
        if self.vertical_hallway_min < 1 or self.vertical_hallway_min > self.vertical_hallway_max:
            raise ConfigurationError("invalid vertical hallway bounds")
        if self.cave_min_size < 3 or self.cave_min_size > self.cave_max_size:
            raise ConfigurationError("invalid cave size bounds")
        if self.cave_max_size + 2 >= min(self.min_width, self.min_height):
            raise ConfigurationError("cave rooms must fit inside the minimum dimensions with a rock border")
        if self.noise_period < 1:
            raise ConfigurationError("noise_period must be positive")
        if self.lake_shrink_step < 1:
            raise ConfigurationError("lake_shrink_step must be positive")
        for name in ("room_attempts", "door_trace_length", "ca_iterations",
                     "lake_placement_attempts", "location_search_attempts",
                     "horde_placement_attempts", "feature_chain_limit"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must not be negative")
        if width is not None and height is not None:
            if width < self.min_width or height < self.min_height:
                raise ConfigurationError(
                    f"dungeon must be at least {self.min_width}x{self.min_height}, "
                    f"got {width}x{height}"
                )

    def monster_count(self) -> int:
        return min(self.max_monsters, self.base_monsters + self.monsters_per_depth * max(0, self.depth))
