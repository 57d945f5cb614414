"""Per-call generation context: dimensions, RNG stream and tuning."""

from __future__ import annotations

from dataclasses import dataclass, field

from dungeonforge.config import GenerationConfig
from dungeonforge.errors import ConfigurationError
from dungeonforge.systems.rng import DeterministicRNG


@dataclass(slots=True)
class GenerationContext:
    """Everything one generation call owns. Never shared between calls."""

    width: int
    height: int
    rng: DeterministicRNG
    config: GenerationConfig = field(default_factory=GenerationConfig)

    @classmethod
    def create(
        cls,
        width: int,
        height: int,
        seed: int | str,
        config: GenerationConfig | None = None,
    ) -> GenerationContext:
        config = config or GenerationConfig()
        if width <= 0 or height <= 0:
            raise ConfigurationError(f"dimensions must be positive, got {width}x{height}")
        config.validate(width, height)
        return cls(width, height, DeterministicRNG(seed), config)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height
