"""LevelStore: bounded cache of generated levels shared by the API routes.

Generation is deterministic, so a level is built once per
(width, height, seed) and served from memory afterwards. Each cached
result carries its own lock; routes hold it while reading the grids.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict

from dungeonforge.config import GenerationConfig
from dungeonforge.engine.builder import GenerationResult, generate_dungeon

logger = logging.getLogger(__name__)

LevelKey = tuple[int, int, "int | str"]


class LevelStore:
    """Thread-safe LRU of :class:`GenerationResult` objects."""

    def __init__(self, config: GenerationConfig, capacity: int = 16) -> None:
        self.config = config
        self._capacity = capacity
        self._levels: OrderedDict[LevelKey, GenerationResult] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, width: int, height: int, seed: int | str) -> GenerationResult:
        key = (width, height, seed)
        with self._lock:
            cached = self._levels.get(key)
            if cached is not None:
                self._levels.move_to_end(key)
                return cached

        # Build outside the store lock; a duplicate build for the same key is harmless.
        result = generate_dungeon(width, height, seed, self.config)

        with self._lock:
            existing = self._levels.get(key)
            if existing is not None:
                return existing
            self._levels[key] = result
            if len(self._levels) > self._capacity:
                evicted, _ = self._levels.popitem(last=False)
                logger.debug("Evicted level %s", evicted)
        return result

    def __len__(self) -> int:
        with self._lock:
            return len(self._levels)

    def clear(self) -> None:
        with self._lock:
            self._levels.clear()
