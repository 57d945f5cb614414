"""Exceptions raised by the dungeon generator."""

from __future__ import annotations


class DungeonError(Exception):
    """Base class for every error raised by dungeonforge."""


class ConfigurationError(DungeonError):
    """Raised when dimensions or configuration values cannot produce a dungeon."""


class OutOfBoundsError(DungeonError, IndexError):
    """Raised when a coordinate falls outside a grid."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(f"({x}, {y}) is outside a {width}x{height} grid")
        self.x = x
        self.y = y
