"""Colour rules for cell kinds whose colours vary from cell to cell.

Noise rules sample a smooth per-kind noise field, so neighbouring cells of
the same kind drift together. Jitter rules draw an independent random
offset for every cell.
"""

from __future__ import annotations

from dataclasses import dataclass

from dungeonforge.core.enums import CellType
from dungeonforge.core.models import RGB, Variance


@dataclass(frozen=True, slots=True)
class NoiseColor:
    base: RGB
    variance: Variance = Variance()
    alpha: float = 1.0


@dataclass(frozen=True, slots=True)
class NoiseRule:
    fg: NoiseColor
    bg: NoiseColor


@dataclass(frozen=True, slots=True)
class JitterColor:
    base: RGB
    jitter: Variance
    variance: Variance = Variance()


@dataclass(frozen=True, slots=True)
class JitterRule:
    fg: JitterColor
    bg: JitterColor


_DARK = NoiseColor(RGB(10, 10, 10))
_LIVE_GREEN = NoiseColor(RGB(15, 40, 15), Variance(30, 100, 60, 30))

NOISE_COLORS: dict[CellType, NoiseRule] = {
    CellType.FLOOR: NoiseRule(
        fg=NoiseColor(RGB(191, 191, 191), Variance(2, 2, 2, 2)),
        bg=NoiseColor(RGB(10, 10, 10), Variance(0, 0, 0, 4)),
    ),
    CellType.WALL: NoiseRule(
        fg=NoiseColor(RGB(0, 0, 0), Variance(20, 0, 20, 20)),
        bg=NoiseColor(RGB(119, 116, 70), Variance(40, 10, 40, 40)),
    ),
    CellType.LAKE: NoiseRule(
        fg=NoiseColor(RGB(60, 60, 180), Variance(0, 0, 10, 15)),
        bg=NoiseColor(RGB(30, 30, 120), Variance(5, 5, 5, 15)),
    ),
    CellType.LAVA: NoiseRule(
        fg=NoiseColor(RGB(20, 20, 20), Variance(100, 10, 0, 0)),
        bg=NoiseColor(RGB(150, 60, 0), Variance(60, 10, 0, 0)),
    ),
    CellType.SHALLOW_WATER: NoiseRule(
        fg=NoiseColor(RGB(150, 150, 200), Variance(0, 0, 10, 30)),
        bg=NoiseColor(RGB(80, 80, 190), Variance(0, 0, 10, 15)),
    ),
    CellType.GRASS: NoiseRule(fg=_LIVE_GREEN, bg=_DARK),
    CellType.FOLIAGE: NoiseRule(fg=_LIVE_GREEN, bg=_DARK),
    CellType.DEAD_GRASS: NoiseRule(
        fg=NoiseColor(RGB(51, 33, 24), Variance(50, 40, 10, 25)),
        bg=_DARK,
    ),
    CellType.DEAD_FOLIAGE: NoiseRule(
        fg=NoiseColor(RGB(51, 33, 24), Variance(20, 10, 5, 20)),
        bg=_DARK,
    ),
}

JITTER_COLORS: dict[CellType, JitterRule] = {
    CellType.TORCH_WALL: JitterRule(
        fg=JitterColor(RGB(251, 139, 40), Variance(0, 15, 7), Variance(1, 1, 1)),
        bg=JitterColor(RGB(210, 94, 73), Variance(0, 30, 20), Variance(1, 1, 1)),
    ),
}
