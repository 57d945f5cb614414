"""Layer compositing and colourisation.

Layers are flattened bottom to top into one glyph, one kind and one
colour per cell. Kinds with a noise rule take their colour from smooth
per-kind noise fields so that, say, a wall drifts in tone along its
length; kinds with a jitter rule get independent per-cell offsets;
everything else uses its static catalog colour.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace

import numpy as np

from dungeonforge.core.cells import CELLS
from dungeonforge.core.enums import CellFlag, CellType
from dungeonforge.core.grid import Grid
from dungeonforge.core.models import RGB, CellColor, ColorLayer, DancingColor, Variance
from dungeonforge.core.palette import JITTER_COLORS, NOISE_COLORS
from dungeonforge.systems.context import GenerationContext
from dungeonforge.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Coherent noise
# ---------------------------------------------------------------------------

def _fade(t: np.ndarray) -> np.ndarray:
    # smootherstep (Perlin)
    return t * t * t * (t * (t * 6 - 15) + 10)


def perlin_field(rng: DeterministicRNG, width: int, height: int, period: int) -> np.ndarray:
    """2D gradient noise in [0, 1], shape ``(height, width)``.

    One random unit gradient per lattice point, lattice spacing ``period``.
    """
    gw = math.ceil(width / period) + 1
    gh = math.ceil(height / period) + 1
    angles = np.array([rng.next_float() for _ in range(gw * gh)]).reshape(gh, gw) * 2 * np.pi
    grad_x = np.cos(angles)
    grad_y = np.sin(angles)

    ys, xs = np.mgrid[0:height, 0:width]
    px = xs / period
    py = ys / period
    x0 = np.floor(px).astype(int)
    y0 = np.floor(py).astype(int)
    fx = px - x0
    fy = py - y0

    def corner(ix: np.ndarray, iy: np.ndarray, dx: np.ndarray, dy: np.ndarray) -> np.ndarray:
        return grad_x[iy, ix] * dx + grad_y[iy, ix] * dy

    n00 = corner(x0, y0, fx, fy)
    n10 = corner(x0 + 1, y0, fx - 1, fy)
    n01 = corner(x0, y0 + 1, fx, fy - 1)
    n11 = corner(x0 + 1, y0 + 1, fx - 1, fy - 1)
    u = _fade(fx)
    v = _fade(fy)
    top = n00 + (n10 - n00) * u
    bottom = n01 + (n11 - n01) * u
    value = top + (bottom - top) * v
    return np.clip((value + 1.0) / 2.0, 0.0, 1.0)


@dataclass(frozen=True, slots=True)
class KindNoise:
    """Per-channel noise fields, each of shape ``(3, height, width)``."""

    fg: np.ndarray
    bg: np.ndarray


NoiseMaps = dict[CellType, KindNoise]


def make_noise_maps(ctx: GenerationContext) -> NoiseMaps:
    """Independent fg and bg fields per channel for every noise-coloured kind."""
    period = ctx.config.noise_period
    maps: NoiseMaps = {}
    for cell_type in NOISE_COLORS:
        fg = np.stack([perlin_field(ctx.rng, ctx.width, ctx.height, period) for _ in range(3)])
        bg = np.stack([perlin_field(ctx.rng, ctx.width, ctx.height, period) for _ in range(3)])
        maps[cell_type] = KindNoise(fg, bg)
    return maps


# ---------------------------------------------------------------------------
# Per-cell colour
# ---------------------------------------------------------------------------

def _clamp(value: float) -> int:
    return max(0, min(255, math.floor(value)))


def apply_variance(
    rng: DeterministicRNG,
    base: RGB,
    noise: tuple[float, float, float],
    variance: Variance,
    alpha: float = 1.0,
) -> ColorLayer:
    """``base + noise * variance + shift`` per channel, with one shared random shift."""
    shift = rng.randrange(0, variance.overall)
    return ColorLayer(
        _clamp(base.r + noise[0] * variance.r + shift),
        _clamp(base.g + noise[1] * variance.g + shift),
        _clamp(base.b + noise[2] * variance.b + shift),
        alpha,
    )


def colorize_cell(
    ctx: GenerationContext,
    cell_type: CellType,
    x: int,
    y: int,
    noise_maps: NoiseMaps,
) -> CellColor:
    kind = CELLS[cell_type]
    rng = ctx.rng

    rule = NOISE_COLORS.get(cell_type)
    if rule is not None:
        noise = noise_maps[cell_type]
        fg_noise = tuple(float(v) for v in noise.fg[:, y, x])
        bg_noise = tuple(float(v) for v in noise.bg[:, y, x])
        fg = apply_variance(rng, rule.fg.base, fg_noise, rule.fg.variance, rule.fg.alpha)
        bg = apply_variance(rng, rule.bg.base, bg_noise, rule.bg.variance, rule.bg.alpha)
        if kind.dances:
            period = ctx.config.color_dance_period
            fg.dancing = DancingColor(rule.fg.variance, period)
            bg.dancing = DancingColor(rule.bg.variance, period)
        return CellColor(fg, bg)

    jitter = JITTER_COLORS.get(cell_type)
    if jitter is not None:
        layers = []
        for part in (jitter.fg, jitter.bg):
            offsets = (
                rng.randrange(0, part.jitter.r),
                rng.randrange(0, part.jitter.g),
                rng.randrange(0, part.jitter.b),
            )
            layers.append(apply_variance(rng, part.base, offsets, part.variance, kind.alpha))
        return CellColor(layers[0], layers[1])

    fg = ColorLayer(kind.fg.r, kind.fg.g, kind.fg.b, kind.alpha)
    bg = ColorLayer(kind.bg.r, kind.bg.g, kind.bg.b, kind.alpha)
    return CellColor(fg, bg)


def blend(lower: ColorLayer, upper: ColorLayer) -> ColorLayer:
    """Alpha-blend ``upper`` over ``lower``; opaque colours simply replace."""
    a = upper.alpha
    if a >= 1.0:
        return upper
    return ColorLayer(
        lower.r * (1 - a) + upper.r * a,
        lower.g * (1 - a) + upper.g * a,
        lower.b * (1 - a) + upper.b * a,
        lower.alpha,
        lower.dancing,
    )


# ---------------------------------------------------------------------------
# Flattening
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class FlattenedLevel:
    glyphs: Grid[str]
    kinds: Grid[CellType]
    colors: Grid[CellColor]


def flatten_layers(ctx: GenerationContext, layers: list[Grid[CellType]]) -> FlattenedLevel:
    """Composite ``layers`` bottom to top.

    EMPTY cells are transparent. A higher kind replaces the glyph beneath
    unless it yields its letter; translucent colours blend with what is
    already there.
    """
    width, height = ctx.width, ctx.height
    noise_maps = make_noise_maps(ctx)
    glyphs: Grid[str] = Grid(width, height, " ")
    kinds: Grid[CellType] = Grid(width, height, CellType.EMPTY)
    colors: Grid[CellColor] = Grid.from_values(
        width, height, [CellColor() for _ in range(width * height)]
    )

    for layer in layers:
        for x, y, cell_type in layer.cells():
            if cell_type == CellType.EMPTY:
                continue
            kind = CELLS[cell_type]
            color = colorize_cell(ctx, cell_type, x, y, noise_maps)
            if kinds.get(x, y) == CellType.EMPTY:
                glyphs.set(x, y, kind.glyph)
            else:
                if not kind.flags & CellFlag.YIELD_LETTER:
                    glyphs.set(x, y, kind.glyph)
                below = colors.get(x, y)
                color = CellColor(blend(below.fg, color.fg), blend(below.bg, color.bg))
            kinds.set(x, y, cell_type)
            colors.set(x, y, color)
    return FlattenedLevel(glyphs, kinds, colors)


def apply_light(colors: Grid[CellColor], light_grid: Grid[ColorLayer | None]) -> Grid[CellColor]:
    """Return a copy of ``colors`` with the static light added to both layers.

    Every cell of the result is a new :class:`CellColor`; the input is untouched.
    """
    lit = [
        CellColor(_add_light(color.fg, light), _add_light(color.bg, light))
        for color, light in zip(colors.values(), light_grid.values())
    ]
    return Grid.from_values(colors.width, colors.height, lit)


def _add_light(color: ColorLayer, light: ColorLayer | None) -> ColorLayer:
    if light is None:
        return replace(color)
    return ColorLayer(
        min(255.0, color.r + light.r),
        min(255.0, color.g + light.g),
        min(255.0, color.b + light.b),
        color.alpha,
        color.dancing,
    )
