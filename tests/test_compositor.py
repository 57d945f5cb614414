"""Tests for noise fields, colourisation and layer flattening."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import numpy as np

from dungeonforge.core.cells import CELLS
from dungeonforge.core.enums import CellType
from dungeonforge.core.grid import Grid
from dungeonforge.core.models import RGB, CellColor, ColorLayer, Variance
from dungeonforge.core.palette import NOISE_COLORS
from dungeonforge.systems.compositor import (
    apply_light,
    apply_variance,
    blend,
    colorize_cell,
    flatten_layers,
    make_noise_maps,
    perlin_field,
)
from dungeonforge.systems.context import GenerationContext
from dungeonforge.systems.rng import DeterministicRNG


def _ctx(seed=1, w=16, h=14) -> GenerationContext:
    return GenerationContext.create(w, h, seed)


class TestPerlinField:
    def test_shape_and_range(self):
        field = perlin_field(DeterministicRNG(1), 30, 20, 4)
        assert field.shape == (20, 30)
        assert field.min() >= 0.0
        assert field.max() <= 1.0

    def test_lattice_points_are_midpoint(self):
        field = perlin_field(DeterministicRNG(2), 30, 20, 4)
        assert field[0, 0] == 0.5
        assert field[4, 8] == 0.5
        assert field[16, 28] == 0.5

    def test_smooth_between_neighbours(self):
        field = perlin_field(DeterministicRNG(3), 40, 40, 4)
        assert np.abs(np.diff(field, axis=0)).max() < 0.5
        assert np.abs(np.diff(field, axis=1)).max() < 0.5

    def test_deterministic(self):
        a = perlin_field(DeterministicRNG(4), 25, 15, 4)
        b = perlin_field(DeterministicRNG(4), 25, 15, 4)
        assert np.array_equal(a, b)

    def test_noise_maps_cover_noise_kinds(self):
        ctx = _ctx()
        maps = make_noise_maps(ctx)
        assert set(maps) == set(NOISE_COLORS)
        assert maps[CellType.WALL].fg.shape == (3, 14, 16)


class TestApplyVariance:
    def test_zero_variance_is_base(self):
        layer = apply_variance(DeterministicRNG(1), RGB(10, 20, 30), (0.7, 0.2, 0.9), Variance())
        assert layer.as_tuple() == (10, 20, 30)

    def test_clamped(self):
        layer = apply_variance(DeterministicRNG(1), RGB(250, 0, 0), (1.0, 0.0, 0.0), Variance(20, 0, 0))
        assert layer.r == 255

    def test_overall_shift_shared(self):
        rng = DeterministicRNG(5)
        for _ in range(20):
            layer = apply_variance(rng, RGB(50, 60, 70), (0.0, 0.0, 0.0), Variance(overall=10))
            shift = layer.r - 50
            assert 0 <= shift < 10
            assert (layer.g - 60, layer.b - 70) == (shift, shift)

    def test_alpha_carried(self):
        layer = apply_variance(DeterministicRNG(1), RGB(), (0.0, 0.0, 0.0), Variance(), alpha=0.25)
        assert layer.alpha == 0.25


class TestColorizeCell:
    def test_static_kind_uses_catalog_colour(self):
        ctx = _ctx()
        color = colorize_cell(ctx, CellType.DOOR, 1, 1, {})
        bg = CELLS[CellType.DOOR].bg
        assert color.bg.as_tuple() == (bg.r, bg.g, bg.b)

    def test_liquid_dances(self):
        ctx = _ctx()
        maps = make_noise_maps(ctx)
        color = colorize_cell(ctx, CellType.LAKE, 3, 3, maps)
        assert color.fg.dancing is not None
        assert color.bg.dancing.period == ctx.config.color_dance_period

    def test_wall_does_not_dance(self):
        ctx = _ctx()
        maps = make_noise_maps(ctx)
        assert colorize_cell(ctx, CellType.WALL, 3, 3, maps).bg.dancing is None

    def test_torch_jitter_range(self):
        ctx = _ctx()
        for _ in range(30):
            color = colorize_cell(ctx, CellType.TORCH_WALL, 2, 2, {})
            assert color.fg.r == 251
            assert 139 <= color.fg.g < 139 + 15
            assert 94 <= color.bg.g < 94 + 30


class TestBlend:
    def test_opaque_replaces(self):
        upper = ColorLayer(1, 2, 3)
        assert blend(ColorLayer(100, 100, 100), upper) is upper

    def test_half_alpha_averages(self):
        out = blend(ColorLayer(100, 0, 50), ColorLayer(200, 100, 50, alpha=0.5))
        assert out.as_tuple() == (150, 50, 50)
        assert out.alpha == 1.0


class TestFlatten:
    def test_layers_and_yield_letter(self):
        ctx = _ctx()
        base = Grid(16, 14, CellType.FLOOR)
        top = Grid(16, 14, CellType.EMPTY)
        top.set(3, 3, CellType.LIGHT_POOL)
        top.set(5, 5, CellType.GRASS)
        flat = flatten_layers(ctx, [base, top])

        assert flat.glyphs.get(0, 0) == CELLS[CellType.FLOOR].glyph
        assert flat.glyphs.get(3, 3) == CELLS[CellType.FLOOR].glyph
        assert flat.kinds.get(3, 3) == CellType.LIGHT_POOL
        assert flat.glyphs.get(5, 5) == CELLS[CellType.GRASS].glyph
        assert flat.kinds.get(5, 5) == CellType.GRASS

    def test_translucent_layer_blends(self):
        ctx = _ctx()
        base = Grid(16, 14, CellType.FLOOR)
        top = Grid(16, 14, CellType.EMPTY)
        top.set(3, 3, CellType.LIGHT_POOL)
        flat = flatten_layers(ctx, [base, top])
        bg = flat.colors.get(3, 3).bg
        # Floor background is 10..13; a 10% pool of 220 lifts it a little.
        assert 30 < bg.r < 35
        assert bg.alpha == 1.0

    def test_every_cell_filled(self):
        ctx = _ctx()
        flat = flatten_layers(ctx, [Grid(16, 14, CellType.ROCK)])
        assert flat.kinds.count(CellType.EMPTY) == 0
        assert flat.glyphs.count(" ") == 0

    def test_empty_cells_own_their_colour(self):
        ctx = _ctx()
        base = Grid(16, 14, CellType.EMPTY)
        base.set(5, 5, CellType.FLOOR)
        flat = flatten_layers(ctx, [base])
        first, second = flat.colors.get(0, 0), flat.colors.get(1, 0)
        assert first is not second
        first.bg.r = 99
        assert second.bg.r == 0


class TestApplyLight:
    def test_adds_and_clamps(self):
        colors = Grid(2, 1, CellColor())
        colors.set(0, 0, CellColor(ColorLayer(250, 10, 0), ColorLayer(0, 0, 0)))
        light = Grid(2, 1, None)
        light.set(0, 0, ColorLayer(20, 5, 1))
        lit = apply_light(colors, light)
        assert lit.get(0, 0).fg.as_tuple() == (255, 15, 1)
        assert lit.get(0, 0).bg.as_tuple() == (20, 5, 1)
        assert lit.get(1, 0) == colors.get(1, 0)
        assert lit.get(1, 0) is not colors.get(1, 0)
        assert lit.get(1, 0).fg is not colors.get(1, 0).fg

    def test_input_untouched(self):
        colors = Grid(1, 1, CellColor(ColorLayer(5, 5, 5), ColorLayer(5, 5, 5)))
        light = Grid(1, 1, ColorLayer(1, 1, 1))
        apply_light(colors, light)
        assert colors.get(0, 0).fg.as_tuple() == (5, 5, 5)
