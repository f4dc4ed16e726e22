"""
Tests for heatmap color mapping.
"""

import pytest
import numpy as np

from opticalc import config
from opticalc.black_scholes import evaluate
from opticalc.colors import (
    interpolate_color, sequential_color, diverging_color,
    cell_color, grid_colors, rgb_string, plotly_colorscale,
)
from opticalc.heatmap import build_grid


CALL_BASE, CALL_ACCENT = config.SEQUENTIAL_PALETTES["call"]
PUT_BASE, PUT_ACCENT = config.SEQUENTIAL_PALETTES["put"]


class TestInterpolate:

    def test_endpoints(self):
        assert interpolate_color((0, 0, 0), (200, 100, 50), 0.0) == (0, 0, 0)
        assert interpolate_color((0, 0, 0), (200, 100, 50), 1.0) == (200, 100, 50)

    def test_clamped(self):
        assert interpolate_color((0, 0, 0), (200, 100, 50), -3.0) == (0, 0, 0)
        assert interpolate_color((0, 0, 0), (200, 100, 50), 7.0) == (200, 100, 50)

    def test_rounds_half_up(self):
        assert interpolate_color((5, 15, 20), (6, 182, 212), 0.5) == (6, 99, 116)

    def test_integer_channels(self):
        color = interpolate_color(CALL_BASE, CALL_ACCENT, 0.3333)
        assert all(isinstance(c, int) and 0 <= c <= 255 for c in color)


class TestSequential:

    def test_range_endpoints(self):
        assert sequential_color(1.0, 1.0, 5.0, "call") == CALL_BASE
        assert sequential_color(5.0, 1.0, 5.0, "call") == CALL_ACCENT
        assert sequential_color(5.0, 1.0, 5.0, "put") == PUT_ACCENT

    def test_zero_width_range_is_midpoint(self):
        assert sequential_color(3.0, 3.0, 3.0, "call") == (6, 99, 116)
        assert sequential_color(3.0, 3.0, 3.0, "put") == (132, 37, 52)

    def test_deterministic(self):
        a = sequential_color(0.42, -1.0, 2.0, "put")
        b = sequential_color(0.42, -1.0, 2.0, "put")
        assert a == b


class TestDiverging:

    def test_zero_is_base(self):
        for lo, hi in [(-5.0, 5.0), (-100.0, 0.5), (0.0, 0.0), (2.0, 9.0)]:
            assert diverging_color(0.0, lo, hi) == config.PNL_BASE

    def test_extremes(self):
        assert diverging_color(-4.0, -4.0, 10.0) == config.PNL_LOSS
        assert diverging_color(10.0, -4.0, 10.0) == config.PNL_GAIN

    def test_relative_to_grid_extent(self):
        """Same dollar loss is paler on a grid with a deeper worst loss."""
        narrow = diverging_color(-2.0, -4.0, 1.0)
        wide = diverging_color(-2.0, -40.0, 1.0)
        assert narrow[0] > wide[0]

    def test_epsilon_floor(self):
        """Tiny extrema don't blow up the ratio: -0.005 vs floor -0.01 -> half way."""
        assert diverging_color(-0.005, -0.001, 0.0) == (115, 24, 24)
        assert diverging_color(0.005, 0.0, 0.001) == (13, 98, 70)


class TestGridColors:

    def test_flat_grid_all_midpoint(self, base_params):
        """3x3 grid with both axes pinned -> every cell the midpoint color."""
        grid = build_grid(base_params, (100.0, 100.0), (0.2, 0.2), grid_size=3)
        colors = grid_colors(grid)
        assert colors.shape == (3, 3, 3)
        assert colors.dtype == np.uint8
        assert np.all(colors == np.array([6, 99, 116]))

    def test_pnl_baseline_is_base_color(self, base_params):
        cost = evaluate(base_params).call.price
        grid = build_grid(base_params, (50.0, 150.0), (0.10, 0.30), 3, "call", "price", "pnl", cost)
        center = grid.cells[1][1]
        assert cell_color(center.display_value, grid) == config.PNL_BASE
        assert cell_color(grid.max_value, grid) == config.PNL_GAIN
        assert cell_color(grid.min_value, grid) == config.PNL_LOSS

    def test_pnl_on_greek_stays_sequential(self, base_params):
        grid = build_grid(base_params, (70.0, 130.0), (0.1, 0.3), 3, "put", "vega", "pnl", 5.0)
        assert cell_color(grid.max_value, grid) == PUT_ACCENT
        assert cell_color(grid.min_value, grid) == PUT_BASE

    def test_matches_cell_color(self, base_params):
        grid = build_grid(base_params, (70.0, 130.0), (0.1, 0.3), 4, "put", "gamma")
        colors = grid_colors(grid)
        for i, row in enumerate(grid.cells):
            for j, cell in enumerate(row):
                assert tuple(colors[i, j]) == cell_color(cell.display_value, grid)


class TestPlotlyScale:

    def test_rgb_string(self):
        assert rgb_string((6, 182, 212)) == "rgb(6, 182, 212)"

    def test_sequential_scale(self, base_params):
        grid = build_grid(base_params, (70.0, 130.0), (0.1, 0.3), 3)
        scale, zmin, zmax = plotly_colorscale(grid)
        assert (zmin, zmax) == (grid.min_value, grid.max_value)
        assert scale == [[0.0, rgb_string(CALL_BASE)], [1.0, rgb_string(CALL_ACCENT)]]

    def test_flat_scale_padded(self, base_params):
        grid = build_grid(base_params, (100.0, 100.0), (0.2, 0.2), 3)
        _, zmin, zmax = plotly_colorscale(grid)
        assert zmin < grid.min_value < zmax
        assert (zmin + zmax) / 2 == pytest.approx(grid.min_value)

    def test_diverging_scale_zero_stop(self, base_params):
        grid = build_grid(base_params, (70.0, 130.0), (0.1, 0.3), 5, "call", "price", "pnl", 10.0)
        scale, zmin, zmax = plotly_colorscale(grid)
        assert (zmin, zmax) == (grid.min_value, grid.max_value)
        stops = [s for s, _ in scale]
        assert stops[0] == 0.0 and stops[-1] == 1.0
        assert stops[1] == pytest.approx(-zmin / (zmax - zmin))
        assert scale[1][1] == rgb_string(config.PNL_BASE)
