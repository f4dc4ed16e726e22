"""
Color mapping for heatmap cells.

Two scales:
    - sequential: (value - min) / (max - min) interpolated from a dark base
      to the option type's accent (cyan for calls, rose for puts)
    - diverging: used for P&L on price. Losses fade from the dark base to
      red, gains from the dark base to green, and zero is always the base.

The diverging scale is normalized by the *current grid's* worst loss and
best gain, not by a fixed P&L reference. Intensity is therefore relative
to the grid extent: widening the spot range can make the same dollar P&L
look paler.

All functions are pure: same inputs, same color.
"""

from typing import List, Tuple

import numpy as np

from . import config
from .black_scholes import normalize_option_type
from .heatmap import Grid


Color = Tuple[int, int, int]


def interpolate_color(color1: Color, color2: Color, factor: float) -> Color:
    """
    Per-channel linear interpolation between two RGB colors.

    factor is clamped to [0, 1]; channels are rounded half-up.
    """
    f = min(1.0, max(0.0, factor))
    return tuple(
        int(np.floor(c1 + f * (c2 - c1) + 0.5))
        for c1, c2 in zip(color1, color2)
    )


def sequential_color(value: float, min_value: float, max_value: float,
                     option_type: str = "call") -> Color:
    """Map value within [min_value, max_value] onto the option type's palette."""
    base, accent = config.SEQUENTIAL_PALETTES[normalize_option_type(option_type)]
    span = max_value - min_value
    # flat grid -> midpoint color
    norm = 0.5 if span == 0 else (value - min_value) / span
    return interpolate_color(base, accent, norm)


def diverging_color(value: float, min_value: float, max_value: float) -> Color:
    """P&L color: intensity proportional to distance from the worst loss / best gain."""
    if value < 0:
        worst = min(min_value, -config.PNL_EPSILON)
        return interpolate_color(config.PNL_BASE, config.PNL_LOSS, value / worst)
    best = max(max_value, config.PNL_EPSILON)
    return interpolate_color(config.PNL_BASE, config.PNL_GAIN, value / best)


def cell_color(value: float, grid: Grid) -> Color:
    """Color of one display value under the grid's palette and extrema."""
    if grid.is_pnl:
        return diverging_color(value, grid.min_value, grid.max_value)
    return sequential_color(value, grid.min_value, grid.max_value, grid.option_type)


def grid_colors(grid: Grid) -> np.ndarray:
    """(n, n, 3) uint8 RGB array, same layout as grid.cells."""
    colors = np.zeros((grid.size, grid.size, 3), dtype=np.uint8)
    for i, row in enumerate(grid.cells):
        for j, cell in enumerate(row):
            colors[i, j] = cell_color(cell.display_value, grid)
    return colors


def rgb_string(color: Color) -> str:
    """CSS/plotly color string, e.g. 'rgb(6, 182, 212)'."""
    r, g, b = color
    return f"rgb({r}, {g}, {b})"


def plotly_colorscale(grid: Grid) -> Tuple[List[list], float, float]:
    """
    Plotly colorscale and z-limits equivalent to cell_color.

    Both scales are piecewise linear, so a two- or three-stop plotly
    colorscale over the right [zmin, zmax] reproduces them exactly
    (up to channel rounding).

    Returns
    -------
    (colorscale, zmin, zmax)
    """
    if grid.is_pnl:
        zmin = min(grid.min_value, -config.PNL_EPSILON)
        zmax = max(grid.max_value, config.PNL_EPSILON)
        zero = -zmin / (zmax - zmin)
        scale = [
            [0.0, rgb_string(config.PNL_LOSS)],
            [zero, rgb_string(config.PNL_BASE)],
            [1.0, rgb_string(config.PNL_GAIN)],
        ]
        return scale, zmin, zmax

    base, accent = config.SEQUENTIAL_PALETTES[grid.option_type]
    zmin, zmax = grid.min_value, grid.max_value
    if zmax == zmin:
        # pad symmetrically so the constant value sits at the midpoint
        zmin, zmax = zmin - 1.0, zmax + 1.0
    scale = [[0.0, rgb_string(base)], [1.0, rgb_string(accent)]]
    return scale, zmin, zmax
