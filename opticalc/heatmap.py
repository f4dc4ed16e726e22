"""
Heatmap construction: sample the pricer over a (spot, volatility) grid.

Each cell is one full Black-Scholes evaluation with the base parameters
overridden by that cell's spot and sigma. For the default 30 x 30 grid
that is 900 evaluations, cheap enough to redo from scratch whenever any
input changes, so there is no caching and no incremental update.

Layout (row-major):
    rows    : volatility, high -> low (so high vol renders at the top)
    columns : spot, low -> high

The grid also carries the min/max of the displayed values, tracked in
the same pass, which the color mapper uses as its normalization range.

In P&L mode on the price metric, each cell shows price minus cost basis
instead of the theoretical price. The raw price is kept on the cell for
hover inspection.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
import pandas as pd

from . import config
from .black_scholes import MarketParameters, evaluate, metric_value, normalize_option_type


Range = Tuple[float, float]


@dataclass(frozen=True)
class GridCell:
    spot: float
    volatility: float
    display_value: float
    raw_value: float


@dataclass(frozen=True)
class Grid:
    cells: Tuple[Tuple[GridCell, ...], ...]
    min_value: float
    max_value: float
    spot_range: Range
    vol_range: Range
    option_type: str
    metric: str
    mode: str
    cost_basis: float = 0.0

    @property
    def size(self) -> int:
        return len(self.cells)

    @property
    def is_pnl(self) -> bool:
        """True when display values are P&L (diverging palette)."""
        return self.mode == "pnl" and self.metric == "price"

    @property
    def spots(self) -> np.ndarray:
        return np.array([cell.spot for cell in self.cells[0]])

    @property
    def volatilities(self) -> np.ndarray:
        return np.array([row[0].volatility for row in self.cells])

    def display_values(self) -> np.ndarray:
        return np.array([[cell.display_value for cell in row] for row in self.cells])

    def raw_values(self) -> np.ndarray:
        return np.array([[cell.raw_value for cell in row] for row in self.cells])

    def to_frame(self) -> pd.DataFrame:
        """Display values as a DataFrame (index = volatility, columns = spot)."""
        df = pd.DataFrame(
            self.display_values(),
            index=pd.Index(self.volatilities, name="volatility"),
            columns=pd.Index(self.spots, name="spot"),
        )
        return df


def heatmap_bounds(
    params: MarketParameters,
    spot_range: float = None,
    vol_range: float = None,
) -> Tuple[Range, Range]:
    """
    Derive the heatmap axes from the current spot / vol.

    Parameters
    ----------
    params : current market parameters (center of the grid)
    spot_range : relative half-width around spot, e.g. 0.5 -> +/-50%
                 (default: config.SPOT_RANGE)
    vol_range : absolute half-width around sigma, e.g. 0.2 -> +/-20 vol pts
                (default: config.VOL_RANGE)

    Returns
    -------
    ((min_s, max_s), (min_v, max_v))
    """
    if spot_range is None:
        spot_range = config.SPOT_RANGE
    if vol_range is None:
        vol_range = config.VOL_RANGE

    S, v = params.spot, params.volatility
    min_s = max(config.SPOT_FLOOR, S * (1 - spot_range))
    max_s = S * (1 + spot_range)
    min_v = max(config.VOL_FLOOR, v - vol_range)
    max_v = max(config.VOL_CEILING_FLOOR, v + vol_range)
    return (min_s, max_s), (min_v, max_v)


def build_grid(
    base_params: MarketParameters,
    spot_range: Range,
    vol_range: Range,
    grid_size: int = None,
    option_type: str = "call",
    metric: str = None,
    mode: str = None,
    cost_basis: float = 0.0,
) -> Grid:
    """
    Evaluate the pricer on a grid_size x grid_size (spot, sigma) grid.

    Parameters
    ----------
    base_params : parameters shared by every cell (strike, T, r)
    spot_range : (min_s, max_s)
    vol_range : (min_v, max_v)
    grid_size : cells per axis, must be >= 2 (default: config.GRID_SIZE)
    option_type : "call" or "put"
    metric : one of config.METRICS (default: config.DEFAULT_METRIC)
    mode : "value" or "pnl" (default: config.DEFAULT_MODE)
    cost_basis : entry price subtracted in P&L mode (price metric only)

    Returns
    -------
    Grid

    Raises
    ------
    ValueError : grid_size < 2, inverted ranges, or unknown
                 option_type / metric / mode
    """
    if grid_size is None:
        grid_size = config.GRID_SIZE
    if metric is None:
        metric = config.DEFAULT_METRIC
    if mode is None:
        mode = config.DEFAULT_MODE

    if grid_size < 2:
        raise ValueError(f"grid_size must be >= 2 to define a step, got {grid_size}")
    option_type = normalize_option_type(option_type)
    if metric not in config.METRICS:
        raise ValueError(f"Unknown metric: {metric}. Use one of {', '.join(config.METRICS)}.")
    if mode not in config.MODES:
        raise ValueError(f"Unknown mode: {mode}. Use 'value' or 'pnl'.")

    min_s, max_s = spot_range
    min_v, max_v = vol_range
    if min_s > max_s or min_v > max_v:
        raise ValueError(f"Ranges must be (min, max): spot={spot_range}, vol={vol_range}")

    spot_step = (max_s - min_s) / (grid_size - 1)
    vol_step = (max_v - min_v) / (grid_size - 1)
    subtract_cost = mode == "pnl" and metric == "price"

    rows = []
    min_value = np.inf
    max_value = -np.inf

    for i in range(grid_size - 1, -1, -1):
        vol = min_v + i * vol_step
        row = []
        for j in range(grid_size):
            spot = min_s + j * spot_step
            result = evaluate(base_params.replace(spot=spot, volatility=vol))
            raw = metric_value(result, option_type, metric)
            value = raw - cost_basis if subtract_cost else raw

            if value < min_value:
                min_value = value
            if value > max_value:
                max_value = value

            row.append(GridCell(spot=spot, volatility=vol, display_value=value, raw_value=raw))
        rows.append(tuple(row))

    return Grid(
        cells=tuple(rows),
        min_value=float(min_value),
        max_value=float(max_value),
        spot_range=(min_s, max_s),
        vol_range=(min_v, max_v),
        option_type=option_type,
        metric=metric,
        mode=mode,
        cost_basis=cost_basis,
    )


def compute_grid_statistics(grid: Grid) -> dict:
    """
    Summary statistics for a heatmap grid.

    Useful for quick diagnostics in the CLI.

    Returns
    -------
    dict with keys:
        n_cells      : total cells (grid_size^2)
        spot_range   : (min, max)
        vol_range    : (min, max)
        value_range  : (min_value, max_value)
        mean_value   : average display value
        center_value : display value of the middle cell (None for even sizes)
        pct_positive : share of cells with display value > 0
    """
    values = grid.display_values()
    center: Optional[float] = None
    if grid.size % 2 == 1:
        mid = grid.size // 2
        center = float(values[mid, mid])

    return {
        "n_cells": values.size,
        "spot_range": grid.spot_range,
        "vol_range": grid.vol_range,
        "value_range": (grid.min_value, grid.max_value),
        "mean_value": float(values.mean()),
        "center_value": center,
        "pct_positive": float((values > 0).mean()),
    }
