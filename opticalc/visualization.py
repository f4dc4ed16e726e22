"""
Visualization module: call / put sensitivity heatmaps.

Two backends:
    - matplotlib: static PNG, cells painted with the exact colors from
      colors.grid_colors
    - plotly: interactive HTML with hover inspection (spot, sigma, value,
      and the theoretical price behind a P&L cell)

Both use the same dark theme, with high volatility at the top and spot
increasing to the right. The current (S, sigma) is marked with a
crosshair.
"""

from pathlib import Path

import matplotlib
matplotlib.use("Agg")  # non-interactive backend for server/CI environments
import matplotlib.pyplot as plt

import plotly.graph_objects as go
from plotly.subplots import make_subplots

from . import config
from .black_scholes import MarketParameters
from .colors import grid_colors, plotly_colorscale
from .heatmap import Grid
from .summary import format_value


def _panel_title(grid: Grid) -> str:
    label = "P&L" if grid.is_pnl else config.METRIC_LABELS[grid.metric]
    return f"{grid.option_type.upper()} {label}"


def _range_caption(grid: Grid) -> str:
    lo = format_value(grid.min_value, grid.metric)
    hi = format_value(grid.max_value, grid.metric)
    if grid.is_pnl:
        return f"cost basis ${grid.cost_basis:.2f}  |  P&L {lo} to {hi}"
    return f"range {lo} to {hi}"


def _ensure_parent(output_path: str) -> None:
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)


# ════════════════════════════════════════════════════════════════════════
#  MATPLOTLIB (static PNG)
# ════════════════════════════════════════════════════════════════════════

def plot_heatmaps_matplotlib(
    call_grid: Grid,
    put_grid: Grid,
    params: MarketParameters,
    output_path: str = None,
) -> None:
    """
    Render call and put heatmaps side by side as a high-res PNG.

    Parameters
    ----------
    call_grid, put_grid : grids from heatmap.build_grid
    params : current market parameters (crosshair + title)
    output_path : PNG save path (default: config.OUTPUT_DIR / "option_heatmap.png")
    """
    if output_path is None:
        output_path = str(config.OUTPUT_DIR / "option_heatmap.png")
    _ensure_parent(output_path)

    fig, axes = plt.subplots(1, 2, figsize=(config.FIG_WIDTH, config.FIG_HEIGHT))
    fig.patch.set_facecolor(config.DARK_BG)

    for ax, grid in zip(axes, (call_grid, put_grid)):
        min_s, max_s = grid.spot_range
        min_v, max_v = grid.vol_range

        # row 0 is the highest vol -> origin="upper" keeps it on top
        ax.imshow(
            grid_colors(grid),
            extent=(min_s, max_s, min_v * 100, max_v * 100),
            origin="upper",
            aspect="auto",
            interpolation="nearest",
        )

        ax.axvline(params.spot, color="white", alpha=0.35, linestyle="--", linewidth=1)
        ax.axhline(params.volatility * 100, color="white", alpha=0.35, linestyle="--", linewidth=1)

        ax.set_title(_panel_title(grid), fontsize=15, fontweight="bold", color="white")
        ax.text(0.5, -0.13, _range_caption(grid), transform=ax.transAxes,
                ha="center", fontsize=10, color="white", alpha=0.6)
        ax.set_xlabel("Spot Price (S)", fontsize=12, color="white")
        ax.set_ylabel("Volatility (σ) %", fontsize=12, color="white")
        ax.set_facecolor(config.DARK_BG)
        ax.tick_params(colors="white", labelsize=9)
        for spine in ax.spines.values():
            spine.set_color("#333355")

    fig.suptitle(
        f"K={params.strike:g}  T={params.time_to_maturity:g}y  r={params.rate:.1%}",
        fontsize=13, color="white", alpha=0.8,
    )

    plt.tight_layout()
    plt.savefig(output_path, dpi=config.DPI, bbox_inches="tight",
                facecolor=config.DARK_BG, edgecolor="none")
    plt.close(fig)


# ════════════════════════════════════════════════════════════════════════
#  PLOTLY (interactive HTML)
# ════════════════════════════════════════════════════════════════════════

def _heatmap_trace(grid: Grid, colorbar_x: float) -> go.Heatmap:
    colorscale, zmin, zmax = plotly_colorscale(grid)

    if grid.is_pnl:
        hover = (
            "S: $%{x:.2f}<br>σ: %{y:.2%}<br>"
            "P&L: %{z:+.2f}<br>THEO PRICE: $%{customdata:.2f}<extra></extra>"
        )
    else:
        fmt = ".2f" if grid.metric == "price" else ".4g"
        hover = (
            "S: $%{x:.2f}<br>σ: %{y:.2%}<br>"
            f"{config.METRIC_LABELS[grid.metric]}: %{{z:{fmt}}}<extra></extra>"
        )

    return go.Heatmap(
        x=grid.spots,
        y=grid.volatilities,
        z=grid.display_values(),
        customdata=grid.raw_values(),
        colorscale=colorscale,
        zmin=zmin,
        zmax=zmax,
        hovertemplate=hover,
        colorbar=dict(
            x=colorbar_x, thickness=14, len=0.8,
            tickfont=dict(color="white", size=10),
        ),
    )


def plot_heatmaps_plotly(
    call_grid: Grid,
    put_grid: Grid,
    params: MarketParameters,
    output_path: str = None,
) -> None:
    """
    Render interactive call / put heatmaps as HTML.

    Can be opened in any browser; hovering a cell shows its exact
    (S, sigma, value).
    """
    if output_path is None:
        output_path = str(config.OUTPUT_DIR / "option_heatmap.html")
    _ensure_parent(output_path)

    fig = make_subplots(
        rows=1, cols=2, horizontal_spacing=0.1,
        subplot_titles=(
            f"{_panel_title(call_grid)}  ({_range_caption(call_grid)})",
            f"{_panel_title(put_grid)}  ({_range_caption(put_grid)})",
        ),
    )
    fig.add_trace(_heatmap_trace(call_grid, colorbar_x=0.45), row=1, col=1)
    fig.add_trace(_heatmap_trace(put_grid, colorbar_x=1.0), row=1, col=2)

    for col in (1, 2):
        fig.add_vline(x=params.spot, line_dash="dash",
                      line_color="rgba(255,255,255,0.4)", row=1, col=col)
        fig.add_hline(y=params.volatility, line_dash="dash",
                      line_color="rgba(255,255,255,0.4)", row=1, col=col)
        fig.update_xaxes(
            title=dict(text="Spot Price (S)", font=dict(size=13, color="#ddd")),
            tickfont=dict(size=10, color="#ccc"), row=1, col=col,
        )
        fig.update_yaxes(
            title=dict(text="Volatility (σ)", font=dict(size=13, color="#ddd")),
            tickformat=".0%", tickfont=dict(size=10, color="#ccc"), row=1, col=col,
        )

    fig.update_annotations(font=dict(size=13, color="white"))
    fig.update_layout(
        title=dict(
            text=(f"<b>Black-Scholes Heatmap</b>  K={params.strike:g}  "
                  f"T={params.time_to_maturity:g}y  r={params.rate:.1%}"),
            font=dict(size=20, color="white"), x=0.5,
        ),
        plot_bgcolor=config.DARK_BG,
        paper_bgcolor=config.DARK_BG,
        font=dict(color="white"),
        width=1400, height=650,
        margin=dict(l=60, r=30, t=90, b=50),
    )

    fig.write_html(output_path)
