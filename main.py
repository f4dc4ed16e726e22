#!/usr/bin/env python3
"""
main.py: price an option pair and render its sensitivity heatmaps.

Usage:
    python main.py                                   # defaults (S=K=100, T=1y, σ=20%)
    python main.py --metric gamma --spot-range 0.3   # gamma heatmap, ±30% spot
    python main.py --mode pnl --call-cost 8.5        # P&L against an entry price
"""

import argparse
import sys
import time

from opticalc import config
from opticalc.black_scholes import MarketParameters, evaluate
from opticalc.heatmap import build_grid, heatmap_bounds, compute_grid_statistics
from opticalc.summary import (
    break_even, format_analysis, format_currency, greeks_table, moneyness_label,
)
from opticalc.visualization import plot_heatmaps_matplotlib, plot_heatmaps_plotly


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Black-Scholes pricer with spot/vol heatmaps.")
    p.add_argument("--spot", type=float, default=config.SPOT)
    p.add_argument("--strike", type=float, default=config.STRIKE)
    p.add_argument("--time", type=float, default=config.TIME_TO_MATURITY, help="years")
    p.add_argument("--vol", type=float, default=config.VOLATILITY, help="e.g. 0.20")
    p.add_argument("--rate", type=float, default=config.RISK_FREE_RATE, help="e.g. 0.05")
    p.add_argument("--metric", choices=config.METRICS, default=config.DEFAULT_METRIC)
    p.add_argument("--mode", choices=config.MODES, default=config.DEFAULT_MODE)
    p.add_argument("--call-cost", type=float, default=None,
                   help="call entry price for P&L mode (default: current theo)")
    p.add_argument("--put-cost", type=float, default=None,
                   help="put entry price for P&L mode (default: current theo)")
    p.add_argument("--grid-size", type=int, default=config.GRID_SIZE)
    p.add_argument("--spot-range", type=float, default=config.SPOT_RANGE)
    p.add_argument("--vol-range", type=float, default=config.VOL_RANGE)
    p.add_argument("--no-html", action="store_true")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    print(f"\n{'='*60}")
    print(f"  Black-Scholes Option Heatmap")
    print(f"  Metric: {args.metric}  |  Mode: {args.mode}")
    print(f"{'='*60}\n")

    # step 1: valuation
    t0 = time.time()
    print("[1/4] Pricing...")
    try:
        params = MarketParameters(
            spot=args.spot, strike=args.strike, time_to_maturity=args.time,
            volatility=args.vol, rate=args.rate,
        )
    except ValueError as e:
        print(f"\n  ERROR: {e}")
        sys.exit(1)

    result = evaluate(params)
    call_be, put_be = break_even(params, result)

    for line in format_analysis(params, result).splitlines():
        print(f"       {line}")
    print()
    print(f"       Call {moneyness_label(params, 'call')}  "
          f"BE: {format_currency(call_be)}  Prob. ITM: {result.call.probability_itm:.1%}")
    print(f"       Put  {moneyness_label(params, 'put')}  "
          f"BE: {format_currency(put_be)}  Prob. ITM: {result.put.probability_itm:.1%}")
    print()
    for line in greeks_table(result).to_string(float_format=lambda x: f"{x:.4f}").splitlines():
        print(f"       {line}")

    # step 2: grids
    print("\n[2/4] Building heatmap grids...")
    call_cost = args.call_cost
    put_cost = args.put_cost
    if args.mode == "pnl":
        # no entry price given -> mark the position at current theo
        if call_cost is None:
            call_cost = result.call.price
        if put_cost is None:
            put_cost = result.put.price

    spot_bounds, vol_bounds = heatmap_bounds(params, args.spot_range, args.vol_range)
    try:
        call_grid = build_grid(params, spot_bounds, vol_bounds, args.grid_size,
                               "call", args.metric, args.mode, call_cost or 0.0)
        put_grid = build_grid(params, spot_bounds, vol_bounds, args.grid_size,
                              "put", args.metric, args.mode, put_cost or 0.0)
    except ValueError as e:
        print(f"\n  ERROR: {e}")
        sys.exit(1)

    print(f"       Grid: {args.grid_size} x {args.grid_size}")
    print(f"       Spot: ${spot_bounds[0]:.2f} - ${spot_bounds[1]:.2f}")
    print(f"       Vol:  {vol_bounds[0]:.1%} - {vol_bounds[1]:.1%}")
    for grid in (call_grid, put_grid):
        stats = compute_grid_statistics(grid)
        lo, hi = stats["value_range"]
        line = f"       {grid.option_type:<4} {grid.metric}: {lo:.4f} .. {hi:.4f}"
        if grid.is_pnl:
            line += f"  (cost ${grid.cost_basis:.2f}, {stats['pct_positive']:.0%} of cells in profit)"
        print(line)

    # step 3: static chart (matplotlib)
    print("\n[3/4] Generating static chart...")
    plot_heatmaps_matplotlib(call_grid, put_grid, params)
    print(f"       -> output/option_heatmap.png")

    # step 4: interactive HTML (plotly)
    if not args.no_html:
        print("\n[4/4] Generating interactive HTML...")
        plot_heatmaps_plotly(call_grid, put_grid, params)
        print(f"       -> output/option_heatmap.html")
    else:
        print("\n[4/4] Skipping HTML (--no-html flag)")

    # save raw grids
    config.DATA_DIR.mkdir(parents=True, exist_ok=True)
    call_grid.to_frame().to_csv(config.DATA_DIR / "call_grid.csv")
    put_grid.to_frame().to_csv(config.DATA_DIR / "put_grid.csv")
    print(f"\n       Grids saved to data/call_grid.csv, data/put_grid.csv")

    elapsed = time.time() - t0
    print(f"\n  Done in {elapsed:.1f}s. Charts are in output/\n")


if __name__ == "__main__":
    main()
