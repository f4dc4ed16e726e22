"""
Global configuration for the option heatmap pipeline.

Keeps all magic numbers in one place. Override via CLI args in main.py
or by editing this file directly for persistent changes.
"""

from pathlib import Path


# ── paths ────────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"
OUTPUT_DIR = PROJECT_ROOT / "output"


# ── default market parameters ────────────────────────────────────────────
SPOT = 100.0
STRIKE = 100.0
TIME_TO_MATURITY = 1.0          # years
VOLATILITY = 0.20               # annualized sigma
RISK_FREE_RATE = 0.05           # annualized, continuous compounding


# ── numerical floors ─────────────────────────────────────────────────────
VOL_EPSILON = 1e-4              # sigma floor inside the pricer (avoids /0 in d1)
SPOT_FLOOR = 1.0                # lowest spot a heatmap axis may start at
VOL_FLOOR = 0.01                # lowest vol a heatmap axis may start at
VOL_CEILING_FLOOR = 0.05        # vol axis never ends below 5%
PNL_EPSILON = 0.01              # diverging scale denominator floor ($)
DAYS_PER_YEAR = 365             # theta is reported per calendar day
GREEK_SCALE = 0.01              # vega/rho per 1 percentage point move


# ── heatmap grid ─────────────────────────────────────────────────────────
GRID_SIZE = 30                  # cells per axis (30 x 30 = 900 evaluations)
SPOT_RANGE = 0.5                # +/- 50% around spot
VOL_RANGE = 0.2                 # +/- 20 vol points around sigma
DEFAULT_METRIC = "price"
DEFAULT_MODE = "value"

METRICS = ("price", "delta", "gamma", "vega", "theta", "rho", "probability_itm")
MODES = ("value", "pnl")


# ── palettes (RGB) ───────────────────────────────────────────────────────
# sequential: dark base -> accent, one accent per option type
SEQUENTIAL_PALETTES = {
    "call": ((5, 15, 20), (6, 182, 212)),      # cyan
    "put": ((20, 10, 10), (244, 63, 94)),      # rose
}

# diverging (P&L on price): loss <- base -> gain
PNL_BASE = (10, 10, 10)
PNL_LOSS = (220, 38, 38)
PNL_GAIN = (16, 185, 129)


# ── visualization ────────────────────────────────────────────────────────
DARK_BG = "#0c0c16"
DPI = 200                       # matplotlib export resolution
FIG_WIDTH = 16
FIG_HEIGHT = 7

METRIC_LABELS = {
    "price": "Price",
    "delta": "Delta",
    "gamma": "Gamma",
    "vega": "Vega",
    "theta": "Theta",
    "rho": "Rho",
    "probability_itm": "Prob. ITM",
}
