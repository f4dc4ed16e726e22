"""
Text formatting for valuation results: price cards, greeks table,
hover values and the plain-text analysis export.

Nothing here computes prices; it only stringifies what
black_scholes.evaluate already returned.
"""

from dataclasses import asdict
from typing import Tuple

import pandas as pd

from . import config
from .black_scholes import MarketParameters, ValuationResult, normalize_option_type


def format_currency(value: float) -> str:
    """USD with thousands separators, e.g. -1234.5 -> '-$1,234.50'."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_number(value: float, decimals: int = 4) -> str:
    return f"{value:,.{decimals}f}"


def format_value(value: float, metric: str = "price") -> str:
    """
    Compact display of a heatmap cell value.

    Tiny non-zero values (|x| < 0.01, common for gamma and deep OTM
    greeks) switch to scientific notation so they don't read as zero.
    """
    if value != 0 and abs(value) < 0.01:
        return f"{value:.2e}"
    return f"{value:.{2 if metric == 'price' else 4}f}"


def break_even(params: MarketParameters, result: ValuationResult) -> Tuple[float, float]:
    """Spot at expiry where a long call / long put recovers its premium."""
    return params.strike + result.call.price, params.strike - result.put.price


def moneyness_label(params: MarketParameters, option_type: str) -> str:
    """'ITM' if the option has strictly positive intrinsic value, else 'OTM'."""
    if normalize_option_type(option_type) == "call":
        itm = params.spot > params.strike
    else:
        itm = params.spot < params.strike
    return "ITM" if itm else "OTM"


def greeks_table(result: ValuationResult) -> pd.DataFrame:
    """Metrics as rows, call / put as columns."""
    df = pd.DataFrame({"call": asdict(result.call), "put": asdict(result.put)})
    df.index = [config.METRIC_LABELS.get(m, m) for m in df.index]
    return df


def format_analysis(params: MarketParameters, result: ValuationResult) -> str:
    """Plain-text snapshot of the inputs and both prices (for clipboard / logs)."""
    return (
        "BS Analysis:\n"
        f"Spot: {params.spot:g}\n"
        f"Strike: {params.strike:g}\n"
        f"Vol: {params.volatility * 100:.1f}%\n"
        f"Time: {params.time_to_maturity:g}yr\n"
        "\n"
        f"Call: ${result.call.price:.2f}\n"
        f"Put: ${result.put.price:.2f}"
    )
