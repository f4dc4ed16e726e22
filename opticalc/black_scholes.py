"""
Black-Scholes pricing and greeks for European calls and puts.

Everything here is closed-form. The normal CDF is the Abramowitz & Stegun
26.2.17 polynomial (|error| < 7.5e-8) rather than a library call, so the
engine is self-contained and cheap enough to run ~900 times per heatmap.

One call to ``evaluate`` prices both sides of the strike at once: the
call and the put share d1, d2, the density and the discount factor, and
gamma/vega are identical for both.

References:
    Black, F. & Scholes, M. (1973). The Pricing of Options and Corporate Liabilities.
    Abramowitz, M. & Stegun, I. (1964). Handbook of Mathematical Functions, 26.2.17.
    Hull, J.C. (2018). Options, Futures, and Other Derivatives. 10th ed.
"""

import dataclasses
from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np

from . import config


ArrayLike = Union[float, np.ndarray]


# ════════════════════════════════════════════════════════════════════════
#  NORMAL DISTRIBUTION
# ════════════════════════════════════════════════════════════════════════

# A&S 26.2.17 coefficients
_P = 0.2316419
_B = (0.31938153, -0.356563782, 1.781477937, -1.821255978, 1.330274429)
_INV_SQRT_2PI = 1.0 / np.sqrt(2.0 * np.pi)


def normal_pdf(x: ArrayLike) -> ArrayLike:
    """Standard normal density."""
    out = _INV_SQRT_2PI * np.exp(-0.5 * np.asarray(x, dtype=float) ** 2)
    return float(out) if out.ndim == 0 else out


def normal_cdf(x: ArrayLike) -> ArrayLike:
    """
    Standard normal cumulative distribution.

    The polynomial gives the lower tail Q(|x|). For x > 0 the result is
    reflected as 1 - Q(x), so the approximation holds on the whole real
    line and N(x) + N(-x) == 1 for any x != 0.

    Parameters
    ----------
    x : scalar or array

    Returns
    -------
    float or np.ndarray (same shape as x)
    """
    x = np.asarray(x, dtype=float)
    t = 1.0 / (1.0 + _P * np.abs(x))
    d = _INV_SQRT_2PI * np.exp(-0.5 * x * x)
    b1, b2, b3, b4, b5 = _B
    p = d * t * (b1 + t * (b2 + t * (b3 + t * (b4 + t * b5))))
    out = np.where(x > 0, 1.0 - p, p)
    return float(out) if out.ndim == 0 else out


# ════════════════════════════════════════════════════════════════════════
#  DATA MODEL
# ════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class MarketParameters:
    """
    Immutable snapshot of the pricing inputs.

    Spot and strike must be strictly positive (log(S/K) is undefined
    otherwise). Non-positive time and volatility are legal: the engine
    has dedicated branches for both.
    """

    spot: float
    strike: float
    time_to_maturity: float
    volatility: float
    rate: float

    def __post_init__(self):
        for name in ("spot", "strike"):
            value = getattr(self, name)
            if not np.isfinite(value) or value <= 0:
                raise ValueError(f"{name} must be a positive finite number, got {value!r}")

    def replace(self, **changes) -> "MarketParameters":
        """Return a copy with some fields overridden (re-validated)."""
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True)
class OptionMetrics:
    price: float
    delta: float
    gamma: float
    vega: float           # per 1 vol point
    theta: float          # per calendar day
    rho: float            # per 1 rate point
    probability_itm: float  # risk-neutral


@dataclass(frozen=True)
class ValuationResult:
    call: OptionMetrics
    put: OptionMetrics
    d1: float
    d2: float

    def for_type(self, option_type: str) -> OptionMetrics:
        """Metrics for 'call' or 'put' (also accepts 'c' / 'p')."""
        if normalize_option_type(option_type) == "call":
            return self.call
        return self.put


def normalize_option_type(option_type: str) -> str:
    """Map 'c'/'call'/'p'/'put' (any case) to 'call' or 'put'."""
    kind = str(option_type).lower()
    if kind in ("c", "call"):
        return "call"
    elif kind in ("p", "put"):
        return "put"
    else:
        raise ValueError(f"Unknown option_type: {option_type}. Use 'call' or 'put'.")


# ════════════════════════════════════════════════════════════════════════
#  PRICING
# ════════════════════════════════════════════════════════════════════════

def compute_d1_d2(S: float, K: float, T: float, r: float, sigma: float) -> Tuple[float, float]:
    """
    Standardized distances d1, d2.

    Parameters
    ----------
    S : spot price
    K : strike price
    T : time to expiry in years
    r : risk-free rate (annualized, continuous compounding)
    sigma : volatility (annualized), floored at config.VOL_EPSILON

    Returns
    -------
    (d1, d2), or (0.0, 0.0) when T <= 0
    """
    if T <= 0:
        return 0.0, 0.0
    sigma = max(sigma, config.VOL_EPSILON)
    vol_sqrt_t = sigma * np.sqrt(T)
    _d1 = (np.log(S / K) + (r + 0.5 * sigma**2) * T) / vol_sqrt_t
    return float(_d1), float(_d1 - vol_sqrt_t)


def _expired(S: float, K: float) -> ValuationResult:
    # terminal branch: intrinsic value, indicator delta/probability
    call = max(0.0, S - K)
    put = max(0.0, K - S)
    return ValuationResult(
        call=OptionMetrics(
            price=call, delta=1.0 if call > 0 else 0.0,
            gamma=0.0, vega=0.0, theta=0.0, rho=0.0,
            probability_itm=1.0 if call > 0 else 0.0,
        ),
        put=OptionMetrics(
            price=put, delta=-1.0 if put > 0 else 0.0,
            gamma=0.0, vega=0.0, theta=0.0, rho=0.0,
            probability_itm=1.0 if put > 0 else 0.0,
        ),
        d1=0.0,
        d2=0.0,
    )


def evaluate(params: MarketParameters) -> ValuationResult:
    """
    Price a European call and put and compute their greeks.

    Scaling conventions (same as most trading screens):
        vega  : change in price per 1 vol point (0.01 in sigma)
        rho   : change in price per 1 rate point (0.01 in r)
        theta : change in price per calendar day (annual theta / 365)

    probability_itm is the risk-neutral N(d2) / N(-d2), not a real-world
    probability.

    Parameters
    ----------
    params : MarketParameters

    Returns
    -------
    ValuationResult
    """
    S, K, T, r = params.spot, params.strike, params.time_to_maturity, params.rate

    if T <= 0:
        return _expired(S, K)

    sigma = max(params.volatility, config.VOL_EPSILON)
    _d1, _d2 = compute_d1_d2(S, K, T, r, sigma)
    sqrt_t = np.sqrt(T)

    Nd1 = normal_cdf(_d1)
    Nd2 = normal_cdf(_d2)
    N_d1 = normal_cdf(-_d1)
    N_d2 = normal_cdf(-_d2)
    nd1 = normal_pdf(_d1)

    discount = np.exp(-r * T)

    call_price = S * Nd1 - K * discount * Nd2
    put_price = K * discount * N_d2 - S * N_d1

    # shared by both sides
    gamma = nd1 / (S * sigma * sqrt_t)
    vega = S * sqrt_t * nd1 * config.GREEK_SCALE

    # common term: time decay from gamma
    time_decay = -(S * nd1 * sigma) / (2 * sqrt_t)

    call = OptionMetrics(
        price=float(call_price),
        delta=float(Nd1),
        gamma=float(gamma),
        vega=float(vega),
        theta=float((time_decay - r * K * discount * Nd2) / config.DAYS_PER_YEAR),
        rho=float(K * T * discount * Nd2 * config.GREEK_SCALE),
        probability_itm=float(Nd2),
    )
    put = OptionMetrics(
        price=float(put_price),
        delta=float(Nd1 - 1.0),
        gamma=float(gamma),
        vega=float(vega),
        theta=float((time_decay + r * K * discount * N_d2) / config.DAYS_PER_YEAR),
        rho=float(-K * T * discount * N_d2 * config.GREEK_SCALE),
        probability_itm=float(N_d2),
    )
    return ValuationResult(call=call, put=put, d1=_d1, d2=_d2)


def metric_value(result: ValuationResult, option_type: str, metric: str) -> float:
    """Pick one number (e.g. put gamma) out of a ValuationResult."""
    if metric not in config.METRICS:
        raise ValueError(f"Unknown metric: {metric}. Use one of {', '.join(config.METRICS)}.")
    return getattr(result.for_type(option_type), metric)
