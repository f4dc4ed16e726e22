"""
Shared test fixtures and pytest configuration.
"""

import pytest

from opticalc.black_scholes import MarketParameters


@pytest.fixture
def base_params():
    """Textbook ATM option: S=K=100, 1 year, 20% vol, 5% rate."""
    return MarketParameters(spot=100.0, strike=100.0, time_to_maturity=1.0,
                            volatility=0.20, rate=0.05)
