"""
Tests for text formatting of valuation results.
"""

import pytest

from opticalc.black_scholes import evaluate
from opticalc.summary import (
    format_currency, format_number, format_value,
    break_even, moneyness_label, greeks_table, format_analysis,
)


class TestFormatting:

    def test_currency(self):
        assert format_currency(1234.5) == "$1,234.50"
        assert format_currency(-1.234) == "-$1.23"
        assert format_currency(0.0) == "$0.00"

    def test_number(self):
        assert format_number(1234.56789, 2) == "1,234.57"
        assert format_number(0.5) == "0.5000"

    def test_value_by_metric(self):
        assert format_value(10.4506, "price") == "10.45"
        assert format_value(0.63683, "delta") == "0.6368"
        assert format_value(0.0, "gamma") == "0.0000"

    def test_tiny_values_use_exponent(self):
        assert format_value(0.0042, "gamma") == "4.20e-03"
        assert format_value(-0.0042, "price") == "-4.20e-03"


class TestCards:

    def test_break_even(self, base_params):
        res = evaluate(base_params)
        call_be, put_be = break_even(base_params, res)
        assert call_be == pytest.approx(100.0 + res.call.price)
        assert put_be == pytest.approx(100.0 - res.put.price)

    def test_moneyness(self, base_params):
        assert moneyness_label(base_params, "call") == "OTM"   # ATM counts as OTM
        assert moneyness_label(base_params, "put") == "OTM"
        assert moneyness_label(base_params.replace(spot=120.0), "call") == "ITM"
        assert moneyness_label(base_params.replace(spot=80.0), "p") == "ITM"

    def test_greeks_table(self, base_params):
        res = evaluate(base_params)
        df = greeks_table(res)
        assert list(df.columns) == ["call", "put"]
        assert df.shape == (7, 2)
        assert df.loc["Price", "call"] == res.call.price
        assert df.loc["Prob. ITM", "put"] == res.put.probability_itm

    def test_analysis_text(self, base_params):
        text = format_analysis(base_params, evaluate(base_params))
        assert text == (
            "BS Analysis:\n"
            "Spot: 100\n"
            "Strike: 100\n"
            "Vol: 20.0%\n"
            "Time: 1yr\n"
            "\n"
            "Call: $10.45\n"
            "Put: $5.57"
        )
