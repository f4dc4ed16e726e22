"""
opticalc
========
Black-Scholes option pricer with spot/volatility sensitivity heatmaps.

Modules:
    black_scholes  - Closed-form pricing, greeks, normal CDF approximation
    heatmap        - (spot, sigma) grid sampling and value extrema
    colors         - Sequential / diverging color mapping for grid cells
    summary        - Price cards, greeks table, text export
    visualization  - Heatmap charting (matplotlib + plotly)
    config         - Global constants and defaults
"""

__version__ = "0.1.0"
