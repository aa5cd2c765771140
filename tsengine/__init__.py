"""
Incremental time-series engine.

Provides:
- Epoch-indexed TimeSeries with NaN construction policies and arithmetic
- Streaming rolling moments and recursive (FIR/IIR) filters
- Regime-based signal generation and volatility position sizing
- Future contract valuation with margin cash flows
"""
