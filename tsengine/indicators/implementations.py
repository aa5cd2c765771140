"""
Indicator implementations following the Indicator interface.

Each class wraps one of the streaming engines so that batch callers working
with pandas get exactly the values the streaming pipeline would produce.
"""
import numpy as np
import pandas as pd

from .base import Indicator
from .filters import ema, evaluate_filter, sma
from .returns import simple_returns
from .rolling import moving_average, moving_variance
from ..shared.defaults import EMA_ALPHA, SMA_DEPTH, VOLATILITY_DEPTH


def _aligned(values, prices: pd.Series) -> pd.Series:
    return pd.Series(np.fromiter(values, dtype=np.float64, count=len(prices)), index=prices.index, name=prices.name)


class SMAIndicator(Indicator):
    """Simple moving average (rolling mean)."""

    def __init__(self, depth: int = SMA_DEPTH):
        self.depth = depth

    def calculate(self, prices: pd.Series) -> pd.Series:
        """Calculate SMA values."""
        values = prices.to_numpy(dtype=np.float64)
        return _aligned(moving_average(values, self.depth), prices)


class EMAIndicator(Indicator):
    """Exponential moving average (recursive filter seeded with the first price)."""

    def __init__(self, alpha: float = EMA_ALPHA):
        self.alpha = alpha

    def calculate(self, prices: pd.Series) -> pd.Series:
        """Calculate EMA values."""
        values = evaluate_filter(ema(self.alpha), prices.to_numpy(dtype=np.float64))
        return pd.Series(values, index=prices.index, name=prices.name)


class FIRSMAIndicator(Indicator):
    """Simple moving average evaluated as an FIR filter."""

    def __init__(self, depth: int = SMA_DEPTH):
        self.depth = depth

    def calculate(self, prices: pd.Series) -> pd.Series:
        values = evaluate_filter(sma(self.depth), prices.to_numpy(dtype=np.float64))
        return pd.Series(values, index=prices.index, name=prices.name)


class VolatilityIndicator(Indicator):
    """
    Rolling volatility of simple returns.

    Standard deviation (square root of the Bessel-corrected rolling variance)
    of ``p[i] / p[i-1] - 1`` over ``depth`` returns.
    """

    def __init__(self, depth: int = VOLATILITY_DEPTH):
        self.depth = depth

    def calculate(self, prices: pd.Series) -> pd.Series:
        """Calculate rolling volatility values."""
        returns = simple_returns(prices.to_numpy(dtype=np.float64))
        variance = _aligned(moving_variance(returns, self.depth), prices)
        return np.sqrt(variance.clip(lower=0.0))


__all__ = ['SMAIndicator', 'EMAIndicator', 'FIRSMAIndicator', 'VolatilityIndicator']
