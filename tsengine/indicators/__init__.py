"""
Indicator calculation module.

Provides the streaming engines and their pandas adapters:
- RollingMoment: incremental moving mean / variance
- RecursiveFilter: generalized FIR/IIR filters (EMA, SMA)
- simple_returns: streaming simple returns
- SMA / EMA / volatility indicators over pandas Series
"""
from .rolling import RollingMoment, RollingWindowState, moving_average, moving_variance
from .filters import FilterSpec, RecursiveFilter, ema, sma, evaluate_filter, recursive_reference
from .returns import simple_returns
from .base import Indicator
from .implementations import SMAIndicator, EMAIndicator, FIRSMAIndicator, VolatilityIndicator

__all__ = [
    'RollingMoment',
    'RollingWindowState',
    'moving_average',
    'moving_variance',
    'FilterSpec',
    'RecursiveFilter',
    'ema',
    'sma',
    'evaluate_filter',
    'recursive_reference',
    'simple_returns',
    'Indicator',
    'SMAIndicator',
    'EMAIndicator',
    'FIRSMAIndicator',
    'VolatilityIndicator',
]
