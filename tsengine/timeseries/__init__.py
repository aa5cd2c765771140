"""
Epoch-indexed time series.

Provides:
- TimeSeries: immutable float series with NaN construction policies
- NaNPolicy: drop / fill-forward / keep handling of missing values
- TimeSeriesBundle: named collection of co-indexed series
"""
from .series import TimeSeries, NaNPolicy
from .bundle import TimeSeriesBundle

__all__ = [
    'TimeSeries',
    'NaNPolicy',
    'TimeSeriesBundle',
]
