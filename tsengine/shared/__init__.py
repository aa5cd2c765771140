"""
Shared types, errors and defaults.

This module provides:
- Signal / Regime / DataType enums and the stream record dataclasses
- The error taxonomy raised by series and streaming components
- Centralized default values for indicator and sizing parameters
"""
from .types import Signal, Regime, DataType, PriceRecord, SignalRecord, PositionRecord
from .errors import (
    TimeSeriesError,
    EpochNotFound,
    SeriesNotFound,
    IncompatibleSeries,
    DivisionByZero,
    InvalidConstruction,
)
from .missing import missing_value_for, infer_dtype, is_missing
from .defaults import (
    RISK_UNITS_K,
    VOLATILITY_DEPTH,
    SMA_DEPTH,
    EMA_ALPHA,
    MARGIN_RATE,
)

__all__ = [
    'Signal',
    'Regime',
    'DataType',
    'PriceRecord',
    'SignalRecord',
    'PositionRecord',
    'TimeSeriesError',
    'EpochNotFound',
    'SeriesNotFound',
    'IncompatibleSeries',
    'DivisionByZero',
    'InvalidConstruction',
    'missing_value_for',
    'infer_dtype',
    'is_missing',
    'RISK_UNITS_K', 'VOLATILITY_DEPTH', 'SMA_DEPTH', 'EMA_ALPHA', 'MARGIN_RATE',
]
