"""
Shared types for price, signal and position streams.

Every streaming component exchanges these records instead of loosely
shaped tuples, so the optional simple return is an explicit field.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Signal(Enum):
    """Type of trading signal."""
    BUY = "buy"
    SELL = "sell"
    ROLL = "roll"  # Carry the previous position; never emitted by regime transitions
    NONE = "none"


class Regime(Enum):
    """Directional classification of price against an indicator."""
    BULL = 1
    BEAR = -1
    FLAT = 0  # Initial state only


class DataType(Enum):
    """Type of price carried by a PriceRecord."""
    OPEN = "open"
    HIGH = "high"
    LOW = "low"
    CLOSE = "close"
    VOLUME = "volume"
    OPEN_INTEREST = "open_interest"


@dataclass(frozen=True)
class PriceRecord:
    """One element of a price stream."""
    timestamp: int  # Epoch seconds
    value: float
    type: DataType = DataType.CLOSE
    simple_return: Optional[float] = None  # Yield versus the previous record, when known


@dataclass(frozen=True)
class SignalRecord:
    """One element of a signal stream."""
    timestamp: int
    price: float
    signal: Signal
    regime: Regime = Regime.FLAT
    simple_return: float = float("nan")


@dataclass(frozen=True)
class PositionRecord:
    """Target nominal exposure at one step."""
    timestamp: int
    price: float
    signal: Signal
    nominal: float
    variance: float = float("nan")  # Rolling variance of returns used for sizing
