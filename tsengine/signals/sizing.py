"""
Volatility-normalised position sizing.

PositionSizer turns a signal stream into target nominal exposure:

    BUY  -> +K / sqrt(rolling variance of returns)
    SELL -> -K / sqrt(rolling variance of returns)
    ROLL -> previous non-zero nominal
    NONE -> 0

A nominal that cannot be computed (variance still warming up, zero or
non-finite) degrades to 0 instead of propagating NaN.
"""
import itertools
import logging
import math
from typing import Iterable, Iterator, Optional

from ..indicators.rolling import moving_variance
from ..shared.defaults import RISK_UNITS_K, VOLATILITY_DEPTH
from ..shared.errors import InvalidConstruction
from ..shared.types import PositionRecord, Signal, SignalRecord
from ..shared.streams import known_length


logger = logging.getLogger(__name__)


def nominal_for(signal: Signal, variance: float, previous_nominal: float, risk_units: float = RISK_UNITS_K) -> float:
    """Target nominal for one step (never NaN)."""
    if signal is Signal.ROLL:
        return previous_nominal
    if signal is Signal.NONE:
        return 0.0
    if variance is None or not math.isfinite(variance) or variance <= 0:
        return 0.0
    nominal = risk_units / math.sqrt(variance)
    if signal is Signal.SELL:
        nominal = -nominal
    return nominal if math.isfinite(nominal) else 0.0


class PositionSizer:
    """
    Lazy stream of PositionRecords.

    Args:
        signals: SignalRecord stream (simple returns feed the variance)
        volatility_depth: Window of the rolling variance of returns (>= 2)
        risk_units: Risk-unit constant K

    Raises:
        InvalidConstruction: If ``volatility_depth < 2`` or ``risk_units <= 0``
    """

    def __init__(
        self,
        signals: Iterable[SignalRecord],
        volatility_depth: int = VOLATILITY_DEPTH,
        risk_units: float = RISK_UNITS_K,
    ):
        if risk_units <= 0:
            raise InvalidConstruction(f"risk_units must be > 0, got {risk_units}")
        self._length = known_length(signals)
        self._signals, feed = itertools.tee(iter(signals))
        self._variance = moving_variance((record.simple_return for record in feed), volatility_depth)
        self._risk_units = risk_units
        self._last_nonzero = 0.0
        logger.debug(f"PositionSizer volatility_depth={volatility_depth} risk_units={risk_units}")

    @property
    def last_nonzero_nominal(self) -> float:
        return self._last_nonzero

    def __iter__(self) -> Iterator[PositionRecord]:
        return self

    def __len__(self) -> int:
        if self._length is None:
            raise TypeError("PositionSizer over an unsized signal stream has no length")
        return self._length

    def __next__(self) -> PositionRecord:
        record = next(self._signals)
        variance = float(next(self._variance))
        nominal = nominal_for(record.signal, variance, self._last_nonzero, self._risk_units)
        if nominal != 0.0:
            self._last_nonzero = nominal
        return PositionRecord(
            timestamp=record.timestamp,
            price=record.price,
            signal=record.signal,
            nominal=nominal,
            variance=variance,
        )
