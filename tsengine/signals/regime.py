"""
Regime detection and signal emission.

RegimeSignalGenerator walks a price stream and an indicator stream in
lockstep. Each element updates the regime (BULL when the price is above the
indicator, BEAR otherwise, unchanged when either value is missing) and the
transition between the previous and the new regime decides the signal.

The signal attached to a step is the one produced by the previous element's
transition, so step 0 always carries Signal.NONE and no step ever acts on
its own closing comparison.
"""
import math
from typing import Iterable, Iterator, Optional

from ..shared.missing import is_missing
from ..shared.types import PriceRecord, Regime, Signal, SignalRecord
from ..shared.streams import known_length


def next_regime(price: float, indicator: float, last: Regime) -> Regime:
    """
    Regime after comparing ``price`` to ``indicator``.

    FLAT is never re-entered by comparison: it is only the initial state.
    """
    if is_missing(price) or is_missing(indicator):
        return last
    if price > indicator:
        return Regime.BULL
    return Regime.BEAR


def transition_signal(last: Regime, current: Regime) -> Signal:
    """Signal for a regime transition."""
    if current is Regime.BULL and last is not Regime.BULL:
        return Signal.BUY
    if current is Regime.BEAR and last is not Regime.BEAR:
        return Signal.SELL
    if current is Regime.FLAT and last is Regime.BEAR:
        return Signal.BUY
    if current is Regime.FLAT and last is Regime.BULL:
        return Signal.SELL
    return Signal.NONE


class RegimeSignalGenerator:
    """
    Stateful BUY/SELL/NONE emitter.

    Args:
        prices: PriceRecord stream
        indicator: Indicator values aligned with ``prices``
        length: Known stream length when the inputs are unsized iterators

    The stream ends when either input is exhausted.
    """

    def __init__(
        self,
        prices: Iterable[PriceRecord],
        indicator: Iterable[float],
        length: Optional[int] = None,
    ):
        self._length = length if length is not None else _common_length(prices, indicator)
        self._prices = iter(prices)
        self._indicator = iter(indicator)
        self._regime = Regime.FLAT
        self._last_regime = Regime.FLAT
        self._signal = Signal.NONE
        self._previous_price: Optional[float] = None

    @property
    def regime(self) -> Regime:
        """Regime after the last consumed element."""
        return self._regime

    def __iter__(self) -> Iterator[SignalRecord]:
        return self

    def __len__(self) -> int:
        if self._length is None:
            raise TypeError("RegimeSignalGenerator over unsized streams has no length")
        return self._length

    def __next__(self) -> SignalRecord:
        price = next(self._prices)
        indicator = next(self._indicator)

        record = SignalRecord(
            timestamp=price.timestamp,
            price=price.value,
            signal=self._signal,
            regime=self._regime,
            simple_return=self._simple_return(price),
        )

        self._last_regime = self._regime
        self._regime = next_regime(price.value, indicator, self._last_regime)
        self._signal = transition_signal(self._last_regime, self._regime)
        self._previous_price = price.value
        return record

    def _simple_return(self, price: PriceRecord) -> float:
        if price.simple_return is not None:
            return price.simple_return
        if self._previous_price is None or self._previous_price == 0:
            return math.nan
        return price.value / self._previous_price - 1.0


def _common_length(*streams) -> Optional[int]:
    lengths = [known_length(s) for s in streams]
    if any(n is None for n in lengths):
        return None
    return min(lengths)
