"""
One-line trading systems.

A system derives an indicator from the price values and feeds prices and
indicator to a RegimeSignalGenerator.
"""
import itertools
from enum import Enum
from typing import Iterable, Sequence

from .regime import RegimeSignalGenerator
from ..indicators.filters import RecursiveFilter, ema
from ..indicators.rolling import moving_average
from ..shared.errors import InvalidConstruction
from ..shared.types import PriceRecord
from ..shared.streams import known_length


class TradingSystem(Enum):
    """Systems available."""
    SMA_ONE_LINE_POSITION = "sma_one_line_position"  # parameters: (depth,)
    EMA_ONE_LINE_POSITION = "ema_one_line_position"  # parameters: (alpha,)


_PARAMETER_NAMES = {
    TradingSystem.SMA_ONE_LINE_POSITION: ("depth",),
    TradingSystem.EMA_ONE_LINE_POSITION: ("alpha",),
}


def parameter_names(system: TradingSystem) -> Sequence[str]:
    return _PARAMETER_NAMES[system]


def build_signals(
    prices: Iterable[PriceRecord],
    system: TradingSystem,
    parameters: Sequence[float],
) -> RegimeSignalGenerator:
    """
    Build the signal stream of ``system`` over ``prices``.

    Raises:
        InvalidConstruction: On a wrong parameter count or invalid parameter
    """
    expected = _PARAMETER_NAMES[system]
    if len(parameters) != len(expected):
        raise InvalidConstruction(
            f"{system.name} depends on {len(expected)} parameter(s) {expected}, got {len(parameters)}"
        )

    length = known_length(prices)
    prices, feed = itertools.tee(iter(prices))
    values = (price.value for price in feed)

    if system is TradingSystem.SMA_ONE_LINE_POSITION:
        depth = int(parameters[0])
        indicator = moving_average(values, depth)
    else:
        indicator = RecursiveFilter(ema(float(parameters[0])), values)

    return RegimeSignalGenerator(prices, indicator, length=length)
