"""
Streaming simple returns.
"""
import math
from typing import Any, Iterable, Iterator

from ..shared.missing import infer_dtype, missing_value_for


def simple_returns(prices: Iterable[Any], dtype: Any = None) -> Iterator[float]:
    """
    Lazily yield ``p[i] / p[i-1] - 1``.

    The first element is the missing sentinel. NaN prices propagate; a zero
    previous price yields NaN instead of raising.
    """
    missing_value = missing_value_for(dtype if dtype is not None else infer_dtype(prices))
    previous = None
    for price in prices:
        if previous is None:
            yield missing_value()
        else:
            yield _ratio(float(price), float(previous)) - 1.0
        previous = price


def _ratio(current: float, previous: float) -> float:
    if previous == 0.0:
        return math.nan
    return current / previous
