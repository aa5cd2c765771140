"""
Simulated price streams with Gaussian returns.
"""
from typing import Iterable, Iterator, Optional

import numpy as np

from ..shared.errors import InvalidConstruction
from ..shared.types import DataType, PriceRecord


def gaussian_prices(
    calendar: Iterable[int],
    mu: float,
    sigma: float,
    initial_price: float,
    data_type: DataType = DataType.CLOSE,
    seed: Optional[int] = None,
) -> Iterator[PriceRecord]:
    """
    Lazily simulate prices over ``calendar``.

    The first price is ``initial_price``; each later price is the previous one
    times ``1 + r`` with ``r ~ N(mu, sigma)``. Records carry the simulated
    return as ``simple_return`` (NaN for the first).

    Args:
        calendar: Epoch timestamps (finite or infinite)
        mu: Gaussian location parameter
        sigma: Gaussian scale parameter (>= 0)
        initial_price: First price of the stream
        data_type: Price type stamped on every record
        seed: Seed for reproducible streams
    """
    if sigma < 0:
        raise InvalidConstruction(f"sigma must be >= 0, got {sigma}")
    return _simulate(calendar, mu, sigma, initial_price, data_type, np.random.default_rng(seed))


def _simulate(calendar, mu, sigma, initial_price, data_type, rng):
    price = float(initial_price)
    simulated_return = float("nan")
    for i, timestamp in enumerate(calendar):
        if i > 0:
            simulated_return = float(rng.normal(mu, sigma))
            price = price * (1.0 + simulated_return)
        yield PriceRecord(timestamp=timestamp, value=price, type=data_type, simple_return=simulated_return)
