"""
Immutable financial instruments valued per epoch index.

Epochs here are positions in the instrument's price history (0, 1, 2, ...),
the same positions a TimeSeries assigns through its ``index``.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Sequence, Tuple

import numpy as np

from ..shared.defaults import MARGIN_RATE
from ..shared.errors import EpochNotFound, InvalidConstruction


@dataclass(frozen=True)
class CashFlow:
    """An ``amount`` paid or received from ``epoch`` on."""
    epoch: int
    amount: float

    def value(self, i: int) -> float:
        if i < self.epoch:
            return 0.0
        return self.amount


class FinancialInstrument(ABC):
    """
    Base class for instruments.

    An instrument reports its value at each epoch and the cash flow it
    generates there.
    """

    @abstractmethod
    def value(self, i: int) -> float:
        pass

    @abstractmethod
    def has_cash_flow(self, i: int) -> bool:
        pass

    @abstractmethod
    def cash_flow(self, i: int) -> CashFlow:
        pass


@dataclass(frozen=True)
class FutureContract(FinancialInstrument):
    """
    Future contract entered at ``entry_price`` on ``entry_epoch``.

    Its value is ``entry_price - prices[i]`` from entry to ``expiration``
    (both inclusive) and 0 outside that range or past the known prices.
    Entering costs a margin deposit of ``margin_rate`` times the price at
    entry.

    Raises:
        InvalidConstruction: If ``entry_epoch`` is after ``expiration`` or
            ``margin_rate`` is not in (0, 1]

    Example:
        >>> contract = FutureContract(105.8, 2, 3, [100.0, 102.0, 105.6, 111.23, 105.7])
        >>> round(contract.value(2), 2)
        0.2
    """
    entry_price: float
    entry_epoch: int
    expiration: int
    prices: Tuple[float, ...] = field(default=())
    margin_rate: float = MARGIN_RATE

    def __post_init__(self):
        # prices are stored as a tuple of floats
        object.__setattr__(self, "prices", tuple(float(p) for p in self.prices))
        if self.entry_epoch > self.expiration:
            raise InvalidConstruction(
                f"entry_epoch ({self.entry_epoch}) must not be after expiration ({self.expiration})"
            )
        if not (0 < self.margin_rate <= 1):
            raise InvalidConstruction(f"margin_rate must be in (0, 1], got {self.margin_rate}")

    def value(self, i: int) -> float:
        if i > self.expiration or i < self.entry_epoch or i >= len(self.prices):
            return 0.0
        return self.entry_price - self.prices[i]

    def has_cash_flow(self, i: int) -> bool:
        """True at entry (margin deposit) and wherever the contract has a non-zero value."""
        return i == self.entry_epoch or self.value(i) != 0.0

    def cash_flow(self, i: int) -> CashFlow:
        """
        Margin deposit at entry, the contract value at any other epoch.

        Raises:
            EpochNotFound: If the entry epoch has no known price
        """
        if i == self.entry_epoch:
            if i >= len(self.prices):
                raise EpochNotFound(i)
            return CashFlow(i, -self.prices[i] * self.margin_rate)
        return CashFlow(i, self.value(i))

    def valuation(self) -> np.ndarray:
        """Value at every epoch of the price history."""
        return np.array([self.value(i) for i in range(len(self.prices))], dtype=np.float64)


def future_from_prices(prices: Sequence[float], entry_epoch: int, expiration: int) -> FutureContract:
    """Contract entered at the price recorded on ``entry_epoch``."""
    if not 0 <= entry_epoch < len(prices):
        raise EpochNotFound(entry_epoch)
    return FutureContract(float(prices[entry_epoch]), entry_epoch, expiration, tuple(prices))
