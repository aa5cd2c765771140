"""
Immutable epoch-indexed time series.

A TimeSeries is built once from an unordered ``epoch -> value`` mapping and a
NaNPolicy. Values are stored in ascending epoch order in a read-only numpy
array; every transformation (apply, rolling, arithmetic) returns a new series
that shares no mutable state with its operands.
"""
import logging
import math
import operator
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, Iterator, Mapping, Optional, Tuple

import numpy as np
import pandas as pd

from ..shared.errors import (
    DivisionByZero,
    EpochNotFound,
    IncompatibleSeries,
    InvalidConstruction,
)


logger = logging.getLogger(__name__)


class NaNPolicy(Enum):
    """How missing values are handled at construction."""
    DROP = "drop"  # Omit missing entries and reindex densely
    FILL_FORWARD = "fill_forward"  # Replace with the most recent prior non-missing value
    KEEP = "keep"  # Preserve raw values, missing included


def _read_only(values: np.ndarray) -> np.ndarray:
    values.flags.writeable = False
    return values


class TimeSeries:
    """
    Float series keyed by unique epochs (integer seconds).

    ``index`` maps each epoch to its position in ``values``; it is a bijection
    onto ``range(len(values))`` and epochs are stored in strictly increasing
    order.
    """

    __slots__ = ("_epochs", "_values", "_index", "_has_missing")

    def __init__(self, epochs: np.ndarray, values: np.ndarray):
        """
        Wrap already ordered arrays. Use ``build`` for raw mappings.

        Args:
            epochs: Strictly increasing unsigned epochs
            values: float64 values aligned with ``epochs``
        """
        epochs = np.array(epochs, dtype=np.uint64)
        values = np.array(values, dtype=np.float64)
        if epochs.shape != values.shape or epochs.ndim != 1:
            raise InvalidConstruction(
                f"epochs and values must be 1-d arrays of the same length, got {epochs.shape} and {values.shape}"
            )
        if len(epochs) > 1 and not np.all(epochs[1:] > epochs[:-1]):
            raise InvalidConstruction("epochs must be strictly increasing")
        self._epochs = _read_only(epochs)
        self._values = _read_only(values)
        self._index = {int(e): i for i, e in enumerate(epochs)}
        self._has_missing = bool(np.isnan(values).any())

    @classmethod
    def build(cls, mapping: Mapping[int, float], policy: NaNPolicy = NaNPolicy.KEEP) -> "TimeSeries":
        """
        Build a series from an unordered ``epoch -> value`` mapping.

        Never fails on numeric content: None and NaN are both treated as
        missing and handled according to ``policy``.
        """
        epochs = []
        values = []
        last_valid = math.nan
        for epoch in sorted(mapping):
            raw = mapping[epoch]
            value = math.nan if raw is None else float(raw)
            missing = math.isnan(value)
            if policy is NaNPolicy.DROP:
                if missing:
                    continue
            elif policy is NaNPolicy.FILL_FORWARD:
                if missing:
                    value = last_valid
                else:
                    last_valid = value
            epochs.append(int(epoch))
            values.append(value)
        logger.debug(f"Built series of {len(values)} values from {len(mapping)} epochs ({policy.value})")
        return cls(np.array(epochs, dtype=np.uint64), np.array(values, dtype=np.float64))

    @classmethod
    def from_series(cls, series: pd.Series, policy: NaNPolicy = NaNPolicy.KEEP) -> "TimeSeries":
        """
        Build from a pandas Series.

        A DatetimeIndex is converted to epoch seconds; any other index must
        already hold integer epochs.
        """
        index = series.index
        if isinstance(index, pd.DatetimeIndex):
            if index.tz is not None:
                index = index.tz_convert("UTC").tz_localize(None)
            epochs = (index - pd.Timestamp("1970-01-01")) // pd.Timedelta(seconds=1)
        else:
            epochs = index
        return cls.build(dict(zip((int(e) for e in epochs), series.to_numpy(dtype=np.float64))), policy)

    # ------------------------------------------------------------------ access

    @property
    def values(self) -> np.ndarray:
        """Read-only values in ascending epoch order."""
        return self._values

    @property
    def epochs(self) -> np.ndarray:
        """Read-only epochs in ascending order."""
        return self._epochs

    @property
    def index(self) -> Mapping[int, int]:
        """Read-only ``epoch -> position`` mapping."""
        return MappingProxyType(self._index)

    @property
    def has_missing(self) -> bool:
        return self._has_missing

    def value_at(self, epoch: int) -> float:
        """
        Value recorded for ``epoch``.

        Raises:
            EpochNotFound: If ``epoch`` is not in the index
        """
        position = self._index.get(int(epoch))
        if position is None:
            raise EpochNotFound(epoch)
        return float(self._values[position])

    def __contains__(self, epoch: int) -> bool:
        return int(epoch) in self._index

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Tuple[int, float]]:
        """Iterate ``(epoch, value)`` pairs in epoch order."""
        return zip((int(e) for e in self._epochs), (float(v) for v in self._values))

    def __repr__(self) -> str:
        return f"TimeSeries(len={len(self)}, has_missing={self._has_missing})"

    def same_index(self, other: "TimeSeries") -> bool:
        """True when both series have the same epochs in the same order."""
        return np.array_equal(self._epochs, other._epochs)

    def equals(self, other: "TimeSeries") -> bool:
        """Same index and same values, NaN matching NaN."""
        return self.same_index(other) and np.array_equal(self._values, other._values, equal_nan=True)

    def to_series(self, name: Optional[str] = None) -> pd.Series:
        """Copy into a pandas Series indexed by epoch."""
        return pd.Series(self._values.copy(), index=pd.Index(self._epochs.copy(), name="epoch"), name=name)

    def to_dict(self) -> Dict[int, float]:
        return dict(self)

    # --------------------------------------------------------- transformations

    def _derive(self, values: np.ndarray) -> "TimeSeries":
        return TimeSeries(self._epochs, values)

    def apply(self, func: Callable[[float], float]) -> "TimeSeries":
        """Map every value through ``func``; index and order are preserved."""
        return self._derive(np.fromiter((func(float(v)) for v in self._values), dtype=np.float64, count=len(self)))

    def rolling(
        self,
        reduce: Callable[[float, float], float],
        depth: int,
        postprocess: Callable[[float], float] = lambda x: x,
    ) -> "TimeSeries":
        """
        Batch rolling fold.

        The first ``depth - 1`` values are NaN; every later value is
        ``postprocess`` of the left fold of ``reduce`` over the ``depth``
        values ending at that position. O(n * depth).

        Raises:
            InvalidConstruction: If ``depth < 1``
        """
        if depth < 1:
            raise InvalidConstruction(f"depth must be >= 1, got {depth}")
        out = np.full(len(self), np.nan)
        values = self._values
        for end in range(depth - 1, len(values)):
            acc = float(values[end - depth + 1])
            for value in values[end - depth + 2:end + 1]:
                acc = reduce(acc, float(value))
            out[end] = postprocess(acc)
        return self._derive(out)

    # ----------------------------------------------------------------- algebra

    def _check_compatible(self, other: "TimeSeries") -> None:
        if len(self) != len(other) or not self.same_index(other):
            raise IncompatibleSeries(
                f"Not compatible timeseries: indexes differ (lengths {len(self)} and {len(other)})"
            )

    def _binary(self, other: "TimeSeries", op: Callable[[np.ndarray, np.ndarray], np.ndarray]) -> "TimeSeries":
        self._check_compatible(other)
        with np.errstate(invalid="ignore"):
            result = self._derive(op(self._values, other._values))
        # Missing-ness is carried from the operands, not from the computed values
        result._has_missing = self._has_missing or other._has_missing
        return result

    def __add__(self, other: "TimeSeries") -> "TimeSeries":
        if not isinstance(other, TimeSeries):
            return NotImplemented
        return self._binary(other, operator.add)

    def __sub__(self, other: "TimeSeries") -> "TimeSeries":
        if not isinstance(other, TimeSeries):
            return NotImplemented
        return self._binary(other, operator.sub)

    def __mul__(self, other: "TimeSeries") -> "TimeSeries":
        if not isinstance(other, TimeSeries):
            return NotImplemented
        return self._binary(other, operator.mul)

    def __truediv__(self, other: "TimeSeries") -> "TimeSeries":
        if not isinstance(other, TimeSeries):
            return NotImplemented
        self._check_compatible(other)
        if np.any(other._values == 0):
            raise DivisionByZero("Divider has some zeros")
        return self._binary(other, operator.truediv)
