"""
Streaming rolling moments (moving mean and sample variance).

A RollingMoment consumes one input element per step and reports the moment
of the window ending at that element. The first ``depth - 1`` steps report
the missing sentinel (NaN for floats, 0 for integers).

Two strategies are selected once at construction:
- indexed sources (``len`` + ``[]``, e.g. lists and numpy arrays) keep
  running sums and update them in O(1) per step by adding the entering
  element and subtracting the leaving one;
- forward-only iterables keep a bounded window buffer and re-sum it on
  every step (O(depth)).
"""
import copy
import itertools
import logging
import math
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Optional

import pandas as pd

from ..shared.defaults import MEAN, VARIANCE
from ..shared.errors import InvalidConstruction
from ..shared.streams import known_length
from ..shared.missing import infer_dtype, is_missing, missing_value_for


logger = logging.getLogger(__name__)


def _validate(depth: int, moment_order: int) -> None:
    if moment_order not in (MEAN, VARIANCE):
        raise InvalidConstruction(f"moment_order must be 1 (mean) or 2 (variance), got {moment_order}")
    if depth < 1:
        raise InvalidConstruction(f"depth must be >= 1, got {depth}")
    if moment_order == VARIANCE and depth < 2:
        raise InvalidConstruction(f"variance requires depth >= 2, got {depth}")


def _is_indexed(source: Any) -> bool:
    return hasattr(source, "__len__") and hasattr(source, "__getitem__") and not isinstance(source, (dict, str))


@dataclass
class RollingWindowState:
    """
    Running sums of a window of fixed depth.

    ``position`` counts consumed elements minus one (the index of the element
    that closes the current window).
    """
    depth: int
    moment_order: int = MEAN
    position: int = -1
    running_sum: Any = math.nan
    running_sum_of_squares: Any = math.nan

    @property
    def warm(self) -> bool:
        return self.position >= self.depth - 1

    def reset_sums(self, window: Iterable[Any]) -> None:
        """Full summation over ``window``."""
        window = list(window)
        self.running_sum = sum(window)
        if self.moment_order == VARIANCE:
            self.running_sum_of_squares = sum(x * x for x in window)

    def slide(self, entering: Any, leaving: Any) -> None:
        """O(1) update when the window moves by one element."""
        self.running_sum = self.running_sum + entering - leaving
        if self.moment_order == VARIANCE:
            self.running_sum_of_squares = self.running_sum_of_squares + entering * entering - leaving * leaving

    def sums_finite(self) -> bool:
        try:
            if not math.isfinite(self.running_sum):
                return False
            if self.moment_order == VARIANCE and not math.isfinite(self.running_sum_of_squares):
                return False
        except TypeError:
            return False
        return True

    def moment(self, missing_value: Callable[[], Any]) -> Any:
        """Mean or Bessel-corrected variance of the current window."""
        if not self.warm:
            return missing_value()
        if self.moment_order == MEAN:
            return self.running_sum / self.depth
        return (self.running_sum_of_squares - self.running_sum * self.running_sum / self.depth) / (self.depth - 1.0)


class RollingMoment:
    """
    Lazy forward-only sequence of rolling moments.

    Args:
        source: Input values (indexed sequence or any iterable, possibly infinite)
        depth: Window depth (>= 1, >= 2 for variance)
        moment_order: 1 for the mean, 2 for the sample variance
        dtype: Element type used to pick the missing sentinel (inferred if None)

    Raises:
        InvalidConstruction: On invalid depth / moment order

    Example:
        >>> list(RollingMoment([1., 2., 3.], 2))
        [nan, 1.5, 2.5]
    """

    def __init__(self, source: Iterable[Any], depth: int, moment_order: int = MEAN, dtype: Any = None):
        _validate(depth, moment_order)
        self._depth = depth
        self._moment_order = moment_order
        self._missing_value = missing_value_for(dtype if dtype is not None else infer_dtype(source))
        self._state = RollingWindowState(depth=depth, moment_order=moment_order)
        if isinstance(source, pd.Series):
            source = source.to_numpy()
        self._length = known_length(source)
        self._indexed = _is_indexed(source)
        if self._indexed:
            self._source: Any = source
            self._window: Optional[deque] = None
        else:
            self._source = iter(source)
            self._window = deque(maxlen=depth)
        logger.debug(
            f"RollingMoment depth={depth} order={moment_order} "
            f"strategy={'indexed' if self._indexed else 'forward'}"
        )

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def moment_order(self) -> int:
        return self._moment_order

    @property
    def position(self) -> int:
        """Number of elements consumed so far."""
        return self._state.position + 1

    @property
    def state(self) -> RollingWindowState:
        return self._state

    def __iter__(self) -> Iterator[Any]:
        return self

    def __len__(self) -> int:
        if self._length is None:
            raise TypeError("RollingMoment over an unsized source has no length")
        return self._length

    def __next__(self) -> Any:
        if self._indexed:
            self._advance_indexed()
        else:
            self._advance_forward()
        return self._state.moment(self._missing_value)

    def _advance_indexed(self) -> None:
        state = self._state
        i = state.position + 1
        if i >= len(self._source):
            raise StopIteration
        state.position = i
        if i < self._depth - 1:
            return
        if i == self._depth - 1:
            state.reset_sums(self._source[j] for j in range(self._depth))
            return
        leaving = self._source[i - self._depth]
        if not state.sums_finite() or is_missing(leaving):
            state.reset_sums(self._source[j] for j in range(i - self._depth + 1, i + 1))
        else:
            state.slide(self._source[i], leaving)

    def _advance_forward(self) -> None:
        value = next(self._source)
        self._window.append(value)
        state = self._state
        state.position += 1
        if state.warm:
            state.reset_sums(self._window)

    def copy(self) -> "RollingMoment":
        """
        Fork this sequence with independent accumulator state.

        Forward-only upstreams are split with ``itertools.tee``; this instance
        keeps one branch and the copy receives the other.
        """
        clone = RollingMoment.__new__(RollingMoment)
        clone._depth = self._depth
        clone._moment_order = self._moment_order
        clone._missing_value = self._missing_value
        clone._state = copy.deepcopy(self._state)
        clone._indexed = self._indexed
        clone._length = self._length
        if self._indexed:
            clone._source = self._source
            clone._window = None
        else:
            self._source, clone._source = itertools.tee(self._source)
            clone._window = deque(self._window, maxlen=self._depth)
        return clone


def moving_average(source: Iterable[Any], depth: int, dtype: Any = None) -> RollingMoment:
    """Rolling mean over ``depth`` elements."""
    return RollingMoment(source, depth, MEAN, dtype=dtype)


def moving_variance(source: Iterable[Any], depth: int, dtype: Any = None) -> RollingMoment:
    """Rolling sample variance over ``depth`` elements (depth >= 2)."""
    return RollingMoment(source, depth, VARIANCE, dtype=dtype)
