"""
Generalized FIR/IIR recursive filters.

A filter is described by a FilterSpec and evaluates

    y[i] = sum_k zeros(i)[k] * x[i - k] + sum_k poles(i)[k] * y[i - 1 - k]

Indices below ``needed_offset - 1`` yield NaN, index ``needed_offset - 1``
yields the seed ``initial_value`` and later indices follow the recurrence.
Evaluation is iterative. Specs declaring ``max_taps`` keep only that many
past inputs and outputs; specs without it may return longer coefficient
lists at later indices, so the whole history is kept.
"""
import logging
import math
from collections import deque
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Union

import numpy as np

from ..shared.defaults import EMA_ALPHA
from ..shared.errors import InvalidConstruction
from ..shared.streams import known_length


logger = logging.getLogger(__name__)

Coefficients = Callable[[int], Sequence[float]]
InitialValue = Union[float, Callable[[Sequence[float]], float]]


@dataclass(frozen=True)
class FilterSpec:
    """
    Coefficient providers and seeding of a recursive filter.

    ``initial_value`` is a constant or a callable receiving the first
    ``needed_offset`` inputs. ``max_taps`` bounds the length of every
    coefficient list the providers return (None = unbounded).
    """
    needed_offset: int
    initial_value: InitialValue
    zeros: Coefficients
    poles: Coefficients
    max_taps: Optional[int] = None

    def seed(self, head: Sequence[float]) -> float:
        if callable(self.initial_value):
            return float(self.initial_value(head))
        return float(self.initial_value)


def ema(alpha: float = EMA_ALPHA) -> FilterSpec:
    """Exponential moving average seeded with the first input."""
    if not (0 < alpha <= 1):
        raise InvalidConstruction(f"alpha must be in (0, 1], got {alpha}")
    zeros = [alpha]
    poles = [1.0 - alpha]
    return FilterSpec(
        needed_offset=1,
        initial_value=lambda head: head[0],
        zeros=lambda i: zeros,
        poles=lambda i: poles,
        max_taps=1,
    )


def sma(depth: int) -> FilterSpec:
    """Simple moving average over ``depth`` inputs, seeded with the mean of the first window."""
    if depth < 1:
        raise InvalidConstruction(f"depth must be >= 1, got {depth}")
    zeros = [1.0 / depth] * depth
    poles = [0.0]
    return FilterSpec(
        needed_offset=depth,
        initial_value=lambda head: sum(head) / depth,
        zeros=lambda i: zeros,
        poles=lambda i: poles,
        max_taps=depth,
    )


class RecursiveFilter:
    """
    Lazy evaluation of a FilterSpec over an input stream.

    Args:
        spec: Filter coefficients and seeding
        source: Input values (any iterable, possibly infinite)

    Raises:
        InvalidConstruction: If ``needed_offset < 1``, the zeros at
            ``needed_offset`` reach further back than the available history,
            or a provider returns more than ``max_taps`` coefficients
    """

    def __init__(self, spec: FilterSpec, source: Iterable[float]):
        if spec.needed_offset < 1:
            raise InvalidConstruction(f"needed_offset must be >= 1, got {spec.needed_offset}")
        if spec.max_taps is not None and spec.max_taps < 1:
            raise InvalidConstruction(f"max_taps must be >= 1, got {spec.max_taps}")
        n_zeros = len(spec.zeros(spec.needed_offset))
        n_poles = len(spec.poles(spec.needed_offset))
        if n_zeros < 1:
            raise InvalidConstruction("zeros must provide at least one coefficient")
        if n_zeros > spec.needed_offset + 1:
            raise InvalidConstruction(
                f"zeros reach {n_zeros - 1} inputs back but only {spec.needed_offset} precede the first computed value"
            )
        self._spec = spec
        self._check_taps(spec.needed_offset, n_zeros, n_poles)
        self._length = known_length(source)
        self._source = iter(source)
        # Inputs are kept for the seed window and for the zeros; outputs for the poles.
        # maxlen=None keeps the whole history.
        if spec.max_taps is None:
            input_history = output_history = None
        else:
            input_history = max(spec.max_taps, spec.needed_offset)
            output_history = spec.max_taps
        self._inputs: deque = deque(maxlen=input_history)
        self._outputs: deque = deque(maxlen=output_history)
        self._i = -1
        logger.debug(
            f"RecursiveFilter offset={spec.needed_offset} zeros={n_zeros} poles={n_poles} max_taps={spec.max_taps}"
        )

    @property
    def spec(self) -> FilterSpec:
        return self._spec

    def __iter__(self) -> Iterator[float]:
        return self

    def __len__(self) -> int:
        if self._length is None:
            raise TypeError("RecursiveFilter over an unsized source has no length")
        return self._length

    def __next__(self) -> float:
        x = float(next(self._source))
        self._i += 1
        self._inputs.append(x)
        y = self._compute(self._i)
        self._outputs.appendleft(y)
        return y

    def _check_taps(self, i: int, n_zeros: int, n_poles: int) -> None:
        max_taps = self._spec.max_taps
        if max_taps is not None and max(n_zeros, n_poles) > max_taps:
            raise InvalidConstruction(
                f"coefficients at index {i} have {max(n_zeros, n_poles)} taps, more than max_taps={max_taps}"
            )

    def _compute(self, i: int) -> float:
        spec = self._spec
        if i < spec.needed_offset - 1:
            return math.nan
        if i == spec.needed_offset - 1:
            return spec.seed(list(self._inputs)[-spec.needed_offset:])

        zeros = spec.zeros(i)
        poles = spec.poles(i)
        self._check_taps(i, len(zeros), len(poles))
        # Zeros reaching before the first input are undefined
        if len(zeros) > i + 1:
            return math.nan
        # inputs[-1 - k] is x[i - k]
        result = sum(c * self._inputs[-1 - k] for k, c in enumerate(zeros))

        if sum(poles) == 0.0:
            # Pure FIR
            return result
        if len(poles) > i:
            return math.nan
        # outputs[k] is y[i - 1 - k]
        result += sum(c * self._outputs[k] for k, c in enumerate(poles))
        return result


def evaluate_filter(spec: FilterSpec, values: Iterable[float]) -> np.ndarray:
    """Evaluate ``spec`` over a finite input and return all outputs."""
    return np.fromiter(RecursiveFilter(spec, values), dtype=np.float64)


def recursive_reference(spec: FilterSpec, values: Sequence[float], i: int) -> float:
    """
    Direct (non-memoised) evaluation of ``y[i]`` from the recurrence.

    Exponential in the number of poles; meant for checking the iterative
    evaluator on short inputs.
    """
    if i < spec.needed_offset - 1:
        return math.nan
    if i == spec.needed_offset - 1:
        return spec.seed(values[:spec.needed_offset])
    zeros = spec.zeros(i)
    if len(zeros) > i + 1:
        return math.nan
    result = sum(c * values[i - k] for k, c in enumerate(zeros))
    poles = spec.poles(i)
    if sum(poles) != 0.0:
        previous: List[float] = [recursive_reference(spec, values, i - 1 - k) for k in range(len(poles))]
        result += sum(c * y for c, y in zip(poles, previous))
    return result
