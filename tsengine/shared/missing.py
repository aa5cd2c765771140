"""
Missing-value strategy.

The sentinel reported for "not yet computable" depends on the element type:
NaN for floating point (or unknown) elements, zero for integers.
"""
import math
from typing import Any, Callable, Optional

import numpy as np


def _is_integer_type(dtype: Any) -> bool:
    if dtype is None or dtype is bool:
        return False
    if isinstance(dtype, type) and issubclass(dtype, (int, np.integer)):
        return not issubclass(dtype, (bool, np.bool_))
    try:
        return np.dtype(dtype).kind in "iu"
    except TypeError:
        return False


def infer_dtype(source: Any) -> Optional[Any]:
    """
    Best-effort element type of a source without consuming it.

    Looks at ``source.dtype`` (numpy arrays, pandas Series) first. A non-empty
    sequence is ``int`` only when every element is an integer, ``float``
    otherwise. Returns None for plain iterators.
    """
    dtype = getattr(source, "dtype", None)
    if dtype is not None:
        return dtype
    if isinstance(source, (str, bytes, dict)):
        return None
    if hasattr(source, "__getitem__") and hasattr(source, "__len__"):
        try:
            if len(source) == 0:
                return None
            if all(_is_integer_type(type(value)) for value in source):
                return int
            return float
        except TypeError:
            return None
    return None


def missing_value_for(dtype: Any = None) -> Callable[[], Any]:
    """Return a callable producing the missing sentinel for ``dtype``."""
    if _is_integer_type(dtype):
        return lambda: 0
    return lambda: math.nan


def is_missing(value: Any) -> bool:
    """True for None and NaN."""
    if value is None:
        return True
    try:
        return math.isnan(value)
    except TypeError:
        return False
