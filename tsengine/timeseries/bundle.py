"""
Named collection of co-indexed time series.
"""
from typing import Dict, Iterator, List, Mapping, Optional

import pandas as pd

from .series import TimeSeries
from ..shared.errors import IncompatibleSeries, SeriesNotFound


class TimeSeriesBundle:
    """
    Series sharing one index.

    The first series added fixes the bundle index; later series must have
    exactly the same epochs in the same order.
    """

    def __init__(self):
        self._series: Dict[str, TimeSeries] = {}
        self._reference: Optional[TimeSeries] = None

    def add(self, name: str, series: TimeSeries) -> None:
        """
        Add (or replace) ``name``.

        Raises:
            IncompatibleSeries: If the series index differs from the bundle's
        """
        if self._reference is not None and len(self._reference) > 0 and not self._reference.same_index(series):
            raise IncompatibleSeries(f"Series {name!r} index not equal to bundle index")
        if self._reference is None or len(self._reference) == 0:
            self._reference = series
        self._series[name] = series

    @property
    def index(self) -> Mapping[int, int]:
        if self._reference is None:
            return {}
        return self._reference.index

    @property
    def names(self) -> List[str]:
        return list(self._series)

    def get(self, name: str) -> TimeSeries:
        """
        Series stored under ``name``.

        Raises:
            SeriesNotFound: If no series has this name
        """
        try:
            return self._series[name]
        except KeyError:
            raise SeriesNotFound(name) from None

    def value(self, name: str, epoch: int) -> float:
        """Value of series ``name`` at ``epoch`` (SeriesNotFound / EpochNotFound)."""
        return self.get(name).value_at(epoch)

    def __contains__(self, name: str) -> bool:
        return name in self._series

    def __len__(self) -> int:
        return len(self._series)

    def __iter__(self) -> Iterator[str]:
        return iter(self._series)

    def to_frame(self) -> pd.DataFrame:
        """One column per series, indexed by epoch."""
        return pd.DataFrame({name: series.to_series() for name, series in self._series.items()})
