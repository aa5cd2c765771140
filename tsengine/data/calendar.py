"""
Naive calendars: strictly increasing epoch timestamps between two dates.
"""
from typing import Iterator, List, Optional, Union
from datetime import datetime

import pandas as pd

from ..shared.errors import InvalidConstruction


DateLike = Union[str, datetime, pd.Timestamp]


class NaiveCalendar:
    """
    Every ``freq`` step from ``first`` to ``last`` (both inclusive).

    No holidays or trading sessions are modelled. Iteration yields epoch
    seconds; ``iso()`` gives the same timestamps as text.

    Raises:
        InvalidConstruction: If ``first`` is not strictly before ``last``
    """

    def __init__(self, first: DateLike, last: DateLike, freq: str = "D", tz: Optional[str] = None):
        first_ts = pd.Timestamp(first)
        last_ts = pd.Timestamp(last)
        if not first_ts < last_ts:
            raise InvalidConstruction(f"first date ({first_ts}) must be before last date ({last_ts})")
        self.freq = freq
        self.tz = tz
        self._dates = pd.date_range(first_ts, last_ts, freq=freq, tz=tz)

    @property
    def dates(self) -> pd.DatetimeIndex:
        return self._dates

    def epochs(self) -> List[int]:
        return [int(ts.timestamp()) for ts in self._dates]

    def iso(self) -> List[str]:
        return [ts.isoformat() for ts in self._dates]

    def __iter__(self) -> Iterator[int]:
        return (int(ts.timestamp()) for ts in self._dates)

    def __len__(self) -> int:
        return len(self._dates)


def daily_calendar(first: DateLike, last: DateLike, tz: Optional[str] = None) -> NaiveCalendar:
    return NaiveCalendar(first, last, freq="D", tz=tz)


def monthly_calendar(first: DateLike, last: DateLike, tz: Optional[str] = None) -> NaiveCalendar:
    return NaiveCalendar(first, last, freq="MS", tz=tz)


def intraday_calendar(first: DateLike, last: DateLike, tz: Optional[str] = None) -> NaiveCalendar:
    return NaiveCalendar(first, last, freq="min", tz=tz)
