"""
Data producers consumed by the engine.

Provides:
- Naive calendars of epoch timestamps
- Simulated Gaussian price streams
- Numeric column extraction from dataset documents
"""
from .calendar import NaiveCalendar, daily_calendar, monthly_calendar, intraday_calendar
from .synthetic import gaussian_prices
from .feed import DatasetColumn, parse_dataset, extract_column, column_mapping

__all__ = [
    'NaiveCalendar',
    'daily_calendar',
    'monthly_calendar',
    'intraday_calendar',
    'gaussian_prices',
    'DatasetColumn',
    'parse_dataset',
    'extract_column',
    'column_mapping',
]
