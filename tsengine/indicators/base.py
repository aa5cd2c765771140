"""
Base indicator interface.

All indicators follow this pattern:
1. Calculate values from a price series with the streaming engines
2. Return a series aligned with the input index (NaN while warming up)
"""
from abc import ABC, abstractmethod
from typing import Optional

import pandas as pd


class Indicator(ABC):
    """
    Base class for pandas-facing indicators.

    Indicators compute values from price data that can be compared against
    prices for regime detection. They do not generate signals directly.
    """

    @abstractmethod
    def calculate(self, prices: pd.Series) -> pd.Series:
        """
        Calculate indicator values from price data.

        Args:
            prices: Price series (any index)

        Returns:
            Series with indicator values (same index as prices)
        """
        pass

    def get_value_at(self, prices: pd.Series, timestamp) -> Optional[float]:
        """
        Get indicator value at a specific index label.

        Returns:
            Indicator value at timestamp, or None if missing / not in index
        """
        values = self.calculate(prices)
        if timestamp in values.index:
            val = values[timestamp]
            return None if pd.isna(val) else float(val)
        return None
