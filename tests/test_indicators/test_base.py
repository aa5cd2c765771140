"""
Tests for the Indicator base interface.
"""
from abc import ABC

import pandas as pd
import pytest

from tsengine.indicators.base import Indicator
from tsengine.indicators.implementations import (
    EMAIndicator,
    FIRSMAIndicator,
    SMAIndicator,
    VolatilityIndicator,
)

CONCRETE = (SMAIndicator, EMAIndicator, FIRSMAIndicator, VolatilityIndicator)


class TestIndicatorInterface:
    """Test Indicator abstract base class."""

    def test_indicator_is_abstract(self):
        assert issubclass(Indicator, ABC)
        with pytest.raises(TypeError):
            Indicator()

    def test_concrete_indicators_implement_calculate(self):
        for cls in CONCRETE:
            assert cls.calculate is not Indicator.calculate

    def test_minimal_subclass(self):
        class Doubler(Indicator):
            def calculate(self, prices: pd.Series) -> pd.Series:
                return prices * 2

        prices = pd.Series([1.0, 2.0], index=[10, 20])
        assert Doubler().get_value_at(prices, 20) == 4.0
        assert Doubler().get_value_at(prices, 30) is None
