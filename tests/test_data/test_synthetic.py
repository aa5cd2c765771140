"""
Tests for simulated Gaussian prices.
"""
import itertools
import math

import pytest

from tsengine.data.calendar import daily_calendar
from tsengine.data.synthetic import gaussian_prices
from tsengine.shared.errors import InvalidConstruction
from tsengine.shared.types import DataType


@pytest.fixture
def calendar():
    return daily_calendar("2019-04-01", "2019-04-30")


def test_one_price_per_timestamp(calendar):
    prices = list(gaussian_prices(calendar, 0.0, 0.01, 100.0, seed=3))
    assert [p.timestamp for p in prices] == calendar.epochs()
    assert prices[0].value == 100.0
    assert math.isnan(prices[0].simple_return)
    assert all(p.type is DataType.CLOSE for p in prices)


def test_prices_compound_returns(calendar):
    prices = list(gaussian_prices(calendar, 0.001, 0.02, 50.0, seed=7))
    for previous, current in zip(prices, prices[1:]):
        assert current.value == pytest.approx(previous.value * (1.0 + current.simple_return))


def test_zero_sigma_is_deterministic(calendar):
    prices = list(gaussian_prices(calendar, 0.01, 0.0, 100.0))
    assert prices[2].value == pytest.approx(100.0 * 1.01 ** 2)


def test_seed_reproduces_stream(calendar):
    first = [p.value for p in gaussian_prices(calendar, 0.0, 0.01, 100.0, seed=11)]
    second = [p.value for p in gaussian_prices(calendar, 0.0, 0.01, 100.0, seed=11)]
    assert first == second


def test_infinite_calendar_is_lazy():
    prices = gaussian_prices(itertools.count(0, 60), 0.0, 0.01, 10.0, data_type=DataType.OPEN, seed=0)
    head = list(itertools.islice(prices, 5))
    assert [p.timestamp for p in head] == [0, 60, 120, 180, 240]
    assert head[0].type is DataType.OPEN


def test_negative_sigma(calendar):
    with pytest.raises(InvalidConstruction, match="sigma"):
        gaussian_prices(calendar, 0.0, -1.0, 100.0)
