"""
Tests for the regime state machine and signal emission.
"""
import math

import pytest

from tsengine.shared.types import PriceRecord, Regime, Signal
from tsengine.signals.regime import RegimeSignalGenerator, next_regime, transition_signal


def _prices(values, start=0):
    return [PriceRecord(timestamp=start + i, value=v) for i, v in enumerate(values)]


class TestTransitionTable:
    @pytest.mark.parametrize("last,current,expected", [
        (Regime.FLAT, Regime.BULL, Signal.BUY),
        (Regime.BEAR, Regime.BULL, Signal.BUY),
        (Regime.BULL, Regime.BULL, Signal.NONE),
        (Regime.FLAT, Regime.BEAR, Signal.SELL),
        (Regime.BULL, Regime.BEAR, Signal.SELL),
        (Regime.BEAR, Regime.BEAR, Signal.NONE),
        (Regime.BEAR, Regime.FLAT, Signal.BUY),
        (Regime.BULL, Regime.FLAT, Signal.SELL),
        (Regime.FLAT, Regime.FLAT, Signal.NONE),
    ])
    def test_table(self, last, current, expected):
        assert transition_signal(last, current) is expected


class TestNextRegime:
    def test_price_above_indicator_is_bull(self):
        assert next_regime(10.0, 9.0, Regime.FLAT) is Regime.BULL

    def test_price_not_above_indicator_is_bear(self):
        assert next_regime(9.0, 10.0, Regime.BULL) is Regime.BEAR
        assert next_regime(10.0, 10.0, Regime.BULL) is Regime.BEAR

    @pytest.mark.parametrize("price,indicator", [(math.nan, 1.0), (1.0, math.nan), (None, 1.0), (1.0, None)])
    def test_missing_keeps_regime(self, price, indicator):
        assert next_regime(price, indicator, Regime.BULL) is Regime.BULL
        assert next_regime(price, indicator, Regime.FLAT) is Regime.FLAT


class TestGenerator:
    def test_constant_price_above_indicator_sells_once(self):
        prices = _prices([56.6] * 50)
        indicator = [p.value + 2 for p in prices]
        system = RegimeSignalGenerator(prices, indicator)
        first = next(system)
        assert first.price == 56.6
        assert first.signal is Signal.NONE
        assert next(system).signal is Signal.SELL
        assert next(system).signal is Signal.NONE

    def test_crossing_emits_exactly_one_sell(self):
        prices = _prices([56.6] * 6)
        indicator = [58.6, 58.6, 56.6, 56.6, 56.6, 56.6]
        signals = [r.signal for r in RegimeSignalGenerator(prices, indicator)]
        assert signals == [Signal.NONE, Signal.SELL] + [Signal.NONE] * 4

    def test_signal_lags_comparison_by_one_step(self):
        prices = _prices([10.0, 12.0, 8.0, 9.0, 11.0])
        indicator = [11.0, 11.0, 11.0, 11.0, 10.0]
        records = list(RegimeSignalGenerator(prices, indicator))
        assert [r.signal for r in records] == [
            Signal.NONE,  # initial
            Signal.SELL,  # 10 <= 11 at step 0
            Signal.BUY,   # 12 > 11 at step 1
            Signal.SELL,  # 8 <= 11 at step 2
            Signal.NONE,  # still bear at step 3
        ]
        assert [r.regime for r in records] == [
            Regime.FLAT, Regime.BEAR, Regime.BULL, Regime.BEAR, Regime.BEAR,
        ]

    def test_missing_indicator_keeps_regime(self):
        prices = _prices([10.0, 10.0, 10.0, 10.0])
        indicator = [9.0, math.nan, math.nan, 9.0]
        records = list(RegimeSignalGenerator(prices, indicator))
        assert [r.signal for r in records] == [Signal.NONE, Signal.BUY, Signal.NONE, Signal.NONE]
        assert all(r.regime is Regime.BULL for r in records[1:])

    def test_warm_up_indicator_stays_flat(self):
        prices = _prices([10.0, 11.0, 12.0])
        indicator = [math.nan, math.nan, 11.5]
        records = list(RegimeSignalGenerator(prices, indicator))
        assert [r.signal for r in records] == [Signal.NONE] * 3
        assert next_regime(12.0, 11.5, records[-1].regime) is Regime.BULL

    def test_timestamps_and_returns(self):
        prices = _prices([100.0, 110.0, 99.0], start=1000)
        records = list(RegimeSignalGenerator(prices, [0.0, 0.0, 0.0]))
        assert [r.timestamp for r in records] == [1000, 1001, 1002]
        assert math.isnan(records[0].simple_return)
        assert records[1].simple_return == pytest.approx(0.1)
        assert records[2].simple_return == pytest.approx(-0.1)

    def test_record_return_takes_precedence(self):
        prices = [PriceRecord(timestamp=0, value=1.0, simple_return=0.5)]
        record = next(RegimeSignalGenerator(prices, [0.0]))
        assert record.simple_return == 0.5

    def test_stops_with_shortest_stream(self):
        prices = _prices([1.0, 2.0, 3.0])
        system = RegimeSignalGenerator(prices, [0.0, 0.0])
        assert len(system) == 2
        assert len(list(system)) == 2

    def test_unsized_streams(self):
        system = RegimeSignalGenerator(iter(_prices([1.0])), iter([0.0]))
        with pytest.raises(TypeError):
            len(system)

    def test_flat_is_never_reentered(self):
        prices = _prices([1.0, 3.0, 1.0, 3.0, 1.0])
        records = list(RegimeSignalGenerator(prices, [2.0] * 5))
        assert all(r.regime is not Regime.FLAT for r in records[1:])
