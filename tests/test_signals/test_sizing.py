"""
Tests for volatility-normalised position sizing.
"""
import math

import pytest

from tsengine.shared.defaults import RISK_UNITS_K
from tsengine.shared.errors import InvalidConstruction
from tsengine.shared.types import Signal, SignalRecord
from tsengine.signals.sizing import PositionSizer, nominal_for


def _records(signals, returns):
    return [
        SignalRecord(timestamp=i, price=100.0, signal=s, simple_return=r)
        for i, (s, r) in enumerate(zip(signals, returns))
    ]


ALTERNATING = [0.01, -0.01, 0.01, -0.01, 0.01, -0.01]


class TestNominalFor:
    def test_buy_and_sell(self):
        assert nominal_for(Signal.BUY, 0.0004, 0.0) == pytest.approx(RISK_UNITS_K / 0.02)
        assert nominal_for(Signal.SELL, 0.0004, 0.0) == pytest.approx(-RISK_UNITS_K / 0.02)

    def test_none_is_flat(self):
        assert nominal_for(Signal.NONE, 0.0004, 3.0) == 0.0

    def test_roll_carries_previous(self):
        assert nominal_for(Signal.ROLL, math.nan, -2.5) == -2.5

    @pytest.mark.parametrize("variance", [math.nan, 0.0, -1e-12, math.inf])
    def test_degenerate_variance_is_flat(self, variance):
        assert nominal_for(Signal.BUY, variance, 1.0) == 0.0

    def test_custom_risk_units(self):
        assert nominal_for(Signal.BUY, 4.0, 0.0, risk_units=1.0) == 0.5


class TestPositionSizer:
    def test_nan_variance_during_warm_up_gives_zero(self):
        records = _records([Signal.BUY] * 3, [math.nan, 0.01, -0.01])
        positions = list(PositionSizer(records, volatility_depth=3))
        assert [p.nominal for p in positions] == [0.0, 0.0, 0.0]

    def test_buy_after_warm_up(self):
        signals = [Signal.NONE] * 4 + [Signal.BUY, Signal.SELL]
        positions = list(PositionSizer(_records(signals, ALTERNATING), volatility_depth=2))
        variance = positions[4].variance
        assert variance == pytest.approx(0.0002)
        assert positions[4].nominal == pytest.approx(RISK_UNITS_K / math.sqrt(variance))
        assert positions[5].nominal == pytest.approx(-RISK_UNITS_K / math.sqrt(positions[5].variance))
        assert [p.nominal for p in positions[:4]] == [0.0] * 4

    def test_roll_carries_last_nonzero(self):
        signals = [Signal.NONE, Signal.BUY, Signal.ROLL, Signal.NONE, Signal.ROLL, Signal.ROLL]
        positions = list(PositionSizer(_records(signals, ALTERNATING), volatility_depth=2))
        bought = positions[1].nominal
        assert bought > 0
        assert positions[2].nominal == bought
        assert positions[3].nominal == 0.0
        assert positions[4].nominal == bought
        assert positions[5].nominal == bought

    def test_roll_before_any_position_is_flat(self):
        positions = list(PositionSizer(_records([Signal.ROLL] * 3, ALTERNATING), volatility_depth=2))
        assert [p.nominal for p in positions] == [0.0, 0.0, 0.0]

    def test_zero_variance_gives_zero(self):
        positions = list(PositionSizer(_records([Signal.BUY] * 4, [0.0] * 4), volatility_depth=2))
        assert all(p.nominal == 0.0 for p in positions)

    def test_never_nan(self):
        returns = [math.nan, 0.02, math.nan, -0.01, 0.03, 0.0]
        signals = [Signal.BUY, Signal.SELL, Signal.BUY, Signal.ROLL, Signal.SELL, Signal.BUY]
        positions = list(PositionSizer(_records(signals, returns), volatility_depth=2))
        assert all(not math.isnan(p.nominal) for p in positions)

    def test_records_carry_stream_fields(self):
        positions = list(PositionSizer(_records([Signal.BUY, Signal.NONE], [0.0, 0.01]), volatility_depth=2))
        assert [p.timestamp for p in positions] == [0, 1]
        assert positions[0].signal is Signal.BUY
        assert positions[1].price == 100.0

    def test_length(self):
        assert len(PositionSizer(_records([Signal.NONE] * 3, [0.0] * 3), volatility_depth=2)) == 3

    def test_invalid_depth(self):
        with pytest.raises(InvalidConstruction, match="variance requires depth >= 2"):
            PositionSizer([], volatility_depth=1)

    def test_invalid_risk_units(self):
        with pytest.raises(InvalidConstruction, match="risk_units"):
            PositionSizer([], risk_units=0.0)

    def test_last_nonzero_nominal_survives_none(self):
        signals = [Signal.NONE, Signal.NONE, Signal.BUY, Signal.NONE]
        sizer = PositionSizer(_records(signals, ALTERNATING[:4]), volatility_depth=2)
        assert sizer.last_nonzero_nominal == 0.0
        positions = list(sizer)
        assert positions[3].nominal == 0.0
        assert sizer.last_nonzero_nominal == pytest.approx(RISK_UNITS_K / math.sqrt(2e-4))
