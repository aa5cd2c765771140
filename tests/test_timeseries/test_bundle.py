"""
Tests for TimeSeriesBundle.
"""
import pandas as pd
import pytest

from tsengine.timeseries import TimeSeries, TimeSeriesBundle, NaNPolicy
from tsengine.shared.errors import EpochNotFound, IncompatibleSeries, SeriesNotFound


@pytest.fixture
def series():
    return TimeSeries.build({5000: 2.0, 5001: 4.0, 5002: -1.0}, NaNPolicy.KEEP)


def test_first_series_sets_index(series):
    bundle = TimeSeriesBundle()
    assert dict(bundle.index) == {}
    bundle.add("values", series)
    assert dict(bundle.index) == {5000: 0, 5001: 1, 5002: 2}
    assert bundle.get("values") is series
    assert "values" in bundle
    assert len(bundle) == 1


def test_value_lookup(series):
    bundle = TimeSeriesBundle()
    bundle.add("values", series)
    assert bundle.value("values", 5000) == 2.0
    with pytest.raises(EpochNotFound):
        bundle.value("values", 5003)


def test_unknown_name(series):
    bundle = TimeSeriesBundle()
    bundle.add("values", series)
    with pytest.raises(SeriesNotFound, match="unknown"):
        bundle.get("unknown")
    with pytest.raises(LookupError):
        bundle.value("unknown", 5000)


def test_rejects_different_index(series):
    bundle = TimeSeriesBundle()
    bundle.add("values", series)
    other = TimeSeries.build({5000: 2.0, 5001: 4.0, 5003: -1.0}, NaNPolicy.KEEP)
    with pytest.raises(IncompatibleSeries):
        bundle.add("other", other)
    assert bundle.names == ["values"]


def test_accepts_co_indexed_series(series):
    bundle = TimeSeriesBundle()
    bundle.add("values", series)
    bundle.add("doubled", series.apply(lambda v: 2 * v))
    frame = bundle.to_frame()
    assert list(frame.columns) == ["values", "doubled"]
    assert list(frame["doubled"]) == [4.0, 8.0, -2.0]


def test_empty_series_does_not_fix_index(series):
    bundle = TimeSeriesBundle()
    bundle.add("empty", TimeSeries.build({}, NaNPolicy.KEEP))
    bundle.add("values", series)
    assert dict(bundle.index) == {5000: 0, 5001: 1, 5002: 2}


def test_to_frame_one_column_per_series():
    bundle = TimeSeriesBundle()
    bundle.add("close", TimeSeries.build({10: 1.0, 20: None, 30: 3.0}, NaNPolicy.KEEP))
    bundle.add("volume", TimeSeries.build({10: 100.0, 20: 200.0, 30: 300.0}, NaNPolicy.KEEP))
    frame = bundle.to_frame()
    assert isinstance(frame, pd.DataFrame)
    assert list(frame.columns) == ["close", "volume"]
    assert list(frame.index) == [10, 20, 30]
    assert frame["close"].isna().tolist() == [False, True, False]
    assert frame.loc[30, "volume"] == 300.0


def test_to_frame_of_empty_bundle():
    assert TimeSeriesBundle().to_frame().empty
