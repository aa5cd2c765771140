"""
Signal pipeline: prices → indicator → signals → positions.
"""
import logging
from typing import Iterable, Iterator, List, Mapping

import pandas as pd

from .config import SystemConfig
from .sizing import PositionSizer
from .systems import build_signals
from ..shared.types import DataType, PositionRecord, PriceRecord
from ..timeseries.series import TimeSeries


logger = logging.getLogger(__name__)


def run_pipeline(prices: Iterable[PriceRecord], config: SystemConfig) -> PositionSizer:
    """Lazily size positions for ``prices`` with the system described by ``config``."""
    logger.info(
        f"Running {config.name}: {config.system.name}{tuple(config.parameters)} "
        f"volatility_depth={config.volatility_depth}"
    )
    signals = build_signals(prices, config.system, config.parameters)
    return PositionSizer(signals, config.volatility_depth, config.risk_units)


def series_prices(series: TimeSeries, data_type: DataType = DataType.CLOSE) -> Iterator[PriceRecord]:
    """PriceRecord stream over a materialised series, in epoch order."""
    for epoch, value in series:
        yield PriceRecord(timestamp=epoch, value=value, type=data_type)


def run_on_mapping(mapping: Mapping[int, float], config: SystemConfig) -> PositionSizer:
    """
    Build a TimeSeries from an ``epoch -> price`` mapping with the config's
    NaN policy, then run the pipeline over it.
    """
    series = TimeSeries.build(mapping, config.nan_policy)
    if series.has_missing:
        logger.warning(f"{config.name}: price series keeps missing values ({config.nan_policy.value})")
    return run_pipeline(list(series_prices(series)), config)


def positions_frame(positions: Iterable[PositionRecord]) -> pd.DataFrame:
    """Materialise a position stream into a DataFrame indexed by timestamp."""
    rows: List[dict] = [
        {
            "timestamp": p.timestamp,
            "price": p.price,
            "signal": p.signal.value,
            "nominal": p.nominal,
            "variance": p.variance,
        }
        for p in positions
    ]
    frame = pd.DataFrame(rows, columns=["timestamp", "price", "signal", "nominal", "variance"])
    logger.info(f"Materialised {len(frame)} positions")
    return frame.set_index("timestamp")
