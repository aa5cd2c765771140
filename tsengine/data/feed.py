"""
Dataset rows → numeric columns.

Datasets arrive as JSON documents whose ``dataset_data.data`` holds rows of
``[date, open, high, low, last, change, settle, volume, open_interest]``.
Null cells become NaN here so the engine only ever sees floats.
"""
import json
import math
from enum import IntEnum
from typing import Any, Dict, List, Sequence, Union

import pandas as pd

from ..shared.errors import InvalidConstruction


class DatasetColumn(IntEnum):
    """Column positions of a dataset row."""
    DATE = 0
    OPEN = 1
    HIGH = 2
    LOW = 3
    LAST = 4
    CHANGE = 5
    SETTLE = 6
    VOLUME = 7
    OPEN_INTEREST = 8


def parse_dataset(document: Union[str, bytes, Dict[str, Any]]) -> List[Sequence[Any]]:
    """
    Rows of a dataset document.

    Raises:
        ValueError: If the document has no ``dataset_data.data`` rows
    """
    if isinstance(document, (str, bytes)):
        document = json.loads(document)
    try:
        return document["dataset_data"]["data"]
    except (KeyError, TypeError):
        raise ValueError("Dataset document has no dataset_data.data rows") from None


def _to_float(cell: Any) -> float:
    if cell is None:
        return math.nan
    return float(cell)


def extract_column(rows: Sequence[Sequence[Any]], column: DatasetColumn) -> List[float]:
    """
    Numeric values of ``column`` with nulls converted to NaN.

    Raises:
        InvalidConstruction: For the (non-numeric) DATE column
    """
    if column == DatasetColumn.DATE:
        raise InvalidConstruction("DATE is not a numeric column")
    return [_to_float(row[column]) for row in rows]


def column_mapping(rows: Sequence[Sequence[Any]], column: DatasetColumn) -> Dict[int, float]:
    """``epoch -> value`` mapping of ``column``, ready for TimeSeries.build."""
    values = extract_column(rows, column)
    epochs = [int(pd.Timestamp(row[DatasetColumn.DATE]).timestamp()) for row in rows]
    return dict(zip(epochs, values))
