from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
import math
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from gridwise_plot.errors import EmptyScaleError, PlotDataError
from gridwise_plot.scales import ScaleValue


def coerce_scale(values: Any, *, label: str = "scale") -> tuple[ScaleValue, ...]:
    """Turn a list, 1-D numpy array or pandas Series into plain scale values."""

    if isinstance(values, pd.DataFrame):
        raise PlotDataError(f"{label} must be 1-D, got a DataFrame")
    if isinstance(values, pd.Series):
        arr = values.to_numpy()
    elif isinstance(values, np.ndarray):
        arr = values
    elif isinstance(values, Sequence) and not isinstance(values, (str, bytes, bytearray)):
        arr = np.asarray(values, dtype=object)
    else:
        raise PlotDataError(f"unsupported {label} input type: {type(values)!r}")

    if arr.ndim != 1:
        raise PlotDataError(f"{label} must be 1-D")
    if arr.size == 0:
        raise EmptyScaleError(f"{label} is empty")

    out: list[ScaleValue] = []
    for i, raw in enumerate(arr.tolist()):
        out.append(_coerce_value(raw, label=label, index=i))
    return tuple(out)


def _coerce_value(raw: Any, *, label: str, index: int) -> ScaleValue:
    if raw is None or raw is pd.NA or raw is pd.NaT:
        raise PlotDataError(f"{label} has a missing value at index {index}")
    if isinstance(raw, bool):
        raise PlotDataError(f"{label} contains a boolean at index {index}: {raw!r}")
    if isinstance(raw, Decimal):
        return float(raw)
    if isinstance(raw, float) and math.isnan(raw):
        raise PlotDataError(f"{label} has a missing value at index {index}")
    if isinstance(raw, (str, int, float)):
        return raw
    return str(raw)


def read_table(path: str | Path) -> pd.DataFrame:
    try:
        return pd.read_csv(path)
    except FileNotFoundError as exc:
        raise PlotDataError(f"data file not found: {path}") from exc
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as exc:
        raise PlotDataError(f"could not parse {path}: {exc}") from exc


def scale_from_frame(frame: pd.DataFrame, column: str) -> tuple[ScaleValue, ...]:
    if column not in frame.columns:
        raise PlotDataError(f"column not found: {column}")
    return coerce_scale(frame[column], label=column)
