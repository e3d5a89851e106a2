from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
import math
from typing import Any, Iterable, Sequence, TypeAlias

import numpy as np

from gridwise_plot.errors import EmptyScaleError, PlotDataError


class Count(int):
    """Synthetic axis position produced for sequential scales."""

    def __repr__(self) -> str:
        return f"Count({int(self)})"


ScaleValue: TypeAlias = str | int | float


class NumericKind(Enum):
    INTEGER = "integer"
    FLOAT = "float"
    COUNT = "count"


@dataclass(frozen=True)
class CategoricalSingle:
    points: tuple[str, ...]


@dataclass(frozen=True)
class NumericSingle:
    points: tuple[int | float, ...]

    @property
    def is_negative(self) -> bool:
        return bool(self.points) and self.points[0] < 0

    @property
    def shares_zero(self) -> bool:
        return bool(self.points) and self.points[0] == 0


@dataclass(frozen=True)
class NumericSplit:
    positives: tuple[int | float, ...]
    negatives: tuple[int | float, ...]

    @property
    def shares_zero(self) -> bool:
        return bool(self.positives) and self.positives[0] == 0


AxisKind: TypeAlias = CategoricalSingle | NumericSingle | NumericSplit


def numeric_kind(value: Any) -> NumericKind | None:
    if isinstance(value, (bool, np.bool_)):
        return None
    if isinstance(value, Count):
        return NumericKind.COUNT
    if isinstance(value, (int, np.integer)):
        return NumericKind.INTEGER
    if isinstance(value, (float, np.floating)):
        return NumericKind.FLOAT
    return None


def classify_scale(values: Sequence[Any], *, sequential: bool = False) -> AxisKind:
    """Classify a scale as categorical or numeric and split numeric points by sign.

    Numeric partitions are ordered by magnitude outward from zero: positives
    ascending, negatives descending. With ``sequential`` each partition is
    replaced by a dense run of :class:`Count` positions of the same length.
    """

    items = [_to_python(v) for v in values]
    if not items:
        raise EmptyScaleError("scale must contain at least one value")

    labels = [v for v in items if isinstance(v, str)]
    if len(labels) == len(items):
        return CategoricalSingle(points=tuple(_unique(labels)))
    if labels:
        raise PlotDataError(f"scale mixes labels and numbers: {labels[0]!r}")

    kinds = set()
    for v in items:
        kind = numeric_kind(v)
        if kind is None:
            raise PlotDataError(f"unsupported scale value: {v!r}")
        kinds.add(kind)
    if NumericKind.FLOAT in kinds:
        items = [float(v) for v in items]
    elif len(kinds) > 1:
        items = [int(v) for v in items]

    for v in items:
        if isinstance(v, float) and not math.isfinite(v):
            raise PlotDataError(f"scale contains non-finite value: {v!r}")

    positives = sorted(_unique(v for v in items if v >= 0))
    negatives = sorted(_unique(v for v in items if v < 0), reverse=True)

    if sequential:
        positives = [Count(i) for i in range(len(positives))]
        negatives = [Count(-i) for i in range(1, len(negatives) + 1)]

    if positives and negatives:
        return NumericSplit(positives=tuple(positives), negatives=tuple(negatives))
    if positives:
        return NumericSingle(points=tuple(positives))
    return NumericSingle(points=tuple(negatives))


def sequential_positions(values: Sequence[Any]) -> dict[Any, Count]:
    """Map each numeric value to the :class:`Count` a sequential scale gives it."""

    kind = classify_scale(values)
    if isinstance(kind, CategoricalSingle):
        return {label: Count(i) for i, label in enumerate(kind.points)}
    if isinstance(kind, NumericSplit):
        positives, negatives = kind.positives, kind.negatives
    elif kind.is_negative:
        positives, negatives = (), kind.points
    else:
        positives, negatives = kind.points, ()
    out: dict[Any, Count] = {v: Count(i) for i, v in enumerate(positives)}
    out.update({v: Count(-i) for i, v in enumerate(negatives, start=1)})
    return out


def axis_points(kind: AxisKind) -> tuple[ScaleValue, ...]:
    if isinstance(kind, NumericSplit):
        return kind.positives + kind.negatives
    return kind.points


def tick_slots(kind: AxisKind) -> int:
    """Number of tick positions away from the origin needed to place every point."""

    if isinstance(kind, CategoricalSingle):
        return len(kind.points)
    if isinstance(kind, NumericSingle):
        return len(kind.points) - (1 if kind.shares_zero else 0)
    return len(kind.positives) + len(kind.negatives) - (1 if kind.shares_zero else 0)


def format_value(value: ScaleValue) -> str:
    if isinstance(value, str):
        return value
    if numeric_kind(value) in (NumericKind.INTEGER, NumericKind.COUNT):
        return str(int(value))
    return format_tick(float(value))


def format_tick(value: float, *, decimals: int = 6) -> str:
    if not np.isfinite(value):
        return str(value)
    abs_v = abs(value)
    if abs_v != 0 and (abs_v >= 1e6 or abs_v < 1e-6):
        return f"{value:.4e}"

    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def _to_python(value: Any) -> Any:
    if isinstance(value, np.generic):
        return value.item()
    return value


def _unique(values: Iterable[Any]) -> list[Any]:
    return list(dict.fromkeys(values))
