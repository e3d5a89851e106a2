from __future__ import annotations

from dataclasses import dataclass, replace
import logging
from typing import Any, Sequence

from gridwise_plot.scales import (
    AxisKind,
    CategoricalSingle,
    NumericSingle,
    NumericSplit,
    classify_scale,
)


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Axis:
    """One chart dimension ready for layout.

    ``fraction`` is the share of this axis' length on the positive side of its
    zero crossing. ``cross_fraction`` is the same quantity for the other axis;
    it decides where this axis' own line sits.
    """

    kind: AxisKind
    fraction: float = 1.0
    cross_fraction: float = 1.0
    label: str | None = None
    caption: str | None = None
    clean: bool = False

    def __post_init__(self) -> None:
        if not 0.0 <= self.fraction <= 1.0:
            raise ValueError("fraction must be in [0, 1]")
        if not 0.0 <= self.cross_fraction <= 1.0:
            raise ValueError("cross_fraction must be in [0, 1]")

    @property
    def is_split(self) -> bool:
        return isinstance(self.kind, NumericSplit)

    @property
    def is_categorical(self) -> bool:
        return isinstance(self.kind, CategoricalSingle)

    def with_label(self, label: str | None) -> "Axis":
        return replace(self, label=label)

    def with_caption(self, caption: str | None) -> "Axis":
        return replace(self, caption=caption)

    def with_clean(self, clean: bool) -> "Axis":
        return replace(self, clean=bool(clean))

    def cache_key(self) -> tuple[Any, ...]:
        return (self.kind, self.fraction, self.cross_fraction, self.label, self.caption, self.clean)


def zero_fraction(kind: AxisKind) -> float:
    if isinstance(kind, CategoricalSingle):
        return 1.0
    if isinstance(kind, NumericSingle):
        return 0.0 if kind.is_negative else 1.0
    shared = 1 if kind.shares_zero else 0
    positive_slots = len(kind.positives) - shared
    total_slots = len(kind.positives) + len(kind.negatives) - shared
    return positive_slots / total_slots


def build_axis(
    scale: Sequence[Any],
    *,
    sequential: bool = False,
    label: str | None = None,
    caption: str | None = None,
    clean: bool = False,
    cross_fraction: float = 1.0,
) -> Axis:
    kind = classify_scale(scale, sequential=sequential)
    return Axis(
        kind=kind,
        fraction=zero_fraction(kind),
        cross_fraction=cross_fraction,
        label=label,
        caption=caption,
        clean=clean,
    )


def build_axes(
    x_scale: Sequence[Any],
    y_scale: Sequence[Any],
    *,
    sequential_x: bool = False,
    sequential_y: bool = False,
    clean: bool = False,
    x_label: str | None = None,
    y_label: str | None = None,
    caption: str | None = None,
    horizontal: bool = False,
) -> tuple[Axis, Axis]:
    """Build the horizontal and vertical axes of one chart.

    With ``horizontal`` the data's x scale is laid out on the vertical axis and
    the y scale on the horizontal one.
    """

    if horizontal:
        x_scale, y_scale = y_scale, x_scale
        sequential_x, sequential_y = sequential_y, sequential_x
        x_label, y_label = y_label, x_label

    x_axis = build_axis(x_scale, sequential=sequential_x, label=x_label, caption=caption, clean=clean)
    y_axis = build_axis(y_scale, sequential=sequential_y, label=y_label, clean=clean)
    x_axis = replace(x_axis, cross_fraction=y_axis.fraction)
    y_axis = replace(y_axis, cross_fraction=x_axis.fraction)
    LOGGER.debug(
        "built axes x=%s (fraction %.3f) y=%s (fraction %.3f)",
        type(x_axis.kind).__name__,
        x_axis.fraction,
        type(y_axis.kind).__name__,
        y_axis.fraction,
    )
    return x_axis, y_axis
