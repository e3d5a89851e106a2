from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import Any

from gridwise_plot.scales import ScaleValue, numeric_kind


@dataclass(frozen=True)
class DrawnOutput:
    """Result of laying out one axis against a concrete surface size.

    ``record`` maps every placed domain value to its pixel offset along the
    axis, in placement order. ``spacing`` and ``step`` describe the last pair of
    neighbouring numeric ticks (pixels and domain units respectively) and are
    ``0`` when no such pair exists. ``run_steps`` keeps the ``(step, spacing)``
    pair of each run keyed by its sign, ``1`` for values at or above zero and
    ``-1`` for values below it, so the two sides of a split axis interpolate
    with their own units.
    """

    record: dict[ScaleValue, float] = field(default_factory=dict)
    axis_pos: float = 0.0
    spacing: float = 0.0
    step: float = 0.0
    is_x_axis: bool = True
    outline_density: int = 1
    run_steps: dict[int, tuple[float, float]] = field(default_factory=dict)

    def get_closest(self, value: Any, is_x_axis: bool | None = None) -> float | None:
        """Pixel offset for ``value``, interpolated from the nearest tick when absent.

        Returns ``None`` when the value has no exact tick and cannot be
        interpolated: the axis has no numeric step, the value is not a finite
        number, or no tick shares its numeric subtype.
        """

        exact = self.record.get(value)
        if exact is not None:
            return exact
        if self.step == 0:
            return None
        kind = numeric_kind(value)
        if kind is None or not math.isfinite(value):
            return None

        closest = None
        closest_dist = 0.0
        for key in self.record:
            if numeric_kind(key) is not kind:
                continue
            dist = abs(value - key)
            # ties go to the lower key
            if closest is None or dist < closest_dist or (dist == closest_dist and key < closest):
                closest = key
                closest_dist = dist
        if closest is None:
            return None

        step, spacing = self.run_steps.get(-1 if value < 0 else 1, (0.0, 0.0))
        if step == 0:
            step, spacing = self.step, self.spacing
        ratio = float(value - closest) / step
        horizontal = self.is_x_axis if is_x_axis is None else is_x_axis
        pixel = self.record[closest]
        pixel = pixel + ratio * spacing if horizontal else pixel - ratio * spacing
        if not math.isfinite(pixel):
            return None
        return pixel

    def min_gap(self) -> float | None:
        """Smallest pixel distance between two recorded ticks."""

        pixels = sorted(self.record.values())
        gaps = [b - a for a, b in zip(pixels, pixels[1:], strict=False) if b > a]
        if not gaps:
            return None
        return min(gaps)
