from __future__ import annotations

from dataclasses import asdict, dataclass
import logging
from typing import Any, Mapping, Sequence

from gridwise_plot.axis import Axis
from gridwise_plot.output import DrawnOutput
from gridwise_plot.raster.surface import Surface
from gridwise_plot.scales import (
    CategoricalSingle,
    NumericSingle,
    ScaleValue,
    format_value,
    numeric_kind,
    tick_slots,
)
from gridwise_plot.style import DEFAULT_STYLE, StyleTokens


LOGGER = logging.getLogger(__name__)

AXIS_THICKNESS = 2
OUTLINE_THICKNESS = 1
MINOR_OUTLINE_ALPHA = 110


@dataclass(frozen=True)
class LayoutConfig:
    """Surface partition ratios and tick density thresholds."""

    x_padding_ratio: float = 0.05
    x_offset_in_ratio: float = 0.045
    x_offset_out_ratio: float = 0.025
    y_padding_top_ratio: float = 0.025
    y_padding_bottom_ratio: float = 0.0625
    y_offset_ratio: float = 0.025
    stump_ratio: float = 0.01
    sparse_dx_px: float = 50.0
    wide_dx_px: float = 250.0


DEFAULT_LAYOUT = LayoutConfig()

_RATIO_KEYS = (
    "x_padding_ratio",
    "x_offset_in_ratio",
    "x_offset_out_ratio",
    "y_padding_top_ratio",
    "y_padding_bottom_ratio",
    "y_offset_ratio",
    "stump_ratio",
)


def validate_layout_config(overrides: Mapping[str, Any] | None = None) -> LayoutConfig:
    raw: dict[str, Any] = asdict(DEFAULT_LAYOUT)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown layout setting: {key}")
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Layout setting `{key}` must be a number")
            raw[key] = float(value)

    for key in _RATIO_KEYS:
        if not 0.0 <= raw[key] < 0.25:
            raise ValueError(f"Layout setting `{key}` must be in [0, 0.25)")
    if raw["sparse_dx_px"] <= 0 or raw["wide_dx_px"] <= raw["sparse_dx_px"]:
        raise ValueError("Layout thresholds must satisfy 0 < sparse_dx_px < wide_dx_px")
    return LayoutConfig(**raw)


def outline_density(dx: float, config: LayoutConfig = DEFAULT_LAYOUT) -> int:
    """Outlines drawn per tick for a given tick spacing in pixels."""

    if dx < config.sparse_dx_px:
        return 1
    if dx < config.wide_dx_px:
        return 5
    return 10


@dataclass(frozen=True)
class AxisGeometry:
    width: float
    height: float
    x_start: float
    x_length: float
    x_run_start: float
    x_run_length: float
    y_top: float
    y_length: float
    y_run_top: float
    y_run_length: float
    y_padding_bottom: float
    stump: float

    @classmethod
    def from_size(cls, width: float, height: float, config: LayoutConfig = DEFAULT_LAYOUT) -> "AxisGeometry":
        if width < 2 or height < 2:
            raise ValueError("surface width/height must be >= 2")
        x_padding = config.x_padding_ratio * width
        x_length = width - 2.0 * x_padding
        x_offset_in = config.x_offset_in_ratio * x_length
        x_offset_out = config.x_offset_out_ratio * x_length

        y_padding_top = config.y_padding_top_ratio * height
        y_padding_bottom = config.y_padding_bottom_ratio * height
        y_length = height - y_padding_top - y_padding_bottom
        y_offset = config.y_offset_ratio * y_length

        return cls(
            width=float(width),
            height=float(height),
            x_start=x_padding,
            x_length=x_length,
            x_run_start=x_padding + x_offset_in,
            x_run_length=x_length - x_offset_in - x_offset_out,
            y_top=y_padding_top,
            y_length=y_length,
            y_run_top=y_padding_top + y_offset,
            y_run_length=y_length - 2.0 * y_offset,
            y_padding_bottom=y_padding_bottom,
            stump=config.stump_ratio * height,
        )

    def run_length(self, is_x_axis: bool) -> float:
        return self.x_run_length if is_x_axis else self.y_run_length

    def axis_line_pos(self, is_x_axis: bool, cross_fraction: float) -> float:
        if is_x_axis:
            return self.y_run_top + cross_fraction * self.y_run_length
        return self.x_run_start + (1.0 - cross_fraction) * self.x_run_length

    def zero_crossing(self, is_x_axis: bool, fraction: float) -> float:
        if is_x_axis:
            return self.x_run_start + (1.0 - fraction) * self.x_run_length
        return self.y_run_top + fraction * self.y_run_length


@dataclass(frozen=True)
class _Run:
    points: Sequence[ScaleValue]
    direction: float
    length: float
    shared: bool
    seed: ScaleValue | None = None
    sign: int = 1


class _StepTracker:
    def __init__(self) -> None:
        self.step = 0.0
        self.spacing = 0.0
        self.by_sign: dict[int, tuple[float, float]] = {}
        self._prev: tuple[ScaleValue, float] | None = None
        self._prev_prev: tuple[ScaleValue, float] | None = None

    def begin(self, seed: tuple[ScaleValue, float] | None = None) -> None:
        self._prev = seed
        self._prev_prev = None

    def add(self, value: ScaleValue, pixel: float) -> None:
        if numeric_kind(value) is None:
            return
        self._prev_prev, self._prev = self._prev, (value, pixel)

    def end(self, sign: int = 1) -> None:
        if self._prev is None or self._prev_prev is None:
            return
        (value, pixel), (prev_value, prev_pixel) = self._prev, self._prev_prev
        if numeric_kind(value) is not numeric_kind(prev_value):
            return
        self.step = float(abs(value - prev_value))
        self.spacing = abs(pixel - prev_pixel)
        self.by_sign[sign] = (self.step, self.spacing)


class _AxisPainter:
    def __init__(self, surface: Surface, geometry: AxisGeometry, style: StyleTokens, axis: Axis, is_x_axis: bool, axis_pos: float) -> None:
        self.surface = surface
        self.g = geometry
        self.style = style
        self.axis = axis
        self.is_x_axis = is_x_axis
        self.axis_pos = axis_pos
        self.axis_color = style.rgba("axis_color")
        self.outline_color = style.rgba("outline_color")
        r, g, b, _ = self.outline_color
        self.minor_color = (r, g, b, MINOR_OUTLINE_ALPHA)
        self.text_color = style.rgba("text_color")
        self.label_color = style.rgba("label_color")

    def axis_line(self) -> None:
        g = self.g
        if self.is_x_axis:
            self.surface.stroke_line(g.x_start, self.axis_pos, g.x_start + g.x_length, self.axis_pos, self.axis_color, AXIS_THICKNESS)
        else:
            self.surface.stroke_line(self.axis_pos, g.y_top, self.axis_pos, g.y_top + g.y_length, self.axis_color, AXIS_THICKNESS)

    def gridline(self, pos: float, *, major: bool) -> None:
        if not major and self.axis.clean:
            return
        g = self.g
        color = self.outline_color if major else self.minor_color
        if self.is_x_axis:
            self.surface.stroke_line(pos, g.y_top, pos, g.y_top + g.y_length, color, OUTLINE_THICKNESS)
        else:
            self.surface.stroke_line(g.x_start, pos, g.x_start + g.x_length, pos, color, OUTLINE_THICKNESS)

    def tick(self, value: ScaleValue, pos: float) -> None:
        self.gridline(pos, major=True)
        stump = self.g.stump
        text = format_value(value)
        size = self.style.point_font_px
        if self.is_x_axis:
            self.surface.stroke_line(pos, self.axis_pos, pos, self.axis_pos + stump, self.axis_color, AXIS_THICKNESS)
            self.surface.fill_text(pos, self.axis_pos + stump + 2.0, text, self.text_color, size_px=size, halign="center")
        else:
            self.surface.stroke_line(self.axis_pos - stump, pos, self.axis_pos, pos, self.axis_color, AXIS_THICKNESS)
            self.surface.fill_text(
                self.axis_pos - stump - 3.0,
                pos,
                text,
                self.text_color,
                size_px=size,
                halign="right",
                valign="center",
            )

    def captions(self) -> None:
        g = self.g
        if self.is_x_axis:
            y = g.height - 0.5 * g.y_padding_bottom
            if self.axis.label:
                x = g.x_run_start + 0.5 * g.x_run_length
                self.surface.fill_text(
                    x, y, self.axis.label, self.label_color, size_px=self.style.label_font_px, halign="center", valign="center"
                )
            if self.axis.caption:
                x = g.x_run_start + 0.8 * g.x_run_length
                self.surface.fill_text(
                    x,
                    y,
                    self.axis.caption,
                    self.label_color,
                    size_px=self.style.caption_font_px,
                    halign="center",
                    valign="center",
                    italic=True,
                )
        elif self.axis.label:
            x = 0.5 * g.x_start
            y = g.y_top + 0.5 * g.y_length
            self.surface.fill_text(
                x,
                y,
                self.axis.label,
                self.label_color,
                size_px=self.style.label_font_px,
                halign="center",
                valign="center",
                rotate_deg=90,
            )


def layout_axis(
    axis: Axis,
    width: float,
    height: float,
    *,
    is_x_axis: bool,
    surface: Surface | None = None,
    style: StyleTokens = DEFAULT_STYLE,
    config: LayoutConfig = DEFAULT_LAYOUT,
) -> DrawnOutput:
    """Place every point of ``axis`` on a ``width`` x ``height`` surface.

    Ticks are walked outward from the axis origin (the zero crossing for
    numeric axes) in micro-increments of ``dx / density``; every
    ``density``-th increment takes the next point. Split axes walk the
    positive run first, then the negative run. When ``surface`` is given the
    axis line, ticks, gridlines, label and caption are painted on it.
    """

    geometry = AxisGeometry.from_size(width, height, config)
    kind = axis.kind
    run_length = geometry.run_length(is_x_axis)
    slots = tick_slots(kind)
    dx = run_length / slots if slots > 0 else run_length
    density = outline_density(dx, config)
    axis_pos = geometry.axis_line_pos(is_x_axis, axis.cross_fraction)
    origin = geometry.zero_crossing(is_x_axis, axis.fraction)
    # pixel direction in which domain values grow
    forward = 1.0 if is_x_axis else -1.0

    if isinstance(kind, CategoricalSingle):
        runs = [_Run(points=kind.points, direction=forward, length=run_length, shared=False)]
    elif isinstance(kind, NumericSingle):
        direction = -forward if kind.is_negative else forward
        runs = [
            _Run(
                points=kind.points,
                direction=direction,
                length=run_length,
                shared=kind.shares_zero,
                sign=-1 if kind.is_negative else 1,
            )
        ]
    else:
        positive_length = axis.fraction * run_length
        seed = kind.positives[0] if kind.shares_zero else None
        runs = [
            _Run(points=kind.positives, direction=forward, length=positive_length, shared=kind.shares_zero),
            _Run(points=kind.negatives, direction=-forward, length=run_length - positive_length, shared=False, seed=seed, sign=-1),
        ]

    painter = _AxisPainter(surface, geometry, style, axis, is_x_axis, axis_pos) if surface is not None else None
    if painter is not None:
        painter.axis_line()

    record: dict[ScaleValue, float] = {}
    tracker = _StepTracker()

    def place(value: ScaleValue, pos: float) -> None:
        record[value] = pos
        tracker.add(value, pos)
        if painter is not None:
            painter.tick(value, pos)

    for run in runs:
        tracker.begin((run.seed, origin) if run.seed is not None else None)
        points = iter(run.points)
        if run.shared:
            place(next(points), origin)
        run_slots = len(run.points) - (1 if run.shared else 0)
        if run_slots > 0:
            micro = (run.length / run_slots) / density
            for count in range(1, run_slots * density + 1):
                pos = origin + run.direction * count * micro
                if count % density == 0:
                    place(next(points), pos)
                elif painter is not None:
                    painter.gridline(pos, major=False)
        tracker.end(run.sign)

    if painter is not None:
        painter.captions()

    LOGGER.debug(
        "laid out %s axis: %d ticks, dx=%.2f density=%d step=%s spacing=%.2f",
        "x" if is_x_axis else "y",
        len(record),
        dx,
        density,
        tracker.step,
        tracker.spacing,
    )
    return DrawnOutput(
        record=record,
        axis_pos=axis_pos,
        spacing=tracker.spacing,
        step=tracker.step,
        is_x_axis=is_x_axis,
        outline_density=density,
        run_steps=dict(tracker.by_sign),
    )
