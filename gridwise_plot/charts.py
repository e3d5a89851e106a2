from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Mapping, Sequence, TypeAlias

from gridwise_plot.output import DrawnOutput
from gridwise_plot.raster.canvas import RGBA
from gridwise_plot.raster.surface import Bounds, Surface


LOGGER = logging.getLogger(__name__)

MAX_BAR_WIDTH_PX = 50.0
MAX_LEGEND_ROWS = 6
LEGEND_SWATCH_PX = 12.0
LEGEND_ROW_PX = 17.0
LEGEND_TEXT_GAP_PX = 5.0
LEGEND_FONT_PX = 12.0
DEFAULT_ITEM_COLOR: RGBA = (0, 0, 0, 255)


@dataclass(frozen=True)
class ChartOptions:
    """Per-render data shared by every item of one chart."""

    horizontal: bool = False
    legend_owner: int = 0


DEFAULT_OPTIONS = ChartOptions()


@dataclass(frozen=True)
class GraphLine:
    points: tuple[tuple[Any, Any], ...]
    color: RGBA = DEFAULT_ITEM_COLOR
    label: str | None = None
    line_width: int = 2
    marker_size: int = 5

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", tuple((x, y) for x, y in self.points))
        if self.line_width <= 0:
            raise ValueError("line_width must be > 0")
        if self.marker_size < 0:
            raise ValueError("marker_size must be >= 0")


@dataclass(frozen=True)
class GraphBar:
    x: Any
    y: Any
    color: RGBA = DEFAULT_ITEM_COLOR
    label: str | None = None


@dataclass(frozen=True)
class GraphStackedBar:
    """One stacked bar; ``fractions`` and ``colors`` are keyed by segment label."""

    id: int
    x: Any
    y: Any
    fractions: tuple[tuple[str, float], ...] = ()
    colors: tuple[tuple[str, RGBA], ...] = ()

    def __post_init__(self) -> None:
        fractions = tuple(_pairs(self.fractions))
        for name, fraction in fractions:
            if fraction < 0:
                raise ValueError(f"fraction for {name!r} must be >= 0")
        object.__setattr__(self, "fractions", fractions)
        object.__setattr__(self, "colors", tuple(_pairs(self.colors)))

    def color_of(self, name: str) -> RGBA:
        return dict(self.colors).get(name, DEFAULT_ITEM_COLOR)


ChartItem: TypeAlias = GraphLine | GraphBar | GraphStackedBar


def _pairs(values: Mapping[str, Any] | Sequence[tuple[str, Any]]) -> list[tuple[str, Any]]:
    if isinstance(values, Mapping):
        return list(values.items())
    return [(name, value) for name, value in values]


def item_label(item: ChartItem) -> str | None:
    if isinstance(item, (GraphLine, GraphBar)):
        return item.label
    if isinstance(item, GraphStackedBar):
        return None
    raise TypeError(f"Unsupported chart item: {type(item)!r}")


def should_appear_in_legend(item: ChartItem, options: ChartOptions = DEFAULT_OPTIONS) -> bool:
    if isinstance(item, GraphStackedBar):
        return item.id == options.legend_owner and bool(item.colors)
    label = item_label(item)
    return label is not None and bool(label.strip())


def legend_row_count(item: ChartItem) -> int:
    if isinstance(item, GraphStackedBar):
        return len(item.colors)
    return 1


def _resolve(x: Any, y: Any, x_out: DrawnOutput, y_out: DrawnOutput, options: ChartOptions) -> tuple[float, float] | None:
    if options.horizontal:
        px = x_out.get_closest(y)
        py = y_out.get_closest(x)
    else:
        px = x_out.get_closest(x)
        py = y_out.get_closest(y)
    if px is None or py is None:
        return None
    return (px, py)


def _bar_width(category_out: DrawnOutput) -> float:
    gap = category_out.min_gap()
    if gap is None:
        return MAX_BAR_WIDTH_PX
    return min(gap / 2.0, MAX_BAR_WIDTH_PX)


def draw_item(
    surface: Surface,
    item: ChartItem,
    x_out: DrawnOutput,
    y_out: DrawnOutput,
    options: ChartOptions = DEFAULT_OPTIONS,
) -> None:
    if isinstance(item, GraphLine):
        _draw_line(surface, item, x_out, y_out, options)
    elif isinstance(item, GraphBar):
        _draw_bar(surface, item, x_out, y_out, options)
    elif isinstance(item, GraphStackedBar):
        _draw_stacked_bar(surface, item, x_out, y_out, options)
    else:
        raise TypeError(f"Unsupported chart item: {type(item)!r}")


def _draw_line(surface: Surface, item: GraphLine, x_out: DrawnOutput, y_out: DrawnOutput, options: ChartOptions) -> None:
    resolved: list[tuple[float, float]] = []
    for x, y in item.points:
        point = _resolve(x, y, x_out, y_out, options)
        if point is None:
            LOGGER.warning("line point (%s, %s) not found on axes; skipping", x, y)
            continue
        resolved.append(point)

    for (xa, ya), (xb, yb) in zip(resolved, resolved[1:], strict=False):
        surface.stroke_line(xa, ya, xb, yb, item.color, item.line_width)
    if item.marker_size > 0:
        half = item.marker_size / 2.0
        for px, py in resolved:
            surface.fill_rect(px - half, py - half, item.marker_size, item.marker_size, item.color)


def _draw_bar(surface: Surface, item: GraphBar, x_out: DrawnOutput, y_out: DrawnOutput, options: ChartOptions) -> None:
    point = _resolve(item.x, item.y, x_out, y_out, options)
    if point is None:
        LOGGER.warning("bar point (%s, %s) not found on axes; skipping", item.x, item.y)
        return
    px, py = point
    if options.horizontal:
        thickness = _bar_width(y_out)
        base = y_out.axis_pos
        surface.fill_rect(min(base, px), py - thickness / 2.0, abs(px - base), thickness, item.color)
    else:
        thickness = _bar_width(x_out)
        base = x_out.axis_pos
        surface.fill_rect(px - thickness / 2.0, min(base, py), thickness, abs(base - py), item.color)


def _draw_stacked_bar(
    surface: Surface,
    item: GraphStackedBar,
    x_out: DrawnOutput,
    y_out: DrawnOutput,
    options: ChartOptions,
) -> None:
    point = _resolve(item.x, item.y, x_out, y_out, options)
    if point is None:
        LOGGER.warning("stacked bar point (%s, %s) not found on axes; skipping", item.x, item.y)
        return
    px, py = point
    # largest segment sits on the axis line
    segments = sorted(item.fractions, key=lambda pair: pair[1], reverse=True)

    if options.horizontal:
        thickness = _bar_width(y_out)
        cursor = y_out.axis_pos
        extent = px - cursor
        for name, fraction in segments:
            length = fraction * extent
            surface.fill_rect(min(cursor, cursor + length), py - thickness / 2.0, abs(length), thickness, item.color_of(name))
            cursor += length
    else:
        thickness = _bar_width(x_out)
        cursor = x_out.axis_pos
        extent = py - cursor
        for name, fraction in segments:
            length = fraction * extent
            surface.fill_rect(px - thickness / 2.0, min(cursor, cursor + length), thickness, abs(length), item.color_of(name))
            cursor += length


def draw_item_legend(
    surface: Surface,
    item: ChartItem,
    bounds: Bounds,
    color: RGBA,
    index: int,
    options: ChartOptions = DEFAULT_OPTIONS,
) -> int:
    """Paint the legend rows of ``item`` starting at row ``index`` inside ``bounds``.

    ``color`` is the legend text colour. Returns the number of rows drawn.
    """

    if isinstance(item, GraphStackedBar):
        rows = list(item.colors)
    elif isinstance(item, (GraphLine, GraphBar)):
        rows = [(item.label or "", item.color)]
    else:
        raise TypeError(f"Unsupported chart item: {type(item)!r}")

    drawn = 0
    for name, swatch in rows:
        row = index + drawn
        if row >= MAX_LEGEND_ROWS:
            break
        y = bounds.y + row * LEGEND_ROW_PX
        surface.fill_rect(bounds.x, y, LEGEND_SWATCH_PX, LEGEND_SWATCH_PX, swatch)
        surface.fill_text(
            bounds.x + LEGEND_SWATCH_PX + LEGEND_TEXT_GAP_PX,
            y + LEGEND_SWATCH_PX / 2.0,
            name,
            color,
            size_px=LEGEND_FONT_PX,
            valign="center",
        )
        drawn += 1
    return drawn
