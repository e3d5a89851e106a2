from __future__ import annotations

from enum import Enum
import logging
import math
from typing import Sequence

from gridwise_plot.charts import (
    DEFAULT_OPTIONS,
    MAX_LEGEND_ROWS,
    ChartItem,
    ChartOptions,
    draw_item_legend,
    legend_row_count,
    should_appear_in_legend,
)
from gridwise_plot.raster.surface import Bounds, Surface
from gridwise_plot.style import DEFAULT_STYLE, StyleTokens


LOGGER = logging.getLogger(__name__)

EDGE_PADDING_RATIO = 0.01
LEGEND_WIDTH_RATIO = 0.125
LEGEND_MAX_WIDTH_PX = 150.0
LEGEND_BASE_HEIGHT_PX = 40.0
LEGEND_ROW_HEIGHT_PX = 15.0
LEGEND_MAX_SIZED_ROWS = 7
LEGEND_HEADER_PX = 25.0
LEGEND_X_PADDING_PX = 5.0


class LegendPosition(str, Enum):
    TOP_LEFT = "top-left"
    TOP_CENTER = "top-center"
    TOP_RIGHT = "top-right"
    CENTER_LEFT = "center-left"
    CENTER = "center"
    CENTER_RIGHT = "center-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_CENTER = "bottom-center"
    BOTTOM_RIGHT = "bottom-right"
    NONE = "none"

    @classmethod
    def parse(cls, text: str) -> "LegendPosition":
        key = text.strip().lower().replace("_", "-").replace(" ", "-")
        for position in cls:
            if position.value == key:
                return position
        raise ValueError(f"Unknown legend position: {text!r}")

    def position(self, bounds: Bounds, size: tuple[float, float]) -> tuple[float, float]:
        """Top-left corner of a legend box of ``size`` placed inside ``bounds``.

        ``NONE`` yields ``(inf, inf)``; callers skip drawing.
        """

        if self is LegendPosition.NONE:
            return (math.inf, math.inf)
        width, height = size
        x_pad = EDGE_PADDING_RATIO * bounds.width
        y_pad = EDGE_PADDING_RATIO * bounds.height
        corner_pad = max(x_pad, y_pad)

        horizontal, vertical = _ALIGNMENTS[self]
        pad_x = corner_pad if vertical != "center" else x_pad
        pad_y = corner_pad if horizontal != "center" else y_pad

        if horizontal == "left":
            x = bounds.x + pad_x
        elif horizontal == "right":
            x = bounds.right - width - pad_x
        else:
            x = bounds.x + 0.5 * bounds.width - 0.5 * width

        if vertical == "top":
            y = bounds.y + pad_y
        elif vertical == "bottom":
            y = bounds.bottom - height - pad_y
        else:
            y = bounds.y + 0.5 * bounds.height - 0.5 * height

        return (_clamp(x, bounds.x, bounds.right - width), _clamp(y, bounds.y, bounds.bottom - height))

    def __str__(self) -> str:
        return self.value


_ALIGNMENTS: dict[LegendPosition, tuple[str, str]] = {
    LegendPosition.TOP_LEFT: ("left", "top"),
    LegendPosition.TOP_CENTER: ("center", "top"),
    LegendPosition.TOP_RIGHT: ("right", "top"),
    LegendPosition.CENTER_LEFT: ("left", "center"),
    LegendPosition.CENTER: ("center", "center"),
    LegendPosition.CENTER_RIGHT: ("right", "center"),
    LegendPosition.BOTTOM_LEFT: ("left", "bottom"),
    LegendPosition.BOTTOM_CENTER: ("center", "bottom"),
    LegendPosition.BOTTOM_RIGHT: ("right", "bottom"),
}


def _clamp(value: float, low: float, high: float) -> float:
    # box larger than the bounds keeps its origin on the low edge
    if high < low:
        return low
    return max(low, min(high, value))


def legend_box_size(panel_width: float, labels: int) -> tuple[float, float]:
    width = min(LEGEND_WIDTH_RATIO * panel_width, LEGEND_MAX_WIDTH_PX)
    height = LEGEND_BASE_HEIGHT_PX + LEGEND_ROW_HEIGHT_PX * min(max(0, labels), LEGEND_MAX_SIZED_ROWS)
    return (width, height)


def draw_legend(
    surface: Surface,
    bounds: Bounds,
    items: Sequence[ChartItem],
    position: LegendPosition,
    options: ChartOptions = DEFAULT_OPTIONS,
    style: StyleTokens = DEFAULT_STYLE,
) -> Bounds | None:
    """Paint the legend box for ``items`` and return where it landed.

    Items are listed in the order given. Nothing is drawn for
    ``LegendPosition.NONE`` or when no item belongs in the legend.
    """

    entries = [item for item in items if should_appear_in_legend(item, options)]
    if position is LegendPosition.NONE or not entries:
        return None

    labels = sum(legend_row_count(item) for item in entries)
    width, height = legend_box_size(bounds.width, labels)
    x, y = position.position(bounds, (width, height))
    box = Bounds(x, y, width, height)

    border = style.rgba("legend_border")
    surface.fill_rect(x, y, width, height, style.rgba("legend_background"))
    surface.stroke_line(x, y, box.right, y, border)
    surface.stroke_line(x, box.bottom, box.right, box.bottom, border)
    surface.stroke_line(x, y, x, box.bottom, border)
    surface.stroke_line(box.right, y, box.right, box.bottom, border)
    text_color = style.rgba("legend_text")
    surface.fill_text(
        x + LEGEND_X_PADDING_PX,
        y + LEGEND_X_PADDING_PX,
        "Legend",
        text_color,
        size_px=style.legend_header_font_px,
    )

    content = Bounds(
        x + LEGEND_X_PADDING_PX,
        y + LEGEND_HEADER_PX,
        max(0.0, width - 2 * LEGEND_X_PADDING_PX),
        max(0.0, height - LEGEND_HEADER_PX),
    )
    row = 0
    for item in entries:
        if row >= MAX_LEGEND_ROWS:
            LOGGER.debug("legend full after %d rows; %d entries not listed", row, labels - row)
            break
        row += draw_item_legend(surface, item, content, text_color, row, options)
    return box
