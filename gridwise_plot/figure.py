from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Any, Sequence

import numpy as np
from PIL import Image

from gridwise_plot.axis import Axis, build_axes
from gridwise_plot.charts import DEFAULT_OPTIONS, ChartItem, ChartOptions, draw_item
from gridwise_plot.layout import DEFAULT_LAYOUT, LayoutConfig, layout_axis
from gridwise_plot.legend import LegendPosition, draw_legend
from gridwise_plot.output import DrawnOutput
from gridwise_plot.raster.surface import Bounds, RasterSurface
from gridwise_plot.style import DEFAULT_STYLE, StyleTokens


LOGGER = logging.getLogger(__name__)


@dataclass
class Chart:
    width: int
    height: int
    x_axis: Axis
    y_axis: Axis
    items: Sequence[ChartItem] = ()
    legend: LegendPosition = LegendPosition.TOP_RIGHT
    options: ChartOptions = DEFAULT_OPTIONS
    style: StyleTokens = DEFAULT_STYLE
    layout: LayoutConfig = DEFAULT_LAYOUT
    _last_frame_rgba: np.ndarray | None = field(default=None, init=False, repr=False)
    _last_outputs: tuple[DrawnOutput, DrawnOutput] | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width < 2 or self.height < 2:
            raise ValueError("width and height must be >= 2")
        self.width = int(self.width)
        self.height = int(self.height)
        self.items = tuple(self.items)

    def render(self) -> tuple[DrawnOutput, DrawnOutput]:
        """Paint background, axes, items and legend; return both axis outputs."""

        surface = RasterSurface(
            self.width,
            self.height,
            background=self.style.rgba("background"),
            font_family=self.style.font_family,
        )
        x_out = layout_axis(
            self.x_axis,
            self.width,
            self.height,
            is_x_axis=True,
            surface=surface,
            style=self.style,
            config=self.layout,
        )
        y_out = layout_axis(
            self.y_axis,
            self.width,
            self.height,
            is_x_axis=False,
            surface=surface,
            style=self.style,
            config=self.layout,
        )
        for item in self.items:
            draw_item(surface, item, x_out, y_out, self.options)
        draw_legend(
            surface,
            Bounds(0.0, 0.0, float(self.width), float(self.height)),
            self.items,
            self.legend,
            self.options,
            self.style,
        )
        LOGGER.debug("rendered %dx%d chart with %d items", self.width, self.height, len(self.items))
        self._last_frame_rgba = surface.canvas
        self._last_outputs = (x_out, y_out)
        return x_out, y_out

    @property
    def last_outputs(self) -> tuple[DrawnOutput, DrawnOutput] | None:
        return self._last_outputs

    def to_rgba(self) -> np.ndarray:
        if self._last_frame_rgba is None:
            self.render()
        assert self._last_frame_rgba is not None
        return self._last_frame_rgba.copy()

    def save_png(self, path: str | Path) -> Path:
        out = Path(path)
        Image.fromarray(self.to_rgba()).save(out, format="PNG")
        LOGGER.info("wrote %s", out)
        return out


def chart_from_scales(
    x_scale: Sequence[Any],
    y_scale: Sequence[Any],
    items: Sequence[ChartItem] = (),
    *,
    width: int = 800,
    height: int = 500,
    sequential_x: bool = False,
    sequential_y: bool = False,
    clean: bool = False,
    x_label: str | None = None,
    y_label: str | None = None,
    caption: str | None = None,
    legend: LegendPosition = LegendPosition.TOP_RIGHT,
    options: ChartOptions = DEFAULT_OPTIONS,
    style: StyleTokens = DEFAULT_STYLE,
    layout: LayoutConfig = DEFAULT_LAYOUT,
) -> Chart:
    """Classify both scales, build the axes and wrap them in a :class:`Chart`.

    Horizontal charts (``options.horizontal``) lay the x scale out vertically.
    """

    x_axis, y_axis = build_axes(
        x_scale,
        y_scale,
        sequential_x=sequential_x,
        sequential_y=sequential_y,
        clean=clean,
        x_label=x_label,
        y_label=y_label,
        caption=caption,
        horizontal=options.horizontal,
    )
    return Chart(
        width=width,
        height=height,
        x_axis=x_axis,
        y_axis=y_axis,
        items=items,
        legend=legend,
        options=options,
        style=style,
        layout=layout,
    )
