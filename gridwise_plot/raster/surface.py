from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol

import numpy as np

from gridwise_plot.raster.canvas import RGBA, draw_hline, draw_vline, fill_rect, new_canvas
from gridwise_plot.raster.draw_lines import draw_segment
from gridwise_plot.raster.draw_text import DEFAULT_FONT_FAMILY, draw_text, text_size


HAlign = Literal["left", "center", "right"]
VAlign = Literal["top", "center", "bottom"]


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned pixel rectangle: top-left origin plus size."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, x: float, y: float, width: float = 0.0, height: float = 0.0) -> bool:
        return self.x <= x and self.y <= y and x + width <= self.right and y + height <= self.bottom


class Surface(Protocol):
    """Drawing capability the layout engine and chart items paint through."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def stroke_line(self, x0: float, y0: float, x1: float, y1: float, color: RGBA, width: float = 1.0) -> None: ...

    def fill_rect(self, x: float, y: float, width: float, height: float, color: RGBA) -> None: ...

    def fill_text(
        self,
        x: float,
        y: float,
        text: str,
        color: RGBA,
        *,
        size_px: float = 12.0,
        halign: HAlign = "left",
        valign: VAlign = "top",
        italic: bool = False,
        rotate_deg: int = 0,
    ) -> None: ...


class RasterSurface:
    """:class:`Surface` backed by an ``(H, W, 4)`` uint8 RGBA array."""

    def __init__(
        self,
        width: int,
        height: int,
        background: RGBA = (0, 0, 0, 255),
        *,
        font_family: str = DEFAULT_FONT_FAMILY,
    ) -> None:
        self._canvas = new_canvas(width, height, color=background)
        self.font_family = font_family

    @property
    def width(self) -> int:
        return int(self._canvas.shape[1])

    @property
    def height(self) -> int:
        return int(self._canvas.shape[0])

    @property
    def canvas(self) -> np.ndarray:
        return self._canvas

    def stroke_line(self, x0: float, y0: float, x1: float, y1: float, color: RGBA, width: float = 1.0) -> None:
        thickness = max(1, int(round(width)))
        if round(y0) == round(y1):
            draw_hline(self._canvas, x0, x1, y0, color, thickness=thickness)
        elif round(x0) == round(x1):
            draw_vline(self._canvas, x0, y0, y1, color, thickness=thickness)
        else:
            draw_segment(self._canvas, x0, y0, x1, y1, color, width=thickness)

    def fill_rect(self, x: float, y: float, width: float, height: float, color: RGBA) -> None:
        if width <= 0 or height <= 0:
            return
        fill_rect(self._canvas, x, y, x + width - 1, y + height - 1, color)

    def fill_text(
        self,
        x: float,
        y: float,
        text: str,
        color: RGBA,
        *,
        size_px: float = 12.0,
        halign: HAlign = "left",
        valign: VAlign = "top",
        italic: bool = False,
        rotate_deg: int = 0,
    ) -> None:
        if not text:
            return
        w, h = text_size(text, font_family=self.font_family, font_size_px=size_px, italic=italic, rotate_deg=rotate_deg)
        left = x - {"left": 0.0, "center": w / 2.0, "right": float(w)}[halign]
        top = y - {"top": 0.0, "center": h / 2.0, "bottom": float(h)}[valign]
        draw_text(
            self._canvas,
            int(round(left)),
            int(round(top)),
            text,
            color,
            font_family=self.font_family,
            font_size_px=size_px,
            italic=italic,
            rotate_deg=rotate_deg,
        )
