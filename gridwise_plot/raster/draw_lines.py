from __future__ import annotations

import numpy as np

from gridwise_plot.raster.canvas import RGBA, draw_pixel, fill_rect


def draw_segment(dst: np.ndarray, x0: float, y0: float, x1: float, y1: float, color: RGBA, width: int = 1) -> None:
    radius = max(0, width // 2)
    h, w = dst.shape[:2]
    clipped = clip_segment(x0, y0, x1, y1, -radius, -radius, w - 1 + radius, h - 1 + radius)
    if clipped is None:
        return
    x0, y0, x1, y1 = clipped
    _bresenham(dst, int(round(x0)), int(round(y0)), int(round(x1)), int(round(y1)), color=color, radius=radius)


def clip_segment(
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    left: float,
    top: float,
    right: float,
    bottom: float,
) -> tuple[float, float, float, float] | None:
    """Liang-Barsky clip of a segment to an inclusive rectangle.

    Returns ``None`` when no part of the segment lies inside.
    """

    dx = x1 - x0
    dy = y1 - y0
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x0 - left), (dx, right - x0), (-dy, y0 - top), (dy, bottom - y0)):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)
    return x0 + t0 * dx, y0 + t0 * dy, x0 + t1 * dx, y0 + t1 * dy


def _bresenham(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, radius: int) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        if radius == 0:
            draw_pixel(dst, x0, y0, color)
        else:
            fill_rect(dst, x0 - radius, y0 - radius, x0 + radius, y0 + radius, color)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy
