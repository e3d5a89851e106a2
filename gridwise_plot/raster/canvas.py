from __future__ import annotations

import numpy as np


RGBA = tuple[int, int, int, int]


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 255)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width/height must be > 0")
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def _blend_region(region: np.ndarray, color: RGBA) -> None:
    a = color[3] / 255.0
    if a <= 0.0:
        return
    src = np.asarray(color[0:3], dtype=np.float32)
    region[..., :3] = (src * a + region[..., :3].astype(np.float32) * (1.0 - a)).astype(np.uint8)
    region[..., 3] = 255


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0] or x < 0 or x >= dst.shape[1]:
        return
    _blend_region(dst[y : y + 1, x : x + 1], color)


def fill_rect(dst: np.ndarray, x0: float, y0: float, x1: float, y1: float, color: RGBA) -> None:
    """Blend an axis-aligned rectangle given two opposite corners (inclusive)."""

    left = max(0, int(round(min(x0, x1))))
    right = min(dst.shape[1] - 1, int(round(max(x0, x1))))
    top = max(0, int(round(min(y0, y1))))
    bottom = min(dst.shape[0] - 1, int(round(max(y0, y1))))
    if right < left or bottom < top:
        return
    _blend_region(dst[top : bottom + 1, left : right + 1], color)


def draw_hline(dst: np.ndarray, x0: float, x1: float, y: float, color: RGBA, thickness: int = 1) -> None:
    half = max(0, thickness - 1) / 2.0
    fill_rect(dst, x0, y - half, x1, y + half, color)


def draw_vline(dst: np.ndarray, x: float, y0: float, y1: float, color: RGBA, thickness: int = 1) -> None:
    half = max(0, thickness - 1) / 2.0
    fill_rect(dst, x - half, y0, x + half, y1, color)
