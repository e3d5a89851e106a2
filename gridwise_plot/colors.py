from __future__ import annotations

import colorsys
from dataclasses import dataclass
from typing import Iterator, Literal, Sequence

from gridwise_plot.raster.canvas import RGBA
from gridwise_plot.style import hex_to_rgba

ColoringMode = Literal["normal", "gradual"]

HUE_RATIO = 0.60
DEFAULT_COUNT = 5
DEFAULT_BASE_COLOR = "#5E7CE2"


@dataclass(frozen=True)
class HSV:
    h: float
    s: float
    v: float

    @classmethod
    def from_hex(cls, value: str) -> "HSV":
        r, g, b, _ = hex_to_rgba(value)
        h, s, v = colorsys.rgb_to_hsv(r / 255.0, g / 255.0, b / 255.0)
        return cls(h, s, v)

    def to_rgba(self, alpha: int = 255) -> RGBA:
        r, g, b = colorsys.hsv_to_rgb(self.h, self.s, self.v)
        return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)), int(alpha))


class ColorEngine:
    """Deterministic stream of series colours.

    ``normal`` mode advances the hue by ``seed + 0.60`` per colour at a fixed
    saturation and value. ``gradual`` mode keeps one hue and steps the value
    by ``0.85 / count``: upward on dark themes, downward on light ones.
    """

    def __init__(
        self,
        seed: float = 0.0,
        *,
        dark: bool = True,
        mode: ColoringMode = "normal",
        count: int = DEFAULT_COUNT,
        base_color: str = DEFAULT_BASE_COLOR,
    ) -> None:
        if mode not in ("normal", "gradual"):
            raise ValueError(f"Unknown coloring mode: {mode}")
        self._random = int(float(seed) * 10000.0) / 10000.0
        self.dark = bool(dark)
        self.mode: ColoringMode = mode
        self.count = int(count) if count > 0 else DEFAULT_COUNT
        base = HSV.from_hex(base_color)
        self._stable_h = (self._random + HUE_RATIO + base.h) % 1.0
        if mode == "gradual":
            base = HSV(base.h, base.s, 0.15 if self.dark else 0.85)
        self._current = base

    @property
    def seed(self) -> float:
        return self._random

    def __iter__(self) -> Iterator[RGBA]:
        return self

    def __next__(self) -> RGBA:
        return self.generate()

    def generate(self) -> RGBA:
        if self.mode == "normal":
            h = (self._random + HUE_RATIO + self._current.h) % 1.0
            generated = HSV(h, 0.8, 0.5) if self.dark else HSV(h, 0.69, 0.85)
        else:
            diff = 0.85 / self.count
            if self.dark:
                generated = HSV(self._stable_h, 0.8, min(self._current.v + diff, 0.925))
            else:
                generated = HSV(self._stable_h, 0.8, max(self._current.v - diff, 0.125))
        self._current = generated
        return generated.to_rgba()

    def take(self, n: int) -> list[RGBA]:
        if n < 0:
            raise ValueError("n must be >= 0")
        return [self.generate() for _ in range(n)]


def assign_colors(labels: Sequence[str], engine: ColorEngine | None = None) -> dict[str, RGBA]:
    """Map each distinct label to the next colour of ``engine`` in label order."""

    engine = engine if engine is not None else ColorEngine()
    out: dict[str, RGBA] = {}
    for label in labels:
        if label not in out:
            out[label] = engine.generate()
    return out
