from __future__ import annotations

from dataclasses import asdict, dataclass, fields
import re
from typing import Any, Mapping

from gridwise_plot.raster.canvas import RGBA

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")

_COLOR_TOKENS = (
    "background",
    "axis_color",
    "outline_color",
    "text_color",
    "label_color",
    "legend_background",
    "legend_border",
    "legend_text",
)
_SIZE_TOKENS = (
    "point_font_px",
    "label_font_px",
    "caption_font_px",
    "legend_header_font_px",
)


@dataclass(frozen=True)
class StyleTokens:
    """Colours and font sizes used when an axis or chart is painted."""

    background: str = "#0C1017"
    axis_color: str = "#CD0096"
    outline_color: str = "#2C3542"
    text_color: str = "#D0DAE8"
    label_color: str = "#E1E8F2"
    legend_background: str = "#141A24E6"
    legend_border: str = "#3C434E"
    legend_text: str = "#D0DAE8"
    font_family: str = "DejaVu Sans"
    point_font_px: float = 12.0
    label_font_px: float = 16.0
    caption_font_px: float = 14.0
    legend_header_font_px: float = 14.0

    def rgba(self, token: str) -> RGBA:
        if token not in _COLOR_TOKENS:
            raise ValueError(f"Unknown colour token: {token}")
        return hex_to_rgba(getattr(self, token))


DEFAULT_STYLE = StyleTokens()


def hex_to_rgba(value: str) -> RGBA:
    if not _HEX_COLOR.match(value):
        raise ValueError(f"not a hex colour: {value!r}")
    r = int(value[1:3], 16)
    g = int(value[3:5], 16)
    b = int(value[5:7], 16)
    a = int(value[7:9], 16) if len(value) == 9 else 255
    return (r, g, b, a)


def validate_style_tokens(overrides: Mapping[str, Any] | None = None) -> StyleTokens:
    """Validate and merge user token overrides against the defaults."""

    raw: dict[str, Any] = asdict(DEFAULT_STYLE)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown style token: {key}")
            raw[key] = value

    for key in _COLOR_TOKENS:
        if not isinstance(raw[key], str) or not _HEX_COLOR.match(raw[key]):
            raise ValueError(f"Token `{key}` must be a hex color (#RRGGBB or #RRGGBBAA)")

    if not isinstance(raw["font_family"], str) or not raw["font_family"].strip():
        raise ValueError("Token `font_family` must be a non-empty string")

    for key in _SIZE_TOKENS:
        value = raw[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or float(value) <= 0:
            raise ValueError(f"Token `{key}` must be a positive number")
        raw[key] = float(value)

    return StyleTokens(**{f.name: raw[f.name] for f in fields(StyleTokens)})
