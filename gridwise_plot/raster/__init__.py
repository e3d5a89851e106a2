from .canvas import RGBA, draw_hline, draw_vline, fill_rect, new_canvas
from .draw_lines import clip_segment, draw_segment
from .draw_text import draw_text, text_size
from .surface import Bounds, RasterSurface, Surface

__all__ = [
    "Bounds",
    "RGBA",
    "RasterSurface",
    "Surface",
    "clip_segment",
    "draw_hline",
    "draw_segment",
    "draw_text",
    "draw_vline",
    "fill_rect",
    "new_canvas",
    "text_size",
]
