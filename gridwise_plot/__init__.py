from gridwise_plot.adapters import coerce_scale, read_table, scale_from_frame
from gridwise_plot.axis import Axis, build_axes, build_axis, zero_fraction
from gridwise_plot.charts import (
    ChartItem,
    ChartOptions,
    GraphBar,
    GraphLine,
    GraphStackedBar,
    draw_item,
    draw_item_legend,
    item_label,
    should_appear_in_legend,
)
from gridwise_plot.colors import ColorEngine, assign_colors
from gridwise_plot.errors import EmptyScaleError, PlotDataError
from gridwise_plot.figure import Chart, chart_from_scales
from gridwise_plot.layout import AxisGeometry, LayoutConfig, layout_axis, outline_density, validate_layout_config
from gridwise_plot.legend import LegendPosition, draw_legend, legend_box_size
from gridwise_plot.output import DrawnOutput
from gridwise_plot.raster import Bounds, RasterSurface, Surface
from gridwise_plot.scales import (
    CategoricalSingle,
    Count,
    NumericKind,
    NumericSingle,
    NumericSplit,
    classify_scale,
    sequential_positions,
)
from gridwise_plot.style import StyleTokens, validate_style_tokens

__all__ = [
    "Axis",
    "AxisGeometry",
    "Bounds",
    "CategoricalSingle",
    "Chart",
    "ChartItem",
    "ChartOptions",
    "ColorEngine",
    "Count",
    "DrawnOutput",
    "EmptyScaleError",
    "GraphBar",
    "GraphLine",
    "GraphStackedBar",
    "LayoutConfig",
    "LegendPosition",
    "NumericKind",
    "NumericSingle",
    "NumericSplit",
    "PlotDataError",
    "RasterSurface",
    "StyleTokens",
    "Surface",
    "assign_colors",
    "build_axes",
    "build_axis",
    "chart_from_scales",
    "classify_scale",
    "coerce_scale",
    "draw_item",
    "draw_item_legend",
    "draw_legend",
    "item_label",
    "layout_axis",
    "legend_box_size",
    "outline_density",
    "read_table",
    "scale_from_frame",
    "sequential_positions",
    "should_appear_in_legend",
    "validate_layout_config",
    "validate_style_tokens",
    "zero_fraction",
]
