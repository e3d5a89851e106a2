from gridwise_plot.adapters.scale_input import coerce_scale, read_table, scale_from_frame

__all__ = ["coerce_scale", "read_table", "scale_from_frame"]
