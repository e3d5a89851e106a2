from __future__ import annotations


class PlotDataError(ValueError):
    """Raised when chart input data cannot be turned into axes."""


class EmptyScaleError(PlotDataError):
    """Raised when an axis scale holds no values."""
