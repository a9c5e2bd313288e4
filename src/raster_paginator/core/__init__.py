"""
Raster Paginator Core Package

Shared data models for the conversion engine.
"""

from .models import (
    Raster,
    Orientation,
    PageFormat,
    MarginPreset,
    UniformMargin,
    PerEdgeMargin,
    EdgeMargins,
    margin_from_value,
    PageSlice,
)

__all__ = [
    "Raster",
    "Orientation",
    "PageFormat",
    "MarginPreset",
    "UniformMargin",
    "PerEdgeMargin",
    "EdgeMargins",
    "margin_from_value",
    "PageSlice",
]
