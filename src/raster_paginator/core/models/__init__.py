"""
Core Models Package

Immutable, validated data models shared by every converter stage.

All models are frozen dataclasses: configuration and geometry are
computed once per conversion and never mutated afterwards.
"""

from .raster import Raster
from .page import Orientation, PageFormat
from .margin import (
    MarginPreset,
    Margin,
    UniformMargin,
    PerEdgeMargin,
    EdgeMargins,
    margin_from_value,
)
from .slices import PageSlice

__all__ = [
    "Raster",
    "Orientation",
    "PageFormat",
    "MarginPreset",
    "Margin",
    "UniformMargin",
    "PerEdgeMargin",
    "EdgeMargins",
    "margin_from_value",
    "PageSlice",
]
