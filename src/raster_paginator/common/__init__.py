"""Common utilities shared across the engine: units, page formats, errors."""

from __future__ import annotations

from .errors import (
    ConversionError,
    ConfigurationError,
    CaptureError,
    EncodingError,
    DocumentError,
)
from .units import PX_PER_MM, mm_to_px, px_to_mm, mm_to_pt, pt_to_mm
from .page_formats import lookup_format, supported_formats

__all__ = [
    # errors
    "ConversionError",
    "ConfigurationError",
    "CaptureError",
    "EncodingError",
    "DocumentError",
    # units
    "PX_PER_MM",
    "mm_to_px",
    "px_to_mm",
    "mm_to_pt",
    "pt_to_mm",
    # page formats
    "lookup_format",
    "supported_formats",
]
