"""
Module: converter.capture

Purpose:
    Raster capture collaborators: in-memory images, image files and
    PDF pages, each captured at a density multiplier.
"""

from .sources import (
    RasterSource,
    ImageRasterSource,
    ImageFileRasterSource,
    as_raster_source,
)
from .pdf import PdfPageRasterSource

__all__ = [
    "RasterSource",
    "ImageRasterSource",
    "ImageFileRasterSource",
    "PdfPageRasterSource",
    "as_raster_source",
]
