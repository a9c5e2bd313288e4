"""
Module: converter.capture.pdf

Purpose:
    Capture a PDF page as a raster with PyMuPDF. PDF user space is in
    points (1/72 inch) while native pixels are CSS pixels (1/96 inch),
    so the render zoom is density * 96 / 72.

Key Classes:
    - PdfPageRasterSource: One page of a PDF file

Dependencies:
    - fitz (PyMuPDF): PDF rendering
    - PIL.Image: Raster buffer
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import fitz
from PIL import Image

from raster_paginator.common.errors import CaptureError
from raster_paginator.common.units import CSS_DPI
from raster_paginator.core.models import Raster

from .sources import RasterSource

logger = logging.getLogger(__name__)

PDF_POINTS_PER_INCH = 72.0


def render_zoom(density_multiplier: float) -> float:
    """PyMuPDF zoom that yields density_multiplier raster px per CSS px."""
    return density_multiplier * CSS_DPI / PDF_POINTS_PER_INCH


class PdfPageRasterSource(RasterSource):
    """
    One page of a PDF document rendered to RGB.

    Attributes:
        path: PDF file
        page_number: 0-based page number

    Example:
        >>> raster = PdfPageRasterSource(Path("statement.pdf")).capture(2)
        >>> round(raster.native_width)  # A4 page width in CSS px
        794
    """

    def __init__(self, path: Union[str, Path], page_number: int = 0) -> None:
        self.path = Path(path)
        self.page_number = page_number

    def capture(self, density_multiplier: float) -> Raster:
        if density_multiplier <= 0:
            raise CaptureError(f"density_multiplier must be positive: {density_multiplier}")
        if not self.path.exists():
            raise CaptureError(f"Source PDF not found: {self.path}")

        zoom = render_zoom(density_multiplier)
        try:
            with fitz.open(self.path) as doc:
                if not 0 <= self.page_number < doc.page_count:
                    raise CaptureError(
                        f"Page {self.page_number} out of range for {self.path} "
                        f"({doc.page_count} pages)"
                    )
                page = doc[self.page_number]
                pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=False)
                image = Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
        except (RuntimeError, ValueError) as e:
            raise CaptureError(f"Failed to render {self.path} page {self.page_number}: {e}") from e

        logger.debug(
            f"Rendered {self.path.name} page {self.page_number} at zoom {zoom:.3f}: "
            f"{image.width}x{image.height}px"
        )
        return Raster(image, density_multiplier)
