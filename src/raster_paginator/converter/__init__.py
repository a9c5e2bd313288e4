"""
Module: converter

Purpose:
    Canvas-to-paginated-document conversion. Splits a tall raster into
    page-height bands and places each band, correctly scaled, on its
    own page of a PDF document.

Key Functions:
    - generate_pdf(): Capture + convert + finalize
    - convert(): Raster -> ConversionResult

Key Classes:
    - ConversionConfig: Configuration for one conversion
    - ConversionResult: Built document with geometry

Dependencies:
    - PIL: Raster buffers and encoding
    - reportlab: PDF generation
    - fitz (PyMuPDF): PDF page capture
"""

from raster_paginator.common.errors import (
    ConversionError,
    ConfigurationError,
    CaptureError,
    EncodingError,
    DocumentError,
)

from .config import (
    ConversionConfig,
    DocumentOptions,
    ImageEncoding,
    MimeType,
    OutputMethod,
    Resolution,
)
from .controller import convert, generate_pdf, ConversionResult

__all__ = [
    # Errors
    "ConversionError",
    "ConfigurationError",
    "CaptureError",
    "EncodingError",
    "DocumentError",
    # Config
    "ConversionConfig",
    "DocumentOptions",
    "ImageEncoding",
    "MimeType",
    "OutputMethod",
    "Resolution",
    # Controller
    "convert",
    "generate_pdf",
    "ConversionResult",
]
