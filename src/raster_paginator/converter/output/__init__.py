"""
Module: converter.output

Purpose:
    Page composition and document output. Encodes page slices, places
    them on a ReportLab-backed PDF document and applies the terminal
    output method.

Key Functions:
    - compose_page(): Encode and place one page
    - finalize(): Build / save / open the document

Key Classes:
    - DocumentWriter: Abstract document capability
    - ReportLabDocument: PDF writer

Dependencies:
    - reportlab: PDF generation
    - PIL: Image encoding
"""

from .document import DocumentWriter, ReportLabDocument, PlacedImage
from .composer import compose_page, encode_slice, placement_size_mm
from .finalize import finalize, default_filename

__all__ = [
    "DocumentWriter",
    "ReportLabDocument",
    "PlacedImage",
    "compose_page",
    "encode_slice",
    "placement_size_mm",
    "finalize",
    "default_filename",
]
