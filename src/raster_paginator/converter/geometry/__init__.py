"""
Module: converter.geometry

Purpose:
    Pure geometry for the conversion engine: page and printable area
    resolution, and fitting a raster onto pages.

Key Functions:
    - resolve_geometry(): Page format + margin -> PageGeometry
    - calculate_fit(): Raster size + geometry -> FitResult
"""

from .models import PageGeometry, FitResult
from .resolver import resolve_geometry
from .fit import calculate_fit, horizontal_fit_factor

__all__ = [
    "PageGeometry",
    "FitResult",
    "resolve_geometry",
    "calculate_fit",
    "horizontal_fit_factor",
]
