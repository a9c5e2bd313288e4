"""
Module: converter.slicing

Purpose:
    Cutting a raster into contiguous page-height bands.
"""

from .slicer import page_count_for, plan_slice, plan_slices, extract_slice

__all__ = [
    "page_count_for",
    "plan_slice",
    "plan_slices",
    "extract_slice",
]
