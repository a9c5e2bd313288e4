"""
Module: common.units

Purpose:
    Length conversion between millimetres, CSS pixels and PDF points.
    PX_PER_MM is the only pixel density used anywhere in the engine;
    geometry, budgeting and placement must all agree on it.

Key Functions:
    - mm_to_px(): Millimetres to CSS pixels (96 dpi)
    - px_to_mm(): CSS pixels to millimetres
    - mm_to_pt(): Millimetres to PDF points
    - pt_to_mm(): PDF points to millimetres

Dependencies:
    - reportlab.lib.units: mm (points per millimetre)
"""

from __future__ import annotations

from reportlab.lib.units import mm as PT_PER_MM

CSS_DPI = 96.0
MM_PER_INCH = 25.4

# 96 dots per inch / 25.4 mm per inch
PX_PER_MM = CSS_DPI / MM_PER_INCH


def mm_to_px(length_mm: float) -> float:
    """Convert a physical length in millimetres to CSS pixels."""
    return length_mm * PX_PER_MM


def px_to_mm(pixels: float) -> float:
    """Convert CSS pixels to a physical length in millimetres."""
    return pixels / PX_PER_MM


def mm_to_pt(length_mm: float) -> float:
    """Convert millimetres to PDF points (1/72 inch)."""
    return length_mm * PT_PER_MM


def pt_to_mm(points: float) -> float:
    """Convert PDF points to millimetres."""
    return points / PT_PER_MM
