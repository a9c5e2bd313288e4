"""
Module: converter.geometry.models

Purpose:
    Result types for geometry resolution and fitting. Both are plain
    frozen values computed once per conversion.

Key Classes:
    - PageGeometry: Page and printable area in mm and px
    - FitResult: Horizontal fit factor, page budget and page count

Used By:
    - converter.geometry.resolver: Produces PageGeometry
    - converter.geometry.fit: Produces FitResult
    - converter.output.composer: Placement position and size
"""

from __future__ import annotations

from dataclasses import dataclass

from raster_paginator.common.units import PX_PER_MM, mm_to_px
from raster_paginator.core.models import EdgeMargins, PageFormat


@dataclass(frozen=True)
class PageGeometry:
    """
    Resolved page geometry (immutable).

    Pixel values are CSS pixels derived from millimetres at PX_PER_MM,
    not raster pixels.

    Attributes:
        page_format: Page format the geometry was resolved for
        margins: Four explicit edge margins (mm)
        printable_width_mm: Page width minus left and right margins
        printable_height_mm: Page height minus top and bottom margins
    """

    page_format: PageFormat
    margins: EdgeMargins
    printable_width_mm: float
    printable_height_mm: float

    @property
    def page_width_mm(self) -> float:
        return self.page_format.width_mm

    @property
    def page_height_mm(self) -> float:
        return self.page_format.height_mm

    @property
    def page_width_px(self) -> float:
        return mm_to_px(self.page_width_mm)

    @property
    def page_height_px(self) -> float:
        return mm_to_px(self.page_height_mm)

    @property
    def printable_width_px(self) -> float:
        return mm_to_px(self.printable_width_mm)

    @property
    def printable_height_px(self) -> float:
        return mm_to_px(self.printable_height_mm)

    @property
    def origin_mm(self) -> tuple[float, float]:
        """Top-left of the printable area: (margin_left, margin_top)."""
        return (self.margins.left, self.margins.top)


@dataclass(frozen=True)
class FitResult:
    """
    How a raster maps onto pages (immutable).

    Attributes:
        density_multiplier: Raster pixels per native pixel
        horizontal_fit_factor: >= 1; > 1 only when native content is wider
            than the printable width
        page_height_budget: Exact raster rows that fill the printable height
        page_budget_px: Whole raster rows allotted per page (floor of the
            exact budget, so placed height never exceeds the printable height)
        page_count: Number of output pages (>= 1)
        single_page: True when the whole raster fits on one page

    Example:
        >>> fit.page_count
        2
    """

    density_multiplier: float
    horizontal_fit_factor: float
    page_height_budget: float
    page_budget_px: int
    page_count: int
    single_page: bool

    @property
    def scale_divisor(self) -> float:
        """Raster pixels per millimetre of placed image."""
        return self.density_multiplier * PX_PER_MM * self.horizontal_fit_factor
