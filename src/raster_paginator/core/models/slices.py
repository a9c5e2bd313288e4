"""
Module: core.models.slices

Purpose:
    The PageSlice model - the contiguous band of source raster rows
    assigned to one output page. Created per page and discarded once the
    page is composed.

Key Classes:
    - PageSlice: Band of raster rows [source_y_offset, bottom)

Used By:
    - converter.slicing.slicer: Plans and extracts slices
    - converter.output.composer: Sizes placements
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class PageSlice:
    """
    Band of raster rows for one page.

    The band is [source_y_offset, source_y_offset + pixel_height) and
    always spans the full raster width.

    Attributes:
        page_index: 1-based page number
        source_y_offset: First raster row (inclusive)
        pixel_height: Number of raster rows
        pixel_width: Raster width

    Invariants:
        - page_index >= 1
        - source_y_offset >= 0
        - pixel_height > 0, pixel_width > 0

    Example:
        >>> s = PageSlice(page_index=2, source_y_offset=3367, pixel_height=2633, pixel_width=2000)
        >>> s.bottom
        6000
    """

    page_index: int
    source_y_offset: int
    pixel_height: int
    pixel_width: int

    def __post_init__(self) -> None:
        """Validate slice on construction."""
        if self.page_index < 1:
            raise ValueError(f"page_index must be >= 1: {self.page_index}")
        if self.source_y_offset < 0:
            raise ValueError(f"source_y_offset must be >= 0: {self.source_y_offset}")
        if self.pixel_height <= 0:
            raise ValueError(f"pixel_height must be > 0: {self.pixel_height}")
        if self.pixel_width <= 0:
            raise ValueError(f"pixel_width must be > 0: {self.pixel_width}")

    @property
    def bottom(self) -> int:
        """First raster row after the slice (exclusive)."""
        return self.source_y_offset + self.pixel_height

    @property
    def crop_box(self) -> Tuple[int, int, int, int]:
        """PIL crop box (left, top, right, bottom)."""
        return (0, self.source_y_offset, self.pixel_width, self.bottom)
