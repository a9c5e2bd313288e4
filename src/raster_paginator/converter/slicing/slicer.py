"""
Module: converter.slicing.slicer

Purpose:
    Plan and extract the page slices of a raster. Slices are
    contiguous, non-overlapping, full-width bands whose heights sum to
    the raster height exactly.

Key Functions:
    - plan_slice(): Band of rows for one 1-based page index
    - plan_slices(): All bands, in source-Y order
    - extract_slice(): Crop a band out of the raster

Dependencies:
    - PIL: Image cropping
    - core.models: Raster, PageSlice

Used By:
    - converter.controller: Conversion driver
    - converter.output.composer: Page images
"""

from __future__ import annotations

import math
from typing import List

from PIL import Image

from raster_paginator.core.models import PageSlice, Raster


def page_count_for(raster_height: int, page_budget_px: int) -> int:
    """Number of pages needed for raster_height rows (minimum 1)."""
    if page_budget_px <= 0:
        raise ValueError(f"page_budget_px must be positive: {page_budget_px}")
    return max(1, math.ceil(raster_height / page_budget_px))


def plan_slice(
    raster_height: int,
    raster_width: int,
    page_budget_px: int,
    page_index: int,
) -> PageSlice:
    """
    Plan the band of raster rows for one page.

    offset = budget * (page_index - 1); height = min(remaining, budget).

    Args:
        raster_height: Raster height in pixels
        raster_width: Raster width in pixels
        page_budget_px: Raster rows per page
        page_index: 1-based page number

    Returns:
        PageSlice for the page

    Raises:
        ValueError: If page_index is outside [1, page_count]

    Example:
        >>> plan_slice(6000, 2000, 3367, 2).pixel_height
        2633
    """
    page_count = page_count_for(raster_height, page_budget_px)
    if not 1 <= page_index <= page_count:
        raise ValueError(f"page_index {page_index} outside 1..{page_count}")

    offset = page_budget_px * (page_index - 1)
    remaining = raster_height - offset
    return PageSlice(
        page_index=page_index,
        source_y_offset=offset,
        pixel_height=min(remaining, page_budget_px),
        pixel_width=raster_width,
    )


def plan_slices(raster_height: int, raster_width: int, page_budget_px: int) -> List[PageSlice]:
    """Plan every page slice of a raster, in source-Y order."""
    page_count = page_count_for(raster_height, page_budget_px)
    return [
        plan_slice(raster_height, raster_width, page_budget_px, index)
        for index in range(1, page_count + 1)
    ]


def extract_slice(raster: Raster, page_slice: PageSlice) -> Image.Image:
    """
    Extract a page slice from a raster.

    A slice covering the whole raster returns the raster image itself
    (no copy); anything else is a new cropped image.

    Args:
        raster: Source raster
        page_slice: Band to extract

    Returns:
        PIL image of page_slice.pixel_width x page_slice.pixel_height

    Raises:
        ValueError: If the slice does not lie within the raster
    """
    if page_slice.pixel_width != raster.width:
        raise ValueError(
            f"Slice width {page_slice.pixel_width} differs from raster width {raster.width}"
        )
    if page_slice.bottom > raster.height:
        raise ValueError(
            f"Slice bottom {page_slice.bottom} exceeds raster height {raster.height}"
        )

    if page_slice.source_y_offset == 0 and page_slice.pixel_height == raster.height:
        return raster.image
    return raster.image.crop(page_slice.crop_box)
