"""
Module: converter.geometry.fit

Purpose:
    Work out how a raster maps onto pages: a single downscale-only
    horizontal fit factor, the number of raster rows per page, and the
    page count.

Key Functions:
    - calculate_fit(): Raster dimensions + PageGeometry -> FitResult

Algorithm:
    1. native_width = raster_width / density
    2. factor = native_width / printable_width_px if wider, else 1
       (content is shrunk to the page width, never stretched)
    3. budget = printable_height_px * density * factor
       Shrinking by the factor lets proportionally more raster rows fit
       the same printable height.
    4. page_count = ceil(raster_height / floor(budget)), minimum 1

Used By:
    - converter.controller: Conversion driver
"""

from __future__ import annotations

import logging
import math

from raster_paginator.common.errors import ConfigurationError

from .models import FitResult, PageGeometry

logger = logging.getLogger(__name__)


def horizontal_fit_factor(native_width: float, printable_width_px: float) -> float:
    """
    Downscale-only factor fitting native content into the printable width.

    Returns 1 when the content already fits, otherwise
    native_width / printable_width_px (always > 1).

    Raises:
        ConfigurationError: If printable_width_px is not positive
    """
    if printable_width_px <= 0:
        raise ConfigurationError(f"Printable width must be positive: {printable_width_px}")
    if native_width > printable_width_px:
        return native_width / printable_width_px
    return 1.0


def calculate_fit(
    raster_width: int,
    raster_height: int,
    density_multiplier: float,
    geometry: PageGeometry,
) -> FitResult:
    """
    Calculate fit factor, per-page row budget and page count.

    Args:
        raster_width: Raster width in raster pixels
        raster_height: Raster height in raster pixels
        density_multiplier: Raster pixels per native pixel
        geometry: Resolved page geometry

    Returns:
        FitResult for the raster

    Raises:
        ConfigurationError: If the printable area or density is not
            positive, or a page cannot hold a single raster row

    Example:
        >>> fit = calculate_fit(2000, 6000, 3, resolve_geometry(a4, UniformMargin(0)))
        >>> fit.horizontal_fit_factor, fit.page_budget_px, fit.page_count
        (1.0, 3367, 2)
    """
    if density_multiplier <= 0:
        raise ConfigurationError(f"density_multiplier must be positive: {density_multiplier}")
    printable_height_px = geometry.printable_height_px
    if printable_height_px <= 0:
        raise ConfigurationError(f"Printable height must be positive: {printable_height_px}")

    native_width = raster_width / density_multiplier
    factor = horizontal_fit_factor(native_width, geometry.printable_width_px)

    page_height_budget = printable_height_px * density_multiplier * factor
    page_budget_px = math.floor(page_height_budget)
    if page_budget_px < 1:
        raise ConfigurationError(
            f"Printable height holds no raster rows: budget {page_height_budget:.3f}px"
        )

    single_page = raster_height <= page_budget_px
    page_count = 1 if single_page else math.ceil(raster_height / page_budget_px)

    logger.debug(
        f"Fit {raster_width}x{raster_height}px @ {density_multiplier}x: "
        f"factor={factor:.4f}, budget={page_budget_px}px, pages={page_count}"
    )
    return FitResult(
        density_multiplier=density_multiplier,
        horizontal_fit_factor=factor,
        page_height_budget=page_height_budget,
        page_budget_px=page_budget_px,
        page_count=page_count,
        single_page=single_page,
    )
