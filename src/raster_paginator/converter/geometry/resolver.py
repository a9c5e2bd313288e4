"""
Module: converter.geometry.resolver

Purpose:
    Resolve a page format and margin into page and printable-area
    dimensions. Runs once per conversion, before anything is encoded.

Key Functions:
    - resolve_geometry(): PageFormat + Margin -> PageGeometry

Dependencies:
    - core.models: PageFormat, Margin
    - converter.geometry.models: PageGeometry

Used By:
    - converter.controller: Conversion driver
"""

from __future__ import annotations

import logging

from raster_paginator.common.errors import ConfigurationError
from raster_paginator.core.models import PageFormat, margin_from_value
from raster_paginator.core.models.margin import Margin

from .models import PageGeometry

logger = logging.getLogger(__name__)


def resolve_geometry(page_format: PageFormat, margin: Margin) -> PageGeometry:
    """
    Compute page size and printable area for a format and margin.

    Horizontal margin is left + right, vertical margin is top + bottom;
    a uniform margin contributes its length to every edge.

    Args:
        page_format: Oriented page format
        margin: Uniform or per-edge margin

    Returns:
        PageGeometry with printable area in mm (px via properties)

    Raises:
        ConfigurationError: If a margin is negative (raised by the
            margin model) or the margins consume the whole page on
            either axis

    Example:
        >>> g = resolve_geometry(PageFormat.from_name("A4"), UniformMargin(10))
        >>> g.printable_width_mm, g.printable_height_mm
        (190.0, 277.0)
    """
    edges = margin_from_value(margin).resolve()

    printable_width = page_format.width_mm - edges.horizontal
    printable_height = page_format.height_mm - edges.vertical

    if printable_width <= 0:
        raise ConfigurationError(
            f"Margins exceed page width: {edges.horizontal}mm of {page_format.width_mm}mm"
        )
    if printable_height <= 0:
        raise ConfigurationError(
            f"Margins exceed page height: {edges.vertical}mm of {page_format.height_mm}mm"
        )

    geometry = PageGeometry(
        page_format=page_format,
        margins=edges,
        printable_width_mm=printable_width,
        printable_height_mm=printable_height,
    )
    logger.debug(
        f"Resolved {page_format.name} {page_format.orientation.value} "
        f"{page_format.width_mm}x{page_format.height_mm}mm, printable "
        f"{printable_width:.2f}x{printable_height:.2f}mm"
    )
    return geometry
