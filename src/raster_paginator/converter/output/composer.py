"""
Module: converter.output.composer

Purpose:
    Compose one output page: encode the page slice, size it in
    millimetres, and place it at the printable-area origin.

Key Functions:
    - encode_slice(): PIL image -> encoded bytes
    - placement_size_mm(): Slice pixels -> placed size in mm
    - compose_page(): Encode, append page if needed, place

Dependencies:
    - PIL: Image encoding
    - converter.slicing: Slice extraction
    - converter.output.document: DocumentWriter

Used By:
    - converter.controller: Conversion driver
"""

from __future__ import annotations

import io
import logging
from typing import Tuple

from PIL import Image

from raster_paginator.common.errors import EncodingError
from raster_paginator.common.units import PX_PER_MM
from raster_paginator.core.models import PageSlice, Raster

from ..config import ConversionConfig, ImageEncoding, MimeType
from ..geometry import FitResult, PageGeometry
from ..slicing import extract_slice
from .document import DocumentWriter, PlacedImage

logger = logging.getLogger(__name__)

# JPEG has no alpha channel; transparent pixels are flattened onto this
JPEG_BACKGROUND = (255, 255, 255)


def encode_slice(image: Image.Image, encoding: ImageEncoding) -> bytes:
    """
    Encode a page image with the configured format and quality.

    JPEG output flattens any transparency onto white and uses
    quality = quality_ratio * 100. PNG is lossless and ignores quality.

    Args:
        image: Page slice image
        encoding: Target encoding

    Returns:
        Encoded image bytes

    Raises:
        EncodingError: If the image is empty or PIL cannot encode it
    """
    if image.width <= 0 or image.height <= 0:
        raise EncodingError(f"Cannot encode empty image: {image.width}x{image.height}")

    buf = io.BytesIO()
    try:
        if encoding.mime_type is MimeType.JPEG:
            _to_rgb(image).save(buf, format="JPEG", quality=encoding.jpeg_quality)
        else:
            image.save(buf, format="PNG")
    except (OSError, ValueError) as e:
        raise EncodingError(f"Failed to encode page image as {encoding.mime_type.value}: {e}") from e
    return buf.getvalue()


def _to_rgb(image: Image.Image) -> Image.Image:
    """RGB copy of image with alpha flattened onto JPEG_BACKGROUND."""
    if image.mode == "RGB":
        return image
    if image.mode in ("RGBA", "LA") or (image.mode == "P" and "transparency" in image.info):
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, JPEG_BACKGROUND)
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    return image.convert("RGB")


def placement_size_mm(
    pixel_width: int,
    pixel_height: int,
    density_multiplier: float,
    horizontal_fit_factor: float,
) -> Tuple[float, float]:
    """
    Placed (width, height) in mm for a slice of the given pixel size.

    Both axes are divided by density * PX_PER_MM * fit factor, so the
    aspect ratio is preserved and a shrunk raster's width lands exactly
    on the printable width.

    Example:
        >>> placement_size_mm(2000, 3367, 3, 1.0)
        (176.38..., 296.95...)
    """
    divisor = density_multiplier * PX_PER_MM * horizontal_fit_factor
    return (pixel_width / divisor, pixel_height / divisor)


def compose_page(
    document: DocumentWriter,
    raster: Raster,
    page_slice: PageSlice,
    fit: FitResult,
    geometry: PageGeometry,
    config: ConversionConfig,
) -> PlacedImage:
    """
    Compose one page of the output document.

    Pages after the first get a fresh page of the configured format
    before placement. The image is anchored at (margin_left, margin_top).

    Args:
        document: In-progress document
        raster: Source raster
        page_slice: Band of rows for this page
        fit: Fit result for the raster
        geometry: Resolved page geometry
        config: Conversion configuration

    Returns:
        PlacedImage for the page

    Raises:
        EncodingError: If the slice is empty or cannot be encoded
        DocumentError: If the document writer fails
    """
    try:
        image = extract_slice(raster, page_slice)
    except ValueError as e:
        raise EncodingError(f"Cannot extract page {page_slice.page_index}: {e}") from e

    image_data = encode_slice(image, config.encoding)
    width_mm, height_mm = placement_size_mm(
        page_slice.pixel_width,
        page_slice.pixel_height,
        fit.density_multiplier,
        fit.horizontal_fit_factor,
    )

    if page_slice.page_index > 1:
        document.add_page(config.page_format)

    x_mm, y_mm = geometry.origin_mm
    placed = document.place_image(
        page_slice.page_index,
        image_data,
        config.encoding.mime_type,
        x_mm,
        y_mm,
        width_mm,
        height_mm,
    )
    logger.debug(
        f"Page {page_slice.page_index}: rows {page_slice.source_y_offset}-{page_slice.bottom}, "
        f"placed {width_mm:.2f}x{height_mm:.2f}mm at ({x_mm}, {y_mm}), {len(image_data)} bytes"
    )
    return placed
