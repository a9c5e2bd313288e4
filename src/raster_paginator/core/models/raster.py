"""
Module: core.models.raster

Purpose:
    The Raster model - a captured pixel buffer together with the density
    multiplier it was captured at. The density is ground truth: it is
    never re-derived from pixel counts.

Key Classes:
    - Raster: Immutable raster wrapper

Dependencies:
    - PIL.Image: Pixel buffer

Used By:
    - converter.capture: Produces rasters
    - converter.geometry.fit: Native dimensions
    - converter.slicing.slicer: Crops page slices
"""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image

from raster_paginator.common.errors import CaptureError


@dataclass(frozen=True)
class Raster:
    """
    A captured raster (immutable by convention; never mutated by the engine).

    Attributes:
        image: PIL image holding the pixels
        density_multiplier: Raster pixels per native (CSS) pixel

    Invariants:
        - width > 0 and height > 0
        - density_multiplier > 0

    Example:
        >>> raster = Raster(Image.new("RGB", (2000, 6000)), density_multiplier=3)
        >>> round(raster.native_width)
        667
    """

    image: Image.Image
    density_multiplier: float

    def __post_init__(self) -> None:
        """Validate raster on construction."""
        if self.density_multiplier <= 0:
            raise CaptureError(
                f"density_multiplier must be positive: {self.density_multiplier}"
            )
        width, height = self.image.size
        if width <= 0 or height <= 0:
            raise CaptureError(f"Captured raster is empty: {width}x{height}")

    @property
    def width(self) -> int:
        """Width in raster pixels."""
        return self.image.width

    @property
    def height(self) -> int:
        """Height in raster pixels."""
        return self.image.height

    @property
    def native_width(self) -> float:
        """Density-independent width (CSS pixels)."""
        return self.width / self.density_multiplier

    @property
    def native_height(self) -> float:
        """Density-independent height (CSS pixels)."""
        return self.height / self.density_multiplier
