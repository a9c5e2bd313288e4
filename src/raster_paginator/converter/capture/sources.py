"""
Module: converter.capture.sources

Purpose:
    Raster capture collaborators. A RasterSource renders or loads its
    content at a density multiplier and returns a Raster; the engine
    treats that raster and density as ground truth.

Key Classes:
    - RasterSource: Abstract capture interface
    - ImageRasterSource: In-memory PIL image
    - ImageFileRasterSource: Image file on disk

Key Functions:
    - as_raster_source(): Coerce supported inputs into a RasterSource

Dependencies:
    - PIL: Image loading

Used By:
    - converter.controller: generate_pdf()
    - cli: Input handling
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

from PIL import Image, UnidentifiedImageError

from raster_paginator.common.errors import CaptureError
from raster_paginator.core.models import Raster

logger = logging.getLogger(__name__)

PDF_SUFFIX = ".pdf"


class RasterSource(ABC):
    """
    Abstract capture interface.

    Implementations produce a Raster whose pixels correspond to
    density_multiplier raster pixels per native (CSS) pixel.
    """

    @abstractmethod
    def capture(self, density_multiplier: float) -> Raster:
        """
        Capture the source at a density multiplier.

        Args:
            density_multiplier: Raster pixels per native pixel

        Returns:
            Captured Raster

        Raises:
            CaptureError: If the source is missing, unreadable or empty
        """


class ImageRasterSource(RasterSource):
    """
    An image that was already rendered at the requested density.

    The image is passed through unchanged; the caller vouches for its
    density.
    """

    def __init__(self, image: Image.Image) -> None:
        self._image = image

    def capture(self, density_multiplier: float) -> Raster:
        return Raster(self._image, density_multiplier)


class ImageFileRasterSource(RasterSource):
    """
    Image file rendered at the requested density (PNG, JPEG, ...).

    Example:
        >>> raster = ImageFileRasterSource(Path("report.png")).capture(3)
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def capture(self, density_multiplier: float) -> Raster:
        if not self.path.exists():
            raise CaptureError(f"Source image not found: {self.path}")
        try:
            with Image.open(self.path) as img:
                img.load()
                # Detach from the file handle so the raster outlives the context
                image = img.copy()
        except (OSError, UnidentifiedImageError) as e:
            raise CaptureError(f"Failed to read source image {self.path}: {e}") from e
        logger.debug(f"Loaded {self.path} ({image.width}x{image.height}px, mode {image.mode})")
        return Raster(image, density_multiplier)


RasterInput = Union[Raster, Image.Image, str, Path, RasterSource, None]


def as_raster_source(source: RasterInput) -> RasterSource:
    """
    Coerce a supported input into a RasterSource.

    Accepts a RasterSource, a Raster (re-captured at its own density
    only), a PIL image, or a path to an image or PDF file.

    Raises:
        CaptureError: If source is None or of an unsupported type
    """
    if source is None:
        raise CaptureError("Unable to get the target element")
    if isinstance(source, RasterSource):
        return source
    if isinstance(source, Raster):
        return _FixedRasterSource(source)
    if isinstance(source, Image.Image):
        return ImageRasterSource(source)
    if isinstance(source, (str, Path)):
        path = Path(source)
        if path.suffix.lower() == PDF_SUFFIX:
            from .pdf import PdfPageRasterSource
            return PdfPageRasterSource(path)
        return ImageFileRasterSource(path)
    raise CaptureError(f"Unsupported raster source: {type(source).__name__}")


class _FixedRasterSource(RasterSource):
    """Wraps an already captured Raster; its own density wins."""

    def __init__(self, raster: Raster) -> None:
        self._raster = raster

    def capture(self, density_multiplier: float) -> Raster:
        return self._raster
