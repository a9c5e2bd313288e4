"""
Module: converter.controller

Purpose:
    Orchestrate a conversion from raster to finished document.
    Resolve geometry → Fit → Compose pages 1..n → Finalize

Key Functions:
    - convert(): Raster + ConversionConfig -> ConversionResult
    - generate_pdf(): Capture, convert and finalize in one call

Key Classes:
    - ConversionResult: Built document and its geometry

Dependencies:
    - converter.geometry: Geometry and fit
    - converter.slicing: Slice planning
    - converter.output: Composition, document writer, finalization
    - converter.capture: Raster sources

Used By:
    - cli: Command line conversion
"""

from __future__ import annotations

import dataclasses
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional, Union

from raster_paginator.core.models import PageFormat, PageSlice, Raster

from .capture import as_raster_source
from .capture.sources import RasterInput
from .config import ConversionConfig, DocumentOptions
from .geometry import FitResult, PageGeometry, calculate_fit, resolve_geometry
from .output import DocumentWriter, PlacedImage, ReportLabDocument, compose_page, finalize
from .slicing import plan_slices

logger = logging.getLogger(__name__)

DocumentFactory = Callable[[PageFormat, DocumentOptions], DocumentWriter]


@dataclass(frozen=True)
class ConversionResult:
    """
    Complete conversion result (immutable).

    Attributes:
        document: Finished document (closed)
        geometry: Resolved page geometry
        fit: Fit factor, page budget and page count
        slices: Page slices in page order
        placements: One placed image per page
        output_path: File written by SAVE/OPEN (None for BUILD)
        elapsed_s: Wall time for the conversion

    Example:
        >>> result = convert(raster, ConversionConfig())
        >>> result.page_count
        2
    """

    document: DocumentWriter
    geometry: PageGeometry
    fit: FitResult
    slices: tuple[PageSlice, ...]
    placements: tuple[PlacedImage, ...]
    output_path: Optional[Path] = None
    elapsed_s: float = 0.0

    @property
    def page_count(self) -> int:
        """Number of pages in the document."""
        return len(self.placements)

    def to_bytes(self) -> bytes:
        """Serialized document."""
        return self.document.to_bytes()


def convert(
    raster: Raster,
    config: Optional[ConversionConfig] = None,
    *,
    document_factory: DocumentFactory = ReportLabDocument,
) -> ConversionResult:
    """
    Convert a raster into a paginated document.

    Geometry and fit are resolved once, before any page is composed, so
    configuration errors fail fast. Pages are then composed strictly in
    order. A failure while composing discards the document; a document
    with missing pages is never returned.

    Args:
        raster: Captured raster; its density multiplier is ground truth
        config: Conversion configuration (defaults if None)
        document_factory: Creates the document writer

    Returns:
        ConversionResult holding the closed document

    Raises:
        ConfigurationError: Invalid geometry (nothing composed)
        EncodingError: A page slice could not be encoded
        DocumentError: The document writer failed
    """
    config = config or ConversionConfig()
    start_time = time.perf_counter()

    if raster.density_multiplier != config.resolution:
        logger.warning(
            f"Raster density {raster.density_multiplier}x differs from configured "
            f"resolution {config.resolution}x; using raster density"
        )

    # 1. Resolve geometry
    geometry = resolve_geometry(config.page_format, config.margin)

    # 2. Fit raster to pages
    fit = calculate_fit(raster.width, raster.height, raster.density_multiplier, geometry)
    logger.info(
        f"Converting {raster.width}x{raster.height}px raster onto {fit.page_count} "
        f"{config.page_format.name} page(s), fit factor {fit.horizontal_fit_factor:.4f}"
    )

    # 3. Compose pages in order
    slices = plan_slices(raster.height, raster.width, fit.page_budget_px)
    document = document_factory(config.page_format, config.document)
    placements: List[PlacedImage] = []
    try:
        for page_slice in slices:
            placements.append(compose_page(document, raster, page_slice, fit, geometry, config))
        document.close()
    except Exception:
        document.discard()
        logger.error(f"Conversion aborted after {len(placements)}/{fit.page_count} pages")
        raise

    elapsed = time.perf_counter() - start_time
    logger.info(f"Composed {len(placements)} page(s) in {elapsed:.2f}s")

    return ConversionResult(
        document=document,
        geometry=geometry,
        fit=fit,
        slices=tuple(slices),
        placements=tuple(placements),
        elapsed_s=elapsed,
    )


def generate_pdf(
    source: RasterInput,
    options: Union[ConversionConfig, Mapping[str, Any], None] = None,
    *,
    document_factory: DocumentFactory = ReportLabDocument,
) -> ConversionResult:
    """
    Capture a source, convert it, and apply the configured output method.

    Pipeline:
    1. Build config from options (fails before capture if invalid)
    2. Capture the raster at config.resolution
    3. Convert
    4. Finalize: build / save / open

    Args:
        source: Raster, PIL image, image/PDF path, or RasterSource
        options: ConversionConfig or nested options mapping
        document_factory: Creates the document writer

    Returns:
        ConversionResult with output_path set for SAVE/OPEN

    Raises:
        ConfigurationError, CaptureError, EncodingError, DocumentError

    Example:
        >>> result = generate_pdf("report.png", {"filename": "report.pdf"})
        >>> result.output_path
        PosixPath('report.pdf')
    """
    if isinstance(options, ConversionConfig):
        config = options
    else:
        config = ConversionConfig.from_options(options)

    raster = as_raster_source(source).capture(config.resolution)
    result = convert(raster, config, document_factory=document_factory)
    output_path = finalize(result.document, config.method, config.filename)
    return dataclasses.replace(result, output_path=output_path)
