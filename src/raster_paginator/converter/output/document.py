"""
Module: converter.output.document

Purpose:
    The document-writer collaborator. DocumentWriter is the abstract
    capability the engine drives (add page, place image, finalize);
    ReportLabDocument implements it on a ReportLab canvas writing into
    an in-memory buffer.

Key Classes:
    - PlacedImage: Record of one image placed on a page
    - DocumentWriter: Abstract document capability
    - ReportLabDocument: PDF writer backed by ReportLab

Dependencies:
    - reportlab: PDF generation
    - common.units: Millimetres to points

Used By:
    - converter.output.composer: Page placement
    - converter.output.finalize: Output modes
    - converter.controller: Document lifecycle
"""

from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from raster_paginator.common.errors import DocumentError
from raster_paginator.common.units import mm_to_pt
from raster_paginator.core.models import PageFormat

from ..config import DocumentOptions, MimeType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacedImage:
    """
    One image placed on a document page. Positions and sizes in mm,
    measured from the top-left corner of the page.

    Attributes:
        page_index: 1-based page number
        x_mm: Left edge
        y_mm: Top edge
        width_mm: Placed width
        height_mm: Placed height
        mime_type: Encoding of the placed image data
        byte_size: Encoded image size in bytes
    """

    page_index: int
    x_mm: float
    y_mm: float
    width_mm: float
    height_mm: float
    mime_type: MimeType
    byte_size: int


class DocumentWriter(ABC):
    """
    Abstract document capability driven by the conversion engine.

    A new writer starts with one empty page of the given format. Pages
    are appended in order and images are only placed on the newest
    page. Once closed the writer is read-only.
    """

    def __init__(self, page_format: PageFormat, options: Optional[DocumentOptions] = None) -> None:
        self.page_format = page_format
        self.options = options or DocumentOptions()
        self._page_count = 1
        self._placements: List[PlacedImage] = []
        self._closed = False

    @property
    def page_count(self) -> int:
        """Number of pages created so far."""
        return self._page_count

    @property
    def placements(self) -> tuple[PlacedImage, ...]:
        """Every image placed so far, in placement order."""
        return tuple(self._placements)

    @property
    def closed(self) -> bool:
        return self._closed

    def add_page(self, page_format: Optional[PageFormat] = None) -> int:
        """
        Append a page and make it current.

        Returns:
            1-based index of the new page

        Raises:
            DocumentError: If the document is closed or the writer fails
        """
        self._require_open()
        self._add_page(page_format or self.page_format)
        self._page_count += 1
        return self._page_count

    def place_image(
        self,
        page_index: int,
        image_data: bytes,
        mime_type: MimeType,
        x: float,
        y: float,
        width: float,
        height: float,
    ) -> PlacedImage:
        """
        Place encoded image data on a page.

        Args:
            page_index: 1-based page; must be the current (newest) page
            image_data: Encoded image bytes
            mime_type: Encoding of image_data
            x, y: Top-left position in mm
            width, height: Placed size in mm

        Returns:
            PlacedImage record

        Raises:
            DocumentError: On out-of-order placement, closed document,
                or writer failure
        """
        self._require_open()
        if page_index != self._page_count:
            raise DocumentError(
                f"Cannot place image on page {page_index}; current page is {self._page_count}"
            )
        if width <= 0 or height <= 0:
            raise DocumentError(f"Placement size must be positive: {width}x{height}mm")

        self._place_image(image_data, mime_type, x, y, width, height)
        placed = PlacedImage(
            page_index=page_index,
            x_mm=x,
            y_mm=y,
            width_mm=width,
            height_mm=height,
            mime_type=mime_type,
            byte_size=len(image_data),
        )
        self._placements.append(placed)
        return placed

    def close(self) -> None:
        """Finish the document. Further pages or placements are rejected."""
        if self._closed:
            return
        self._close()
        self._closed = True

    def discard(self) -> None:
        """Drop an unfinished document without producing output."""
        self._placements.clear()
        self._closed = True

    def _require_open(self) -> None:
        if self._closed:
            raise DocumentError("Document is already finalized")

    @abstractmethod
    def _add_page(self, page_format: PageFormat) -> None:
        """Writer-specific page append."""

    @abstractmethod
    def _place_image(
        self,
        image_data: bytes,
        mime_type: MimeType,
        x: float,
        y: float,
        width: float,
        height: float,
    ) -> None:
        """Writer-specific image placement on the current page."""

    @abstractmethod
    def _close(self) -> None:
        """Writer-specific finalization."""

    @abstractmethod
    def to_bytes(self) -> bytes:
        """Serialized document. Only valid once closed."""

    def save(self, path: Path) -> Path:
        """
        Write the closed document to path, creating parent directories.

        Raises:
            DocumentError: If the document is not closed or cannot be written
        """
        data = self.to_bytes()
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise DocumentError(f"Failed to write document to {path}: {e}") from e
        logger.info(f"Wrote {self.page_count} page document to {path}")
        return path


class ReportLabDocument(DocumentWriter):
    """
    PDF document built on a ReportLab canvas.

    Top-down millimetre coordinates are converted to ReportLab's
    bottom-up points when images are drawn.

    Example:
        >>> doc = ReportLabDocument(PageFormat.from_name("A4"))
        >>> doc.place_image(1, jpeg_bytes, MimeType.JPEG, 0, 0, 210, 297)
        >>> doc.close()
        >>> doc.to_bytes()[:5]
        b'%PDF-'
    """

    def __init__(self, page_format: PageFormat, options: Optional[DocumentOptions] = None) -> None:
        super().__init__(page_format, options)
        self._buffer = io.BytesIO()
        self._current_format = page_format
        self._data: Optional[bytes] = None
        try:
            self._canvas = canvas.Canvas(
                self._buffer,
                pagesize=_page_size_pt(page_format),
                pageCompression=1 if self.options.compress else 0,
            )
            self._apply_metadata()
        except Exception as e:
            raise DocumentError(f"Failed to create PDF document: {e}") from e

    def _apply_metadata(self) -> None:
        opts = self.options
        if opts.title:
            self._canvas.setTitle(opts.title)
        if opts.author:
            self._canvas.setAuthor(opts.author)
        if opts.subject:
            self._canvas.setSubject(opts.subject)
        if opts.creator:
            self._canvas.setCreator(opts.creator)

    def _add_page(self, page_format: PageFormat) -> None:
        try:
            self._canvas.showPage()
            self._canvas.setPageSize(_page_size_pt(page_format))
        except Exception as e:
            raise DocumentError(f"Failed to add page {self._page_count + 1}: {e}") from e
        self._current_format = page_format

    def _place_image(
        self,
        image_data: bytes,
        mime_type: MimeType,
        x: float,
        y: float,
        width: float,
        height: float,
    ) -> None:
        page_height_pt = mm_to_pt(self._current_format.height_mm)
        # ReportLab's origin is bottom-left; (x, y) is the top-left corner in mm
        y_pt = page_height_pt - mm_to_pt(y + height)
        # PNG keeps its alpha channel; transparent pixels show the white page
        mask = "auto" if mime_type is MimeType.PNG else None
        try:
            self._canvas.drawImage(
                ImageReader(io.BytesIO(image_data)),
                mm_to_pt(x),
                y_pt,
                width=mm_to_pt(width),
                height=mm_to_pt(height),
                mask=mask,
            )
        except Exception as e:
            raise DocumentError(
                f"Failed to place {mime_type.value} image on page {self._page_count}: {e}"
            ) from e

    def _close(self) -> None:
        try:
            self._canvas.showPage()
            self._canvas.save()
        except Exception as e:
            raise DocumentError(f"Failed to finalize PDF document: {e}") from e
        self._data = self._buffer.getvalue()

    def discard(self) -> None:
        super().discard()
        self._buffer = io.BytesIO()
        self._data = None

    def to_bytes(self) -> bytes:
        if self._data is None:
            raise DocumentError("Document has not been finalized")
        return self._data


def _page_size_pt(page_format: PageFormat) -> tuple[float, float]:
    """Page (width, height) in points."""
    return (mm_to_pt(page_format.width_mm), mm_to_pt(page_format.height_mm))
