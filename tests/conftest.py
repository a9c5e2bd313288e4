import pytest
import sys
from pathlib import Path
from typing import List, Optional

from PIL import Image, ImageDraw

# Add src to sys.path so we can import raster_paginator
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from raster_paginator.common.errors import DocumentError
from raster_paginator.converter.config import DocumentOptions, MimeType
from raster_paginator.converter.output.document import DocumentWriter
from raster_paginator.core.models import PageFormat, Raster


class RecordingDocument(DocumentWriter):
    """Document writer that records calls instead of writing a PDF."""

    def __init__(
        self,
        page_format: PageFormat,
        options: Optional[DocumentOptions] = None,
        *,
        fail_on_page: Optional[int] = None,
    ) -> None:
        super().__init__(page_format, options)
        self.calls: List[tuple] = []
        self.fail_on_page = fail_on_page
        self.discarded = False

    def _add_page(self, page_format: PageFormat) -> None:
        self.calls.append(("add_page", page_format))

    def _place_image(self, image_data, mime_type, x, y, width, height) -> None:
        if self.fail_on_page == self.page_count:
            raise DocumentError(f"placement failed on page {self.page_count}")
        self.calls.append(("place_image", self.page_count, mime_type, x, y, width, height))

    def _close(self) -> None:
        self.calls.append(("close",))

    def discard(self) -> None:
        super().discard()
        self.discarded = True

    def to_bytes(self) -> bytes:
        if not self.closed:
            raise DocumentError("Document has not been finalized")
        return b"%PDF-recorded"


@pytest.fixture
def raster_factory():
    """Factory for rasters with a horizontal stripe every 100 rows."""
    def _create(width: int, height: int, density: float = 3, mode: str = "RGB") -> Raster:
        img = Image.new(mode, (width, height), color="white")
        draw = ImageDraw.Draw(img)
        for y in range(0, height, 100):
            draw.rectangle([0, y, width - 1, min(y + 1, height - 1)], fill="black")
        return Raster(img, density)
    return _create


@pytest.fixture
def recording_documents():
    """Factory that creates RecordingDocuments and remembers them."""
    created: List[RecordingDocument] = []

    def _factory(page_format, options=None):
        doc = RecordingDocument(page_format, options)
        created.append(doc)
        return doc

    _factory.created = created
    return _factory


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple tall test image on disk."""
    img = Image.new("RGB", (600, 2400), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path
