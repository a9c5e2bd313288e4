"""
Module: converter.output.finalize

Purpose:
    Terminal action on a finished document: return it, save it, or
    open it for viewing. The document is built identically in every
    mode; only this last step differs.

Key Functions:
    - finalize(): Dispatch on OutputMethod
    - default_filename(): "<epoch milliseconds>.pdf"

Dependencies:
    - webbrowser (std): Opening the document for viewing
    - tempfile (std): Backing file for OPEN

Used By:
    - converter.controller: generate_pdf()
"""

from __future__ import annotations

import logging
import tempfile
import time
import webbrowser
from pathlib import Path
from typing import Optional, Union

from raster_paginator.common.errors import DocumentError

from ..config import OutputMethod
from .document import DocumentWriter

logger = logging.getLogger(__name__)


def default_filename() -> str:
    """Filename used by SAVE when none is configured."""
    return f"{int(time.time() * 1000)}.pdf"


def finalize(
    document: DocumentWriter,
    method: Union[OutputMethod, str] = OutputMethod.SAVE,
    filename: Optional[Union[str, Path]] = None,
) -> Optional[Path]:
    """
    Apply the output method to a built document.

    Args:
        document: Built document (closed here if still open)
        method: BUILD, SAVE or OPEN
        filename: Target path for SAVE

    Returns:
        Path written for SAVE/OPEN, None for BUILD

    Raises:
        DocumentError: If the document cannot be finalized or written,
            or the viewer cannot be launched
    """
    method = OutputMethod(method)
    document.close()

    if method is OutputMethod.BUILD:
        logger.info(f"Built {document.page_count} page document in memory")
        return None

    if method is OutputMethod.SAVE:
        target = Path(filename) if filename else Path(default_filename())
        if target.suffix.lower() != ".pdf":
            logger.warning(f"Saving PDF document without .pdf extension: {target}")
        return document.save(target)

    # OutputMethod.OPEN
    with tempfile.NamedTemporaryFile(prefix="raster_paginator_", suffix=".pdf", delete=False) as tmp:
        target = Path(tmp.name)
    document.save(target)
    if not webbrowser.open(target.resolve().as_uri()):
        raise DocumentError(f"No viewer available to open {target}")
    logger.info(f"Opened {target} for viewing")
    return target
