#!/usr/bin/env python3
"""
Command line entry point: convert an image or PDF page into a
paginated PDF.

Example:
    raster-paginator report.png -o report.pdf --margin MEDIUM
    raster-paginator statement.pdf --page 2 --format letter --orientation landscape
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from raster_paginator import __version__
from raster_paginator.common.errors import ConfigurationError, ConversionError
from raster_paginator.common.page_formats import supported_formats
from raster_paginator.converter import Resolution, generate_pdf
from raster_paginator.converter.capture import PdfPageRasterSource, as_raster_source
from raster_paginator.core.models import MarginPreset

logger = logging.getLogger("raster_paginator.cli")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def _margin_arg(value: str) -> Any:
    """Parse --margin: a preset name, one number, or top,right,bottom,left."""
    parts = [p.strip() for p in value.split(",")]
    if len(parts) == 1:
        return parts[0]
    if len(parts) != 4:
        raise argparse.ArgumentTypeError(
            f"margin must be one value or four (top,right,bottom,left): {value!r}"
        )
    return dict(zip(("top", "right", "bottom", "left"), parts))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="raster-paginator",
        description="Split a tall image (or a PDF page) into a multi-page PDF.",
    )
    parser.add_argument("input", type=Path, nargs="?", help="Image file or PDF to convert")
    parser.add_argument("-o", "--output", help="Output PDF path (default: <epoch ms>.pdf)")
    parser.add_argument(
        "--method", choices=["save", "open", "build"], default="save",
        help="save to --output, open in a viewer, or only build (default: save)",
    )
    parser.add_argument(
        "--resolution", default=str(int(Resolution.MEDIUM)),
        help=f"Density multiplier or preset ({', '.join(Resolution.__members__)}); default 3",
    )
    parser.add_argument(
        "--margin", type=_margin_arg, default=MarginPreset.NONE.name,
        help=f"Margin in mm, preset ({', '.join(MarginPreset.__members__)}) or T,R,B,L",
    )
    parser.add_argument(
        "--format", dest="page_format", default="A4", metavar="FORMAT",
        help="Page format name (default: A4)",
    )
    parser.add_argument("--orientation", choices=["portrait", "landscape"], default="portrait")
    parser.add_argument("--mime-type", choices=["image/jpeg", "image/png"], default="image/jpeg")
    parser.add_argument("--quality", type=float, default=1.0, help="JPEG quality ratio in (0, 1]")
    parser.add_argument("--page", type=int, help="Page of a PDF input to capture (1-based, default 1)")
    parser.add_argument("--title", help="PDF document title")
    parser.add_argument("--author", help="PDF document author")
    parser.add_argument("--list-formats", action="store_true", help="List page formats and exit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Warnings and errors only")
    return parser


def options_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    """Translate parsed arguments into a generate_pdf options mapping."""
    document = {"creator": f"raster-paginator {__version__}"}
    if args.title:
        document["title"] = args.title
    if args.author:
        document["author"] = args.author
    return {
        "filename": args.output,
        "method": args.method,
        "resolution": args.resolution,
        "page": {
            "margin": args.margin,
            "format": args.page_format,
            "orientation": args.orientation,
        },
        "canvas": {"mimeType": args.mime_type, "qualityRatio": args.quality},
        "document": document,
    }


def _configure_logging(args: argparse.Namespace) -> None:
    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_formats:
        print("\n".join(supported_formats()))
        return EXIT_OK
    if args.input is None:
        parser.error("the following arguments are required: input")

    is_pdf = args.input.suffix.lower() == ".pdf"
    if args.page is not None and not is_pdf:
        parser.error(f"--page applies only to PDF input, not {args.input.name}")

    _configure_logging(args)

    if is_pdf:
        page = 1 if args.page is None else args.page
        source = PdfPageRasterSource(args.input, page_number=page - 1)
    else:
        source = as_raster_source(args.input)

    try:
        result = generate_pdf(source, options_from_args(args))
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG
    except ConversionError as e:
        print(f"Conversion failed: {e}", file=sys.stderr)
        return EXIT_FAILED

    if result.output_path is not None:
        print(result.output_path)
    else:
        logger.info(f"Built {result.page_count} page(s); nothing written (--method build)")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
