"""
Module: converter.config

Purpose:
    Configuration for a single conversion request. Immutable, with
    validation on construction; fully determines the page geometry.

Key Classes:
    - Resolution: Named density multipliers
    - MimeType: Page image encodings
    - OutputMethod: What happens to the finished document
    - ImageEncoding: Encoding format and quality ratio
    - DocumentOptions: PDF metadata and compression
    - ConversionConfig: Main configuration

Dependencies:
    - dataclasses (std)
    - core.models: PageFormat, Margin

Used By:
    - converter.controller: convert(), generate_pdf()
    - converter.output: Composition and finalization
    - cli: Builds options from arguments
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Mapping, Optional, Union

from raster_paginator.common.errors import ConfigurationError
from raster_paginator.core.models import (
    Margin,
    MarginPreset,
    Orientation,
    PageFormat,
    UniformMargin,
    margin_from_value,
)

DEFAULT_FORMAT = "A4"


class Resolution(IntEnum):
    """Named density multipliers for capture."""

    LOW = 1
    NORMAL = 2
    MEDIUM = 3
    HIGH = 7
    EXTREME = 12


class MimeType(str, Enum):
    """Encodings available for page images."""

    JPEG = "image/jpeg"
    PNG = "image/png"

    @property
    def pil_format(self) -> str:
        """Format name understood by PIL's Image.save."""
        return "JPEG" if self is MimeType.JPEG else "PNG"


class OutputMethod(str, Enum):
    """Terminal action applied to the finished document."""

    SAVE = "save"   # Write to the configured filename
    OPEN = "open"   # Write to a temporary file and open a viewer
    BUILD = "build"  # Return the in-memory document only


def _parse_enum(enum_cls, value, label: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError as e:
        choices = ", ".join(m.value for m in enum_cls)
        raise ConfigurationError(f"Unknown {label}: {value!r} (expected one of {choices})") from e


def parse_resolution(value: Union[Resolution, float, int, str]) -> float:
    """
    Parse a resolution given as a number or a preset name like "HIGH".

    Raises:
        ConfigurationError: If the value is not a positive number or preset
    """
    if isinstance(value, str) and value.strip().upper() in Resolution.__members__:
        return float(Resolution[value.strip().upper()])
    try:
        resolution = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid resolution: {value!r}") from e
    if resolution <= 0:
        raise ConfigurationError(f"resolution must be positive: {value}")
    return resolution


@dataclass(frozen=True)
class ImageEncoding:
    """
    How page slices are encoded before placement.

    Attributes:
        mime_type: image/jpeg (lossy) or image/png (lossless)
        quality_ratio: Lossy quality in (0, 1]; ignored for PNG
    """

    mime_type: MimeType = MimeType.JPEG
    quality_ratio: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "mime_type", _parse_enum(MimeType, self.mime_type, "mime type"))
        try:
            object.__setattr__(self, "quality_ratio", float(self.quality_ratio))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid quality_ratio: {self.quality_ratio!r}") from e
        if not 0 < self.quality_ratio <= 1:
            raise ConfigurationError(f"quality_ratio must be in (0, 1]: {self.quality_ratio}")

    @property
    def jpeg_quality(self) -> int:
        """PIL JPEG quality (1-100) for the ratio."""
        return max(1, min(100, round(self.quality_ratio * 100)))


@dataclass(frozen=True)
class DocumentOptions:
    """PDF metadata and stream compression for the output document."""

    title: Optional[str] = None
    author: Optional[str] = None
    subject: Optional[str] = None
    creator: Optional[str] = None
    compress: bool = True


@dataclass(frozen=True)
class ConversionConfig:
    """
    Configuration for one conversion (immutable).

    Attributes:
        resolution: Density multiplier used to capture the raster
        page_format: Page size and orientation
        margin: Uniform or per-edge margins
        encoding: Page image encoding
        method: Terminal action for the finished document
        filename: Target for OutputMethod.SAVE (default: <epoch ms>.pdf)
        document: PDF metadata

    Example:
        >>> config = ConversionConfig.from_options({"page": {"margin": "MEDIUM"}})
        >>> config.margin
        UniformMargin(length_mm=10.0)
    """

    resolution: float = float(Resolution.MEDIUM)
    page_format: PageFormat = field(default_factory=lambda: PageFormat.from_name(DEFAULT_FORMAT))
    margin: Margin = field(default_factory=lambda: UniformMargin(MarginPreset.NONE))
    encoding: ImageEncoding = field(default_factory=ImageEncoding)
    method: OutputMethod = OutputMethod.SAVE
    filename: Optional[str] = None
    document: DocumentOptions = field(default_factory=DocumentOptions)

    def __post_init__(self) -> None:
        """Validate and normalise on construction."""
        object.__setattr__(self, "resolution", parse_resolution(self.resolution))
        if not isinstance(self.page_format, PageFormat):
            object.__setattr__(self, "page_format", PageFormat.from_value(self.page_format))
        object.__setattr__(self, "encoding", _encoding_from_value(self.encoding))
        object.__setattr__(self, "margin", margin_from_value(self.margin))
        object.__setattr__(self, "method", _parse_enum(OutputMethod, self.method, "method"))

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None) -> "ConversionConfig":
        """
        Build a config from a partial, nested options mapping.

        Each section (page, canvas, document) is merged over its defaults
        independently, so {"page": {"margin": 10}} keeps the default format
        and orientation. Keys may be camelCase or snake_case.

        Recognised keys:
            filename, method, resolution,
            page.{margin, format, orientation},
            canvas.{mimeType, qualityRatio},
            document.{title, author, subject, creator, compress}

        Raises:
            ConfigurationError: On unknown keys or invalid values
        """
        options = dict(options or {})
        _reject_unknown(options, {"filename", "method", "resolution", "page", "canvas", "document"}, "")

        page = _section(options, "page", {"margin", "format", "orientation"})
        canvas = _section(options, "canvas", {"mimeType", "mime_type", "qualityRatio", "quality_ratio"})
        document = _section(options, "document", {"title", "author", "subject", "creator", "compress"})

        orientation = Orientation.parse(page.get("orientation", Orientation.PORTRAIT))
        page_format = PageFormat.from_value(page.get("format", DEFAULT_FORMAT), orientation)

        encoding = ImageEncoding(
            mime_type=canvas.get("mimeType", canvas.get("mime_type", MimeType.JPEG)),
            quality_ratio=canvas.get("qualityRatio", canvas.get("quality_ratio", 1.0)),
        )

        return cls(
            resolution=options.get("resolution", Resolution.MEDIUM),
            page_format=page_format,
            margin=margin_from_value(page.get("margin", MarginPreset.NONE)),
            encoding=encoding,
            method=options.get("method", OutputMethod.SAVE),
            filename=options.get("filename"),
            document=DocumentOptions(**document),
        )


def _encoding_from_value(value: Union[ImageEncoding, MimeType, str, Mapping[str, Any]]) -> ImageEncoding:
    """Accept an ImageEncoding, a bare mime type, or a mime_type/quality_ratio mapping."""
    if isinstance(value, ImageEncoding):
        return value
    if isinstance(value, Mapping):
        _reject_unknown(value, {"mime_type", "quality_ratio"}, "encoding.")
        return ImageEncoding(**value)
    if isinstance(value, (MimeType, str)):
        return ImageEncoding(mime_type=value)
    raise ConfigurationError(f"Invalid encoding: {value!r}")


def _section(options: Mapping[str, Any], name: str, allowed: set) -> dict:
    section = options.get(name) or {}
    if not isinstance(section, Mapping):
        raise ConfigurationError(f"Option {name!r} must be a mapping: {section!r}")
    _reject_unknown(section, allowed, f"{name}.")
    return dict(section)


def _reject_unknown(options: Mapping[str, Any], allowed: set, prefix: str) -> None:
    unknown = sorted(set(options) - allowed)
    if unknown:
        raise ConfigurationError(
            "Unknown options: " + ", ".join(f"{prefix}{key}" for key in unknown)
        )
