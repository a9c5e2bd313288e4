"""
Module: common.errors

Purpose:
    Error taxonomy for the conversion engine. Every failure surfaces to
    the caller as one of these, with the underlying library exception
    chained as ``__cause__`` where there is one.

Key Classes:
    - ConversionError: Base class for all engine failures
    - ConfigurationError: Invalid geometry or options (caller-fixable)
    - CaptureError: Source raster missing, unreadable or empty
    - EncodingError: A page slice could not be encoded
    - DocumentError: The document writer failed

Used By:
    - core.models: Validation on construction
    - converter: Geometry, fitting, composition and output
"""

from __future__ import annotations


class ConversionError(Exception):
    """Base class for failures while converting a raster to a document."""
    pass


class ConfigurationError(ConversionError, ValueError):
    """Invalid configuration, raised before any capture or encoding."""
    pass


class CaptureError(ConversionError):
    """The source raster could not be captured or is empty."""
    pass


class EncodingError(ConversionError):
    """A page slice could not be encoded; the whole conversion is aborted."""
    pass


class DocumentError(ConversionError):
    """The document writer failed to create, append, place or finalize."""
    pass
