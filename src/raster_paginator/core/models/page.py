"""
Module: core.models.page

Purpose:
    Physical page format and orientation.

Key Classes:
    - Orientation: portrait / landscape
    - PageFormat: Immutable page size in millimetres

Dependencies:
    - common.page_formats: Named sizes

Used By:
    - converter.config: ConversionConfig.page_format
    - converter.geometry.resolver: Page dimensions
    - converter.output.document: Page size in points
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from raster_paginator.common.errors import ConfigurationError
from raster_paginator.common.page_formats import lookup_format


class Orientation(str, Enum):
    """Page orientation."""

    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"

    @classmethod
    def parse(cls, value: Union[str, "Orientation"]) -> "Orientation":
        """
        Parse an orientation, accepting the short forms "p" and "l".

        Raises:
            ConfigurationError: If the value is not an orientation
        """
        if isinstance(value, Orientation):
            return value
        key = str(value).strip().lower()
        if key in ("p", "portrait"):
            return cls.PORTRAIT
        if key in ("l", "landscape"):
            return cls.LANDSCAPE
        raise ConfigurationError(f"Unknown orientation: {value!r}")


@dataclass(frozen=True)
class PageFormat:
    """
    Physical page size (immutable).

    width_mm/height_mm are always oriented: a portrait page has
    width <= height, a landscape page width >= height, whatever order
    the size was given in.

    Attributes:
        width_mm: Page width in millimetres
        height_mm: Page height in millimetres
        orientation: Page orientation
        name: Format name when created from the registry

    Example:
        >>> PageFormat.from_name("A4", "landscape").size_mm
        (297.0, 210.0)
    """

    width_mm: float
    height_mm: float
    orientation: Orientation = Orientation.PORTRAIT
    name: str = "custom"

    def __post_init__(self) -> None:
        """Validate size and normalise edge order to the orientation."""
        if self.width_mm <= 0 or self.height_mm <= 0:
            raise ConfigurationError(
                f"Page size must be positive: {self.width_mm}x{self.height_mm}mm"
            )
        orientation = Orientation.parse(self.orientation)
        short, long = sorted((self.width_mm, self.height_mm))
        if orientation is Orientation.PORTRAIT:
            width, height = short, long
        else:
            width, height = long, short
        object.__setattr__(self, "orientation", orientation)
        object.__setattr__(self, "width_mm", width)
        object.__setattr__(self, "height_mm", height)

    @classmethod
    def from_name(
        cls,
        name: str,
        orientation: Union[str, Orientation] = Orientation.PORTRAIT,
    ) -> "PageFormat":
        """Create a page format from a registered name like "A4"."""
        width, height = lookup_format(name)
        return cls(width, height, Orientation.parse(orientation), name=name.upper())

    @classmethod
    def from_value(
        cls,
        value: Union[str, Tuple[float, float], "PageFormat"],
        orientation: Union[str, Orientation] = Orientation.PORTRAIT,
    ) -> "PageFormat":
        """
        Create a page format from a name, an explicit (width, height) pair
        in millimetres, or an existing PageFormat (re-oriented).
        """
        if isinstance(value, PageFormat):
            return cls(value.width_mm, value.height_mm, Orientation.parse(orientation), value.name)
        if isinstance(value, str):
            return cls.from_name(value, orientation)
        try:
            width, height = value
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid page format: {value!r}") from e
        return cls(float(width), float(height), Orientation.parse(orientation))

    @property
    def size_mm(self) -> Tuple[float, float]:
        """(width_mm, height_mm) tuple."""
        return (self.width_mm, self.height_mm)
