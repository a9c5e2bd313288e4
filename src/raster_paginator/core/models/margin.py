"""
Module: core.models.margin

Purpose:
    Page margins as a tagged variant: one uniform length, or four
    independent edge lengths. Both resolve to EdgeMargins (four explicit
    numbers) so consumers never branch on the margin shape.

Key Classes:
    - MarginPreset: Named margins (NONE, SMALL, MEDIUM, LARGE)
    - UniformMargin: Same length on all four edges
    - PerEdgeMargin: Independent top/right/bottom/left
    - EdgeMargins: Resolved four-number form

Key Functions:
    - margin_from_value(): Coerce options values into a Margin

Used By:
    - converter.config: ConversionConfig.margin
    - converter.geometry.resolver: Printable area
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Mapping, Union

from raster_paginator.common.errors import ConfigurationError


class MarginPreset(IntEnum):
    """Named margins in millimetres."""

    NONE = 0
    SMALL = 5
    MEDIUM = 10
    LARGE = 25


def _check_length(edge: str, value: float) -> None:
    if value < 0:
        raise ConfigurationError(f"Margin {edge} must be non-negative: {value}")


@dataclass(frozen=True)
class EdgeMargins:
    """Four explicit edge margins in millimetres."""

    top: float
    right: float
    bottom: float
    left: float

    @property
    def horizontal(self) -> float:
        """left + right."""
        return self.left + self.right

    @property
    def vertical(self) -> float:
        """top + bottom."""
        return self.top + self.bottom


@dataclass(frozen=True)
class UniformMargin:
    """
    A single margin length applied to all four edges.

    Example:
        >>> UniformMargin(MarginPreset.MEDIUM).resolve().horizontal
        20.0
    """

    length_mm: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "length_mm", float(self.length_mm))
        _check_length("length", self.length_mm)

    def resolve(self) -> EdgeMargins:
        """Expand to four explicit edges."""
        m = self.length_mm
        return EdgeMargins(top=m, right=m, bottom=m, left=m)


@dataclass(frozen=True)
class PerEdgeMargin:
    """Independent margins per edge, in millimetres."""

    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0

    def __post_init__(self) -> None:
        for edge in ("top", "right", "bottom", "left"):
            value = float(getattr(self, edge))
            object.__setattr__(self, edge, value)
            _check_length(edge, value)

    def resolve(self) -> EdgeMargins:
        return EdgeMargins(top=self.top, right=self.right, bottom=self.bottom, left=self.left)


Margin = Union[UniformMargin, PerEdgeMargin]


def _length_from_value(value: Any) -> float:
    if isinstance(value, str):
        key = value.strip().upper()
        if key in MarginPreset.__members__:
            return float(MarginPreset[key])
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid margin length: {value!r}") from e


def margin_from_value(value: Union[Margin, MarginPreset, float, str, Mapping[str, Any], None]) -> Margin:
    """
    Coerce a margin option into a Margin.

    Accepts an existing margin, a preset (enum or name like "MEDIUM"),
    a number of millimetres, or a mapping with top/right/bottom/left
    (missing edges default to 0).

    Raises:
        ConfigurationError: If the value cannot be interpreted or is negative

    Example:
        >>> margin_from_value("small")
        UniformMargin(length_mm=5.0)
        >>> margin_from_value({"top": 10, "bottom": 10}).resolve().vertical
        20.0
    """
    if value is None:
        return UniformMargin(MarginPreset.NONE)
    if isinstance(value, (UniformMargin, PerEdgeMargin)):
        return value
    if isinstance(value, Mapping):
        unknown = set(value) - {"top", "right", "bottom", "left"}
        if unknown:
            raise ConfigurationError(f"Unknown margin edges: {sorted(unknown)}")
        return PerEdgeMargin(**{edge: _length_from_value(v) for edge, v in value.items()})
    return UniformMargin(_length_from_value(value))
