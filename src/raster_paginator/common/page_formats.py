"""
Module: common.page_formats

Purpose:
    Registry of named physical page sizes, in millimetres, built from
    the sizes ReportLab ships in ``reportlab.lib.pagesizes``.

Key Functions:
    - lookup_format(): Resolve a format name like "A4" or "letter"
    - supported_formats(): List every registered name

Dependencies:
    - reportlab.lib.pagesizes: Page sizes in points
    - common.units: Points to millimetres

Used By:
    - core.models.page: PageFormat.from_name
    - cli: --format choices
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from reportlab.lib import pagesizes

from .errors import ConfigurationError
from .units import pt_to_mm

# Aliases accepted on top of ReportLab's own constant names
_ALIASES = {
    "ELEVEN_SEVENTEEN": "ELEVENSEVENTEEN",
    "HALFLETTER": "HALF_LETTER",
    "JUNIORLEGAL": "JUNIOR_LEGAL",
}


def _build_registry() -> Dict[str, Tuple[float, float]]:
    registry: Dict[str, Tuple[float, float]] = {}
    for name, value in vars(pagesizes).items():
        if not name.isupper() or not isinstance(value, tuple) or len(value) != 2:
            continue
        width_pt, height_pt = value
        # Round away float noise from the point round trip (210*mm/mm != 210.0)
        registry[name] = (round(pt_to_mm(width_pt), 3), round(pt_to_mm(height_pt), 3))
    return registry


_FORMATS = _build_registry()


def _normalise(name: str) -> str:
    key = name.strip().upper().replace("-", "_").replace(" ", "_")
    return _ALIASES.get(key, key)


def lookup_format(name: str) -> Tuple[float, float]:
    """
    Resolve a named page format to (width_mm, height_mm).

    Lookup is case-insensitive and accepts "-" or " " for "_".
    Sizes are returned as ReportLab defines them (portrait for ISO sizes).

    Args:
        name: Format name, e.g. "A4", "letter", "half-letter"

    Returns:
        Tuple of (width_mm, height_mm)

    Raises:
        ConfigurationError: If the name is not registered

    Example:
        >>> lookup_format("a4")
        (210.0, 297.0)
    """
    size = _FORMATS.get(_normalise(name))
    if size is None:
        raise ConfigurationError(f"Unknown page format: {name!r}")
    return size


def supported_formats() -> List[str]:
    """Return all registered format names, sorted."""
    return sorted(_FORMATS)
