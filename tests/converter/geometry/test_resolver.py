"""
Unit tests for the geometry resolver.

Covers printable area for uniform and per-edge margins, and the
configuration errors raised before any conversion work.
"""

import pytest

from raster_paginator.common.errors import ConfigurationError
from raster_paginator.common.units import PX_PER_MM
from raster_paginator.converter.geometry import resolve_geometry
from raster_paginator.core.models import (
    MarginPreset,
    PageFormat,
    PerEdgeMargin,
    UniformMargin,
)


@pytest.fixture
def a4():
    return PageFormat.from_name("A4")


class TestResolveGeometry:

    def test_when_no_margin_then_printable_is_whole_page(self, a4):
        g = resolve_geometry(a4, UniformMargin(MarginPreset.NONE))

        assert g.printable_width_mm == pytest.approx(210)
        assert g.printable_height_mm == pytest.approx(297)
        assert g.printable_width_px == pytest.approx(793.70, abs=0.01)
        assert g.printable_height_px == pytest.approx(1122.52, abs=0.01)
        assert g.origin_mm == (0, 0)

    def test_when_medium_margin_then_ten_mm_removed_per_edge(self, a4):
        g = resolve_geometry(a4, UniformMargin(MarginPreset.MEDIUM))

        assert g.printable_width_mm == pytest.approx(190)
        assert g.printable_height_mm == pytest.approx(277)
        assert g.printable_width_px == pytest.approx(718.11, abs=0.01)
        assert g.printable_height_px == pytest.approx(1046.93, abs=0.01)
        assert g.origin_mm == (10, 10)

    def test_when_per_edge_margin_then_axes_use_own_edges(self, a4):
        margin = PerEdgeMargin(top=20, right=5, bottom=30, left=15)

        g = resolve_geometry(a4, margin)

        assert g.printable_width_mm == pytest.approx(190)  # 210 - (15 + 5)
        assert g.printable_height_mm == pytest.approx(247)  # 297 - (20 + 30)
        assert g.origin_mm == (15, 20)

    def test_when_landscape_then_page_pixels_swap(self):
        g = resolve_geometry(PageFormat.from_name("A4", "landscape"), UniformMargin(0))

        assert g.page_width_px == pytest.approx(297 * PX_PER_MM)
        assert g.page_height_px == pytest.approx(210 * PX_PER_MM)

    def test_when_margins_consume_width_then_raises_error(self, a4):
        with pytest.raises(ConfigurationError, match="exceed page width"):
            resolve_geometry(a4, UniformMargin(105))

    def test_when_margins_consume_height_then_raises_error(self, a4):
        with pytest.raises(ConfigurationError, match="exceed page height"):
            resolve_geometry(a4, PerEdgeMargin(top=200, bottom=97))

    @pytest.mark.parametrize("margin", [-1, {"top": 0, "right": 0, "bottom": 0, "left": -2}])
    def test_when_margin_option_negative_then_raises_error(self, a4, margin):
        with pytest.raises(ConfigurationError, match="must be non-negative"):
            resolve_geometry(a4, margin)

    def test_accepts_margin_option_values(self, a4):
        g = resolve_geometry(a4, "SMALL")
        assert g.printable_width_mm == pytest.approx(200)

    def test_result_is_immutable(self, a4):
        g = resolve_geometry(a4, UniformMargin(0))
        with pytest.raises(AttributeError):
            g.printable_width_mm = 1
