"""
Unit tests for the fit calculator.

Includes the worked A4 scenarios (2000x6000px raster at density 3).
"""

import math

import pytest

from raster_paginator.common.errors import ConfigurationError
from raster_paginator.converter.geometry import (
    calculate_fit,
    horizontal_fit_factor,
    resolve_geometry,
)
from raster_paginator.core.models import PageFormat, UniformMargin


@pytest.fixture
def a4_geometry():
    return resolve_geometry(PageFormat.from_name("A4"), UniformMargin(0))


class TestHorizontalFitFactor:

    def test_when_narrower_than_page_then_one(self):
        assert horizontal_fit_factor(667, 794) == 1.0

    def test_when_equal_to_page_then_one(self):
        assert horizontal_fit_factor(794, 794) == 1.0

    def test_when_wider_than_page_then_ratio_above_one(self):
        factor = horizontal_fit_factor(1600, 793.7007874015749)
        assert factor == pytest.approx(2.0159, abs=1e-4)
        assert factor > 1

    def test_when_printable_width_not_positive_then_raises_error(self):
        with pytest.raises(ConfigurationError):
            horizontal_fit_factor(100, 0)


class TestCalculateFit:

    def test_when_a4_no_margin_then_two_pages(self, a4_geometry):
        fit = calculate_fit(2000, 6000, 3, a4_geometry)

        assert fit.horizontal_fit_factor == 1.0
        assert fit.page_height_budget == pytest.approx(3367.56, abs=0.01)
        assert fit.page_budget_px == 3367
        assert fit.page_count == 2
        assert not fit.single_page

    def test_when_a4_medium_margin_then_two_pages(self):
        geometry = resolve_geometry(PageFormat.from_name("A4"), UniformMargin(10))

        fit = calculate_fit(2000, 6000, 3, geometry)

        assert fit.horizontal_fit_factor == 1.0  # 667 < 718
        assert fit.page_budget_px == 3140
        assert fit.page_count == 2

    def test_when_wider_than_page_then_budget_inflated_by_factor(self, a4_geometry):
        fit = calculate_fit(4800, 6000, 3, a4_geometry)  # native width 1600

        expected_factor = 1600 / a4_geometry.printable_width_px
        assert fit.horizontal_fit_factor == pytest.approx(expected_factor)
        assert fit.page_height_budget == pytest.approx(
            a4_geometry.printable_height_px * 3 * expected_factor
        )
        assert fit.page_budget_px == math.floor(fit.page_height_budget)
        assert fit.page_count == 1

    def test_when_raster_fits_then_single_page(self, a4_geometry):
        fit = calculate_fit(2000, 3000, 3, a4_geometry)

        assert fit.single_page
        assert fit.page_count == 1

    def test_when_raster_height_equals_budget_then_single_page(self, a4_geometry):
        fit = calculate_fit(2000, 3367, 3, a4_geometry)

        assert fit.single_page
        assert fit.page_count == 1

    def test_when_one_row_over_budget_then_two_pages(self, a4_geometry):
        fit = calculate_fit(2000, 3368, 3, a4_geometry)

        assert fit.page_count == 2

    def test_when_density_not_positive_then_raises_error(self, a4_geometry):
        with pytest.raises(ConfigurationError, match="density_multiplier"):
            calculate_fit(100, 100, 0, a4_geometry)

    def test_when_page_holds_no_rows_then_raises_error(self):
        geometry = resolve_geometry(PageFormat(100, 0.1, "landscape"), UniformMargin(0))
        with pytest.raises(ConfigurationError, match="no raster rows"):
            calculate_fit(10, 10, 1, geometry)

    def test_scale_divisor_combines_density_and_factor(self, a4_geometry):
        fit = calculate_fit(4800, 100, 3, a4_geometry)
        # Full raster width placed at exactly the printable width
        assert 4800 / fit.scale_divisor == pytest.approx(a4_geometry.printable_width_mm)
