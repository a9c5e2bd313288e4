"""
Tests for converter.controller

Test Coverage:
- convert(): worked A4 scenarios, fail-fast configuration errors,
  abort on page failure, idempotent geometry
- generate_pdf(): options, capture and output methods
"""

import logging

import pytest
from PIL import Image

from raster_paginator.common.errors import (
    CaptureError,
    ConfigurationError,
    DocumentError,
    EncodingError,
)
from raster_paginator.converter import ConversionConfig, convert, generate_pdf
from raster_paginator.converter.output import composer
from raster_paginator.core.models import PerEdgeMargin, Raster

from conftest import RecordingDocument


def _geometry_of(result):
    return [
        (p.page_index, p.x_mm, p.y_mm, p.width_mm, p.height_mm)
        for p in result.placements
    ]


class TestConvertScenarios:

    def test_a4_no_margin_two_pages(self, raster_factory, recording_documents):
        raster = raster_factory(2000, 6000, density=3)

        result = convert(raster, ConversionConfig(), document_factory=recording_documents)

        assert result.fit.horizontal_fit_factor == 1.0
        assert result.fit.page_budget_px == 3367
        assert result.page_count == 2
        assert [s.pixel_height for s in result.slices] == [3367, 2633]
        assert all((p.x_mm, p.y_mm) == (0, 0) for p in result.placements)
        assert result.document.closed

    def test_a4_medium_margin_images_at_ten_mm(self, raster_factory, recording_documents):
        raster = raster_factory(2000, 6000, density=3)
        config = ConversionConfig.from_options({"page": {"margin": "MEDIUM"}})

        result = convert(raster, config, document_factory=recording_documents)

        assert result.page_count == 2
        assert [s.pixel_height for s in result.slices] == [3140, 2860]
        assert all((p.x_mm, p.y_mm) == (10, 10) for p in result.placements)

    def test_wide_raster_shrunk_to_printable_width(self, raster_factory, recording_documents):
        raster = raster_factory(4800, 20000, density=3)  # native width 1600px

        result = convert(raster, ConversionConfig(), document_factory=recording_documents)

        assert result.fit.horizontal_fit_factor == pytest.approx(1600 / result.geometry.printable_width_px)
        for placed in result.placements:
            assert placed.width_mm == pytest.approx(result.geometry.printable_width_mm)
            assert placed.height_mm <= result.geometry.printable_height_mm

    def test_short_raster_single_page_covers_everything(self, raster_factory, recording_documents):
        raster = raster_factory(300, 500, density=1)

        result = convert(raster, ConversionConfig(), document_factory=recording_documents)

        assert result.page_count == 1
        assert result.slices[0].source_y_offset == 0
        assert result.slices[0].pixel_height == 500
        assert [c[0] for c in recording_documents.created[0].calls] == ["place_image", "close"]

    @pytest.mark.parametrize("margin", [0, 5, PerEdgeMargin(3, 17, 40, 1)])
    @pytest.mark.parametrize("height", [1, 999, 10_000])
    def test_slices_sum_to_raster_height(self, raster_factory, recording_documents, margin, height):
        raster = raster_factory(500, height, density=2)
        config = ConversionConfig(margin=margin)

        result = convert(raster, config, document_factory=recording_documents)

        assert sum(s.pixel_height for s in result.slices) == height
        assert result.page_count == result.fit.page_count == len(result.slices)

    def test_same_input_twice_gives_same_geometry(self, raster_factory, recording_documents):
        raster = raster_factory(1500, 7000, density=3)
        config = ConversionConfig.from_options({"page": {"margin": "SMALL"}})

        first = convert(raster, config, document_factory=recording_documents)
        second = convert(raster, config, document_factory=recording_documents)

        assert first.page_count == second.page_count
        assert _geometry_of(first) == _geometry_of(second)
        assert recording_documents.created[0] is not recording_documents.created[1]

    def test_density_mismatch_logged(self, raster_factory, recording_documents, caplog):
        raster = raster_factory(100, 100, density=2)

        with caplog.at_level(logging.WARNING):
            convert(raster, ConversionConfig(resolution=3), document_factory=recording_documents)

        assert "differs from configured resolution" in caplog.text


class TestConvertFailures:

    def test_page_exhausting_margin_fails_before_any_page(self, raster_factory, recording_documents):
        raster = raster_factory(100, 100)
        config = ConversionConfig(margin=PerEdgeMargin(left=150, right=60))

        with pytest.raises(ConfigurationError, match="exceed page width"):
            convert(raster, config, document_factory=recording_documents)

        assert recording_documents.created == []

    def test_document_failure_discards_document(self, raster_factory):
        raster = raster_factory(600, 10_000, density=3)
        created = []

        def failing_factory(page_format, options):
            doc = RecordingDocument(page_format, options, fail_on_page=2)
            created.append(doc)
            return doc

        with pytest.raises(DocumentError, match="page 2"):
            convert(raster, ConversionConfig(), document_factory=failing_factory)

        assert created[0].discarded
        assert created[0].placements == ()

    def test_encoding_failure_aborts_conversion(self, raster_factory, recording_documents, monkeypatch):
        def broken_encode(image, encoding):
            raise EncodingError("encoder exploded")

        monkeypatch.setattr(composer, "encode_slice", broken_encode)

        with pytest.raises(EncodingError, match="encoder exploded"):
            convert(raster_factory(100, 100), ConversionConfig(), document_factory=recording_documents)

        assert recording_documents.created[0].discarded


class TestGeneratePdf:

    def test_build_method_returns_document_without_writing(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        image = Image.new("RGB", (900, 4000), "white")

        result = generate_pdf(image, {"method": "build"})

        assert result.output_path is None
        assert result.to_bytes().startswith(b"%PDF-")
        assert list(tmp_path.iterdir()) == []

    def test_save_method_writes_filename(self, sample_image, tmp_path):
        target = tmp_path / "out.pdf"

        result = generate_pdf(sample_image, {"filename": str(target), "resolution": 1})

        assert result.output_path == target
        assert target.read_bytes().startswith(b"%PDF-")

    def test_accepts_config_instance(self, sample_image):
        config = ConversionConfig(resolution=2, method="build")

        result = generate_pdf(sample_image, config)

        assert result.fit.density_multiplier == 2

    def test_invalid_options_fail_before_capture(self, tmp_path):
        with pytest.raises(ConfigurationError):
            generate_pdf(tmp_path / "missing.png", {"resolution": -3})

    def test_missing_source_raises_capture_error(self, tmp_path):
        with pytest.raises(CaptureError, match="not found"):
            generate_pdf(tmp_path / "missing.png", {"method": "build"})

    def test_raster_density_is_ground_truth(self, tmp_path):
        raster = Raster(Image.new("RGB", (400, 400)), density_multiplier=1)

        result = generate_pdf(raster, {"method": "build", "resolution": 3})

        assert result.fit.density_multiplier == 1
