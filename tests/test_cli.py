"""
Tests for the raster-paginator command line.
"""

import pytest
from PIL import Image
from pypdf import PdfReader
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from raster_paginator import cli


@pytest.fixture
def tall_png(tmp_path):
    path = tmp_path / "tall.png"
    Image.new("RGB", (700, 9000), "white").save(path)
    return path


class TestMargins:

    def test_single_value_passed_through(self):
        assert cli._margin_arg("MEDIUM") == "MEDIUM"

    def test_four_values_become_edges(self):
        assert cli._margin_arg("1, 2,3,4") == {"top": "1", "right": "2", "bottom": "3", "left": "4"}

    def test_two_values_rejected(self):
        with pytest.raises(Exception, match="one value or four"):
            cli._margin_arg("1,2")


class TestMain:

    def test_list_formats_needs_no_input(self, capsys):
        assert cli.main(["--list-formats"]) == cli.EXIT_OK

        listed = capsys.readouterr().out.split()
        assert "A4" in listed
        assert "LETTER" in listed

    def test_missing_input_is_usage_error(self):
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])
        assert exc_info.value.code == 2

    def test_save_writes_pdf_and_prints_path(self, tall_png, tmp_path, capsys):
        target = tmp_path / "out" / "tall.pdf"

        code = cli.main([str(tall_png), "-o", str(target), "-q"])

        assert code == cli.EXIT_OK
        assert capsys.readouterr().out.strip() == str(target)
        reader = PdfReader(str(target))
        assert len(reader.pages) == 3
        assert reader.metadata.creator.startswith("raster-paginator")

    def test_build_writes_nothing(self, tall_png, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)

        code = cli.main([str(tall_png), "--method", "build", "-q"])

        assert code == cli.EXIT_OK
        assert capsys.readouterr().out == ""
        assert sorted(p.name for p in tmp_path.iterdir()) == ["tall.png"]

    def test_configuration_error_exit_code(self, tall_png, tmp_path, capsys):
        code = cli.main([str(tall_png), "-o", str(tmp_path / "x.pdf"), "--resolution", "0"])

        assert code == cli.EXIT_CONFIG
        assert "resolution must be positive" in capsys.readouterr().err

    def test_margins_exceeding_page_exit_code(self, tall_png, tmp_path, capsys):
        code = cli.main([str(tall_png), "-o", str(tmp_path / "x.pdf"), "--margin", "150"])

        assert code == cli.EXIT_CONFIG
        assert "Margins exceed page width" in capsys.readouterr().err
        assert not (tmp_path / "x.pdf").exists()

    def test_missing_file_is_conversion_failure(self, tmp_path, capsys):
        code = cli.main([str(tmp_path / "nope.png"), "-o", str(tmp_path / "x.pdf")])

        assert code == cli.EXIT_FAILED
        assert "not found" in capsys.readouterr().err


class TestPdfPages:

    @pytest.fixture
    def two_page_pdf(self, tmp_path):
        """Page 1 is half an A4 high, page 2 two and a half A4s high."""
        path = tmp_path / "pages.pdf"
        c = canvas.Canvas(str(path), pagesize=(A4[0], A4[1] / 2))
        c.drawString(72, 72, "short page")
        c.showPage()
        c.setPageSize((A4[0], A4[1] * 2.5))
        c.drawString(72, 72, "long page")
        c.showPage()
        c.save()
        return path

    def test_first_page_by_default(self, two_page_pdf, tmp_path):
        target = tmp_path / "first.pdf"

        assert cli.main([str(two_page_pdf), "-o", str(target), "--resolution", "1", "-q"]) == cli.EXIT_OK

        assert len(PdfReader(str(target)).pages) == 1

    def test_page_option_selects_pdf_page(self, two_page_pdf, tmp_path):
        target = tmp_path / "second.pdf"

        code = cli.main([str(two_page_pdf), "--page", "2", "-o", str(target), "--resolution", "1", "-q"])

        assert code == cli.EXIT_OK
        assert len(PdfReader(str(target)).pages) == 3

    def test_page_out_of_range_is_conversion_failure(self, two_page_pdf, tmp_path, capsys):
        code = cli.main([str(two_page_pdf), "--page", "3", "-o", str(tmp_path / "x.pdf")])

        assert code == cli.EXIT_FAILED
        assert "out of range" in capsys.readouterr().err

    def test_page_option_with_image_input_is_usage_error(self, tall_png, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(tall_png), "--page", "2", "-o", str(tmp_path / "x.pdf")])

        assert exc_info.value.code == 2
        assert "--page applies only to PDF input" in capsys.readouterr().err
        assert not (tmp_path / "x.pdf").exists()
