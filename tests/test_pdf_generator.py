"""Tests for pdf_generator.py: single-page PDF export."""
import pytest
from reportlab.lib.pagesizes import LETTER, landscape

from diagram_renderer import DrawingSurface, render_diagram
from pdf_generator import (
    DEFAULT_PDF_FILENAME,
    ExportError,
    PlannerDrawingPDF,
    generate_planner_pdf,
)
from selection import ProjectInfo


@pytest.fixture
def rendered_surface(full_selection):
    surface = DrawingSurface(800, 500)
    render_diagram(surface, full_selection)
    return surface


@pytest.fixture
def project():
    return ProjectInfo(title="Lobby", drawer="J. Smith", department="AV",
                       date="10/17/2026", screen_label='Samsung 65"')


class TestPlannerDrawingPDF:
    def test_default_page_is_landscape_letter(self):
        generator = PlannerDrawingPDF()
        assert generator.page_size == landscape(LETTER)
        assert generator.page_width > generator.page_height

    def test_generates_pdf(self, rendered_surface, project):
        pdf_bytes = PlannerDrawingPDF().generate(rendered_surface, project)
        assert pdf_bytes.startswith(b"%PDF")
        assert b"/Subtype /Image" in pdf_bytes

    def test_single_page(self, rendered_surface, project):
        pdf_bytes = PlannerDrawingPDF().generate(rendered_surface, project)
        assert b"/Count 1" in pdf_bytes

    def test_blank_surface_still_exports(self, project):
        assert PlannerDrawingPDF().generate(DrawingSurface(), project).startswith(b"%PDF")

    def test_missing_surface(self, project):
        with pytest.raises(ExportError):
            PlannerDrawingPDF().generate(None, project)


class TestGeneratePlannerPdf:
    def test_writes_file(self, tmp_path, rendered_surface, project):
        output = tmp_path / DEFAULT_PDF_FILENAME
        pdf_bytes = generate_planner_pdf(rendered_surface, project, output_path=str(output))
        assert output.read_bytes() == pdf_bytes

    def test_failure_leaves_no_file(self, tmp_path, project):
        output = tmp_path / DEFAULT_PDF_FILENAME
        with pytest.raises(ExportError):
            generate_planner_pdf(None, project, output_path=str(output))
        assert list(tmp_path.iterdir()) == []

    def test_unwritable_location(self, tmp_path, rendered_surface, project):
        output = tmp_path / "missing" / DEFAULT_PDF_FILENAME
        with pytest.raises(ExportError):
            generate_planner_pdf(rendered_surface, project, output_path=str(output))
        assert not output.exists()

    def test_default_filename(self):
        assert DEFAULT_PDF_FILENAME == "signcast_drawing.pdf"
