"""
PDF Generator Module
Exports the mount diagram with its project title block using ReportLab
"""

import io
import os
import tempfile
from pathlib import Path
from typing import Optional

from reportlab.lib.pagesizes import LETTER, landscape
from reportlab.lib.units import inch
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from diagram_renderer import DrawingSurface
from selection import ProjectInfo


DEFAULT_PAGE_SIZE = landscape(LETTER)  # 11x8.5
DEFAULT_PDF_FILENAME = "signcast_drawing.pdf"

# Fixed positions, measured from the top-left of the page
TEXT_LEFT = 0.5 * inch
TEXT_TOP = 0.5 * inch
TEXT_LINE_SPACING = 0.3 * inch
TEXT_FONT = "Helvetica"
TEXT_FONT_SIZE = 14

IMAGE_LEFT = 0.5 * inch
IMAGE_TOP = 2 * inch
IMAGE_WIDTH = 10 * inch
IMAGE_HEIGHT = 6 * inch


class ExportError(Exception):
    """Raised when the drawing could not be exported"""


class PlannerDrawingPDF:
    """Generates the single-page landscape mount drawing"""

    def __init__(self, page_size=None):
        if page_size is None:
            page_size = DEFAULT_PAGE_SIZE
        self.page_size = page_size
        self.page_width, self.page_height = page_size

    def generate(self, surface: Optional[DrawingSurface], project: ProjectInfo) -> bytes:
        """
        Build the PDF in memory.

        Args:
            surface: Rendered drawing surface (may have a transparent background)
            project: Title block details

        Returns:
            PDF bytes

        Raises:
            ExportError: no surface, or the image/PDF could not be encoded
        """
        if surface is None:
            raise ExportError("No drawing to export")

        try:
            diagram = surface.flattened("white")
            buffer = io.BytesIO()
            c = canvas.Canvas(buffer, pagesize=self.page_size)
            c.setTitle(project.title)
            c.setAuthor(project.drawer)

            self._draw_project_info(c, project)
            self._draw_diagram(c, diagram)

            c.showPage()
            c.save()
        except Exception as e:
            raise ExportError(f"Could not build PDF: {e}") from e

        return buffer.getvalue()

    def _draw_project_info(self, c: canvas.Canvas, project: ProjectInfo) -> None:
        """Five metadata lines in the top-left corner"""
        lines = [
            f"Project: {project.title}",
            f"Drawer: {project.drawer}",
            f"Department: {project.department}",
            f"Date: {project.date}",
            f"Screen: {project.screen_label}",
        ]

        c.setFont(TEXT_FONT, TEXT_FONT_SIZE)
        for i, text in enumerate(lines):
            top = TEXT_TOP + i * TEXT_LINE_SPACING
            c.drawString(TEXT_LEFT, self.page_height - top, text)

    def _draw_diagram(self, c: canvas.Canvas, diagram) -> None:
        # ReportLab measures y from the bottom of the page
        y = self.page_height - IMAGE_TOP - IMAGE_HEIGHT
        c.drawImage(ImageReader(diagram), IMAGE_LEFT, y, width=IMAGE_WIDTH, height=IMAGE_HEIGHT)


def generate_planner_pdf(
    surface: Optional[DrawingSurface],
    project: ProjectInfo,
    output_path: Optional[str] = None,
    page_size=None
) -> bytes:
    """
    Convenience function to export the drawing.

    Args:
        surface: Rendered drawing surface
        project: Title block details
        output_path: Optional file to write; only created if the export succeeds
        page_size: ReportLab page size (landscape letter by default)

    Returns:
        PDF bytes
    """
    pdf_bytes = PlannerDrawingPDF(page_size=page_size).generate(surface, project)

    if output_path:
        _write_atomically(Path(output_path), pdf_bytes)

    return pdf_bytes


def _write_atomically(path: Path, data: bytes) -> None:
    """Write to a temp file next to the target, then move it into place"""
    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(suffix=".pdf", dir=path.parent)
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise ExportError(f"Could not write {path}: {e}") from e
