"""Tests for diagram_renderer.py: drawing surface and full-redraw rendering."""
import pytest

from diagram_renderer import (
    VERTICAL_LABEL_OFFSET,
    DrawingSurface,
    _dash_segments,
    draw_dimension,
    render_diagram,
)
from layout_engine import DimensionLine
from selection import InstallType, SelectionState


SCREEN_RGBA = (0x33, 0x33, 0x33, 255)
NICHE_RGBA = (0xEE, 0xEE, 0xEE, 255)
DIMENSION_RGBA = (0x29, 0x80, 0xB9, 255)


@pytest.fixture
def surface():
    return DrawingSurface(1000, 700)


class TestDrawingSurface:
    def test_starts_blank_and_transparent(self, surface):
        assert surface.is_blank()
        assert surface.image.mode == "RGBA"
        assert surface.image.getpixel((10, 10)) == (0, 0, 0, 0)

    def test_clear(self, surface):
        surface.draw.rectangle([10, 10, 50, 50], fill="#000000")
        assert not surface.is_blank()
        surface.clear()
        assert surface.is_blank()

    def test_resize(self, surface):
        surface.resize(400, 300)
        assert surface.image.size == (400, 300)
        assert (surface.width, surface.height) == (400, 300)

    def test_flattened_blank_is_white(self, surface):
        flat = surface.flattened("white")
        assert flat.mode == "RGB"
        assert flat.getextrema() == ((255, 255), (255, 255), (255, 255))

    def test_png_output(self, surface):
        assert surface.to_png().startswith(b"\x89PNG\r\n\x1a\n")

    def test_dash_pattern(self):
        segments = list(_dash_segments((0, 0), (20, 0), [5, 5]))
        assert segments == [((0, 0), (5, 0)), ((10, 0), (15, 0))]

    def test_dash_pattern_zero_length(self):
        assert list(_dash_segments((3, 3), (3, 3), [5, 5])) == []


class TestDrawDimension:
    def test_horizontal_dimension_line(self, surface):
        draw_dimension(surface, DimensionLine((100, 100), (300, 100), '55"'))
        assert surface.image.getpixel((200, 100)) == DIMENSION_RGBA
        # end tick
        assert surface.image.getpixel((100, 96)) == DIMENSION_RGBA

    def test_vertical_dimension_line(self, surface):
        draw_dimension(surface, DimensionLine((400, 100), (400, 300), '31"', vertical=True))
        assert surface.image.getpixel((400, 200)) == DIMENSION_RGBA
        assert surface.image.getpixel((404, 300)) == DIMENSION_RGBA

    def test_vertical_label_rotated_beside_line(self, surface):
        draw_dimension(surface, DimensionLine((400, 100), (400, 300), '54" to center', vertical=True))
        # left of the ticks and arrowheads, clear of the line ends
        left, top, right, bottom = surface.image.crop((340, 120, 394, 280)).getbbox()
        assert bottom - top > right - left
        label_center_x = 340 + (left + right) / 2
        assert label_center_x == pytest.approx(400 - VERTICAL_LABEL_OFFSET, abs=4)
        label_center_y = 120 + (top + bottom) / 2
        assert label_center_y == pytest.approx(200, abs=4)

    def test_label_is_drawn(self, surface):
        draw_dimension(surface, DimensionLine((100, 100), (300, 100), '55"'))
        label_area = surface.image.crop((150, 105, 250, 125))
        assert label_area.getbbox() is not None


class TestRenderDiagram:
    def test_no_screen_draws_nothing(self, surface, mount, receptacle):
        layout = render_diagram(surface, SelectionState(mount=mount, receptacle=receptacle))
        assert layout is None
        assert surface.is_blank()

    def test_no_screen_clears_previous_drawing(self, surface, full_selection):
        render_diagram(surface, full_selection)
        assert not surface.is_blank()
        render_diagram(surface, SelectionState())
        assert surface.is_blank()

    def test_screen_painted_at_center(self, surface, screen_55):
        render_diagram(surface, SelectionState(screen=screen_55))
        assert surface.image.getpixel((500, 350)) == SCREEN_RGBA

    def test_niche_painted_around_screen(self, surface, full_selection):
        layout = render_diagram(surface, full_selection)
        x = int((layout.niche.x + layout.screen.x) / 2)
        assert surface.image.getpixel((x, 350)) == NICHE_RGBA

    def test_flat_install_leaves_wall_empty_around_screen(self, surface, screen_65):
        layout = render_diagram(surface, SelectionState(screen=screen_65, install_type=InstallType.FLAT))
        x = int(layout.screen.x - 12)
        assert surface.image.getpixel((x, 350))[3] == 0

    def test_redraw_is_identical(self, surface, full_selection):
        render_diagram(surface, full_selection)
        first = surface.image.tobytes()
        render_diagram(surface, full_selection)
        assert surface.image.tobytes() == first

    def test_render_after_resize(self, surface, full_selection):
        surface.resize(500, 350)
        layout = render_diagram(surface, full_selection)
        assert surface.image.size == (500, 350)
        assert layout.center == (250, 175)
        assert surface.image.getpixel((250, 175)) == SCREEN_RGBA

    def test_selection_not_modified(self, surface, full_selection):
        before = SelectionState(**vars(full_selection))
        render_diagram(surface, full_selection)
        assert full_selection == before
