"""
Diagram Renderer Module
Paints the wall-mount diagram onto a raster drawing surface using Pillow

Every call clears the surface and redraws from scratch, so it is safe to call
on each selection change.
"""

import io
import math
from functools import lru_cache
from typing import Iterator, Optional, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont

from layout_engine import (
    OUTLET_RADIUS_PX,
    DiagramLayout,
    DimensionLine,
    Point,
    Rect,
    compute_layout,
)
from selection import SelectionState


DEFAULT_SURFACE_WIDTH = 1000
DEFAULT_SURFACE_HEIGHT = 700

TRANSPARENT = (0, 0, 0, 0)

# Color scheme
COLORS = {
    'wall': '#666666',
    'niche_fill': '#eeeeee',
    'niche_outline': '#666666',
    'screen': '#333333',
    'mount': '#444444',
    'media_player': '#666666',
    'receptacle_fill': '#f0f0f0',
    'receptacle_outline': '#333333',
    'outlet': '#666666',
    'dimension': '#2980b9',
}

ARROW_SIZE = 5
TICK_SIZE = 5
DIMENSION_FONT_SIZE = 12
OFFSET_FONT_SIZE = 14
HORIZONTAL_LABEL_OFFSET = 20   # label baseline below a horizontal dimension
VERTICAL_LABEL_OFFSET = 20     # label center left of a vertical dimension


@lru_cache(maxsize=8)
def get_font(size: int):
    return ImageFont.load_default(size=size)


def _dash_segments(start: Point, end: Point, pattern: Sequence[float]) -> Iterator[Tuple[Point, Point]]:
    """Split a line into the 'on' pieces of a dash pattern like [5, 5]"""
    (x0, y0), (x1, y1) = start, end
    length = math.hypot(x1 - x0, y1 - y0)
    if length == 0:
        return
    ux, uy = (x1 - x0) / length, (y1 - y0) / length

    position = 0.0
    index = 0
    while position < length:
        step = pattern[index % len(pattern)]
        if index % 2 == 0:
            stop = min(position + step, length)
            yield (x0 + ux * position, y0 + uy * position), (x0 + ux * stop, y0 + uy * stop)
        position += step
        index += 1


class DrawingSurface:
    """
    RGBA raster canvas with a transparent background.
    Wraps a Pillow image plus the handful of primitives the diagram needs.
    """

    def __init__(self, width: int = DEFAULT_SURFACE_WIDTH, height: int = DEFAULT_SURFACE_HEIGHT):
        self.resize(width, height)

    def resize(self, width: int, height: int) -> None:
        """Replace the backing image; callers re-render afterwards"""
        self.width = int(width)
        self.height = int(height)
        self.image = Image.new("RGBA", (self.width, self.height), TRANSPARENT)
        self.draw = ImageDraw.Draw(self.image)

    def clear(self) -> None:
        self.draw.rectangle([0, 0, self.width, self.height], fill=TRANSPARENT)

    def is_blank(self) -> bool:
        return self.image.getbbox() is None

    # Primitives

    def rect(self, rect: Rect, fill=None, outline=None, line_width: int = 1, dash: Optional[Sequence[float]] = None) -> None:
        box = [rect.x, rect.y, rect.right, rect.bottom]
        if fill is not None:
            self.draw.rectangle(box, fill=fill)
        if outline is None:
            return
        if dash:
            corners = [(rect.x, rect.y), (rect.right, rect.y), (rect.right, rect.bottom), (rect.x, rect.bottom)]
            for i, corner in enumerate(corners):
                self.line(corner, corners[(i + 1) % 4], outline, line_width, dash)
        else:
            self.draw.rectangle(box, outline=outline, width=line_width)

    def line(self, start: Point, end: Point, color, line_width: int = 1, dash: Optional[Sequence[float]] = None) -> None:
        if not dash:
            self.draw.line([start, end], fill=color, width=line_width)
            return
        for a, b in _dash_segments(start, end, dash):
            self.draw.line([a, b], fill=color, width=line_width)

    def circle(self, center: Point, radius: float, fill=None, outline=None, line_width: int = 1) -> None:
        cx, cy = center
        self.draw.ellipse([cx - radius, cy - radius, cx + radius, cy + radius],
                          fill=fill, outline=outline, width=line_width)

    def text(self, anchor: Point, label: str, color, size: int = DIMENSION_FONT_SIZE, align: str = "center") -> None:
        """Draw text with its baseline at anchor y, aligned on anchor x"""
        font = get_font(size)
        left, _, right, bottom = self.draw.textbbox((0, 0), label, font=font)
        x, y = anchor
        if align == "center":
            x -= (right - left) / 2
        elif align == "right":
            x -= right - left
        self.draw.text((x - left, y - bottom), label, fill=color, font=font)

    def rotated_text(self, center: Point, label: str, color, size: int = DIMENSION_FONT_SIZE) -> None:
        """Draw text turned 90 degrees (reading bottom to top), centered on a point"""
        font = get_font(size)
        left, top, right, bottom = self.draw.textbbox((0, 0), label, font=font)
        tile = Image.new("RGBA", (int(right - left) + 2, int(bottom - top) + 2), TRANSPARENT)
        ImageDraw.Draw(tile).text((1 - left, 1 - top), label, fill=color, font=font)
        tile = tile.rotate(90, expand=True)

        cx, cy = center
        position = (int(round(cx - tile.width / 2)), int(round(cy - tile.height / 2)))
        self.image.paste(tile, position, tile)

    # Output

    def flattened(self, background="white") -> Image.Image:
        """Copy of the surface composited onto a solid background (RGB)"""
        base = Image.new("RGBA", self.image.size, background)
        return Image.alpha_composite(base, self.image).convert("RGB")

    def to_png(self, background=None) -> bytes:
        image = self.image if background is None else self.flattened(background)
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()


def _arrowhead(surface: DrawingSurface, tip: Point, toward: Point, color) -> None:
    """Open arrowhead at tip, pointing toward the other end of the line"""
    dx, dy = toward[0] - tip[0], toward[1] - tip[1]
    length = math.hypot(dx, dy) or 1.0
    ux, uy = dx / length, dy / length
    nx, ny = -uy, ux

    back_x = tip[0] - ux * ARROW_SIZE
    back_y = tip[1] - uy * ARROW_SIZE
    surface.line((back_x + nx * ARROW_SIZE, back_y + ny * ARROW_SIZE), tip, color)
    surface.line(tip, (back_x - nx * ARROW_SIZE, back_y - ny * ARROW_SIZE), color)


def draw_dimension(surface: DrawingSurface, dimension: DimensionLine, color=None) -> None:
    """
    Draw a dimension: the line, end ticks, inward arrowheads and the label.
    Vertical dimensions get their label rotated and placed beside the line.
    """
    color = color or COLORS['dimension']
    start, end = dimension.start, dimension.end

    surface.line(start, end, color)

    _arrowhead(surface, start, end, color)
    _arrowhead(surface, end, start, color)

    mid_x, mid_y = dimension.midpoint
    if dimension.vertical:
        for x, y in (start, end):
            surface.line((x - TICK_SIZE, y), (x + TICK_SIZE, y), color)
        surface.rotated_text((start[0] - VERTICAL_LABEL_OFFSET, mid_y), dimension.label, color)
    else:
        for x, y in (start, end):
            surface.line((x, y - TICK_SIZE), (x, y + TICK_SIZE), color)
        surface.text((mid_x, start[1] + HORIZONTAL_LABEL_OFFSET), dimension.label, color)


def _draw_receptacle(surface: DrawingSurface, layout: DiagramLayout) -> None:
    receptacle = layout.receptacle

    surface.rect(receptacle.box, fill=COLORS['receptacle_fill'])
    surface.rect(receptacle.box, outline=COLORS['receptacle_outline'], line_width=3, dash=[5, 5])

    # Power (two duplex circles) and data (square)
    for center in receptacle.power_outlets:
        surface.circle(center, OUTLET_RADIUS_PX, fill=COLORS['outlet'],
                       outline=COLORS['receptacle_outline'], line_width=2)
    surface.rect(receptacle.data_outlet, outline=COLORS['receptacle_outline'], line_width=2)

    # 16" offset guide
    surface.line(receptacle.guide_start, receptacle.guide_end, COLORS['dimension'], line_width=2, dash=[2, 2])
    surface.text(receptacle.label_anchor, receptacle.label, COLORS['dimension'],
                 size=OFFSET_FONT_SIZE, align="right")


def paint_layout(surface: DrawingSurface, layout: DiagramLayout) -> None:
    """Paint a computed layout, back to front"""
    surface.rect(layout.wall, outline=COLORS['wall'], line_width=2)

    if layout.niche is not None:
        surface.rect(layout.niche, fill=COLORS['niche_fill'], outline=COLORS['niche_outline'], line_width=2)

    surface.rect(layout.screen, fill=COLORS['screen'])

    if layout.mount is not None:
        surface.rect(layout.mount, outline=COLORS['mount'], line_width=2, dash=[5, 5])

    if layout.media_player is not None:
        surface.rect(layout.media_player, fill=COLORS['media_player'])

    if layout.receptacle is not None:
        _draw_receptacle(surface, layout)

    for dimension in layout.dimensions:
        draw_dimension(surface, dimension)


def render_diagram(surface: DrawingSurface, selection: SelectionState) -> Optional[DiagramLayout]:
    """
    Full redraw of the diagram for the current selection.

    Args:
        surface: Surface to paint (cleared first)
        selection: Current selection, read only

    Returns:
        The layout that was drawn, or None if no screen is selected
        (the surface is left blank)
    """
    surface.clear()

    layout = compute_layout(selection, surface.width, surface.height)
    if layout is None:
        return None

    paint_layout(surface, layout)
    return layout
