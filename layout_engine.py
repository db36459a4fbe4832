"""
Layout Engine Module
Converts equipment inches into drawing pixels and positions every element

All positions are relative to the surface center using one scale factor.
Pixel coordinates have their origin at the top-left, y increasing downward.
"""

from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Tuple

from equipment import Screen
from niche_calculator import NicheDimensions, calculate_niche_size
from selection import Orientation, SelectionState


FIT_RATIO = 0.8              # screen fills at most 80% of either axis
WALL_RATIO = 0.9             # wall outline covers 90% of the surface
MEDIA_PLAYER_GAP_PX = 10     # media player sits this far below the screen
RECEPTACLE_EMPHASIS = 1.5    # receptacle box drawn larger than scale
RECEPTACLE_OFFSET_IN = 16.0  # top of box below bottom of screen
RECEPTACLE_GUIDE_PX = 20     # offset guide line left of the box
OUTLET_RADIUS_PX = 15
DATA_OUTLET_PX = OUTLET_RADIUS_PX * 1.5

# Dimension line offsets from the screen edges (pixels)
WIDTH_DIM_OFFSET = 30
HEIGHT_DIM_OFFSET = 30
FLOOR_DIM_OFFSET = 60
DEPTH_DIM_OFFSET = 10

Point = Tuple[float, float]


class Rect(NamedTuple):
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return (self.x + self.width / 2, self.y + self.height / 2)

    @classmethod
    def centered(cls, cx: float, cy: float, width: float, height: float) -> 'Rect':
        return cls(cx - width / 2, cy - height / 2, width, height)


@dataclass(frozen=True)
class DimensionLine:
    """A measured distance: two end points and the label to print"""
    start: Point
    end: Point
    label: str
    vertical: bool = False

    @property
    def midpoint(self) -> Point:
        return ((self.start[0] + self.end[0]) / 2, (self.start[1] + self.end[1]) / 2)

    @property
    def length(self) -> float:
        return abs(self.end[1] - self.start[1]) if self.vertical else abs(self.end[0] - self.start[0])


@dataclass(frozen=True)
class ReceptacleLayout:
    box: Rect
    scale: float
    power_outlets: Tuple[Point, Point]
    data_outlet: Rect
    guide_start: Point
    guide_end: Point
    label_anchor: Point
    label: str


@dataclass(frozen=True)
class DiagramLayout:
    """Pixel geometry for one render pass"""
    scale: float
    center: Point
    wall: Rect
    screen: Rect
    niche: Optional[Rect] = None
    niche_size: Optional[NicheDimensions] = None
    mount: Optional[Rect] = None
    media_player: Optional[Rect] = None
    receptacle: Optional[ReceptacleLayout] = None
    dimensions: List[DimensionLine] = field(default_factory=list)

    @property
    def floor_y(self) -> float:
        return self.wall.bottom


def format_inches(value: float) -> str:
    """55 -> 55\", 48.5 -> 48.5\""""
    return f'{value:g}"'


def effective_screen_size(screen: Screen, orientation: Orientation) -> Tuple[float, float]:
    """Screen width/height as hung on the wall"""
    if orientation == Orientation.VERTICAL:
        return screen.height, screen.width
    return screen.width, screen.height


def calculate_scale(screen: Screen, orientation: Orientation, surface_width: float, surface_height: float) -> float:
    """
    Pixels per inch so the screen fits within 80% of the surface on both axes.
    Uses the smaller of the two axis ratios to keep the aspect ratio.
    """
    screen_width, screen_height = effective_screen_size(screen, orientation)
    if screen_width <= 0 or screen_height <= 0:
        raise ValueError(f"Screen {screen.id} has no drawable size")

    max_width = surface_width * FIT_RATIO
    max_height = surface_height * FIT_RATIO

    return min(max_width / screen_width, max_height / screen_height)


def _receptacle_layout(selection: SelectionState, screen_rect: Rect, scale: float, cx: float) -> ReceptacleLayout:
    receptacle = selection.receptacle
    box_scale = scale * RECEPTACLE_EMPHASIS

    box_width = receptacle.width * box_scale
    box_height = receptacle.height * box_scale
    box = Rect(cx - box_width / 2, screen_rect.bottom + RECEPTACLE_OFFSET_IN * scale, box_width, box_height)

    outlet_y = box.y + box.height / 3
    power_outlets = (
        (box.x + box.width / 4, outlet_y),
        (box.x + box.width * 3 / 4, outlet_y),
    )
    data_outlet = Rect.centered(box.x + box.width / 2, box.y + box.height * 2 / 3, DATA_OUTLET_PX, DATA_OUTLET_PX)

    guide_x = box.x - RECEPTACLE_GUIDE_PX
    return ReceptacleLayout(
        box=box,
        scale=box_scale,
        power_outlets=power_outlets,
        data_outlet=data_outlet,
        guide_start=(guide_x, screen_rect.bottom),
        guide_end=(guide_x, box.y),
        label_anchor=(guide_x - 5, screen_rect.bottom + RECEPTACLE_OFFSET_IN / 2 * scale),
        label=format_inches(RECEPTACLE_OFFSET_IN),
    )


def _dimension_lines(selection: SelectionState, screen_rect: Rect, wall: Rect, scale: float,
                     cy: float, niche_size: Optional[NicheDimensions]) -> List[DimensionLine]:
    screen_width, screen_height = effective_screen_size(selection.screen, selection.orientation)

    width_y = screen_rect.bottom + WIDTH_DIM_OFFSET
    height_x = screen_rect.x - HEIGHT_DIM_OFFSET
    floor_x = screen_rect.right + FLOOR_DIM_OFFSET

    dimensions = [
        DimensionLine((screen_rect.x, width_y), (screen_rect.right, width_y), format_inches(screen_width)),
        DimensionLine((height_x, screen_rect.y), (height_x, screen_rect.bottom), format_inches(screen_height),
                      vertical=True),
        DimensionLine((floor_x, cy), (floor_x, wall.bottom),
                      f"{format_inches(selection.floor_to_center)} to center", vertical=True),
    ]

    if niche_size is not None and niche_size.depth > 0:
        depth_x = screen_rect.right + DEPTH_DIM_OFFSET
        dimensions.append(
            DimensionLine((depth_x, cy), (depth_x + niche_size.depth * scale, cy),
                          f"{format_inches(niche_size.depth)} depth")
        )

    return dimensions


def compute_layout(selection: SelectionState, surface_width: float, surface_height: float) -> Optional[DiagramLayout]:
    """
    Lay out every element of the diagram for a surface of the given pixel size.

    Args:
        selection: Current selection
        surface_width: Drawing surface width in pixels
        surface_height: Drawing surface height in pixels

    Returns:
        DiagramLayout, or None when no screen is selected (nothing to draw)
    """
    screen = selection.screen
    if screen is None or screen.width <= 0 or screen.height <= 0:
        return None

    scale = calculate_scale(screen, selection.orientation, surface_width, surface_height)
    cx, cy = surface_width / 2, surface_height / 2

    wall = Rect.centered(cx, cy, surface_width * WALL_RATIO, surface_height * WALL_RATIO)

    screen_width, screen_height = effective_screen_size(screen, selection.orientation)
    screen_rect = Rect.centered(cx, cy, screen_width * scale, screen_height * scale)

    niche_rect = None
    niche_size = None
    if selection.is_niche:
        niche_size = calculate_niche_size(
            screen, selection.media_player, selection.mount, selection.niche_depth_variance
        )
        # Oriented with the screen; the gap itself still comes from the catalog width
        if selection.orientation == Orientation.VERTICAL:
            niche_width, niche_height = niche_size.height, niche_size.width
        else:
            niche_width, niche_height = niche_size.width, niche_size.height
        niche_rect = Rect.centered(cx, cy, niche_width * scale, niche_height * scale)

    mount_rect = None
    if selection.mount is not None:
        mount_rect = Rect.centered(cx, cy, selection.mount.width * scale, selection.mount.height * scale)

    player_rect = None
    if selection.media_player is not None:
        player_width = selection.media_player.width * scale
        player_height = selection.media_player.height * scale
        player_rect = Rect(cx - player_width / 2, screen_rect.bottom + MEDIA_PLAYER_GAP_PX, player_width, player_height)

    receptacle = None
    if selection.receptacle is not None:
        receptacle = _receptacle_layout(selection, screen_rect, scale, cx)

    return DiagramLayout(
        scale=scale,
        center=(cx, cy),
        wall=wall,
        screen=screen_rect,
        niche=niche_rect,
        niche_size=niche_size,
        mount=mount_rect,
        media_player=player_rect,
        receptacle=receptacle,
        dimensions=_dimension_lines(selection, screen_rect, wall, scale, cy, niche_size),
    )
