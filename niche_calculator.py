"""
Niche Calculator Module
Sizes the recessed wall cavity for an in-wall display install
"""

from dataclasses import dataclass
from typing import Optional

from equipment import MediaPlayer, Mount, Screen


# Clearance around the screen on each side
SMALL_SCREEN_MAX_WIDTH = 55.0  # inches
SMALL_SCREEN_GAP = 1.5
LARGE_SCREEN_GAP = 2.0


@dataclass(frozen=True)
class NicheDimensions:
    """Rough opening for the niche, in inches"""
    width: float = 0.0
    height: float = 0.0
    depth: float = 0.0

    def to_dict(self) -> dict:
        return {'width': self.width, 'height': self.height, 'depth': self.depth}


def gap_for_width(screen_width: float) -> float:
    """1.5" per side for screens up to 55" wide, 2" above that"""
    return SMALL_SCREEN_GAP if screen_width <= SMALL_SCREEN_MAX_WIDTH else LARGE_SCREEN_GAP


def calculate_niche_size(
    screen: Optional[Screen],
    media_player: Optional[MediaPlayer] = None,
    mount: Optional[Mount] = None,
    depth_variance: float = 1.0
) -> NicheDimensions:
    """
    Calculate niche width, height and depth.

    Depth = screen depth + max(media player depth, mount depth) + depth variance.
    The gap is picked from the screen's catalog width, not the oriented width,
    so a vertical 65" screen still gets the 2" gap.

    Args:
        screen: Selected screen (None gives an all-zero niche)
        media_player: Optional media player mounted behind the screen
        mount: Optional wall mount
        depth_variance: Extra depth allowance in inches

    Returns:
        NicheDimensions
    """
    if screen is None:
        return NicheDimensions()

    gap = gap_for_width(screen.width)

    player_depth = media_player.depth if media_player else 0.0
    mount_depth = mount.depth if mount else 0.0
    max_component_depth = max(player_depth, mount_depth, 0.0)

    return NicheDimensions(
        width=screen.width + gap * 2,
        height=screen.height + gap * 2,
        depth=screen.depth + max_component_depth + depth_variance,
    )
