"""
Selection Module
The user's current picks (one item per category) plus layout parameters
"""

from dataclasses import dataclass
from datetime import datetime
import math
from enum import Enum
from typing import Mapping, Optional

from equipment import Category, EquipmentCatalog, MediaPlayer, Mount, Receptacle, Screen


DEFAULT_FLOOR_TO_CENTER = 60.0   # inches
DEFAULT_DEPTH_VARIANCE = 1.0     # inches

# Request parameter name for each category's selected id
SELECTION_PARAMS = {
    Category.SCREENS: 'screen',
    Category.MOUNTS: 'mount',
    Category.MEDIA_PLAYERS: 'mediaPlayer',
    Category.RECEPTACLES: 'receptacle',
}


class Orientation(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class InstallType(Enum):
    FLAT = "flat"
    NICHE = "niche"


def parse_number(value, default: float) -> float:
    """Numeric form field, falling back to the default for blanks or junk"""
    if value is None:
        return default
    try:
        number = float(str(value).strip())
    except ValueError:
        return default
    return number if math.isfinite(number) else default


def parse_choice(value, enum_cls, default):
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        return default


@dataclass(frozen=True)
class SelectionState:
    """Everything the layout and renderer need for one drawing"""
    screen: Optional[Screen] = None
    mount: Optional[Mount] = None
    media_player: Optional[MediaPlayer] = None
    receptacle: Optional[Receptacle] = None
    orientation: Orientation = Orientation.HORIZONTAL
    install_type: InstallType = InstallType.FLAT
    floor_to_center: float = DEFAULT_FLOOR_TO_CENTER
    niche_depth_variance: float = DEFAULT_DEPTH_VARIANCE

    @property
    def is_niche(self) -> bool:
        return self.install_type == InstallType.NICHE

    @classmethod
    def from_params(cls, params: Mapping, catalog: EquipmentCatalog) -> 'SelectionState':
        """
        Build a selection from request parameters.

        Args:
            params: query string / form values (screen, mount, mediaPlayer, receptacle,
                    orientation, installType, floorToCenter, nicheDepth)
            catalog: catalog to resolve the selected ids against

        Returns:
            SelectionState; unknown ids select nothing
        """
        picked = {
            category: catalog.find(category, params.get(name))
            for category, name in SELECTION_PARAMS.items()
        }
        return cls(
            screen=picked[Category.SCREENS],
            mount=picked[Category.MOUNTS],
            media_player=picked[Category.MEDIA_PLAYERS],
            receptacle=picked[Category.RECEPTACLES],
            orientation=parse_choice(params.get('orientation'), Orientation, Orientation.HORIZONTAL),
            install_type=parse_choice(params.get('installType'), InstallType, InstallType.FLAT),
            floor_to_center=parse_number(params.get('floorToCenter'), DEFAULT_FLOOR_TO_CENTER),
            niche_depth_variance=parse_number(params.get('nicheDepth'), DEFAULT_DEPTH_VARIANCE),
        )

    def to_params(self) -> dict:
        """Inverse of from_params, used to pre-fill the planner form"""
        return {
            'screen': self.screen.id if self.screen else '',
            'mount': self.mount.id if self.mount else '',
            'mediaPlayer': self.media_player.id if self.media_player else '',
            'receptacle': self.receptacle.id if self.receptacle else '',
            'orientation': self.orientation.value,
            'installType': self.install_type.value,
            'floorToCenter': f"{self.floor_to_center:g}",
            'nicheDepth': f"{self.niche_depth_variance:g}",
        }


@dataclass(frozen=True)
class ProjectInfo:
    """Title block details printed on the exported PDF"""
    title: str = "Untitled Project"
    drawer: str = "Unknown"
    department: str = "Installation"
    date: str = ""
    screen_label: str = "No Screen Selected"

    @classmethod
    def from_params(cls, params: Mapping, selection: SelectionState) -> 'ProjectInfo':
        def text(name, default):
            value = (params.get(name) or '').strip()
            return value or default

        return cls(
            title=text('projectTitle', cls.title),
            drawer=text('drawer', cls.drawer),
            department=text('department', cls.department),
            date=text('projectDate', datetime.now().strftime("%m/%d/%Y")),
            screen_label=selection.screen.option_label if selection.screen else cls.screen_label,
        )
