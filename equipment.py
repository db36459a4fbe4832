"""
Equipment Module
Screens, mounts, media players and receptacle boxes loaded from the catalog CSVs
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from enum import Enum


class Category(Enum):
    """Catalog categories, keyed by their JSON name"""
    SCREENS = "screens"
    MOUNTS = "mounts"
    MEDIA_PLAYERS = "mediaPlayers"
    RECEPTACLES = "receptacles"

    @property
    def json_key(self) -> str:
        return self.value


@dataclass(frozen=True)
class EquipmentItem:
    """A catalog item with physical dimensions in inches"""
    id: str
    model: str
    width: float
    height: float
    depth: float

    @property
    def option_label(self) -> str:
        return self.model

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'model': self.model,
            'width': self.width,
            'height': self.height,
            'depth': self.depth,
        }


@dataclass(frozen=True)
class Screen(EquipmentItem):
    weight: Optional[float] = None

    @property
    def option_label(self) -> str:
        # e.g. Samsung 55" (48.4"×27.8")
        return f'{self.model} ({self.width:g}"×{self.height:g}")'

    def to_dict(self) -> dict:
        data = super().to_dict()
        data['weight'] = self.weight
        return data


@dataclass(frozen=True)
class Mount(EquipmentItem):
    max_weight: Optional[float] = None
    vesa: Tuple[str, ...] = ()

    def to_dict(self) -> dict:
        data = super().to_dict()
        data['maxWeight'] = self.max_weight
        data['vesa'] = list(self.vesa)
        return data


@dataclass(frozen=True)
class MediaPlayer(EquipmentItem):
    pass


@dataclass(frozen=True)
class Receptacle(EquipmentItem):
    pass


@dataclass(frozen=True)
class EquipmentCatalog:
    """
    Read-only equipment catalog.
    Built once at startup and handed to the web app; never mutated afterwards.
    """
    screens: Tuple[Screen, ...] = ()
    mounts: Tuple[Mount, ...] = ()
    media_players: Tuple[MediaPlayer, ...] = ()
    receptacles: Tuple[Receptacle, ...] = ()
    _index: Dict[Category, Dict[str, EquipmentItem]] = field(
        default=None, init=False, repr=False, compare=False
    )

    def __post_init__(self):
        index = {
            category: {item.id: item for item in self.items(category)}
            for category in Category
        }
        object.__setattr__(self, '_index', index)

    def items(self, category: Category) -> Tuple[EquipmentItem, ...]:
        if category == Category.SCREENS:
            return self.screens
        elif category == Category.MOUNTS:
            return self.mounts
        elif category == Category.MEDIA_PLAYERS:
            return self.media_players
        else:
            return self.receptacles

    def find(self, category: Category, item_id: Optional[str]) -> Optional[EquipmentItem]:
        """Look up an item by id within one category (None if not found)"""
        if not item_id:
            return None
        return self._index[category].get(item_id)

    def counts(self) -> Dict[str, int]:
        return {category.json_key: len(self.items(category)) for category in Category}

    def to_dict(self) -> Dict[str, List[dict]]:
        return {
            category.json_key: [item.to_dict() for item in self.items(category)]
            for category in Category
        }
