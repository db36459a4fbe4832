"""
Catalog Parser Module
Reads the equipment spec CSVs (screens, mounts, media players, receptacle boxes)
Each category loads on its own; a bad file only empties that category
"""

import csv
import math
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from equipment import (
    Category,
    EquipmentCatalog,
    EquipmentItem,
    MediaPlayer,
    Mount,
    Receptacle,
    Screen,
)


def parse_float(value: Optional[str]) -> Optional[float]:
    """Parse a numeric cell, returning None for blanks, junk or non-finite values"""
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def require_dimensions(row: Dict[str, str], width_col: str, height_col: str, depth_col: str) -> Tuple[float, float, float]:
    """Read width/height/depth from a row. Raises ValueError if any is missing or negative."""
    dims = []
    for col in (width_col, height_col, depth_col):
        number = parse_float(row.get(col))
        if number is None:
            raise ValueError(f"bad value for '{col}': {row.get(col)!r}")
        if number < 0:
            raise ValueError(f"negative value for '{col}': {number}")
        dims.append(number)
    return dims[0], dims[1], dims[2]


def require_id(row: Dict[str, str], column: str) -> str:
    item_id = row.get(column, '').strip()
    if not item_id:
        raise ValueError(f"missing '{column}'")
    return item_id


def parse_screen_row(row: Dict[str, str]) -> Screen:
    width, height, depth = require_dimensions(row, 'Width', 'Height', 'Depth')
    return Screen(
        id=require_id(row, 'Screen MFR'),
        model=f"{row.get('Make', '')} {row.get('Screen Size', '')}\"",
        width=width,
        height=height,
        depth=depth,
        weight=parse_float(row.get('Weight (LBS)')),
    )


def parse_mount_row(row: Dict[str, str]) -> Mount:
    width, height, depth = require_dimensions(row, 'Width (in)', 'Height (in)', 'Depth (in)')
    part = require_id(row, 'MFG. PART')
    vesa_cell = row.get("VESA's", '') or ''
    return Mount(
        id=part,
        model=f"{row.get('Brand', '')} {part}",
        width=width,
        height=height,
        depth=depth,
        max_weight=parse_float(row.get('Maximum Load (lbs)')),
        vesa=tuple(code.strip() for code in vesa_cell.split(',') if code.strip()),
    )


def parse_media_player_row(row: Dict[str, str]) -> MediaPlayer:
    width, height, depth = require_dimensions(row, 'Width', 'Height', 'Depth')
    part = require_id(row, 'MFG. PART')
    return MediaPlayer(
        id=part,
        model=f"{row.get('Make', '')} {part}",
        width=width,
        height=height,
        depth=depth,
    )


def parse_receptacle_row(row: Dict[str, str]) -> Receptacle:
    width, height, depth = require_dimensions(row, 'Width (in)', 'Height (in)', 'Depth (in)')
    part = require_id(row, 'MFG. PART')
    return Receptacle(
        id=part,
        model=f"{row.get('Brand', '')} {part}",
        width=width,
        height=height,
        depth=depth,
    )


# Category -> (source file, row parser)
CATEGORY_SOURCES: Dict[Category, Tuple[str, Callable[[Dict[str, str]], EquipmentItem]]] = {
    Category.SCREENS: ('Screen_Info.csv', parse_screen_row),
    Category.MOUNTS: ('Mount_Info.csv', parse_mount_row),
    Category.MEDIA_PLAYERS: ('MediaPlayer_Info.csv', parse_media_player_row),
    Category.RECEPTACLES: ('Receptacle_Box_info.csv', parse_receptacle_row),
}


def read_csv_rows(csv_path: Path) -> List[Dict[str, str]]:
    """
    Read a CSV into trimmed dict rows.
    Tries several encodings since the spec sheets come out of Excel.

    Raises:
        OSError: file missing or unreadable
        UnicodeDecodeError: no encoding worked
        csv.Error: malformed CSV
    """
    encodings = ['utf-8-sig', 'utf-8', 'latin-1', 'cp1252']
    content = None
    last_error = None

    for encoding in encodings:
        try:
            with open(csv_path, 'r', encoding=encoding, newline='') as f:
                content = f.read()
            break
        except UnicodeDecodeError as e:
            last_error = e
            continue

    if content is None:
        raise last_error

    reader = csv.DictReader(content.splitlines())
    rows = []
    for row in reader:
        rows.append({
            (key or '').strip(): (value or '').strip() if isinstance(value, str) else ''
            for key, value in row.items()
        })
    return rows


def load_category(csv_path: Path, category: Category) -> List[EquipmentItem]:
    """
    Load one category from its CSV.
    Returns an empty list if the file can't be read; bad rows and duplicate ids are skipped.
    """
    _, parse_row = CATEGORY_SOURCES[category]

    try:
        rows = read_csv_rows(csv_path)
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        print(f"❌ Could not load {category.json_key} from {csv_path}: {e}")
        return []

    items = []
    seen_ids = set()
    for line_number, row in enumerate(rows, start=2):
        try:
            item = parse_row(row)
        except ValueError as e:
            print(f"⚠️  Skipping {csv_path.name} line {line_number}: {e}")
            continue

        if item.id in seen_ids:
            print(f"⚠️  Skipping duplicate {category.json_key} id '{item.id}' in {csv_path.name}")
            continue

        seen_ids.add(item.id)
        items.append(item)

    return items


def load_catalog(data_dir) -> EquipmentCatalog:
    """
    Load all four equipment CSVs from a directory.
    Best effort: a missing or broken file just leaves that category empty.
    """
    data_dir = Path(data_dir)
    loaded = {}

    for category, (filename, _) in CATEGORY_SOURCES.items():
        loaded[category] = tuple(load_category(data_dir / filename, category))

    catalog = EquipmentCatalog(
        screens=loaded[Category.SCREENS],
        mounts=loaded[Category.MOUNTS],
        media_players=loaded[Category.MEDIA_PLAYERS],
        receptacles=loaded[Category.RECEPTACLES],
    )

    print(f"📋 Loaded equipment: {catalog.counts()}")
    return catalog
