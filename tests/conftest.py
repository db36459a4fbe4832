"""Shared fixtures: sample equipment, catalogs and a Flask test client."""
import pytest

from app import create_app
from equipment import EquipmentCatalog, MediaPlayer, Mount, Receptacle, Screen
from selection import InstallType, Orientation, SelectionState


SCREEN_CSV = (
    "Screen MFR,Make,Screen Size,Width,Height,Depth,Weight (LBS)\n"
    "QM55C,Samsung,55,55,31,3,34.6\n"
    "QM65C,Samsung,65,65,37,3,\n"
)

MOUNT_CSV = (
    "Brand,MFG. PART,Maximum Load (lbs),Width (in),Height (in),Depth (in),VESA's\n"
    'Chief,LTM1U,125,26.4,17.4,2,"200x200, 400x400"\n'
)

MEDIA_PLAYER_CSV = (
    "MFG. PART,Make,Width,Height,Depth\n"
    "HD1025,BrightSign,5,1,1.5\n"
)

RECEPTACLE_CSV = (
    "Brand,MFG. PART,Width (in),Height (in),Depth (in)\n"
    "Arlington,TVBU505,7.5,9,3.5\n"
)


@pytest.fixture
def screen_55():
    return Screen(id="QM55C", model='Samsung 55"', width=55, height=31, depth=3, weight=34.6)


@pytest.fixture
def screen_65():
    return Screen(id="QM65C", model='Samsung 65"', width=65, height=37, depth=3)


@pytest.fixture
def mount():
    return Mount(id="LTM1U", model="Chief LTM1U", width=26.4, height=17.4, depth=2,
                 max_weight=125, vesa=("200x200", "400x400"))


@pytest.fixture
def media_player():
    return MediaPlayer(id="HD1025", model="BrightSign HD1025", width=5, height=1, depth=1.5)


@pytest.fixture
def receptacle():
    return Receptacle(id="TVBU505", model="Arlington TVBU505", width=7.5, height=9, depth=3.5)


@pytest.fixture
def catalog(screen_55, screen_65, mount, media_player, receptacle):
    return EquipmentCatalog(
        screens=(screen_55, screen_65),
        mounts=(mount,),
        media_players=(media_player,),
        receptacles=(receptacle,),
    )


@pytest.fixture
def full_selection(screen_65, mount, media_player, receptacle):
    return SelectionState(
        screen=screen_65,
        mount=mount,
        media_player=media_player,
        receptacle=receptacle,
        orientation=Orientation.HORIZONTAL,
        install_type=InstallType.NICHE,
        floor_to_center=60,
        niche_depth_variance=1,
    )


@pytest.fixture
def data_dir(tmp_path):
    """Directory with all four catalog CSVs."""
    (tmp_path / "Screen_Info.csv").write_text(SCREEN_CSV, encoding="utf-8-sig")
    (tmp_path / "Mount_Info.csv").write_text(MOUNT_CSV, encoding="utf-8")
    (tmp_path / "MediaPlayer_Info.csv").write_text(MEDIA_PLAYER_CSV, encoding="utf-8")
    (tmp_path / "Receptacle_Box_info.csv").write_text(RECEPTACLE_CSV, encoding="utf-8")
    return tmp_path


@pytest.fixture
def client(catalog):
    flask_app = create_app(catalog=catalog)
    flask_app.config["TESTING"] = True
    return flask_app.test_client()
