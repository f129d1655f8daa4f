import zipfile
from datetime import datetime

import pytest

from xenia_manager.config.schema import EmulatorVersion, InstalledGame
from xenia_manager.core.content import (
    ContentError,
    ContentItem,
    ContentType,
    InstalledContentService,
)


@pytest.fixture
def service(app_config, base_dir):
    return InstalledContentService(app_config, base_dir=base_dir)


@pytest.fixture
def save_folder(base_dir):
    folder = base_dir / "Xenia Canary" / "content" / "4D5307E6" / "00000001"
    (folder / "profile").mkdir(parents=True)
    (folder / "slot1.sav").write_bytes(b"slot one")
    (folder / "profile" / "settings.bin").write_bytes(b"settings")
    return folder


def test_content_type_names():
    assert ContentType.Saved_Game.folder_name == "00000001"
    assert ContentType.Installer.folder_name == "000B0000"
    assert ContentType.Downloadable_Content.display_name == "Downloadable Content"
    assert ContentType.from_display_name("Game On Demand") is ContentType.Game_On_Demand
    with pytest.raises(ValueError):
        ContentType.from_display_name("Profile")


def test_content_folder_uses_game_emulator(service, game, base_dir):
    folder = service.content_folder(game, ContentType.Downloadable_Content)
    assert folder == base_dir / "Xenia Canary" / "content" / "4D5307E6" / "00000002"


def test_unconfigured_emulator_raises(service):
    netplay_game = InstalledGame(title="X", game_id="00000000", emulator_version=EmulatorVersion.NETPLAY)
    with pytest.raises(ContentError):
        service.content_root(netplay_game)


def test_list_items(service, game, save_folder):
    items = service.list_items(game, ContentType.Saved_Game)

    assert [item.name for item in items] == ["profile", "slot1.sav"]
    assert items[0].is_dir()
    assert service.list_items(game, ContentType.Installer) == []


def test_delete_items(service, game, save_folder):
    items = service.list_items(game, ContentType.Saved_Game)
    missing = ContentItem(name="gone", full_path=save_folder / "gone")

    assert service.delete_items(items + [missing]) == 2
    assert list(save_folder.iterdir()) == []
    assert service.delete_items([]) == 0


def test_export_all_saves(service, game, save_folder, tmp_path):
    out = tmp_path / "desktop"
    out.mkdir()

    archive = service.export_saves(game, destination_dir=out, timestamp=datetime(2024, 5, 1, 12, 30, 45))

    assert archive.name == "20240501_123045 - Halo 3 Save File.zip"
    with zipfile.ZipFile(archive) as zf:
        assert sorted(zf.namelist()) == [
            "4D5307E6/00000001/profile/settings.bin",
            "4D5307E6/00000001/slot1.sav",
        ]
        assert zf.read("4D5307E6/00000001/slot1.sav") == b"slot one"


def test_export_selected_directory(service, game, save_folder, tmp_path):
    selected = [ContentItem(name="profile", full_path=save_folder / "profile")]

    archive = service.export_saves(game, selected, destination_dir=tmp_path)

    with zipfile.ZipFile(archive) as zf:
        assert zf.namelist() == ["4D5307E6/00000001/profile/settings.bin"]


def test_export_sanitizes_title(service, save_folder, tmp_path):
    odd = InstalledGame(title="Halo: Reach?", game_id="4D5307E6", emulator_version=EmulatorVersion.CANARY)

    archive = service.export_saves(odd, destination_dir=tmp_path, timestamp=datetime(2024, 1, 2, 3, 4, 5))

    assert archive.name == "20240102_030405 - Halo_ Reach_ Save File.zip"


def test_export_without_saves_raises(service, game, tmp_path):
    with pytest.raises(ContentError):
        service.export_saves(game, destination_dir=tmp_path)
    assert list(tmp_path.glob("*.zip")) == []


def test_import_round_trip(service, game, save_folder, tmp_path):
    archive = service.export_saves(game, destination_dir=tmp_path)
    (save_folder / "slot1.sav").write_bytes(b"overwritten")

    content_root = service.import_saves(game, archive)

    assert content_root == save_folder.parent.parent
    assert (save_folder / "slot1.sav").read_bytes() == b"slot one"


def test_import_creates_content_folder(service, game, base_dir, tmp_path):
    archive = tmp_path / "save.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("4D5307E6/00000001/new.sav", b"new")

    service.import_saves(game, archive)

    assert (base_dir / "Xenia Canary" / "content" / "4D5307E6" / "00000001" / "new.sav").read_bytes() == b"new"


def test_import_refuses_path_traversal(service, game, base_dir, tmp_path):
    archive = tmp_path / "evil.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("../../evil.txt", b"bad")

    with pytest.raises(ContentError):
        service.import_saves(game, archive)
    assert not (base_dir / "evil.txt").exists()


def test_import_rejects_invalid_archive(service, game, tmp_path):
    archive = tmp_path / "not-a-zip.zip"
    archive.write_text("hello")

    with pytest.raises(ContentError):
        service.import_saves(game, archive)


def test_open_missing_folder_raises(service, game):
    with pytest.raises(ContentError, match="no directory called 'Installer'"):
        service.open_folder(game, ContentType.Installer)
