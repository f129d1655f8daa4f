from pathlib import Path

from xenia_manager.config.manager import ConfigurationManager
from xenia_manager.config.schema import EmulatorVersion, InstalledGame


def test_first_run_when_file_missing(tmp_path):
    assert ConfigurationManager(tmp_path / "configuration.xml").is_first_run()


def test_corrupt_file_is_first_run(tmp_path):
    path = tmp_path / "configuration.xml"
    path.write_text("<XeniaManager><Settings>", encoding="utf-8")

    assert ConfigurationManager(path).is_first_run()


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "nested" / "configuration.xml"
    manager = ConfigurationManager(path)
    config = manager.create_default()
    config.settings.first_run_complete = True
    config.games.append(InstalledGame(
        title="Halo 3",
        game_id="4D5307E6",
        emulator_version=EmulatorVersion.STABLE,
        patch_file_path=Path("Xenia Stable/patches/4D5307E6 - Halo 3.patch.toml"),
    ))
    manager.save()

    loaded = ConfigurationManager(path)
    assert not loaded.is_first_run()

    game = loaded.get_game("Halo 3")
    assert game is not None
    assert game.game_id == "4D5307E6"
    assert game.emulator_version is EmulatorVersion.STABLE
    assert game.patch_file_path == Path("Xenia Stable/patches/4D5307E6 - Halo 3.patch.toml")
    assert game.game_file_path is None
    assert [e.version for e in loaded.config.emulators] == list(EmulatorVersion)
    assert loaded.config.get_emulator(EmulatorVersion.CANARY).emulator_location == Path("Xenia Canary")


def test_malformed_game_entry_is_skipped(tmp_path):
    path = tmp_path / "configuration.xml"
    path.write_text(
        "<XeniaManager>"
        "<Settings><FirstRunComplete>true</FirstRunComplete></Settings>"
        "<Games>"
        "<Game id='1' emulator='Unknown'><Title>Bad</Title></Game>"
        "<Game id='2' emulator='Canary'><Title>Good</Title></Game>"
        "</Games>"
        "</XeniaManager>",
        encoding="utf-8",
    )

    config = ConfigurationManager(path).load()

    assert [g.title for g in config.games] == ["Good"]
    assert config.settings.first_run_complete is True
