from pathlib import Path

import pytest

from xenia_manager.config.schema import (
    AppConfiguration,
    EmulatorInfo,
    EmulatorVersion,
    InstalledGame,
)

SAMPLE_PATCH = '''\
title_name = "Halo 3"
title_id = "4D5307E6"
hash = "ABCDEF0123456789"

[[patch]]
name = "A"
desc = "Unlocks the framerate"
author = "someone"
is_enabled = true

[[patch.be32]]
address = 2181038080
value = 1610612736

[[patch]]
name = "B"
author = "someone else"
is_enabled = false

[[patch.be8]]
address = 2181038096
value = 1

[extra]
notes = "keep me"
tags = ["a", "b"]
'''


@pytest.fixture
def patch_file(tmp_path) -> Path:
    path = tmp_path / "4D5307E6 - Halo 3.patch.toml"
    path.write_text(SAMPLE_PATCH, encoding="utf-8")
    return path


@pytest.fixture
def base_dir(tmp_path) -> Path:
    base = tmp_path / "XeniaManager"
    base.mkdir()
    return base


@pytest.fixture
def game() -> InstalledGame:
    return InstalledGame(
        title="Halo 3",
        game_id="4D5307E6",
        emulator_version=EmulatorVersion.CANARY,
        patch_file_path=Path("Xenia Canary/patches/4D5307E6 - Halo 3.patch.toml"),
    )


@pytest.fixture
def app_config() -> AppConfiguration:
    return AppConfiguration(
        emulators=[
            EmulatorInfo(version=EmulatorVersion.STABLE, emulator_location=Path("Xenia Stable")),
            EmulatorInfo(version=EmulatorVersion.CANARY, emulator_location=Path("Xenia Canary")),
        ],
    )
