"""Default paths for the application, its configuration and the updater"""

import os
import sys
from pathlib import Path


def _app_base_dir() -> Path:
    if getattr(sys, 'frozen', False):
        # Running as compiled executable (PyInstaller)
        return Path(sys.executable).parent
    return Path.cwd()


def _config_dir() -> Path:
    appdata = os.environ.get("APPDATA")
    if appdata:
        return Path(appdata) / "XeniaManager"
    return Path.home() / ".xenia_manager"


class AppPaths:
    """Default paths used by Xenia Manager.

    Emulator and patch locations stored in the configuration are relative
    to BASE_DIR, the directory the manager executable lives in.
    """

    BASE_DIR = _app_base_dir()

    # Configuration file location
    CONFIG_DIR = _config_dir()
    CONFIG_FILE = CONFIG_DIR / "configuration.xml"

    # Executables shipped in the release zip
    MANAGER_EXECUTABLE = "Xenia Manager.exe"
    UPDATER_EXECUTABLE = "Xenia Manager Updater.exe"

    # Self-updater
    RELEASE_URL = "https://github.com/xenia-manager/xenia-manager/releases/latest/download/xenia_manager.zip"
    RELEASE_ARCHIVE = "xenia_manager.zip"
    UPDATE_DIR_NAME = "Update"

    # Default emulator folders, relative to BASE_DIR
    EMULATOR_DIRS = {
        "Stable": Path("Xenia Stable"),
        "Canary": Path("Xenia Canary"),
        "Netplay": Path("Xenia Netplay"),
    }

    @classmethod
    def expand_path(cls, path_str: str) -> Path:
        """Expand environment variables in path string.

        Args:
            path_str: Path string potentially containing environment variables

        Returns:
            Path object with expanded variables
        """
        return Path(os.path.expandvars(path_str))

    @classmethod
    def ensure_config_dir(cls) -> Path:
        """Ensure the configuration directory exists.

        Returns:
            Path to the configuration directory
        """
        cls.CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        return cls.CONFIG_DIR

    @classmethod
    def desktop_dir(cls) -> Path:
        """Directory save exports are written to."""
        desktop = Path.home() / "Desktop"
        return desktop if desktop.exists() else Path.home()
