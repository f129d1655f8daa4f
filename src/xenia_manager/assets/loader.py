"""Asset path resolution for development and PyInstaller builds"""

import sys
from pathlib import Path


def assets_root() -> Path:
    """Directory holding the assets.

    PyInstaller unpacks data files below ``sys._MEIPASS``; from a source
    checkout the assets sit next to this module.
    """
    if getattr(sys, 'frozen', False):
        return Path(sys._MEIPASS) / "assets"
    return Path(__file__).parent


def get_asset_path(relative_path: str) -> Path:
    """Get the path of an asset, e.g. ``get_asset_path("icons/gear.png")``."""
    return assets_root() / relative_path
