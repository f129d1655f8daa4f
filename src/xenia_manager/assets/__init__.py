"""Asset loading utilities for icons.

This module handles loading assets in both development and packaged (PyInstaller) modes.

Submodules:
    loader: get_asset_path() function for resolving asset paths
    icon_generator: Script generating the icons with Pillow (run with python -m)

Asset Directory Structure:
    assets/
        icons/
            gear.png      - Settings button icon
            update.png    - Update button icon
            content.png   - Installed content button icon
            patch.png     - Patch editor button icon
            app_icon.png  - Application icon (256x256)
            app_icon.ico  - Windows application icon (multi-size)
"""

from .loader import get_asset_path

__all__ = [
    "get_asset_path",
]
