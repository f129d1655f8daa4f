"""GUI module using CustomTkinter.

This module provides all user interface components for the application.

Components:
    MainWindow: Library of installed games with Content / Patches buttons
    EditGamePatchWindow: Patch editor for one game
    InstalledContentWindow: Installed content browser with save export/import
    UpdaterWindow: Progress window of the standalone updater
    ConfigDialog: Settings dialog for first-run setup and emulator locations

Submodules:
    styles: Theme constants (colors, fonts, padding, window sizes, fades)
    widgets: Reusable widget components (FadeToplevel, PathSelector)
"""

from .main_window import MainWindow
from .config_dialog import ConfigDialog
from .edit_patch_window import EditGamePatchWindow
from .installed_content_window import InstalledContentWindow
from .updater_window import UpdaterWindow

__all__ = [
    "MainWindow",
    "ConfigDialog",
    "EditGamePatchWindow",
    "InstalledContentWindow",
    "UpdaterWindow",
]
