"""Main application window listing the installed games."""

import subprocess
import tkinter as tk
from pathlib import Path
from tkinter import messagebox
from typing import Optional

import customtkinter as ctk
from PIL import Image

from .. import __app_name__, __version__
from ..assets.loader import get_asset_path
from ..config.manager import ConfigurationManager
from ..config.paths import AppPaths
from ..config.schema import InstalledGame
from ..core.content import InstalledContentService
from ..logging_config import get_logger
from .config_dialog import ConfigDialog
from .edit_patch_window import EditGamePatchWindow
from .installed_content_window import InstalledContentWindow
from .styles import COLORS, FONTS, PADDING, WINDOW_SIZES

logger = get_logger("main_window")


class MainWindow(ctk.CTk):
    """Library of installed games.

    Each game row opens the installed content browser or the patch editor.
    Only one secondary window is open at a time; the library is refreshed
    when it closes.
    """

    def __init__(self, config_manager: ConfigurationManager, base_dir: Optional[Path] = None):
        super().__init__()

        self.config_manager = config_manager
        self.base_dir = base_dir or AppPaths.BASE_DIR
        self._open_window: Optional[ctk.CTkToplevel] = None

        self.title(f"{__app_name__} v{__version__}")
        width, height = WINDOW_SIZES["main"]
        min_width, min_height = WINDOW_SIZES["min_main"]
        self.geometry(f"{width}x{height}")
        self.minsize(min_width, min_height)

        self._set_app_icon()
        self._create_ui()
        self._refresh_ui()

        self.protocol("WM_DELETE_WINDOW", self._on_close)

    def _set_app_icon(self):
        try:
            icon_path = get_asset_path("icons/app_icon.ico")
            if icon_path.exists():
                self.iconbitmap(str(icon_path))
        except (OSError, tk.TclError) as e:
            logger.debug("Could not set app icon: %s", e)

    def _load_icon(self, relative_path: str, size: tuple[int, int] = (20, 20)) -> Optional[ctk.CTkImage]:
        try:
            icon_path = get_asset_path(relative_path)
            if icon_path.exists():
                image = Image.open(icon_path)
                return ctk.CTkImage(light_image=image, dark_image=image, size=size)
        except (OSError, IOError, ValueError) as e:
            logger.debug("Could not load icon %s: %s", relative_path, e)
        return None

    def _create_ui(self):
        self._icons = {
            "gear": self._load_icon("icons/gear.png"),
            "update": self._load_icon("icons/update.png"),
            "content": self._load_icon("icons/content.png", (16, 16)),
            "patch": self._load_icon("icons/patch.png", (16, 16)),
        }

        toolbar = ctk.CTkFrame(self, fg_color="transparent")
        toolbar.pack(fill="x", padx=PADDING["medium"], pady=(PADDING["medium"], PADDING["small"]))

        ctk.CTkLabel(toolbar, text="Library", font=FONTS["title"]).pack(side="left")

        ctk.CTkButton(
            toolbar,
            text="" if self._icons["gear"] else "Settings",
            image=self._icons["gear"],
            width=36,
            command=self._open_settings,
        ).pack(side="right")

        ctk.CTkButton(
            toolbar,
            text="Update",
            image=self._icons["update"],
            width=90,
            command=self._start_updater,
        ).pack(side="right", padx=(0, PADDING["small"]))

        self.game_list = ctk.CTkScrollableFrame(self)
        self.game_list.pack(fill="both", expand=True, padx=PADDING["medium"], pady=(0, PADDING["small"]))

        self.status_label = ctk.CTkLabel(self, text="", font=FONTS["small"], text_color=COLORS["muted"], anchor="w")
        self.status_label.pack(fill="x", padx=PADDING["medium"], pady=(0, PADDING["small"]))

    def _refresh_ui(self):
        """Rebuild the game list from the configuration."""
        for child in self.game_list.winfo_children():
            child.destroy()

        games = self.config_manager.config.sorted_games()
        if not games:
            ctk.CTkLabel(
                self.game_list,
                text="No games in the library",
                font=FONTS["body"],
                text_color=COLORS["muted"],
            ).pack(pady=PADDING["large"])
        for game in games:
            self._create_game_row(game)

        self._set_status(f"{len(games)} game(s)")

    def _create_game_row(self, game: InstalledGame):
        row = ctk.CTkFrame(self.game_list)
        row.pack(fill="x", pady=(0, PADDING["small"] // 2))

        text_frame = ctk.CTkFrame(row, fg_color="transparent")
        text_frame.pack(side="left", fill="x", expand=True, padx=PADDING["small"], pady=5)
        ctk.CTkLabel(text_frame, text=game.title, font=FONTS["heading"], anchor="w").pack(fill="x")
        ctk.CTkLabel(
            text_frame,
            text=f"{game.game_id}  -  Xenia {game.emulator_version.value}",
            font=FONTS["small"],
            text_color=COLORS["muted"],
            anchor="w",
        ).pack(fill="x")

        patch_btn = ctk.CTkButton(
            row,
            text="Patches",
            image=self._icons["patch"],
            width=100,
            command=lambda g=game: self._open_patch_editor(g),
        )
        patch_btn.pack(side="right", padx=(5, PADDING["small"]))
        if not game.has_patch():
            patch_btn.configure(state="disabled")

        ctk.CTkButton(
            row,
            text="Content",
            image=self._icons["content"],
            width=100,
            command=lambda g=game: self._open_installed_content(g),
        ).pack(side="right")

    def _open_patch_editor(self, game: InstalledGame):
        if self._open_window is not None:
            return
        logger.info(f"Opening patch editor for {game.title}")
        window = EditGamePatchWindow(self, game, base_dir=self.base_dir)
        self._track_window(window)

    def _open_installed_content(self, game: InstalledGame):
        if self._open_window is not None:
            return
        logger.info(f"Opening installed content for {game.title}")
        service = InstalledContentService(self.config_manager.config, base_dir=self.base_dir)
        window = InstalledContentWindow(self, game, service)
        self._track_window(window)

    def _track_window(self, window):
        self._open_window = window
        # Resolved from <Destroy>, i.e. on the Tk thread
        window.close_signal.add_callback(self._schedule_window_closed)

    def _schedule_window_closed(self, _result: bool):
        try:
            self.after_idle(self._on_window_closed)
        except tk.TclError:
            # Main window is being destroyed as well
            pass

    def _on_window_closed(self):
        self._open_window = None
        self._refresh_ui()

    def _open_settings(self):
        """Open the settings dialog."""
        dialog = ConfigDialog(self, self.config_manager, self.base_dir, first_run=False)
        self.wait_window(dialog)

        if dialog.config_changed:
            self._refresh_ui()
            self._set_status("Configuration updated")

    def _start_updater(self):
        updater = self.base_dir / AppPaths.UPDATER_EXECUTABLE
        if not updater.exists():
            messagebox.showerror("Xenia Manager", f"{AppPaths.UPDATER_EXECUTABLE} was not found", parent=self)
            return
        if not messagebox.askyesno("Xenia Manager", "Close Xenia Manager and install the latest version?", parent=self):
            return

        logger.info("Starting the updater")
        try:
            subprocess.Popen([str(updater)], cwd=str(self.base_dir))
        except OSError as e:
            logger.error("Could not start the updater: %s", e)
            messagebox.showerror("Xenia Manager", f"Could not start the updater:\n{e}", parent=self)
            return
        self._on_close()

    def _set_status(self, message: str):
        self.status_label.configure(text=message)

    def _on_close(self):
        self.destroy()
