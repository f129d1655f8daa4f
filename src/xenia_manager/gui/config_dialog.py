"""Configuration/Settings dialog"""

from pathlib import Path

import customtkinter as ctk

from ..config.manager import ConfigurationManager
from ..config.schema import EmulatorVersion
from .styles import FONTS, PADDING, WINDOW_SIZES
from .widgets.path_selector import PathSelector


class ConfigDialog(ctk.CTkToplevel):
    """Settings dialog for the emulator locations.

    This dialog is shown automatically on first run and can be accessed
    anytime via the gear button in the main window.
    """

    def __init__(
        self,
        parent,
        config_manager: ConfigurationManager,
        base_dir: Path,
        first_run: bool = False,
    ):
        """Initialize the configuration dialog.

        Args:
            parent: Parent window
            config_manager: Configuration manager instance
            base_dir: Directory emulator locations are relative to
            first_run: If True, shows first-run specific messaging
        """
        super().__init__(parent)

        self.config_manager = config_manager
        self.base_dir = base_dir
        self.config_changed = False
        self.first_run = first_run

        self.title("Initial Setup" if first_run else "Settings")
        width, height = WINDOW_SIZES["config_dialog"]
        self.geometry(f"{width}x{height}")
        self.resizable(False, False)

        self.transient(parent)
        self.grab_set()

        self.path_selectors: dict[EmulatorVersion, PathSelector] = {}

        self._create_ui()
        self.focus_force()

    def _create_ui(self):
        container = ctk.CTkFrame(self)
        container.pack(fill="both", expand=True, padx=PADDING["large"], pady=PADDING["large"])

        if self.first_run:
            title_text = "Welcome to Xenia Manager"
            subtitle_text = "Tell Xenia Manager where your Xenia builds are installed"
        else:
            title_text = "Settings"
            subtitle_text = "Emulator folders, relative to the Xenia Manager folder"

        ctk.CTkLabel(container, text=title_text, font=FONTS["title"]).pack(anchor="w", pady=(0, 5))
        ctk.CTkLabel(container, text=subtitle_text, font=FONTS["body"], text_color="gray").pack(
            anchor="w", pady=(0, PADDING["medium"]))

        section = ctk.CTkFrame(container)
        section.pack(fill="x", pady=(0, PADDING["medium"]))

        ctk.CTkLabel(section, text="Emulators", font=FONTS["heading"]).pack(
            anchor="w", padx=PADDING["medium"], pady=PADDING["small"])

        for emulator in self.config_manager.config.emulators:
            selector = PathSelector(
                section,
                label=f"Xenia {emulator.version.value}:",
                initial_path=emulator.emulator_location,
                directory=True,
                base_dir=self.base_dir,
                fg_color="transparent",
            )
            selector.pack(fill="x", padx=PADDING["medium"], pady=(0, PADDING["small"]))
            self.path_selectors[emulator.version] = selector

        self._create_buttons(container)

    def _create_buttons(self, parent):
        button_frame = ctk.CTkFrame(parent, fg_color="transparent")
        button_frame.pack(fill="x", side="bottom")

        # Cancel button (not shown on first run)
        if not self.first_run:
            ctk.CTkButton(
                button_frame,
                text="Cancel",
                width=100,
                fg_color="transparent",
                border_width=1,
                text_color=("gray10", "gray90"),
                command=self.destroy,
            ).pack(side="left")

        ctk.CTkButton(
            button_frame,
            text="Get Started" if self.first_run else "Save",
            width=120,
            command=self._save_and_close,
        ).pack(side="right")

    def _save_and_close(self):
        """Save configuration and close dialog."""
        for emulator in self.config_manager.config.emulators:
            path = self.path_selectors[emulator.version].get_path()
            if path:
                emulator.emulator_location = path

        self.config_manager.config.settings.first_run_complete = True
        self.config_manager.save()

        self.config_changed = True
        self.destroy()
