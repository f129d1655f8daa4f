"""Window for enabling/disabling the patches of a game"""

from pathlib import Path
from tkinter import messagebox
from typing import Optional

import customtkinter as ctk

from ..config.paths import AppPaths
from ..config.schema import InstalledGame
from ..core.patch_store import PatchDocumentStore, PatchError, PatchToggle
from ..logging_config import get_logger
from .styles import COLORS, FONTS, PADDING, WINDOW_SIZES
from .widgets.fade_window import FadeToplevel

logger = get_logger("edit_patch_window")


class EditGamePatchWindow(FadeToplevel):
    """Lists every patch of a game with a checkbox.

    Checkboxes change the in-memory toggles only. "Save & Close" writes the
    flags into the patch file and closes the window; closing it any other
    way discards the changes.
    """

    def __init__(self, parent, game: InstalledGame, base_dir: Optional[Path] = None):
        super().__init__(
            parent,
            title=f"Xenia Manager - Editing {game.title} Patch",
            size=WINDOW_SIZES["edit_patch"],
        )

        self.game = game
        patch_path = (base_dir or AppPaths.BASE_DIR) / (game.patch_file_path or Path())
        self.store = PatchDocumentStore(patch_path)
        self.toggles: list[PatchToggle] = []
        self._checkbox_vars: list[ctk.BooleanVar] = []

        self._create_ui()

        self.configure(cursor="watch")
        self._load_patches()
        self.configure(cursor="")

        self.show()

    def _create_ui(self):
        container = ctk.CTkFrame(self)
        container.pack(fill="both", expand=True, padx=PADDING["medium"], pady=PADDING["medium"])

        title = ctk.CTkLabel(container, text=self.game.title, font=FONTS["title"])
        title.pack(anchor="w", pady=(0, PADDING["small"]))
        self.make_draggable(title)

        self.patch_list = ctk.CTkScrollableFrame(container)
        self.patch_list.pack(fill="both", expand=True, pady=(0, PADDING["small"]))

        self.empty_label = ctk.CTkLabel(
            self.patch_list,
            text="This game has no patches",
            font=FONTS["body"],
            text_color=COLORS["muted"],
        )

        button_frame = ctk.CTkFrame(container, fg_color="transparent")
        button_frame.pack(fill="x")

        ctk.CTkButton(
            button_frame,
            text="Save & Close",
            width=140,
            fg_color=COLORS["success"],
            hover_color=COLORS["success_hover"],
            command=self._save_and_close,
        ).pack(side="right")

    def _load_patches(self):
        """Read the patch file into the toggle list and rebuild the rows."""
        try:
            self.toggles = self.store.load()
        except PatchError as e:
            logger.exception("Failed to load patches for %s", self.game.title)
            self.toggles = []
            messagebox.showerror("Error", str(e), parent=self)
        self._populate_list()

    def _populate_list(self):
        for child in self.patch_list.winfo_children():
            if child is not self.empty_label:
                child.destroy()
        self._checkbox_vars.clear()

        if not self.toggles:
            self.empty_label.pack(pady=PADDING["large"])
            return
        self.empty_label.pack_forget()

        for toggle in self.toggles:
            self._create_patch_row(toggle)

    def _create_patch_row(self, toggle: PatchToggle):
        row = ctk.CTkFrame(self.patch_list, fg_color="transparent")
        row.pack(fill="x", pady=(0, PADDING["small"]))

        var = ctk.BooleanVar(value=toggle.is_enabled)
        self._checkbox_vars.append(var)

        ctk.CTkCheckBox(
            row,
            text=toggle.name,
            variable=var,
            font=FONTS["heading"],
            command=lambda t=toggle, v=var: self._on_toggle(t, v),
        ).pack(anchor="w")

        ctk.CTkLabel(
            row,
            text=toggle.description,
            font=FONTS["small"],
            text_color=COLORS["muted"],
            wraplength=WINDOW_SIZES["edit_patch"][0] - 120,
            justify="left",
        ).pack(anchor="w", padx=(28, 0))

    def _on_toggle(self, toggle: PatchToggle, var: ctk.BooleanVar):
        toggle.is_enabled = bool(var.get())
        logger.debug("Patch '%s' set to %s", toggle.name, toggle.is_enabled)

    def _save_and_close(self):
        """Save the toggles, then close. Save errors are shown but still close."""
        logger.info("Saving changes")
        try:
            self.store.save(self.toggles)
        except PatchError as e:
            logger.exception("Failed to save patches for %s", self.game.title)
            messagebox.showerror("Error", str(e), parent=self)
        self.close()
