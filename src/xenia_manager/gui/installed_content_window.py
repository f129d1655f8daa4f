"""Window for browsing the installed content of a game"""

import tkinter as tk
from pathlib import Path
from tkinter import filedialog, messagebox
from typing import Optional

import customtkinter as ctk

from ..config.schema import InstalledGame
from ..core.content import ContentError, ContentItem, ContentType, InstalledContentService
from ..logging_config import get_logger
from .styles import COLORS, FONTS, PADDING, WINDOW_SIZES
from .widgets.fade_window import FadeToplevel

logger = get_logger("installed_content_window")


class InstalledContentWindow(FadeToplevel):
    """Shows one content folder of a game at a time, selected by content type.

    Saved games additionally get Export (to a zip on the desktop) and
    Import (from a zip) buttons.
    """

    def __init__(self, parent, game: InstalledGame, service: InstalledContentService):
        super().__init__(
            parent,
            title=f"Xenia Manager - {game.title} Content",
            size=WINDOW_SIZES["installed_content"],
        )

        self.game = game
        self.service = service
        self.items: list[ContentItem] = []
        self.content_type = ContentType.Saved_Game

        self._create_ui()
        self._on_content_type_changed(self.content_type.display_name)
        self.show()

    def _create_ui(self):
        container = ctk.CTkFrame(self)
        container.pack(fill="both", expand=True, padx=PADDING["medium"], pady=PADDING["medium"])

        header = ctk.CTkFrame(container, fg_color="transparent")
        header.pack(fill="x", pady=(0, PADDING["small"]))

        title = ctk.CTkLabel(header, text=self.game.title, font=FONTS["title"])
        title.pack(side="left")
        self.make_draggable(title)

        self.content_type_box = ctk.CTkComboBox(
            header,
            values=[content_type.display_name for content_type in ContentType],
            state="readonly",
            width=200,
            command=self._on_content_type_changed,
        )
        self.content_type_box.set(self.content_type.display_name)
        self.content_type_box.pack(side="right")

        # CustomTkinter has no list box; a plain one supports multi-select
        list_frame = ctk.CTkFrame(container)
        list_frame.pack(fill="both", expand=True, pady=(0, PADDING["small"]))

        self.listbox = tk.Listbox(
            list_frame,
            selectmode=tk.EXTENDED,
            activestyle="none",
            borderwidth=0,
            highlightthickness=0,
            font=FONTS["body"],
        )
        scrollbar = ctk.CTkScrollbar(list_frame, command=self.listbox.yview)
        self.listbox.configure(yscrollcommand=scrollbar.set)
        self.listbox.pack(side="left", fill="both", expand=True, padx=(5, 0), pady=5)
        scrollbar.pack(side="right", fill="y")
        # Clicking empty space clears the selection
        self.listbox.bind("<Button-1>", self._on_list_click, add="+")

        self.empty_label = ctk.CTkLabel(container, text="", font=FONTS["small"], text_color=COLORS["muted"])
        self.empty_label.pack(anchor="w")

        button_frame = ctk.CTkFrame(container, fg_color="transparent")
        button_frame.pack(fill="x", pady=(PADDING["small"], 0))

        ctk.CTkButton(button_frame, text="Open Folder", width=110, command=self._open_folder).pack(side="left")
        ctk.CTkButton(
            button_frame,
            text="Delete",
            width=90,
            fg_color=COLORS["danger"],
            hover_color=COLORS["danger_hover"],
            command=self._delete_selected,
        ).pack(side="left", padx=(PADDING["small"], 0))

        self.saved_game_buttons = ctk.CTkFrame(button_frame, fg_color="transparent")
        ctk.CTkButton(self.saved_game_buttons, text="Export", width=90, command=self._export_saves).pack(
            side="left", padx=(PADDING["small"], 0))
        ctk.CTkButton(self.saved_game_buttons, text="Import", width=90, command=self._import_saves).pack(
            side="left", padx=(PADDING["small"], 0))

        ctk.CTkButton(
            button_frame,
            text="Close",
            width=90,
            fg_color="transparent",
            border_width=1,
            text_color=("gray10", "gray90"),
            command=self.close,
        ).pack(side="right")

    def _on_content_type_changed(self, choice: str):
        try:
            self.content_type = ContentType.from_display_name(choice)
        except ValueError as e:
            logger.error("Unknown content type selected: %s", e)
            return

        if self.content_type == ContentType.Saved_Game:
            self.saved_game_buttons.pack(side="left")
        else:
            self.saved_game_buttons.pack_forget()

        self._refresh_list()

    def _refresh_list(self):
        try:
            self.items = self.service.list_items(self.game, self.content_type)
        except ContentError as e:
            logger.error("Could not list content: %s", e)
            self.items = []
            messagebox.showerror("Error", str(e), parent=self)

        self.listbox.delete(0, tk.END)
        for item in self.items:
            self.listbox.insert(tk.END, f"{item.name}/" if item.is_dir() else item.name)

        if self.items:
            self.empty_label.configure(text=f"{len(self.items)} item(s)")
        else:
            self.empty_label.configure(text=f"No {self.content_type.display_name.lower()} content installed")

    def _on_list_click(self, event):
        index = self.listbox.nearest(event.y)
        bbox = self.listbox.bbox(index) if self.items else None
        if bbox is None or not (bbox[1] <= event.y <= bbox[1] + bbox[3]):
            self.listbox.selection_clear(0, tk.END)
            return "break"
        return None

    def _selected_items(self) -> list[ContentItem]:
        return [self.items[index] for index in self.listbox.curselection()]

    def _open_folder(self):
        try:
            self.service.open_folder(self.game, self.content_type)
        except ContentError as e:
            logger.error("Could not open content folder: %s", e)
            messagebox.showinfo("Xenia Manager", str(e), parent=self)

    def _delete_selected(self):
        logger.info("Grabbing all of the selected items")
        selected = self._selected_items()
        if not selected:
            logger.info("No items have been selected to delete")
            return

        if not messagebox.askyesno(
            "Delete",
            f"Delete {len(selected)} selected item(s)? This cannot be undone.",
            parent=self,
        ):
            return

        try:
            self.service.delete_items(selected)
        except ContentError as e:
            logger.exception("Delete failed")
            messagebox.showerror("Error", str(e), parent=self)
        self._refresh_list()

    def _export_saves(self):
        self.configure(cursor="watch")
        try:
            archive = self.service.export_saves(self.game, self._selected_items())
        except ContentError as e:
            logger.exception("Export failed")
            messagebox.showerror("Error", str(e), parent=self)
            return
        finally:
            self.configure(cursor="")

        messagebox.showinfo(
            "Xenia Manager",
            f"The save file for '{self.game.title}' has been successfully exported to:\n{archive}",
            parent=self,
        )

    def _import_saves(self):
        selected: Optional[str] = filedialog.askopenfilename(
            parent=self,
            title="Select a save file",
            filetypes=[("Zip archives", "*.zip"), ("All Files", "*")],
        )
        if not selected:
            return

        self.configure(cursor="watch")
        try:
            self.service.import_saves(self.game, Path(selected))
        except ContentError as e:
            logger.exception("Import failed")
            messagebox.showerror("Error", str(e), parent=self)
        finally:
            self.configure(cursor="")
        self._refresh_list()
