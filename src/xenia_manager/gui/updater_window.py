"""Window of the standalone self-updater"""

import queue
import threading
from tkinter import messagebox
from typing import Optional

import customtkinter as ctk

from ..core.close_signal import CloseSignal
from ..core.updater import UpdateError, Updater
from ..logging_config import get_logger
from .styles import FONTS, PADDING, WINDOW_SIZES

logger = get_logger("updater_window")

POLL_INTERVAL_MS = 50


class UpdaterWindow(ctk.CTk):
    """Shows download progress while the update runs on a worker thread.

    The worker only puts events on a queue; the Tk thread polls it and
    updates the widgets.
    """

    def __init__(self, updater: Optional[Updater] = None):
        super().__init__()

        self.updater = updater or Updater()
        self.close_signal = CloseSignal()
        self._events: queue.Queue = queue.Queue()
        self._worker: Optional[threading.Thread] = None

        self.title("Xenia Manager Updater")
        width, height = WINDOW_SIZES["updater"]
        self.geometry(f"{width}x{height}")
        self.resizable(False, False)

        self._create_ui()

        self.protocol("WM_DELETE_WINDOW", self._on_close)
        self.after(200, self._start)

    def _create_ui(self):
        container = ctk.CTkFrame(self)
        container.pack(fill="both", expand=True, padx=PADDING["medium"], pady=PADDING["medium"])

        self.status_label = ctk.CTkLabel(container, text="Downloading the latest version...", font=FONTS["body"])
        self.status_label.pack(anchor="w", pady=(0, PADDING["small"]))

        self.progress = ctk.CTkProgressBar(container)
        self.progress.set(0)
        self.progress.pack(fill="x")

    def _start(self):
        self._worker = threading.Thread(target=self._run_update, daemon=True)
        self._worker.start()
        self.after(POLL_INTERVAL_MS, self._poll_events)

    def _run_update(self):
        try:
            self.updater.run(
                progress=lambda percent: self._events.put(("progress", percent)),
                status=lambda message: self._events.put(("status", message)),
                launch=False,
            )
            self._events.put(("done", None))
        except UpdateError as e:
            logger.exception("Update failed")
            self._events.put(("error", e))
        except Exception as e:
            # The poll loop only stops on "done" or "error"
            logger.exception("Unexpected error during update")
            self._events.put(("error", f"Unexpected error during update: {e}"))

    def _poll_events(self):
        try:
            while True:
                event, payload = self._events.get_nowait()
                if event == "progress":
                    self.progress.set(payload / 100)
                elif event == "status":
                    self.status_label.configure(text=payload)
                elif event == "done":
                    self._on_finished()
                    return
                elif event == "error":
                    messagebox.showerror("Xenia Manager Updater", f"{payload}", parent=self)
                    self._on_close()
                    return
        except queue.Empty:
            pass
        self.after(POLL_INTERVAL_MS, self._poll_events)

    def _on_finished(self):
        self.progress.set(1)
        self.status_label.configure(text="Starting Xenia Manager...")
        try:
            self.updater.launch_manager()
        except UpdateError as e:
            messagebox.showerror("Xenia Manager Updater", str(e), parent=self)
        self._on_close()

    def _on_close(self):
        if self._worker is not None and self._worker.is_alive():
            logger.warning("Updater closed while the update was still running")
        self.close_signal.set()
        self.destroy()

