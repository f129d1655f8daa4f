"""Base class for the secondary windows"""

import tkinter as tk

import customtkinter as ctk

from ...core.close_signal import CloseSignal
from ...logging_config import get_logger
from ..styles import FADE

logger = get_logger("fade_window")


class FadeToplevel(ctk.CTkToplevel):
    """Toplevel window that fades in/out and reports when it has closed.

    Subclasses build their UI, then call ``show()``. ``close()`` fades the
    window out and destroys it; ``close_signal`` is resolved once the
    window is destroyed, however that happens.
    """

    def __init__(self, parent, title: str, size: tuple[int, int]):
        super().__init__(parent)

        self.close_signal = CloseSignal()
        self._closing = False
        self._drag_offset = (0, 0)

        self.title(title)
        width, height = size
        self.geometry(f"{width}x{height}")
        self.transient(parent)

        # Hidden until show() fades it in
        self._set_alpha(0.0)

        self.protocol("WM_DELETE_WINDOW", self.close)
        self.bind("<Destroy>", self._on_destroy, add="+")

    def show(self):
        """Fade the window in and give it focus."""
        self.grab_set()
        self.focus_force()
        self._fade(0.0, 1.0)

    def close(self):
        """Fade the window out, then destroy it."""
        if self._closing:
            return
        self._closing = True
        logger.info(f"Closing {self.__class__.__name__} window")
        self._fade(1.0, 0.0, on_done=self.destroy)

    def wait_for_close(self) -> CloseSignal:
        return self.close_signal

    def make_draggable(self, widget):
        """Let the user move the window by dragging widget."""
        widget.bind("<ButtonPress-1>", self._on_drag_start)
        widget.bind("<B1-Motion>", self._on_drag_motion)

    def _on_drag_start(self, event):
        self._drag_offset = (event.x_root - self.winfo_x(), event.y_root - self.winfo_y())

    def _on_drag_motion(self, event):
        dx, dy = self._drag_offset
        self.geometry(f"+{event.x_root - dx}+{event.y_root - dy}")

    def _fade(self, start: float, end: float, on_done=None, step: int = 0):
        if not self.winfo_exists():
            return
        steps = FADE["steps"]
        alpha = start + (end - start) * step / steps
        self._set_alpha(alpha)
        if step < steps:
            self.after(FADE["interval_ms"], lambda: self._fade(start, end, on_done, step + 1))
        elif on_done:
            on_done()

    def _set_alpha(self, alpha: float):
        try:
            self.attributes("-alpha", alpha)
        except tk.TclError as e:
            # Window managers without compositing
            logger.debug("Could not set window alpha: %s", e)

    def _on_destroy(self, event):
        # <Destroy> is delivered for every child widget as well
        if event.widget is self:
            self.close_signal.set()
