"""Reusable GUI widgets for the application.

Widgets:
    FadeToplevel: Base toplevel window with fade in/out animations,
                  drag-to-move and a CloseSignal resolved on destroy.
    PathSelector: A compound widget combining a label, text entry, and browse
                  button for file/directory path selection. Includes visual
                  status indicator showing if the path exists.
"""

from .fade_window import FadeToplevel
from .path_selector import PathSelector

__all__ = [
    "FadeToplevel",
    "PathSelector",
]
