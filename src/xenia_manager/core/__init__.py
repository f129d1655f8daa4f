"""Core business logic module.

This module contains the functionality behind the windows, independent of
the GUI toolkit.

Submodules:
    document: Typed "get-if-kind" access to parsed TOML documents
    patch_store: PatchDocumentStore for loading/saving game patch toggles
    content: InstalledContentService for saves, DLC and other title content
    updater: Updater for downloading and installing new releases
    close_signal: CloseSignal, the one-shot "window closed" notification
"""

from .close_signal import CloseSignal
from .content import ContentError, ContentItem, ContentType, InstalledContentService
from .patch_store import (
    PatchDocumentStore,
    PatchError,
    PatchIOError,
    PatchParseError,
    PatchToggle,
)
from .updater import UpdateError, Updater

__all__ = [
    "CloseSignal",
    "ContentError",
    "ContentItem",
    "ContentType",
    "InstalledContentService",
    "PatchDocumentStore",
    "PatchError",
    "PatchIOError",
    "PatchParseError",
    "PatchToggle",
    "UpdateError",
    "Updater",
]
