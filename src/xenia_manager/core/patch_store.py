"""Read and write game patch files.

A patch file is a TOML document holding one ``[[patch]]`` array of tables
per title::

    title_name = "Halo 3"
    title_id = "4D5307E6"

    [[patch]]
        name = "60 FPS"
        desc = "Unlocks the framerate"
        author = "..."
        is_enabled = false

        [[patch.be32]]
            address = 0x82000000
            value = 0x60000000

The store projects every ``[[patch]]`` entry into a PatchToggle for the
editor and writes back only the ``is_enabled`` flags, leaving every other
key, table and entry of the document as it is on disk.
"""

import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

import toml

from .document import get_array_of_tables, get_bool, get_string
from ..logging_config import get_logger

logger = get_logger("patch_store")

NO_DESCRIPTION = "No description"

_STRING_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}


class PatchError(Exception):
    """Base exception for patch file operations"""
    pass


class PatchParseError(PatchError):
    """Raised when the patch file is not a valid TOML document"""
    pass


class PatchIOError(PatchError):
    """Raised when the patch file cannot be read or written"""
    pass


@dataclass
class PatchToggle:
    """Editable projection of one [[patch]] entry."""
    name: str
    is_enabled: bool
    description: str = NO_DESCRIPTION


def _dump_basic_string(value: str) -> str:
    """Quote a string as a TOML basic string.

    Control characters without a short escape are written as \\uXXXX.
    """
    parts = []
    for char in value:
        if char in _STRING_ESCAPES:
            parts.append(_STRING_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            parts.append(f"\\u{ord(char):04X}")
        else:
            parts.append(char)
    return '"' + "".join(parts) + '"'


class PatchEncoder(toml.TomlEncoder):
    """TOML encoder with correct escaping of control characters in strings."""

    def __init__(self):
        super().__init__()
        self.dump_funcs[str] = _dump_basic_string


class LocalFileSystem:
    """File access used by the store.

    Writes go to a temporary file next to the target which then replaces
    it, so an interrupted write never leaves a truncated patch file.
    """

    def exists(self, path: Path) -> bool:
        return path.is_file()

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def write_text(self, path: Path, text: str) -> None:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
                handle.write(text)
            # mkstemp creates the file as 0600, keep the target's mode
            if path.exists():
                shutil.copymode(path, tmp_name)
            os.replace(tmp_name, path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise


def _parse_enabled(entry: dict, name: str) -> bool:
    """Read is_enabled, accepting "true"/"false" strings.

    Any other value (or a missing key) is treated as disabled.
    """
    value = get_bool(entry, "is_enabled")
    if value is not None:
        return value

    text = get_string(entry, "is_enabled")
    if text is not None and text.strip().lower() in ("true", "false"):
        return text.strip().lower() == "true"

    logger.warning("Patch '%s' has no valid is_enabled value (%r), treating as disabled",
                   name, entry.get("is_enabled"))
    return False


class PatchDocumentStore:
    """Loads patch toggles from a patch file and merges edits back into it.

    One store belongs to one patch file. ``load`` may be called any number
    of times; ``save`` re-reads the file from disk so unrelated changes made
    since the load are kept.
    """

    def __init__(self, patch_path: Path, file_system: Optional[LocalFileSystem] = None):
        """Initialize the store.

        Args:
            patch_path: Full path to the game's patch file
            file_system: Object providing exists/read_text/write_text,
                         defaults to the local disk
        """
        self.patch_path = Path(patch_path)
        self.fs = file_system or LocalFileSystem()

    def load(self) -> list[PatchToggle]:
        """Read the patch file into a list of toggles in document order.

        Returns:
            List of PatchToggle, empty if the file does not exist or has
            no [[patch]] array

        Raises:
            PatchIOError: If the file exists but cannot be read
            PatchParseError: If the file is not valid TOML
        """
        if not self.fs.exists(self.patch_path):
            logger.debug("No patch file at %s", self.patch_path)
            return []

        document = self._read_document()
        toggles = []
        for entry in self._patch_entries(document):
            name = entry.get("name", "")
            name = name if isinstance(name, str) else str(name)
            description = get_string(entry, "desc")
            toggles.append(PatchToggle(
                name=name,
                is_enabled=_parse_enabled(entry, name),
                description=description if description is not None else NO_DESCRIPTION,
            ))

        logger.debug("Loaded %d patches from %s", len(toggles), self.patch_path)
        return toggles

    def save(self, toggles: Iterable[PatchToggle]) -> bool:
        """Write the toggles' is_enabled flags into the patch file.

        Each toggle updates the first [[patch]] entry with the same name.
        Toggles without a matching entry are skipped; entries are never
        added, removed or reordered.

        Args:
            toggles: Edited toggles, usually the list returned by load()

        Returns:
            True if the file was written, False if it does not exist

        Raises:
            PatchIOError: If the file cannot be read or written
            PatchParseError: If the file on disk is not valid TOML
        """
        if not self.fs.exists(self.patch_path):
            logger.debug("Patch file %s does not exist, nothing to save", self.patch_path)
            return False

        document = self._read_document()
        entries = self._patch_entries(document)

        for toggle in toggles:
            for entry in entries:
                if get_string(entry, "name") == toggle.name:
                    entry["is_enabled"] = bool(toggle.is_enabled)
                    break
            else:
                logger.debug("Patch '%s' not found in %s, skipping", toggle.name, self.patch_path)

        # Serialize fully before touching the file
        content = toml.dumps(document, encoder=PatchEncoder())
        try:
            written = toml.loads(content)
        except (toml.TomlDecodeError, ValueError, IndexError) as e:
            logger.error("Serialized patch file %s does not parse: %s", self.patch_path, e)
            raise PatchParseError(f"Could not serialize {self.patch_path}: {e}") from e
        if written != document:
            logger.error("Serialized patch file %s does not match its contents, not saving",
                         self.patch_path)
            raise PatchParseError(f"Could not write {self.patch_path} without changing its contents")

        try:
            self.fs.write_text(self.patch_path, content)
        except OSError as e:
            logger.error("Failed to write patch file %s: %s", self.patch_path, e)
            raise PatchIOError(f"Could not write {self.patch_path}: {e}") from e

        logger.info("Patches saved successfully")
        return True

    def _read_document(self) -> dict:
        try:
            content = self.fs.read_text(self.patch_path)
        except OSError as e:
            logger.error("Failed to read patch file %s: %s", self.patch_path, e)
            raise PatchIOError(f"Could not read {self.patch_path}: {e}") from e

        try:
            return toml.loads(content)
        except (toml.TomlDecodeError, ValueError, IndexError) as e:
            logger.error("Malformed patch file %s: %s", self.patch_path, e)
            raise PatchParseError(f"Could not parse {self.patch_path}: {e}") from e

    @staticmethod
    def _patch_entries(document: dict) -> list[dict]:
        entries = get_array_of_tables(document, "patch")
        if entries is None:
            if "patch" in document:
                logger.warning("'patch' is not an array of tables, ignoring it")
            return []
        return entries
