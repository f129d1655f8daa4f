"""Installed content (saves, DLC, title updates) of a game.

Xenia stores per-title content below the emulator folder::

    <emulator location>/content/<game id>/<content type as 8 hex digits>/...

e.g. saved games of title 4D5307E6 live in ``content/4D5307E6/00000001``.
"""

import os
import shutil
import subprocess
import sys
import zipfile
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional

from ..config.path_validator import is_safe_archive_member, sanitize_filename
from ..config.paths import AppPaths
from ..config.schema import AppConfiguration, InstalledGame
from ..logging_config import get_logger

logger = get_logger("content")


class ContentError(Exception):
    """Exception raised for installed content operation errors"""
    pass


class ContentType(Enum):
    """Content types supported by Xenia"""
    Saved_Game = 0x0000001
    Downloadable_Content = 0x0000002
    Xbox360_Title = 0x0001000
    Installed_Game = 0x0004000
    Game_On_Demand = 0x0007000
    Installer = 0x00B0000
    Arcade_Title = 0x00D0000

    @property
    def display_name(self) -> str:
        return self.name.replace("_", " ")

    @property
    def folder_name(self) -> str:
        return f"{self.value:08X}"

    @classmethod
    def from_display_name(cls, display_name: str) -> "ContentType":
        for content_type in cls:
            if content_type.display_name == display_name:
                return content_type
        raise ValueError(f"Unknown content type: {display_name}")


@dataclass
class ContentItem:
    """A file or directory inside a content folder"""
    name: str
    full_path: Path

    def is_dir(self) -> bool:
        return self.full_path.is_dir()


class InstalledContentService:
    """Browse, delete, export and import the installed content of games."""

    def __init__(self, config: AppConfiguration, base_dir: Optional[Path] = None):
        """Initialize the content service.

        Args:
            config: Loaded application configuration
            base_dir: Directory emulator locations are relative to
        """
        self.config = config
        self.base_dir = base_dir or AppPaths.BASE_DIR

    def content_root(self, game: InstalledGame) -> Path:
        """Get the emulator's content directory used by a game.

        Raises:
            ContentError: If the game's emulator is not configured
        """
        emulator = self.config.get_emulator(game.emulator_version)
        if emulator is None:
            raise ContentError(f"Xenia {game.emulator_version.value} is not configured")
        return self.base_dir / emulator.emulator_location / "content"

    def content_folder(self, game: InstalledGame, content_type: ContentType) -> Path:
        return self.content_root(game) / game.game_id / content_type.folder_name

    def list_items(self, game: InstalledGame, content_type: ContentType) -> list[ContentItem]:
        """List the entries of a content folder.

        Returns:
            ContentItem list sorted by name, empty if the folder does not exist
        """
        folder = self.content_folder(game, content_type)
        if not folder.is_dir():
            return []
        items = [ContentItem(name=entry.name, full_path=entry) for entry in folder.iterdir()]
        items.sort(key=lambda item: item.name.lower())
        return items

    def delete_items(self, items: Iterable[ContentItem]) -> int:
        """Delete files and directories (recursively).

        Returns:
            Number of items actually deleted

        Raises:
            ContentError: If an item cannot be deleted
        """
        items = list(items)
        if not items:
            logger.info("No items have been selected to delete")
            return 0

        logger.info(f"There are {len(items)} items to delete")
        deleted = 0
        for item in items:
            logger.info(f"Deleting: {item.name}")
            try:
                if item.full_path.is_dir():
                    shutil.rmtree(item.full_path)
                elif item.full_path.is_file():
                    item.full_path.unlink()
                else:
                    logger.debug(f"{item.full_path} no longer exists, skipping")
                    continue
            except OSError as e:
                logger.error(f"Failed to delete {item.full_path}: {e}")
                raise ContentError(f"Could not delete {item.name}: {e}") from e
            deleted += 1
        return deleted

    def export_saves(
        self,
        game: InstalledGame,
        items: Optional[Iterable[ContentItem]] = None,
        destination_dir: Optional[Path] = None,
        timestamp: Optional[datetime] = None,
    ) -> Path:
        """Export saved games to a zip archive.

        Archive entries are ``<game id>/00000001/<relative path>`` so the
        archive can be extracted straight into another content folder.

        Args:
            game: Game whose saves are exported
            items: Selected entries of the saved-game folder, all files if None/empty
            destination_dir: Where to write the archive, defaults to the desktop
            timestamp: Time used in the archive name, defaults to now

        Returns:
            Path to the created archive

        Raises:
            ContentError: If there is nothing to export or writing fails
        """
        save_folder = self.content_folder(game, ContentType.Saved_Game)
        prefix = f"{game.game_id}/{ContentType.Saved_Game.folder_name}"

        files = self._collect_export_files(save_folder, list(items or []))
        if not files:
            raise ContentError(f"There are no saved games for '{game.title}'")

        destination_dir = destination_dir or AppPaths.desktop_dir()
        timestamp = timestamp or datetime.now()
        archive_name = sanitize_filename(f"{timestamp:%Y%m%d_%H%M%S} - {game.title} Save File") + ".zip"
        archive_path = destination_dir / archive_name

        try:
            with zipfile.ZipFile(archive_path, "w", zipfile.ZIP_DEFLATED) as zf:
                for file_path in files:
                    relative = file_path.relative_to(save_folder).as_posix()
                    zf.write(file_path, f"{prefix}/{relative}")
        except OSError as e:
            logger.error(f"Failed to export saves: {e}")
            archive_path.unlink(missing_ok=True)
            raise ContentError(f"Failed to export saves: {e}") from e

        logger.info(f"The save file for '{game.title}' has been exported to {archive_path}")
        return archive_path

    def import_saves(self, game: InstalledGame, archive_path: Path) -> Path:
        """Extract a save archive into the emulator's content folder.

        Existing files are overwritten.

        Returns:
            The content directory the archive was extracted into

        Raises:
            ContentError: If the archive is invalid or would extract outside
                          the content directory
        """
        content_root = self.content_root(game)
        content_root.mkdir(parents=True, exist_ok=True)

        try:
            with zipfile.ZipFile(archive_path, "r") as zf:
                for member in zf.namelist():
                    if not is_safe_archive_member(member, content_root):
                        logger.error(f"Refusing archive entry outside content folder: {member}")
                        raise ContentError(f"Archive entry '{member}' is not allowed")
                zf.extractall(content_root)
        except zipfile.BadZipFile as e:
            logger.error(f"Save archive is corrupted: {archive_path}")
            raise ContentError(f"{archive_path.name} is not a valid zip archive") from e
        except OSError as e:
            logger.error(f"Failed to import saves: {e}")
            raise ContentError(f"Failed to import saves: {e}") from e

        logger.info(f"Imported {archive_path} into {content_root}")
        return content_root

    def open_folder(self, game: InstalledGame, content_type: ContentType) -> Path:
        """Open a content folder in the system file browser.

        Raises:
            ContentError: If the folder does not exist or cannot be opened
        """
        folder = self.content_folder(game, content_type)
        if not folder.is_dir():
            raise ContentError(f"This game has no directory called '{content_type.display_name}'")

        try:
            if sys.platform == "win32":
                os.startfile(folder)
            elif sys.platform == "darwin":
                subprocess.Popen(["open", str(folder)])
            else:
                subprocess.Popen(["xdg-open", str(folder)])
        except OSError as e:
            logger.error(f"Could not open {folder}: {e}")
            raise ContentError(f"Could not open {folder}: {e}") from e
        return folder

    @staticmethod
    def _collect_export_files(save_folder: Path, items: list[ContentItem]) -> list[Path]:
        if not items:
            if not save_folder.is_dir():
                return []
            return sorted(p for p in save_folder.rglob("*") if p.is_file())

        files = []
        for item in items:
            if item.full_path.is_dir():
                files.extend(sorted(p for p in item.full_path.rglob("*") if p.is_file()))
            elif item.full_path.is_file():
                files.append(item.full_path)

        for file_path in files:
            try:
                file_path.relative_to(save_folder)
            except ValueError:
                raise ContentError(f"{file_path} is not inside the saved game folder") from None
        return files
