"""Configuration data models"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class EmulatorVersion(Enum):
    """Xenia builds a game can be played with"""
    STABLE = "Stable"
    CANARY = "Canary"
    NETPLAY = "Netplay"


@dataclass
class EmulatorInfo:
    """Location of one installed Xenia build, relative to the base directory"""
    version: EmulatorVersion
    emulator_location: Path
    executable_location: Optional[Path] = None
    configuration_file_location: Optional[Path] = None

    def is_installed(self, base_dir: Path) -> bool:
        """Check if the emulator folder exists.

        Args:
            base_dir: Application base directory

        Returns:
            True if the emulator directory exists on disk
        """
        return (base_dir / self.emulator_location).is_dir()


@dataclass
class InstalledGame:
    """A game added to the library"""
    title: str
    game_id: str  # 8 hex digit title id, e.g. "4D5307E6"
    emulator_version: EmulatorVersion = EmulatorVersion.CANARY
    game_file_path: Optional[Path] = None
    patch_file_path: Optional[Path] = None  # Relative to the base directory

    def has_patch(self) -> bool:
        return self.patch_file_path is not None


@dataclass
class Settings:
    """Application settings"""
    first_run_complete: bool = False
    theme: str = "system"


@dataclass
class AppConfiguration:
    """Complete application configuration"""
    settings: Settings = field(default_factory=Settings)
    emulators: list[EmulatorInfo] = field(default_factory=list)
    games: list[InstalledGame] = field(default_factory=list)

    def get_emulator(self, version: EmulatorVersion) -> Optional[EmulatorInfo]:
        """Get an emulator by version.

        Args:
            version: The emulator version to find

        Returns:
            The EmulatorInfo object or None if not configured
        """
        for emulator in self.emulators:
            if emulator.version == version:
                return emulator
        return None

    def get_game(self, title: str) -> Optional[InstalledGame]:
        """Get an installed game by title.

        Args:
            title: Game title as shown in the library

        Returns:
            The InstalledGame object or None if not found
        """
        for game in self.games:
            if game.title == title:
                return game
        return None

    def sorted_games(self) -> list[InstalledGame]:
        """Get all games sorted by title (case-insensitive).

        Returns:
            List of InstalledGame objects
        """
        return sorted(self.games, key=lambda g: g.title.lower())
