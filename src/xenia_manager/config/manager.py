"""Configuration management - load/save XML configuration"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional
from xml.dom import minidom

from .paths import AppPaths
from .schema import (
    AppConfiguration,
    EmulatorInfo,
    EmulatorVersion,
    InstalledGame,
    Settings,
)
from ..logging_config import get_logger

logger = get_logger("config_manager")


class ConfigurationManager:
    """Manages application configuration persistence.

    Handles loading and saving configuration to XML format,
    including first-run detection and default configuration creation.
    """

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or AppPaths.CONFIG_FILE
        self.config: Optional[AppConfiguration] = None

    def is_first_run(self) -> bool:
        """Check if this is the first run of the application.

        First run is detected if:
        - Configuration file does not exist, OR
        - Configuration exists but FirstRunComplete is False

        Returns:
            True if this is the first run
        """
        if not self.config_path.exists():
            return True

        try:
            self.load()
            return not self.config.settings.first_run_complete
        except (ET.ParseError, FileNotFoundError, ValueError, KeyError) as e:
            # Corrupted config = treat as first run
            logger.warning(f"Could not load config, treating as first run: {e}")
            return True

    def load(self) -> AppConfiguration:
        """Load configuration from XML file.

        Returns:
            AppConfiguration object with loaded settings

        Raises:
            FileNotFoundError: If config file doesn't exist
            ET.ParseError: If XML is malformed
        """
        logger.debug(f"Loading configuration from {self.config_path}")
        tree = ET.parse(self.config_path)
        root = tree.getroot()

        settings_elem = root.find("Settings")
        if settings_elem is not None:
            settings = Settings(
                first_run_complete=self._parse_bool(settings_elem, "FirstRunComplete", False),
                theme=self._get_text(settings_elem, "Theme", "system"),
            )
        else:
            settings = Settings()

        emulators = []
        emulators_elem = root.find("Emulators")
        if emulators_elem is not None:
            for emu_elem in emulators_elem.findall("Emulator"):
                try:
                    emulators.append(EmulatorInfo(
                        version=EmulatorVersion(emu_elem.get("version")),
                        emulator_location=Path(self._get_text(emu_elem, "EmulatorLocation", "")),
                        executable_location=self._parse_path(emu_elem, "ExecutableLocation"),
                        configuration_file_location=self._parse_path(emu_elem, "ConfigurationFileLocation"),
                    ))
                except ValueError as e:
                    logger.warning(f"Skipping malformed emulator entry: {e}")

        games = []
        games_elem = root.find("Games")
        if games_elem is not None:
            for game_elem in games_elem.findall("Game"):
                try:
                    games.append(InstalledGame(
                        title=self._get_text(game_elem, "Title", ""),
                        game_id=game_elem.get("id", ""),
                        emulator_version=EmulatorVersion(game_elem.get("emulator", "Canary")),
                        game_file_path=self._parse_path(game_elem, "GameFilePath"),
                        patch_file_path=self._parse_path(game_elem, "PatchFilePath"),
                    ))
                except ValueError as e:
                    # Skip malformed game entries
                    logger.warning(f"Skipping malformed game entry: {e}")

        self.config = AppConfiguration(
            settings=settings,
            emulators=emulators,
            games=games,
        )
        logger.debug(f"Configuration loaded: {len(emulators)} emulators, {len(games)} games")
        return self.config

    def save(self) -> None:
        """Save current configuration to XML file.

        Creates the configuration directory if it doesn't exist.
        """
        if self.config is None:
            raise ValueError("No configuration to save")

        logger.debug(f"Saving configuration to {self.config_path}")
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        root = ET.Element("XeniaManager", version="1.0")

        settings_elem = ET.SubElement(root, "Settings")
        ET.SubElement(settings_elem, "FirstRunComplete").text = str(self.config.settings.first_run_complete).lower()
        ET.SubElement(settings_elem, "Theme").text = self.config.settings.theme

        emulators_elem = ET.SubElement(root, "Emulators")
        for emulator in self.config.emulators:
            emu_elem = ET.SubElement(emulators_elem, "Emulator", version=emulator.version.value)
            ET.SubElement(emu_elem, "EmulatorLocation").text = str(emulator.emulator_location)
            ET.SubElement(emu_elem, "ExecutableLocation").text = self._path_text(emulator.executable_location)
            ET.SubElement(emu_elem, "ConfigurationFileLocation").text = self._path_text(emulator.configuration_file_location)

        games_elem = ET.SubElement(root, "Games")
        for game in self.config.games:
            game_elem = ET.SubElement(
                games_elem,
                "Game",
                id=game.game_id,
                emulator=game.emulator_version.value,
            )
            ET.SubElement(game_elem, "Title").text = game.title
            ET.SubElement(game_elem, "GameFilePath").text = self._path_text(game.game_file_path)
            ET.SubElement(game_elem, "PatchFilePath").text = self._path_text(game.patch_file_path)

        # Write pretty-printed XML
        xml_str = minidom.parseString(ET.tostring(root, encoding="unicode")).toprettyxml(indent="  ")
        # Remove extra blank lines that minidom adds
        lines = [line for line in xml_str.split('\n') if line.strip()]
        xml_str = '\n'.join(lines)

        self.config_path.write_text(xml_str, encoding="utf-8")

    def create_default(self) -> AppConfiguration:
        """Create a default configuration with the default emulator folders.

        Returns:
            New AppConfiguration with default values
        """
        emulators = []
        for version in EmulatorVersion:
            location = AppPaths.EMULATOR_DIRS[version.value]
            emulators.append(EmulatorInfo(
                version=version,
                emulator_location=location,
                executable_location=location / "xenia.exe" if version == EmulatorVersion.STABLE
                else location / f"xenia_{version.value.lower()}.exe",
            ))

        self.config = AppConfiguration(
            settings=Settings(first_run_complete=False),
            emulators=emulators,
            games=[],
        )
        return self.config

    def get_game(self, title: str) -> Optional[InstalledGame]:
        """Get an installed game by title from the loaded configuration."""
        if self.config is None:
            raise ValueError("No configuration loaded")
        return self.config.get_game(title)

    # Helper methods for XML parsing
    @staticmethod
    def _get_text(parent: ET.Element, tag: str, default: str = "") -> str:
        """Get text content of a child element."""
        elem = parent.find(tag)
        return elem.text if elem is not None and elem.text else default

    @staticmethod
    def _parse_bool(parent: ET.Element, tag: str, default: bool = False) -> bool:
        """Parse a boolean value from child element."""
        elem = parent.find(tag)
        if elem is not None and elem.text:
            return elem.text.lower() == "true"
        return default

    @staticmethod
    def _parse_path(parent: ET.Element, tag: str) -> Optional[Path]:
        """Parse a path value from child element."""
        elem = parent.find(tag)
        if elem is not None and elem.text and elem.text.strip():
            return AppPaths.expand_path(elem.text)
        return None

    @staticmethod
    def _path_text(path: Optional[Path]) -> str:
        return str(path) if path else ""
