"""Configuration management module.

This module provides configuration storage, loading, and data models for the application.

Submodules:
    manager: ConfigurationManager for loading/saving XML configuration
    schema: Data classes defining configuration structure (EmulatorInfo, InstalledGame, etc.)
    paths: AppPaths with the base directory, config files and updater locations
    path_validator: Path validation utilities to prevent dangerous file operations

The configuration is stored as XML in %APPDATA%/XeniaManager/configuration.xml.
"""

from .manager import ConfigurationManager
from .schema import AppConfiguration, EmulatorInfo, EmulatorVersion, InstalledGame, Settings
from .paths import AppPaths

__all__ = [
    "ConfigurationManager",
    "AppConfiguration",
    "EmulatorInfo",
    "EmulatorVersion",
    "InstalledGame",
    "Settings",
    "AppPaths",
]
