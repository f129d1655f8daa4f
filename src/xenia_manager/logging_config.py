"""Logging configuration for Xenia Manager.

Provides centralized logging setup with file and console handlers.
Log files are stored in the application's config directory.
"""

import logging
import sys

from .config.paths import AppPaths


def setup_logging(debug: bool = False, log_name: str = "xenia_manager.log") -> logging.Logger:
    """Configure application-wide logging.

    Sets up logging to both file and console (if debug mode).
    Log file is stored in %APPDATA%/XeniaManager/

    Args:
        debug: If True, also log to console at DEBUG level
        log_name: File name of the log inside the config directory

    Returns:
        The root logger for the application
    """
    # Ensure config directory exists for log file
    log_dir = AppPaths.ensure_config_dir()
    log_file = log_dir / log_name

    logger = logging.getLogger("xenia_manager")
    logger.setLevel(logging.DEBUG)

    # Clear any existing handlers
    logger.handlers.clear()

    # File handler - always logs DEBUG and above
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    file_handler.setFormatter(file_formatter)
    logger.addHandler(file_handler)

    # Console handler - only in debug mode
    if debug:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)
        console_formatter = logging.Formatter(
            "%(levelname)s - %(name)s - %(message)s"
        )
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger for a specific module.

    Args:
        name: Module name (e.g., 'patch_store', 'updater')

    Returns:
        A logger instance for the module
    """
    return logging.getLogger(f"xenia_manager.{name}")
