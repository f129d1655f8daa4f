"""Entry point of the standalone updater ("Xenia Manager Updater.exe")"""

import sys

import customtkinter as ctk

from .config.paths import AppPaths
from .core.updater import Updater
from .gui.updater_window import UpdaterWindow
from .logging_config import setup_logging, get_logger


def main():
    """Updater entry point.

    An optional first argument overrides the release URL.
    """
    args = [arg for arg in sys.argv[1:] if arg != "--debug"]
    logger = setup_logging(debug="--debug" in sys.argv, log_name="xenia_manager_updater.log")
    url = args[0] if args else AppPaths.RELEASE_URL
    logger.info(f"Updating {AppPaths.BASE_DIR} from {url}")

    ctk.set_appearance_mode("system")
    ctk.set_default_color_theme("blue")

    window = UpdaterWindow(Updater(base_dir=AppPaths.BASE_DIR, url=url))
    window.mainloop()

    get_logger("updater_app").info("Updater finished")


if __name__ == "__main__":
    main()
