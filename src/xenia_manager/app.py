"""Main application entry point and orchestrator"""

import sys

import customtkinter as ctk

from .assets import get_asset_path
from .assets.icon_generator import generate_all_icons
from .config.manager import ConfigurationManager
from .config.paths import AppPaths
from .gui.config_dialog import ConfigDialog
from .gui.main_window import MainWindow
from .logging_config import setup_logging, get_logger
from . import __version__

logger = get_logger("app")


class XeniaManagerApp:
    """Main application orchestrator.

    Handles initialization, first-run detection, and application lifecycle.
    """

    def __init__(self):
        self.config_manager = ConfigurationManager()
        self.main_window: MainWindow | None = None

    def run(self):
        """Run the application."""
        self._ensure_icons()

        # Handle first run or load existing config
        is_first_run = self.config_manager.is_first_run()

        if is_first_run:
            self.config_manager.create_default()
        else:
            self.config_manager.load()

        # Appearance follows the saved theme
        ctk.set_appearance_mode(self.config_manager.config.settings.theme)
        ctk.set_default_color_theme("blue")

        # Create main window
        self.main_window = MainWindow(self.config_manager, base_dir=AppPaths.BASE_DIR)

        # If first run, show config dialog immediately after main window renders
        if is_first_run:
            self.main_window.after(100, self._show_first_run_config)

        # Start the main loop
        self.main_window.mainloop()

    def _ensure_icons(self):
        """Draw the toolbar icons on first start."""
        if get_asset_path("icons/app_icon.ico").exists():
            return
        try:
            generate_all_icons()
        except OSError as e:
            logger.warning("Could not generate icons: %s", e)

    def _show_first_run_config(self):
        """Show the configuration dialog for first-run setup."""
        if self.main_window is None:
            return

        dialog = ConfigDialog(
            self.main_window,
            self.config_manager,
            AppPaths.BASE_DIR,
            first_run=True,
        )

        # Wait for dialog to close
        self.main_window.wait_window(dialog)

        # Closed through the window manager instead of "Get Started"
        if not self.config_manager.config.settings.first_run_complete:
            self.config_manager.config.settings.first_run_complete = True
            self.config_manager.save()

        # Refresh main window to show configured emulators
        self.main_window._refresh_ui()


def main():
    """Application entry point."""
    # Initialize logging first
    logger = setup_logging(debug="--debug" in sys.argv)
    logger.info(f"Starting Xenia Manager v{__version__}")

    try:
        app = XeniaManagerApp()
        app.run()
    except Exception as e:
        logger.exception("Fatal error during startup")
        # Show error dialog if something goes wrong during startup
        import tkinter as tk
        from tkinter import messagebox

        root = tk.Tk()
        root.withdraw()
        messagebox.showerror(
            "Startup Error",
            f"Failed to start Xenia Manager:\n\n{e}"
        )
        root.destroy()
        sys.exit(1)
    finally:
        logger.info("Xenia Manager shutting down")


if __name__ == "__main__":
    main()
