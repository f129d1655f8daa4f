"""Xenia Manager - Companion application for the Xenia Xbox 360 emulator.

This application provides:
    - A patch editor for toggling the game patches of an installed title
    - An installed content browser (saves, DLC, title updates) with
      save export/import as zip archives
    - A self-updater that downloads and installs the latest release

The application uses CustomTkinter for its GUI and stores configuration
in %APPDATA%/XeniaManager.

Package Structure:
    app: Main application entry point and orchestrator
    updater_app: Entry point for the standalone self-updater
    config: Configuration management, paths, schemas, and path validation
    core: Patch document store, installed content and updater services
    gui: User interface components (main window, editor windows, widgets)
    assets: Icons and asset loading utilities

Quick Start:
    Run from command line::

        python -m xenia_manager

    Or programmatically::

        from xenia_manager.app import main
        main()

Configuration:
    - Config file: %APPDATA%/XeniaManager/configuration.xml
    - Log file: %APPDATA%/XeniaManager/xenia_manager.log
"""

__version__ = "1.0.0"
__app_name__ = "Xenia Manager"
