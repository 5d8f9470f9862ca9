"""Centralized path and configuration management for HueKeeper.

This module provides utilities for locating the settings file, the install
directory and the bundled color picker binaries.
"""

import os
from pathlib import Path


class HueKeeperPaths:
    """Centralized path management for HueKeeper.

    Provides consistent access to default directories and file naming
    conventions across the application.
    """

    # Default directories (will be expanded with os.path.expanduser)
    DEFAULT_CONFIG_DIR = "~/.config/huekeeper"

    # Settings file configuration
    SETTINGS_FILENAME = "settings.ini"

    # Bundled binaries live in <install dir>/bin
    BIN_DIR_NAME = "bin"

    # Keyword that activates HueKeeper in a launcher ("color pick", "color red")
    TRIGGER_KEYWORD = "color"

    @staticmethod
    def get_config_dir() -> str:
        """Get the default config directory (expanded).

        Returns:
            str: Absolute path to the config directory with ~ expanded.
        """
        return os.path.expanduser(HueKeeperPaths.DEFAULT_CONFIG_DIR)

    @staticmethod
    def get_settings_path() -> str:
        """Get the default settings file path.

        Returns:
            str: Absolute path to settings.ini inside the config directory.
        """
        return os.path.join(HueKeeperPaths.get_config_dir(), HueKeeperPaths.SETTINGS_FILENAME)

    @staticmethod
    def get_install_dir() -> str:
        """Get the directory HueKeeper is installed in.

        Returns:
            str: Absolute path to the huekeeper package directory.
        """
        return str(Path(__file__).resolve().parent.parent)

    @staticmethod
    def get_bin_dir(install_dir: str = None) -> str:
        """Get the directory holding the bundled picker binaries.

        Args:
            install_dir: Optional custom install directory. If None, uses default.

        Returns:
            str: Absolute path to the bin directory.
        """
        base_dir = install_dir if install_dir else HueKeeperPaths.get_install_dir()
        return os.path.join(base_dir, HueKeeperPaths.BIN_DIR_NAME)

    @staticmethod
    def ensure_directories() -> str:
        """Ensure the config directory exists and return its path."""
        config_dir = HueKeeperPaths.get_config_dir()
        Path(config_dir).mkdir(parents=True, exist_ok=True)
        return config_dir
