"""
Metadata and configuration for the application.
"""

from __future__ import annotations

import os
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from cli_framework import __version__


class Metadata:
    """Centralized metadata and constants for the application."""

    # Core identifiers
    PACKAGE_NAME = "cli-framework"  # pip package name (kebab-case)
    APP_NAME = "CLI Framework"  # Branded display name
    COMMAND_NAME = "cli-framework"  # CLI command (lowercase, no spaces)

    # Derived at runtime
    try:
        VERSION = version(PACKAGE_NAME)
    except PackageNotFoundError:
        VERSION = __version__

    # Paths
    PACKAGE_ROOT_DIR = Path(__file__).resolve().parent.parent
    COMMANDS_DIR = PACKAGE_ROOT_DIR / "commands"

    # Process variables overriding the defaults
    COMMANDS_DIR_VARIABLE = "CLI_FRAMEWORK_COMMANDS_DIR"
    CONFIG_DIR_VARIABLE = "CLI_FRAMEWORK_CONFIG_DIR"
    LOG_LEVEL_VARIABLE = "CLI_FRAMEWORK_LOG_LEVEL"

    @classmethod
    def commands_dir(cls) -> Path:
        """Directory holding the plugin commands."""
        override = os.environ.get(cls.COMMANDS_DIR_VARIABLE)
        return Path(override) if override else cls.COMMANDS_DIR

    @classmethod
    def config_dir(cls) -> Path:
        """Directory searched for the ``.env`` overlay."""
        override = os.environ.get(cls.CONFIG_DIR_VARIABLE)
        return Path(override) if override else Path.cwd()

    @classmethod
    def log_level(cls) -> str:
        return os.environ.get(cls.LOG_LEVEL_VARIABLE, "WARNING").upper()
