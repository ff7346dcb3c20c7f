"""CLI layer for smallshell.

This module provides the command-line entry point, built on Typer with
Rich formatting support.

Usage:
    smallshell --help
    smallshell --prompt '$ ' --no-banner
"""

from smallshell.cli.app import app, main
from smallshell.cli.context import create_context, create_providers, create_shell
from smallshell.cli.options import (
    ConfigOption,
    LogLevelChoice,
    LogLevelOption,
    NoBannerOption,
    NoColorOption,
    NoPluginsOption,
    PluginsDirOption,
    PromptOption,
    apply_cli_overrides,
)

__all__ = [
    # App
    "app",
    "main",
    # Factories
    "create_context",
    "create_providers",
    "create_shell",
    # Options
    "ConfigOption",
    "LogLevelChoice",
    "LogLevelOption",
    "NoBannerOption",
    "NoColorOption",
    "NoPluginsOption",
    "PluginsDirOption",
    "PromptOption",
    "apply_cli_overrides",
]
