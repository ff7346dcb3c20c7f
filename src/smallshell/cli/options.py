"""Shared CLI options for the smallshell entry point.

This module provides reusable Typer options and the helpers that fold
them into a loaded configuration.
"""

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from smallshell.config.schema import ShellConfig


class LogLevelChoice(str, Enum):
    """Log level choices for CLI."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# Type aliases for CLI options
PromptOption = Annotated[
    str | None,
    typer.Option(
        "--prompt",
        "-p",
        help="Initial prompt string. Defaults to config setting.",
    ),
]

NoBannerOption = Annotated[
    bool,
    typer.Option(
        "--no-banner",
        help="Skip the startup banner.",
    ),
]

NoPluginsOption = Annotated[
    bool,
    typer.Option(
        "--no-plugins",
        help="Load built-in commands only.",
    ),
]

PluginsDirOption = Annotated[
    Path | None,
    typer.Option(
        "--plugins-dir",
        help="Directory of plugin modules. Defaults to config setting.",
        file_okay=False,
    ),
]

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to a config file.",
        dir_okay=False,
    ),
]

LogLevelOption = Annotated[
    LogLevelChoice | None,
    typer.Option(
        "--log-level",
        "-l",
        help="Log level. Defaults to config setting.",
        case_sensitive=False,
    ),
]

NoColorOption = Annotated[
    bool,
    typer.Option(
        "--no-color",
        help="Disable colored output.",
    ),
]


def apply_cli_overrides(
    config: ShellConfig,
    *,
    prompt: str | None = None,
    no_banner: bool = False,
    no_plugins: bool = False,
    plugins_dir: Path | None = None,
    log_level: LogLevelChoice | None = None,
    no_color: bool = False,
) -> ShellConfig:
    """Return a copy of ``config`` with CLI flags applied.

    Flags only ever override; an unset flag keeps the config value.
    """
    config = config.model_copy(deep=True)
    if prompt is not None:
        config.prompt = prompt
    if no_banner:
        config.banner = False
    if no_plugins:
        config.plugins.enabled = False
    if plugins_dir is not None:
        config.plugins.directory = plugins_dir
    if log_level is not None:
        config.logging.level = log_level.value
    if no_color:
        config.output.color = False
    return config
