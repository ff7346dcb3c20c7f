"""Factories that turn configuration into a ready-to-run shell.

This module provides utilities for creating the root ShellContext, the
list of registry providers and the Shell itself from configuration.
"""

from typing import TextIO

from smallshell.commands import builtin_commands
from smallshell.commands.registry import RegistryProvider
from smallshell.config import get_config
from smallshell.config.defaults import get_plugins_dir
from smallshell.config.schema import ShellConfig
from smallshell.context import ShellContext
from smallshell.plugins import DirectoryProvider, EntryPointProvider
from smallshell.shell import Shell


def create_providers(config: ShellConfig | None = None) -> list[RegistryProvider]:
    """Create registry providers in override order.

    Built-ins come first so plugins can replace them.

    Args:
        config: Configuration to use. If None, uses global config.

    Returns:
        Providers for Shell initialization.
    """
    if config is None:
        config = get_config()

    providers: list[RegistryProvider] = [builtin_commands]
    if config.plugins.enabled:
        if config.plugins.auto_discover:
            providers.append(EntryPointProvider())
        providers.append(DirectoryProvider(get_plugins_dir(config.plugins.directory)))
    return providers


def create_context(
    config: ShellConfig | None = None,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> ShellContext:
    """Create the root context for a session.

    Args:
        config: Configuration to use. If None, uses global config.
        stdin: Input stream (defaults to process stdin).
        stdout: Output stream (defaults to process stdout).
        stderr: Error stream (defaults to process stderr).

    Returns:
        Root ShellContext bound to the streams and configured prompt.
    """
    if config is None:
        config = get_config()

    return ShellContext.background(
        prompt=config.prompt,
        stdin=stdin,
        stdout=stdout,
        stderr=stderr,
    )


def create_shell(config: ShellConfig | None = None) -> Shell:
    """Create a Shell from configuration.

    Args:
        config: Configuration to use. If None, uses global config.

    Returns:
        Shell ready for ``init``.
    """
    if config is None:
        config = get_config()

    return Shell(
        create_providers(config),
        banner=config.banner,
        color=config.output.color,
    )
