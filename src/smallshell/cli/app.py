"""Main CLI application for smallshell."""

import asyncio

import typer
from rich.console import Console
from rich.markup import escape

from smallshell import __version__
from smallshell.cli.context import create_context, create_shell
from smallshell.cli.options import (
    ConfigOption,
    LogLevelOption,
    NoBannerOption,
    NoColorOption,
    NoPluginsOption,
    PluginsDirOption,
    PromptOption,
    apply_cli_overrides,
)
from smallshell.config.loader import load_config, set_config
from smallshell.exceptions import ConfigError, RegistryLoadError
from smallshell.utils.logging import setup_logging

# Create Typer app
app = typer.Typer(
    name="smallshell",
    help="A small interactive command shell",
    add_completion=False,
)

# Rich console for output
console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"smallshell version {__version__}")
        raise typer.Exit()


@app.command()
def run(
    prompt: PromptOption = None,
    no_banner: NoBannerOption = False,
    no_plugins: NoPluginsOption = False,
    plugins_dir: PluginsDirOption = None,
    config_path: ConfigOption = None,
    log_level: LogLevelOption = None,
    no_color: NoColorOption = False,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Start an interactive shell session."""
    try:
        config = load_config(config_path, required=config_path is not None)
    except ConfigError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(e.exit_code) from None

    config = apply_cli_overrides(
        config,
        prompt=prompt,
        no_banner=no_banner,
        no_plugins=no_plugins,
        plugins_dir=plugins_dir,
        log_level=log_level,
        no_color=no_color,
    )
    set_config(config)
    setup_logging(
        level=config.logging.level,
        log_file=config.logging.file,
        json_format=config.logging.json_format,
        use_color=config.output.color,
    )

    shell = create_shell()
    try:
        ctx = shell.init(create_context())
    except RegistryLoadError as e:
        err_console.print(f"\n\nFailed to initialize: {escape(str(e))}")
        raise typer.Exit(e.exit_code) from None

    shell.print_hint(ctx)
    asyncio.run(shell.serve(ctx))


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
