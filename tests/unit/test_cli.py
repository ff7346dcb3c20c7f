"""Tests for the command line entry point."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from smallshell import __version__
from smallshell.cli.app import app
from smallshell.cli.context import create_context, create_providers, create_shell
from smallshell.cli.options import LogLevelChoice, apply_cli_overrides
from smallshell.commands import builtin_commands
from smallshell.config.schema import ShellConfig
from smallshell.plugins import DirectoryProvider, EntryPointProvider

runner = CliRunner()

PLUGIN = '''
from smallshell.commands import CommandRegistry

COMMANDS = CommandRegistry(name="shout")


@COMMANDS.command()
def shout(ctx, args):
    """Print arguments in upper case."""
    print(" ".join(args[1:]).upper(), file=ctx.stdout)
'''


@pytest.fixture(autouse=True)
def no_entry_points(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep installed plugins out of CLI runs."""
    monkeypatch.setattr("smallshell.plugins.entry_points", lambda group: [])


class TestRun:
    """Tests for the run command."""

    def test_echo_session(self) -> None:
        result = runner.invoke(app, ["--no-banner", "--no-plugins"], input="echo hello\n")

        assert result.exit_code == 0
        assert "/> hello\n/> " in result.output
        assert "Type help for available commands" in result.output

    def test_banner(self) -> None:
        result = runner.invoke(app, ["--no-plugins", "--no-color"], input="")

        assert result.exit_code == 0
        assert "( S )( M )( A )( L )( L )" in result.output

    def test_prompt_option(self) -> None:
        result = runner.invoke(app, ["--no-banner", "--no-plugins", "-p", "% "], input="")

        assert result.exit_code == 0
        assert "% " in result.output
        assert "/> " not in result.output

    def test_exit_command(self) -> None:
        result = runner.invoke(
            app, ["--no-banner", "--no-plugins"], input="exit\necho unreachable\n"
        )

        assert result.exit_code == 0
        assert "unreachable" not in result.output

    def test_unknown_command_reported(self) -> None:
        result = runner.invoke(app, ["--no-banner", "--no-plugins"], input="nope\n")

        assert result.exit_code == 0
        assert "command not found: nope" in result.output

    def test_plugins_dir(self, temp_dir: Path) -> None:
        (temp_dir / "shout.py").write_text(PLUGIN)

        result = runner.invoke(
            app, ["--no-banner", "--plugins-dir", str(temp_dir)], input="shout hi there\n"
        )

        assert result.exit_code == 0
        assert "HI THERE" in result.output

    def test_config_file(self, config_file: Path) -> None:
        result = runner.invoke(app, ["--config", str(config_file)], input="")

        assert result.exit_code == 0
        assert "% " in result.output
        assert "( S )" not in result.output

    def test_missing_config_file(self, temp_dir: Path) -> None:
        result = runner.invoke(app, ["--config", str(temp_dir / "nope.toml")])

        assert result.exit_code == 21
        assert "not found" in result.output

    def test_registry_failure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a failing provider aborts startup with exit code 1."""

        class Failing:
            name = "failing"

            def registry(self):
                raise RuntimeError("plugin exploded")

        monkeypatch.setattr(
            "smallshell.cli.context.create_providers", lambda config=None: [Failing()]
        )

        result = runner.invoke(app, ["--no-banner"], input="echo hi\n")

        assert result.exit_code == 1
        assert "Failed to initialize" in result.output
        assert "plugin exploded" in result.output

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"smallshell version {__version__}" in result.output


class TestApplyCliOverrides:
    """Tests for folding flags into configuration."""

    def test_no_flags_keeps_config(self, default_config: ShellConfig) -> None:
        assert apply_cli_overrides(default_config) == default_config

    def test_flags_override(self, default_config: ShellConfig, temp_dir: Path) -> None:
        config = apply_cli_overrides(
            default_config,
            prompt="$ ",
            no_banner=True,
            no_plugins=True,
            plugins_dir=temp_dir,
            log_level=LogLevelChoice.DEBUG,
            no_color=True,
        )

        assert config.prompt == "$ "
        assert config.banner is False
        assert config.plugins.enabled is False
        assert config.plugins.directory == temp_dir
        assert config.logging.level == "DEBUG"
        assert config.output.color is False

    def test_original_untouched(self, default_config: ShellConfig) -> None:
        apply_cli_overrides(default_config, no_plugins=True)
        assert default_config.plugins.enabled is True


class TestFactories:
    """Tests for config-driven factories."""

    def test_providers_builtins_only(self, default_config: ShellConfig) -> None:
        default_config.plugins.enabled = False
        assert create_providers(default_config) == [builtin_commands]

    def test_providers_order(self, default_config: ShellConfig, temp_dir: Path) -> None:
        default_config.plugins.directory = temp_dir

        providers = create_providers(default_config)

        assert providers[0] is builtin_commands
        assert isinstance(providers[1], EntryPointProvider)
        assert isinstance(providers[2], DirectoryProvider)
        assert providers[2].path == temp_dir

    def test_providers_without_auto_discover(self, default_config: ShellConfig) -> None:
        default_config.plugins.auto_discover = False
        providers = create_providers(default_config)
        assert [type(p) for p in providers[1:]] == [DirectoryProvider]

    def test_context_uses_configured_prompt(self) -> None:
        ctx = create_context(ShellConfig(prompt="% "))
        assert ctx.prompt == "% "

    def test_shell_from_config(self) -> None:
        config = ShellConfig(banner=False)
        config.plugins.enabled = False
        shell = create_shell(config)
        assert shell.providers == [builtin_commands]
