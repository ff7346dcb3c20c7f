"""Pytest fixtures for smallshell tests."""

import io
import logging
import tempfile
from collections.abc import Callable, Generator, Sequence
from pathlib import Path

import pytest

from smallshell.commands.base import CommandResult, FunctionCommand
from smallshell.config import reset_config
from smallshell.config.defaults import (
    ENV_CONFIG_PATH,
    ENV_LOG_LEVEL,
    ENV_NO_BANNER,
    ENV_NO_PLUGINS,
    ENV_PLUGINS_DIR,
    ENV_PROMPT,
)
from smallshell.config.schema import ShellConfig
from smallshell.context import ShellContext


class RecordingCommand:
    """Command that records every invocation and returns a fixed result."""

    def __init__(self, description: str = "Records calls") -> None:
        self.description = description
        self.calls: list[tuple[ShellContext, list[str]]] = []

    def execute(self, ctx: ShellContext, args: Sequence[str]) -> CommandResult:
        self.calls.append((ctx, list(args)))
        return CommandResult.ok(ctx)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def stdout() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def stderr() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def make_context(
    stdout: io.StringIO, stderr: io.StringIO
) -> Callable[..., ShellContext]:
    """Factory for contexts bound to in-memory streams."""

    def factory(commands=None, stdin: str = "", prompt: str | None = None) -> ShellContext:
        ctx = ShellContext.background(
            prompt=prompt,
            stdin=io.StringIO(stdin),
            stdout=stdout,
            stderr=stderr,
        )
        if commands is not None:
            ctx = ctx.with_commands(commands)
        return ctx

    return factory


@pytest.fixture
def recorder() -> RecordingCommand:
    return RecordingCommand()


@pytest.fixture
def echo_command() -> FunctionCommand:
    """An echo command writing ``args[1:]`` to the context's stdout."""

    def echo(ctx: ShellContext, args: Sequence[str]) -> None:
        """Print arguments."""
        print(" ".join(args[1:]), file=ctx.stdout)

    return FunctionCommand(echo)


@pytest.fixture
def setprompt_command() -> FunctionCommand:
    """A command that binds the ``$ `` prompt."""

    def setprompt(ctx: ShellContext, args: Sequence[str]) -> ShellContext:
        return ctx.with_prompt("$ ")

    return FunctionCommand(setprompt)


@pytest.fixture
def default_config() -> ShellConfig:
    """Get default configuration."""
    return ShellConfig()


@pytest.fixture(autouse=True)
def isolated_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[None, None, None]:
    """Keep user config, env overrides and logger state out of tests."""
    for name in (ENV_PROMPT, ENV_LOG_LEVEL, ENV_PLUGINS_DIR, ENV_NO_BANNER, ENV_NO_PLUGINS):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv(ENV_CONFIG_PATH, str(tmp_path / "missing-config.toml"))

    reset_config()
    yield
    reset_config()

    shell_logger = logging.getLogger("smallshell")
    shell_logger.handlers.clear()
    shell_logger.propagate = True
    shell_logger.setLevel(logging.NOTSET)


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    """Create a test config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text("""
prompt = "% "
banner = false

[plugins]
enabled = false

[logging]
level = "debug"
""")
    return config_path
