"""Immutable, chained shell context.

A ShellContext is a linked chain of key/value bindings. Every ``with_*``
call returns a new context whose parent is the receiver, so a derived
context always sees all of its parent's bindings and lookups walk from
the most recent binding backward. All contexts derived from the same
root share one cancellation signal.

Usage:
    ctx = ShellContext.background(prompt="$ ")
    ctx = ctx.with_value("demo.counter", 1)

    ctx.prompt                  # "$ "
    ctx.value("demo.counter")   # 1
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final, TextIO

if TYPE_CHECKING:
    from smallshell.commands.base import Command

# Well-known context keys
PROMPT_KEY: Final[str] = "shell.prompt"
STDOUT_KEY: Final[str] = "shell.stdout"
STDERR_KEY: Final[str] = "shell.stderr"
STDIN_KEY: Final[str] = "shell.stdin"
COMMANDS_KEY: Final[str] = "shell.commands"

DEFAULT_PROMPT: Final[str] = "/> "

_EMPTY_COMMANDS: Mapping[str, Command] = MappingProxyType({})
_MISSING = object()


@dataclass(frozen=True, eq=True, repr=False)
class ShellContext:
    """One binding in an immutable context chain.

    The root context has no key. Equality compares the binding chain;
    the cancellation signal is shared state and does not take part.
    """

    key: str | None = None
    data: Any = None
    parent: ShellContext | None = None
    cancellation: threading.Event = field(
        default_factory=threading.Event, compare=False
    )

    @classmethod
    def background(
        cls,
        *,
        prompt: str | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> ShellContext:
        """Create a root context bound to the given streams.

        Streams default to the process standard streams.
        """
        ctx = cls()
        if prompt is not None:
            ctx = ctx.with_prompt(prompt)
        return (
            ctx.with_stdout(stdout or sys.stdout)
            .with_stderr(stderr or sys.stderr)
            .with_stdin(stdin or sys.stdin)
        )

    # --- Generic bindings ---

    def with_value(self, key: str, value: Any) -> ShellContext:
        """Return a new context with ``key`` bound to ``value``."""
        if not key:
            raise ValueError("Context key must be a non-empty string")
        return ShellContext(
            key=key,
            data=value,
            parent=self,
            cancellation=self.cancellation,
        )

    def value(self, key: str, default: Any = None) -> Any:
        """Look up ``key``, walking from the newest binding to the root."""
        node: ShellContext | None = self
        while node is not None:
            if node.key == key:
                return node.data
            node = node.parent
        return default

    def has(self, key: str) -> bool:
        """Check if ``key`` is bound anywhere in the chain."""
        return self.value(key, _MISSING) is not _MISSING

    def iter_bindings(self) -> Iterator[tuple[str, Any]]:
        """Iterate over bindings, newest first (shadowed ones included)."""
        node: ShellContext | None = self
        while node is not None:
            if node.key is not None:
                yield node.key, node.data
            node = node.parent

    def bindings(self) -> dict[str, Any]:
        """Get the effective bindings as a plain dict."""
        result: dict[str, Any] = {}
        for key, value in self.iter_bindings():
            result.setdefault(key, value)
        return result

    # --- Typed accessors ---

    @property
    def prompt(self) -> str:
        """The prompt string, or DEFAULT_PROMPT if unset or not a string."""
        prompt = self.value(PROMPT_KEY)
        if isinstance(prompt, str):
            return prompt
        return DEFAULT_PROMPT

    @property
    def stdout(self) -> TextIO:
        """Output sink for command results."""
        return self._stream(STDOUT_KEY, "write", sys.stdout)

    @property
    def stderr(self) -> TextIO:
        """Output sink for errors."""
        return self._stream(STDERR_KEY, "write", sys.stderr)

    @property
    def stdin(self) -> TextIO:
        """Input source for the REPL."""
        return self._stream(STDIN_KEY, "readline", sys.stdin)

    @property
    def commands(self) -> Mapping[str, Command]:
        """Read-only snapshot of the command registry."""
        commands = self.value(COMMANDS_KEY)
        if isinstance(commands, Mapping):
            return commands
        return _EMPTY_COMMANDS

    def _stream(self, key: str, method: str, fallback: TextIO) -> TextIO:
        stream = self.value(key)
        if stream is not None and hasattr(stream, method):
            return stream
        return fallback

    def with_prompt(self, prompt: str) -> ShellContext:
        """Create a new context with a different prompt."""
        return self.with_value(PROMPT_KEY, prompt)

    def with_stdout(self, stream: TextIO) -> ShellContext:
        """Create a new context with a different output sink."""
        return self.with_value(STDOUT_KEY, stream)

    def with_stderr(self, stream: TextIO) -> ShellContext:
        """Create a new context with a different error sink."""
        return self.with_value(STDERR_KEY, stream)

    def with_stdin(self, stream: TextIO) -> ShellContext:
        """Create a new context with a different input source."""
        return self.with_value(STDIN_KEY, stream)

    def with_commands(self, commands: Mapping[str, Command]) -> ShellContext:
        """Create a new context carrying a frozen copy of ``commands``."""
        return self.with_value(COMMANDS_KEY, MappingProxyType(dict(commands)))

    # --- Cancellation ---

    def cancel(self) -> None:
        """Fire the cancellation signal shared by the whole chain."""
        self.cancellation.set()

    @property
    def cancelled(self) -> bool:
        """Whether cancellation has fired."""
        return self.cancellation.is_set()

    def __repr__(self) -> str:
        keys = list(self.bindings())
        return f"ShellContext(keys={keys!r}, cancelled={self.cancelled})"
