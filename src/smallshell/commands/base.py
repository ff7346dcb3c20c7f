"""Base command pattern implementation.

This module provides the foundation for all smallshell commands:
the Command protocol the dispatcher invokes, the CommandResult pair
every command returns, and the BaseCommand / FunctionCommand helpers
for writing commands.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from smallshell.context import ShellContext


@dataclass(frozen=True)
class CommandResult:
    """Result of a command execution.

    Unpacks as ``(context, error)``.

    Attributes:
        context: The context the shell continues with.
        error: The command's own failure, or None on success.
    """

    context: ShellContext
    error: BaseException | None = None

    @property
    def success(self) -> bool:
        """Whether the command succeeded."""
        return self.error is None

    @classmethod
    def ok(cls, context: ShellContext) -> "CommandResult":
        """Create a successful result."""
        return cls(context=context)

    @classmethod
    def fail(cls, context: ShellContext, error: BaseException) -> "CommandResult":
        """Create a failed result."""
        return cls(context=context, error=error)

    def __iter__(self) -> Iterator[Any]:
        yield self.context
        yield self.error


@runtime_checkable
class Command(Protocol):
    """Anything the dispatcher can invoke.

    ``args[0]`` is the name the command was resolved by; ``args[1:]`` are
    raw positional arguments.
    """

    def execute(self, ctx: ShellContext, args: Sequence[str]) -> CommandResult:
        ...


class BaseCommand(ABC):
    """Abstract base class for smallshell commands.

    Commands write through the streams held by the context they receive
    and return the context the shell should continue with.

    Example:
        class EchoCommand(BaseCommand):
            @property
            def name(self) -> str:
                return "echo"

            @property
            def description(self) -> str:
                return "Print arguments"

            def execute(self, ctx, args) -> CommandResult:
                print(" ".join(args[1:]), file=ctx.stdout)
                return CommandResult.ok(ctx)
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The command name typed at the prompt."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """A short description of what the command does."""
        pass

    @abstractmethod
    def execute(self, ctx: ShellContext, args: Sequence[str]) -> CommandResult:
        """Execute the command.

        Args:
            ctx: The current shell context.
            args: Token vector, command name first.

        Returns:
            CommandResult carrying the next context and optional error.
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


CommandFunction = Callable[
    [ShellContext, Sequence[str]], "CommandResult | ShellContext | None"
]


class FunctionCommand(BaseCommand):
    """Adapt a plain function into a command.

    The function may return a CommandResult, a ShellContext (success
    with that context) or None (success, context unchanged).
    """

    def __init__(
        self,
        func: CommandFunction,
        name: str | None = None,
        description: str | None = None,
    ) -> None:
        self._func = func
        self._name = name or func.__name__
        doc = (func.__doc__ or "").strip().splitlines()
        self._description = description if description is not None else (
            doc[0] if doc else ""
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    def execute(self, ctx: ShellContext, args: Sequence[str]) -> CommandResult:
        result = self._func(ctx, args)
        if result is None:
            return CommandResult.ok(ctx)
        if isinstance(result, ShellContext):
            return CommandResult.ok(result)
        return result
