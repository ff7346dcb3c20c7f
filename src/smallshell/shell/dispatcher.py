"""Resolve a raw input line to a command invocation."""

import re
from collections.abc import Sequence

from smallshell.commands.base import Command, CommandResult
from smallshell.context import ShellContext
from smallshell.exceptions import (
    CommandExecutionError,
    CommandNotFoundError,
    ParseError,
)
from smallshell.utils.logging import get_logger

logger = get_logger(__name__)

TOKEN_PATTERN = re.compile(r"\S+")


def tokenize(line: str) -> list[str]:
    """Split a line into maximal runs of non-whitespace characters.

    There is no quoting or escaping.
    """
    return TOKEN_PATTERN.findall(line)


class Dispatcher:
    """Tokenizes lines, resolves the command and invokes it.

    Commands are resolved against the registry snapshot carried by the
    context passed to :meth:`handle`, so a command that returns a
    context with new commands makes them available to later lines.
    """

    def handle(self, ctx: ShellContext, raw_line: str) -> CommandResult:
        """Dispatch one line of input.

        Args:
            ctx: The current context.
            raw_line: The line as read, possibly with surrounding whitespace.

        Returns:
            CommandResult with the context to continue with and an error,
            if any. Resolution failures always return ``ctx`` unchanged.
        """
        line = raw_line.strip()
        if not line:
            return CommandResult.ok(ctx)

        args = tokenize(line)
        if not args:
            return CommandResult.fail(ctx, ParseError(raw_line))

        name = args[0]
        command = ctx.commands.get(name)
        if command is None:
            logger.debug("No command registered for %r", name, extra={"command": name})
            return CommandResult.fail(ctx, CommandNotFoundError(name))

        logger.debug("Dispatching %r", name, extra={"command": name, "argc": len(args) - 1})
        return self.invoke(ctx, name, command, args)

    def invoke(
        self,
        ctx: ShellContext,
        name: str,
        command: Command,
        args: Sequence[str],
    ) -> CommandResult:
        """Invoke a resolved command and normalize what it returns."""
        try:
            result = command.execute(ctx, args)
        except Exception as e:
            logger.debug("Command %r raised", name, exc_info=True, extra={"command": name})
            return CommandResult.fail(ctx, CommandExecutionError(name, e))

        if not isinstance(result, CommandResult) or not isinstance(
            result.context, ShellContext
        ):
            return CommandResult.fail(
                ctx,
                CommandExecutionError(
                    name, f"command '{name}' returned an invalid result: {result!r}"
                ),
            )

        if result.error is None or isinstance(result.error, CommandExecutionError):
            return result
        return CommandResult.fail(
            result.context, CommandExecutionError(name, result.error)
        )
