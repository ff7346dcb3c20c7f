"""Commands that ship with smallshell."""

from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from smallshell.commands.base import BaseCommand, CommandResult
from smallshell.commands.registry import CommandRegistry, get_command_info
from smallshell.context import ShellContext
from smallshell.exceptions import InvalidArgumentError

builtin_commands = CommandRegistry(name="builtins")


@builtin_commands.register
class HelpCommand(BaseCommand):
    """List the commands available in the current context."""

    @property
    def name(self) -> str:
        return "help"

    @property
    def description(self) -> str:
        return "List available commands"

    def execute(self, ctx: ShellContext, args: Sequence[str]) -> CommandResult:
        info = get_command_info(ctx.commands)
        console = Console(file=ctx.stdout, highlight=False, soft_wrap=True)

        if not info:
            console.print("No commands available")
            return CommandResult.ok(ctx)

        table = Table(title="Available Commands", title_justify="left", box=None)
        table.add_column("Command", style="cyan", no_wrap=True)
        table.add_column("Description")
        for row in info:
            table.add_row(row["name"], row["description"])
        console.print(table)
        return CommandResult.ok(ctx)


@builtin_commands.register
class EchoCommand(BaseCommand):
    """Print the arguments separated by single spaces."""

    @property
    def name(self) -> str:
        return "echo"

    @property
    def description(self) -> str:
        return "Print arguments separated by spaces"

    def execute(self, ctx: ShellContext, args: Sequence[str]) -> CommandResult:
        print(" ".join(args[1:]), file=ctx.stdout)
        return CommandResult.ok(ctx)


@builtin_commands.register
class PromptCommand(BaseCommand):
    """Show or change the prompt.

    ``prompt $`` binds ``"$ "``; a trailing space is appended because the
    tokenizer never yields one. Without arguments prints the current prompt.
    """

    @property
    def name(self) -> str:
        return "prompt"

    @property
    def description(self) -> str:
        return "Show or change the prompt"

    def execute(self, ctx: ShellContext, args: Sequence[str]) -> CommandResult:
        if len(args) < 2:
            print(repr(ctx.prompt), file=ctx.stdout)
            return CommandResult.ok(ctx)
        return CommandResult.ok(ctx.with_prompt(" ".join(args[1:]) + " "))


@builtin_commands.register
class ExitCommand(BaseCommand):
    """Stop the shell by firing the context's cancellation signal."""

    @property
    def name(self) -> str:
        return "exit"

    @property
    def description(self) -> str:
        return "Leave the shell"

    def execute(self, ctx: ShellContext, args: Sequence[str]) -> CommandResult:
        if len(args) > 1:
            return CommandResult.fail(
                ctx, InvalidArgumentError(f"exit takes no arguments, got {len(args) - 1}")
            )
        ctx.cancel()
        return CommandResult.ok(ctx)
