"""Command implementations for smallshell.

This module provides the command contract, the registry that groups
commands, and the built-in command set.

Usage:
    from smallshell.commands import BaseCommand, CommandRegistry, CommandResult

    my_commands = CommandRegistry(name="mine")

    @my_commands.register
    class GreetCommand(BaseCommand):
        @property
        def name(self) -> str:
            return "greet"

        @property
        def description(self) -> str:
            return "Say hello"

        def execute(self, ctx, args) -> CommandResult:
            print("hello", file=ctx.stdout)
            return CommandResult.ok(ctx)
"""

from smallshell.commands.base import (
    BaseCommand,
    Command,
    CommandResult,
    FunctionCommand,
)
from smallshell.commands.builtin import (
    EchoCommand,
    ExitCommand,
    HelpCommand,
    PromptCommand,
    builtin_commands,
)
from smallshell.commands.registry import (
    CommandRegistry,
    RegistryProvider,
    get_command_info,
    load_registry,
)

__all__ = [
    # Base classes
    "BaseCommand",
    "Command",
    "CommandResult",
    "FunctionCommand",
    # Registry
    "CommandRegistry",
    "RegistryProvider",
    "get_command_info",
    "load_registry",
    # Commands
    "EchoCommand",
    "ExitCommand",
    "HelpCommand",
    "PromptCommand",
    "builtin_commands",
]
