"""smallshell: a small interactive command shell.

Usage:
    from smallshell import ShellContext, Dispatcher
    from smallshell.commands import builtin_commands

    ctx = ShellContext.background().with_commands(builtin_commands.registry())
    ctx, err = Dispatcher().handle(ctx, "echo hello world")
"""

from smallshell.context import ShellContext
from smallshell.shell.dispatcher import Dispatcher

__version__ = "0.1.0"

__all__ = ["Dispatcher", "ShellContext", "__version__"]
