"""Shell core: dispatcher, REPL loop and lifecycle."""

from smallshell.shell.core import Shell
from smallshell.shell.dispatcher import Dispatcher, tokenize
from smallshell.shell.repl import Repl, ReplState

__all__ = ["Dispatcher", "Repl", "ReplState", "Shell", "tokenize"]
