"""Shell lifecycle: load commands, greet, run the REPL."""

import asyncio
from collections.abc import Mapping, Sequence

from rich.console import Console

from smallshell.commands.base import Command
from smallshell.commands.registry import RegistryProvider, load_registry
from smallshell.context import ShellContext
from smallshell.shell.dispatcher import Dispatcher
from smallshell.shell.repl import Repl
from smallshell.utils.aio import run_in_daemon_thread
from smallshell.utils.logging import get_logger

logger = get_logger(__name__)

SPLASH = r"""
      _    _    _    _    _    _    _    _    _    _
     / \  / \  / \  / \  / \  / \  / \  / \  / \  / \
    ( S )( M )( A )( L )( L )( S )( H )( E )( L )( L )
     \_/  \_/  \_/  \_/  \_/  \_/  \_/  \_/  \_/  \_/
"""

HELP_COMMAND = "help"


class Shell:
    """An interactive shell over a set of registry providers.

    Usage:
        shell = Shell([builtins])
        ctx = shell.init(ShellContext.background())
        shell.print_hint(ctx)
        asyncio.run(shell.serve(ctx))
    """

    def __init__(
        self,
        providers: Sequence[RegistryProvider],
        *,
        dispatcher: Dispatcher | None = None,
        banner: bool = True,
        color: bool = True,
    ) -> None:
        self.providers = list(providers)
        self.dispatcher = dispatcher or Dispatcher()
        self.repl = Repl(self.dispatcher, color=color)
        self.commands: Mapping[str, Command] = {}
        self._banner = banner
        self._color = color

    def init(self, ctx: ShellContext) -> ShellContext:
        """Print the splash banner and load commands.

        Returns:
            ``ctx`` extended with the loaded command snapshot.

        Raises:
            RegistryLoadError: If any provider fails.
        """
        if self._banner:
            self.print_splash(ctx)
        return self.load_commands(ctx)

    def load_commands(self, ctx: ShellContext) -> ShellContext:
        """Query every provider once and bind the result into the context."""
        self.commands = load_registry(self.providers)
        logger.info("Loaded %d command(s)", len(self.commands))
        return ctx.with_commands(self.commands)

    def print_splash(self, ctx: ShellContext) -> None:
        """Print the startup banner to the context's stdout."""
        self._console(ctx).print(SPLASH, style="bold cyan", markup=False)

    def print_hint(self, ctx: ShellContext) -> None:
        """Print the command count and a pointer to ``help``."""
        console = self._console(ctx)
        commands = ctx.commands
        if not commands:
            console.print("\nNo commands found\n")
        elif HELP_COMMAND in commands:
            console.print(f"\nLoaded {len(commands)} command(s)...")
            console.print(f"Type [bold]{HELP_COMMAND}[/bold] for available commands\n")

    async def serve(self, ctx: ShellContext) -> ShellContext:
        """Run the REPL task and wait for termination.

        Termination is either the REPL stopping (end of input) or the
        context's cancellation signal firing, whichever comes first.

        Returns:
            The last context produced by the REPL.
        """
        self.repl.context = ctx
        repl_task = asyncio.create_task(self.repl.run(ctx), name="smallshell-repl")
        stop_task = asyncio.create_task(
            run_in_daemon_thread(ctx.cancellation.wait, name="smallshell-wait"),
            name="smallshell-wait",
        )
        await asyncio.wait({repl_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)

        if not repl_task.done():
            logger.debug("Cancellation fired while REPL was waiting, stopping it")
            repl_task.cancel()
        # Releases the wait task when the REPL stopped on its own
        ctx.cancel()
        await asyncio.wait({repl_task, stop_task})

        if repl_task.cancelled():
            # Cancelled while waiting for input
            return self.repl.context or ctx
        return repl_task.result()

    def _console(self, ctx: ShellContext) -> Console:
        return Console(
            file=ctx.stdout,
            no_color=not self._color,
            highlight=False,
            soft_wrap=True,
        )
