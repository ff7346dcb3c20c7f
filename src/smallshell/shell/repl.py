"""Read-dispatch-report loop."""

from enum import Enum

from rich.console import Console
from rich.markup import escape

from smallshell.context import ShellContext
from smallshell.exceptions import LineReadError, PromptWriteError, StreamError
from smallshell.shell.dispatcher import Dispatcher
from smallshell.utils.aio import run_in_daemon_thread
from smallshell.utils.logging import get_logger

logger = get_logger(__name__)


class ReplState(str, Enum):
    """States of the REPL loop."""

    PROMPTING = "prompting"
    READING_LINE = "reading_line"
    DISPATCHING = "dispatching"
    STOPPED = "stopped"


class Repl:
    """Prompt, read a line, dispatch it, report errors, repeat.

    The loop stops on a stream fault (end of input included) or when the
    context's cancellation signal has fired. Dispatch errors are reported
    on the context's stderr and never stop the loop.

    Attributes:
        state: Current loop state.
        context: The latest context, kept current after every dispatch so
            it survives the task being cancelled.
    """

    def __init__(self, dispatcher: Dispatcher | None = None, *, color: bool = True) -> None:
        self.dispatcher = dispatcher or Dispatcher()
        self.state = ReplState.STOPPED
        self.context: ShellContext | None = None
        self._color = color

    async def run(self, ctx: ShellContext) -> ShellContext:
        """Run until stopped.

        Args:
            ctx: Context for the first iteration.

        Returns:
            The context produced by the last dispatch.
        """
        self.context = ctx
        try:
            while not self.context.cancelled:
                loop_ctx = self.context
                try:
                    self.state = ReplState.PROMPTING
                    self.render_prompt(loop_ctx)

                    self.state = ReplState.READING_LINE
                    line = await self.read_line(loop_ctx)
                except StreamError as e:
                    self.report_fault(loop_ctx, e)
                    break

                self.state = ReplState.DISPATCHING
                # The returned context is kept even when the command failed
                self.context, error = self.dispatcher.handle(loop_ctx, line)
                if error is not None:
                    self.report_error(self.context, error)
            else:
                logger.debug("Cancellation observed, stopping REPL")
        finally:
            self.state = ReplState.STOPPED
        return self.context

    def render_prompt(self, ctx: ShellContext) -> None:
        """Write the context's prompt to its stdout, verbatim.

        Raises:
            PromptWriteError: If the stream rejects the write.
        """
        stream = ctx.stdout
        try:
            stream.write(ctx.prompt)
            stream.flush()
        except (OSError, ValueError) as e:
            raise PromptWriteError(f"write error: {e}") from e

    async def read_line(self, ctx: ShellContext) -> str:
        """Block until a full newline-terminated line is available.

        Raises:
            LineReadError: On end of input, an unterminated final line,
                or a stream error.
        """
        stdin = ctx.stdin
        try:
            line = await run_in_daemon_thread(stdin.readline, name="smallshell-stdin")
        except (OSError, ValueError) as e:
            raise LineReadError(f"read error: {e}") from e

        if not isinstance(line, str) or not line.endswith("\n"):
            raise LineReadError("EOF")
        return line

    def report_error(self, ctx: ShellContext, error: BaseException) -> None:
        """Print a dispatch error to the context's stderr."""
        self._console(ctx).print(f"[red]Error:[/red] {escape(str(error))}")

    def report_fault(self, ctx: ShellContext, error: StreamError) -> None:
        """Print the stream fault that stopped the loop."""
        logger.debug("Stopping REPL: %s", error)
        console = self._console(ctx)
        try:
            console.print()
            console.print(escape(str(error)), style="dim")
        except (OSError, ValueError):
            logger.debug("Could not report stream fault", exc_info=True)

    def _console(self, ctx: ShellContext) -> Console:
        return Console(
            file=ctx.stderr,
            no_color=not self._color,
            highlight=False,
            soft_wrap=True,
        )
