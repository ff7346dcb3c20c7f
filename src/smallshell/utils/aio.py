"""Asyncio helpers."""

import asyncio
import contextlib
import threading
from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T")


def _resolve(future: "asyncio.Future[Any]", result: Any, error: BaseException | None) -> None:
    if future.done():
        return
    if error is not None:
        future.set_exception(error)
    else:
        future.set_result(result)


async def run_in_daemon_thread(func: Callable[[], T], *, name: str | None = None) -> T:
    """Run a blocking call in a daemon thread and await its result.

    Unlike ``asyncio.to_thread`` the worker never holds up interpreter
    shutdown, so a read that never returns does not block exit.
    Cancelling the awaiting task abandons the call.

    Args:
        func: Blocking callable taking no arguments.
        name: Optional thread name.

    Returns:
        Whatever ``func`` returns.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[T] = loop.create_future()

    def worker() -> None:
        result: Any = None
        error: BaseException | None = None
        try:
            result = func()
        except BaseException as e:  # noqa: BLE001 - re-raised in the awaiting task
            error = e
        # Loop may already be closed if the awaiting task was abandoned
        with contextlib.suppress(RuntimeError):
            loop.call_soon_threadsafe(_resolve, future, result, error)

    threading.Thread(target=worker, name=name, daemon=True).start()
    return await future
