"""Adapters between the coroutine core and the public call styles.

Every operation is implemented once, as a coroutine. This module turns
that coroutine into the three surfaces entities expose:

- blocking: ``run_blocking`` drives the coroutine to completion;
- callback: ``dispatch`` schedules it on the running loop and reports to
  ``on_success`` / ``on_error`` exactly once;
- awaitable: ``bridge`` wraps a callback-style call into a future
  without changing status semantics.
"""

import asyncio
import logging
from collections.abc import Callable, Coroutine
from concurrent.futures import ThreadPoolExecutor
from typing import Any, TypeVar

from dirkit.fs.models import ErrorCallback, ResultEnvelope, Status, SuccessCallback

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Strong references to fire-and-forget tasks until they finish.
_background_tasks: set[asyncio.Task[Any]] = set()


def _has_running_loop() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


def run_blocking(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine to completion and return its result.

    When the calling thread already runs an event loop, the coroutine is
    executed on a private loop in a worker thread and the caller blocks
    until it finishes.

    Args:
        coro: Coroutine to drive.

    Returns:
        The coroutine's return value.

    Raises:
        Exception: Whatever the coroutine raises.
    """
    if not _has_running_loop():
        return asyncio.run(coro)

    with ThreadPoolExecutor(max_workers=1) as executor:
        return executor.submit(asyncio.run, coro).result()


def spawn(coro: Coroutine[Any, Any, T]) -> asyncio.Task[T]:
    """Schedule a coroutine on the running loop and keep it alive.

    Raises:
        RuntimeError: If no event loop is running in this thread.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        coro.close()
        raise
    task = loop.create_task(coro)
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)
    return task


def dispatch(
    coro: Coroutine[Any, Any, Any],
    on_success: SuccessCallback | None,
    on_error: ErrorCallback | None = None,
) -> asyncio.Task[Any]:
    """Run a coroutine in the background and report its outcome.

    At most one of the callbacks is invoked, once. A failure without an
    error callback is logged; a success without a callback is dropped.

    Args:
        coro: Coroutine producing the final result.
        on_success: Receives the coroutine's return value.
        on_error: Receives the exception the coroutine raised.

    Returns:
        The scheduled task.

    Raises:
        RuntimeError: If no event loop is running in this thread.
    """

    def _report(task: asyncio.Task[Any]) -> None:
        if task.cancelled():
            logger.debug("Background operation cancelled")
            return
        error = task.exception()
        if error is None:
            if on_success is not None:
                on_success(task.result())
        elif on_error is not None:
            on_error(error)
        else:
            logger.error("Unhandled filesystem error: %s", error, exc_info=error)

    task = spawn(coro)
    task.add_done_callback(_report)
    return task


def _status_of(result: object) -> Status | None:
    if isinstance(result, ResultEnvelope):
        return result.status
    if isinstance(result, Status):
        return result
    return None


async def bridge(start: Callable[[SuccessCallback, ErrorCallback], Any]) -> Any:
    """Await a callback-style operation.

    ``start`` receives a resolve and a reject callback and returns the
    operation's immediate result. Anything other than PENDING resolves
    the awaitable at once; a rejection is raised from the await.

    Args:
        start: Starts the operation with the given callbacks.

    Returns:
        The envelope or status the operation finished with.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[Any] = loop.create_future()

    def resolve(result: Any) -> None:
        if not future.done():
            future.set_result(result)

    def reject(error: Any) -> None:
        if not future.done():
            future.set_exception(error)

    immediate = start(resolve, reject)
    if _status_of(immediate) != Status.PENDING:
        resolve(immediate)

    return await future
