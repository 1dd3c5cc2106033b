"""LoopScheduler: the process-wide handle used to defer work onto the event loop."""

from __future__ import annotations

import asyncio
import logging
from inspect import isawaitable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("nsync.scheduler")


class ScheduledCall:
    """Disposable handle for a callback scheduled with a delay."""

    def __init__(self, handle: asyncio.Handle) -> None:
        self._handle = handle

    @property
    def cancelled(self) -> bool:
        return self._handle.cancelled()

    def dispose(self) -> None:
        """Cancel the callback if it has not run yet."""
        self._handle.cancel()


class LoopScheduler:
    """Defers callbacks onto an asyncio event loop.

    * :meth:`schedule` runs the callback on the next pass of the loop
      (``call_soon``), ahead of timers.
    * :meth:`immediate` runs it on a later loop iteration (``call_later(0)``),
      after already-ready callbacks. The bounded runners use it to claim the
      next item without growing the call stack.
    * :meth:`call_later` runs it after a delay in seconds.

    If a callback returns an awaitable it is wrapped in a task. The scheduler
    keeps a reference until the task finishes and logs its failure instead
    of dropping it.

    Without an explicit *loop* the running loop is looked up on every call,
    so one instance serves any number of loops.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)

    def schedule(self, callback: Callable[..., Any], *args: Any) -> None:
        self._get_loop().call_soon(self._run, callback, args)

    def immediate(self, callback: Callable[..., Any], *args: Any) -> ScheduledCall:
        return self.call_later(0, callback, *args)

    def call_later(
        self, delay: float, callback: Callable[..., Any], *args: Any
    ) -> ScheduledCall:
        handle = self._get_loop().call_later(delay, self._run, callback, args)
        return ScheduledCall(handle)

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def _run(self, callback: Callable[..., Any], args: tuple[Any, ...]) -> None:
        try:
            result = callback(*args)
        except Exception:
            logger.exception("Scheduled callback %r failed", callback)
            return
        if isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("Scheduled task failed: %s", exc, exc_info=exc)


_default_scheduler: LoopScheduler | None = None


def get_loop_scheduler() -> LoopScheduler:
    """Return the process-wide scheduler, creating it on first use."""
    global _default_scheduler
    if _default_scheduler is None:
        _default_scheduler = LoopScheduler()
    return _default_scheduler


def set_loop_scheduler(scheduler: LoopScheduler | None) -> None:
    """Replace the process-wide scheduler (``None`` resets to lazy default)."""
    global _default_scheduler
    _default_scheduler = scheduler


def has_running_loop() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True
