"""IJobScheduler: protocol for an in-process job scheduler."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeAlias, runtime_checkable

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Awaitable, Callable

    from ..events.emitter import Listener, Subscription
    from ..primitives.abort import AbortSignal
    from ..scheduling.job import Job, JobOptions

ProcessFn: TypeAlias = "Callable[[Job, AbortSignal], Awaitable[Any] | Any]"


@runtime_checkable
class IJobScheduler(Protocol):
    """
    Lifecycle: Idle → ``start(processor)`` → Processing → ``dispose()`` → Idle.

    Job outcomes are reported only through the ``completed`` and ``failed``
    events; ``add`` never raises for a failing job.
    """

    @property
    def size(self) -> int:
        """Number of jobs waiting in the queue."""
        ...

    def add(
        self,
        data: Any,
        message_type: str | None = None,
        options: JobOptions | None = None,
    ) -> int:
        """Queue a job and return its current position in the queue."""
        ...

    def start(self, processor: ProcessFn) -> asyncio.Future[None]:
        """Begin processing; the returned future resolves on ``dispose()``."""
        ...

    def dispose(self) -> None:
        """Stop processing and drop queued jobs and listeners."""
        ...

    def add_event_listener(
        self,
        event: str,
        listener: Listener,
        this_arg: Any = None,
        *,
        once: bool = False,
    ) -> Subscription:
        ...
