"""JobScheduler: drains an ordered job queue through a single processing function."""

from __future__ import annotations

import asyncio
import logging
from inspect import isawaitable
from typing import TYPE_CHECKING, Any

from ..events.emitter import EventEmitter
from ..instrumentation import get_hook_registry
from ..primitives.abort import AbortController
from ..primitives.deferred import Deferred
from ..primitives.exceptions import (
    AlreadyStartedError,
    JobFailureError,
    JobTimeoutError,
    normalize_error,
)
from ..primitives.id_generator import IIDGenerator, ShortIdGenerator
from ..primitives.ordered_queue import OrderedQueue
from .events import CompletedEvent, FailedEvent, ProcessingEvent, SchedulerEvent
from .job import CompletedJob, FailedJob, Job, JobOptions, SchedulerOptions, job_fields
from .loop import LoopScheduler, get_loop_scheduler, has_running_loop

if TYPE_CHECKING:
    from ..events.emitter import Listener, Subscription
    from ..ports.scheduler import ProcessFn
    from ..primitives.abort import AbortSignal

logger = logging.getLogger("nsync.scheduler")


class JobScheduler:
    """In-process job scheduler with per-job timeout and delay.

    Jobs are queued with :meth:`add` and handed to the processor registered
    by :meth:`start`, at most ``options.concurrency`` at a time. Outcomes are
    reported only through events:

    * ``completed``: :class:`CompletedEvent` whose target carries ``result``.
    * ``failed``: :class:`FailedEvent` whose target carries ``error``.
    * ``processing``: :class:`ProcessingEvent` emitted by :meth:`start`.

    Cancellation is advisory. When a job's timeout elapses the processor's
    :class:`AbortSignal` is aborted with a :class:`JobTimeoutError` and the
    job is reported failed, but the processor keeps running until it returns
    on its own. Processors that hold resources should watch the signal.

    :meth:`dispose` does not stop processors that are already running; their
    late results are discarded.

    Example::

        scheduler = JobScheduler(SchedulerOptions(concurrency=2))
        scheduler.add_event_listener("completed", on_completed)
        stopped = scheduler.start(process)
        scheduler.add({"url": url}, "fetch", JobOptions(timeout=5.0))
        ...
        scheduler.dispose()
        await stopped
    """

    def __init__(
        self,
        options: SchedulerOptions | None = None,
        *,
        id_generator: IIDGenerator | None = None,
        loop_scheduler: LoopScheduler | None = None,
        emitter: EventEmitter | None = None,
    ) -> None:
        self._options = options or SchedulerOptions()
        self._id_generator = id_generator or ShortIdGenerator()
        self._loop_scheduler = loop_scheduler or get_loop_scheduler()
        self._emitter = emitter or EventEmitter()
        self._queue: OrderedQueue[Job] = OrderedQueue(self._options.order)
        self._processor: ProcessFn | None = None
        self._in_flight: list[Job] = []
        self._stop: Deferred[None] | None = None
        self._cycle = 0

    # ── State ────────────────────────────────────────────────────

    @property
    def size(self) -> int:
        """Number of queued jobs not yet in flight."""
        return self._queue.size()

    @property
    def in_flight(self) -> list[Job]:
        return list(self._in_flight)

    @property
    def is_processing(self) -> bool:
        return self._processor is not None

    @property
    def concurrency(self) -> int:
        return self._options.concurrency

    # ── Events ───────────────────────────────────────────────────

    def add_event_listener(
        self,
        event: str,
        listener: Listener,
        this_arg: Any = None,
        *,
        once: bool = False,
    ) -> Subscription:
        return self._emitter.subscribe(event, listener, this_arg, once=once)

    def remove_event_listener(self, event: str, listener: Listener) -> None:
        self._emitter.remove_listener(event, listener)

    def remove_many_event_listeners(self, event: str) -> None:
        self._emitter.remove_listener(event)

    def remove_all_event_listeners(self) -> None:
        self._emitter.remove_listeners()

    # ── Lifecycle ────────────────────────────────────────────────

    def add(
        self,
        data: Any,
        message_type: str | None = None,
        options: JobOptions | None = None,
    ) -> int:
        """Queue a job and return its position in the queue.

        The position is best effort: it may already be stale when returned
        if other jobs are added or dispatched in between.
        """
        job = Job(
            job_id=self._id_generator.next_id(),
            data=data,
            message_type=message_type,
            options=options or JobOptions(),
        )
        self._queue.push(job)
        logger.debug("Job %s queued (type=%s)", job.job_id, message_type)

        self._schedule_drain()
        return self._queue.find_index(lambda queued, _: queued.job_id == job.job_id)

    def start(self, processor: ProcessFn) -> asyncio.Future[None]:
        """Register *processor* and begin draining the queue.

        Returns a future that resolves when :meth:`dispose` is called.

        Raises:
            AlreadyStartedError: If the scheduler is already processing.
            RuntimeError: If no event loop is running. The scheduler stays Idle.
        """
        if self._processor is not None:
            raise AlreadyStartedError

        # Deferred() needs a running loop; fail before any state changes
        self._stop = Deferred()
        self._processor = processor
        self._schedule_drain()
        logger.info(
            "JobScheduler started (concurrency=%d, order=%s, queued=%d)",
            self.concurrency,
            self._options.order.value,
            self.size,
        )
        self._emitter.emit(SchedulerEvent.PROCESSING.value, ProcessingEvent(self))
        return self._stop.future

    def dispose(self) -> None:
        """Return to Idle: drop the processor, queued and in-flight jobs and listeners."""
        was_processing = self._processor is not None
        dropped = self._queue.size()

        self._cycle += 1
        self._processor = None
        self._queue.clear()
        self._in_flight = []

        if self._stop is not None:
            self._stop.resolve(None)
            self._stop = None

        self._emitter.remove_listeners()
        if was_processing:
            logger.info("JobScheduler disposed (dropped %d queued jobs)", dropped)

    # ── Draining ─────────────────────────────────────────────────

    def _schedule_drain(self) -> None:
        if has_running_loop():
            self._loop_scheduler.schedule(self._drain)

    def _drain(self) -> None:
        if self._processor is None or self._queue.is_empty():
            return

        batch: list[Job] = []
        while len(self._in_flight) < self.concurrency:
            job = self._queue.pop()
            if job is None:
                break
            self._in_flight.append(job)
            batch.append(job)

        for job in batch:
            self._dispatch(job, self._cycle)

    def _dispatch(self, job: Job, cycle: int) -> None:
        if job.options.has_delay:
            assert job.options.delay is not None
            self._loop_scheduler.call_later(
                job.options.delay, self._loop_scheduler.schedule, self._run, job, cycle
            )
        else:
            self._loop_scheduler.schedule(self._run, job, cycle)

    async def _run(self, job: Job, cycle: int) -> None:
        processor = self._processor
        if processor is None or cycle != self._cycle:
            return

        try:
            result = await self._execute(processor, job)
        except Exception as exc:
            self._report_failure(job, cycle, exc)
        else:
            self._report_success(job, cycle, result)
        finally:
            self._release(job, cycle)

    async def _execute(self, processor: ProcessFn, job: Job) -> Any:
        controller = AbortController()
        registry = get_hook_registry()
        attributes: dict[str, object] = {
            "job.id": job.job_id,
            "job.type": job.message_type,
            "correlation_id": job.correlation_id,
        }

        async def _invoke() -> Any:
            return await self._invoke(processor, job, controller.signal)

        task = asyncio.ensure_future(
            registry.execute_all(
                f"scheduler.job.{job.message_type or 'default'}", attributes, _invoke
            )
        )
        timeout = job.options.timeout if job.options.has_timeout else None
        done, _ = await asyncio.wait({task}, timeout=timeout)

        if not done:
            assert timeout is not None
            error = JobTimeoutError(job.job_id, timeout)
            controller.abort(error)
            task.add_done_callback(_discard_late_settlement)
            logger.warning("Job %s timed out after %ss", job.job_id, timeout)
            raise error

        if task.cancelled():
            raise JobFailureError(job.job_id, "processing was cancelled")
        return task.result()

    @staticmethod
    async def _invoke(processor: ProcessFn, job: Job, signal: AbortSignal) -> Any:
        result = processor(job, signal)
        if isawaitable(result):
            result = await result
        return result

    def _report_success(self, job: Job, cycle: int, result: Any) -> None:
        if cycle != self._cycle:
            logger.debug("Discarding result of job %s from a disposed cycle", job.job_id)
            return
        logger.debug("Job %s completed", job.job_id)
        self._emitter.emit(
            SchedulerEvent.COMPLETED.value,
            CompletedEvent(CompletedJob(**job_fields(job), result=result)),
        )

    def _report_failure(self, job: Job, cycle: int, reason: BaseException) -> None:
        if cycle != self._cycle:
            logger.debug("Discarding failure of job %s from a disposed cycle", job.job_id)
            return
        error = normalize_error(job.job_id, reason)
        logger.debug("Job %s failed: %s", job.job_id, error)
        self._emitter.emit(
            SchedulerEvent.FAILED.value,
            FailedEvent(FailedJob(**job_fields(job), error=error)),
        )

    def _release(self, job: Job, cycle: int) -> None:
        if cycle != self._cycle:
            return
        self._in_flight = [j for j in self._in_flight if j.job_id != job.job_id]
        self._schedule_drain()

    def __repr__(self) -> str:
        return (
            f"JobScheduler(processing={self.is_processing}, queued={self.size}, "
            f"in_flight={len(self._in_flight)})"
        )


def _discard_late_settlement(task: asyncio.Future[Any]) -> None:
    """Retrieve the outcome of a processor that finished after its timeout."""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug("Processor finished after timeout with %r", exc)
