"""nsync: in-process asynchronous scheduling primitives for asyncio.

A job scheduler with per-job timeout/delay and lifecycle events, bounded
concurrency runners, an event emitter, and the Deferred/abort primitives
they are built from.
"""

from __future__ import annotations

# ── Concurrency ─────────────────────────────────────────────────
from .concurrency import Fulfilled, Rejected, Result, map_promises, promise_concurrency

# ── Core helpers ────────────────────────────────────────────────
from .core import as_awaitable, delay, is_awaitable
from .correlation import (
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)

# ── Events ──────────────────────────────────────────────────────
from .events import Event, EventEmitter, Subscription

# ── Instrumentation ─────────────────────────────────────────────
from .instrumentation import (
    HookRegistration,
    HookRegistry,
    InstrumentationHook,
    get_hook_registry,
    set_hook_registry,
)

# ── Ports ───────────────────────────────────────────────────────
from .ports import IEventEmitter, IJobScheduler, ILoopScheduler, ProcessFn

# ── Primitives ──────────────────────────────────────────────────
from .primitives import (
    AbortController,
    AbortSignal,
    AlreadyStartedError,
    CanceledError,
    Deferred,
    EmitterDisposedError,
    IIDGenerator,
    JobError,
    JobFailureError,
    JobTimeoutError,
    ListenerError,
    NsyncError,
    OrderedQueue,
    QueueOrder,
    ShortIdGenerator,
    UUID4Generator,
)

# ── Scheduling ──────────────────────────────────────────────────
from .scheduling import (
    CompletedEvent,
    CompletedJob,
    FailedEvent,
    FailedJob,
    Job,
    JobOptions,
    JobScheduler,
    LoopScheduler,
    ProcessingEvent,
    ScheduledCall,
    SchedulerEvent,
    SchedulerOptions,
    get_loop_scheduler,
    set_loop_scheduler,
)

__all__: list[str] = [
    # Scheduling
    "CompletedEvent",
    "CompletedJob",
    "FailedEvent",
    "FailedJob",
    "Job",
    "JobOptions",
    "JobScheduler",
    "LoopScheduler",
    "ProcessingEvent",
    "ScheduledCall",
    "SchedulerEvent",
    "SchedulerOptions",
    "get_loop_scheduler",
    "set_loop_scheduler",
    # Concurrency
    "Fulfilled",
    "Rejected",
    "Result",
    "map_promises",
    "promise_concurrency",
    # Events
    "Event",
    "EventEmitter",
    "Subscription",
    # Core helpers
    "as_awaitable",
    "delay",
    "is_awaitable",
    "generate_correlation_id",
    "get_correlation_id",
    "set_correlation_id",
    # Instrumentation
    "HookRegistration",
    "HookRegistry",
    "InstrumentationHook",
    "get_hook_registry",
    "set_hook_registry",
    # Ports
    "IEventEmitter",
    "IJobScheduler",
    "ILoopScheduler",
    "ProcessFn",
    # Primitives
    "AbortController",
    "AbortSignal",
    "AlreadyStartedError",
    "CanceledError",
    "Deferred",
    "EmitterDisposedError",
    "IIDGenerator",
    "JobError",
    "JobFailureError",
    "JobTimeoutError",
    "ListenerError",
    "NsyncError",
    "OrderedQueue",
    "QueueOrder",
    "ShortIdGenerator",
    "UUID4Generator",
]
