"""Job scheduling: jobs, options, lifecycle events, and the loop scheduler handle."""

from __future__ import annotations

from .events import CompletedEvent, FailedEvent, ProcessingEvent, SchedulerEvent
from .job import CompletedJob, FailedJob, Job, JobOptions, SchedulerOptions
from .loop import (
    LoopScheduler,
    ScheduledCall,
    get_loop_scheduler,
    set_loop_scheduler,
)
from .scheduler import JobScheduler

__all__ = [
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
]
