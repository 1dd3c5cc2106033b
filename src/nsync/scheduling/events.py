"""Lifecycle events emitted by the JobScheduler."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from ..events.event import Event
from .job import CompletedJob, FailedJob

if TYPE_CHECKING:
    from .scheduler import JobScheduler


class SchedulerEvent(str, Enum):
    COMPLETED = "completed"
    FAILED = "failed"
    PROCESSING = "processing"


class CompletedEvent(Event[CompletedJob]):
    def __init__(self, target: CompletedJob) -> None:
        super().__init__(type=SchedulerEvent.COMPLETED.value, target=target)


class FailedEvent(Event[FailedJob]):
    def __init__(self, target: FailedJob) -> None:
        super().__init__(type=SchedulerEvent.FAILED.value, target=target)


class ProcessingEvent(Event["JobScheduler"]):
    def __init__(self, target: JobScheduler) -> None:
        super().__init__(type=SchedulerEvent.PROCESSING.value, target=target)
