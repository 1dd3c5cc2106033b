"""Job models and scheduler configuration."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..correlation import get_correlation_id
from ..primitives.ordered_queue import QueueOrder


class JobOptions(BaseModel):
    """Per-job timing options, in seconds. ``None`` or ``0`` means unset."""

    model_config = ConfigDict(frozen=True)

    timeout: float | None = Field(
        default=None,
        ge=0,
        description="Fail the job if the processor has not settled after this long",
    )
    delay: float | None = Field(
        default=None,
        ge=0,
        description="Wait this long after the job enters the in-flight set",
    )

    @property
    def has_timeout(self) -> bool:
        return self.timeout is not None and self.timeout > 0

    @property
    def has_delay(self) -> bool:
        return self.delay is not None and self.delay > 0


class Job(BaseModel):
    """One unit of work. Immutable once queued; never requeued after settling."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    job_id: str
    data: Any = None
    queued_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    message_type: str | None = None
    options: JobOptions = Field(default_factory=JobOptions)
    correlation_id: str | None = Field(default_factory=get_correlation_id)


class CompletedJob(Job):
    """Payload of the ``completed`` event: the job plus its result."""

    result: Any = None


class FailedJob(Job):
    """Payload of the ``failed`` event: the job plus its error."""

    error: Exception


def job_fields(job: Job) -> dict[str, Any]:
    """Shallow field mapping of *job*; payload objects are not copied."""
    return {name: getattr(job, name) for name in Job.model_fields}


class SchedulerOptions(BaseModel):
    """Construction-time configuration of a :class:`JobScheduler`."""

    model_config = ConfigDict(frozen=True)

    concurrency: int = Field(
        default=1, ge=1, description="Maximum number of jobs in flight at once"
    )
    order: QueueOrder = Field(
        default=QueueOrder.FIFO, description="Dispatch order of queued jobs"
    )
