"""Exceptions raised by the nsync scheduling primitives."""

from __future__ import annotations


class NsyncError(Exception):
    """Root exception for the entire nsync toolkit."""


class AlreadyStartedError(NsyncError):
    """Raised when ``start()`` is called on a scheduler that is already processing.

    The running processor is never replaced silently.
    """

    def __init__(self, message: str = "Scheduler has already been started") -> None:
        super().__init__(message)


class CanceledError(NsyncError):
    """Raised into a Deferred (or an abort signal) that was cancelled."""

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason
        super().__init__(reason or "Operation was canceled")


class EmitterDisposedError(NsyncError):
    """Raised when an event emitter registry is used after ``dispose()``."""

    def __init__(self) -> None:
        super().__init__("EventEmitter has been disposed")


class ListenerError(NsyncError):
    """A listener raised while an event was being delivered.

    The original exception is chained as ``__cause__``. Instances are handed
    to the emitter's error handler and never propagate out of ``emit``.
    """

    def __init__(self, event_name: str, error: BaseException) -> None:
        self.event_name = event_name
        self.error = error
        super().__init__(
            f"Listener for {event_name!r} raised {type(error).__name__}: {error}"
        )
        self.__cause__ = error


# ── Job Exceptions ───────────────────────────────────────────────────


class JobError(NsyncError):
    """Base class for errors reported through a scheduler's ``failed`` event."""

    def __init__(self, job_id: str, message: str) -> None:
        self.job_id = job_id
        super().__init__(message)


class JobTimeoutError(JobError):
    """The job's timeout elapsed before its processor settled."""

    def __init__(self, job_id: str, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(job_id, f"Timeout of {timeout}s exceeded")


class JobFailureError(JobError):
    """A processor failed with a reason that was not an ``Exception``.

    Also used when the processor's task was cancelled before settling.
    """

    def __init__(self, job_id: str, reason: object) -> None:
        self.reason = reason
        super().__init__(job_id, str(reason))


def normalize_error(job_id: str, reason: object) -> Exception:
    """Return *reason* if it is already an ``Exception``, else wrap it."""
    if isinstance(reason, Exception):
        return reason
    error = JobFailureError(job_id, reason)
    if isinstance(reason, BaseException):
        error.__cause__ = reason
    return error
