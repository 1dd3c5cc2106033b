"""Primitives: exceptions, Deferred, abort signals, ordered queue, ID generation."""

from __future__ import annotations

from .abort import AbortController, AbortSignal
from .deferred import Deferred, DeferredOutcome
from .exceptions import (
    AlreadyStartedError,
    CanceledError,
    EmitterDisposedError,
    JobError,
    JobFailureError,
    JobTimeoutError,
    ListenerError,
    NsyncError,
    normalize_error,
)
from .id_generator import IIDGenerator, ShortIdGenerator, UUID4Generator
from .ordered_queue import OrderedQueue, QueueOrder

__all__ = [
    "AbortController",
    "AbortSignal",
    "AlreadyStartedError",
    "CanceledError",
    "Deferred",
    "DeferredOutcome",
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
    "normalize_error",
]
