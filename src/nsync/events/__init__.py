"""Event emitter and event objects."""

from __future__ import annotations

from .emitter import EventEmitter, Listener, ListenerErrorHandler, Subscription
from .event import Event

__all__ = [
    "Event",
    "EventEmitter",
    "Listener",
    "ListenerErrorHandler",
    "Subscription",
]
