"""EventEmitter: per-name ordered listener registry with isolated delivery."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..primitives.exceptions import EmitterDisposedError, ListenerError

logger = logging.getLogger("nsync.events")

Listener = Callable[..., Any]
ListenerErrorHandler = Callable[[ListenerError], None]


def _log_listener_error(error: ListenerError) -> None:
    logger.warning(
        "Uncaught exception in listener for event %r: %s",
        error.event_name,
        error.error,
        exc_info=error.error,
    )


@dataclass(eq=False)
class Subscription:
    """Handle returned by :meth:`EventEmitter.subscribe`.

    Identity is the handle itself; the ``listener`` is matched by reference
    (``==``) for lookups through the emitter.
    """

    event_name: str
    listener: Listener
    this_arg: Any = None
    once: bool = False
    calls: int = 0
    disposed: bool = False
    subscription_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    _emitter: EventEmitter | None = field(default=None, repr=False)

    def unsubscribe(self) -> None:
        """Remove this subscription from its emitter."""
        if self._emitter is not None:
            self._emitter._detach(self)

    def dispose(self) -> None:
        """Mark the subscription disposed and remove it."""
        self.disposed = True
        self.unsubscribe()


class EventEmitter:
    """Synchronous event emitter.

    * ``emit`` delivers to the named event's listeners in registration order.
      A delivered subscription is moved to the back of its list.
    * Listener exceptions are wrapped in :class:`ListenerError` and handed to
      ``on_listener_error`` (default: log a warning). They never escape.
    * After :meth:`dispose`, every registry operation raises
      :class:`EmitterDisposedError`.
    """

    def __init__(self, on_listener_error: ListenerErrorHandler | None = None) -> None:
        self._listeners: dict[str, list[Subscription]] = {}
        self._on_listener_error = on_listener_error or _log_listener_error
        self._disposed = False

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def listener_count(self) -> int:
        return sum(len(subs) for subs in self._listeners.values())

    # ── Registration ─────────────────────────────────────────────

    def subscribe(
        self,
        event_name: str,
        listener: Listener,
        this_arg: Any = None,
        *,
        once: bool = False,
    ) -> Subscription:
        """Register *listener* for *event_name*.

        When *this_arg* is given the listener is called as
        ``listener(this_arg, *args)``, the way an unbound method receives
        ``self``.
        """
        self._check_disposed()
        if not isinstance(event_name, str):
            raise TypeError(f"Event name must be a str, got {type(event_name).__name__}")

        subscription = Subscription(
            event_name=event_name,
            listener=listener,
            this_arg=this_arg,
            once=once,
            _emitter=self,
        )
        self._listeners.setdefault(event_name, []).append(subscription)
        return subscription

    def remove_listener(self, event_name: str, listener: Listener | None = None) -> None:
        """Remove the first subscription of *listener*, or all of *event_name*."""
        self._check_disposed()
        subscriptions = self._listeners.get(event_name)
        if subscriptions is None:
            return
        if listener is None:
            subscriptions.clear()
            del self._listeners[event_name]
            return
        for subscription in subscriptions:
            if subscription.listener == listener:
                subscriptions.remove(subscription)
                break

    def remove_listeners(self) -> None:
        """Remove every subscription of every event."""
        self._check_disposed()
        self._clear()

    # ── Delivery ─────────────────────────────────────────────────

    def emit(self, event_name: str, *args: Any) -> list[Any] | None:
        """Deliver *args* to the live listeners of *event_name*.

        Returns the listeners' return values, or ``None`` when nothing was
        ever registered under *event_name*.
        """
        self._check_disposed()
        subscriptions = self._listeners.get(event_name)
        if subscriptions is None:
            return None

        results: list[Any] = []
        for subscription in list(subscriptions):
            if subscription.disposed or subscription not in subscriptions:
                continue
            # once subscriptions leave the list before the call so a nested
            # emit of the same event cannot reach them again
            if subscription.once:
                subscriptions.remove(subscription)
            subscription.calls += 1
            ok, result = self._deliver(subscription, args)
            if ok:
                results.append(result)
            self._move_to_back(subscriptions, subscription)
        return results

    def fire(self, event_name: str, data: Any) -> None:
        """Deliver *data* to the listeners of *event_name*, then drop them all."""
        self._check_disposed()
        subscriptions = self._listeners.pop(event_name, [])
        for subscription in subscriptions:
            if subscription.disposed:
                continue
            self._deliver(subscription, (data,))
            subscription.calls += 1

    def _deliver(
        self, subscription: Subscription, args: tuple[Any, ...]
    ) -> tuple[bool, Any]:
        try:
            if subscription.this_arg is not None:
                return True, subscription.listener(subscription.this_arg, *args)
            return True, subscription.listener(*args)
        except Exception as exc:
            self._on_listener_error(ListenerError(subscription.event_name, exc))
            return False, None

    @staticmethod
    def _move_to_back(subscriptions: list[Subscription], subscription: Subscription) -> None:
        if subscription not in subscriptions:
            return
        subscriptions.remove(subscription)
        subscriptions.append(subscription)

    # ── Introspection ────────────────────────────────────────────

    def get_listeners(self, event_name: str) -> list[Subscription]:
        self._check_disposed()
        return list(self._listeners.get(event_name, []))

    def get_subscription(self, event_name: str, listener: Listener) -> Subscription | None:
        self._check_disposed()
        for subscription in self._listeners.get(event_name, []):
            if subscription.listener == listener:
                return subscription
        return None

    def has_listeners(self, event_name: str | None = None) -> bool:
        self._check_disposed()
        if event_name is not None:
            return bool(self._listeners.get(event_name))
        return any(self._listeners.values())

    def event_names(self) -> list[str]:
        self._check_disposed()
        return list(self._listeners)

    # ── Lifecycle ────────────────────────────────────────────────

    def dispose(self) -> None:
        """Drop all listeners and refuse further use. Idempotent."""
        if self._disposed:
            return
        self._clear()
        self._disposed = True

    def _clear(self) -> None:
        # lists are emptied in place so an emit already iterating one stops
        for subscriptions in self._listeners.values():
            subscriptions.clear()
        self._listeners.clear()

    def _detach(self, subscription: Subscription) -> None:
        subscriptions = self._listeners.get(subscription.event_name)
        if subscriptions and subscription in subscriptions:
            subscriptions.remove(subscription)

    def _check_disposed(self) -> None:
        if self._disposed:
            raise EmitterDisposedError

    def __repr__(self) -> str:
        return f"EventEmitter(events={len(self._listeners)}, listeners={self.listener_count})"
