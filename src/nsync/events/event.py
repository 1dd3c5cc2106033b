"""Event objects carried through an EventEmitter."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class Event(Generic[T]):
    """A named occurrence wrapping a ``target`` payload.

    Listeners may call :meth:`prevent_default`; cancellable events may also
    be cancelled. The optional callbacks let the emitting side react.
    """

    type: str
    target: T
    cancelable: bool = False
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    on_cancel: Callable[[], None] | None = field(default=None, repr=False)
    on_default_prevented: Callable[[], None] | None = field(default=None, repr=False)
    _cancelled: bool = field(default=False, init=False, repr=False)
    _default_prevented: bool = field(default=False, init=False, repr=False)

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    @property
    def is_default_prevented(self) -> bool:
        return self._default_prevented

    def cancel(self) -> None:
        """Cancel the event. No-op for non-cancelable events."""
        if not self.cancelable or self._cancelled:
            return
        if self.on_cancel is not None:
            self.on_cancel()
        self._cancelled = True

    def prevent_default(self) -> None:
        if self._default_prevented:
            return
        if self.on_default_prevented is not None:
            self.on_default_prevented()
        self._default_prevented = True
