from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..scheduling.loop import ScheduledCall


@runtime_checkable
class ILoopScheduler(Protocol):
    """Defers callbacks onto the event loop (see ``LoopScheduler``)."""

    def schedule(self, callback: Callable[..., Any], *args: Any) -> None:
        """Run on the next loop pass."""
        ...

    def immediate(self, callback: Callable[..., Any], *args: Any) -> ScheduledCall:
        """Run on a later loop iteration, after already-ready callbacks."""
        ...

    def call_later(
        self, delay: float, callback: Callable[..., Any], *args: Any
    ) -> ScheduledCall:
        """Run after *delay* seconds."""
        ...
