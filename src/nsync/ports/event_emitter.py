from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..events.emitter import Listener, Subscription


@runtime_checkable
class IEventEmitter(Protocol):
    """Protocol for synchronous, name-keyed event delivery."""

    def subscribe(
        self,
        event_name: str,
        listener: Listener,
        this_arg: Any = None,
        *,
        once: bool = False,
    ) -> Subscription:
        ...

    def emit(self, event_name: str, *args: Any) -> list[Any] | None:
        ...

    def fire(self, event_name: str, data: Any) -> None:
        ...

    def remove_listener(self, event_name: str, listener: Listener | None = None) -> None:
        ...

    def remove_listeners(self) -> None:
        ...

    def has_listeners(self, event_name: str | None = None) -> bool:
        ...

    def dispose(self) -> None:
        ...
