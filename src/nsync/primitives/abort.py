"""Advisory cancellation tokens handed to processing functions."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from .exceptions import CanceledError

logger = logging.getLogger("nsync.abort")

AbortListener = Callable[[BaseException], object]


class AbortSignal:
    """Read-only view of an :class:`AbortController`.

    Aborting is advisory: nothing is interrupted. A processing function that
    wants to stop early must check :attr:`aborted`, await :meth:`wait`, or
    register a callback with :meth:`add_listener`.
    """

    def __init__(self) -> None:
        self._reason: BaseException | None = None
        self._listeners: list[AbortListener] = []
        self._event: asyncio.Event | None = None

    @property
    def aborted(self) -> bool:
        return self._reason is not None

    @property
    def reason(self) -> BaseException | None:
        return self._reason

    def throw_if_aborted(self) -> None:
        """Raise the abort reason if the signal has been aborted."""
        if self._reason is not None:
            raise self._reason

    def add_listener(self, listener: AbortListener) -> None:
        """Call *listener* with the reason once aborted (immediately if already)."""
        if self._reason is not None:
            self._notify(listener, self._reason)
            return
        self._listeners.append(listener)

    def remove_listener(self, listener: AbortListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def wait(self) -> BaseException:
        """Suspend until the signal is aborted and return the reason."""
        if self._reason is None:
            if self._event is None:
                self._event = asyncio.Event()
            await self._event.wait()
        assert self._reason is not None
        return self._reason

    def _abort(self, reason: BaseException) -> None:
        if self._reason is not None:
            return
        self._reason = reason
        if self._event is not None:
            self._event.set()
        listeners, self._listeners = self._listeners, []
        for listener in listeners:
            self._notify(listener, reason)

    @staticmethod
    def _notify(listener: AbortListener, reason: BaseException) -> None:
        try:
            listener(reason)
        except Exception:
            logger.exception("Abort listener %r raised", listener)


class AbortController:
    """Owns an :class:`AbortSignal` and is the only way to abort it."""

    def __init__(self) -> None:
        self._signal = AbortSignal()

    @property
    def signal(self) -> AbortSignal:
        return self._signal

    def abort(self, reason: BaseException | None = None) -> None:
        """Abort the signal. Only the first call has an effect."""
        self._signal._abort(reason if reason is not None else CanceledError())
