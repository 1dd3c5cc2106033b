"""Deferred: an awaitable whose settlement is controlled from the outside."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .exceptions import CanceledError

if TYPE_CHECKING:
    from collections.abc import Generator

logger = logging.getLogger("nsync.deferred")

T = TypeVar("T")


class DeferredOutcome(str, Enum):
    RESOLVED = "resolved"
    REJECTED = "rejected"


class Deferred(Generic[T]):
    """Wraps an :class:`asyncio.Future` so external code decides when it settles.

    Only the first ``resolve``/``reject``/``cancel`` takes effect; later calls
    are ignored. The outcome is recorded and exposed through ``is_resolved``,
    ``is_rejected``, ``value`` and ``reason``.

    Example::

        deferred: Deferred[int] = Deferred()
        loop.call_later(1.0, deferred.resolve, 42)
        assert await deferred == 42
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop or asyncio.get_running_loop()
        self._future: asyncio.Future[T] = self._loop.create_future()
        self._outcome: DeferredOutcome | None = None
        self._value: T | None = None
        self._reason: BaseException | None = None

    @property
    def future(self) -> asyncio.Future[T]:
        """The future settled by this Deferred."""
        return self._future

    @property
    def is_resolved(self) -> bool:
        return self._outcome is DeferredOutcome.RESOLVED

    @property
    def is_rejected(self) -> bool:
        return self._outcome is DeferredOutcome.REJECTED

    @property
    def is_settled(self) -> bool:
        return self._outcome is not None

    @property
    def value(self) -> T | None:
        """Resolved value, or ``None`` when not resolved."""
        return self._value if self.is_resolved else None

    @property
    def reason(self) -> BaseException | None:
        """Rejection reason, or ``None`` when not rejected."""
        return self._reason if self.is_rejected else None

    def resolve(self, value: T) -> asyncio.Future[None]:
        """Resolve the future with *value*.

        Returns a completed future that callers may await to sequence work
        after the settlement.
        """
        if self._settle_guard("resolve"):
            self._future.set_result(value)
            self._value = value
            self._outcome = DeferredOutcome.RESOLVED
        return self._settled()

    def reject(self, reason: BaseException) -> asyncio.Future[None]:
        """Reject the future with *reason*.

        Raises:
            TypeError: If *reason* is not an exception. The Deferred stays
                unsettled.
        """
        if not isinstance(reason, BaseException):
            raise TypeError(
                f"Deferred can only be rejected with an exception, got {type(reason).__name__}"
            )
        if self._settle_guard("reject"):
            self._future.set_exception(reason)
            self._reason = reason
            self._outcome = DeferredOutcome.REJECTED
        return self._settled()

    def cancel(self, reason: str | None = None) -> None:
        """Reject with a :class:`CanceledError`."""
        self.reject(CanceledError(reason))

    def _settle_guard(self, operation: str) -> bool:
        if self._outcome is not None or self._future.done():
            logger.debug(
                "Ignoring %s on a Deferred that is already %s",
                operation,
                self._outcome.value if self._outcome else "done",
            )
            return False
        return True

    def _settled(self) -> asyncio.Future[None]:
        done: asyncio.Future[None] = self._loop.create_future()
        done.set_result(None)
        return done

    def __await__(self) -> Generator[Any, None, T]:
        return self._future.__await__()
