"""Small awaitable helpers shared by the scheduler and the bounded runners."""

from __future__ import annotations

import asyncio
from inspect import isawaitable
from typing import TYPE_CHECKING, Any, TypeVar, cast

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

T = TypeVar("T")


async def delay(seconds: float = 0.75) -> None:
    """Sleep for *seconds* (default 0.75s)."""
    await asyncio.sleep(seconds)


def is_awaitable(obj: object) -> bool:
    """Return True when *obj* can be awaited."""
    return isawaitable(obj)


def as_awaitable(callback: Callable[[], T | Awaitable[T]]) -> Awaitable[T]:
    """Call *callback* and always hand back something awaitable.

    Awaitable results are returned unchanged. Plain values become a resolved
    future and a synchronous exception becomes a failed future, so callers
    only deal with one failure path.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[T] = loop.create_future()
    try:
        result = callback()
    except Exception as exc:
        future.set_exception(exc)
        return future

    if isawaitable(result):
        return cast("Awaitable[T]", result)
    future.set_result(cast("Any", result))
    return future
