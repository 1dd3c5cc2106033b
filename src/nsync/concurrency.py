"""Bounded-concurrency runners over a fixed batch of asynchronous work."""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar, Union

from .core import as_awaitable
from .primitives.deferred import Deferred
from .scheduling.loop import LoopScheduler, get_loop_scheduler

logger = logging.getLogger("nsync.concurrency")

T = TypeVar("T")

DEFAULT_CONCURRENCY = 3


@dataclass(frozen=True)
class Fulfilled(Generic[T]):
    value: T
    status: Literal["fulfilled"] = "fulfilled"


@dataclass(frozen=True)
class Rejected:
    reason: BaseException
    status: Literal["rejected"] = "rejected"


Result = Union[Fulfilled[T], Rejected]


async def map_promises(
    args_list: Sequence[Sequence[Any]],
    fn: Callable[..., Awaitable[T]],
    concurrency: int = DEFAULT_CONCURRENCY,
    *,
    loop_scheduler: LoopScheduler | None = None,
) -> list[Result[T]]:
    """Call ``fn(*args)`` for every entry of *args_list*, *concurrency* at a time.

    Each entry is a sequence of positional arguments. Results come back in
    input order regardless of completion order, one per entry, and failures
    are captured as :class:`Rejected` rather than raised.
    """
    thunks = [functools.partial(fn, *args) for args in args_list]
    return await _run_bounded(thunks, concurrency, loop_scheduler)


async def promise_concurrency(
    callbacks: Sequence[Callable[[], Awaitable[T]]],
    concurrency: int = DEFAULT_CONCURRENCY,
    *,
    loop_scheduler: LoopScheduler | None = None,
) -> list[Result[T]]:
    """Await every callback's result, *concurrency* at a time.

    Same contract as :func:`map_promises` for zero-argument callables.
    """
    return await _run_bounded(list(callbacks), concurrency, loop_scheduler)


async def _run_bounded(
    thunks: list[Callable[[], Awaitable[T]]],
    concurrency: int,
    loop_scheduler: LoopScheduler | None,
) -> list[Result[T]]:
    if concurrency < 1:
        raise ValueError(f"concurrency must be >= 1, got {concurrency}")

    scheduler = loop_scheduler or get_loop_scheduler()
    total = len(thunks)
    deferred: Deferred[list[Result[T]]] = Deferred()
    results: list[Result[T] | None] = [None] * total
    cursor = 0
    settled = 0

    def claim_next() -> None:
        nonlocal cursor
        if deferred.future.done():
            return
        if cursor < total:
            index = cursor
            cursor += 1
            future = asyncio.ensure_future(as_awaitable(thunks[index]))
            future.add_done_callback(functools.partial(on_settled, index))
        elif settled == total:
            deferred.resolve(results)  # type: ignore[arg-type]

    def on_settled(index: int, future: asyncio.Future[T]) -> None:
        nonlocal settled
        if future.cancelled():
            results[index] = Rejected(asyncio.CancelledError())
        elif future.exception() is not None:
            results[index] = Rejected(future.exception())  # type: ignore[arg-type]
        else:
            results[index] = Fulfilled(future.result())
        settled += 1
        scheduler.immediate(claim_next)

    for _ in range(min(concurrency, max(total, 1))):
        claim_next()

    outcome = await deferred
    logger.debug(
        "Bounded run settled %d items (%d rejected, concurrency=%d)",
        total,
        sum(1 for r in outcome if isinstance(r, Rejected)),
        concurrency,
    )
    return outcome
