from __future__ import annotations

import asyncio
from typing import Any

import pytest

from nsync.concurrency import (
    DEFAULT_CONCURRENCY,
    Fulfilled,
    Rejected,
    map_promises,
    promise_concurrency,
)
from nsync.scheduling import LoopScheduler


class Gauge:
    """Tracks how many calls are running at once."""

    def __init__(self) -> None:
        self.active = 0
        self.peak = 0
        self.started: list[Any] = []

    async def run(self, value: Any, pause: float = 0.005) -> Any:
        self.active += 1
        self.peak = max(self.peak, self.active)
        self.started.append(value)
        try:
            await asyncio.sleep(pause)
            return value
        finally:
            self.active -= 1


class TestMapPromises:
    @pytest.mark.asyncio
    async def test_results_follow_input_order_not_completion_order(self) -> None:
        async def echo(value: str, pause: float) -> str:
            await asyncio.sleep(pause)
            return value

        results = await map_promises(
            [("slow", 0.03), ("fast", 0.0), ("medium", 0.01)], echo, 3
        )

        assert results == [Fulfilled("slow"), Fulfilled("fast"), Fulfilled("medium")]

    @pytest.mark.asyncio
    async def test_concurrency_one_runs_sequentially(self) -> None:
        gauge = Gauge()

        results = await map_promises([(i,) for i in range(5)], gauge.run, 1)

        assert gauge.peak == 1
        assert gauge.started == [0, 1, 2, 3, 4]
        assert [r.value for r in results if isinstance(r, Fulfilled)] == [0, 1, 2, 3, 4]

    @pytest.mark.asyncio
    async def test_never_exceeds_concurrency(self) -> None:
        gauge = Gauge()

        results = await map_promises([(i,) for i in range(10)], gauge.run, 3)

        assert len(results) == 10
        assert gauge.peak == 3
        assert all(r.status == "fulfilled" for r in results)

    @pytest.mark.asyncio
    async def test_failures_are_captured_in_place(self) -> None:
        error = ValueError("odd")

        async def check(value: int) -> int:
            if value % 2:
                raise error
            return value

        results = await map_promises([(0,), (1,), (2,)], check)

        assert results[0] == Fulfilled(0)
        assert isinstance(results[1], Rejected)
        assert results[1].reason is error
        assert results[1].status == "rejected"
        assert results[2] == Fulfilled(2)

    @pytest.mark.asyncio
    async def test_empty_input_resolves_to_empty_list(self) -> None:
        async def never(*_: Any) -> None:
            raise AssertionError("should not be called")

        assert await map_promises([], never) == []

    @pytest.mark.parametrize("concurrency", [0, -1])
    @pytest.mark.asyncio
    async def test_rejects_non_positive_concurrency(self, concurrency: int) -> None:
        async def noop() -> None:
            return None

        with pytest.raises(ValueError, match="concurrency"):
            await map_promises([()], noop, concurrency)

    @pytest.mark.asyncio
    async def test_large_batch_completes(self) -> None:
        async def double(value: int) -> int:
            return value * 2

        results = await map_promises([(i,) for i in range(1000)], double, 3)

        assert len(results) == 1000
        assert results[-1] == Fulfilled(1998)

    @pytest.mark.asyncio
    async def test_uses_supplied_loop_scheduler(self) -> None:
        scheduler = LoopScheduler(asyncio.get_running_loop())

        async def identity(value: int) -> int:
            return value

        results = await map_promises([(1,), (2,)], identity, loop_scheduler=scheduler)

        assert results == [Fulfilled(1), Fulfilled(2)]


class TestPromiseConcurrency:
    @pytest.mark.asyncio
    async def test_runs_thunks_with_default_concurrency(self) -> None:
        gauge = Gauge()
        callbacks = [lambda i=i: gauge.run(i) for i in range(8)]

        results = await promise_concurrency(callbacks)

        assert gauge.peak == DEFAULT_CONCURRENCY
        assert [r.value for r in results if isinstance(r, Fulfilled)] == list(range(8))

    @pytest.mark.asyncio
    async def test_synchronous_raise_becomes_rejection(self) -> None:
        def explode() -> Any:
            raise RuntimeError("sync failure")

        async def fine() -> str:
            return "ok"

        results = await promise_concurrency([explode, fine], 2)

        assert isinstance(results[0], Rejected)
        assert isinstance(results[0].reason, RuntimeError)
        assert results[1] == Fulfilled("ok")

    @pytest.mark.asyncio
    async def test_plain_return_values_are_fulfilled(self) -> None:
        results = await promise_concurrency([lambda: 1, lambda: "two"])  # type: ignore[list-item]

        assert results == [Fulfilled(1), Fulfilled("two")]

    @pytest.mark.asyncio
    async def test_cancelled_callback_is_rejected(self) -> None:
        async def cancelled() -> None:
            raise asyncio.CancelledError

        results = await promise_concurrency([cancelled])

        assert isinstance(results[0], Rejected)
        assert isinstance(results[0].reason, asyncio.CancelledError)
