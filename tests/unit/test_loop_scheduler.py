from __future__ import annotations

import asyncio
import logging

import pytest

from nsync.scheduling import LoopScheduler, get_loop_scheduler, set_loop_scheduler


@pytest.fixture
def scheduler() -> LoopScheduler:
    return LoopScheduler()


@pytest.mark.asyncio
async def test_schedule_runs_before_timers(scheduler: LoopScheduler) -> None:
    order: list[str] = []

    scheduler.immediate(order.append, "immediate")
    scheduler.schedule(order.append, "soon")
    await asyncio.sleep(0.01)

    assert order == ["soon", "immediate"]


@pytest.mark.asyncio
async def test_call_later_waits_for_delay(scheduler: LoopScheduler) -> None:
    fired = asyncio.Event()
    loop = asyncio.get_running_loop()
    started = loop.time()

    scheduler.call_later(0.02, fired.set)
    await asyncio.wait_for(fired.wait(), timeout=1.0)

    assert loop.time() - started >= 0.015


@pytest.mark.asyncio
async def test_disposed_call_never_runs(scheduler: LoopScheduler) -> None:
    seen: list[int] = []

    call = scheduler.call_later(0.01, seen.append, 1)
    call.dispose()
    await asyncio.sleep(0.03)

    assert call.cancelled
    assert seen == []


@pytest.mark.asyncio
async def test_coroutine_callbacks_run_as_tasks(scheduler: LoopScheduler) -> None:
    done = asyncio.Event()

    async def work() -> None:
        await asyncio.sleep(0)
        done.set()

    scheduler.schedule(work)
    await asyncio.sleep(0)
    assert scheduler.pending_tasks == 1

    await asyncio.wait_for(done.wait(), timeout=1.0)
    await asyncio.sleep(0.01)
    assert scheduler.pending_tasks == 0


@pytest.mark.asyncio
async def test_failures_are_logged_not_raised(
    scheduler: LoopScheduler, caplog: pytest.LogCaptureFixture
) -> None:
    def broken() -> None:
        raise RuntimeError("sync failure")

    async def broken_async() -> None:
        raise RuntimeError("async failure")

    with caplog.at_level(logging.WARNING, logger="nsync.scheduler"):
        scheduler.schedule(broken)
        scheduler.schedule(broken_async)
        await asyncio.sleep(0.01)

    assert "sync failure" in caplog.text
    assert "async failure" in caplog.text


def test_default_scheduler_is_shared_and_replaceable() -> None:
    first = get_loop_scheduler()
    assert get_loop_scheduler() is first

    replacement = LoopScheduler()
    set_loop_scheduler(replacement)
    assert get_loop_scheduler() is replacement

    set_loop_scheduler(None)
    assert get_loop_scheduler() is not replacement
