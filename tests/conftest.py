"""Shared fixtures for the nsync test suite."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterator

import pytest

from nsync.scheduling.loop import set_loop_scheduler

Eventually = Callable[..., Awaitable[None]]


@pytest.fixture(autouse=True)
def _reset_loop_scheduler() -> Iterator[None]:
    """Each test gets a fresh process-wide loop scheduler."""
    set_loop_scheduler(None)
    yield
    set_loop_scheduler(None)


async def _eventually(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
    async def _poll() -> None:
        while not predicate():
            await asyncio.sleep(0.005)

    await asyncio.wait_for(_poll(), timeout=timeout)


@pytest.fixture
def eventually() -> Eventually:
    """Poll a predicate until it holds, failing after ``timeout`` seconds."""
    return _eventually
