from __future__ import annotations

import asyncio

import pytest

from nsync.core import as_awaitable, delay, is_awaitable


@pytest.mark.asyncio
async def test_delay_sleeps_for_given_seconds() -> None:
    loop = asyncio.get_running_loop()
    started = loop.time()

    await delay(0.02)

    assert loop.time() - started >= 0.015


@pytest.mark.asyncio
async def test_delay_zero_yields_once() -> None:
    await delay(0)


@pytest.mark.asyncio
async def test_is_awaitable() -> None:
    async def coro() -> None:
        return None

    pending = coro()
    assert is_awaitable(pending)
    assert is_awaitable(asyncio.get_running_loop().create_future())
    assert not is_awaitable(42)
    assert not is_awaitable(coro)
    await pending


@pytest.mark.asyncio
async def test_as_awaitable_wraps_plain_value() -> None:
    assert await as_awaitable(lambda: 5) == 5


@pytest.mark.asyncio
async def test_as_awaitable_passes_coroutines_through() -> None:
    async def fetch() -> str:
        return "fetched"

    assert await as_awaitable(fetch) == "fetched"


@pytest.mark.asyncio
async def test_as_awaitable_turns_sync_raise_into_failed_future() -> None:
    def broken() -> None:
        raise KeyError("missing")

    awaitable = as_awaitable(broken)

    with pytest.raises(KeyError):
        await awaitable
