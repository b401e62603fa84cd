"""Unit tests for the SingleFlight coordinator."""

import asyncio

import pytest

from unheard.application.services import SingleFlight


class FakeClock:

    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.mark.asyncio
async def test_overlapping_calls_share_one_execution():
    flight: SingleFlight[int] = SingleFlight()
    calls = 0

    async def work() -> int:
        nonlocal calls
        calls += 1
        await asyncio.sleep(0.01)
        return 42

    results = await asyncio.gather(*(flight.do("k", work) for _ in range(5)))

    assert results == [42] * 5
    assert calls == 1


@pytest.mark.asyncio
async def test_without_ttl_next_call_runs_again():
    flight: SingleFlight[int] = SingleFlight()
    calls = 0

    async def work() -> int:
        nonlocal calls
        calls += 1
        return calls

    assert await flight.do("k", work) == 1
    await asyncio.sleep(0)
    assert await flight.do("k", work) == 2


@pytest.mark.asyncio
async def test_success_is_reused_until_ttl_expires():
    clock = FakeClock()
    flight: SingleFlight[str] = SingleFlight(ttl_seconds=30.0, clock=clock)
    calls = 0

    async def work() -> str:
        nonlocal calls
        calls += 1
        return f"session-{calls}"

    assert await flight.do("s", work) == "session-1"
    await asyncio.sleep(0)
    clock.now = 29.0
    assert await flight.do("s", work) == "session-1"
    clock.now = 30.0
    assert await flight.do("s", work) == "session-2"


@pytest.mark.asyncio
async def test_failures_are_not_cached():
    flight: SingleFlight[str] = SingleFlight(ttl_seconds=30.0, clock=FakeClock())
    attempts = 0

    async def work() -> str:
        nonlocal attempts
        attempts += 1
        if attempts == 1:
            raise RuntimeError("backend down")
        return "ok"

    with pytest.raises(RuntimeError):
        await flight.do("s", work)
    await asyncio.sleep(0)
    assert await flight.do("s", work) == "ok"


@pytest.mark.asyncio
async def test_failure_is_delivered_to_every_waiter():
    flight: SingleFlight[str] = SingleFlight()

    async def work() -> str:
        await asyncio.sleep(0.01)
        raise RuntimeError("nope")

    results = await asyncio.gather(
        flight.do("k", work), flight.do("k", work), return_exceptions=True
    )
    assert all(isinstance(r, RuntimeError) for r in results)


@pytest.mark.asyncio
async def test_distinct_keys_do_not_share():
    flight: SingleFlight[str] = SingleFlight()

    async def work(value: str) -> str:
        await asyncio.sleep(0)
        return value

    a, b = await asyncio.gather(
        flight.do("a", lambda: work("a")), flight.do("b", lambda: work("b"))
    )
    assert (a, b) == ("a", "b")


@pytest.mark.asyncio
async def test_forget_drops_cached_result():
    flight: SingleFlight[int] = SingleFlight(ttl_seconds=60.0, clock=FakeClock())
    calls = 0

    async def work() -> int:
        nonlocal calls
        calls += 1
        return calls

    await flight.do("k", work)
    await asyncio.sleep(0)
    flight.forget("k")
    assert await flight.do("k", work) == 2
