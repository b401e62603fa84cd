"""Single-flight coordinator — concurrent callers for the same key share one call."""

import asyncio
import time
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class _Flight(Generic[T]):
    task: "asyncio.Task[T]"
    settled_at: float | None = None


class SingleFlight(Generic[T]):
    """Coalesces overlapping calls per key into one in-flight task.

    With ``ttl_seconds > 0`` a successful result keeps being handed out
    until it is that old; with the default of 0 it is dropped as soon as
    the call settles. Failed or cancelled calls are never cached, so the
    next caller starts a fresh attempt.
    """

    def __init__(
        self,
        ttl_seconds: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._lock = asyncio.Lock()
        self._flights: dict[Hashable, _Flight[T]] = {}

    async def do(self, key: Hashable, fn: Callable[[], Awaitable[T]]) -> T:
        async with self._lock:
            flight = self._flights.get(key)
            if flight is None or self._expired(flight):
                flight = _Flight(task=asyncio.ensure_future(fn()))
                self._flights[key] = flight
                flight.task.add_done_callback(
                    lambda _task, k=key, f=flight: self._settle(k, f)
                )
        # Shield so one caller's cancellation does not cancel everyone's call.
        return await asyncio.shield(flight.task)

    def forget(self, key: Hashable) -> None:
        """Drop any cached or in-flight entry for ``key``."""
        self._flights.pop(key, None)

    def _expired(self, flight: _Flight[T]) -> bool:
        if flight.settled_at is None:
            return False
        return self._clock() - flight.settled_at >= self._ttl

    def _settle(self, key: Hashable, flight: _Flight[T]) -> None:
        if self._flights.get(key) is not flight:
            return
        task = flight.task
        if task.cancelled() or task.exception() is not None or self._ttl <= 0:
            del self._flights[key]
        else:
            flight.settled_at = self._clock()
