"""Secondary effect queue — fire-and-forget bookkeeping writes.

Denormalized counters, derived flags and other follow-up writes run here
after the primary write has already succeeded. They never block or fail
the caller: errors are logged and counted, and nothing is rolled back.
"""

import asyncio
from collections import Counter
from collections.abc import Awaitable, Callable
from typing import Any

from unheard.infrastructure.logging.engagement_logger import EngagementLogger, EngagementStage

log = EngagementLogger("SecondaryEffectQueue")


class SecondaryEffectQueue:
    """Runs best-effort effects as background asyncio tasks.

    Effects submitted with the same ``key`` run one at a time in
    submission order, so read-modify-write effects on the same record
    (e.g. a comment counter) do not interleave.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[None]] = set()
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: Counter[str] = Counter()
        self._succeeded: Counter[str] = Counter()
        self._failed: Counter[str] = Counter()

    def submit(
        self,
        name: str,
        effect: Callable[[], Awaitable[Any]],
        *,
        key: str | None = None,
    ) -> "asyncio.Task[None]":
        """Schedule ``effect`` and return immediately."""
        if key is not None:
            # Register the key now so ordering follows submission order.
            self._lock_users[key] += 1
            self._locks.setdefault(key, asyncio.Lock())
        task = asyncio.create_task(self._run(name, effect, key), name=f"secondary:{name}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait until every submitted effect (including ones they submit) has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def stats(self) -> dict[str, Any]:
        return {
            "pending": self.pending,
            "succeeded": dict(self._succeeded),
            "failed": dict(self._failed),
        }

    async def _run(self, name: str, effect: Callable[[], Awaitable[Any]], key: str | None) -> None:
        try:
            if key is None:
                await effect()
            else:
                async with self._locks[key]:
                    await effect()
        except asyncio.CancelledError:
            self._failed[name] += 1
            raise
        except Exception as exc:
            self._failed[name] += 1
            log.failure(EngagementStage.SECONDARY, f"Effect '{name}' not applied", error=exc, key=key)
        else:
            self._succeeded[name] += 1
            log.trace(EngagementStage.SECONDARY, f"Effect '{name}' applied", key=key)
        finally:
            if key is not None:
                self._release(key)

    def _release(self, key: str) -> None:
        self._lock_users[key] -= 1
        if self._lock_users[key] <= 0:
            del self._lock_users[key]
            self._locks.pop(key, None)
