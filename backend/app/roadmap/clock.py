"""Injectable clock and delay used by sessions and generators."""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import UTC, date, datetime, timedelta
from typing import Protocol

Delay = Callable[[], Awaitable[None]]


class Clock(Protocol):
    """Source of wall-clock time."""

    def now(self) -> datetime:
        """Current timezone-aware timestamp."""
        ...

    def today(self) -> date:
        """Current calendar date."""
        ...


class SystemClock:
    """Clock backed by the system time (UTC)."""

    def now(self) -> datetime:
        return datetime.now(UTC)

    def today(self) -> date:
        return self.now().date()


class FixedClock:
    """Deterministic clock for tests; advance with ``tick``."""

    def __init__(self, start: datetime) -> None:
        self._now = start

    def now(self) -> datetime:
        return self._now

    def today(self) -> date:
        return self._now.date()

    def tick(self, seconds: float = 1.0) -> None:
        self._now = self._now + timedelta(seconds=seconds)


async def no_delay() -> None:
    """Delay that only yields control to the event loop."""
    await asyncio.sleep(0)


def simulated_delay(latency_ms: int) -> Delay:
    """Build a delay that sleeps for a fixed simulated latency."""

    async def _delay() -> None:
        await asyncio.sleep(latency_ms / 1000.0)

    return _delay
