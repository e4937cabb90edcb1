"""Fixed-interval scheduler driving the evaluation cycles."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from .errors import FatalError

logger = logging.getLogger(__name__)

Cycle = Callable[[], Awaitable[object]]


class Scheduler:
    """Runs one cycle per tick until the stop event is set.

    The first tick fires immediately. Later ticks follow a fixed wall-clock
    cadence; ticks missed while a cycle overran are skipped rather than
    queued, so cycles never overlap.
    """

    def __init__(
        self,
        interval: float,
        stop_event: Optional[asyncio.Event] = None,
        log: Optional[logging.Logger] = None,
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self.stop_event = stop_event or asyncio.Event()
        self.logger = log or logger
        self.cycles_run = 0
        self.cycles_failed = 0

    def stop(self) -> None:
        """Request the loop to exit after the current cycle."""
        self.stop_event.set()

    @property
    def stopped(self) -> bool:
        return self.stop_event.is_set()

    async def tick(self, cycle: Cycle) -> bool:
        """Run a single cycle, isolating its failures.

        Returns:
            True if the cycle completed without raising.

        Raises:
            FatalError: Propagated unchanged, everything else is logged.
        """
        self.cycles_run += 1
        try:
            await cycle()
            return True
        except FatalError:
            raise
        except Exception as e:
            self.cycles_failed += 1
            self.logger.exception(f"Error in control loop: {e}")
            return False

    async def _wait_next_tick(self, next_tick: float) -> float:
        loop = asyncio.get_running_loop()
        now = loop.time()
        # Skip ticks that elapsed while the last cycle was running
        while next_tick <= now:
            next_tick += self.interval
        try:
            await asyncio.wait_for(self.stop_event.wait(), timeout=next_tick - now)
        except asyncio.TimeoutError:
            pass
        return next_tick

    async def run(self, cycle: Cycle) -> None:
        """Run cycles forever, or until stop() is called."""
        self.logger.debug(f"Entering control loop (interval={self.interval:g}s)")
        next_tick = asyncio.get_running_loop().time()

        while not self.stopped:
            await self.tick(cycle)
            if self.stopped:
                break
            next_tick = await self._wait_next_tick(next_tick)

        self.logger.info("Control loop stopped")
