"""
Timer sources for the playback controller.

The controller only needs ``call_later(delay, callback)`` returning a
handle with ``cancel()``. ``AsyncioScheduler`` runs on an asyncio event
loop; ``PolledScheduler`` is driven by its host calling ``run_due()``,
which suits rerun-based UIs and deterministic tests. Both cancel
synchronously: a cancelled callback never runs.
"""

import asyncio
import heapq
import itertools
import time
from typing import Callable, List, Optional, Protocol, Tuple


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioScheduler:
    """Schedule callbacks on an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(max(0.0, delay), callback)


class PolledTimer:
    """Pending callback of a ``PolledScheduler``."""

    def __init__(self, deadline: float, callback: Callable[[], None]):
        self.deadline = deadline
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class PolledScheduler:
    """
    Scheduler whose timers fire when the host polls it.

    Args:
        clock: Monotonic clock in seconds
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._queue: List[Tuple[float, int, PolledTimer]] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> PolledTimer:
        timer = PolledTimer(self.clock() + max(0.0, delay), callback)
        heapq.heappush(self._queue, (timer.deadline, next(self._counter), timer))
        return timer

    def run_due(self) -> int:
        """
        Fire every timer whose deadline has passed, earliest first.

        Timers armed by a callback run in the same pass if they are
        already due.

        Returns:
            Number of callbacks run
        """
        now = self.clock()
        fired = 0
        while self._queue and self._queue[0][0] <= now:
            _, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            timer.callback()
            fired += 1
        return fired

    def cancel_all(self) -> None:
        for _, _, timer in self._queue:
            timer.cancel()
        self._queue.clear()

    @property
    def pending(self) -> int:
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    def next_deadline(self) -> Optional[float]:
        for deadline, _, timer in sorted(self._queue):
            if not timer.cancelled:
                return deadline
        return None
