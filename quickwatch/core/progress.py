"""
Highlight progress tracking.

Polls the player's playhead on a fixed interval, independently of the
controller's auto-advance, so the "current highlight" indicator follows
the user when they scrub the player by hand.
"""

from typing import Any, Callable, Optional, Sequence

from quickwatch.config import config
from quickwatch.core.player import PlayerHandle
from quickwatch.core.scheduler import Scheduler, TimerHandle
from quickwatch.core.segments import segment_start


def find_active_index(segments: Sequence[Any], current_time: float) -> int:
    """Index of the last segment starting at or before ``current_time``, -1 if none."""
    for index in range(len(segments) - 1, -1, -1):
        start = segment_start(segments[index])
        if start is not None and start <= current_time:
            return index
    return -1


class ProgressTracker:
    """
    Keep a highlighted index in sync with the player's playhead.

    Args:
        get_segments: Returns the current segment list
        get_player: Returns the player handle, or None before it is ready
        scheduler: Timer source for the poll
        interval_ms: Poll interval
        on_change: Called with the new index, only when it changes
    """

    def __init__(
        self,
        get_segments: Callable[[], Sequence[Any]],
        get_player: Callable[[], Optional[PlayerHandle]],
        scheduler: Scheduler,
        interval_ms: int = config.PROGRESS_POLL_MS,
        on_change: Optional[Callable[[int], None]] = None,
    ):
        self._get_segments = get_segments
        self._get_player = get_player
        self._scheduler = scheduler
        self.interval_ms = interval_ms
        self.on_change = on_change
        self.current_index = -1
        self._timer: Optional[TimerHandle] = None
        self._running = False

    @classmethod
    def for_controller(cls, controller, scheduler: Scheduler, **kwargs) -> "ProgressTracker":
        return cls(lambda: controller.segments, lambda: controller.player, scheduler, **kwargs)

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._schedule()

    def stop(self) -> None:
        """Cancel the poll. Must be called on teardown."""
        self._running = False
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def tick(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        player = self._get_player()
        if player is not None:
            index = find_active_index(self._get_segments(), player.get_current_time())
            if index != self.current_index:
                self.current_index = index
                if self.on_change is not None:
                    self.on_change(index)
        if self._running:
            self._schedule()

    def _schedule(self) -> None:
        self._timer = self._scheduler.call_later(self.interval_ms / 1000, self.tick)
