"""
Key-moment playback controller.

Plays a list of highlight segments back to back on an embedded player:
seek to a segment, play it, wait for its window to elapse, advance. The
sequence is a small state machine::

    IDLE --start--> PLAYING(i) --pause--> PAUSED(i, remaining_ms)
      ^                |  ^                   |
      |                |  +------resume-------+
      +----stop / past the last segment-------+

All transitions run on one event-driven timeline (user commands and timer
expiry). There is a single armed-timer field; every transition cancels it
before arming a new one, and each timer carries a generation token so a
callback that was already queued when it got cancelled is ignored.

Commands issued in a state where they make no sense are silent no-ops,
because they are often fired from timer callbacks racing user actions.
Malformed segments are logged and skipped.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence

from quickwatch.config import config
from quickwatch.core.player import DEFAULT_PLAYER_ID, PlayerHandle, PlayerRegistry
from quickwatch.core.scheduler import AsyncioScheduler, Scheduler, TimerHandle
from quickwatch.core.segments import normalize_segment, segment_end, segment_start
from quickwatch.utils.logger import logging


class PlaybackStatus(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"


@dataclass(frozen=True)
class PlaybackState:
    """Where the highlight reel is; ``index`` is -1 while idle."""
    status: PlaybackStatus = PlaybackStatus.IDLE
    index: int = -1
    remaining_ms: float = 0.0

    @classmethod
    def idle(cls) -> "PlaybackState":
        return cls()

    @classmethod
    def playing(cls, index: int) -> "PlaybackState":
        return cls(PlaybackStatus.PLAYING, index)

    @classmethod
    def paused(cls, index: int, remaining_ms: float) -> "PlaybackState":
        return cls(PlaybackStatus.PAUSED, index, remaining_ms)

    @property
    def is_idle(self) -> bool:
        return self.status == PlaybackStatus.IDLE

    @property
    def is_playing(self) -> bool:
        return self.status == PlaybackStatus.PLAYING

    @property
    def is_paused(self) -> bool:
        return self.status == PlaybackStatus.PAUSED


class PlaybackController:
    """
    Sequences highlight segments on a borrowed player handle.

    Args:
        segments: Ordered raw segments, ``{start, duration}`` or
            ``{startTime, endTime}`` shaped
        scheduler: Timer source, an asyncio-backed one by default
        registry: Registry the player is published to once ready
        player_id: Id of this player in the registry
        default_seconds: Window length for segments without an end
        on_state_change: Called with the new state after each transition
    """

    def __init__(
        self,
        segments: Sequence[Any] = (),
        scheduler: Optional[Scheduler] = None,
        registry: Optional[PlayerRegistry] = None,
        player_id: str = DEFAULT_PLAYER_ID,
        default_seconds: float = config.DEFAULT_SEGMENT_SECONDS,
        on_state_change: Optional[Callable[[PlaybackState], None]] = None,
    ):
        self._segments: List[Any] = list(segments)
        self._scheduler = scheduler or AsyncioScheduler()
        self._registry = registry
        self.player_id = player_id
        self.default_seconds = default_seconds
        self.on_state_change = on_state_change

        self._player: Optional[PlayerHandle] = None
        self._state = PlaybackState.idle()
        self._timer: Optional[TimerHandle] = None
        self._timer_token = 0

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def segments(self) -> List[Any]:
        return list(self._segments)

    @property
    def player(self) -> Optional[PlayerHandle]:
        return self._player

    @property
    def is_ready(self) -> bool:
        return self._player is not None

    @property
    def has_armed_timer(self) -> bool:
        return self._timer is not None

    def on_ready(self, handle: PlayerHandle) -> None:
        """Take the player handle once the embed signals it is ready."""
        self._player = handle
        if self._registry is not None:
            self._registry.register(handle, self.player_id)

    def segment_end(self, index: int) -> Optional[float]:
        return segment_end(self._segments, index, self.default_seconds)

    def set_segments(self, segments: Sequence[Any]) -> None:
        """Replace the highlight list, stopping any reel in progress."""
        if not self._state.is_idle:
            self.stop()
        self._segments = list(segments)

    # Commands

    def start(self) -> None:
        """Play the highlight reel from the first segment."""
        if not self.is_ready:
            logging.debug("start() ignored: player not ready")
            return
        if not self._state.is_idle or not self._segments:
            return
        self._play_from(0)

    def toggle(self) -> None:
        """Single-button control: pause when playing, resume when paused, start when idle."""
        if self._state.is_playing:
            self.pause()
        elif self._state.is_paused:
            self.resume()
        else:
            self.start()

    def pause(self) -> None:
        if not self.is_ready or not self._state.is_playing:
            return
        self._cancel_timer()

        index = self._state.index
        end = self.segment_end(index)
        remaining_ms = max(0.0, end - self._player.get_current_time()) * 1000
        self._player.pause_video()
        self._set_state(PlaybackState.paused(index, remaining_ms))

    def resume(self) -> None:
        if not self.is_ready or not self._state.is_paused:
            return
        self._cancel_timer()

        index, remaining_ms = self._state.index, self._state.remaining_ms
        self._player.play_video()
        self._set_state(PlaybackState.playing(index))
        self._arm_timer(remaining_ms / 1000)

    def stop(self) -> None:
        """Stop the reel from any state."""
        self._cancel_timer()
        if self._player is not None:
            self._player.pause_video()
        self._set_state(PlaybackState.idle())

    def skip_to_next(self) -> Optional[int]:
        """
        Jump the playhead to the next highlight after the current time.

        Wraps to the first highlight when the playhead is past the last
        one. Playing/paused state and the armed timer are left alone.

        Returns:
            Index jumped to, or None if there was nowhere to go
        """
        if not self.is_ready:
            return None

        current_time = self._player.get_current_time()
        starts = [segment_start(segment) for segment in self._segments]
        target = next(
            (i for i, start in enumerate(starts) if start is not None and start > current_time),
            None,
        )
        if target is None:
            target = next((i for i, start in enumerate(starts) if start is not None), None)
        if target is None:
            return None

        self._player.seek_to(starts[target], True)
        return target

    def teardown(self) -> None:
        """Cancel every timer and release the player; the view is going away."""
        self._cancel_timer()
        self._set_state(PlaybackState.idle())
        if self._registry is not None and self._player is not None:
            self._registry.unregister(self.player_id, self._player)
        self._player = None

    # Transitions

    def _play_from(self, index: int) -> None:
        self._cancel_timer()

        while index < len(self._segments):
            segment = normalize_segment(self._segments[index], self.default_seconds)
            if segment is not None:
                break
            logging.warning(f"Invalid segment format at index {index}: {self._segments[index]!r}")
            index += 1
        else:
            self.stop()
            return

        end = self.segment_end(index)
        self._player.seek_to(segment.start, True)
        self._player.play_video()
        self._set_state(PlaybackState.playing(index))
        self._arm_timer(max(0.0, end - segment.start))

    def _on_timer(self, token: int) -> None:
        if token != self._timer_token or not self._state.is_playing:
            logging.debug(f"Ignoring stale playback timer {token}")
            return
        self._timer = None
        self._play_from(self._state.index + 1)

    def _arm_timer(self, delay: float) -> None:
        self._timer_token += 1
        token = self._timer_token
        self._timer = self._scheduler.call_later(delay, lambda: self._on_timer(token))

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._timer_token += 1

    def _set_state(self, state: PlaybackState) -> None:
        if state == self._state:
            return
        self._state = state
        if self.on_state_change is not None:
            self.on_state_change(state)
