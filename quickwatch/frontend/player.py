"""
Player handle over a re-rendered YouTube embed.

Streamlit cannot call into the IFrame player API, so this handle keeps the
player's state itself: the playhead is the last seek position plus the
wall-clock time spent playing since. Each command bumps ``revision`` and
the view re-renders the embed (start offset and autoplay) when it changes.
The start offset is frozen at each command so the markup stays stable
between commands.
"""

import time
from typing import Callable

from quickwatch.core.player import PlayerState


class EmbedPlayerHandle:
    """
    ``PlayerHandle`` for an embed that is re-rendered on every command.

    Args:
        video_id: YouTube video ID
        duration: Video length in seconds, 0 when unknown
        clock: Monotonic clock in seconds
    """

    def __init__(self, video_id: str, duration: float = 0.0, clock: Callable[[], float] = time.monotonic):
        self.video_id = video_id
        self.duration = max(0.0, duration)
        self.clock = clock
        self.revision = 0
        # Playhead at the last command; the embed starts from here
        self.start_offset = 0.0
        self._position = 0.0
        self._playing_since = None
        self._state = PlayerState.CUED

    def _clamp(self, seconds: float) -> float:
        seconds = max(0.0, seconds)
        if self.duration:
            seconds = min(seconds, self.duration)
        return seconds

    def seek_to(self, seconds: float, allow_seek_ahead: bool = True) -> None:
        self._position = self._clamp(seconds)
        if self._playing_since is not None:
            self._playing_since = self.clock()
        self.start_offset = self._position
        self.revision += 1

    def play_video(self) -> None:
        if self._playing_since is None:
            self.start_offset = self._position
            self._playing_since = self.clock()
            self._state = PlayerState.PLAYING
            self.revision += 1

    def pause_video(self) -> None:
        if self._playing_since is not None:
            self._position = self.get_current_time()
            self.start_offset = self._position
            self._playing_since = None
            self._state = PlayerState.PAUSED
            self.revision += 1

    def get_current_time(self) -> float:
        if self._playing_since is None:
            return self._position
        return self._clamp(self._position + self.clock() - self._playing_since)

    def get_duration(self) -> float:
        return self.duration

    def get_player_state(self) -> PlayerState:
        if self._state == PlayerState.PLAYING and self.duration and self.get_current_time() >= self.duration:
            return PlayerState.ENDED
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._playing_since is not None

    @property
    def watch_url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.video_id}"
