"""
The embedded video player as seen by the playback controller.

The player handle is borrowed, never owned: the embedding widget hands it
over once its ready signal fires. Decoupled UI elements reach it through a
``PlayerRegistry`` keyed by player id instead of a page-wide global.
"""

from enum import IntEnum
from typing import Dict, Optional, Protocol, runtime_checkable

from quickwatch.utils.logger import logging


DEFAULT_PLAYER_ID = "main"


class PlayerState(IntEnum):
    """YouTube IFrame player states."""
    UNSTARTED = -1
    ENDED = 0
    PLAYING = 1
    PAUSED = 2
    BUFFERING = 3
    CUED = 5


@runtime_checkable
class PlayerHandle(Protocol):
    """Capabilities of an embedded YouTube player."""

    def seek_to(self, seconds: float, allow_seek_ahead: bool = True) -> None: ...

    def play_video(self) -> None: ...

    def pause_video(self) -> None: ...

    def get_current_time(self) -> float: ...

    def get_duration(self) -> float: ...

    def get_player_state(self) -> PlayerState: ...


class PlayerRegistry:
    """Ready player handles of one page, keyed by player id."""

    def __init__(self):
        self._players: Dict[str, PlayerHandle] = {}

    def register(self, handle: PlayerHandle, player_id: str = DEFAULT_PLAYER_ID) -> None:
        """Make a ready player reachable under ``player_id``."""
        self._players[player_id] = handle
        logging.debug(f"Player '{player_id}' registered")

    def unregister(self, player_id: str = DEFAULT_PLAYER_ID, handle: Optional[PlayerHandle] = None) -> None:
        """
        Forget a player.

        When ``handle`` is given the entry is only removed if it still
        points at that handle, so a torn-down view cannot evict its
        replacement.
        """
        current = self._players.get(player_id)
        if current is None:
            return
        if handle is not None and current is not handle:
            return
        del self._players[player_id]
        logging.debug(f"Player '{player_id}' unregistered")

    def get(self, player_id: str = DEFAULT_PLAYER_ID) -> Optional[PlayerHandle]:
        return self._players.get(player_id)

    def seek_and_play(self, seconds: float, player_id: str = DEFAULT_PLAYER_ID) -> bool:
        """
        Jump a player to ``seconds`` and start it.

        Returns:
            False if no player with that id is ready
        """
        handle = self.get(player_id)
        if handle is None:
            logging.error(f"YouTube player '{player_id}' not available")
            return False
        handle.seek_to(seconds, True)
        handle.play_video()
        return True

    def __contains__(self, player_id: str) -> bool:
        return player_id in self._players

    def __len__(self) -> int:
        return len(self._players)
