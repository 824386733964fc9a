"""
Configuration for pytest tests.
"""

import os

# Set before quickwatch.config is imported so the class attributes pick them up
os.environ["ENVIRONMENT"] = "development"
os.environ["LLM_PROVIDER"] = "google_genai"
os.environ["HIGHLIGHT_MODE"] = "moments"
os.environ["FETCH_VIDEO_INFO"] = "false"
os.environ.setdefault("GOOGLE_API_KEY", "test_api_key")

import pytest

from quickwatch.core.player import PlayerState
from quickwatch.core.scheduler import PolledScheduler
from quickwatch.models.schemas import TranscriptItem


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class FakePlayer:
    """Player handle recording every command, with a playhead driven by a clock."""

    def __init__(self, clock, duration: float = 600.0):
        self.clock = clock
        self.duration = duration
        self.calls = []
        self.position = 0.0
        self.playing_since = None

    def seek_to(self, seconds, allow_seek_ahead=True):
        self.calls.append(("seek", seconds, allow_seek_ahead))
        self.position = seconds
        if self.playing_since is not None:
            self.playing_since = self.clock()

    def play_video(self):
        self.calls.append(("play",))
        if self.playing_since is None:
            self.playing_since = self.clock()

    def pause_video(self):
        self.calls.append(("pause",))
        if self.playing_since is not None:
            self.position = self.get_current_time()
            self.playing_since = None

    def get_current_time(self):
        if self.playing_since is None:
            return self.position
        return self.position + self.clock() - self.playing_since

    def get_duration(self):
        return self.duration

    def get_player_state(self):
        return PlayerState.PLAYING if self.playing_since is not None else PlayerState.PAUSED

    def scrub(self, seconds):
        """Move the playhead the way a user dragging the seek bar would, unrecorded."""
        self.position = seconds
        if self.playing_since is not None:
            self.playing_since = self.clock()


class Timeline:
    """Fake clock, polled scheduler and player sharing one time axis."""

    def __init__(self):
        self.clock = FakeClock()
        self.scheduler = PolledScheduler(clock=self.clock)
        self.player = FakePlayer(self.clock)

    def advance(self, seconds: float):
        """Move time forward, firing every timer that falls due on the way, in order."""
        target = self.clock.now + seconds
        while True:
            deadline = self.scheduler.next_deadline()
            if deadline is None or deadline > target:
                break
            self.clock.now = max(self.clock.now, deadline)
            self.scheduler.run_due()
        self.clock.now = target


@pytest.fixture
def timeline():
    return Timeline()


@pytest.fixture
def transcript():
    """A short timed transcript."""
    return [
        TranscriptItem(text="Welcome to the video.", start=0.0, duration=4.0),
        TranscriptItem(text="Today we look at fusion.", start=4.0, duration=6.0),
        TranscriptItem(text="Fusion powers the sun.", start=10.0, duration=5.0),
        TranscriptItem(text="Thanks for watching.", start=15.0, duration=3.0),
    ]


@pytest.fixture(scope="session")
def test_video_url():
    """Return a test YouTube video URL."""
    return "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


@pytest.fixture
def fake_player_cls():
    return FakePlayer


@pytest.fixture
def fake_clock():
    return FakeClock()
