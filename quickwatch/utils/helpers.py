"""
Helper utility functions for the Quick Watch application.
"""

import html
import re
from typing import Optional
from urllib.parse import urlparse


# watch?v=, youtu.be/, embed/, v/ and /u/<x>/ shapes; the id is the
# 11 characters after the marker.
_VIDEO_ID_PATTERN = re.compile(
    r"^.*((youtu\.be\/)|(v\/)|(\/u\/\w\/)|(embed\/)|(watch\?))\??v?=?([^#&?]*).*"
)
_BARE_ID_PATTERN = re.compile(r"^[0-9A-Za-z_-]{11}$")
_YOUTUBE_HOSTS = {"youtube.com", "www.youtube.com", "m.youtube.com", "youtu.be"}


def extract_video_id(url: Optional[str]) -> Optional[str]:
    """
    Extract the 11-character video ID from a YouTube URL.

    A bare video ID is accepted as-is. URLs on any other host are rejected.

    Args:
        url: YouTube URL or video ID

    Returns:
        Video ID or None if no valid ID is found
    """
    if not url or not isinstance(url, str):
        return None

    candidate = url.strip()
    if _BARE_ID_PATTERN.match(candidate):
        return candidate

    try:
        hostname = urlparse(candidate if "://" in candidate else f"https://{candidate}").hostname
    except ValueError:
        return None
    if hostname not in _YOUTUBE_HOSTS:
        return None

    match = _VIDEO_ID_PATTERN.match(candidate)
    if match and _BARE_ID_PATTERN.match(match.group(7)):
        return match.group(7)

    return None


def format_time(seconds: float) -> str:
    """
    Format a number of seconds as m:ss.

    Args:
        seconds: Time in seconds

    Returns:
        Formatted time string
    """
    seconds = max(0, int(seconds))
    minutes, remaining_seconds = divmod(seconds, 60)
    return f"{minutes}:{remaining_seconds:02d}"


def clean_text(text: str) -> str:
    """Unescape HTML entities left in caption text, including double-escaped ones."""
    text = text.replace("&amp;#39;", "'")
    text = html.unescape(text)
    return re.sub(r"\s+", " ", text).strip()


def truncate_text(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """
    Truncate text to a maximum length.

    Args:
        text: Text to truncate
        max_length: Maximum length
        suffix: Suffix to add if truncated

    Returns:
        Truncated text
    """
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)] + suffix
