"""
Module for fetching timed YouTube transcripts.
"""

from typing import List, Optional

from youtube_transcript_api import (
    YouTubeTranscriptApi,
    CouldNotRetrieveTranscript,
    NoTranscriptFound,
    TranscriptsDisabled,
)

from quickwatch.config import config
from quickwatch.models.schemas import TranscriptItem
from quickwatch.utils.error_handling import NotFoundError, UpstreamFailureError
from quickwatch.utils.helpers import clean_text
from quickwatch.utils.logger import logging


class TranscriptFetcher:
    """Class to handle transcript retrieval operations."""

    def __init__(self, languages: Optional[List[str]] = None):
        """
        Initialize the fetcher.

        Args:
            languages: Preferred caption languages, most preferred first
        """
        self.languages = languages or config.TRANSCRIPT_LANGUAGES
        self.api = YouTubeTranscriptApi()

    def fetch(self, video_id: str) -> List[TranscriptItem]:
        """
        Fetch the timed transcript of a video.

        Args:
            video_id: YouTube video ID

        Returns:
            Ordered list of transcript items

        Raises:
            NotFoundError: The video has no transcript
            UpstreamFailureError: The transcript service failed
        """
        logging.info(f"Fetching transcript for video: {video_id}")
        try:
            fetched = self.api.fetch(video_id, languages=self.languages)
        except (NoTranscriptFound, TranscriptsDisabled) as e:
            logging.warning(f"No transcript for video {video_id}: {e.__class__.__name__}")
            raise NotFoundError("Transcript not found for this video") from e
        except CouldNotRetrieveTranscript as e:
            logging.error(f"Error fetching transcript for {video_id}: {e.__class__.__name__}")
            raise UpstreamFailureError("Failed to fetch video transcript") from e

        items = []
        for snippet in fetched:
            text = getattr(snippet, "text", None)
            if not isinstance(text, str):
                continue
            items.append(TranscriptItem(
                text=clean_text(text),
                start=max(0.0, float(snippet.start)),
                duration=max(0.0, float(snippet.duration)),
            ))

        logging.info(f"Fetched {len(items)} transcript segments for video {video_id}")
        return items


def full_text(transcript: List[TranscriptItem]) -> str:
    """Join the transcript lines into one text."""
    return " ".join(item.text for item in transcript)
