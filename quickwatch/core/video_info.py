"""
YouTube video metadata lookup.
"""

from pytubefix import YouTube

from quickwatch.models.schemas import VideoInfo
from quickwatch.utils.logger import logging


class VideoInfoFetcher:
    """Class to look up display metadata of YouTube videos."""

    def get_video_info(self, video_id: str) -> VideoInfo:
        """
        Extract title and author of a video.

        The lookup is best effort: on failure the metadata fields stay empty
        and the quick watch goes ahead without them.

        Args:
            video_id: YouTube video ID

        Returns:
            VideoInfo object
        """
        try:
            yt = YouTube(f"https://www.youtube.com/watch?v={video_id}")
            return VideoInfo(video_id=video_id, title=yt.title, author=yt.author)
        except Exception as e:
            logging.warning(f"Could not fetch metadata for video {video_id}: {str(e)}")
            return VideoInfo(video_id=video_id)
