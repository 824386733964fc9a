"""
API client for communicating with the Quick Watch backend.
"""

import requests
from typing import Dict, Any
from urllib.parse import urljoin

from quickwatch.config import config


class ApiError(Exception):
    """Error response from the API, with its status and message."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ApiClient:
    """Client for interacting with the Quick Watch API."""

    def __init__(self, base_url: str = config.PUBLIC_URL, timeout: float = 300):
        """
        Initialize the API client.

        Args:
            base_url: Base URL of the API
            timeout: Request timeout in seconds
        """
        self.base_url = base_url
        self.api_base = urljoin(base_url, "/api/v1/")
        self.timeout = timeout

    def _url(self, endpoint: str) -> str:
        """Get the full URL for an endpoint."""
        return urljoin(self.api_base, endpoint)

    def process_video(self, video_id: str) -> Dict[str, Any]:
        """
        Request the quick watch of a video.

        Args:
            video_id: YouTube video ID

        Returns:
            Dictionary with transcript, summary and keyMoments

        Raises:
            ApiError: The API answered with an error status
        """
        response = requests.post(
            self._url("process-video"),
            json={"videoId": video_id},
            timeout=self.timeout,
        )

        if not response.ok:
            try:
                message = response.json().get("detail", response.reason)
            except ValueError:
                message = response.reason
            raise ApiError(response.status_code, message)

        return response.json()
