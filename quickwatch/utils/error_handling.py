"""
Centralized error handling for the application.

Collaborator failures are surfaced to the caller as one of three errors,
each carrying the HTTP-like status the API answers with. Nothing here is
retried.
"""

import json
from typing import Dict, Any

from quickwatch.config import config
from quickwatch.utils.logger import logging


class QuickWatchError(Exception):
    """Base error for failures surfaced to the caller."""

    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidInputError(QuickWatchError):
    """Missing or malformed video id or URL."""

    status_code = 400


class NotFoundError(QuickWatchError):
    """The video has no transcript."""

    status_code = 404


class UpstreamFailureError(QuickWatchError):
    """The transcript or LLM service failed, or returned unusable content."""

    status_code = 500


def log_diagnostic_info(context: Dict[str, Any]):
    """
    Log diagnostic information for debugging.

    Args:
        context: Dictionary of diagnostic information
    """
    if not config.DEBUG:
        return

    try:
        logging.info(f"Diagnostic info: {json.dumps(context, default=str)}")
    except (TypeError, ValueError) as e:
        logging.error(f"Error logging diagnostic info: {str(e)}")
