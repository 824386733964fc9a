"""
Quick Watch: condensed YouTube viewing.

Paste a YouTube URL and get the transcript, an LLM-generated summary and a
ranked set of key moments that can be auto-played as a highlight reel.
"""

from quickwatch.config import config

__version__ = config.APP_VERSION
