"""
Core functionality for the Quick Watch application.

This package contains the transcript source, the LLM-backed summary and
highlight collaborators, and the key-moment playback controller.
"""
