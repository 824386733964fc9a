"""Data models for the Quick Watch application."""
