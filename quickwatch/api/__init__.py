"""HTTP API for the Quick Watch application."""
