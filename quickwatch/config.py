"""
Configuration settings for the Quick Watch application.
"""

import os
from typing import Dict, Any, List
from pathlib import Path
from dotenv import load_dotenv

from quickwatch.utils.logger import logging


# Ensure environment variables are loaded
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Base configuration class."""

    # Application info
    APP_NAME = "Quick Watch"
    APP_VERSION = "0.2.0"

    BASE_DIR = Path(__file__).resolve().parent.parent.absolute()

    # LLM provider and API keys
    LLM_PROVIDER = os.getenv("LLM_PROVIDER", "google_genai")
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
    GROQ_API_KEY = os.getenv("GROQ_API_KEY")

    # Default models
    DEFAULT_SUMMARY_MODEL = os.getenv("SUMMARY_MODEL", "gemini-2.0-flash")
    DEFAULT_HIGHLIGHT_MODEL = os.getenv("HIGHLIGHT_MODEL", DEFAULT_SUMMARY_MODEL)

    # "moments" returns timed key moments, "prune" returns transcript indices
    HIGHLIGHT_MODE = os.getenv("HIGHLIGHT_MODE", "moments")

    SUMMARY_MIN_WORDS = 150
    SUMMARY_MAX_WORDS = 200

    TRANSCRIPT_LANGUAGES: List[str] = [
        lang.strip() for lang in os.getenv("TRANSCRIPT_LANGUAGES", "en").split(",") if lang.strip()
    ]
    FETCH_VIDEO_INFO = _env_bool("FETCH_VIDEO_INFO", True)

    # Playback
    DEFAULT_SEGMENT_SECONDS = 30.0
    PROGRESS_POLL_MS = 500

    PUBLIC_URL = os.getenv("PUBLIC_URL", "http://localhost:8000")

    @classmethod
    def api_key_for(cls, provider: str):
        """Get the API key for an LLM provider."""
        if provider == "groq":
            return cls.GROQ_API_KEY
        return cls.GEMINI_API_KEY

    @classmethod
    def initialize(cls):
        """Initialize the application configuration."""
        # Validate required environment variables
        if not cls.api_key_for(cls.LLM_PROVIDER):
            logging.warning(
                f"No API key set for LLM provider '{cls.LLM_PROVIDER}'. "
                "Please set it in the .env file or environment variables."
            )

    @classmethod
    def get_settings(cls) -> Dict[str, Any]:
        """Get the non-secret settings."""
        return {
            "app_name": cls.APP_NAME,
            "version": cls.APP_VERSION,
            "llm_provider": cls.LLM_PROVIDER,
            "summary_model": cls.DEFAULT_SUMMARY_MODEL,
            "highlight_model": cls.DEFAULT_HIGHLIGHT_MODEL,
            "highlight_mode": cls.HIGHLIGHT_MODE,
            "transcript_languages": cls.TRANSCRIPT_LANGUAGES,
        }


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True
    LOG_LEVEL = "DEBUG"


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False
    LOG_LEVEL = "INFO"


# Determine which configuration to use based on environment
def get_config():
    """Get the appropriate configuration based on environment."""
    env = os.getenv("ENVIRONMENT", "development").lower()
    if env == "production":
        return ProductionConfig
    else:
        return DevelopmentConfig


# Create a config instance
config = get_config()
config.initialize()
