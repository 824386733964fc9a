"""
Data models for the Quick Watch application.
"""
from enum import Enum
from typing import Optional, List, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from quickwatch.config import config


class HighlightMode(str, Enum):
    """Output shapes of the highlight selector."""
    MOMENTS = "moments"
    PRUNE = "prune"


class TranscriptItem(BaseModel):
    """One timed caption line of a video transcript."""
    text: str
    start: float = Field(ge=0)
    duration: float = Field(default=0.0, ge=0)

    @property
    def end(self) -> float:
        return self.start + self.duration


class KeyMoment(BaseModel):
    """A time-bounded highlight picked by the LLM, with its rationale."""
    model_config = ConfigDict(populate_by_name=True)

    start_time: float = Field(alias="startTime", ge=0)
    end_time: Optional[float] = Field(default=None, alias="endTime")
    text: str = ""
    importance: Optional[str] = None

    @field_validator("importance", mode="before")
    @classmethod
    def stringify_importance(cls, v):
        # Models answer with either a score or a sentence
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @model_validator(mode="after")
    def check_end_time(self):
        if self.end_time is not None and self.end_time < self.start_time:
            raise ValueError("endTime must not be before startTime")
        return self


class TimeSegment(BaseModel):
    """Canonical playback window of a highlight, in seconds."""
    model_config = ConfigDict(frozen=True)

    start: float = Field(ge=0)
    end: float = Field(ge=0)

    @property
    def duration(self) -> float:
        return self.end - self.start


class SummaryConfig(BaseModel):
    """Configuration for summarization operations."""
    model: str = config.DEFAULT_SUMMARY_MODEL
    provider: str = config.LLM_PROVIDER
    temperature: float = 0.0
    max_tokens: int = 1024
    chunk_size: int = 12000
    chunk_overlap: int = 400
    min_words: int = config.SUMMARY_MIN_WORDS
    max_words: int = config.SUMMARY_MAX_WORDS


class HighlightConfig(BaseModel):
    """Configuration for highlight selection."""
    model: str = config.DEFAULT_HIGHLIGHT_MODEL
    provider: str = config.LLM_PROVIDER
    temperature: float = 0.0
    max_tokens: int = 2048
    mode: HighlightMode = HighlightMode(config.HIGHLIGHT_MODE)


class VideoInfo(BaseModel):
    """Display metadata of a YouTube video."""
    video_id: str
    title: Optional[str] = None
    author: Optional[str] = None


class QuickWatchResult(BaseModel):
    """Everything one quick-watch request produces."""
    video_id: str
    title: Optional[str] = None
    author: Optional[str] = None
    transcript: List[TranscriptItem]
    summary: str
    key_moments: Union[List[KeyMoment], List[int]] = Field(default_factory=list)
