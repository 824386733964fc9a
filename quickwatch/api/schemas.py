from typing import Optional, List, Union
from pydantic import BaseModel, ConfigDict, Field

from quickwatch.models.schemas import TranscriptItem, KeyMoment


class ProcessVideoRequest(BaseModel):
    """Model for requesting a quick watch of a video."""
    model_config = ConfigDict(populate_by_name=True)

    # Optional so a missing id is answered with 400 rather than 422
    video_id: Optional[str] = Field(default=None, alias="videoId")


class ProcessVideoResponse(BaseModel):
    """Model for quick watch responses."""
    model_config = ConfigDict(populate_by_name=True)

    video_id: str = Field(alias="videoId")
    title: Optional[str] = None
    author: Optional[str] = None
    transcript: List[TranscriptItem]
    summary: str
    key_moments: Union[List[KeyMoment], List[int]] = Field(default_factory=list, alias="keyMoments")


class VideoIdResponse(BaseModel):
    """Model for URL parsing responses."""
    model_config = ConfigDict(populate_by_name=True)

    url: str
    video_id: Optional[str] = Field(default=None, alias="videoId")
    valid: bool
