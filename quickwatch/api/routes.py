"""
API routes for the Quick Watch application.
"""

from fastapi import APIRouter, HTTPException, Query

from quickwatch.api.schemas import ProcessVideoRequest, ProcessVideoResponse, VideoIdResponse
from quickwatch.config import config
from quickwatch.main import process_video
from quickwatch.utils.error_handling import QuickWatchError
from quickwatch.utils.helpers import extract_video_id
from quickwatch.utils.logger import logging

router = APIRouter(prefix="/api/v1", tags=["quickwatch"])


@router.post("/process-video", response_model=ProcessVideoResponse)
async def process_video_route(request: ProcessVideoRequest):
    """
    Produce the quick watch of a YouTube video.

    - 400 if the video ID is missing or malformed
    - 404 if the video has no transcript
    - 500 if the transcript or LLM service fails
    """
    try:
        result = await process_video(request.video_id)
    except QuickWatchError as e:
        logging.error(f"Error processing video {request.video_id}: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return ProcessVideoResponse(
        video_id=result.video_id,
        title=result.title,
        author=result.author,
        transcript=result.transcript,
        summary=result.summary,
        key_moments=result.key_moments,
    )


@router.get("/video-id", response_model=VideoIdResponse)
async def parse_video_url(url: str = Query(..., description="YouTube video URL")):
    """Extract the video ID from a YouTube URL."""
    video_id = extract_video_id(url)
    return VideoIdResponse(url=url, video_id=video_id, valid=video_id is not None)


@router.get("/health")
async def health():
    """Report the service settings."""
    return {"status": "ok", **config.get_settings()}
