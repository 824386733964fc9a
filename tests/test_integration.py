"""
Integration tests for the Quick Watch pipeline.
"""

import asyncio
from unittest.mock import MagicMock

import pytest

from quickwatch.core.segments import highlight_segments
from quickwatch.main import process_video
from quickwatch.models.schemas import (
    HighlightConfig,
    HighlightMode,
    KeyMoment,
    QuickWatchResult,
    VideoInfo,
)
from quickwatch.utils.error_handling import InvalidInputError, NotFoundError, UpstreamFailureError


@pytest.fixture
def collaborators(transcript):
    """Mocked transcript fetcher, summarizer and highlight selector."""
    fetcher = MagicMock()
    fetcher.fetch.return_value = transcript

    summarizer = MagicMock()
    summarizer.summarize_transcript.return_value = "A short video about fusion."

    selector = MagicMock()
    selector.select.return_value = [
        KeyMoment(start_time=4, end_time=10, text="Fusion intro", importance="Sets the topic"),
    ]
    return {"fetcher": fetcher, "summarizer": summarizer, "selector": selector}


def run(video, **kwargs):
    return asyncio.run(process_video(video, **kwargs))


def test_process_video_with_key_moments(collaborators, transcript, test_video_url):
    result = run(test_video_url, **collaborators)

    assert isinstance(result, QuickWatchResult)
    assert result.video_id == "dQw4w9WgXcQ"
    assert result.transcript == transcript
    assert result.summary == "A short video about fusion."
    assert result.key_moments == [
        KeyMoment(start_time=4, end_time=10, text="Fusion intro", importance="Sets the topic"),
    ]
    assert result.title is None

    collaborators["fetcher"].fetch.assert_called_once_with("dQw4w9WgXcQ")
    collaborators["summarizer"].summarize_transcript.assert_called_once()
    collaborators["selector"].select.assert_called_once()


def test_process_video_with_pruned_indices(collaborators, transcript):
    collaborators["selector"].select.return_value = [1, 2]
    highlight_config = HighlightConfig(mode=HighlightMode.PRUNE)

    result = run("dQw4w9WgXcQ", highlight_config=highlight_config, **collaborators)

    assert result.key_moments == [1, 2]
    assert collaborators["selector"].select.call_args[0][1] is highlight_config
    assert highlight_segments(result.key_moments, result.transcript) == [
        {"start": 4.0, "duration": 6.0},
        {"start": 10.0, "duration": 5.0},
    ]


def test_process_video_with_metadata(collaborators):
    info_fetcher = MagicMock()
    info_fetcher.get_video_info.return_value = VideoInfo(
        video_id="dQw4w9WgXcQ", title="Fusion 101", author="Science Channel"
    )

    result = run("https://youtu.be/dQw4w9WgXcQ", info_fetcher=info_fetcher, **collaborators)

    assert result.title == "Fusion 101"
    assert result.author == "Science Channel"
    info_fetcher.get_video_info.assert_called_once_with("dQw4w9WgXcQ")


@pytest.mark.parametrize("video", [None, ""])
def test_missing_video_id(collaborators, video):
    with pytest.raises(InvalidInputError) as exc_info:
        run(video, **collaborators)

    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Video ID is required"
    collaborators["fetcher"].fetch.assert_not_called()


def test_invalid_video_id(collaborators):
    with pytest.raises(InvalidInputError) as exc_info:
        run("https://example.com/not-a-video", **collaborators)

    assert exc_info.value.message == "Invalid YouTube video ID or URL"


def test_empty_transcript_is_not_found(collaborators):
    collaborators["fetcher"].fetch.return_value = []

    with pytest.raises(NotFoundError):
        run("dQw4w9WgXcQ", **collaborators)

    collaborators["summarizer"].summarize_transcript.assert_not_called()


def test_transcript_errors_propagate(collaborators):
    collaborators["fetcher"].fetch.side_effect = NotFoundError("Transcript not found for this video")

    with pytest.raises(NotFoundError):
        run("dQw4w9WgXcQ", **collaborators)


def test_summarizer_failure(collaborators):
    collaborators["summarizer"].summarize_transcript.side_effect = UpstreamFailureError(
        "Failed to summarize transcript"
    )

    with pytest.raises(UpstreamFailureError) as exc_info:
        run("dQw4w9WgXcQ", **collaborators)

    assert exc_info.value.message == "Failed to summarize transcript"


def test_unexpected_error_becomes_upstream_failure(collaborators):
    collaborators["selector"].select.side_effect = RuntimeError("connection reset")

    with pytest.raises(UpstreamFailureError) as exc_info:
        run("dQw4w9WgXcQ", **collaborators)

    assert exc_info.value.status_code == 500
    assert "connection reset" in exc_info.value.message
