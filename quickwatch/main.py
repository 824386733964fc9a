"""
Main entry point for the Quick Watch application.
"""

import argparse
import asyncio
from typing import Optional

from dotenv import load_dotenv

from quickwatch.config import config
from quickwatch.core.highlights import HighlightSelector
from quickwatch.core.summarizer import TranscriptSummarizer
from quickwatch.core.transcript import TranscriptFetcher
from quickwatch.core.video_info import VideoInfoFetcher
from quickwatch.models.schemas import (
    HighlightConfig,
    KeyMoment,
    QuickWatchResult,
    SummaryConfig,
    VideoInfo,
)
from quickwatch.utils.error_handling import (
    InvalidInputError,
    NotFoundError,
    QuickWatchError,
    UpstreamFailureError,
    log_diagnostic_info,
)
from quickwatch.utils.helpers import extract_video_id, format_time
from quickwatch.utils.logger import logging


async def _call(func, *args):
    """Run a blocking collaborator in a worker thread, surfacing failures as QuickWatchError."""
    try:
        return await asyncio.to_thread(func, *args)
    except QuickWatchError:
        raise
    except Exception as e:
        logging.error(f"Upstream failure in {getattr(func, '__name__', func)}: {str(e)}")
        raise UpstreamFailureError(str(e) or "Upstream service failed") from e


async def process_video(
    video: Optional[str],
    summary_config: Optional[SummaryConfig] = None,
    highlight_config: Optional[HighlightConfig] = None,
    fetcher: Optional[TranscriptFetcher] = None,
    summarizer: Optional[TranscriptSummarizer] = None,
    selector: Optional[HighlightSelector] = None,
    info_fetcher: Optional[VideoInfoFetcher] = None,
) -> QuickWatchResult:
    """
    Produce the quick watch of a video: transcript, summary and key moments.

    The summary and the highlights are generated concurrently. Nothing is
    retried.

    Args:
        video: YouTube video ID or URL
        summary_config: Configuration for summarization
        highlight_config: Configuration for highlight selection
        fetcher, summarizer, selector, info_fetcher: Collaborators, built
            from the configuration when omitted

    Returns:
        QuickWatchResult object

    Raises:
        InvalidInputError: No valid video ID was given
        NotFoundError: The video has no transcript
        UpstreamFailureError: A collaborator failed
    """
    if not video:
        raise InvalidInputError("Video ID is required")
    video_id = extract_video_id(video)
    if not video_id:
        raise InvalidInputError("Invalid YouTube video ID or URL")

    summary_config = summary_config or SummaryConfig()
    highlight_config = highlight_config or HighlightConfig()

    fetcher = fetcher or TranscriptFetcher()
    transcript = await _call(fetcher.fetch, video_id)
    if not transcript:
        raise NotFoundError("Transcript not found for this video")

    try:
        summarizer = summarizer or TranscriptSummarizer(provider=summary_config.provider)
        selector = selector or HighlightSelector(provider=highlight_config.provider)
    except ValueError as e:
        logging.error(f"LLM collaborators not configured: {str(e)}")
        raise UpstreamFailureError(str(e)) from e

    tasks = [
        _call(summarizer.summarize_transcript, transcript, summary_config),
        _call(selector.select, transcript, highlight_config),
    ]
    if config.FETCH_VIDEO_INFO or info_fetcher is not None:
        tasks.append(_call((info_fetcher or VideoInfoFetcher()).get_video_info, video_id))

    results = await asyncio.gather(*tasks)
    summary, key_moments = results[0], results[1]
    info = results[2] if len(results) > 2 else VideoInfo(video_id=video_id)

    log_diagnostic_info({
        "video_id": video_id,
        "transcript_segments": len(transcript),
        "summary_length": len(summary),
        "key_moments": len(key_moments),
        "highlight_mode": highlight_config.mode.value,
    })

    return QuickWatchResult(
        video_id=video_id,
        title=info.title,
        author=info.author,
        transcript=transcript,
        summary=summary,
        key_moments=key_moments,
    )


def quick_watch(url: str, highlight_mode: Optional[str] = None) -> QuickWatchResult:
    """
    Process a YouTube URL synchronously.

    Args:
        url: YouTube video URL or ID
        highlight_mode: "moments" or "prune", defaults to the configured mode

    Returns:
        QuickWatchResult object
    """
    highlight_config = HighlightConfig(mode=highlight_mode) if highlight_mode else HighlightConfig()
    return asyncio.run(process_video(url, highlight_config=highlight_config))


def main():
    """Main function to run the application from command line."""
    parser = argparse.ArgumentParser(description="Quick Watch: summary and key moments of a YouTube video")
    parser.add_argument("url", help="YouTube video URL")
    parser.add_argument("--mode", choices=["moments", "prune"], help="Highlight selection mode")

    args = parser.parse_args()

    # Load environment variables
    load_dotenv()

    try:
        result = quick_watch(args.url, args.mode)
    except QuickWatchError as e:
        parser.exit(1, f"Error ({e.status_code}): {e.message}\n")

    # Print the summary
    print("\n" + "=" * 80)
    print(f"Quick watch of '{result.title or result.video_id}'" + (f" by {result.author}" if result.author else ""))
    print("=" * 80)
    print(result.summary)
    print("-" * 80)
    for moment in result.key_moments:
        if isinstance(moment, KeyMoment):
            print(f"[{format_time(moment.start_time)}] {moment.text}")
            if moment.importance:
                print(f"    {moment.importance}")
        else:
            item = result.transcript[moment]
            print(f"[{format_time(item.start)}] {item.text}")
    print("=" * 80)


if __name__ == "__main__":
    main()
