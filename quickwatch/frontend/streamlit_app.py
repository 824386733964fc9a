"""
Main Streamlit application for Quick Watch.
"""

import streamlit as st
from dotenv import load_dotenv

from quickwatch.core.playback import PlaybackController
from quickwatch.core.player import PlayerRegistry
from quickwatch.core.progress import ProgressTracker
from quickwatch.core.scheduler import PolledScheduler
from quickwatch.core.segments import highlight_segments
from quickwatch.frontend.api_client import ApiClient, ApiError
from quickwatch.frontend.components import (
    header, youtube_input, youtube_embed, display_summary,
    key_moments_list, transcript_list, toggle_label, display_error,
)
from quickwatch.frontend.player import EmbedPlayerHandle
from quickwatch.models.schemas import TranscriptItem
from quickwatch.utils.helpers import extract_video_id


load_dotenv()


def init_session_state():
    """Initialize session state variables."""
    if "api_client" not in st.session_state:
        st.session_state.api_client = ApiClient()

    if "registry" not in st.session_state:
        st.session_state.registry = PlayerRegistry()

    if "scheduler" not in st.session_state:
        st.session_state.scheduler = PolledScheduler()

    for key, default in (("result", None), ("controller", None), ("tracker", None), ("active_index", -1)):
        if key not in st.session_state:
            st.session_state[key] = default


def teardown_player():
    """Cancel every timer and poll of the current video view."""
    if st.session_state.tracker is not None:
        st.session_state.tracker.stop()
        st.session_state.tracker = None
    if st.session_state.controller is not None:
        st.session_state.controller.teardown()
        st.session_state.controller = None
    st.session_state.scheduler.cancel_all()
    st.session_state.active_index = -1


def load_video(result: dict):
    """Set up the player, the playback controller and the progress poll for a result."""
    teardown_player()
    st.session_state.result = result

    transcript = [TranscriptItem.model_validate(item) for item in result.get("transcript", [])]
    duration = max((item.end for item in transcript), default=0.0)
    segments = highlight_segments(result.get("keyMoments", []), transcript)

    def on_index_change(index: int):
        st.session_state.active_index = index

    controller = PlaybackController(
        segments,
        scheduler=st.session_state.scheduler,
        registry=st.session_state.registry,
    )
    # The embed is rendered on this run, which is the handle's ready signal
    controller.on_ready(EmbedPlayerHandle(result["videoId"], duration=duration))

    tracker = ProgressTracker.for_controller(controller, st.session_state.scheduler, on_change=on_index_change)
    tracker.start()

    st.session_state.controller = controller
    st.session_state.tracker = tracker


def process_youtube_url(url: str):
    """Fetch the quick watch of a URL and load it into the view."""
    video_id = extract_video_id(url)
    if not video_id:
        display_error("Invalid YouTube URL format")
        return

    try:
        with st.spinner("Processing video content..."):
            result = st.session_state.api_client.process_video(video_id)
    except ApiError as e:
        display_error(f"Error processing video: {e.message}")
        return

    load_video(result)


@st.fragment(run_every=0.5)
def player_view():
    """Embed, highlight reel controls and the timers driving them."""
    controller = st.session_state.controller
    if controller is None or controller.player is None:
        return

    st.session_state.scheduler.run_due()

    active_index = st.session_state.active_index
    if active_index >= 0:
        st.caption(f"Highlight {active_index + 1} of {len(controller.segments)}")

    frame = st.container()
    if controller.segments:
        col1, col2, col3 = st.columns([2, 1, 1])
        with col1:
            if st.button(toggle_label(controller.state.status.value), key="toggle"):
                controller.toggle()
        with col2:
            if st.button("⏹ Stop", key="stop", disabled=controller.state.is_idle):
                controller.stop()
        with col3:
            if st.button("⏭ Next", key="next"):
                controller.skip_to_next()

    with frame:
        youtube_embed(controller.player)


def video_view():
    """Display the player, summary, key moments and transcript."""
    result = st.session_state.result
    registry = st.session_state.registry

    left, right = st.columns([2, 1])
    with left:
        player_view()
        display_summary(result.get("summary", ""), result.get("title"), result.get("author"))
    with right:
        key_moments = result.get("keyMoments", [])
        if key_moments and isinstance(key_moments[0], int):
            transcript = result.get("transcript", [])
            key_moments = [
                {"startTime": transcript[i]["start"], "text": transcript[i]["text"]}
                for i in key_moments if 0 <= i < len(transcript)
            ]
        key_moments_list(key_moments, registry, st.session_state.active_index)
        transcript_list(result.get("transcript", []), registry)


def main():
    """Main application entry point."""
    header()
    init_session_state()

    url = youtube_input()
    if url:
        process_youtube_url(url)

    if st.session_state.result is not None:
        video_view()


if __name__ == "__main__":
    main()
