"""
Reusable UI components for the Streamlit app.
"""

import streamlit as st
import streamlit.components.v1 as html_components
from typing import Any, Dict, List, Optional

from quickwatch.core.player import DEFAULT_PLAYER_ID, PlayerRegistry
from quickwatch.frontend.player import EmbedPlayerHandle
from quickwatch.utils.helpers import clean_text, format_time


def header():
    """Display the application header."""
    st.set_page_config(
        page_title="Quick Watch",
        page_icon="⏩",
        layout="wide",
    )

    st.title("⏩ Quick Watch")
    st.markdown("Get the summary and the key moments of a YouTube video, then watch only the highlights.")
    st.divider()


def youtube_input() -> Optional[str]:
    """
    Display a YouTube URL input field.

    Returns:
        The entered YouTube URL or None
    """
    with st.form(key="youtube_form"):
        url = st.text_input(
            "Enter YouTube URL",
            placeholder="https://www.youtube.com/watch?v=VIDEO_ID",
        )
        submit = st.form_submit_button("Quick Watch")

    if submit and url:
        return url
    return None


def embed_markup(handle: EmbedPlayerHandle, height: int = 420) -> str:
    """
    Iframe markup for the handle at its last command.

    Only a player command changes the markup, which makes Streamlit
    reload the iframe then and not while the video plays.
    """
    start = int(handle.start_offset)
    autoplay = 1 if handle.is_playing else 0
    return f"""
        <!-- revision {handle.revision} -->
        <iframe width="100%" height="{height - 20}"
        src="https://www.youtube.com/embed/{handle.video_id}?start={start}&autoplay={autoplay}&controls=1&modestbranding=1&rel=0"
        frameborder="0" allow="accelerometer; autoplay; clipboard-write; encrypted-media;
        gyroscope; picture-in-picture" allowfullscreen></iframe>
        """


def youtube_embed(handle: EmbedPlayerHandle, height: int = 420):
    """Render the embed for the handle."""
    html_components.html(embed_markup(handle, height), height=height)


def display_summary(summary: str, title: Optional[str] = None, author: Optional[str] = None):
    """Display the video summary."""
    if title:
        st.markdown(f"## {title}")
    if author:
        st.markdown(f"**Author:** {author}")

    st.markdown("### Summary")
    st.markdown(summary)


def key_moments_list(
    key_moments: List[Dict[str, Any]],
    registry: PlayerRegistry,
    active_index: int = -1,
    player_id: str = DEFAULT_PLAYER_ID,
):
    """
    Display the key moments with a play button each.

    Args:
        key_moments: Key moments as returned by the API
        registry: Registry holding the page's player
        active_index: Index of the highlight under the playhead
        player_id: Player the play buttons command
    """
    st.markdown("### Key Moments")
    if not key_moments:
        st.info("No key moments identified")
        return

    for index, moment in enumerate(key_moments):
        start = moment.get("startTime", 0)
        col1, col2 = st.columns([1, 6])
        with col1:
            if st.button(format_time(start), key=f"moment_{index}"):
                registry.seek_and_play(start, player_id)
        with col2:
            marker = "▶ " if index == active_index else ""
            st.markdown(f"{marker}{clean_text(moment.get('text', ''))}")
            if moment.get("importance"):
                st.caption(moment["importance"])


def transcript_list(
    transcript: List[Dict[str, Any]],
    registry: PlayerRegistry,
    player_id: str = DEFAULT_PLAYER_ID,
):
    """Display the transcript with a seek button per line."""
    with st.expander("Transcript"):
        if not transcript:
            st.info("No transcript available")
            return
        for index, item in enumerate(transcript):
            col1, col2 = st.columns([1, 6])
            with col1:
                if st.button(format_time(item["start"]), key=f"line_{index}"):
                    registry.seek_and_play(item["start"], player_id)
            with col2:
                st.markdown(clean_text(item["text"]))


def toggle_label(status: str) -> str:
    """Label of the single Quick Watch button for a playback status."""
    if status == "playing":
        return "⏸ Pause"
    if status == "paused":
        return "▶ Resume"
    return "⏩ Quick Watch"


def display_error(message: str):
    """Display an error message."""
    st.error(message)
