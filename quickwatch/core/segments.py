"""
Normalization of externally supplied highlight segments.

Segments arrive from the highlight selector in one of two shapes,
``{start, duration}`` or ``{startTime, endTime}``, and are untrusted: they
can be unsorted, overlapping, or carry non-numeric fields. Everything here
turns them into canonical ``TimeSegment`` windows, or ``None`` when a
segment cannot be played.
"""

import math
from typing import Any, Optional, Sequence, List

from quickwatch.config import config
from quickwatch.models.schemas import TimeSegment, TranscriptItem


_MISSING = object()


def _field(raw: Any, name: str) -> Any:
    if isinstance(raw, dict):
        return raw.get(name, _MISSING)
    return getattr(raw, name, _MISSING)


def _first_field(raw: Any, *names: str) -> Any:
    for name in names:
        value = _field(raw, name)
        if value is not _MISSING:
            return value
    return _MISSING


def is_number(value: Any) -> bool:
    """True for finite ints and floats; bools and strings are not numbers."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def segment_start(raw: Any) -> Optional[float]:
    """
    Get the start time of a raw segment.

    Args:
        raw: Segment in either shape

    Returns:
        Start in seconds, or None if it is missing or not a valid number
    """
    value = _first_field(raw, "start", "startTime", "start_time")
    if not is_number(value) or value < 0:
        return None
    return float(value)


def normalize_segment(raw: Any, default_seconds: float = config.DEFAULT_SEGMENT_SECONDS) -> Optional[TimeSegment]:
    """
    Normalize a raw segment to a canonical (start, end) window.

    ``end`` is ``start + duration`` or the explicit ``endTime``, and
    defaults to ``start + default_seconds`` when neither is present.

    Args:
        raw: Mapping or object in either segment shape
        default_seconds: Window length used when no end is given

    Returns:
        TimeSegment, or None if the segment is malformed
    """
    if raw is None:
        return None

    start = segment_start(raw)
    if start is None:
        return None

    duration = _field(raw, "duration")
    if duration is not _MISSING and duration is not None:
        if not is_number(duration) or duration < 0:
            return None
        return TimeSegment(start=start, end=start + float(duration))

    end_time = _first_field(raw, "endTime", "end_time", "end")
    if end_time is not _MISSING and end_time is not None:
        if not is_number(end_time) or end_time < start:
            return None
        return TimeSegment(start=start, end=float(end_time))

    return TimeSegment(start=start, end=start + default_seconds)


def segment_end(segments: Sequence[Any], index: int, default_seconds: float = config.DEFAULT_SEGMENT_SECONDS) -> Optional[float]:
    """
    Compute where playback of ``segments[index]`` must stop.

    The window never runs past the start of the following segment, so
    inconsistent source data cannot overlap one highlight into the next.
    The last segment keeps its own end.

    Args:
        segments: Ordered raw segments
        index: Segment index
        default_seconds: Window length used when a segment has no end

    Returns:
        End time in seconds, or None if the index is out of range or the
        segment is malformed
    """
    if index < 0 or index >= len(segments):
        return None

    segment = normalize_segment(segments[index], default_seconds)
    if segment is None:
        return None

    if index < len(segments) - 1:
        next_start = segment_start(segments[index + 1])
        if next_start is not None:
            return min(segment.end, next_start)
    return segment.end


def segments_from_indices(transcript: Sequence[TranscriptItem], indices: Sequence[Any]) -> List[dict]:
    """
    Turn prune-mode transcript indices into playable segments.

    Out-of-range and non-integer indices are dropped; order is kept.

    Args:
        transcript: Full transcript
        indices: Indices of transcript lines to keep

    Returns:
        List of {start, duration} segments
    """
    segments = []
    for index in indices:
        if isinstance(index, bool) or not isinstance(index, int):
            continue
        if 0 <= index < len(transcript):
            item = transcript[index]
            segments.append({"start": item.start, "duration": item.duration})
    return segments


def highlight_segments(key_moments: Sequence[Any], transcript: Sequence[TranscriptItem]) -> List[Any]:
    """
    Segments to play for a highlight selector result of either shape.

    Index results are mapped onto the transcript; key moments are passed
    through untouched, malformed ones included, for the controller to skip.
    """
    if key_moments and all(isinstance(k, int) and not isinstance(k, bool) for k in key_moments):
        return segments_from_indices(transcript, key_moments)
    return list(key_moments)
