"""
Tests for segment normalization and end-time computation.
"""

import math
from types import SimpleNamespace

import pytest

from quickwatch.core.segments import (
    normalize_segment,
    segment_end,
    segment_start,
    segments_from_indices,
    highlight_segments,
)
from quickwatch.models.schemas import KeyMoment, TimeSegment


def test_normalize_start_duration_shape():
    assert normalize_segment({"start": 10, "duration": 20}) == TimeSegment(start=10, end=30)


def test_normalize_start_end_time_shape():
    assert normalize_segment({"startTime": 5.5, "endTime": 12}) == TimeSegment(start=5.5, end=12)


def test_normalize_defaults_to_thirty_seconds():
    assert normalize_segment({"start": 10}) == TimeSegment(start=10, end=40)
    assert normalize_segment({"startTime": 10, "endTime": None}) == TimeSegment(start=10, end=40)
    assert normalize_segment({"start": 10}, default_seconds=5) == TimeSegment(start=10, end=15)


def test_normalize_accepts_models_and_objects():
    moment = KeyMoment(startTime=3, endTime=9, text="x")
    assert normalize_segment(moment) == TimeSegment(start=3, end=9)
    assert normalize_segment(SimpleNamespace(start=1.0, duration=2.0)) == TimeSegment(start=1, end=3)


@pytest.mark.parametrize("raw", [
    None,
    {},
    {"start": "10", "duration": 5},
    {"start": 10, "duration": "5"},
    {"start": 10, "duration": None, "endTime": "later"},
    {"start": True, "duration": 5},
    {"start": math.nan, "duration": 5},
    {"start": 10, "duration": math.inf},
    {"start": -1, "duration": 5},
    {"start": 10, "duration": -5},
    {"startTime": 20, "endTime": 10},
])
def test_normalize_rejects_malformed(raw):
    assert normalize_segment(raw) is None


def test_segment_start():
    assert segment_start({"start": 3}) == 3.0
    assert segment_start({"startTime": 4}) == 4.0
    assert segment_start({"start": "3"}) is None


def test_segment_end_clamps_to_next_start():
    segments = [{"start": 10, "duration": 20}, {"start": 25, "duration": 20}]
    assert segment_end(segments, 0) == 25
    assert segment_end(segments, 1) == 45


def test_segment_end_keeps_own_end_when_it_fits():
    segments = [{"start": 0, "duration": 5}, {"start": 20, "duration": 5}]
    assert segment_end(segments, 0) == 5


def test_segment_end_out_of_range_and_malformed():
    segments = [{"start": 0, "duration": "x"}]
    assert segment_end(segments, 0) is None
    assert segment_end(segments, 1) is None
    assert segment_end(segments, -1) is None


def test_segment_end_ignores_malformed_next_start():
    segments = [{"start": 0, "duration": 10}, {"start": "soon", "duration": 5}]
    assert segment_end(segments, 0) == 10


@pytest.mark.parametrize("segments", [
    [{"start": 0, "duration": 10}, {"start": 10, "duration": 10}],
    [{"start": 0, "duration": 30}, {"start": 12, "duration": 3}, {"start": 14, "duration": 60}],
    [{"startTime": 5}, {"startTime": 20}, {"startTime": 90, "endTime": 95}],
    [{"start": 1.5, "duration": 0.25}, {"start": 1.75, "duration": 4}, {"start": 100, "duration": 1}],
])
def test_segment_end_never_overlaps_next_start(segments):
    for i in range(len(segments) - 1):
        assert segment_end(segments, i) <= segment_start(segments[i + 1])


def test_segments_from_indices(transcript):
    segments = segments_from_indices(transcript, [2, 0, 99, -1, True, "1"])
    assert segments == [{"start": 10.0, "duration": 5.0}, {"start": 0.0, "duration": 4.0}]


def test_highlight_segments(transcript):
    assert highlight_segments([1, 3], transcript) == [
        {"start": 4.0, "duration": 6.0},
        {"start": 15.0, "duration": 3.0},
    ]
    moments = [{"startTime": 3}, {"startTime": "bad"}]
    assert highlight_segments(moments, transcript) == moments
    assert highlight_segments([], transcript) == []
