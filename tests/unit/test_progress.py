"""
Unit tests for backend/core/progress.py
"""

import pytest

from backend.core.plan_builder import build_plan
from backend.core.progress import calculate_progress, format_clock, next_segment, segment_position
from domain.models import PlaybackState, PlaybackStatus

pytestmark = pytest.mark.unit


@pytest.fixture
def plan():
    # exercise 20, rest 5, exercise 20 -> 45s
    return build_plan([{"name": "Split", "sets": 2, "hold_time_seconds": 20, "rest_time_seconds": 5}])


class TestCalculateProgress:
    def test_zero_at_start(self, plan):
        assert calculate_progress(PlaybackState(time_remaining_seconds=20), plan) == 0.0

    def test_exactly_hundred_when_completed(self, plan):
        state = PlaybackState(status=PlaybackStatus.COMPLETED, current_segment_index=2)
        assert calculate_progress(state, plan) == 100.0

    def test_mid_segment(self, plan):
        state = PlaybackState(
            status=PlaybackStatus.RUNNING,
            current_segment_index=1,
            time_remaining_seconds=1,
        )
        assert calculate_progress(state, plan) == pytest.approx(24 / 45 * 100)

    def test_empty_plan(self):
        assert calculate_progress(PlaybackState(), build_plan([])) == 0.0


class TestDisplayHelpers:
    @pytest.mark.parametrize("seconds,expected", [(0, "0:00"), (5, "0:05"), (75, "1:15"), (600, "10:00")])
    def test_format_clock(self, seconds, expected):
        assert format_clock(seconds) == expected

    def test_segment_position(self, plan):
        assert segment_position(PlaybackState(current_segment_index=1), plan) == "2 / 3"
        assert segment_position(PlaybackState(), build_plan([])) == "0 / 0"

    def test_next_segment(self, plan):
        assert next_segment(PlaybackState(), plan).is_rest
        assert next_segment(PlaybackState(current_segment_index=2), plan) is None
        assert next_segment(PlaybackState(status=PlaybackStatus.COMPLETED), plan) is None
