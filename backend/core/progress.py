"""
Progress reporting for playback displays.
"""
from typing import Optional

from domain.models import Plan, PlaybackState, Segment


def calculate_progress(state: PlaybackState, plan: Plan) -> float:
    """
    Completion percentage of a session.

    Formula: (durations of finished segments + elapsed part of the current
    segment) / total duration * 100, clamped to [0, 100].

    Args:
        state: Current playback state
        plan: Plan being played

    Returns:
        0 for an empty plan, exactly 100.0 once completed
    """
    if state.is_completed:
        return 100.0
    total = plan.total_duration_seconds
    current = plan.get(state.current_segment_index)
    if total <= 0 or current is None:
        return 0.0

    elapsed = plan.duration_before(state.current_segment_index) + (
        current.duration_seconds - state.time_remaining_seconds
    )
    return min(max(elapsed / total * 100.0, 0.0), 100.0)


def format_clock(seconds: int) -> str:
    """Format seconds as M:SS for the countdown display."""
    minutes, secs = divmod(max(int(seconds), 0), 60)
    return f"{minutes}:{secs:02d}"


def segment_position(state: PlaybackState, plan: Plan) -> str:
    """1-based position label such as "3 / 7"."""
    if plan.is_rest_day:
        return "0 / 0"
    return f"{state.current_segment_index + 1} / {len(plan)}"


def next_segment(state: PlaybackState, plan: Plan) -> Optional[Segment]:
    """Segment shown in the "Up next" preview, None on the last one."""
    if state.is_completed:
        return None
    return plan.get(state.current_segment_index + 1)
