"""
Pure playback state machine.

Every user action and every clock tick is an event; `transition()` maps
(state, event) to the next PlaybackState without side effects. Events that do
not apply to the current status return the state unchanged, which makes
repeated or racing actions (double start, skip after natural expiry)
harmless. The PlaybackScheduler applies these transitions and owns the side
effects (clock subscription, audio, narration, callbacks).

Transitions:
    idle      --START-->  preparing (exercise segment not started yet)
    idle      --START-->  running   (rest segment, or segment already started)
    preparing --TICK--->  preparing, or running once the lead-in reaches 0
    preparing --CANCEL->  idle
    preparing --PAUSE-->  idle (same as cancel)
    running   --TICK--->  running, next segment, or completed
    running   --PAUSE-->  paused
    paused    --RESUME->  running (never re-prepares)
    running   --SKIP--->  next segment (running) or completed
    paused    --SKIP--->  next segment (paused) or completed
"""
from dataclasses import replace
from enum import Enum

from domain.models import PREPARATION_SECONDS, Plan, PlaybackState, PlaybackStatus


class PlaybackEvent(str, Enum):
    """Inputs of the playback state machine."""

    START = "start"
    TICK = "tick"
    PAUSE = "pause"
    RESUME = "resume"
    SKIP = "skip"
    CANCEL = "cancel"
    ANNOUNCED = "announced"


def initial_state(plan: Plan, preparation_seconds: int = PREPARATION_SECONDS) -> PlaybackState:
    """Idle state positioned on the first segment of `plan`."""
    first = plan.get(0)
    return PlaybackState(
        status=PlaybackStatus.IDLE,
        current_segment_index=0,
        time_remaining_seconds=first.duration_seconds if first else 0,
        preparation_seconds_remaining=preparation_seconds,
    )


def should_prepare(state: PlaybackState, plan: Plan) -> bool:
    """
    Whether starting from `state` enters the preparing phase.

    Only an exercise segment that has never begun running is prepared; the
    explicit segment_started flag keeps a segment paused on its exact
    boundary from being prepared a second time.
    """
    segment = plan.get(state.current_segment_index)
    return segment is not None and segment.is_exercise and not state.segment_started


def complete_segment(
    state: PlaybackState,
    plan: Plan,
    preparation_seconds: int = PREPARATION_SECONDS,
) -> PlaybackState:
    """
    Finish the current segment: advance to the next one or complete the session.

    Used by natural expiry and by skip. A running session keeps running on the
    next segment; a paused one stays paused.
    """
    if state.current_segment_index >= plan.last_index:
        return replace(
            state,
            status=PlaybackStatus.COMPLETED,
            time_remaining_seconds=0,
            preparation_seconds_remaining=preparation_seconds,
        )

    next_index = state.current_segment_index + 1
    keep_running = state.status == PlaybackStatus.RUNNING
    return replace(
        state,
        current_segment_index=next_index,
        time_remaining_seconds=plan[next_index].duration_seconds,
        segment_started=keep_running,
        announced=False,
    )


def _start(state: PlaybackState, plan: Plan, preparation_seconds: int) -> PlaybackState:
    if state.status == PlaybackStatus.PAUSED:
        return _resume(state, plan, preparation_seconds)
    if state.status != PlaybackStatus.IDLE or plan.is_rest_day:
        return state
    if should_prepare(state, plan):
        return replace(
            state,
            status=PlaybackStatus.PREPARING,
            preparation_seconds_remaining=preparation_seconds,
        )
    return replace(state, status=PlaybackStatus.RUNNING, segment_started=True)


def _tick(state: PlaybackState, plan: Plan, preparation_seconds: int) -> PlaybackState:
    if state.status == PlaybackStatus.PREPARING:
        remaining = state.preparation_seconds_remaining - 1
        if remaining > 0:
            return replace(state, preparation_seconds_remaining=remaining)
        return replace(
            state,
            status=PlaybackStatus.RUNNING,
            time_remaining_seconds=plan[state.current_segment_index].duration_seconds,
            preparation_seconds_remaining=preparation_seconds,
            segment_started=True,
        )

    if state.status == PlaybackStatus.RUNNING:
        remaining = state.time_remaining_seconds - 1
        if remaining > 0:
            return replace(state, time_remaining_seconds=remaining)
        return complete_segment(
            replace(state, time_remaining_seconds=0), plan, preparation_seconds
        )

    return state


def _pause(state: PlaybackState, plan: Plan, preparation_seconds: int) -> PlaybackState:
    if state.status == PlaybackStatus.RUNNING:
        return replace(state, status=PlaybackStatus.PAUSED)
    if state.status == PlaybackStatus.PREPARING:
        return _cancel(state, plan, preparation_seconds)
    return state


def _resume(state: PlaybackState, plan: Plan, preparation_seconds: int) -> PlaybackState:
    if state.status == PlaybackStatus.PAUSED:
        return replace(state, status=PlaybackStatus.RUNNING, segment_started=True)
    if state.status == PlaybackStatus.IDLE:
        return _start(state, plan, preparation_seconds)
    return state


def _skip(state: PlaybackState, plan: Plan, preparation_seconds: int) -> PlaybackState:
    if state.status in (PlaybackStatus.RUNNING, PlaybackStatus.PAUSED):
        return complete_segment(state, plan, preparation_seconds)
    return state


def _cancel(state: PlaybackState, plan: Plan, preparation_seconds: int) -> PlaybackState:
    if state.status == PlaybackStatus.PREPARING:
        return replace(
            state,
            status=PlaybackStatus.IDLE,
            preparation_seconds_remaining=preparation_seconds,
        )
    return state


def _announced(state: PlaybackState, plan: Plan, preparation_seconds: int) -> PlaybackState:
    return replace(state, announced=True)


_HANDLERS = {
    PlaybackEvent.START: _start,
    PlaybackEvent.TICK: _tick,
    PlaybackEvent.PAUSE: _pause,
    PlaybackEvent.RESUME: _resume,
    PlaybackEvent.SKIP: _skip,
    PlaybackEvent.CANCEL: _cancel,
    PlaybackEvent.ANNOUNCED: _announced,
}


def transition(
    state: PlaybackState,
    event: PlaybackEvent,
    plan: Plan,
    preparation_seconds: int = PREPARATION_SECONDS,
) -> PlaybackState:
    """
    Apply one event to a playback state.

    Args:
        state: Current state
        event: Event to apply
        plan: Plan the state refers to
        preparation_seconds: Length of the lead-in before exercise segments

    Returns:
        The next state (the same object when the event does not apply)
    """
    if state.status == PlaybackStatus.COMPLETED:
        return state
    return _HANDLERS[PlaybackEvent(event)](state, plan, preparation_seconds)
