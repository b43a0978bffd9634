"""
Playback scheduler.

Owns the PlaybackState of one session and the single clock subscription that
drives it. User actions and clock ticks are applied through the pure
transitions of backend.core.playback_machine; the scheduler then reconciles
the clock subscription with the new status and fires the side effects (tones,
narration, listeners, completion callback).

Invariants:
- At most one clock subscription is active. Starting one always stops the
  previous one first, and ticks from a stopped subscription are discarded
  (generation token).
- The completion callback runs at most once per loaded plan.
- Tone and speech failures are logged and never reach the state machine.
"""
import logging
from typing import Callable, List, Optional

from application.ports import TICK_INTERVAL_MS, AudioPort, Clock, NarratorPort
from backend.core.audio_cues import AudioCuePolicy, CuePhase, ToneCue
from backend.core.narration import AnnouncementNarrator
from backend.core.playback_machine import PlaybackEvent, initial_state, transition
from backend.core.progress import calculate_progress
from domain.models import (
    PREPARATION_SECONDS,
    AudioMode,
    Plan,
    PlaybackState,
    PlaybackStatus,
    Segment,
)

logger = logging.getLogger(__name__)

StateListener = Callable[[PlaybackState], None]


class PlaybackScheduler:
    """
    State machine driver for one playback session.

    Usage:
        scheduler = PlaybackScheduler(plan, clock, on_completed=mark_done)
        scheduler.start()      # preparing, then running
        scheduler.pause()
        scheduler.resume()
        scheduler.teardown()   # when the session ends
    """

    def __init__(
        self,
        plan: Plan,
        clock: Clock,
        *,
        audio_mode: AudioMode = AudioMode.SILENT,
        audio_port: Optional[AudioPort] = None,
        narrator_port: Optional[NarratorPort] = None,
        cue_policy: Optional[AudioCuePolicy] = None,
        narrator: Optional[AnnouncementNarrator] = None,
        on_completed: Optional[Callable[[], None]] = None,
        preparation_seconds: int = PREPARATION_SECONDS,
        tick_interval_ms: int = TICK_INTERVAL_MS,
    ):
        self._clock = clock
        self._audio_port = audio_port
        self._narrator_port = narrator_port
        self._cue_policy = cue_policy or AudioCuePolicy()
        self._narrator = narrator or AnnouncementNarrator()
        self._on_completed = on_completed
        self._preparation_seconds = preparation_seconds
        self._tick_interval_ms = tick_interval_ms
        self.audio_mode = audio_mode

        self._listeners: List[StateListener] = []
        self._teardown_hooks: List[Callable[[], None]] = []
        self._generation = 0
        self._subscribed = False
        self._torn_down = False
        self._completion_reported = False

        self._plan = plan
        self._state = initial_state(plan, preparation_seconds)

    # =========================================================================
    # Read access
    # =========================================================================

    @property
    def plan(self) -> Plan:
        return self._plan

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def current_segment(self) -> Optional[Segment]:
        if self._state.is_completed:
            return None
        return self._plan.get(self._state.current_segment_index)

    @property
    def has_active_subscription(self) -> bool:
        return self._subscribed

    @property
    def is_torn_down(self) -> bool:
        return self._torn_down

    def progress(self) -> float:
        return calculate_progress(self._state, self._plan)

    # =========================================================================
    # Observers
    # =========================================================================

    def add_listener(self, listener: StateListener) -> None:
        """Register a callback invoked with every new state."""
        self._listeners.append(listener)

    def add_teardown_hook(self, hook: Callable[[], None]) -> None:
        """Register a callback invoked once when the session is torn down."""
        self._teardown_hooks.append(hook)

    # =========================================================================
    # User actions
    # =========================================================================

    def start(self) -> PlaybackState:
        return self._dispatch(PlaybackEvent.START)

    def pause(self) -> PlaybackState:
        return self._dispatch(PlaybackEvent.PAUSE)

    def resume(self) -> PlaybackState:
        return self._dispatch(PlaybackEvent.RESUME)

    def skip(self) -> PlaybackState:
        return self._dispatch(PlaybackEvent.SKIP)

    def cancel(self) -> PlaybackState:
        return self._dispatch(PlaybackEvent.CANCEL)

    def load_plan(self, plan: Plan) -> PlaybackState:
        """
        Replace the plan and discard any in-flight playback.

        The session returns to idle on the first segment of the new plan and
        may complete (and report completion) again.
        """
        if self._torn_down:
            logger.debug("Ignoring plan reload on a torn down scheduler")
            return self._state
        self._stop_clock()
        self._plan = plan
        self._state = initial_state(plan, self._preparation_seconds)
        self._completion_reported = False
        logger.info(f"Plan loaded: {len(plan)} segments, {plan.total_duration_seconds}s total")
        self._notify()
        return self._state

    def teardown(self) -> None:
        """Cancel the clock subscription and release session resources. Idempotent."""
        if self._torn_down:
            return
        self._stop_clock()
        self._torn_down = True
        logger.info(f"Playback torn down in status {self._state.status.value}")
        for hook in list(self._teardown_hooks):
            try:
                hook()
            except Exception:
                logger.exception("Teardown hook failed")

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _dispatch(self, event: PlaybackEvent) -> PlaybackState:
        if self._torn_down:
            logger.debug(f"Ignoring {event.value} on a torn down scheduler")
            return self._state

        previous = self._state
        current = transition(previous, event, self._plan, self._preparation_seconds)
        if current is previous:
            if event != PlaybackEvent.TICK:
                logger.debug(f"{event.value} ignored in status {previous.status.value}")
            return previous

        self._state = current
        if previous.status != current.status:
            logger.info(f"Playback {previous.status.value} -> {current.status.value}")

        self._sync_clock(previous, current)
        self._emit_cues(previous, event)
        self._notify()

        if current.is_completed and not previous.is_completed:
            self._report_completion()
        return self._state

    def _on_tick(self, generation: int) -> None:
        if generation != self._generation:
            logger.debug("Discarding tick from a stopped subscription")
            return
        self._dispatch(PlaybackEvent.TICK)

    # =========================================================================
    # Clock subscription
    # =========================================================================

    def _sync_clock(self, previous: PlaybackState, current: PlaybackState) -> None:
        if not current.status.is_ticking:
            self._stop_clock()
        elif previous.status != current.status or not self._subscribed:
            self._start_clock()

    def _start_clock(self) -> None:
        self._stop_clock()
        self._generation += 1
        generation = self._generation
        self._clock.start(self._tick_interval_ms, lambda: self._on_tick(generation))
        self._subscribed = True

    def _stop_clock(self) -> None:
        self._generation += 1
        if self._subscribed:
            self._clock.stop()
            self._subscribed = False

    # =========================================================================
    # Side effects
    # =========================================================================

    def _emit_cues(self, previous: PlaybackState, event: PlaybackEvent) -> None:
        state = self._state
        mode = self.audio_mode

        if state.status == PlaybackStatus.COMPLETED:
            self._play(self._cue_policy.decide(mode, CuePhase.COMPLETION, 0))
            self._speak(self._narrator.completion_announcement(mode))
            return

        segment = self._plan.get(state.current_segment_index)
        if segment is None:
            return

        if state.status == PlaybackStatus.PREPARING:
            if previous.status != PlaybackStatus.PREPARING:
                self._speak(self._narrator.preparation_announcement(mode, segment))
            elif event == PlaybackEvent.TICK:
                remaining = state.preparation_seconds_remaining
                self._play(self._cue_policy.decide(mode, CuePhase.PREPARATION, remaining))
                self._speak(self._narrator.countdown(mode, remaining))
            return

        if state.status != PlaybackStatus.RUNNING:
            return

        if not state.announced:
            self._speak(self._narrator.entry_announcement(mode, segment))
            self._state = transition(
                self._state, PlaybackEvent.ANNOUNCED, self._plan, self._preparation_seconds
            )
            return

        same_segment = previous.current_segment_index == state.current_segment_index
        if event == PlaybackEvent.TICK and same_segment and previous.status == PlaybackStatus.RUNNING:
            remaining = state.time_remaining_seconds
            self._play(self._cue_policy.decide(mode, CuePhase.for_segment(segment.kind), remaining))
            self._speak(self._narrator.countdown(mode, remaining))

    def _play(self, cue: Optional[ToneCue]) -> None:
        port = self._audio_port
        if cue is None or port is None:
            return
        try:
            if port.is_supported():
                port.play_tone(cue.frequency, cue.duration_ms)
        except Exception as e:
            logger.warning(f"Audio cue failed, continuing silently: {e}")

    def _speak(self, text: Optional[str]) -> None:
        port = self._narrator_port
        if not text or port is None:
            return
        try:
            if port.is_supported():
                port.speak(text)
        except Exception as e:
            logger.warning(f"Narration failed, continuing silently: {e}")

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("Playback state listener failed")

    def _report_completion(self) -> None:
        if self._completion_reported:
            return
        self._completion_reported = True
        logger.info("Playback completed")
        if self._on_completed is None:
            return
        try:
            self._on_completed()
        except Exception:
            logger.exception("Completion callback failed")
