"""
Timer sessions router.

The timer engine runs server side; clients display the snapshot, replay cues
from the cue log and mirror wake-lock and fullscreen locally.

This router contains endpoints for:
- POST /timer/sessions - Create a session from exercises or a preset
- GET /timer/sessions/{id} - Get the session snapshot
- POST /timer/sessions/{id}/start|pause|resume|skip|cancel - Playback actions
- POST /timer/sessions/{id}/toggle - Single play/pause button
- PUT /timer/sessions/{id}/exercises - Rebuild the plan
- POST /timer/sessions/{id}/audio-mode/cycle - Next audio mode
- POST /timer/sessions/{id}/fullscreen/toggle - Toggle fullscreen
- POST /timer/sessions/{id}/fullscreen - Report a client-side fullscreen change
- POST /timer/sessions/{id}/visibility - Report page visibility
- GET /timer/sessions/{id}/cues - Tones and phrases emitted since a sequence number
- GET /timer/sessions/{id}/cues/{seq}/wav - One tone cue rendered as WAV
- DELETE /timer/sessions/{id} - Tear down the session

Endpoints are async so session clocks tick on the server event loop.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from api.deps import get_session_registry, get_settings
from api.schemas.timer import (
    CreateTimerSessionRequest,
    CueListResponse,
    FullscreenReportRequest,
    ReplaceExercisesRequest,
    TimerSessionResponse,
    VisibilityRequest,
)
from application.exceptions import (
    InvalidPlanError,
    SessionNotFoundError,
    UnknownPresetError,
)
from backend.core.presets import get_preset
from backend.services.session_registry import TimerSession, TimerSessionRegistry
from backend.services.tone_synthesizer import synthesize_pulse, to_wav
from backend.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/timer/sessions",
    tags=["Timer Sessions"],
)


# =============================================================================
# Helpers
# =============================================================================


def _load_session(registry: TimerSessionRegistry, session_id: str) -> TimerSession:
    try:
        return registry.get(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


# =============================================================================
# Session lifecycle
# =============================================================================


@router.post("", response_model=TimerSessionResponse, status_code=201)
async def create_session_endpoint(
    request: CreateTimerSessionRequest,
    registry: TimerSessionRegistry = Depends(get_session_registry),
):
    """
    Create a timer session.

    Args:
        request: Context, language and either exercises or a preset name

    Returns:
        Snapshot of the new (idle) session
    """
    if request.preset is not None:
        try:
            exercises = get_preset(request.preset).to_exercises(request.exercise_name)
        except UnknownPresetError as e:
            raise HTTPException(status_code=404, detail=str(e))
    else:
        exercises = request.exercises

    try:
        session = registry.create(request.context, exercises, language=request.language)
    except InvalidPlanError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return session.to_dict()


@router.get("/{session_id}", response_model=TimerSessionResponse)
async def get_session_endpoint(
    session_id: str,
    registry: TimerSessionRegistry = Depends(get_session_registry),
):
    """Get the current snapshot of a session."""
    return _load_session(registry, session_id).to_dict()


@router.delete("/{session_id}")
async def delete_session_endpoint(
    session_id: str,
    registry: TimerSessionRegistry = Depends(get_session_registry),
):
    """
    Tear down a session: stop its clock and release the wake-lock.

    Returns:
        Success status with the final playback status
    """
    try:
        session = registry.remove(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {
        "success": True,
        "session_id": session_id,
        "status": session.engine.state.status.value,
    }


@router.put("/{session_id}/exercises", response_model=TimerSessionResponse)
async def replace_exercises_endpoint(
    session_id: str,
    request: ReplaceExercisesRequest,
    registry: TimerSessionRegistry = Depends(get_session_registry),
):
    """
    Rebuild the plan from a new exercise list.

    Playback returns to idle on the first segment of the new plan.
    """
    session = _load_session(registry, session_id)
    try:
        session.engine.load_exercises(request.exercises)
    except InvalidPlanError as e:
        raise HTTPException(status_code=422, detail=str(e))
    session.completed_at = None
    return session.to_dict()


# =============================================================================
# Playback actions
# =============================================================================


@router.post("/{session_id}/start", response_model=TimerSessionResponse)
async def start_endpoint(
    session_id: str,
    registry: TimerSessionRegistry = Depends(get_session_registry),
):
    session = _load_session(registry, session_id)
    session.engine.start()
    return session.to_dict()


@router.post("/{session_id}/pause", response_model=TimerSessionResponse)
async def pause_endpoint(
    session_id: str,
    registry: TimerSessionRegistry = Depends(get_session_registry),
):
    session = _load_session(registry, session_id)
    session.engine.pause()
    return session.to_dict()


@router.post("/{session_id}/resume", response_model=TimerSessionResponse)
async def resume_endpoint(
    session_id: str,
    registry: TimerSessionRegistry = Depends(get_session_registry),
):
    session = _load_session(registry, session_id)
    session.engine.resume()
    return session.to_dict()


@router.post("/{session_id}/toggle", response_model=TimerSessionResponse)
async def toggle_endpoint(
    session_id: str,
    registry: TimerSessionRegistry = Depends(get_session_registry),
):
    """Play/pause button: start or resume when stopped, pause otherwise."""
    session = _load_session(registry, session_id)
    session.engine.toggle_play_pause()
    return session.to_dict()


@router.post("/{session_id}/skip", response_model=TimerSessionResponse)
async def skip_endpoint(
    session_id: str,
    registry: TimerSessionRegistry = Depends(get_session_registry),
):
    session = _load_session(registry, session_id)
    session.engine.skip()
    return session.to_dict()


@router.post("/{session_id}/cancel", response_model=TimerSessionResponse)
async def cancel_endpoint(
    session_id: str,
    registry: TimerSessionRegistry = Depends(get_session_registry),
):
    session = _load_session(registry, session_id)
    session.engine.cancel()
    return session.to_dict()


# =============================================================================
# Audio mode & environment
# =============================================================================


@router.post("/{session_id}/audio-mode/cycle", response_model=TimerSessionResponse)
async def cycle_audio_mode_endpoint(
    session_id: str,
    registry: TimerSessionRegistry = Depends(get_session_registry),
):
    """Advance silent -> minimal_beep -> full_voice -> silent and persist it."""
    session = _load_session(registry, session_id)
    session.engine.cycle_audio_mode()
    return session.to_dict()


@router.post("/{session_id}/fullscreen/toggle", response_model=TimerSessionResponse)
async def toggle_fullscreen_endpoint(
    session_id: str,
    registry: TimerSessionRegistry = Depends(get_session_registry),
):
    session = _load_session(registry, session_id)
    session.engine.toggle_fullscreen()
    return session.to_dict()


@router.post("/{session_id}/fullscreen", response_model=TimerSessionResponse)
async def report_fullscreen_endpoint(
    session_id: str,
    request: FullscreenReportRequest,
    registry: TimerSessionRegistry = Depends(get_session_registry),
):
    """Record a fullscreen change the client observed (e.g. escape key)."""
    session = _load_session(registry, session_id)
    session.fullscreen.report(request.active)
    return session.to_dict()


@router.post("/{session_id}/visibility", response_model=TimerSessionResponse)
async def report_visibility_endpoint(
    session_id: str,
    request: VisibilityRequest,
    registry: TimerSessionRegistry = Depends(get_session_registry),
):
    """Record page visibility; the wake-lock is re-acquired when visible again."""
    session = _load_session(registry, session_id)
    session.engine.environment.handle_visibility_change(request.visible)
    return session.to_dict()


# =============================================================================
# Cues
# =============================================================================


@router.get("/{session_id}/cues", response_model=CueListResponse)
async def list_cues_endpoint(
    session_id: str,
    since: int = Query(0, ge=0, description="Return cues with a sequence number above this"),
    registry: TimerSessionRegistry = Depends(get_session_registry),
):
    """
    Get tones and phrases emitted since `since`.

    Clients poll with the last sequence number they replayed.
    """
    session = _load_session(registry, session_id)
    return CueListResponse(
        session_id=session_id,
        cues=session.cue_log.since(since),
        last_seq=session.cue_log.last_seq,
    )


@router.get("/{session_id}/cues/{seq}/wav")
async def cue_audio_endpoint(
    session_id: str,
    seq: int,
    registry: TimerSessionRegistry = Depends(get_session_registry),
    settings: Settings = Depends(get_settings),
):
    """
    Render a tone cue as a WAV file.

    For clients without local tone synthesis.
    """
    session = _load_session(registry, session_id)
    cue = session.cue_log.get(seq)
    if cue is None or cue["type"] != "tone":
        raise HTTPException(status_code=404, detail=f"No tone cue {seq} in session {session_id}")
    pcm = synthesize_pulse(cue["frequency"], cue["duration_ms"], volume=settings.tone_volume)
    return Response(content=to_wav(pcm), media_type="audio/wav")
