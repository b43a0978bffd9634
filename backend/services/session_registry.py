"""
In-process registry of remote timer sessions.

The HTTP API runs the timer engine server side and lets a client display it.
Each session gets its own engine, clock and cue log; wake-lock and fullscreen
are client-owned capabilities mirrored into ClientWakeLock/ClientFullscreen so
the client can apply them locally.
"""
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Iterable, List, Optional

from application.exceptions import SessionNotFoundError
from application.ports import Clock, ClockFactory, PreferenceRepository
from backend.core.plan_builder import ExerciseInput
from backend.services.timer_engine import TimerContext, TimerEngine, TimerEngineConfig
from backend.settings import Settings
from infrastructure.capabilities import (
    ClientFullscreen,
    ClientWakeLock,
    CueLog,
    CueLogAudioPort,
    CueLogNarratorPort,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class TimerSession:
    """One registered session and the client-facing capability mirrors."""

    id: str
    engine: TimerEngine
    cue_log: CueLog
    wake_lock: ClientWakeLock
    fullscreen: ClientFullscreen
    created_at: datetime = field(default_factory=_utcnow)
    last_accessed_at: datetime = field(default_factory=_utcnow)
    completed_at: Optional[datetime] = None

    def to_dict(self) -> Dict:
        data = {"id": self.id, **self.engine.snapshot()}
        data["language"] = self.engine.config.language
        data["created_at"] = self.created_at.isoformat()
        data["completed_at"] = self.completed_at.isoformat() if self.completed_at else None
        data["last_cue_seq"] = self.cue_log.last_seq
        return data


class TimerSessionRegistry:
    """
    Creates, looks up and tears down timer sessions.

    Usage:
        registry = TimerSessionRegistry(settings, AsyncioClock, preferences=repo)
        session = registry.create(TimerContext.TRAINING, exercises)
        registry.get(session.id).engine.start()
        registry.remove(session.id)

    Sessions a client abandoned are evicted on the next create or get: those
    not accessed for settings.session_idle_ttl_seconds, and completed ones
    after settings.completed_session_ttl_seconds.
    """

    def __init__(
        self,
        settings: Settings,
        clock_factory: ClockFactory,
        preferences: Optional[PreferenceRepository] = None,
        on_completed: Optional[Callable[[TimerSession], None]] = None,
        now: Callable[[], datetime] = _utcnow,
    ):
        self._settings = settings
        self._clock_factory = clock_factory
        self._preferences = preferences
        self._on_completed = on_completed
        self._now = now
        self._idle_ttl = timedelta(seconds=settings.session_idle_ttl_seconds)
        self._completed_ttl = timedelta(seconds=settings.completed_session_ttl_seconds)
        self._sessions: Dict[str, TimerSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def sessions(self) -> List[TimerSession]:
        return list(self._sessions.values())

    def create(
        self,
        context: TimerContext,
        exercises: Iterable[ExerciseInput],
        language: Optional[str] = None,
    ) -> TimerSession:
        """
        Register a new session with a plan built from `exercises`.

        Args:
            context: Timer call site (selects the stored audio preference)
            exercises: Exercise models or raw exercise dicts
            language: Narration language, defaults to settings.default_language

        Returns:
            The registered TimerSession, idle on its first segment

        Raises:
            InvalidPlanError: If the exercise list cannot be read
        """
        self.evict_expired()
        config = TimerEngineConfig.from_settings(self._settings, context, language=language)
        cue_log = CueLog()
        wake_lock = ClientWakeLock()
        fullscreen = ClientFullscreen()
        clock: Clock = self._clock_factory()
        session_id = str(uuid.uuid4())

        holder: Dict[str, TimerSession] = {}

        def mark_completed() -> None:
            session = holder["session"]
            session.completed_at = self._now()
            logger.info(f"Timer session {session.id} completed")
            if self._on_completed is not None:
                self._on_completed(session)

        engine = TimerEngine(
            config,
            clock,
            preferences=self._preferences,
            audio_port=CueLogAudioPort(cue_log),
            narrator_port=CueLogNarratorPort(
                cue_log, language=config.language, rate=self._settings.speech_rate
            ),
            wake_lock=wake_lock,
            fullscreen=fullscreen,
            on_completed=mark_completed,
        )
        created_at = self._now()
        session = TimerSession(
            id=session_id,
            engine=engine,
            cue_log=cue_log,
            wake_lock=wake_lock,
            fullscreen=fullscreen,
            created_at=created_at,
            last_accessed_at=created_at,
        )
        holder["session"] = session

        engine.load_exercises(exercises)
        self._sessions[session_id] = session
        logger.info(
            f"Created timer session {session_id} ({context.value}, "
            f"{len(engine.plan)} segments)"
        )
        return session

    def get(self, session_id: str) -> TimerSession:
        """
        Raises:
            SessionNotFoundError: If the id is not registered
        """
        self.evict_expired()
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        session.last_accessed_at = self._now()
        return session

    def remove(self, session_id: str) -> TimerSession:
        """
        Tear down and unregister a session.

        Raises:
            SessionNotFoundError: If the id is not registered
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise SessionNotFoundError(session_id)
        session.engine.teardown()
        logger.info(f"Removed timer session {session_id}")
        return session

    def close_all(self) -> None:
        """Tear down every session (application shutdown)."""
        for session_id in list(self._sessions):
            self.remove(session_id)

    def evict_expired(self) -> List[str]:
        """
        Tear down sessions that were abandoned or finished a while ago.

        Returns:
            The evicted session ids
        """
        now = self._now()
        expired = [
            session.id
            for session in self._sessions.values()
            if now - session.last_accessed_at >= self._idle_ttl
            or (
                session.completed_at is not None
                and now - session.completed_at >= self._completed_ttl
            )
        ]
        for session_id in expired:
            logger.info(f"Evicting expired timer session {session_id}")
            self.remove(session_id)
        return expired
