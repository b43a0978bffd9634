"""
Application-layer exceptions.

These exceptions are used across the engine, infrastructure and API layers.
Invalid playback transitions are not errors (they are no-ops); these cover
conditions a caller has to react to.
"""


class TimerEngineError(Exception):
    """Base class for timer engine errors."""

    pass


class SessionNotFoundError(TimerEngineError):
    """Raised when a timer session id is not registered."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Timer session not found: {session_id}")


class InvalidPlanError(TimerEngineError):
    """Raised when exercise input cannot be turned into a plan.

    Individual field problems fall back to defaults; this is reserved for
    input that is not an exercise list at all (unreadable file, wrong shape).
    """

    pass


class UnknownPresetError(TimerEngineError):
    """Raised when an interval preset name is not defined."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown timer preset: {name}")
