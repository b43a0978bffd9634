"""
Router package for the timer API.

This package contains all API routers organized by domain:
- health: Health check endpoint
- timer_presets: Interval preset listing
- timer_sessions: Timer session lifecycle, playback actions and cues
"""

from api.routers.health import router as health_router
from api.routers.timer_presets import router as timer_presets_router
from api.routers.timer_sessions import router as timer_sessions_router

__all__ = [
    "health_router",
    "timer_presets_router",
    "timer_sessions_router",
]
