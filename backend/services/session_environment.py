"""
Session environment manager.

Keeps the screen awake while playback is active and tracks fullscreen for UI
chrome visibility. Both capabilities are optional: a missing or unsupported
port turns every call into a no-op, and port failures are logged, never
raised.
"""
import logging
from typing import Callable, List, Optional

from application.ports import FullscreenPort, WakeLockPort
from domain.models import PlaybackState, PlaybackStatus

logger = logging.getLogger(__name__)

_ACQUIRE_STATUSES = (PlaybackStatus.PREPARING, PlaybackStatus.RUNNING)
_RELEASE_STATUSES = (PlaybackStatus.IDLE, PlaybackStatus.PAUSED, PlaybackStatus.COMPLETED)


def _supported(port) -> bool:
    if port is None:
        return False
    try:
        return bool(port.is_supported())
    except Exception as e:
        logger.warning(f"Capability probe failed for {type(port).__name__}: {e}")
        return False


class SessionEnvironmentManager:
    """
    Reacts to playback state changes with wake-lock and fullscreen handling.

    Usage:
        manager = SessionEnvironmentManager(wake_lock=port, fullscreen=fs_port)
        manager.attach(scheduler)
    """

    def __init__(
        self,
        wake_lock: Optional[WakeLockPort] = None,
        fullscreen: Optional[FullscreenPort] = None,
    ):
        self._wake_lock = wake_lock
        self._fullscreen = fullscreen
        self._wake_lock_held = False
        self._is_fullscreen = False
        self._playback_active = False
        self._fullscreen_listeners: List[Callable[[bool], None]] = []

        if _supported(fullscreen):
            try:
                fullscreen.on_change(self._handle_fullscreen_change)
            except Exception as e:
                logger.warning(f"Could not subscribe to fullscreen changes: {e}")

    # =========================================================================
    # Wiring
    # =========================================================================

    def attach(self, scheduler) -> None:
        """Subscribe to a PlaybackScheduler's state changes and teardown."""
        scheduler.add_listener(self.on_state_change)
        scheduler.add_teardown_hook(self.teardown)

    def on_state_change(self, state: PlaybackState) -> None:
        if state.status in _ACQUIRE_STATUSES:
            self._playback_active = True
            self.acquire_wake_lock()
        elif state.status in _RELEASE_STATUSES:
            self._playback_active = False
            self.release_wake_lock()

    def teardown(self) -> None:
        self._playback_active = False
        self.release_wake_lock()

    # =========================================================================
    # Wake lock
    # =========================================================================

    @property
    def wake_lock_held(self) -> bool:
        return self._wake_lock_held

    def acquire_wake_lock(self) -> bool:
        """Acquire the wake-lock; no-op when already held or unsupported."""
        if self._wake_lock_held:
            return True
        if not _supported(self._wake_lock):
            return False
        try:
            self._wake_lock.acquire()
        except Exception as e:
            logger.warning(f"Wake lock request failed: {e}")
            return False
        self._wake_lock_held = True
        logger.debug("Wake lock acquired")
        return True

    def release_wake_lock(self) -> None:
        """Release the wake-lock; no-op when not held."""
        if not self._wake_lock_held:
            return
        self._wake_lock_held = False
        try:
            self._wake_lock.release()
            logger.debug("Wake lock released")
        except Exception as e:
            logger.warning(f"Wake lock release failed: {e}")

    def handle_visibility_change(self, visible: bool) -> None:
        """
        Re-acquire the wake-lock when the page becomes visible again.

        Platforms drop the lock when the page is hidden, so the port is
        released to match; the lock is requested again only if playback is
        still active.
        """
        if not visible:
            self.release_wake_lock()
            return
        if self._playback_active and not self._wake_lock_held:
            logger.info("Page visible again, re-acquiring wake lock")
            self.acquire_wake_lock()

    # =========================================================================
    # Fullscreen
    # =========================================================================

    @property
    def is_fullscreen(self) -> bool:
        return self._is_fullscreen

    @property
    def chrome_visible(self) -> bool:
        """Navigation chrome is hidden while fullscreen."""
        return not self._is_fullscreen

    def add_fullscreen_listener(self, listener: Callable[[bool], None]) -> None:
        self._fullscreen_listeners.append(listener)

    def toggle_fullscreen(self) -> bool:
        """
        Enter or leave fullscreen.

        The tracked flag is updated by the platform change event; when the
        port never reports (or is missing) the flag follows the request.

        Returns:
            The fullscreen flag after the toggle
        """
        if not _supported(self._fullscreen):
            return self._is_fullscreen
        target = not self._is_fullscreen
        try:
            if target:
                self._fullscreen.enter()
            else:
                self._fullscreen.exit()
        except Exception as e:
            logger.warning(f"Fullscreen toggle failed: {e}")
            return self._is_fullscreen
        if self._is_fullscreen != target:
            self._handle_fullscreen_change(target)
        return self._is_fullscreen

    def _handle_fullscreen_change(self, active: bool) -> None:
        if active == self._is_fullscreen:
            return
        self._is_fullscreen = active
        logger.debug(f"Fullscreen {'entered' if active else 'exited'}")
        for listener in list(self._fullscreen_listeners):
            try:
                listener(active)
            except Exception:
                logger.exception("Fullscreen listener failed")
