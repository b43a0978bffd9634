"""
Clock implementations.

AsyncioClock schedules ticks on the running asyncio event loop with
`call_at`, so callbacks are dispatched serially on the loop thread and never
block it.
"""
import asyncio
import logging
from typing import Optional

from application.ports import TickCallback

logger = logging.getLogger(__name__)


class AsyncioClock:
    """
    Clock port backed by an asyncio event loop.

    Deadlines are computed from the start time rather than from the previous
    callback so ticks do not drift when a callback is slow.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._configured_loop = loop
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None
        self._callback: Optional[TickCallback] = None
        self._interval_s = 1.0
        self._next_deadline = 0.0

    @property
    def is_running(self) -> bool:
        return self._callback is not None

    def start(self, interval_ms: int, callback: TickCallback) -> None:
        self.stop()
        loop = self._configured_loop or asyncio.get_running_loop()
        self._loop = loop
        self._callback = callback
        self._interval_s = interval_ms / 1000.0
        self._next_deadline = loop.time() + self._interval_s
        self._handle = loop.call_at(self._next_deadline, self._fire)

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._callback = None

    def _fire(self) -> None:
        callback = self._callback
        if callback is None:
            return
        # schedule the next tick first so the callback may stop or restart us
        self._next_deadline += self._interval_s
        self._handle = self._loop.call_at(self._next_deadline, self._fire)
        try:
            callback()
        except Exception:
            logger.exception("Clock tick callback failed")
