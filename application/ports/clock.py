"""
Clock Interface (Port).

All periodic callbacks of the engine go through this port so that playback can
be driven by a real event loop in production and by a fake clock in tests.
"""
from typing import Callable, Protocol

TickCallback = Callable[[], None]

TICK_INTERVAL_MS = 1000


class Clock(Protocol):
    """
    Abstract periodic tick source.

    A Clock instance carries at most one subscription. Callers must stop()
    before start() when replacing a subscription.
    """

    def start(self, interval_ms: int, callback: TickCallback) -> None:
        """
        Begin invoking `callback` every `interval_ms` milliseconds.

        Args:
            interval_ms: Tick period in milliseconds
            callback: Invoked once per tick, serially
        """
        ...

    def stop(self) -> None:
        """Cancel the active subscription. No-op when nothing is scheduled."""
        ...

    @property
    def is_running(self) -> bool:
        """Whether a subscription is currently active."""
        ...


ClockFactory = Callable[[], Clock]
