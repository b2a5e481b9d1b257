"""
Frame clock: stands in for the host's display-refresh scheduler
"""

from typing import Callable, Optional


class FrameClock:
    """
    Holds at most one pending frame callback, like requestAnimationFrame.

    The host calls tick() once per display refresh; the callback runs and must
    request the next frame itself if it wants to keep going.
    """

    def __init__(self):
        self._pending: Optional[Callable[[], None]] = None
        self.ticks = 0

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def request_frame(self, callback: Callable[[], None]):
        self._pending = callback

    def cancel_frame(self):
        self._pending = None

    def tick(self) -> bool:
        """Run the pending callback, if any. Returns whether one ran."""
        callback, self._pending = self._pending, None
        if callback is None:
            return False
        self.ticks += 1
        callback()
        return True

    def run(self, max_frames: int) -> int:
        """Tick until nothing is pending or max_frames ran. Returns frames run."""
        n = 0
        while n < max_frames and self.tick():
            n += 1
        return n
