import os
import time
from typing import Callable, Optional

DEBUG_MODE = os.getenv("DEBUG", "0") == "1"

KANA_AUTO_ADVANCE_SECONDS = float(os.getenv("KANA_AUTO_ADVANCE_SECONDS", "10"))
WORD_AUTO_ADVANCE_SECONDS = float(os.getenv("WORD_AUTO_ADVANCE_SECONDS", "15"))


class AutoAdvance:
    """
    A single cancellable delayed action owned by one practice session.

    There is no background thread: the host calls ``poll()`` whenever it
    handles an event, and the pending callback runs at most once when its
    deadline has passed. Scheduling again replaces the pending action.

    Args:
        delay: seconds between ``schedule`` and the deadline
        clock: monotonic time source, injectable for tests
    """

    def __init__(self, delay: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.delay = delay
        self.clock = clock
        self._deadline: Optional[float] = None
        self._callback: Optional[Callable[[], None]] = None

    @property
    def pending(self) -> bool:
        return self._callback is not None

    def schedule(self, callback: Callable[[], None]) -> None:
        self._deadline = self.clock() + self.delay
        self._callback = callback
        if DEBUG_MODE:
            print(f"⏱️  Auto-advance scheduled in {self.delay:g}s")

    def cancel(self) -> None:
        if DEBUG_MODE and self._callback is not None:
            print("⏱️  Auto-advance cancelled")
        self._deadline = None
        self._callback = None

    def remaining(self) -> Optional[float]:
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - self.clock())

    def due(self, now: Optional[float] = None) -> bool:
        if self._deadline is None:
            return False
        current = self.clock() if now is None else now
        return current >= self._deadline

    def poll(self) -> bool:
        """Run the pending callback if its deadline has passed."""
        if not self.due():
            return False
        callback = self._callback
        self.cancel()
        if callback is not None:
            callback()
        return True
