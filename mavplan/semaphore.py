"""A counting semaphore with timed waits and a shutdown switch."""

from __future__ import annotations

import threading


class Semaphore:
    """Counting semaphore whose waits can be released by :meth:`shutdown`."""

    def __init__(self, count: int = 0) -> None:
        self._count = count
        self._shutdown = False
        self._condition = threading.Condition()

    def notify(self) -> None:
        """Increment the count and wake one waiter."""
        with self._condition:
            self._count += 1
            self._condition.notify()

    def wait_for(self, seconds: float) -> bool:
        """Wait up to ``seconds`` for a unit; return whether one was taken."""
        with self._condition:
            ready = self._condition.wait_for(
                lambda: self._count > 0 or self._shutdown, timeout=seconds
            )
            if not ready:
                return False
            if self._count > 0:
                self._count -= 1
                return True
            return False

    def shutdown(self) -> None:
        """Release all current and future waiters without granting a unit."""
        with self._condition:
            self._shutdown = True
            self._condition.notify_all()