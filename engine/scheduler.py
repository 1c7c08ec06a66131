"""
Deferred calls for the computer's "thinking" pause.

A scheduler runs a callback after a delay and hands back a PendingMove that
can cancel it. Two hosts are provided:
- ThreadingScheduler: real time, one threading.Timer per call
- ManualScheduler: virtual time, advanced explicitly (tests, console driver)
"""

import heapq
import itertools
import logging
import threading
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)


class PendingMove:
    """
    Handle to a deferred callback.

    Cancelling is idempotent. A cancelled handle never runs its callback,
    even if the underlying timer has already fired.
    """

    def __init__(self, delay: float, callback: Callable[[], None]):
        self.delay = delay
        self._callback = callback
        self._lock = threading.Lock()
        self._cancelled = False
        self._done = False
        self._timer: Optional[threading.Timer] = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._done

    @property
    def active(self) -> bool:
        """True until the callback has run or the handle was cancelled."""
        return not (self._cancelled or self._done)

    def cancel(self) -> None:
        with self._lock:
            if self._done:
                return
            self._cancelled = True
        if self._timer is not None:
            self._timer.cancel()

    def run(self) -> None:
        """Run the callback unless cancelled. Runs at most once."""
        with self._lock:
            if self._cancelled or self._done:
                return
            self._done = True
        self._callback()


class ThreadingScheduler:
    """Runs each callback on a daemon threading.Timer."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> PendingMove:
        handle = PendingMove(delay, callback)
        timer = threading.Timer(delay, handle.run)
        timer.daemon = True
        handle._timer = timer
        timer.start()
        return handle


class ManualScheduler:
    """
    Scheduler driven by a virtual clock.

    Nothing runs until advance() or run_all() is called, so a host (or a test)
    decides exactly when the computer's move lands.
    """

    def __init__(self):
        self.now = 0.0
        self._queue: List[Tuple[float, int, PendingMove]] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> PendingMove:
        handle = PendingMove(delay, callback)
        heapq.heappush(self._queue, (self.now + delay, next(self._counter), handle))
        return handle

    @property
    def pending(self) -> int:
        """Number of callbacks still waiting to run."""
        return sum(1 for _, _, handle in self._queue if handle.active)

    def next_due(self) -> Optional[float]:
        """Virtual time of the next live callback, or None."""
        for due, _, handle in sorted(self._queue):
            if handle.active:
                return due
        return None

    def advance(self, seconds: float) -> int:
        """
        Move the clock forward and run everything that came due, in order.

        Callbacks scheduled while advancing run too if they fall inside the
        window.

        Returns:
            Number of callbacks run.
        """
        if seconds < 0:
            raise ValueError("Cannot move the clock backwards")

        target = self.now + seconds
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            self.now = max(self.now, due)
            if handle.active:
                handle.run()
                ran += 1
        self.now = target
        return ran

    def run_all(self) -> int:
        """Run every pending callback, advancing the clock as needed."""
        ran = 0
        while True:
            due = self.next_due()
            if due is None:
                # Drop cancelled leftovers
                self._queue.clear()
                return ran
            ran += self.advance(due - self.now)
