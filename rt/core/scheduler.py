"""Scheduling seam between the engine and whatever event loop hosts it.

The engine only ever asks for "call this every N ms" and "call this once in
N ms".  ``ManualScheduler`` answers those requests against a clock that only
moves when ``advance()`` is called, which lets the whole engine run without
a Qt event loop.
"""

import heapq
import itertools
from collections.abc import Callable


class ScheduledCall:
    """Handle for a pending call.  ``cancel()`` is safe to call repeatedly."""

    def cancel(self) -> None:
        raise NotImplementedError

    @property
    def active(self) -> bool:
        raise NotImplementedError


class Scheduler:

    def every(self, interval_ms: int, callback: Callable[[], None]) -> ScheduledCall:
        raise NotImplementedError

    def once(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledCall:
        raise NotImplementedError


class _ManualCall(ScheduledCall):

    def __init__(self, callback, interval_ms=None):
        self.callback = callback
        self.interval_ms = interval_ms
        self._active = True

    def cancel(self):
        self._active = False

    @property
    def active(self):
        return self._active


class ManualScheduler(Scheduler):
    """Deterministic scheduler driven by ``advance(ms)``."""

    def __init__(self):
        self.now_ms = 0
        self._queue = []
        self._seq = itertools.count()

    def _push(self, due_ms, call):
        heapq.heappush(self._queue, (due_ms, next(self._seq), call))

    def every(self, interval_ms, callback):
        call = _ManualCall(callback, interval_ms=max(1, int(interval_ms)))
        self._push(self.now_ms + call.interval_ms, call)
        return call

    def once(self, delay_ms, callback):
        call = _ManualCall(callback)
        self._push(self.now_ms + max(0, int(delay_ms)), call)
        return call

    @property
    def pending(self):
        return sum(1 for _, _, call in self._queue if call.active)

    # Moves the clock forward, firing everything that falls due on the way in time order. Repeating calls are
    # re-queued before their callback runs so a callback that cancels its own handle sticks.
    def advance(self, ms):
        target = self.now_ms + int(ms)
        while self._queue and self._queue[0][0] <= target:
            due_ms, _, call = heapq.heappop(self._queue)
            if not call.active:
                continue
            self.now_ms = due_ms
            if call.interval_ms is not None:
                self._push(due_ms + call.interval_ms, call)
            else:
                call.cancel()
            call.callback()
        self.now_ms = target
