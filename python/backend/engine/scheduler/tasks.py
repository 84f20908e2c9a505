"""Single-threaded queue of delayed, cancellable callbacks.

Nothing runs on its own: the owner of the event loop (a terminal key
poll, a pygame frame, a Qt timer) calls ``run_pending`` and due tasks
run synchronously in that call.
"""

from __future__ import annotations

import heapq
import itertools
import time
from collections.abc import Callable


class ScheduledTask:
    """Handle for a callback queued with ``TaskQueue.call_later``."""

    __slots__ = ("due", "callback", "cancelled", "done")

    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.done = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.done)


class TaskQueue:
    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self.clock = clock
        self._heap: list[tuple[float, int, ScheduledTask]] = []
        self._counter = itertools.count()

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(self.clock() + delay_ms / 1000.0, callback)
        heapq.heappush(self._heap, (task.due, next(self._counter), task))
        return task

    def run_pending(self) -> int:
        """Run every due, uncancelled task.  Returns how many ran."""
        ran = 0
        now = self.clock()
        while self._heap and self._heap[0][0] <= now:
            _, _, task = heapq.heappop(self._heap)
            if task.cancelled:
                continue
            task.done = True
            task.callback()
            ran += 1
        return ran

    @property
    def pending(self) -> int:
        return sum(1 for _, _, task in self._heap if task.active)

    @property
    def next_due(self) -> float | None:
        dues = [task.due for _, _, task in self._heap if task.active]
        return min(dues) if dues else None
