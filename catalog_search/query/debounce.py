"""Single-slot cooperative debounce scheduler."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from ..utils import get_logger

LOGGER = get_logger("query.debounce")

TaskCallback = Callable[[], Any]
Clock = Callable[[], float]


@dataclass
class PendingTask:
    callback: TaskCallback = field(repr=False)
    due: float
    generation: int
    cancelled: bool = False
    fired: bool = False

    @property
    def done(self) -> bool:
        return self.cancelled or self.fired


class DebounceSlot:
    """Holds at most one scheduled task.

    Scheduling a new task supersedes the previous one: its handle is marked
    cancelled and it never runs. Nothing runs by itself; the owner calls
    :meth:`run_pending` from its event loop (or a test passes ``now``).
    """

    def __init__(self, delay: float, *, clock: Optional[Clock] = None) -> None:
        self.delay = max(0.0, float(delay))
        self._clock = clock or time.monotonic
        self._task: Optional[PendingTask] = None
        self._generation = 0

    @property
    def pending(self) -> Optional[PendingTask]:
        return self._task

    def schedule(self, callback: TaskCallback, *, now: Optional[float] = None) -> PendingTask:
        self.cancel()
        self._generation += 1
        start = self._clock() if now is None else now
        self._task = PendingTask(callback=callback, due=start + self.delay, generation=self._generation)
        return self._task

    def cancel(self) -> None:
        if self._task is not None:
            self._task.cancelled = True
            self._task = None

    def time_remaining(self, *, now: Optional[float] = None) -> Optional[float]:
        if self._task is None:
            return None
        current = self._clock() if now is None else now
        return max(0.0, self._task.due - current)

    def run_pending(self, *, now: Optional[float] = None, catch: bool = True) -> bool:
        """Run the task if its quiet period has elapsed. Returns True when it ran."""
        task = self._task
        if task is None:
            return False
        current = self._clock() if now is None else now
        if current < task.due:
            return False
        return self._run(task, catch=catch)

    def flush(self, *, catch: bool = True) -> bool:
        """Run the pending task immediately, regardless of its due time."""
        task = self._task
        if task is None:
            return False
        return self._run(task, catch=catch)

    def _run(self, task: PendingTask, *, catch: bool) -> bool:
        self._task = None
        task.fired = True
        try:
            task.callback()
        except Exception as exc:
            if catch:
                LOGGER.error("Debounced task %d failed: %s", task.generation, exc)
            else:
                raise
        return True


__all__ = ["DebounceSlot", "PendingTask"]
