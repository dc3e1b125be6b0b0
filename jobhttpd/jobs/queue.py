"""A thread-safe job queue served strictly by priority, FIFO within a priority."""

import threading
from collections import deque

from jobhttpd.jobs.job import Job, Priority

_ORDER = (Priority.HIGH, Priority.NORMAL, Priority.LOW)
_WAIT_SECONDS = 0.5


class QueueFullError(Exception):
    """The queue already holds its maximum number of jobs."""


class JobQueue:
    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._lanes: dict[Priority, deque[Job]] = {p: deque() for p in _ORDER}

    def try_enqueue(self, job: Job, max_size: int) -> None:
        """Add ``job`` unless the queue already holds ``max_size`` jobs."""
        with self._cond:
            if sum(len(lane) for lane in self._lanes.values()) >= max_size:
                raise QueueFullError("QueueFull")
            self._lanes[job.priority].append(job)
            self._cond.notify()

    def enqueue(self, job: Job) -> None:
        """Add ``job`` regardless of size."""
        with self._cond:
            self._lanes[job.priority].append(job)
            self._cond.notify()

    def dequeue(self) -> Job:
        """Remove and return the next job, blocking until one is available."""
        with self._cond:
            while True:
                for priority in _ORDER:
                    lane = self._lanes[priority]
                    if lane:
                        return lane.popleft()
                self._cond.wait(_WAIT_SECONDS)

    def len_by_priority(self) -> tuple[int, int, int]:
        """Return the (high, normal, low) queue lengths."""
        with self._cond:
            return tuple(len(self._lanes[p]) for p in _ORDER)  # type: ignore[return-value]

    def total_len(self) -> int:
        return sum(self.len_by_priority())

    def queue_lengths(self) -> tuple[int, int, int]:
        return self.len_by_priority()