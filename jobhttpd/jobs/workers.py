"""Worker threads that drain a job queue, and the metrics they keep."""

import logging
import math
import threading
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Iterable

from jobhttpd.jobs.job import Job, JobState, JobStatus
from jobhttpd.jobs.queue import JobQueue

METRIC_WINDOW = 1000

_log = logging.getLogger(__name__)

Executor = Callable[[Job], None]


def _window() -> "deque[float]":
    return deque(maxlen=METRIC_WINDOW)


def _std_dev_ms(samples: Iterable[float]) -> float:
    values = [float(int(s * 1000)) for s in samples]
    if not values:
        return 0.0
    mean = sum(values) / len(values)
    variance = sum((v - mean) ** 2 for v in values) / len(values)
    return math.sqrt(variance)


@dataclass
class WorkerMetrics:
    """Running statistics of a pool; times are in seconds."""

    total_workers: int = 0
    active_workers: int = 0
    total_jobs: int = 0
    avg_wait: float = 0.0
    avg_exec: float = 0.0
    avg_total: float = 0.0
    wait_samples: "deque[float]" = field(default_factory=_window)
    exec_samples: "deque[float]" = field(default_factory=_window)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def std_wait_ms(self) -> float:
        """Population standard deviation of recent wait times, in milliseconds."""
        with self.lock:
            return _std_dev_ms(self.wait_samples)

    def std_exec_ms(self) -> float:
        """Population standard deviation of recent execution times, in milliseconds."""
        with self.lock:
            return _std_dev_ms(self.exec_samples)

    def record(self, wait_time: float, exec_time: float) -> None:
        """Fold one finished job into the averages and sample windows."""
        with self.lock:
            self.avg_wait = (self.avg_wait * 9 + wait_time) / 10
            self.wait_samples.append(wait_time)
            self.avg_exec = (self.avg_exec * 9 + exec_time) / 10
            self.exec_samples.append(exec_time)
            self.avg_total = (self.avg_total * 9 + wait_time + exec_time) / 10
            self.total_jobs += 1

    def _worker_started(self) -> None:
        with self.lock:
            self.active_workers += 1

    def _worker_finished(self) -> None:
        with self.lock:
            if self.active_workers > 0:
                self.active_workers -= 1


def _work(queue: JobQueue, execute: Executor, metrics: WorkerMetrics) -> None:
    while True:
        job = queue.dequeue()
        with job.lock:
            if job.status.state is JobState.CANCELED:
                continue

        metrics._worker_started()
        wait_time = time.monotonic() - job.created_at
        with job.lock:
            job.started_at = time.monotonic()
            job.status = JobStatus(JobState.RUNNING)

        exec_start = time.monotonic()
        failed = False
        try:
            execute(job)
        except Exception:
            _log.exception("job %s (%s) crashed", job.id, job.task)
            failed = True
        exec_time = time.monotonic() - exec_start

        metrics.record(wait_time, exec_time)
        with job.lock:
            if failed:
                job.status = JobStatus.error("panic")
            else:
                job.finished_at = time.monotonic()
        metrics._worker_finished()


def spawn_workers(tag: str, pool_size: int, queue: JobQueue, execute: Executor) -> WorkerMetrics:
    """Start ``pool_size`` daemon threads running ``execute`` on queued jobs."""
    metrics = WorkerMetrics(total_workers=pool_size)
    for idx in range(pool_size):
        threading.Thread(
            target=_work,
            args=(queue, execute, metrics),
            name=f"{tag}-worker-{idx}",
            daemon=True,
        ).start()
    return metrics


class WorkerPool:
    """A queue and the workers serving it; workers start with ``start``."""

    def __init__(self, tag: str, size: int) -> None:
        self.tag = tag
        self.size = size
        self.queue = JobQueue()
        self.metrics = WorkerMetrics(total_workers=0)
        self._started = False

    def start(self, execute: Executor) -> None:
        if self._started:
            raise RuntimeError(f"{self.tag} pool already started")
        self._started = True
        self.metrics = spawn_workers(self.tag, self.size, self.queue, execute)

    def queue_lengths(self) -> tuple[int, int, int]:
        """Return the (high, normal, low) queue lengths."""
        return self.queue.len_by_priority()