"""Submission, execution, tracking and restoration of jobs."""

import json
import logging
import os
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

from jobhttpd.jobs.executables import TaskError, run_task
from jobhttpd.jobs.job import Job, JobState, JobStatus, Priority
from jobhttpd.jobs.persistence import load_job_states, save_job_state
from jobhttpd.jobs.queue import QueueFullError
from jobhttpd.jobs.workers import WorkerMetrics, WorkerPool

_log = logging.getLogger(__name__)

DEFAULT_PERSIST_PATH = "./data/persistent/state.jsonl"
_RESTORE_TIMEOUT = 60.0

_CPU_TASKS = frozenset(
    {"isprime", "factor", "pi", "matrixmul", "mandelbrot", "fibonacci", "reverse", "toupper", "random"}
)
_IO_TASKS = frozenset(
    {"sortfile", "wordcount", "grep", "compress", "hashfile", "createfile", "deletefile", "timestamp"}
)


def is_cpu_bound(task: str) -> bool:
    return task in _CPU_TASKS


def is_io_bound(task: str) -> bool:
    return task in _IO_TASKS


def _env_uint(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is not None and raw.isdigit():
        return int(raw)
    return default


class JobRejected(Exception):
    """The job could not be queued; ``body`` is the JSON reply for the client."""

    def __init__(self, pool: str, max_size: int) -> None:
        self.pool = pool
        self.max_size = max_size
        self.body = json.dumps(
            {"error": "queue_full", "pool": pool, "max": max_size, "retry_after_ms": 1500},
            separators=(",", ":"),
        )
        super().__init__(self.body)


@dataclass(frozen=True)
class PoolMetrics:
    queue_lengths: tuple[int, int, int]
    worker_metrics: WorkerMetrics


class JobManager:
    """Owns the CPU and IO pools and the table of every known job."""

    def __init__(
        self,
        cpu_workers: int,
        io_workers: int,
        persist_path: Optional[Union[str, "os.PathLike[str]"]] = None,
    ) -> None:
        if persist_path is None:
            persist_path = os.environ.get("JOB_PERSIST_PATH", DEFAULT_PERSIST_PATH)
        self.persist_path = Path(persist_path)
        self.jobs: dict[str, Job] = {}
        self._jobs_lock = threading.Lock()
        self.cpu_pool = WorkerPool("CPU", cpu_workers)
        self.io_pool = WorkerPool("IO", io_workers)
        self.cpu_pool.start(self.execute_job)
        self.io_pool.start(self.execute_job)
        self._load_persistent_jobs()

    def _get(self, job_id: str) -> Optional[Job]:
        with self._jobs_lock:
            return self.jobs.get(job_id)

    def _register(self, job: Job) -> None:
        with self._jobs_lock:
            self.jobs[job.id] = job

    def submit(self, task: str, params: Mapping[str, str], priority: Priority = Priority.NORMAL) -> str:
        """Queue a job and return its id; raises JobRejected when the pool is full."""
        cpu = is_cpu_bound(task)
        pool = self.cpu_pool if cpu else self.io_pool
        pool_name = "CPU" if cpu else "IO"
        timeout = _env_uint("CPU_TIMEOUT", 60) if cpu else _env_uint("IO_TIMEOUT", 120)

        job = Job(task=task, params=dict(params), timeout=float(timeout), priority=priority)
        self._register(job)

        queue_max = _env_uint("JOB_QUEUE_MAX", 100)
        try:
            pool.queue.try_enqueue(job, queue_max)
        except QueueFullError:
            with job.lock:
                job.status = JobStatus.error(
                    f"QueueFull: {pool_name} pool is at capacity (max={queue_max})"
                )
                job.finished_at = time.monotonic()
                job.result = json.dumps(
                    {"error": "queue_full", "pool": pool_name, "max": queue_max},
                    separators=(",", ":"),
                )
            save_job_state(job, self.persist_path)
            raise JobRejected(pool_name, queue_max) from None

        save_job_state(job, self.persist_path)
        return job.id

    def execute_job(self, job: Job) -> None:
        """Run the job's task, record its outcome and persist it."""
        with job.lock:
            job.status = JobStatus(JobState.RUNNING)
            job.started_at = time.monotonic()

        try:
            output: Optional[str] = run_task(job.task, job.params)
            error: Optional[str] = None
        except TaskError as exc:
            output, error = None, str(exc)

        with job.lock:
            job.result = output
            job.finished_at = time.monotonic()
            if error is not None:
                job.status = JobStatus.error(error)
            elif job.is_expired():
                job.status = JobStatus(JobState.TIMEOUT)
            else:
                job.status = JobStatus(JobState.DONE)

        save_job_state(job, self.persist_path)

    def status(self, job_id: str) -> Optional[JobStatus]:
        job = self._get(job_id)
        if job is None:
            return None
        with job.lock:
            return job.status

    def result(self, job_id: str) -> Optional[str]:
        job = self._get(job_id)
        if job is None:
            return None
        with job.lock:
            return job.result

    def cancel(self, job_id: str) -> bool:
        """Cancel a job that is still queued; returns whether it was canceled."""
        job = self._get(job_id)
        if job is None:
            return False
        with job.lock:
            if job.status.state is JobState.QUEUED:
                job.status = JobStatus(JobState.CANCELED)
                return True
            return False

    def get_metrics(self) -> dict[str, PoolMetrics]:
        return {
            "cpu": PoolMetrics(self.cpu_pool.queue_lengths(), self.cpu_pool.metrics),
            "io": PoolMetrics(self.io_pool.queue_lengths(), self.io_pool.metrics),
        }

    def _load_persistent_jobs(self) -> None:
        for record in load_job_states(self.persist_path):
            params = {
                key: value
                for key, value in (record.params or {}).items()
                if isinstance(value, str)
            }
            job = Job.from_saved(
                record.id,
                record.task,
                params,
                record.priority,
                record.status,
                _RESTORE_TIMEOUT,
                record.result,
            )
            self._register(job)

            if record.status.state in (JobState.QUEUED, JobState.RUNNING):
                if is_cpu_bound(record.task):
                    self.cpu_pool.queue.enqueue(job)
                    _log.info("[restore] Re-queued job %s into CPU pool", record.id)
                elif is_io_bound(record.task):
                    self.io_pool.queue.enqueue(job)
                    _log.info("[restore] Re-queued job %s into IO pool", record.id)
                else:
                    _log.info(
                        "[restore] Job %s has unknown type (task='%s') - skipped requeue",
                        record.id,
                        record.task,
                    )
            else:
                _log.info("[restore] Job %s restored in memory only (status = %s)", record.id, record.status)

        _log.info("[restore] Completed loading job persistence from %s", self.persist_path)