"""Jobs, their priorities and their lifecycle states."""

import json
import threading
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class JobState(Enum):
    QUEUED = "Queued"
    RUNNING = "Running"
    DONE = "Done"
    ERROR = "Error"
    CANCELED = "Canceled"
    TIMEOUT = "Timeout"


@dataclass(frozen=True)
class JobStatus:
    """A job's state; an error state carries its message."""

    state: JobState
    message: Optional[str] = None

    @classmethod
    def error(cls, message: str) -> "JobStatus":
        return cls(JobState.ERROR, message)

    @property
    def is_error(self) -> bool:
        return self.state is JobState.ERROR

    def __str__(self) -> str:
        if self.state is JobState.ERROR:
            return f"Error({json.dumps(self.message or '')})"
        return self.state.value


class Priority(Enum):
    LOW = "Low"
    NORMAL = "Normal"
    HIGH = "High"


@dataclass(eq=False)
class Job:
    """A unit of work; mutable fields are updated under ``lock`` by workers."""

    task: str
    params: dict[str, str] = field(default_factory=dict)
    timeout: float = 60.0
    priority: Priority = Priority.NORMAL
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    status: JobStatus = field(default_factory=lambda: JobStatus(JobState.QUEUED))
    progress: float = 0.0
    result: Optional[str] = None
    created_at: float = field(default_factory=time.monotonic)
    started_at: Optional[float] = None
    finished_at: Optional[float] = None
    cancel_flag: bool = False
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def is_expired(self) -> bool:
        """Whether more than ``timeout`` seconds have passed since creation."""
        return time.monotonic() - self.created_at > self.timeout

    @classmethod
    def from_saved(
        cls,
        job_id: str,
        task: str,
        params: dict[str, str],
        priority: Priority,
        status: JobStatus,
        timeout: float,
        result: Optional[str],
    ) -> "Job":
        """Rebuild a job from a persisted record."""
        return cls(
            task=task,
            params=dict(params),
            timeout=timeout,
            priority=priority,
            id=job_id,
            status=status,
            result=result,
        )