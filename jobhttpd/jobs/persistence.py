"""Job state kept as JSON lines, one record per job, rewritten atomically."""

import json
import logging
import os
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from jobhttpd.jobs.job import Job, JobState, JobStatus, Priority

_log = logging.getLogger(__name__)
_FILE_LOCK = threading.Lock()

PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class SavedJob:
    """A job record read back from the state file."""

    id: str
    task: str
    priority: Priority
    status: JobStatus
    params: Optional[dict[str, Any]]
    result: Optional[str]


def _elapsed_ms(since: Optional[float], now: float) -> Optional[int]:
    if since is None:
        return None
    return int((now - since) * 1000)


def _snapshot(job: Job) -> dict[str, Any]:
    now = time.monotonic()
    with job.lock:
        return {
            "id": job.id,
            "task": job.task,
            "priority": job.priority.value,
            "status": str(job.status),
            "progress": job.progress,
            "result": job.result if job.result is not None else "",
            "params": dict(job.params),
            "created_at_ms": _elapsed_ms(job.created_at, now),
            "started_at": _elapsed_ms(job.started_at, now),
            "finished_at": _elapsed_ms(job.finished_at, now),
            "timeout_secs": int(job.timeout),
            "cancel_flag": job.cancel_flag,
        }


def _read_records(path: Path) -> list[dict[str, Any]]:
    """Return every line of the file that parses as a JSON value."""
    records = []
    try:
        with path.open("r", encoding="utf-8", errors="replace") as fh:
            for line in fh:
                try:
                    records.append(json.loads(line))
                except ValueError:
                    continue
    except OSError:
        return []
    return records


def _record_id(record: Any) -> Optional[str]:
    if isinstance(record, dict) and isinstance(record.get("id"), str):
        return record["id"]
    return None


def _write_records(path: Path, records: list[Any]) -> None:
    tmp_path = path.with_suffix(".tmp")
    try:
        with tmp_path.open("w", encoding="utf-8", newline="\n") as fh:
            for record in records:
                fh.write(json.dumps(record, sort_keys=True, separators=(",", ":")))
                fh.write("\n")
        os.replace(tmp_path, path)
    except OSError as exc:
        _log.error("[persistence] failed to replace state file: %s", exc)


def save_job_state(job: Job, path: PathLike) -> None:
    """Store the job's current state, replacing any earlier record of it."""
    path = Path(path)
    snapshot = _snapshot(job)
    with _FILE_LOCK:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError:
            pass
        existing = []
        if path.exists():
            existing = [r for r in _read_records(path) if _record_id(r) != job.id]
        existing.append(snapshot)
        _write_records(path, existing)


def _parse_status(text: str) -> JobStatus:
    if text == "Done":
        return JobStatus(JobState.DONE)
    if text == "Canceled":
        return JobStatus(JobState.CANCELED)
    if text.startswith("Error"):
        return JobStatus.error(text)
    # Queued, Running, and anything unrecognised are restored as queued.
    return JobStatus(JobState.QUEUED)


def _parse_priority(value: Any) -> Priority:
    if value == "High":
        return Priority.HIGH
    if value == "Low":
        return Priority.LOW
    return Priority.NORMAL


def load_job_states(path: PathLike) -> list[SavedJob]:
    """Read back every well-formed job record, in file order."""
    path = Path(path)
    with _FILE_LOCK:
        if not path.exists():
            return []
        records = _read_records(path)

    restored = []
    for record in records:
        if not isinstance(record, dict):
            continue
        if not all(key in record for key in ("id", "task", "status")):
            continue
        job_id = record["id"] if isinstance(record["id"], str) else ""
        task = record["task"] if isinstance(record["task"], str) else ""
        status_text = record["status"] if isinstance(record["status"], str) else ""
        result = record.get("result")
        params = record.get("params")
        restored.append(
            SavedJob(
                id=job_id,
                task=task,
                priority=_parse_priority(record.get("priority")),
                status=_parse_status(status_text),
                params=dict(params) if isinstance(params, dict) else None,
                result=result if isinstance(result, str) else None,
            )
        )
    return restored


def remove_job_state(job_id: str, path: PathLike) -> None:
    """Drop the record of ``job_id`` from the state file, if there is one."""
    path = Path(path)
    with _FILE_LOCK:
        if not path.exists():
            return
        remaining = [r for r in _read_records(path) if _record_id(r) != job_id]
        _write_records(path, remaining)