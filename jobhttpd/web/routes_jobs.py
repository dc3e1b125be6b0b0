"""Routes to submit, inspect and cancel jobs, and to read pool metrics."""

import json
import logging

from jobhttpd.jobs.job import JobState, Priority
from jobhttpd.jobs.manager import JobManager, JobRejected
from jobhttpd.web.errors import BadRequest
from jobhttpd.web.handler import DispatcherBuilder
from jobhttpd.web.request import HttpRequest
from jobhttpd.web.response import (
    INTERNAL_SERVER_ERROR,
    NOT_FOUND,
    OK,
    SERVICE_UNAVAILABLE,
    Response,
    Status,
)

_log = logging.getLogger(__name__)

_PRIORITIES = {"low": Priority.LOW, "high": Priority.HIGH}

_STATUS_VIEW = {
    JobState.QUEUED: ("queued", 0, "unknown"),
    JobState.RUNNING: ("running", 50, "estimating"),
    JobState.DONE: ("done", 100, "0s"),
    JobState.ERROR: ("error", 100, "n/a"),
    JobState.CANCELED: ("canceled", 0, "n/a"),
    JobState.TIMEOUT: ("timeout", 100, "n/a"),
}


def _dumps(payload: dict) -> str:
    return json.dumps(payload, separators=(",", ":"))


def _json_body(body: str, status: Status = OK) -> Response:
    return Response(status).set_header("Content-Type", "application/json").with_body(body)


def _job_id(req: HttpRequest) -> str:
    job_id = req.query_param("id")
    if job_id is None:
        raise BadRequest("Missing query parameter 'id'")
    if not job_id.strip():
        raise BadRequest("Parameter 'id' cannot be empty")
    return job_id


def _not_found(job_id: str) -> Response:
    return _json_body(_dumps({"id": job_id, "error": "Job not found"}), NOT_FOUND)


class JobEndpoints:
    """The job routes, bound to one job manager."""

    def __init__(self, job_manager: JobManager) -> None:
        self.job_manager = job_manager

    def result(self, req: HttpRequest) -> Response:
        """GET /jobs/result?id=ID"""
        job_id = _job_id(req)
        status = self.job_manager.status(job_id)
        if status is None:
            return _not_found(job_id)
        if status.state is JobState.DONE:
            output = self.job_manager.result(job_id)
            if output is None:
                return _json_body(
                    _dumps({"id": job_id, "error": "Job finished but no output available"}),
                    INTERNAL_SERVER_ERROR,
                )
            return _json_body(f'{{"id":{json.dumps(job_id)},"output":{output}}}')
        if status.state is JobState.ERROR:
            return _json_body(
                _dumps({"id": job_id, "error": status.message or ""}), INTERNAL_SERVER_ERROR
            )
        return _json_body(_dumps({"id": job_id, "status": status.state.value}))

    def status(self, req: HttpRequest) -> Response:
        """GET /jobs/status?id=ID"""
        job_id = _job_id(req)
        status = self.job_manager.status(job_id)
        if status is None:
            return _not_found(job_id)
        name, progress, eta = _STATUS_VIEW[status.state]
        return _json_body(_dumps({"id": job_id, "status": name, "progress": progress, "eta": eta}))

    def submit(self, req: HttpRequest) -> Response:
        """GET /jobs/submit?task=NAME&priority=low|normal|high&<params>"""
        task = req.query_param("task")
        if task is None:
            raise BadRequest("Missing query parameter 'task'")
        if not task.strip():
            raise BadRequest("Parameter 'task' cannot be empty")

        priority_name = req.query_param("priority")
        if priority_name is None:
            priority_name = "normal"
        priority = _PRIORITIES.get(priority_name.lower(), Priority.NORMAL)

        params = {}
        for pair in req.query.split("&"):
            key, sep, value = pair.partition("=")
            if sep and key not in ("task", "priority"):
                params[key] = value

        try:
            job_id = self.job_manager.submit(task, params, priority)
        except JobRejected as exc:
            return _json_body(exc.body, SERVICE_UNAVAILABLE).set_header("Retry-After", "1")

        _log.info("Job submitted: id='%s', task='%s'", job_id, task)
        return _json_body(_dumps({"job_id": job_id, "status": "queued", "priority": priority_name}))

    def cancel(self, req: HttpRequest) -> Response:
        """GET /jobs/cancel?id=ID"""
        job_id = _job_id(req)
        outcome = "canceled" if self.job_manager.cancel(job_id) else "not_cancelable"
        return _json_body(_dumps({"id": job_id, "status": outcome}))

    def metrics(self, req: HttpRequest) -> Response:
        """GET /metrics"""
        pools = self.job_manager.get_metrics()
        report = {}
        for name in ("cpu", "io"):
            pool = pools.get(name)
            if pool is None:
                continue
            high, normal, low = pool.queue_lengths
            wm = pool.worker_metrics
            std_wait = wm.std_wait_ms()
            std_exec = wm.std_exec_ms()
            with wm.lock:
                active, total = wm.active_workers, wm.total_workers
                total_jobs = wm.total_jobs
                avg_wait, avg_exec, avg_total = wm.avg_wait, wm.avg_exec, wm.avg_total
            report[name] = {
                "queue_size": {"high": high, "normal": normal, "low": low},
                "workers": {"active": active, "total": total},
                "jobs": {"total": total_jobs},
                "timings": {
                    "avg_wait_ms": int(avg_wait * 1000),
                    "avg_exec_ms": int(avg_exec * 1000),
                    "avg_total_ms": int(avg_total * 1000),
                    "std_dev_wait_ms": round(std_wait, 2),
                    "std_dev_exec_ms": round(std_exec, 2),
                },
            }
        return _json_body(_dumps({"pools": report}))


def register(builder: DispatcherBuilder, job_manager: JobManager) -> DispatcherBuilder:
    """Add the job routes to ``builder`` and return it."""
    endpoints = JobEndpoints(job_manager)
    return (
        builder.get("/jobs/result", endpoints.result)
        .get("/jobs/status", endpoints.status)
        .get("/jobs/submit", endpoints.submit)
        .get("/jobs/cancel", endpoints.cancel)
        .get("/metrics", endpoints.metrics)
    )