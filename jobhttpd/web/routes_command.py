"""Routes for the small synchronous commands: text, math, files and time."""

import json
import re
import time
from typing import Optional

from jobhttpd.util import files, hashing, mathutil, text, timeutil
from jobhttpd.web.errors import BadRequest, IoFailure
from jobhttpd.web.handler import DispatcherBuilder
from jobhttpd.web.request import HttpRequest
from jobhttpd.web.response import INTERNAL_SERVER_ERROR, OK, Response, Status

_UNSIGNED_RE = re.compile(r"\+?[0-9]+")
_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_MAX_FIBONACCI_INPUT = 93


def _parse_unsigned(raw: str, bits: int = 64) -> Optional[int]:
    if not _UNSIGNED_RE.fullmatch(raw):
        return None
    value = int(raw)
    return value if value < (1 << bits) else None


def _parse_signed(raw: str, bits: int = 32) -> Optional[int]:
    if not _SIGNED_RE.fullmatch(raw):
        return None
    value = int(raw)
    limit = 1 << (bits - 1)
    return value if -limit <= value < limit else None


def _required(req: HttpRequest, key: str) -> str:
    value = req.query_param(key)
    if value is None:
        raise BadRequest(f"Missing query parameter '{key}'")
    return value


def _non_empty_text(req: HttpRequest) -> str:
    value = _required(req, "text")
    if not value.strip():
        raise BadRequest("Parameter 'text' cannot be empty")
    return value


def _json(payload: dict, status: Status = OK) -> Response:
    return (
        Response(status)
        .set_header("Content-Type", "application/json")
        .with_body(json.dumps(payload))
    )


def fibonacci_handler(req: HttpRequest) -> Response:
    """GET /fibonacci?num=N"""
    raw = _required(req, "num")
    n = _parse_unsigned(raw)
    if n is None:
        raise BadRequest(f"Invalid integer for 'num': {raw}")
    if n > _MAX_FIBONACCI_INPUT:
        raise BadRequest("Value too large — risk of overflow")
    return _json({"num": n, "fibonacci": mathutil.fibonacci(n)})


def toupper_handler(req: HttpRequest) -> Response:
    """GET /toupper?text=abcd"""
    value = _non_empty_text(req)
    return _json({"original": value, "upper": text.to_upper(value)})


def reverse_handler(req: HttpRequest) -> Response:
    """GET /reverse?text=abcdef"""
    value = _non_empty_text(req)
    return _json({"original": value, "reversed": text.reverse(value)})


def hash_handler(req: HttpRequest) -> Response:
    """GET /hash?text=someinput"""
    value = _non_empty_text(req)
    return _json({"text": value, "sha256": hashing.hash_text(value)})


def timestamp_handler(req: HttpRequest) -> Response:
    """GET /timestamp"""
    return _json({"timestamp": str(timeutil.timestamp())})


def simulate_handler(req: HttpRequest) -> Response:
    """GET /simulate?seconds=s&task=name"""
    raw = _required(req, "seconds")
    seconds = _parse_unsigned(raw)
    if seconds is None:
        raise BadRequest(f"Invalid integer for 'seconds': {raw}")
    task = req.query_param("task")
    if task is None:
        task = "demo"
    result = timeutil.simulate(seconds, task)
    return _json({"task": task, "duration_seconds": seconds, "result": result})


def createfile_handler(req: HttpRequest) -> Response:
    """GET /createfile?name=filename&content=text&repeat=x"""
    name = _required(req, "name")
    if not name.strip():
        raise BadRequest("Parameter 'name' cannot be empty")

    content = req.query_param("content")
    if content is None:
        content = "Hello"
    if not content.strip():
        raise BadRequest("Parameter 'content' cannot be empty")

    repeat_raw = req.query_param("repeat")
    if repeat_raw is None:
        repeat_raw = "1"
    repeat = _parse_unsigned(repeat_raw)
    if repeat is None:
        raise BadRequest(f"Invalid integer for 'repeat': {repeat_raw}")
    if repeat == 0:
        raise BadRequest("Parameter 'repeat' must be greater than 0")

    try:
        files.create_file(name, content, repeat)
    except OSError as exc:
        raise IoFailure(exc) from exc
    return _json({"file": name, "content": content, "repeat": repeat})


def deletefile_handler(req: HttpRequest) -> Response:
    """GET /deletefile?name=filename"""
    name = _required(req, "name")
    try:
        message = files.delete_file(name)
    except OSError as exc:
        return _json(
            {"status": "error", "message": f"Failed to delete '{name}': {exc}"},
            INTERNAL_SERVER_ERROR,
        )
    return _json({"status": "ok", "message": message})


def random_handler(req: HttpRequest) -> Response:
    """GET /random?count=n&min=a&max=b"""
    count_raw = req.query_param("count") or "5"
    min_raw = req.query_param("min") or "0"
    max_raw = req.query_param("max") or "100"
    if req.query_param("count") == "":
        count_raw = ""
    if req.query_param("min") == "":
        min_raw = ""
    if req.query_param("max") == "":
        max_raw = ""

    count = _parse_unsigned(count_raw)
    if count is None:
        raise BadRequest(f"Invalid 'count': {count_raw}")
    minimum = _parse_signed(min_raw)
    if minimum is None:
        raise BadRequest(f"Invalid 'min': {min_raw}")
    maximum = _parse_signed(max_raw)
    if maximum is None:
        raise BadRequest(f"Invalid 'max': {max_raw}")
    if minimum > maximum:
        raise BadRequest("'min' cannot be greater than 'max'")

    values = mathutil.random_values(count, minimum, maximum)
    return _json({"count": count, "min": minimum, "max": maximum, "values": values})


def sleep_handler(req: HttpRequest) -> Response:
    """GET /sleep?seconds=s"""
    raw = _required(req, "seconds")
    seconds = _parse_unsigned(raw)
    if seconds is None:
        raise BadRequest(f"Invalid integer for 'seconds': {raw}")
    timeutil.sleep(seconds)
    return _json({"slept_seconds": seconds})


def help_handler(req: HttpRequest) -> Response:
    """GET /help"""
    return _json(
        {
            "endpoint": "/help",
            "description": "Available commands and usage information.",
            "details": text.help().replace('"', "'"),
        }
    )


def status_handler(req: HttpRequest) -> Response:
    """GET /status"""
    return _json({"status": "running", "uptime": int(time.time()), "message": "Server running OK"})


def register(builder: DispatcherBuilder) -> DispatcherBuilder:
    """Add the command routes to ``builder`` and return it."""
    return (
        builder.get("/fibonacci", fibonacci_handler)
        .get("/toupper", toupper_handler)
        .get("/reverse", reverse_handler)
        .get("/hash", hash_handler)
        .get("/timestamp", timestamp_handler)
        .get("/simulate", simulate_handler)
        .get("/createfile", createfile_handler)
        .get("/deletefile", deletefile_handler)
        .get("/random", random_handler)
        .get("/sleep", sleep_handler)
        .get("/help", help_handler)
        .get("/status", status_handler)
    )