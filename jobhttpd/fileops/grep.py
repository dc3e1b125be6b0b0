"""Regular-expression search over the lines of a stored file."""

import json
import os
import re
import time
from dataclasses import dataclass, field
from pathlib import Path

_MAX_REPORTED_LINES = 10


@dataclass
class GrepResult:
    total_matches: int
    matched_lines: list[str] = field(default_factory=list)
    elapsed_ms: int = 0


def _lines(fh):
    """Yield the file's lines split on LF, with LF or CRLF removed."""
    for raw in fh:
        line = raw.decode("utf-8")
        if line.endswith("\n"):
            line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
        yield line


def grep_file(file_name: str, pattern: str) -> GrepResult:
    """Count lines matching ``pattern`` and keep the first ten of them.

    Raises OSError if the file cannot be opened and ValueError for a bad pattern.
    """
    path = Path(os.environ.get("FILE_STORAGE_PATH", "./data/files")) / file_name
    with path.open("rb", buffering=128 * 1024) as fh:
        try:
            regex = re.compile(pattern)
        except re.error as exc:
            raise ValueError(str(exc)) from exc

        total = 0
        matches: list[str] = []
        start = time.monotonic()
        for line in _lines(fh):
            if regex.search(line):
                total += 1
                if len(matches) < _MAX_REPORTED_LINES:
                    matches.append(line)

    return GrepResult(
        total_matches=total,
        matched_lines=matches,
        elapsed_ms=int((time.monotonic() - start) * 1000),
    )


def grep_json(file_name: str, pattern: str) -> str:
    """Search and describe the outcome as JSON, errors included."""
    try:
        res = grep_file(file_name, pattern)
    except (OSError, ValueError) as exc:
        return json.dumps({"error": str(exc)}, separators=(",", ":"))
    return json.dumps(
        {"matches": res.total_matches, "lines": res.matched_lines, "elapsed_ms": res.elapsed_ms},
        separators=(",", ":"),
    )