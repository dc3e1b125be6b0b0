"""Line, word and byte counts of stored files."""

import json
import os
import time
from dataclasses import dataclass
from pathlib import Path

_CHUNK = 64 * 1024
# The same bytes that bytes.split() treats as separators.
_WHITESPACE = b" \t\n\r\x0b\x0c"


@dataclass(frozen=True)
class WordCounts:
    lines: int
    words: int
    bytes: int


def word_count(name: str) -> tuple[WordCounts, int, Path]:
    """Count newlines, whitespace-separated words and bytes of a stored file.

    Returns ``(counts, elapsed_ms, path)``. Raises OSError if the file cannot be read.
    """
    path = Path(os.environ.get("FILE_STORAGE_PATH", "./data/files")) / name
    with path.open("rb") as fh:
        start = time.monotonic()
        lines = words = size = 0
        in_word = False
        for chunk in iter(lambda: fh.read(_CHUNK), b""):
            size += len(chunk)
            lines += chunk.count(b"\n")
            words += len(chunk.split())
            if in_word and chunk[0] not in _WHITESPACE:
                # The first word of this chunk continues the last one of the previous chunk.
                words -= 1
            in_word = chunk[-1] not in _WHITESPACE
        elapsed = int((time.monotonic() - start) * 1000)
    return WordCounts(lines=lines, words=words, bytes=size), elapsed, path


def wordcount_json(name: str) -> str:
    """Count and describe the outcome as JSON, errors included."""
    try:
        counts, elapsed, path = word_count(name)
    except OSError as exc:
        return json.dumps({"error": str(exc)}, separators=(",", ":"))
    return json.dumps(
        {
            "file": str(path),
            "lines": counts.lines,
            "words": counts.words,
            "bytes": counts.bytes,
            "elapsed_ms": elapsed,
        },
        separators=(",", ":"),
    )