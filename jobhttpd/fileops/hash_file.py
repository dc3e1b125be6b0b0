"""SHA-256 digests of stored files."""

import hashlib
import json
import os
import time
from dataclasses import dataclass
from pathlib import Path

_CHUNK = 8192


@dataclass(frozen=True)
class HashResult:
    hash_hex: str
    elapsed_ms: int
    file_size: int


def hash_file(name: str, algo: str) -> HashResult:
    """Hash a stored file; only ``sha256`` is supported.

    Raises FileNotFoundError for a missing file and ValueError for another algorithm.
    """
    path = Path(os.environ.get("FILE_STORAGE_PATH", "./data/files")) / name
    if not path.exists():
        raise FileNotFoundError("File not found")

    start = time.monotonic()
    with path.open("rb") as fh:
        if algo != "sha256":
            raise ValueError("Unsupported hash algorithm")
        hasher = hashlib.sha256()
        for chunk in iter(lambda: fh.read(_CHUNK), b""):
            hasher.update(chunk)

    return HashResult(
        hash_hex=hasher.hexdigest(),
        elapsed_ms=int((time.monotonic() - start) * 1000),
        file_size=path.stat().st_size,
    )


def hash_json(name: str, algo: str) -> str:
    """Hash and describe the outcome as JSON, errors included."""
    try:
        res = hash_file(name, algo)
    except (OSError, ValueError) as exc:
        return json.dumps({"error": str(exc)}, separators=(",", ":"))
    return json.dumps(
        {
            "algorithm": algo,
            "hash": res.hash_hex,
            "size_bytes": res.file_size,
            "elapsed_ms": res.elapsed_ms,
        },
        separators=(",", ":"),
    )