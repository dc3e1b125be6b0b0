"""Compression of stored files with gzip or xz."""

import gzip
import json
import lzma
import os
import shutil
import time
from dataclasses import dataclass
from pathlib import Path

_CODECS = ("gzip", "xz")
_SUFFIXES = {"gzip": "gz", "xz": "xz"}


@dataclass(frozen=True)
class CompressResult:
    output_file: Path
    compressed_size: int
    elapsed_ms: int


def _storage_base() -> Path:
    return Path(os.environ.get("FILE_STORAGE_PATH", "./data/files"))


def compress_file(name: str, codec: str) -> CompressResult:
    """Compress a stored file next to itself, adding ``.gz`` or ``.xz``.

    Raises FileNotFoundError when the input is missing and ValueError for
    an unknown codec.
    """
    input_path = _storage_base() / name
    if not input_path.exists():
        raise FileNotFoundError("Input file not found")
    if codec not in _CODECS:
        raise ValueError("Unsupported codec")

    out_path = input_path.with_name(f"{input_path.name}.{_SUFFIXES[codec]}")

    start = time.monotonic()
    with input_path.open("rb") as src, out_path.open("wb") as raw_out:
        if codec == "gzip":
            with gzip.GzipFile(fileobj=raw_out, mode="wb", compresslevel=6) as encoder:
                shutil.copyfileobj(src, encoder)
        else:
            with lzma.LZMAFile(raw_out, mode="wb", preset=6) as encoder:
                shutil.copyfileobj(src, encoder)
    elapsed = int((time.monotonic() - start) * 1000)

    return CompressResult(
        output_file=out_path,
        compressed_size=out_path.stat().st_size,
        elapsed_ms=elapsed,
    )


def compress_json(name: str, codec: str) -> str:
    """Compress and describe the outcome as JSON, errors included."""
    try:
        res = compress_file(name, codec)
    except (OSError, ValueError) as exc:
        return json.dumps({"error": str(exc)}, separators=(",", ":"))
    return json.dumps(
        {
            "output": str(res.output_file),
            "size_bytes": res.compressed_size,
            "elapsed_ms": res.elapsed_ms,
        },
        separators=(",", ":"),
    )