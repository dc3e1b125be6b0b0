"""Task runners: each takes string parameters and returns a JSON result."""

import json
import re
import time
from typing import Callable, Mapping, Optional

from jobhttpd.cpu.factor import factorize
from jobhttpd.cpu.mandelbrot import mandelbrot
from jobhttpd.cpu.matrixmul import matrixmul
from jobhttpd.cpu.pi import pi_number
from jobhttpd.cpu.primes import PrimeMethod, is_prime
from jobhttpd.fileops.compress import compress_file
from jobhttpd.fileops.grep import grep_file
from jobhttpd.fileops.hash_file import hash_file
from jobhttpd.fileops.sort_file import sort_file
from jobhttpd.fileops.word_count import word_count

Params = Mapping[str, str]

_UINT_RE = re.compile(r"\+?[0-9]+")


class TaskError(Exception):
    """A task could not produce a result."""


def _uint(params: Params, key: str, bits: int = 64) -> Optional[int]:
    raw = params.get(key)
    if raw is None or not _UINT_RE.fullmatch(raw):
        return None
    value = int(raw)
    return value if value < (1 << bits) else None


def _required_uint(params: Params, key: str, bits: int = 64) -> int:
    value = _uint(params, key, bits)
    if value is None:
        raise TaskError(f"Missing or invalid '{key}' parameter")
    return value


def _spaced(obj: dict) -> str:
    return json.dumps(obj)


def _compact(obj: dict) -> str:
    return json.dumps(obj, separators=(",", ":"))


def run_is_prime(params: Params) -> str:
    n = _required_uint(params, "n")
    method_name = params.get("method", "miller-rabin")
    method = (
        PrimeMethod.TRIAL
        if method_name.lower() in ("trial", "sqrt")
        else PrimeMethod.MILLER_RABIN
    )
    return _spaced({"n": n, "is_prime": is_prime(n, method), "method": method_name})


def run_factor(params: Params) -> str:
    n = _required_uint(params, "n")
    factors = [[p, c] for p, c in factorize(n)]
    return _spaced({"n": n, "factors": factors})


def run_pi(params: Params) -> str:
    digits = _required_uint(params, "digits")
    if digits == 0:
        raise TaskError("Digits must be greater than 0")
    start = time.monotonic()
    value = pi_number(digits)
    elapsed = int((time.monotonic() - start) * 1000)
    return _spaced({"digits": digits, "algo": "chudnovsky", "result": value, "elapsed_ms": elapsed})


def run_matrixmul(params: Params) -> str:
    size = _required_uint(params, "size")
    seed = _uint(params, "seed")
    if seed is None:
        seed = 123
    if size == 0 or size > 1000:
        raise TaskError("Matrix size must be between 1 and 1000")
    digest, elapsed = matrixmul(size, seed)
    return _spaced({"size": size, "seed": seed, "result_sha256": digest, "elapsed_ms": elapsed})


def run_mandelbrot(params: Params) -> str:
    width = _required_uint(params, "width")
    height = _required_uint(params, "height")
    max_iter = _uint(params, "max_iter", bits=32)
    if max_iter is None:
        max_iter = 1000
    if width == 0 or height == 0:
        raise TaskError("Width and height must be > 0")
    data, elapsed = mandelbrot(width, height, max_iter)
    return _spaced(
        {"width": width, "height": height, "max_iter": max_iter, "elapsed_ms": elapsed, "map": data}
    )


def run_sort_file(params: Params) -> str:
    name = params.get("name", "")
    algo = params.get("algo", "merge")
    try:
        res = sort_file(name, algo)
    except (OSError, ValueError) as exc:
        raise TaskError(f"Error sorting file: {exc}") from exc
    return _compact(
        {
            "file": name,
            "algo": algo,
            "sorted_file": res.output_file.name,
            "count": res.count,
            "elapsed_ms": res.elapsed_ms,
        }
    )


def run_word_count(params: Params) -> str:
    name = params.get("name", "")
    try:
        counts, elapsed, path = word_count(name)
    except OSError as exc:
        raise TaskError(f"Word count failed: {exc}") from exc
    return _compact(
        {
            "file": path.name,
            "lines": counts.lines,
            "words": counts.words,
            "bytes": counts.bytes,
            "elapsed_ms": elapsed,
        }
    )


def run_grep(params: Params) -> str:
    name = params.get("name", "")
    pattern = params.get("pattern", "")
    try:
        res = grep_file(name, pattern)
    except (OSError, ValueError) as exc:
        raise TaskError(f"Grep failed: {exc}") from exc
    return _compact(
        {
            "file": name,
            "pattern": pattern,
            "matches": res.total_matches,
            "lines": res.matched_lines,
            "elapsed_ms": res.elapsed_ms,
        }
    )


def run_compress(params: Params) -> str:
    name = params.get("name", "")
    codec = params.get("codec", "gzip")
    try:
        res = compress_file(name, codec)
    except (OSError, ValueError) as exc:
        raise TaskError(f"Compression failed: {exc}") from exc
    return _compact(
        {
            "file": name,
            "codec": codec,
            "output": res.output_file.name,
            "size_bytes": res.compressed_size,
            "elapsed_ms": res.elapsed_ms,
        }
    )


def run_hash_file(params: Params) -> str:
    name = params.get("name", "")
    algo = params.get("algo", "sha256")
    try:
        res = hash_file(name, algo)
    except (OSError, ValueError) as exc:
        raise TaskError(f"Hashing failed: {exc}") from exc
    return _compact(
        {
            "file": name,
            "algorithm": algo,
            "hash": res.hash_hex,
            "size_bytes": res.file_size,
            "elapsed_ms": res.elapsed_ms,
        }
    )


_RUNNERS: dict[str, Callable[[Params], str]] = {
    "isprime": run_is_prime,
    "factor": run_factor,
    "pi": run_pi,
    "matrixmul": run_matrixmul,
    "mandelbrot": run_mandelbrot,
    "sortfile": run_sort_file,
    "wordcount": run_word_count,
    "grep": run_grep,
    "compress": run_compress,
    "hashfile": run_hash_file,
}


def run_task(task: str, params: Params) -> str:
    """Run the named task; raises TaskError for unknown tasks or failures."""
    runner = _RUNNERS.get(task)
    if runner is None:
        raise TaskError(f"Unknown task '{task}'")
    return runner(params)