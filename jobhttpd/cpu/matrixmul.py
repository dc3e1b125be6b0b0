"""Deterministic modular matrix multiplication, summarised by a SHA-256 digest."""

import hashlib
import json
import struct
import time

MOD = 1_000_000_007
_MASK64 = (1 << 64) - 1
_GOLDEN = 0x9E3779B97F4A7C15
_XORSHIFT_MULTIPLIER = 0x2545F4914F6CDD1D
_SECOND_SEED_MASK = 0xDEADBEEFCAFEBABE


def _xorshift64star(seed: int, count: int) -> list[int]:
    """Return ``count`` outputs of XorShift64*; a zero seed is replaced to avoid lock-up."""
    x = (seed & _MASK64) or _GOLDEN
    out = []
    for _ in range(count):
        x ^= x >> 12
        x = (x ^ (x << 25)) & _MASK64
        x ^= x >> 27
        x = (x * _XORSHIFT_MULTIPLIER) & _MASK64
        out.append(x)
    return out


def _gen_matrix(n: int, seed: int) -> list[list[int]]:
    values = [v % MOD for v in _xorshift64star(seed, n * n)]
    return [values[row * n:(row + 1) * n] for row in range(n)]


def _matmul_mod(a: list[list[int]], b: list[list[int]]) -> list[list[int]]:
    columns = list(zip(*b))
    return [
        [sum(x * y for x, y in zip(row, col)) % MOD for col in columns]
        for row in a
    ]


def matrixmul(size: int, seed: int) -> tuple[str, int]:
    """Multiply two seeded ``size``x``size`` matrices mod 1e9+7.

    Returns the SHA-256 hex digest of the product (row-major, big-endian u64)
    and the elapsed milliseconds.
    """
    start = time.monotonic()
    a = _gen_matrix(size, seed)
    b = _gen_matrix(size, (seed & _MASK64) ^ _SECOND_SEED_MASK)
    c = _matmul_mod(a, b)
    flat = [v for row in c for v in row]
    digest = hashlib.sha256(struct.pack(f">{len(flat)}Q", *flat)).hexdigest()
    return digest, int((time.monotonic() - start) * 1000)


def matrixmul_json(size: int, seed: int) -> str:
    """Return ``{"n":..., "elapsed_ms":..., "sha256":...}`` as compact JSON."""
    digest, elapsed = matrixmul(size, seed)
    return json.dumps({"n": size, "elapsed_ms": elapsed, "sha256": digest}, separators=(",", ":"))