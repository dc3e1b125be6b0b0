"""Arithmetic helpers: Fibonacci numbers, random draws, modular arithmetic."""

import random


def fibonacci(n: int) -> int:
    """Return the n-th Fibonacci number, with fibonacci(0) == 0."""
    if n < 0:
        raise ValueError("n must be non-negative")
    if n == 0:
        return 0
    a, b = 0, 1
    for _ in range(1, n):
        a, b = b, a + b
    return b


def random_values(count: int, minimum: int, maximum: int) -> list[int]:
    """Return ``count`` random integers in the inclusive range [minimum, maximum]."""
    if minimum > maximum:
        raise ValueError("minimum cannot be greater than maximum")
    return [random.randint(minimum, maximum) for _ in range(count)]


def mul_mod(a: int, b: int, m: int) -> int:
    """Return (a * b) mod m."""
    return ((a % m) * (b % m)) % m


def pow_mod(a: int, e: int, m: int) -> int:
    """Return a ** e mod m."""
    return pow(a, e, m)