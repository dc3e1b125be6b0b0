"""Digits of pi by the Chudnovsky series in integer arithmetic."""

import math

_C3_OVER_24 = 640320**3 // 24
_GUARD_DIGITS = 10


def pi_number(digits: int) -> str:
    """Return pi as text with ``digits`` digits after the decimal point."""
    if digits < 0:
        raise ValueError("digits must be non-negative")
    one = 10 ** (digits + _GUARD_DIGITS)

    a_k = one
    a_sum = one
    b_sum = 0
    k = 1
    while True:
        a_k *= -(6 * k - 5) * (2 * k - 1) * (6 * k - 1)
        a_k = _div_trunc(a_k, k * k * k * _C3_OVER_24)
        if a_k == 0:
            break
        a_sum += a_k
        b_sum += k * a_k
        k += 1

    total = 13591409 * a_sum + 545140134 * b_sum
    pi = 426880 * math.isqrt(10005 * one * one) * one // total
    return _format_pi(pi, digits)


def _div_trunc(a: int, b: int) -> int:
    """Integer division rounding towards zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _format_pi(pi: int, digits: int) -> str:
    text = str(pi)
    if len(text) < 2:
        text = "0" + text
    text = f"{text[0]}.{text[1:]}"
    return text[: 2 + digits]