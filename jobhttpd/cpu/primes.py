"""Primality testing by trial division or deterministic Miller-Rabin."""

from enum import Enum

_SMALL_PRIMES = (
    2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47,
    53, 59, 61, 67, 71, 73, 79, 83, 89, 97,
)

# Bases that make Miller-Rabin deterministic for every 64-bit integer.
_MR_BASES = (2, 325, 9375, 28178, 450775, 9780504, 1795265022)


class PrimeMethod(Enum):
    TRIAL = "trial"
    MILLER_RABIN = "miller-rabin"


def is_prime(n: int, method: PrimeMethod = PrimeMethod.MILLER_RABIN) -> bool:
    """Return whether ``n`` is prime, using the chosen method past the small primes."""
    if n < 2:
        return False
    for p in _SMALL_PRIMES:
        if n == p:
            return True
        if n % p == 0:
            return False
    if method is PrimeMethod.TRIAL:
        d = 31
        while d * d <= n:
            if n % d == 0:
                return False
            d += 2
        return True
    return _miller_rabin(n)


def _miller_rabin(n: int) -> bool:
    if n < 2:
        return False
    d = n - 1
    s = 0
    while d % 2 == 0:
        d >>= 1
        s += 1

    for base in _MR_BASES:
        a = base % n
        if a == 0:
            continue
        x = pow(a, d, n)
        if x in (1, n - 1):
            continue
        for _ in range(1, s):
            x = x * x % n
            if x == n - 1:
                break
        else:
            return False
    return True


def check(n: int) -> bool:
    """Primality by Miller-Rabin."""
    return is_prime(n, PrimeMethod.MILLER_RABIN)