"""Integer factorisation by small-prime division and Pollard's rho."""

import math
import random
from collections import Counter

from jobhttpd.cpu.primes import check

_SMALL_PRIMES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47)


def factorize(n: int) -> list[tuple[int, int]]:
    """Return the prime factorisation of ``n`` as sorted (prime, exponent) pairs."""
    if n < 2:
        return []
    counts: Counter[int] = Counter()
    for p in _SMALL_PRIMES:
        while n % p == 0:
            n //= p
            counts[p] += 1

    pending = [n] if n > 1 else []
    while pending:
        m = pending.pop()
        if m == 1:
            continue
        if check(m):
            counts[m] += 1
            continue
        d = _pollards_rho(m)
        pending.extend((d, m // d))

    return sorted(counts.items())


def _pollards_rho(n: int) -> int:
    """Return a non-trivial divisor of the composite ``n``."""
    if n % 2 == 0:
        return 2
    while True:
        x = random.randrange(2, n - 1)
        y = x
        c = random.randrange(1, n - 1)
        d = 1
        while d == 1:
            x = (x * x + c) % n
            y = (y * y + c) % n
            y = (y * y + c) % n
            d = math.gcd(abs(x - y), n)
        if d != n:
            return d