import pytest

from jobhttpd.cpu.primes import PrimeMethod, check, is_prime

U64_MAX = 2**64 - 1


@pytest.mark.parametrize("p", [2, 3, 5, 7, 11, 13, 17, 19, 23, 29])
def test_small_primes(p):
    assert check(p)


@pytest.mark.parametrize("c", [0, 1, 4, 6, 8, 9, 10, 12, 14, 15])
def test_small_composites(c):
    assert not check(c)


@pytest.mark.parametrize("p", [7919, 104729, 999983, 15485863])
def test_medium_primes(p):
    assert check(p)


@pytest.mark.parametrize(
    "p", [1_000_000_007, 1_000_000_009, 4_294_967_291, 18_446_744_073_709_551_557]
)
def test_large_primes(p):
    assert check(p)


@pytest.mark.parametrize("c", [1_000_000_000, 4_294_967_296, 9_223_372_036_854_775_808])
def test_large_composites(c):
    assert not check(c)


@pytest.mark.parametrize("n", [561, 1105, 1729, 2465, 6601, 8911, 10585, 15841])
def test_carmichael_numbers(n):
    assert not check(n)


def test_even_numbers():
    for n in range(4, 100, 2):
        assert not check(n), n


def test_boundary_values():
    assert not check(0)
    assert not check(1)
    assert check(2)
    assert check(U64_MAX - 58)
    assert not check(U64_MAX)


def test_consistency_between_methods():
    for n in range(1, 5000):
        assert is_prime(n, PrimeMethod.TRIAL) == is_prime(n, PrimeMethod.MILLER_RABIN), n


def test_trial_method_values():
    assert is_prime(104729, PrimeMethod.TRIAL)
    assert not is_prime(104729 * 7919, PrimeMethod.TRIAL)