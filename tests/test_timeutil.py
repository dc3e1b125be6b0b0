import time

import pytest

from jobhttpd.util.timeutil import run_with_timeout, simulate, sleep, timestamp


def test_timestamp_format():
    ts = timestamp()
    assert ts.isdigit()
    assert abs(int(ts) - time.time()) < 5


def test_simulate():
    msg = simulate(1, "demo")
    assert "completed" in msg
    assert msg == "Simulation 'demo' completed after 1 seconds"


def test_sleep_waits():
    outcome = run_with_timeout(2000, lambda: sleep(0.1))
    assert outcome is not None
    value, elapsed = outcome
    assert value is None
    assert elapsed >= 90


def test_sleep_outlasts_short_timeout():
    assert run_with_timeout(50, lambda: sleep(0.5)) is None


def test_run_with_timeout_returns_result():
    outcome = run_with_timeout(2000, lambda: 6 * 7)
    assert outcome is not None
    value, elapsed = outcome
    assert value == 42
    assert elapsed >= 0


def test_run_with_timeout_expires():
    assert run_with_timeout(50, lambda: time.sleep(0.5)) is None


def test_run_with_timeout_propagates_errors():
    def boom():
        raise KeyError("missing")

    with pytest.raises(KeyError):
        run_with_timeout(1000, boom)