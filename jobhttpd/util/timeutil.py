"""Clock helpers, deliberate delays, and running work under a deadline."""

import queue
import threading
import time
from typing import Callable, Optional, TypeVar

T = TypeVar("T")


def timestamp() -> str:
    """Return the current Unix time in whole seconds, as text."""
    return str(int(time.time()))


def sleep(seconds: float) -> None:
    """Block for the given number of seconds."""
    time.sleep(seconds)


def simulate(seconds: float, task: str) -> str:
    """Pretend to work on ``task`` for ``seconds`` and report completion."""
    print(f"Starting simulation: {task}")
    time.sleep(seconds)
    return f"Simulation '{task}' completed after {seconds} seconds"


def run_with_timeout(timeout_ms: int, func: Callable[[], T]) -> Optional[tuple[T, int]]:
    """Run ``func`` in a background thread and wait up to ``timeout_ms``.

    Returns ``(result, elapsed_ms)`` if it finished in time, otherwise ``None``;
    the work is left to finish on its own. Exceptions raised by ``func`` are re-raised.
    """
    outcome: "queue.Queue[tuple[bool, object, int]]" = queue.Queue(maxsize=1)

    def worker() -> None:
        start = time.monotonic()
        try:
            value = func()
        except BaseException as exc:  # handed back to the caller
            outcome.put((False, exc, 0))
            return
        elapsed = int((time.monotonic() - start) * 1000)
        outcome.put((True, value, elapsed))

    threading.Thread(target=worker, daemon=True).start()
    try:
        ok, value, elapsed = outcome.get(timeout=timeout_ms / 1000)
    except queue.Empty:
        return None
    if not ok:
        raise value  # type: ignore[misc]
    return value, elapsed  # type: ignore[return-value]