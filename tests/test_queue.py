import threading

import pytest

from jobhttpd.jobs.job import Job, Priority
from jobhttpd.jobs.queue import JobQueue, QueueFullError


def _job(priority=Priority.NORMAL):
    return Job("isprime", {}, timeout=60, priority=priority)


def test_priority_order():
    q = JobQueue()
    low, normal, high = _job(Priority.LOW), _job(Priority.NORMAL), _job(Priority.HIGH)
    for job in (low, normal, high):
        q.enqueue(job)
    assert [q.dequeue() for _ in range(3)] == [high, normal, low]


def test_fifo_within_priority():
    q = JobQueue()
    jobs = [_job() for _ in range(4)]
    for job in jobs:
        q.enqueue(job)
    assert [q.dequeue() for _ in range(4)] == jobs


def test_lengths_by_priority():
    q = JobQueue()
    q.enqueue(_job(Priority.HIGH))
    q.enqueue(_job(Priority.LOW))
    q.enqueue(_job(Priority.LOW))
    assert q.len_by_priority() == (1, 0, 2)
    assert q.queue_lengths() == q.len_by_priority()
    assert q.total_len() == 3


def test_try_enqueue_rejects_when_full():
    q = JobQueue()
    q.try_enqueue(_job(), 2)
    q.try_enqueue(_job(Priority.HIGH), 2)
    with pytest.raises(QueueFullError):
        q.try_enqueue(_job(Priority.LOW), 2)
    assert q.total_len() == 2


def test_try_enqueue_zero_capacity():
    q = JobQueue()
    with pytest.raises(QueueFullError):
        q.try_enqueue(_job(), 0)
    assert q.total_len() == 0


def test_dequeue_blocks_until_job_arrives():
    q = JobQueue()
    job = _job()
    timer = threading.Timer(0.1, q.enqueue, args=(job,))
    timer.start()
    try:
        assert q.dequeue() is job
    finally:
        timer.cancel()
    assert q.total_len() == 0