import time

from jobhttpd.jobs.job import Job, JobState, JobStatus, Priority


def test_new_job_defaults():
    job = Job("isprime", {"n": "7"}, timeout=60)
    assert job.status == JobStatus(JobState.QUEUED)
    assert job.priority is Priority.NORMAL
    assert job.result is None
    assert job.started_at is None and job.finished_at is None
    assert job.params == {"n": "7"}


def test_ids_are_unique_uuids():
    ids = {Job("factor").id for _ in range(50)}
    assert len(ids) == 50
    assert all(len(i) == 36 and i.count("-") == 4 for i in ids)


def test_priority_set_at_creation():
    job = Job("pi", {}, timeout=10, priority=Priority.HIGH)
    assert job.priority is Priority.HIGH


def test_is_expired_with_zero_timeout():
    job = Job("pi", {}, timeout=0)
    time.sleep(0.01)
    assert job.is_expired() is True


def test_not_expired_with_long_timeout():
    job = Job("pi", {}, timeout=3600)
    assert job.is_expired() is False


def test_from_saved_restores_fields():
    status = JobStatus.error("boom")
    job = Job.from_saved("abc", "grep", {"name": "f"}, Priority.LOW, status, 30, '{"x":1}')
    assert job.id == "abc"
    assert job.task == "grep"
    assert job.priority is Priority.LOW
    assert job.status == status
    assert job.result == '{"x":1}'
    assert job.timeout == 30


def test_status_text_form():
    assert str(JobStatus(JobState.QUEUED)) == "Queued"
    assert str(JobStatus(JobState.DONE)) == "Done"
    assert str(JobStatus.error("boom")) == 'Error("boom")'


def test_error_status_flag():
    assert JobStatus.error("x").is_error is True
    assert JobStatus(JobState.RUNNING).is_error is False