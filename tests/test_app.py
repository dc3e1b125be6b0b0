import json

import pytest

from jobhttpd.app import build_routes, main
from jobhttpd.jobs.manager import JobManager
from jobhttpd.web.errors import NotFound
from jobhttpd.web.request import HttpMethod, HttpRequest


@pytest.fixture
def dispatcher(tmp_path):
    return build_routes(JobManager(0, 0, persist_path=tmp_path / "state.jsonl"))


def _body(resp):
    return json.loads(resp.body.decode("utf-8"))


def test_command_route(dispatcher):
    req = HttpRequest(method=HttpMethod.GET, path="/fibonacci", query="num=10")
    assert _body(dispatcher.dispatch(req))["fibonacci"] == 55


def test_job_route(dispatcher):
    req = HttpRequest(method=HttpMethod.GET, path="/jobs/submit", query="task=isprime&n=7")
    body = _body(dispatcher.dispatch(req))
    status = dispatcher.dispatch(
        HttpRequest(method=HttpMethod.GET, path="/jobs/status", query=f"id={body['job_id']}")
    )
    assert _body(status)["status"] == "queued"


def test_unregistered_get_path_not_found(dispatcher):
    with pytest.raises(NotFound):
        dispatcher.dispatch(HttpRequest(method=HttpMethod.GET, path="/"))


def test_post_keeps_default_echo(dispatcher):
    req = HttpRequest(method=HttpMethod.POST, path="/", body=b"hi")
    assert dispatcher.dispatch(req).body == b"You POSTed: hi"


def test_main_reports_bad_bind_address(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("BIND_ADDRESS", "bogus")
    monkeypatch.setenv("JOB_PERSIST_PATH", str(tmp_path / "state.jsonl"))
    monkeypatch.setenv("CPU_WORKERS", "0")
    monkeypatch.setenv("IO_WORKERS", "0")
    assert main([]) == 1
    assert "Server encountered a fatal error" in capsys.readouterr().err