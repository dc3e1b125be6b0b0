import json

import pytest

from jobhttpd.fileops.grep import grep_file, grep_json


@pytest.fixture
def storage(tmp_path, monkeypatch):
    monkeypatch.setenv("FILE_STORAGE_PATH", str(tmp_path))
    return tmp_path


def make_file(base, name, content):
    (base / name).write_bytes(content.encode("utf-8"))


def test_grep_no_matches(storage):
    make_file(storage, "grep_none.txt", "apple\nbanana\ncarrot")
    res = grep_file("grep_none.txt", "xyz")
    assert res.total_matches == 0
    assert res.matched_lines == []


def test_grep_basic_matches(storage):
    make_file(storage, "grep_basic.txt", "rust\nrocks\nrustacean\nRUST!")
    res = grep_file("grep_basic.txt", "(?i)rust")
    assert res.total_matches == 3
    assert res.matched_lines == ["rust", "rustacean", "RUST!"]


def test_grep_limit_to_first_10(storage):
    make_file(storage, "grep_limit.txt", "".join(f"match_line_{i}\n" for i in range(25)))
    res = grep_file("grep_limit.txt", "match_line_")
    assert res.total_matches == 25
    assert len(res.matched_lines) == 10
    assert res.matched_lines[0].startswith("match_line_0")


def test_grep_performance_large(storage):
    content = "".join("rust rocks!\n" if i % 10 == 0 else "nothing here\n" for i in range(50_000))
    make_file(storage, "grep_large.txt", content)
    res = grep_file("grep_large.txt", "rust")
    assert res.total_matches == 5000
    assert len(res.matched_lines) == 10
    assert res.elapsed_ms < 1000


def test_crlf_stripped(storage):
    make_file(storage, "crlf.txt", "alpha\r\nbeta\r\n")
    res = grep_file("crlf.txt", "a$")
    assert res.matched_lines == ["alpha", "beta"]


def test_missing_file(storage):
    with pytest.raises(FileNotFoundError):
        grep_file("nope.txt", "x")


def test_invalid_pattern(storage):
    make_file(storage, "p.txt", "x\n")
    with pytest.raises(ValueError):
        grep_file("p.txt", "(unclosed")


def test_grep_json(storage):
    make_file(storage, "j.txt", 'say "hi"\nbye\n')
    data = json.loads(grep_json("j.txt", "hi"))
    assert data["matches"] == 1
    assert data["lines"] == ['say "hi"']


def test_grep_json_error(storage):
    data = json.loads(grep_json("absent.txt", "x"))
    assert "error" in data
    assert set(data) == {"error"}