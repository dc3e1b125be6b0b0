from unittest.mock import patch

from jobhttpd.web.response import (
    BAD_REQUEST,
    NOT_FOUND,
    OK,
    SERVICE_UNAVAILABLE,
    Response,
)


def split(raw: bytes):
    head, _, body = raw.partition(b"\r\n\r\n")
    return head.decode(), body


def test_status_line_and_body():
    raw = Response(OK).with_body("hello").to_bytes(False)
    head, body = split(raw)
    assert head.startswith("HTTP/1.0 200 OK\r\n")
    assert body == b"hello"
    assert "Content-Length: 5\n" in head
    assert "Connection: close\n" in head


def test_status_constants():
    assert Response(BAD_REQUEST).to_bytes(False).startswith(b"HTTP/1.0 400 Bad Request\r\n")
    assert Response(NOT_FOUND).to_bytes(False).startswith(b"HTTP/1.0 404 Not Found\r\n")
    assert Response(SERVICE_UNAVAILABLE).to_bytes(False).startswith(
        b"HTTP/1.0 503 Service Unavailable\r\n"
    )


def test_date_header_uses_epoch_seconds():
    with patch("time.time", return_value=1700000000.7):
        raw = Response(OK).to_bytes(False)
    assert "Date: Epoch 1700000000\n" in raw.decode()


def test_server_header():
    raw = Response(OK).to_bytes(False)
    assert "Server: jobhttpd/0.1\n" in raw.decode()


def test_default_content_type_added():
    head, _ = split(Response(OK).to_bytes(False))
    assert "Content-Type: text/plain; charset=utf-8\n" in head


def test_custom_content_type_replaces_default():
    head, _ = split(Response(OK).set_header("Content-Type", "application/json").to_bytes(False))
    assert "Content-Type: application/json\n" in head
    assert "text/plain" not in head


def test_managed_headers_not_duplicated():
    resp = (
        Response(OK)
        .set_header("content-length", "999")
        .set_header("Server", "other")
        .set_header("X-Extra", "1")
        .with_body("ab")
    )
    head, _ = split(resp.to_bytes(False))
    assert head.count("ontent-") == 2  # Content-Length and default Content-Type
    assert "999" not in head
    assert "other" not in head
    assert "X-Extra: 1\n" in head


def test_head_keeps_length_but_drops_body():
    resp = Response(OK).with_body("payload")
    raw = resp.to_bytes(True)
    assert raw.endswith(b"\r\n\r\n")
    assert b"payload" not in raw
    assert b"Content-Length: 7\n" in raw
    assert resp.to_bytes(False).endswith(b"payload")


def test_with_body_accepts_bytes():
    resp = Response(OK).with_body(b"\x00\x01")
    assert resp.body == b"\x00\x01"
    assert resp.to_bytes(False).endswith(b"\r\n\r\n\x00\x01")