import io

import pytest

from jobhttpd.web.errors import (
    BadRequest,
    Conflict,
    InternalError,
    IoFailure,
    NotFound,
    ServiceUnavailable,
    TooManyRequests,
)
from jobhttpd.web.handler import Dispatcher
from jobhttpd.web.response import (
    BAD_REQUEST,
    CONFLICT,
    INTERNAL_SERVER_ERROR,
    NOT_FOUND,
    OK,
    SERVICE_UNAVAILABLE,
    TOO_MANY_REQUESTS,
    Response,
)
from jobhttpd.web.server import (
    HttpServer,
    ServerConfig,
    create_listen_socket,
    error_status,
    handle_connection,
    parse_ipv4_addr,
)


class FakeStream:
    def __init__(self, data: bytes):
        self._in = io.BytesIO(data)
        self.out = io.BytesIO()

    def readline(self, *args):
        return self._in.readline(*args)

    def read(self, *args):
        return self._in.read(*args)

    def write(self, data):
        return self.out.write(data)

    def flush(self):
        pass


def serve(data: bytes, dispatcher=None) -> bytes:
    stream = FakeStream(data)
    handle_connection(stream, dispatcher or Dispatcher())
    return stream.out.getvalue()


def test_get_root():
    raw = serve(b"GET / HTTP/1.0\r\n\r\n")
    assert raw.startswith(b"HTTP/1.0 200 OK\r\n")
    assert raw.endswith(b"</html>")


def test_head_omits_body():
    raw = serve(b"HEAD / HTTP/1.0\r\n\r\n")
    assert raw.startswith(b"HTTP/1.0 200 OK\r\n")
    assert raw.endswith(b"\r\n\r\n")
    assert b"Headers only" not in raw


def test_not_found_json_error():
    raw = serve(b"GET /missing HTTP/1.0\r\n\r\n")
    assert raw.startswith(b"HTTP/1.0 404 Not Found\r\n")
    assert raw.endswith(b'{"error": "NotFound"}')
    assert b"Content-Type: application/json\n" in raw


def test_parse_error_is_bad_request():
    raw = serve(b"\r\n")
    assert raw.startswith(b"HTTP/1.0 400 Bad Request\r\n")
    assert raw.endswith(b'{"error": "BadRequest: Empty request line"}')


def test_conflict_from_default_handler():
    raw = serve(b"GET /conflict HTTP/1.0\r\n\r\n")
    assert raw.startswith(b"HTTP/1.0 409 Conflict\r\n")
    assert raw.endswith(b'{"error": "Conflict: Simulated conflict"}')


def test_os_error_from_handler_is_internal():
    def broken(req):
        raise FileNotFoundError("gone")

    dispatcher = Dispatcher.builder().get("/x", broken).build()
    raw = serve(b"GET /x HTTP/1.0\r\n\r\n", dispatcher)
    assert raw.startswith(b"HTTP/1.0 500 Internal Server Error\r\n")


def test_custom_route():
    dispatcher = Dispatcher.builder().get("/ok", lambda r: Response(OK).with_body(r.query)).build()
    raw = serve(b"GET /ok?a=1 HTTP/1.0\r\n\r\n", dispatcher)
    assert raw.endswith(b"\r\n\r\na=1")


@pytest.mark.parametrize(
    "error,status",
    [
        (BadRequest("x"), BAD_REQUEST),
        (NotFound(), NOT_FOUND),
        (Conflict("x"), CONFLICT),
        (TooManyRequests(), TOO_MANY_REQUESTS),
        (ServiceUnavailable(), SERVICE_UNAVAILABLE),
        (InternalError("x"), INTERNAL_SERVER_ERROR),
        (IoFailure(OSError("x")), INTERNAL_SERVER_ERROR),
    ],
)
def test_error_status(error, status):
    assert error_status(error) == status


@pytest.mark.parametrize(
    "addr,expected",
    [
        ("127.0.0.1:8080", ("127.0.0.1", 8080)),
        (" localhost:80 ", ("127.0.0.1", 80)),
        ("LocalHost:80", ("127.0.0.1", 80)),
        ("*:9000", ("0.0.0.0", 9000)),
        ("0.0.0.0:1", ("0.0.0.0", 1)),
        ("10.0.0.255:65535", ("10.0.0.255", 65535)),
    ],
)
def test_parse_ipv4_addr(addr, expected):
    assert parse_ipv4_addr(addr) == expected


@pytest.mark.parametrize(
    "addr,message",
    [
        ("127.0.0.1", "Address format must be 'HOST:PORT'"),
        ("127.0.0.1:http", "Invalid port value: 'http'"),
        ("127.0.0.1:70000", "Invalid port value: '70000'"),
        ("1.2.3:80", "Invalid IPv4 format: '1.2.3' must have 4 octets"),
        ("1.2.3.4.5:80", "Invalid IPv4 format: '1.2.3.4.5' has too many octets"),
        ("1.2.3.256:80", "Invalid octet value: '256'"),
        ("example.com:80", "Invalid octet value: 'example'"),
    ],
)
def test_parse_ipv4_addr_errors(addr, message):
    with pytest.raises(ValueError) as info:
        parse_ipv4_addr(addr)
    assert str(info.value) == message


def test_rate_limit():
    server = HttpServer(ServerConfig(rate_limit_per_sec=2))
    assert [server.is_rate_limited() for _ in range(4)] == [False, False, True, True]


def test_server_defaults():
    server = HttpServer()
    assert server.cfg == ServerConfig("127.0.0.1:8080", 64, 200)
    assert server.active_connections == 0


def test_create_listen_socket_binds():
    sock = create_listen_socket("127.0.0.1", 0)
    try:
        host, port = sock.getsockname()
        assert host == "127.0.0.1"
        assert port > 0
    finally:
        sock.close()