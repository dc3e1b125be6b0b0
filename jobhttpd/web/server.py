"""A threaded HTTP/1.0 server with connection and rate limits."""

import socket
import sys
import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import BinaryIO, Optional

from jobhttpd.web.errors import (
    BadRequest,
    Conflict,
    IoFailure,
    NotFound,
    ServerError,
    ServiceUnavailable,
    TooManyRequests,
)
from jobhttpd.web.handler import Dispatcher
from jobhttpd.web.request import HttpMethod, HttpRequest
from jobhttpd.web.response import (
    BAD_REQUEST,
    CONFLICT,
    INTERNAL_SERVER_ERROR,
    NOT_FOUND,
    SERVICE_UNAVAILABLE,
    TOO_MANY_REQUESTS,
    Response,
    Status,
)

_LISTEN_BACKLOG = 128
_RATE_WINDOW_SECONDS = 1.0


@dataclass
class ServerConfig:
    bind_addr: str = "127.0.0.1:8080"
    max_connections: int = 64
    rate_limit_per_sec: int = 200


def error_status(error: ServerError) -> Status:
    """Return the HTTP status for a request error."""
    if isinstance(error, BadRequest):
        return BAD_REQUEST
    if isinstance(error, NotFound):
        return NOT_FOUND
    if isinstance(error, Conflict):
        return CONFLICT
    if isinstance(error, TooManyRequests):
        return TOO_MANY_REQUESTS
    if isinstance(error, ServiceUnavailable):
        return SERVICE_UNAVAILABLE
    return INTERNAL_SERVER_ERROR


def _error_response(error: ServerError) -> Response:
    return (
        Response(error_status(error))
        .set_header("Content-Type", "application/json")
        .with_body(f'{{"error": "{error}"}}')
    )


def _send(stream: BinaryIO, data: bytes) -> None:
    try:
        stream.write(data)
        stream.flush()
    except OSError:
        pass


def handle_connection(stream: BinaryIO, dispatcher: Dispatcher) -> None:
    """Read one request from ``stream``, dispatch it and write the reply."""
    try:
        req = HttpRequest.parse(stream)
    except ServerError as exc:
        _send(stream, _error_response(exc).to_bytes(False))
        return

    is_head = req.method is HttpMethod.HEAD
    try:
        resp = dispatcher.dispatch(req)
    except ServerError as exc:
        resp = _error_response(exc)
    except OSError as exc:
        resp = _error_response(IoFailure(exc))
    _send(stream, resp.to_bytes(is_head))


def _parse_u16(text: str) -> Optional[int]:
    body = text[1:] if text.startswith("+") else text
    if not body.isascii() or not body.isdigit():
        return None
    value = int(body)
    return value if value <= 0xFFFF else None


def _parse_u8(text: str) -> Optional[int]:
    value = _parse_u16(text)
    return value if value is not None and value <= 0xFF else None


def parse_ipv4_addr(addr: str) -> tuple[str, int]:
    """Split ``HOST:PORT`` into a dotted IPv4 address and a port.

    ``*`` and ``0.0.0.0`` mean all interfaces and ``localhost`` means
    127.0.0.1. Raises ValueError for anything else that is not IPv4.
    """
    host_str, sep, port_str = addr.strip().rpartition(":")
    if not sep:
        raise ValueError("Address format must be 'HOST:PORT'")
    host_str = host_str.strip()
    port_str = port_str.strip()

    port = _parse_u16(port_str)
    if port is None:
        raise ValueError(f"Invalid port value: '{port_str}'")

    if host_str in ("*", "0.0.0.0"):
        return "0.0.0.0", port
    host = "127.0.0.1" if host_str.lower() == "localhost" else host_str

    parts = host.split(".")
    octets = []
    for index, part in enumerate(parts):
        if index >= 4:
            raise ValueError(f"Invalid IPv4 format: '{host}' has too many octets")
        value = _parse_u8(part)
        if value is None:
            raise ValueError(f"Invalid octet value: '{part}'")
        octets.append(value)
    if len(parts) != 4:
        raise ValueError(f"Invalid IPv4 format: '{host}' must have 4 octets")

    return ".".join(str(o) for o in octets), port


def create_listen_socket(host: str, port: int) -> socket.socket:
    """Return a TCP socket bound to ``host:port`` with address reuse, listening."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
        sock.listen(_LISTEN_BACKLOG)
    except OSError:
        sock.close()
        raise
    return sock


class HttpServer:
    """Accepts connections and serves each on its own thread."""

    def __init__(self, cfg: Optional[ServerConfig] = None, dispatcher: Optional[Dispatcher] = None) -> None:
        self.cfg = cfg if cfg is not None else ServerConfig()
        self.dispatcher = dispatcher if dispatcher is not None else Dispatcher()
        self._active = 0
        self._active_lock = threading.Lock()
        self._window: deque[float] = deque()
        self._window_lock = threading.Lock()

    @property
    def active_connections(self) -> int:
        with self._active_lock:
            return self._active

    def run(self) -> None:
        """Serve forever; raises OSError or ValueError if the listener cannot be set up."""
        host, port = parse_ipv4_addr(self.cfg.bind_addr)
        listener = create_listen_socket(host, port)
        print(f"Listening on {self.cfg.bind_addr}")

        with listener:
            while True:
                try:
                    conn, _ = listener.accept()
                except OSError as exc:
                    print(f"Accept error: {exc}", file=sys.stderr)
                    continue

                if self.active_connections >= self.cfg.max_connections:
                    self._reject(conn, SERVICE_UNAVAILABLE, "Service Unavailable: too many connections")
                    continue
                if self.is_rate_limited():
                    self._reject(conn, TOO_MANY_REQUESTS, "Too Many Requests")
                    continue

                with self._active_lock:
                    self._active += 1
                threading.Thread(target=self._serve, args=(conn,), daemon=True).start()

    def _serve(self, conn: socket.socket) -> None:
        try:
            with conn, conn.makefile("rwb") as stream:
                handle_connection(stream, self.dispatcher)
        except Exception as exc:  # a failing connection must not stop the server
            print(f"Error handling connection: {exc}", file=sys.stderr)
        finally:
            with self._active_lock:
                self._active -= 1

    @staticmethod
    def _reject(conn: socket.socket, status: Status, message: str) -> None:
        with conn:
            try:
                conn.sendall(Response(status).with_body(message).to_bytes(False))
            except OSError:
                pass

    def is_rate_limited(self) -> bool:
        """Record a connection unless the last second already holds the limit."""
        now = time.monotonic()
        with self._window_lock:
            while self._window and now - self._window[0] > _RATE_WINDOW_SECONDS:
                self._window.popleft()
            if len(self._window) >= self.cfg.rate_limit_per_sec:
                return True
            self._window.append(now)
            return False