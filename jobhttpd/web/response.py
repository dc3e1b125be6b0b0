"""HTTP/1.0 responses and their serialisation."""

import time
from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class Status:
    code: int
    reason: str


OK = Status(200, "OK")
BAD_REQUEST = Status(400, "Bad Request")
NOT_FOUND = Status(404, "Not Found")
CONFLICT = Status(409, "Conflict")
TOO_MANY_REQUESTS = Status(429, "Too Many Requests")
INTERNAL_SERVER_ERROR = Status(500, "Internal Server Error")
SERVICE_UNAVAILABLE = Status(503, "Service Unavailable")

SERVER_NAME = "jobhttpd/0.1"
_MANAGED_HEADERS = frozenset({"content-length", "connection", "date", "server"})


@dataclass
class Response:
    """A response under construction; the setters return the response for chaining."""

    status: Status
    version: str = "HTTP/1.0"
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def with_body(self, body: Union[str, bytes]) -> "Response":
        self.body = body.encode("utf-8") if isinstance(body, str) else bytes(body)
        return self

    def set_header(self, name: str, value: str) -> "Response":
        self.headers[name] = value
        return self

    def to_bytes(self, is_head: bool = False) -> bytes:
        """Serialise the response; a HEAD reply keeps the headers but drops the body."""
        lines = [
            f"{self.version} {self.status.code} {self.status.reason}\r\n",
            f"Date: Epoch {int(time.time())}\n",
            f"Server: {SERVER_NAME}\n",
            "Connection: close\n",
            f"Content-Length: {len(self.body)}\n",
        ]
        if "Content-Type" not in self.headers:
            lines.append("Content-Type: text/plain; charset=utf-8\n")
        lines.extend(
            f"{name}: {value}\n"
            for name, value in self.headers.items()
            if name.lower() not in _MANAGED_HEADERS
        )
        lines.append("\r\n")
        head = "".join(lines).encode("utf-8")
        return head if is_head else head + self.body