"""Parsing of HTTP/1.0 requests from a binary stream."""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO, Optional

from jobhttpd.web.errors import BadRequest, IoFailure

_CONTENT_LENGTH_RE = re.compile(r"\+?[0-9]+")
_SUPPORTED_VERSION = "HTTP/1.0"


class HttpMethod(Enum):
    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    UNSUPPORTED = "UNSUPPORTED"

    @classmethod
    def from_token(cls, token: str) -> "HttpMethod":
        """Map a request-line method token to a member; unknown tokens are UNSUPPORTED."""
        if token in ("GET", "HEAD", "POST"):
            return cls(token)
        return cls.UNSUPPORTED


def _decode(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise IoFailure(OSError("stream did not contain valid UTF-8")) from exc


def _readline(reader: BinaryIO) -> bytes:
    try:
        return reader.readline()
    except OSError as exc:
        raise IoFailure(exc) from exc


def _read_exact(reader: BinaryIO, size: int) -> bytes:
    """Read ``size`` bytes, or fewer if the stream ends first."""
    chunks = []
    remaining = size
    try:
        while remaining > 0:
            chunk = reader.read(remaining)
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
    except OSError as exc:
        raise IoFailure(exc) from exc
    return b"".join(chunks)


@dataclass
class HttpRequest:
    """A parsed request; ``method_name`` keeps the token as sent by the client."""

    method: HttpMethod
    path: str
    version: str = _SUPPORTED_VERSION
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    query: str = ""
    method_name: str = ""

    def __post_init__(self) -> None:
        if not self.method_name:
            self.method_name = self.method.value

    @classmethod
    def parse(cls, reader: BinaryIO) -> "HttpRequest":
        """Read one request from ``reader``.

        Raises BadRequest for malformed input and IoFailure for stream errors.
        """
        request_line = _decode(_readline(reader)).strip()
        if not request_line:
            raise BadRequest("Empty request line")

        parts = request_line.split()
        if len(parts) != 3:
            raise BadRequest(f"Malformed request line: '{request_line}'")

        method_token, target, version = parts
        path, sep, query = target.partition("?")
        if not sep:
            query = ""

        if version != _SUPPORTED_VERSION:
            raise BadRequest(f"Only HTTP/1.0 is supported (got '{version}')")

        headers: dict[str, str] = {}
        while True:
            raw = _readline(reader)
            if not raw:
                break
            line = _decode(raw).rstrip("\r\n")
            if not line:
                break
            name, sep, value = line.partition(":")
            if not sep:
                raise BadRequest(f"Invalid header format: '{line}'")
            headers[name.strip()] = value.strip()

        body = b""
        length = headers.get("Content-Length")
        if length is not None and _CONTENT_LENGTH_RE.fullmatch(length):
            body = _read_exact(reader, int(length))

        return cls(
            method=HttpMethod.from_token(method_token),
            path=path,
            version=version,
            headers=headers,
            body=body,
            query=query,
            method_name=method_token,
        )

    def query_param(self, key: str) -> Optional[str]:
        """Return the raw value of the first ``key=value`` pair in the query."""
        if not self.query:
            return None
        for pair in self.query.split("&"):
            name, sep, value = pair.partition("=")
            if sep and name == key:
                return value
        return None