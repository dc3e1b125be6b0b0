"""Errors a request can end in; the server maps each kind to a status code."""

from typing import Optional


class ServerError(Exception):
    """Base of all request errors; ``str()`` gives ``Label`` or ``Label: message``."""

    label = "ServerError"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(*(() if message is None else (message,)))
        self.message = message

    def __str__(self) -> str:
        if self.message is None:
            return self.label
        return f"{self.label}: {self.message}"


class BadRequest(ServerError):
    label = "BadRequest"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class NotFound(ServerError):
    label = "NotFound"

    def __init__(self) -> None:
        super().__init__()


class Conflict(ServerError):
    label = "Conflict"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class TooManyRequests(ServerError):
    label = "TooManyRequests"

    def __init__(self) -> None:
        super().__init__()


class InternalError(ServerError):
    label = "Internal"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ServiceUnavailable(ServerError):
    label = "ServiceUnavailable"

    def __init__(self) -> None:
        super().__init__()


class IoFailure(ServerError):
    """An operating-system error met while serving a request."""

    label = "IO"

    def __init__(self, error: OSError) -> None:
        super().__init__(str(error))
        self.error = error