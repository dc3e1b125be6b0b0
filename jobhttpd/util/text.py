"""Small text utilities and the command overview."""

import string

_ENDPOINTS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("fibonacci", ("num=N",)),
    ("createfile", ("name=filename", "content=text", "repeat=x")),
    ("deletefile", ("name=filename",)),
    ("status", ()),
    ("reverse", ("text=abcdef",)),
    ("toupper", ("text=abcd",)),
    ("random", ("count=n", "min=a", "max=b")),
    ("timestamp", ()),
    ("hash", ("text=someinput",)),
    ("simulate", ("seconds=s", "task=name")),
    ("sleep", ("seconds=s",)),
    ("loadtest", ("tasks=n", "sleep=x")),
    ("help", ()),
)


def _usage(name: str, params: tuple[str, ...]) -> str:
    path = f"/{name}"
    return f"{path}?{'&'.join(params)}" if params else path


COMMANDS: tuple[str, ...] = tuple(_usage(name, params) for name, params in _ENDPOINTS)

_ASCII_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)


def reverse(text: str) -> str:
    """Return the characters of ``text`` in reverse order."""
    return text[::-1]


def to_upper(text: str) -> str:
    """Upper-case ASCII letters only, leaving every other character alone."""
    return text.translate(_ASCII_UPPER)


def help() -> str:  # noqa: A001 - the endpoint is named help
    """Return the list of available commands as text."""
    entries = "".join(f" - {command}\n" for command in COMMANDS)
    return "Available commands:\n" + entries