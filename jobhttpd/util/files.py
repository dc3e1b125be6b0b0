"""Creation and deletion of files inside the storage directory."""

import os
from pathlib import Path, PurePath


def resolve_path(filename: str) -> Path:
    """Map a file name into the storage directory, dropping any directory parts."""
    base = Path(os.environ.get("FILE_STORAGE_PATH", "./data/"))
    clean_name = PurePath(filename).name
    if clean_name in ("", ".", ".."):
        clean_name = "invalid"
    return base / clean_name


def create_file(name: str, content: str, repeat: int) -> None:
    """Write ``content`` followed by a newline ``repeat`` times into the file."""
    path = resolve_path(name)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="\n") as fh:
        for _ in range(repeat):
            fh.write(f"{content}\n")


def delete_file(name: str) -> str:
    """Delete the file and describe what happened; a missing file is not an error."""
    path = resolve_path(name)
    try:
        path.unlink()
    except FileNotFoundError:
        return f"File '{name}' does not exist"
    return f"File '{name}' deleted successfully"