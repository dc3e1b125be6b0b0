"""SHA-256 of text."""

import hashlib


def hash_text(text: str) -> str:
    """Return the lowercase hex SHA-256 digest of the UTF-8 encoded text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()