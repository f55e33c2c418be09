from __future__ import annotations

import hashlib
from pathlib import Path


_CHUNK_SIZE = 64 * 1024


def sha1_bytes(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()


def sha1_file(path: Path) -> str:
    h = hashlib.sha1()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            h.update(chunk)
    return h.hexdigest()


def is_hex_sha1(s: str) -> bool:
    """Lowercase only: manifest digests are always written lowercase."""
    if not isinstance(s, str) or len(s) != 40:
        return False
    for c in s:
        if c not in "0123456789abcdef":
            return False
    return True
