from __future__ import annotations

import uuid


def gen_pass_id() -> str:
    """Generate a random pass identifier.

    A version 4 UUID rendered as 32 lowercase hex digits with the grouping
    hyphens stripped. It doubles as the serial number, the staging directory
    name and the archive base name.
    """

    return uuid.uuid4().hex


def validate_pass_id(pass_id: str) -> str:
    """Reject identifiers that cannot be used as a single path segment.

    Caller-supplied ids are not required to be hex; they only have to be safe
    as a directory and file name under the destination root.
    """

    if not isinstance(pass_id, str) or not pass_id:
        raise ValueError("pass id missing/empty")
    if "\x00" in pass_id:
        raise ValueError("pass id contains NUL")
    if "/" in pass_id or "\\" in pass_id:
        raise ValueError(f"pass id must not contain path separators: {pass_id!r}")
    if pass_id in (".", ".."):
        raise ValueError(f"pass id must not be a relative path segment: {pass_id!r}")
    return pass_id
