from __future__ import annotations

import json
from typing import Any


def canonical_json_bytes(obj: Any) -> bytes:
    """Return canonical JSON bytes (UTF-8, sorted keys, compact separators, trailing LF).

    NaN and infinite floats are rejected: the wallet verifier cannot parse them.
    """

    text = json.dumps(
        obj,
        ensure_ascii=False,
        sort_keys=True,
        separators=(",", ":"),
        allow_nan=False,
    ) + "\n"
    return text.encode("utf-8", errors="strict")


def load_json_bytes(data: bytes) -> Any:
    return json.loads(bytes(data).decode("utf-8", errors="strict"))
