from __future__ import annotations

from datetime import datetime, timezone


# Wire profile for every date-time in pass.json: ISO 8601, UTC, whole seconds.
PASS_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def normalize_pass_datetime(dt: datetime) -> datetime:
    """Return dt as an aware UTC datetime truncated to whole seconds.

    Naive values are taken to be UTC already.
    """

    if not isinstance(dt, datetime):
        raise TypeError("expected datetime.datetime")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)
    return dt.replace(microsecond=0)


def format_pass_datetime(dt: datetime) -> str:
    """Render dt in the wire profile.

    Built field by field: strftime("%Y") does not zero-pad years below 1000 on
    every platform.
    """

    dt = normalize_pass_datetime(dt)
    return (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
        f"T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}Z"
    )


def parse_pass_datetime(s: str) -> datetime | None:
    """Parse the fixed wire profile; None when s does not match it exactly.

    strptime also accepts unpadded fields ("2024-1-5T1:2:3Z"); those are
    rejected so that every accepted string re-renders to itself.
    """

    if not isinstance(s, str) or not s:
        return None
    try:
        parsed = datetime.strptime(s, PASS_DATE_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError:
        return None
    if format_pass_datetime(parsed) != s:
        return None
    return parsed


def utc_timestamp_iso_z() -> str:
    return datetime.now(timezone.utc).strftime(PASS_DATE_FORMAT)
