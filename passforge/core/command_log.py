from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from passforge.core.time import utc_timestamp_iso_z
from passforge.errors import SigningError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandRecord:
    """Structured record of one external tool invocation."""

    argv: list[str]
    exit_code: int
    started_at: str  # ISO 8601, UTC
    finished_at: str  # ISO 8601, UTC
    stdout: str = ""
    stderr: str = ""


def format_command_string(argv: list[str]) -> str:
    """Format argv list as a space-joined command string for log lines."""

    if not argv:
        return ""
    return " ".join(argv)


def run_command(
    argv: list[str],
    *,
    step: str,
    cwd: Path | None = None,
    timeout: float,
) -> CommandRecord:
    """Run an external tool and return its record.

    Fail-closed:
      - a missing executable, a timeout or a non-zero exit raise SigningError(step)
      - nothing is retried
    """

    if not argv:
        raise ValueError("argv must not be empty")

    started_at = utc_timestamp_iso_z()
    logger.debug("running %s (cwd=%s, timeout=%ss)", format_command_string(argv), cwd, timeout)
    try:
        p = subprocess.run(
            argv,
            cwd=str(cwd) if cwd is not None else None,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise SigningError(step, f"executable not found: {argv[0]}") from e
    except subprocess.TimeoutExpired as e:
        record = CommandRecord(
            argv=list(argv),
            exit_code=-1,
            started_at=started_at,
            finished_at=utc_timestamp_iso_z(),
        )
        raise SigningError(step, f"{argv[0]} timed out after {timeout}s", record=record) from e

    record = CommandRecord(
        argv=list(argv),
        exit_code=p.returncode,
        started_at=started_at,
        finished_at=utc_timestamp_iso_z(),
        stdout=p.stdout or "",
        stderr=p.stderr or "",
    )
    if p.returncode != 0:
        logger.error("%s exited with %d: %s", argv[0], p.returncode, record.stderr.strip())
        raise SigningError(
            step,
            f"{argv[0]} exited with {p.returncode} :: {record.stderr.strip()}",
            record=record,
        )
    return record
