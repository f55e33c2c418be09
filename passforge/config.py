"""Runtime settings for the external signing tools.

Settings come from the process environment so that deployments can point the
pipeline at specific binaries and certificate material without code changes.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping


ENV_OPENSSL = "PASSFORGE_OPENSSL"
ENV_SIGNPASS = "PASSFORGE_SIGNPASS"
ENV_WWDR = "PASSFORGE_WWDR"
ENV_TOOL_TIMEOUT = "PASSFORGE_TOOL_TIMEOUT"

DEFAULT_OPENSSL = "openssl"
DEFAULT_SIGNPASS = "signpass"
DEFAULT_WWDR = "wwdr.pem"
DEFAULT_TOOL_TIMEOUT = 60.0


@dataclass(frozen=True)
class Settings:
    openssl: str = DEFAULT_OPENSSL
    signpass: str = DEFAULT_SIGNPASS
    wwdr: Path = Path(DEFAULT_WWDR)
    tool_timeout: float = DEFAULT_TOOL_TIMEOUT


def _non_empty(environ: Mapping[str, str], name: str, default: str) -> str:
    raw = environ.get(name)
    if raw is None:
        return default
    value = raw.strip()
    if not value:
        raise ValueError(f"{name} must not be empty when set")
    return value


def _parse_timeout(environ: Mapping[str, str]) -> float:
    raw = environ.get(ENV_TOOL_TIMEOUT)
    if raw is None:
        return DEFAULT_TOOL_TIMEOUT
    try:
        value = float(raw.strip())
    except ValueError:
        raise ValueError(f"{ENV_TOOL_TIMEOUT} must be a number of seconds, got {raw!r}")
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{ENV_TOOL_TIMEOUT} must be a positive number of seconds, got {raw!r}")
    return value


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from environ (defaults to os.environ).

    The chain-anchor path is resolved against the current working directory at
    load time, so later directory changes do not move it.
    """

    env = os.environ if environ is None else environ
    wwdr = Path(_non_empty(env, ENV_WWDR, DEFAULT_WWDR)).expanduser().resolve()
    return Settings(
        openssl=_non_empty(env, ENV_OPENSSL, DEFAULT_OPENSSL),
        signpass=_non_empty(env, ENV_SIGNPASS, DEFAULT_SIGNPASS),
        wwdr=wwdr,
        tool_timeout=_parse_timeout(env),
    )
