from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from passforge.core.command_log import run_command
from passforge.core.hash import is_hex_sha1, sha1_file
from passforge.core.json_canon import canonical_json_bytes
from passforge.errors import SigningError


MANIFEST_FILENAME = "manifest.json"
SIGNATURE_FILENAME = "signature"

# OS junk never hashed or packaged.
_BUNDLE_EXCLUDED_NAMES = frozenset({
    ".DS_Store",
    "Thumbs.db",
    "desktop.ini",
})

logger = logging.getLogger(__name__)


class Digester(Protocol):
    def digest(self, path: Path) -> str:
        """Return the lowercase hex SHA-1 of the file at path."""
        ...


class Sha1Digester:
    """In-process SHA-1 via hashlib."""

    def digest(self, path: Path) -> str:
        return sha1_file(path)


@dataclass(frozen=True)
class OpenSSLDigester:
    """SHA-1 via `openssl sha1 <file>`."""

    openssl: str = "openssl"
    timeout: float = 60.0

    def digest(self, path: Path) -> str:
        record = run_command([self.openssl, "sha1", str(path)], step="digest", timeout=self.timeout)
        # Output looks like "SHA1(<path>)= <hex>"; the hex is the last token.
        tokens = record.stdout.strip().split()
        digest = tokens[-1].lower() if tokens else ""
        if not is_hex_sha1(digest):
            raise SigningError("digest", f"unexpected openssl sha1 output: {record.stdout.strip()!r}", record=record)
        return digest


def list_bundle_files(bundle_root: Path) -> list[Path]:
    """Return the top-level regular files of a bundle, sorted by name.

    Subdirectories (e.g. *.lproj localizations) are skipped: the bundle is flat.
    """

    bundle_root = Path(bundle_root)
    if not bundle_root.is_dir():
        raise ValueError(f"bundle root is not a directory: {bundle_root}")

    files: list[Path] = []
    for child in sorted(bundle_root.iterdir(), key=lambda p: p.name):
        if child.name in _BUNDLE_EXCLUDED_NAMES:
            continue
        if child.is_dir():
            logger.warning("skipping subdirectory in bundle (not packaged): %s", child.name)
            continue
        if not child.is_file():
            continue
        files.append(child)
    return files


def build_manifest_obj(bundle_root: Path, digester: Digester) -> dict[str, str]:
    """Map each bundle file's base name to its SHA-1 digest.

    The manifest and signature files are never part of the manifest.
    """

    manifest: dict[str, str] = {}
    for path in list_bundle_files(bundle_root):
        if path.name in (MANIFEST_FILENAME, SIGNATURE_FILENAME):
            continue
        digest = digester.digest(path).strip().lower()
        if not is_hex_sha1(digest):
            raise SigningError("digest", f"digest for {path.name} is not 40-hex chars: {digest!r}")
        manifest[path.name] = digest
    return manifest


def build_manifest_bytes(bundle_root: Path, digester: Digester) -> bytes:
    return canonical_json_bytes(build_manifest_obj(bundle_root, digester))


def write_manifest(bundle_root: Path, digester: Digester) -> Path:
    manifest_bytes = build_manifest_bytes(bundle_root, digester)
    path = Path(bundle_root) / MANIFEST_FILENAME
    path.write_bytes(manifest_bytes)
    logger.debug("wrote %s (%d bytes)", path, len(manifest_bytes))
    return path


def validate_manifest_obj(manifest: Any) -> dict[str, str]:
    """Check the shape of a decoded manifest.json.

    Fail-closed:
      - must be a JSON object of string -> 40-hex lowercase digest
      - must not list itself or the signature
    """

    if not isinstance(manifest, dict):
        raise ValueError("manifest must be a JSON object")
    for name, digest in manifest.items():
        if not isinstance(name, str) or not name:
            raise ValueError("manifest keys must be non-empty strings")
        if name in (MANIFEST_FILENAME, SIGNATURE_FILENAME):
            raise ValueError(f"manifest must not include {name}")
        if not is_hex_sha1(digest):
            raise ValueError(f"manifest[{name!r}] must be 40-hex lowercase chars")
    return manifest
