from __future__ import annotations

import logging
import os
import zipfile
from pathlib import Path
from typing import Callable

from passforge.codec.decode import parse_pass_bytes
from passforge.core.hash import sha1_bytes
from passforge.core.json_canon import load_json_bytes
from passforge.model.types import Pass
from passforge.protocol.manifest import MANIFEST_FILENAME, SIGNATURE_FILENAME, validate_manifest_obj
from passforge.protocol.staging import PASS_FILENAME


ARCHIVE_SUFFIX = ".pkpass"

Packager = Callable[[list[Path], Path], None]

logger = logging.getLogger(__name__)


def archive_path_for(dest_dir: Path, pass_id: str) -> Path:
    return Path(dest_dir) / f"{pass_id}{ARCHIVE_SUFFIX}"


def partial_path_for(archive_path: Path) -> Path:
    """Sibling temporary name used while an archive is being written."""

    archive_path = Path(archive_path)
    return archive_path.with_name(f".{archive_path.stem}.partial{ARCHIVE_SUFFIX}")


def write_flat_archive(files: list[Path], archive_path: Path) -> None:
    """Zip files under their base names and move the result into archive_path.

    The archive is written to a temporary sibling first; archive_path only ever
    holds a complete archive.
    """

    names = [Path(f).name for f in files]
    if len(set(names)) != len(names):
        raise ValueError("duplicate file names in flat archive")

    archive_path = Path(archive_path)
    tmp = partial_path_for(archive_path)
    try:
        with zipfile.ZipFile(tmp, "w", zipfile.ZIP_DEFLATED) as zf:
            for f in files:
                zf.write(f, arcname=Path(f).name)
        os.replace(tmp, archive_path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    logger.info("wrote %s (%d entries)", archive_path, len(files))


def read_archive_entry(archive_path: Path, name: str) -> bytes | None:
    with zipfile.ZipFile(archive_path) as zf:
        try:
            return zf.read(name)
        except KeyError:
            return None


def load_pass(archive_path: Path) -> Pass | None:
    """Decode the pass.json inside a .pkpass archive.

    Returns None when the archive has no pass.json entry. A pass.json that does
    not decode raises PassSchemaError. Assets are not extracted.
    """

    data = read_archive_entry(Path(archive_path), PASS_FILENAME)
    if data is None:
        return None
    return parse_pass_bytes(data)


def verify_archive(archive_path: Path) -> list[str]:
    """Check that manifest.json matches the archive contents.

    Returns a sorted list of problems; empty means every entry other than the
    manifest and signature is listed with the correct SHA-1 and nothing listed
    is missing. The signature itself is not verified.
    """

    problems: list[str] = []
    with zipfile.ZipFile(Path(archive_path)) as zf:
        names = zf.namelist()
        if MANIFEST_FILENAME not in names:
            return [f"missing {MANIFEST_FILENAME}"]
        if SIGNATURE_FILENAME not in names:
            problems.append(f"missing {SIGNATURE_FILENAME}")

        try:
            manifest = validate_manifest_obj(load_json_bytes(zf.read(MANIFEST_FILENAME)))
        except ValueError as e:
            return sorted(problems + [f"invalid {MANIFEST_FILENAME}: {e}"])

        for name in names:
            if name in (MANIFEST_FILENAME, SIGNATURE_FILENAME) or name.endswith("/"):
                continue
            expected = manifest.get(name)
            if expected is None:
                problems.append(f"not in manifest: {name}")
                continue
            actual = sha1_bytes(zf.read(name))
            if actual != expected:
                problems.append(f"digest mismatch: {name}")

        for name in manifest:
            if name not in names:
                problems.append(f"listed but missing: {name}")

    return sorted(problems)
