"""Stage, hash, sign and package a pass bundle.

Both pipelines own a staging directory namespaced by the pass id and remove it
on every exit path. A failure at any step propagates before anything exists at
<dest>/<pass_id>.pkpass.
"""

from __future__ import annotations

import dataclasses
import logging
import os
from pathlib import Path

from passforge.errors import SigningError
from passforge.model.types import Pass
from passforge.protocol.archive import Packager, archive_path_for, partial_path_for, write_flat_archive
from passforge.protocol.manifest import SIGNATURE_FILENAME, Digester, Sha1Digester, list_bundle_files, write_manifest
from passforge.protocol.signers import Signer, SignpassTool
from passforge.protocol.staging import staged_bundle, write_pass_document


logger = logging.getLogger(__name__)


def _with_serial(pass_: Pass, pass_id: str) -> Pass:
    return dataclasses.replace(pass_, serial_number=pass_id)


def sign_pass_bundle(
    *,
    pass_id: str,
    asset_dir: Path,
    dest_dir: Path,
    pass_: Pass,
    signer: Signer,
    digester: Digester | None = None,
    packager: Packager | None = None,
) -> Path:
    """Build <dest_dir>/<pass_id>.pkpass with a manifest signed by signer.

    The pass serial number is replaced by pass_id before rendering.
    """

    digester = digester or Sha1Digester()
    packager = packager or write_flat_archive
    archive_path = archive_path_for(dest_dir, pass_id)
    pass_ = _with_serial(pass_, pass_id)

    with staged_bundle(asset_dir=asset_dir, dest_dir=dest_dir, pass_id=pass_id) as staged:
        write_pass_document(staged, pass_)
        manifest_path = write_manifest(staged, digester)
        signature_path = staged / SIGNATURE_FILENAME
        signer.sign(manifest_path, signature_path)
        if not signature_path.is_file():
            raise SigningError("sign", f"signer wrote no {SIGNATURE_FILENAME}")

        files = list_bundle_files(staged)
        try:
            packager(files, archive_path)
        except OSError as e:
            raise SigningError("package", f"cannot write {archive_path.name}: {e}") from e

    logger.info("signed pass %s -> %s", pass_id, archive_path)
    return archive_path


def signpass_bundle(
    *,
    pass_id: str,
    asset_dir: Path,
    dest_dir: Path,
    pass_: Pass,
    tool: SignpassTool,
) -> Path:
    """Build <dest_dir>/<pass_id>.pkpass with the platform signpass tool.

    The tool writes to a temporary sibling; the archive is moved into place only
    after the tool succeeded.
    """

    archive_path = archive_path_for(dest_dir, pass_id)
    partial = partial_path_for(archive_path)
    pass_ = _with_serial(pass_, pass_id)

    with staged_bundle(asset_dir=asset_dir, dest_dir=dest_dir, pass_id=pass_id) as staged:
        write_pass_document(staged, pass_)
        try:
            tool.sign_bundle(staged, partial)
            os.replace(partial, archive_path)
        except BaseException:
            partial.unlink(missing_ok=True)
            raise

    logger.info("signed pass %s with %s -> %s", pass_id, tool.executable, archive_path)
    return archive_path
