from __future__ import annotations

import logging
import shutil
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from passforge.codec.encode import render_pass_bytes
from passforge.core.ids import validate_pass_id
from passforge.model.types import Pass


PASS_FILENAME = "pass.json"

logger = logging.getLogger(__name__)


@contextmanager
def staged_bundle(*, asset_dir: Path, dest_dir: Path, pass_id: str) -> Iterator[Path]:
    """Copy asset_dir to dest_dir/pass_id and remove that copy on exit.

    The staging directory is namespaced by pass_id and owned by this block for
    its whole lifetime: it is removed on success, on schema errors and on
    signing failures alike. Assets are copied as-is and never inspected.

    Fail-closed:
      - an existing dest_dir/pass_id is never reused or deleted (FileExistsError)
      - a missing asset_dir propagates as FileNotFoundError
    """

    validate_pass_id(pass_id)
    asset_dir = Path(asset_dir)
    staged = Path(dest_dir) / pass_id

    if not asset_dir.is_dir():
        raise FileNotFoundError(f"asset directory does not exist: {asset_dir}")

    # mkdir claims the namespace atomically; it raises FileExistsError if taken.
    staged.mkdir(parents=True)
    try:
        shutil.copytree(asset_dir, staged, dirs_exist_ok=True)
        logger.debug("staged %s -> %s", asset_dir, staged)
        yield staged
    finally:
        shutil.rmtree(staged, ignore_errors=True)
        logger.debug("removed staging directory %s", staged)


def write_pass_document(staged: Path, pass_: Pass) -> Path:
    """Render pass_ into staged/pass.json, replacing any copied pass.json."""

    path = Path(staged) / PASS_FILENAME
    path.write_bytes(render_pass_bytes(pass_))
    return path
