"""Public signing entry points.

Each operation returns the path of the finished archive; the variants without an
explicit id also return the freshly generated pass id. A modifier receives the
generated id and the pass, and returns the pass to sign (see update_barcode).
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from passforge.config import Settings, load_settings
from passforge.core.ids import gen_pass_id
from passforge.model.types import Pass, update_barcode
from passforge.protocol.archive import load_pass, verify_archive
from passforge.protocol.bundle import sign_pass_bundle, signpass_bundle
from passforge.protocol.manifest import Digester
from passforge.protocol.signers import OpenSSLSigner, Signer, SignpassTool


Modifier = Callable[[str, Pass], Pass]

__all__ = [
	"Modifier",
	"gen_pass_id",
	"load_pass",
	"sign_open",
	"sign_open_with_id",
	"sign_open_with_modifier",
	"signpass",
	"signpass_with_id",
	"signpass_with_modifier",
	"update_barcode",
	"verify_archive",
]


def _unchanged(pass_id: str, pass_: Pass) -> Pass:
    return pass_


def signpass_with_id(
    pass_id: str,
    asset_dir: Path,
    dest_dir: Path,
    pass_: Pass,
    *,
    settings: Settings | None = None,
    tool: SignpassTool | None = None,
) -> Path:
    """Sign with the platform signpass tool under a caller-chosen id."""

    if tool is None:
        settings = settings or load_settings()
        tool = SignpassTool(executable=settings.signpass, timeout=settings.tool_timeout)
    return signpass_bundle(
        pass_id=pass_id,
        asset_dir=Path(asset_dir),
        dest_dir=Path(dest_dir),
        pass_=pass_,
        tool=tool,
    )


def signpass_with_modifier(
    asset_dir: Path,
    dest_dir: Path,
    pass_: Pass,
    modifier: Modifier,
    *,
    settings: Settings | None = None,
    tool: SignpassTool | None = None,
) -> tuple[Path, str]:
    pass_id = gen_pass_id()
    archive = signpass_with_id(
        pass_id, asset_dir, dest_dir, modifier(pass_id, pass_), settings=settings, tool=tool,
    )
    return archive, pass_id


def signpass(
    asset_dir: Path,
    dest_dir: Path,
    pass_: Pass,
    *,
    settings: Settings | None = None,
    tool: SignpassTool | None = None,
) -> tuple[Path, str]:
    return signpass_with_modifier(asset_dir, dest_dir, pass_, _unchanged, settings=settings, tool=tool)


def sign_open_with_id(
    asset_dir: Path,
    dest_dir: Path,
    certificate: Path,
    key: Path,
    pass_: Pass,
    pass_id: str,
    *,
    settings: Settings | None = None,
    signer: Signer | None = None,
    digester: Digester | None = None,
) -> Path:
    """Sign with an explicit certificate and key under a caller-chosen id.

    Without a signer override this runs `openssl smime` with the chain anchor
    from settings. The certificate and key arguments are ignored when a signer
    is supplied.
    """

    if signer is None:
        settings = settings or load_settings()
        signer = OpenSSLSigner(
            certificate=Path(certificate).resolve(),
            key=Path(key).resolve(),
            wwdr=settings.wwdr,
            openssl=settings.openssl,
            timeout=settings.tool_timeout,
        )
    return sign_pass_bundle(
        pass_id=pass_id,
        asset_dir=Path(asset_dir),
        dest_dir=Path(dest_dir),
        pass_=pass_,
        signer=signer,
        digester=digester,
    )


def sign_open_with_modifier(
    asset_dir: Path,
    dest_dir: Path,
    certificate: Path,
    key: Path,
    pass_: Pass,
    modifier: Modifier,
    *,
    settings: Settings | None = None,
    signer: Signer | None = None,
    digester: Digester | None = None,
) -> tuple[Path, str]:
    pass_id = gen_pass_id()
    archive = sign_open_with_id(
        asset_dir, dest_dir, certificate, key, modifier(pass_id, pass_), pass_id,
        settings=settings, signer=signer, digester=digester,
    )
    return archive, pass_id


def sign_open(
    asset_dir: Path,
    dest_dir: Path,
    certificate: Path,
    key: Path,
    pass_: Pass,
    *,
    settings: Settings | None = None,
    signer: Signer | None = None,
    digester: Digester | None = None,
) -> tuple[Path, str]:
    return sign_open_with_modifier(
        asset_dir, dest_dir, certificate, key, pass_, _unchanged,
        settings=settings, signer=signer, digester=digester,
    )
