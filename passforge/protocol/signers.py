"""Signing collaborators.

A Signer writes a DER-encoded detached CMS signature over the raw bytes of
manifest.json. SignpassTool is the alternative that signs and packages a whole
staged directory with the platform's own tool, using the OS credential store.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from passforge.core.command_log import run_command
from passforge.errors import SigningError


logger = logging.getLogger(__name__)


class Signer(Protocol):
    def sign(self, manifest_path: Path, signature_path: Path) -> None:
        """Write the detached signature of manifest_path to signature_path."""
        ...


@dataclass(frozen=True)
class OpenSSLSigner:
    """Sign with `openssl smime`, run from the directory holding the manifest."""

    certificate: Path
    key: Path
    wwdr: Path
    openssl: str = "openssl"
    timeout: float = 60.0

    def argv(self, manifest_path: Path, signature_path: Path) -> list[str]:
        return [
            self.openssl, "smime", "-binary",
            "-sign",
            "-signer", str(self.certificate),
            "-certfile", str(self.wwdr),
            "-inkey", str(self.key),
            "-in", manifest_path.name,
            "-out", signature_path.name,
            "-outform", "DER",
        ]

    def sign(self, manifest_path: Path, signature_path: Path) -> None:
        manifest_path = Path(manifest_path)
        signature_path = Path(signature_path)
        if manifest_path.parent.resolve() != signature_path.parent.resolve():
            raise ValueError("manifest and signature must live in the same directory")

        logger.info("signing %s with openssl (signer=%s)", manifest_path, self.certificate)
        record = run_command(
            self.argv(manifest_path, signature_path),
            step="sign",
            cwd=manifest_path.parent,
            timeout=self.timeout,
        )
        if not signature_path.is_file() or signature_path.stat().st_size == 0:
            raise SigningError("sign", f"openssl wrote no signature to {signature_path}", record=record)


def _load_certificate(blob: bytes, *, label: str) -> Any:
    from cryptography import x509

    try:
        return x509.load_pem_x509_certificate(blob)
    except ValueError:
        pass
    try:
        return x509.load_der_x509_certificate(blob)
    except ValueError as e:
        raise SigningError("sign", f"{label} is not a PEM or DER certificate") from e


def _load_private_key(blob: bytes, password: bytes | None) -> Any:
    from cryptography.hazmat.primitives import serialization

    try:
        return serialization.load_pem_private_key(blob, password=password)
    except (TypeError, ValueError) as e:
        raise SigningError("sign", f"cannot load private key: {e}") from e


@dataclass(frozen=True)
class CryptographySigner:
    """Sign in-process with the cryptography library's PKCS#7 builder.

    The signer key must be RSA or EC. The chain anchor is embedded in the
    signature next to the signer certificate.
    """

    certificate: Path
    key: Path
    wwdr: Path
    key_password: bytes | None = None

    def sign(self, manifest_path: Path, signature_path: Path) -> None:
        from cryptography.hazmat.primitives import hashes, serialization
        from cryptography.hazmat.primitives.serialization import pkcs7

        cert = _load_certificate(Path(self.certificate).read_bytes(), label="signer certificate")
        anchor = _load_certificate(Path(self.wwdr).read_bytes(), label="chain anchor certificate")
        key = _load_private_key(Path(self.key).read_bytes(), self.key_password)

        data = Path(manifest_path).read_bytes()
        logger.info("signing %s in-process (signer=%s)", manifest_path, self.certificate)
        try:
            signature = (
                pkcs7.PKCS7SignatureBuilder()
                .set_data(data)
                .add_signer(cert, key, hashes.SHA256())
                .add_certificate(anchor)
                .sign(
                    serialization.Encoding.DER,
                    [pkcs7.PKCS7Options.DetachedSignature, pkcs7.PKCS7Options.Binary],
                )
            )
        except (TypeError, ValueError) as e:
            raise SigningError("sign", f"cannot build CMS signature: {e}") from e
        Path(signature_path).write_bytes(signature)


@dataclass(frozen=True)
class SignpassTool:
    """The platform `signpass` tool: hashes, signs and zips a directory itself."""

    executable: str = "signpass"
    timeout: float = 60.0

    def argv(self, bundle_dir: Path, archive_path: Path) -> list[str]:
        return [self.executable, "-p", str(bundle_dir), "-o", str(archive_path)]

    def sign_bundle(self, bundle_dir: Path, archive_path: Path) -> None:
        logger.info("running %s on %s", self.executable, bundle_dir)
        record = run_command(self.argv(bundle_dir, archive_path), step="signpass", timeout=self.timeout)
        if not Path(archive_path).is_file():
            raise SigningError("signpass", f"{self.executable} wrote no archive to {archive_path}", record=record)
