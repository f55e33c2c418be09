"""Bundle staging, manifest, signature and archive handling."""

from passforge.protocol.archive import (
	ARCHIVE_SUFFIX,
	archive_path_for,
	load_pass,
	verify_archive,
	write_flat_archive,
)
from passforge.protocol.bundle import sign_pass_bundle, signpass_bundle
from passforge.protocol.manifest import (
	MANIFEST_FILENAME,
	SIGNATURE_FILENAME,
	Digester,
	OpenSSLDigester,
	Sha1Digester,
	build_manifest_obj,
	list_bundle_files,
	validate_manifest_obj,
	write_manifest,
)
from passforge.protocol.signers import CryptographySigner, OpenSSLSigner, Signer, SignpassTool
from passforge.protocol.staging import PASS_FILENAME, staged_bundle, write_pass_document

__all__ = [
	"ARCHIVE_SUFFIX",
	"MANIFEST_FILENAME",
	"PASS_FILENAME",
	"SIGNATURE_FILENAME",
	"CryptographySigner",
	"Digester",
	"OpenSSLDigester",
	"OpenSSLSigner",
	"Sha1Digester",
	"Signer",
	"SignpassTool",
	"archive_path_for",
	"build_manifest_obj",
	"list_bundle_files",
	"load_pass",
	"sign_pass_bundle",
	"signpass_bundle",
	"staged_bundle",
	"validate_manifest_obj",
	"verify_archive",
	"write_flat_archive",
	"write_manifest",
	"write_pass_document",
]
