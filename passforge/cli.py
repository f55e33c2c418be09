#!/usr/bin/env python3
"""passforge CLI: build, sign and inspect .pkpass archives.

This is the installable CLI entrypoint (console_scripts).

Subcommands:
- passforge about     → Print package identity info
- passforge id        → Print a fresh pass identifier
- passforge sign      → Sign a pass with a certificate and key (openssl or in-process)
- passforge signpass  → Sign a pass with the platform signpass tool
- passforge inspect   → Print the pass.json and manifest of an archive
- passforge verify    → Check an archive's manifest against its entries

Exit codes:
- 0: success
- 1: check failed (verification failed, etc.)
- 3: usage/internal error
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from importlib.metadata import PackageNotFoundError, metadata, version
from pathlib import Path

from passforge.errors import PassSchemaError, SigningError


def _read_pass_file(path: Path):
    from passforge.codec.decode import parse_pass_bytes

    return parse_pass_bytes(Path(path).read_bytes())


def cmd_about(_: argparse.Namespace) -> int:
    """Print package identity info (human-readable)."""

    try:
        pkg_version = version("passforge")
    except PackageNotFoundError:
        pkg_version = "0.0.0"

    pkg_name = "passforge"
    pkg_summary = ""
    try:
        meta = metadata("passforge")
        pkg_name = str(meta.get("Name") or pkg_name)
        pkg_summary = str(meta.get("Summary") or "")
    except PackageNotFoundError:
        pass

    print(f"{pkg_name} {pkg_version}")
    if pkg_summary:
        print(pkg_summary)
    return 0


def cmd_id(_: argparse.Namespace) -> int:
    from passforge.core.ids import gen_pass_id

    print(gen_pass_id())
    return 0


# ---------------------------------------------------------------------------
# signing subcommands
# ---------------------------------------------------------------------------

def cmd_sign(args: argparse.Namespace) -> int:
    """Sign with an explicit certificate and key.

    --in-process uses the cryptography library; otherwise `openssl smime` runs.
    """
    from passforge.config import load_settings
    from passforge.model.types import update_barcode
    from passforge.protocol.signers import CryptographySigner
    from passforge.sign import sign_open_with_id, sign_open_with_modifier

    tag = "[passforge sign]"
    try:
        pass_ = _read_pass_file(Path(args.pass_file))
        settings = load_settings()
        if args.wwdr:
            settings = dataclasses.replace(settings, wwdr=Path(args.wwdr).resolve())

        signer = None
        if args.in_process:
            signer = CryptographySigner(
                certificate=Path(args.cert),
                key=Path(args.key),
                wwdr=settings.wwdr,
            )

        if args.pass_id:
            if args.barcode_id:
                pass_ = update_barcode(args.pass_id, pass_)
            archive = sign_open_with_id(
                Path(args.assets), Path(args.out), Path(args.cert), Path(args.key), pass_, args.pass_id,
                settings=settings, signer=signer,
            )
            pass_id = args.pass_id
        else:
            modifier = update_barcode if args.barcode_id else (lambda _id, p: p)
            archive, pass_id = sign_open_with_modifier(
                Path(args.assets), Path(args.out), Path(args.cert), Path(args.key), pass_, modifier,
                settings=settings, signer=signer,
            )
    except PassSchemaError as e:
        print(f"{tag} ERROR: invalid pass document: {e}", file=sys.stderr)
        return 3
    except SigningError as e:
        print(f"{tag} ERROR: {e}", file=sys.stderr)
        if e.record is not None and e.record.stderr.strip():
            print(f"{tag} {e.record.stderr.strip()}", file=sys.stderr)
        return 3
    except (OSError, ValueError) as e:
        print(f"{tag} ERROR: {e}", file=sys.stderr)
        return 3

    print(f"{tag} pass id: {pass_id}", file=sys.stderr)
    print(str(archive))
    return 0


def cmd_signpass(args: argparse.Namespace) -> int:
    from passforge.config import load_settings
    from passforge.model.types import update_barcode
    from passforge.sign import signpass_with_id, signpass_with_modifier

    tag = "[passforge signpass]"
    try:
        pass_ = _read_pass_file(Path(args.pass_file))
        settings = load_settings()
        if args.pass_id:
            if args.barcode_id:
                pass_ = update_barcode(args.pass_id, pass_)
            archive = signpass_with_id(args.pass_id, Path(args.assets), Path(args.out), pass_, settings=settings)
            pass_id = args.pass_id
        else:
            modifier = update_barcode if args.barcode_id else (lambda _id, p: p)
            archive, pass_id = signpass_with_modifier(
                Path(args.assets), Path(args.out), pass_, modifier, settings=settings,
            )
    except PassSchemaError as e:
        print(f"{tag} ERROR: invalid pass document: {e}", file=sys.stderr)
        return 3
    except (SigningError, OSError, ValueError) as e:
        print(f"{tag} ERROR: {e}", file=sys.stderr)
        return 3

    print(f"{tag} pass id: {pass_id}", file=sys.stderr)
    print(str(archive))
    return 0


# ---------------------------------------------------------------------------
# archive subcommands
# ---------------------------------------------------------------------------

def cmd_inspect(args: argparse.Namespace) -> int:
    """Print pass.json (decoded and re-encoded) and the manifest entries."""
    import zipfile

    from passforge.codec.encode import encode_pass
    from passforge.protocol.archive import load_pass, read_archive_entry
    from passforge.protocol.manifest import MANIFEST_FILENAME

    tag = "[passforge inspect]"
    archive = Path(args.archive)
    try:
        pass_ = load_pass(archive)
        manifest_bytes = read_archive_entry(archive, MANIFEST_FILENAME)
    except PassSchemaError as e:
        print(f"{tag} ERROR: invalid pass.json: {e}", file=sys.stderr)
        return 1
    except (OSError, zipfile.BadZipFile) as e:
        print(f"{tag} ERROR: {e}", file=sys.stderr)
        return 3

    if pass_ is None:
        print(f"{tag} ERROR: archive has no pass.json", file=sys.stderr)
        return 1

    print(json.dumps(encode_pass(pass_), indent=2, sort_keys=True, ensure_ascii=False))
    if manifest_bytes is None:
        print(f"{tag} NOTE: archive has no {MANIFEST_FILENAME}", file=sys.stderr)
    else:
        try:
            manifest = json.loads(manifest_bytes.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as e:
            print(f"{tag} NOTE: cannot parse {MANIFEST_FILENAME}: {e}", file=sys.stderr)
        else:
            if isinstance(manifest, dict):
                for name in sorted(manifest):
                    print(f"{tag} {manifest[name]}  {name}", file=sys.stderr)
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    import zipfile

    from passforge.protocol.archive import verify_archive

    tag = "[passforge verify]"
    try:
        problems = verify_archive(Path(args.archive))
    except (OSError, zipfile.BadZipFile) as e:
        print(f"{tag} ERROR: {e}", file=sys.stderr)
        return 3

    if problems:
        for p in problems:
            print(f"{tag} FAIL: {p}", file=sys.stderr)
        return 1
    print(f"{tag} OK: {args.archive}", file=sys.stderr)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="passforge",
        description="passforge CLI: build, sign and inspect .pkpass archives",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Subcommand")

    # about
    subparsers.add_parser("about", help="Print package identity info")

    # id
    subparsers.add_parser("id", help="Print a fresh pass identifier")

    # sign
    p_sign = subparsers.add_parser("sign", help="Sign a pass with a certificate and private key")
    p_sign.add_argument("--assets", required=True, help="Asset directory (icon.png, logo.png, ...)")
    p_sign.add_argument("--out", required=True, help="Destination directory for the .pkpass")
    p_sign.add_argument("--pass", dest="pass_file", required=True, help="pass.json document to sign")
    p_sign.add_argument("--cert", required=True, help="Signer certificate (PEM)")
    p_sign.add_argument("--key", required=True, help="Signer private key (PEM)")
    p_sign.add_argument("--wwdr", default=None, help="Chain anchor certificate (default: $PASSFORGE_WWDR or wwdr.pem)")
    p_sign.add_argument("--id", dest="pass_id", default=None, help="Pass id (default: freshly generated)")
    p_sign.add_argument("--barcode-id", action="store_true", help="Set the barcode message to the pass id")
    p_sign.add_argument("--in-process", action="store_true", help="Sign with the cryptography library instead of openssl")

    # signpass
    p_signpass = subparsers.add_parser("signpass", help="Sign a pass with the platform signpass tool")
    p_signpass.add_argument("--assets", required=True, help="Asset directory (icon.png, logo.png, ...)")
    p_signpass.add_argument("--out", required=True, help="Destination directory for the .pkpass")
    p_signpass.add_argument("--pass", dest="pass_file", required=True, help="pass.json document to sign")
    p_signpass.add_argument("--id", dest="pass_id", default=None, help="Pass id (default: freshly generated)")
    p_signpass.add_argument("--barcode-id", action="store_true", help="Set the barcode message to the pass id")

    # inspect
    p_inspect = subparsers.add_parser("inspect", help="Print the pass.json and manifest of an archive")
    p_inspect.add_argument("archive", help="Path to a .pkpass archive")

    # verify
    p_verify = subparsers.add_parser("verify", help="Check an archive's manifest against its entries")
    p_verify.add_argument("archive", help="Path to a .pkpass archive")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "about":
        return cmd_about(args)
    elif args.command == "id":
        return cmd_id(args)
    elif args.command == "sign":
        return cmd_sign(args)
    elif args.command == "signpass":
        return cmd_signpass(args)
    elif args.command == "inspect":
        return cmd_inspect(args)
    elif args.command == "verify":
        return cmd_verify(args)
    else:
        parser.print_help()
        return 3


if __name__ == "__main__":
    sys.exit(main())
