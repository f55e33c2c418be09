from __future__ import annotations

import json
import re
import subprocess
import zipfile
from pathlib import Path

import pytest

from conftest import make_pass
from passforge.cli import main as passforge_main
from passforge.codec import render_pass_bytes
from passforge.config import ENV_OPENSSL, ENV_WWDR


def _write_pass(path: Path) -> Path:
    path.write_bytes(render_pass_bytes(make_pass()))
    return path


def _fake_openssl(monkeypatch: pytest.MonkeyPatch) -> list[list[str]]:
    calls: list[list[str]] = []

    def fake_run(argv, **kwargs):
        calls.append(list(argv))
        (Path(kwargs["cwd"]) / "signature").write_bytes(b"\x30der")
        return subprocess.CompletedProcess(argv, 0, stdout="", stderr="")

    monkeypatch.setattr(subprocess, "run", fake_run)
    return calls


def test_id_prints_hex(capsys: pytest.CaptureFixture[str]) -> None:
    assert passforge_main(["id"]) == 0
    assert re.fullmatch(r"[0-9a-f]{32}\n", capsys.readouterr().out)


def test_about(capsys: pytest.CaptureFixture[str]) -> None:
    assert passforge_main(["about"]) == 0
    out = capsys.readouterr().out
    assert "passforge" in out
    assert "http" not in out


def test_no_command_is_usage_error() -> None:
    assert passforge_main([]) == 3


def test_sign_inspect_verify(
    tmp_path: Path,
    asset_dir: Path,
    dest_dir: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setenv(ENV_OPENSSL, "openssl")
    monkeypatch.setenv(ENV_WWDR, str(tmp_path / "wwdr.pem"))
    calls = _fake_openssl(monkeypatch)
    pass_file = _write_pass(tmp_path / "pass.json")

    rc = passforge_main([
        "sign",
        "--assets", str(asset_dir),
        "--out", str(dest_dir),
        "--pass", str(pass_file),
        "--cert", str(tmp_path / "cert.pem"),
        "--key", str(tmp_path / "key.pem"),
        "--id", "cli-1",
        "--barcode-id",
    ])
    assert rc == 0
    archive = Path(capsys.readouterr().out.strip())
    assert archive == dest_dir / "cli-1.pkpass"
    assert calls and calls[0][:2] == ["openssl", "smime"]

    assert passforge_main(["inspect", str(archive)]) == 0
    doc = json.loads(capsys.readouterr().out)
    assert doc["serialNumber"] == "cli-1"
    assert doc["barcode"]["message"] == "cli-1"

    assert passforge_main(["verify", str(archive)]) == 0


def test_verify_fails_on_tampered_archive(tmp_path: Path) -> None:
    archive = tmp_path / "bad.pkpass"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("manifest.json", json.dumps({"icon.png": "0" * 40}))
        zf.writestr("icon.png", b"abc")
        zf.writestr("signature", b"\x30")
    assert passforge_main(["verify", str(archive)]) == 1


def test_sign_rejects_invalid_pass_document(tmp_path: Path, asset_dir: Path, dest_dir: Path) -> None:
    bad = tmp_path / "pass.json"
    bad.write_text('{"description": "d"}')
    rc = passforge_main([
        "sign",
        "--assets", str(asset_dir),
        "--out", str(dest_dir),
        "--pass", str(bad),
        "--cert", "c.pem",
        "--key", "k.pem",
    ])
    assert rc == 3
    assert list(dest_dir.iterdir()) == []
