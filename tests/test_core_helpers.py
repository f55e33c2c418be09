"""Tests for pass ids, hashing, canonical JSON, the date profile and command runs."""

from __future__ import annotations

import re
import subprocess
from datetime import datetime, timezone
from pathlib import Path

import pytest

from passforge.core import (
    canonical_json_bytes,
    format_pass_datetime,
    gen_pass_id,
    is_hex_sha1,
    parse_pass_datetime,
    run_command,
    sha1_bytes,
    sha1_file,
    validate_pass_id,
)
from passforge.errors import SigningError


class TestPassId:
    def test_shape_and_uniqueness(self) -> None:
        ids = [gen_pass_id() for _ in range(1000)]
        assert all(re.fullmatch(r"[0-9a-f]{32}", i) for i in ids)
        assert len(set(ids)) == len(ids)

    def test_valid_caller_id(self) -> None:
        assert validate_pass_id("ticket-0001") == "ticket-0001"

    @pytest.mark.parametrize("bad", ["", ".", "..", "a/b", "a\\b", "a\x00b"])
    def test_unsafe_ids_rejected(self, bad: str) -> None:
        with pytest.raises(ValueError):
            validate_pass_id(bad)


class TestHash:
    def test_known_digest(self, tmp_path: Path) -> None:
        f = tmp_path / "icon.png"
        f.write_bytes(b"abc")
        assert sha1_file(f) == "a9993e364706816aba3e25717850c26c9cd0d89d"
        assert sha1_bytes(b"abc") == "a9993e364706816aba3e25717850c26c9cd0d89d"

    def test_is_hex_sha1(self) -> None:
        assert is_hex_sha1("a9993e364706816aba3e25717850c26c9cd0d89d")
        assert not is_hex_sha1("A9993E364706816ABA3E25717850C26C9CD0D89D")
        assert not is_hex_sha1("abc")


class TestCanonicalJson:
    def test_sorted_compact_with_trailing_newline(self) -> None:
        assert canonical_json_bytes({"b": 1, "a": [1, 2]}) == b'{"a":[1,2],"b":1}\n'

    def test_non_ascii_kept_as_utf8(self) -> None:
        assert canonical_json_bytes({"k": "é"}) == '{"k":"é"}\n'.encode("utf-8")


class TestDateProfile:
    def test_format(self) -> None:
        assert format_pass_datetime(datetime(2024, 2, 29, 23, 59, 59, tzinfo=timezone.utc)) == "2024-02-29T23:59:59Z"

    def test_parse(self) -> None:
        assert parse_pass_datetime("2024-02-29T23:59:59Z") == datetime(2024, 2, 29, 23, 59, 59, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "raw",
        [
            "2024-02-29",
            "2024-02-29T23:59:59+01:00",
            "2024-02-29T23:59:59.5Z",
            "2024-1-5T1:2:3Z",  # unpadded fields
            "999-01-01T00:00:00Z",  # three-digit year
            "",
            "soon",
        ],
    )
    def test_parse_rejects_other_shapes(self, raw: str) -> None:
        assert parse_pass_datetime(raw) is None

    def test_small_years_are_zero_padded(self) -> None:
        dt = datetime(999, 1, 1, tzinfo=timezone.utc)
        assert format_pass_datetime(dt) == "0999-01-01T00:00:00Z"
        assert parse_pass_datetime("0999-01-01T00:00:00Z") == dt


class TestRunCommand:
    def test_success_record(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_run(argv, **kwargs):
            return subprocess.CompletedProcess(argv, 0, stdout="ok\n", stderr="")

        monkeypatch.setattr(subprocess, "run", fake_run)
        record = run_command(["tool", "--flag"], step="sign", timeout=5)
        assert record.exit_code == 0
        assert record.stdout == "ok\n"
        assert record.argv == ["tool", "--flag"]

    def test_non_zero_exit(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_run(argv, **kwargs):
            return subprocess.CompletedProcess(argv, 2, stdout="", stderr="bad key\n")

        monkeypatch.setattr(subprocess, "run", fake_run)
        with pytest.raises(SigningError) as exc:
            run_command(["tool"], step="sign", timeout=5)
        assert exc.value.step == "sign"
        assert exc.value.record is not None
        assert exc.value.record.exit_code == 2
        assert "bad key" in str(exc.value)

    def test_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_run(argv, **kwargs):
            raise subprocess.TimeoutExpired(argv, kwargs["timeout"])

        monkeypatch.setattr(subprocess, "run", fake_run)
        with pytest.raises(SigningError) as exc:
            run_command(["tool"], step="digest", timeout=0.5)
        assert exc.value.step == "digest"
        assert exc.value.record.exit_code == -1

    def test_missing_executable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_run(argv, **kwargs):
            raise FileNotFoundError(argv[0])

        monkeypatch.setattr(subprocess, "run", fake_run)
        with pytest.raises(SigningError, match="executable not found"):
            run_command(["nope"], step="signpass", timeout=5)
