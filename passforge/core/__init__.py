"""Lowest-level passforge utilities.

Dependency direction rules:
- passforge.core must not import passforge.model, passforge.codec or passforge.protocol
"""

from passforge.core.command_log import CommandRecord, format_command_string, run_command
from passforge.core.hash import is_hex_sha1, sha1_bytes, sha1_file
from passforge.core.ids import gen_pass_id, validate_pass_id
from passforge.core.json_canon import canonical_json_bytes, load_json_bytes
from passforge.core.time import (
	PASS_DATE_FORMAT,
	format_pass_datetime,
	normalize_pass_datetime,
	parse_pass_datetime,
)

__all__ = [
	"CommandRecord",
	"PASS_DATE_FORMAT",
	"canonical_json_bytes",
	"format_command_string",
	"format_pass_datetime",
	"gen_pass_id",
	"is_hex_sha1",
	"load_json_bytes",
	"normalize_pass_datetime",
	"parse_pass_datetime",
	"run_command",
	"sha1_bytes",
	"sha1_file",
	"validate_pass_id",
]
