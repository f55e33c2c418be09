"""Canonical pass.json encoding and decoding.

Round trip: decode_pass(encode_pass(p)) == p for every Pass except those with
PassText values matching the date profile; those decode as PassDate.
"""

from passforge.codec.decode import PASS_TYPE_DECODE_ORDER, decode_pass, parse_pass_bytes
from passforge.codec.encode import FORMAT_VERSION, PASS_TYPE_TAGS, encode_pass, render_pass_bytes

__all__ = [
	"FORMAT_VERSION",
	"PASS_TYPE_DECODE_ORDER",
	"PASS_TYPE_TAGS",
	"decode_pass",
	"encode_pass",
	"parse_pass_bytes",
	"render_pass_bytes",
]
