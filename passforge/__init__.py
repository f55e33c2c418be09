"""passforge: wallet pass model, canonical pass.json codec and .pkpass signing.

The signing entry points and archive helpers from passforge.sign are
re-exported here.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from passforge.errors import PassSchemaError, SigningError
from passforge.sign import (
	Modifier,
	gen_pass_id,
	load_pass,
	sign_open,
	sign_open_with_id,
	sign_open_with_modifier,
	signpass,
	signpass_with_id,
	signpass_with_modifier,
	update_barcode,
	verify_archive,
)

__all__ = [
	"Modifier",
	"PassSchemaError",
	"SigningError",
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


def __getattr__(name: str):
    if name == "__version__":
        try:
            return version("passforge")
        except PackageNotFoundError:
            return "0.0.0"
    raise AttributeError(name)
