from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from passforge.core.command_log import CommandRecord


class PassSchemaError(ValueError):
    """Raised when a pass document does not decode into a Pass.

    `path` is the dotted location of the offending value, e.g.
    ``pass.barcode.format`` or ``pass.generic.backFields[2].value``.
    """

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


class SigningError(RuntimeError):
    """Raised when an external signing, digest or packaging step fails.

    `step` is one of "digest", "sign", "signpass" or "package". `record` holds the
    command invocation when the step ran an external process.
    """

    def __init__(self, step: str, message: str, *, record: CommandRecord | None = None) -> None:
        super().__init__(f"{step} failed: {message}")
        self.step = step
        self.record = record
