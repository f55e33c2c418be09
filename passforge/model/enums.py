"""Closed enumerations of the pass format.

Each member's value is the exact string the wallet platform expects in
pass.json, so the enum doubles as the encode/decode table.
"""

from __future__ import annotations

from enum import Enum


class BarcodeFormat(Enum):
    QR = "PKBarcodeFormatQR"
    PDF417 = "PKBarcodeFormatPDF417"
    AZTEC = "PKBarcodeFormatAztec"


class Alignment(Enum):
    LEFT = "PKTextAlignmentLeft"
    CENTER = "PKTextAlignmentCenter"
    RIGHT = "PKTextAlignmentRight"
    NATURAL = "PKTextAlignmentNatural"

    @classmethod
    def _missing_(cls, value: object) -> Alignment | None:
        # Older pass generators wrote the bare prefix for natural alignment.
        if value == "PKTextAlignment":
            return cls.NATURAL
        return None


class DateTimeStyle(Enum):
    NONE = "NSDateFormatterNoStyle"
    SHORT = "NSDateFormatterShortStyle"
    MEDIUM = "NSDateFormatterMediumStyle"
    LONG = "NSDateFormatterLongStyle"
    FULL = "NSDateFormatterFullStyle"


class NumberStyle(Enum):
    DECIMAL = "PKNumberStyleDecimal"
    PERCENT = "PKNumberStylePercent"
    SCIENTIFIC = "PKNumberStyleScientific"
    SPELL_OUT = "PKNumberStyleSpellOut"


class TransitType(Enum):
    AIR = "PKTransitTypeAir"
    BOAT = "PKTransitTypeBoat"
    BUS = "PKTransitTypeBus"
    TRAIN = "PKTransitTypeTrain"
    GENERIC = "PKTransitTypeGeneric"
