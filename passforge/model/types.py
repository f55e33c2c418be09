"""Typed representation of a wallet pass (the contents of pass.json).

All types are frozen, hashable dataclasses; ordered collections are tuples and
lists passed in are converted. Optional attributes default to None and are
left out of the encoded document entirely; see passforge.codec.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime
from typing import Union

from passforge.core.time import normalize_pass_datetime
from passforge.model.enums import Alignment, BarcodeFormat, DateTimeStyle, NumberStyle, TransitType


DEFAULT_MESSAGE_ENCODING = "iso-8859-1"


# ---------------------------------------------------------------------------
# Field values
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PassInt:
    value: int


@dataclass(frozen=True)
class PassDouble:
    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))


@dataclass(frozen=True)
class PassDate:
    value: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", normalize_pass_datetime(self.value))


@dataclass(frozen=True)
class PassText:
    value: str


PassValue = Union[PassInt, PassDouble, PassDate, PassText]


# ---------------------------------------------------------------------------
# Leaf structures
# ---------------------------------------------------------------------------

def _in_channel_range(x: int) -> bool:
    return 0 <= x <= 255


@dataclass(frozen=True)
class RGBColor:
    """A colour with every channel in 0..255.

    Direct construction raises ValueError on an out-of-range channel; rgb()
    returns None instead.
    """

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            if not _in_channel_range(getattr(self, name)):
                raise ValueError(f"colour channel {name} out of range 0..255: {getattr(self, name)!r}")

    def __str__(self) -> str:
        return f"rgb({self.r},{self.g},{self.b})"


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float
    altitude: float | None = None
    relevant_text: str | None = None


@dataclass(frozen=True)
class Barcode:
    message: str
    format: BarcodeFormat
    message_encoding: str = DEFAULT_MESSAGE_ENCODING
    alt_text: str | None = None


@dataclass(frozen=True)
class WebService:
    """Update web service; the platform expects a token of 16+ characters."""

    authentication_token: str
    web_service_url: str


@dataclass(frozen=True)
class PassField:
    """A labelled value shown in one of the pass regions.

    Date styling (date_style, time_style, is_relative) and number styling
    (currency_code, number_style) are meant to be used one group at a time;
    nothing enforces that.
    """

    key: str
    value: PassValue
    change_message: str | None = None  # may contain the %@ placeholder
    label: str | None = None
    text_alignment: Alignment | None = None
    date_style: DateTimeStyle | None = None
    time_style: DateTimeStyle | None = None
    is_relative: bool | None = None
    currency_code: str | None = None
    number_style: NumberStyle | None = None


@dataclass(frozen=True)
class PassContent:
    header_fields: tuple[PassField, ...] = ()
    primary_fields: tuple[PassField, ...] = ()
    secondary_fields: tuple[PassField, ...] = ()
    auxiliary_fields: tuple[PassField, ...] = ()
    back_fields: tuple[PassField, ...] = ()

    def __post_init__(self) -> None:
        for f in dataclasses.fields(self):
            object.__setattr__(self, f.name, tuple(getattr(self, f.name)))


# ---------------------------------------------------------------------------
# Pass categories (closed union)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BoardingPass:
    transit_type: TransitType
    content: PassContent


@dataclass(frozen=True)
class Coupon:
    content: PassContent


@dataclass(frozen=True)
class EventTicket:
    content: PassContent


@dataclass(frozen=True)
class GenericPass:
    content: PassContent


@dataclass(frozen=True)
class StoreCard:
    content: PassContent


PassType = Union[BoardingPass, Coupon, EventTicket, GenericPass, StoreCard]

PASS_TYPE_VARIANTS = (BoardingPass, Coupon, EventTicket, GenericPass, StoreCard)


@dataclass(frozen=True)
class Pass:
    # Required keys
    description: str
    organization_name: str
    pass_type_identifier: str
    serial_number: str
    team_identifier: str
    pass_type: PassType

    # Associated app keys
    associated_store_identifiers: tuple[int, ...] = ()

    # Relevance keys
    locations: tuple[Location, ...] = ()
    relevant_date: datetime | None = None

    # Visual appearance keys
    barcode: Barcode | None = None
    background_color: RGBColor | None = None
    foreground_color: RGBColor | None = None
    label_color: RGBColor | None = None
    logo_text: str | None = None
    suppress_strip_shine: bool | None = None

    # Web service keys
    web_service: WebService | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.pass_type, PASS_TYPE_VARIANTS):
            raise TypeError(f"pass_type must be one of the pass categories, got {type(self.pass_type).__name__}")
        object.__setattr__(self, "associated_store_identifiers", tuple(self.associated_store_identifiers))
        object.__setattr__(self, "locations", tuple(self.locations))
        if self.relevant_date is not None:
            object.__setattr__(self, "relevant_date", normalize_pass_datetime(self.relevant_date))


# ---------------------------------------------------------------------------
# Construction helpers
# ---------------------------------------------------------------------------

def rgb(r: int, g: int, b: int) -> RGBColor | None:
    """Return an RGBColor if all three channels are within 0..255, else None."""

    if _in_channel_range(r) and _in_channel_range(g) and _in_channel_range(b):
        return RGBColor(r, g, b)
    return None


def mk_barcode(message: str, format: BarcodeFormat) -> Barcode:
    """Barcode showing message as both payload and alternate text."""

    return Barcode(
        message=message,
        format=format,
        message_encoding=DEFAULT_MESSAGE_ENCODING,
        alt_text=message,
    )


def mk_simple_field(key: str, value: PassValue, label: str | None = None) -> PassField:
    return PassField(key=key, value=value, label=label)


def update_barcode(pass_id: str, pass_: Pass) -> Pass:
    """Mirror pass_id into the barcode message and alternate text.

    Passes without a barcode are returned unchanged. Suitable as the modifier
    of signpass_with_modifier() and sign_open_with_modifier().
    """

    if pass_.barcode is None:
        return pass_
    barcode = dataclasses.replace(pass_.barcode, message=pass_id, alt_text=pass_id)
    return dataclasses.replace(pass_, barcode=barcode)
