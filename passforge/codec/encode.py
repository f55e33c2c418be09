from __future__ import annotations

from typing import Any, Callable, TypeVar

from passforge.core.json_canon import canonical_json_bytes
from passforge.core.time import format_pass_datetime
from passforge.model.types import (
    Barcode,
    BoardingPass,
    Coupon,
    EventTicket,
    GenericPass,
    Location,
    Pass,
    PassContent,
    PassDate,
    PassDouble,
    PassField,
    PassInt,
    PassText,
    PassType,
    PassValue,
    RGBColor,
    StoreCard,
)


# Hardcoded: the platform only understands format version 1.
FORMAT_VERSION = 1

PASS_TYPE_TAGS: dict[type, str] = {
    BoardingPass: "boardingPass",
    Coupon: "coupon",
    EventTicket: "eventTicket",
    GenericPass: "generic",
    StoreCard: "storeCard",
}

T = TypeVar("T")


def put_optional(obj: dict[str, Any], key: str, value: T | None, encode: Callable[[T], Any] | None = None) -> None:
    """Set obj[key] only when value is present; the platform rejects null values."""

    if value is None:
        return
    obj[key] = encode(value) if encode is not None else value


def _enum_value(member: Any) -> str:
    return member.value


def encode_rgb(color: RGBColor) -> str:
    return str(color)


def encode_value(value: PassValue) -> Any:
    if isinstance(value, PassInt):
        return int(value.value)
    if isinstance(value, PassDouble):
        return float(value.value)
    if isinstance(value, PassDate):
        return format_pass_datetime(value.value)
    if isinstance(value, PassText):
        return value.value
    raise TypeError(f"unsupported pass field value: {type(value).__name__}")


def encode_field(f: PassField) -> dict[str, Any]:
    obj: dict[str, Any] = {
        "key": f.key,
        "value": encode_value(f.value),
    }
    put_optional(obj, "changeMessage", f.change_message)
    put_optional(obj, "label", f.label)
    put_optional(obj, "textAlignment", f.text_alignment, _enum_value)
    put_optional(obj, "dateStyle", f.date_style, _enum_value)
    put_optional(obj, "timeStyle", f.time_style, _enum_value)
    put_optional(obj, "isRelative", f.is_relative, bool)
    put_optional(obj, "currencyCode", f.currency_code)
    put_optional(obj, "numberStyle", f.number_style, _enum_value)
    return obj


def encode_content(content: PassContent) -> dict[str, Any]:
    return {
        "headerFields": [encode_field(f) for f in content.header_fields],
        "primaryFields": [encode_field(f) for f in content.primary_fields],
        "secondaryFields": [encode_field(f) for f in content.secondary_fields],
        "auxiliaryFields": [encode_field(f) for f in content.auxiliary_fields],
        "backFields": [encode_field(f) for f in content.back_fields],
    }


def pass_type_tag(pass_type: PassType) -> str:
    try:
        return PASS_TYPE_TAGS[type(pass_type)]
    except KeyError:
        raise TypeError(f"unsupported pass category: {type(pass_type).__name__}") from None


def encode_pass_type(pass_type: PassType) -> dict[str, Any]:
    """Encode the category body stored under its tag key.

    Boarding passes carry transitType inside the same object as the field lists.
    """

    obj = encode_content(pass_type.content)
    if isinstance(pass_type, BoardingPass):
        obj["transitType"] = pass_type.transit_type.value
    return obj


def encode_location(loc: Location) -> dict[str, Any]:
    obj: dict[str, Any] = {
        "latitude": float(loc.latitude),
        "longitude": float(loc.longitude),
    }
    put_optional(obj, "altitude", loc.altitude, float)
    put_optional(obj, "relevantText", loc.relevant_text)
    return obj


def encode_barcode(barcode: Barcode) -> dict[str, Any]:
    obj: dict[str, Any] = {
        "format": barcode.format.value,
        "message": barcode.message,
        "messageEncoding": barcode.message_encoding,
    }
    put_optional(obj, "altText", barcode.alt_text)
    return obj


def encode_pass(p: Pass) -> dict[str, Any]:
    """Encode a Pass into the pass.json object."""

    obj: dict[str, Any] = {
        "description": p.description,
        "formatVersion": FORMAT_VERSION,
        "organizationName": p.organization_name,
        "passTypeIdentifier": p.pass_type_identifier,
        "serialNumber": p.serial_number,
        "teamIdentifier": p.team_identifier,
        "associatedStoreIdentifiers": [int(x) for x in p.associated_store_identifiers],
        "locations": [encode_location(loc) for loc in p.locations],
        pass_type_tag(p.pass_type): encode_pass_type(p.pass_type),
    }
    put_optional(obj, "relevantDate", p.relevant_date, format_pass_datetime)
    put_optional(obj, "barcode", p.barcode, encode_barcode)
    put_optional(obj, "backgroundColor", p.background_color, encode_rgb)
    put_optional(obj, "foregroundColor", p.foreground_color, encode_rgb)
    put_optional(obj, "labelColor", p.label_color, encode_rgb)
    put_optional(obj, "logoText", p.logo_text)
    put_optional(obj, "suppressStripShine", p.suppress_strip_shine, bool)

    # Flattened onto the pass object, never nested.
    if p.web_service is not None:
        obj["authenticationToken"] = p.web_service.authentication_token
        obj["webServiceURL"] = p.web_service.web_service_url
    return obj


def render_pass_bytes(p: Pass) -> bytes:
    """Return the canonical pass.json bytes for p."""

    return canonical_json_bytes(encode_pass(p))
