from __future__ import annotations

import re
from enum import Enum
from typing import Any, TypeVar

from passforge.codec.encode import FORMAT_VERSION
from passforge.core.json_canon import load_json_bytes
from passforge.core.time import parse_pass_datetime
from passforge.errors import PassSchemaError
from passforge.model.enums import Alignment, BarcodeFormat, DateTimeStyle, NumberStyle, TransitType
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
    WebService,
)


# When a document carries more than one category key, the first match in this
# order wins.
PASS_TYPE_DECODE_ORDER = ("boardingPass", "coupon", "eventTicket", "storeCard", "generic")

_CONTENT_KEYS = ("headerFields", "primaryFields", "secondaryFields", "auxiliaryFields", "backFields")

# Up to three digits per channel; RGBColor checks the 0..255 range.
_RGB_RE = re.compile(r"^rgb\((\d{1,3}),(\d{1,3}),(\d{1,3})\)$")

E = TypeVar("E", bound=Enum)


def _json_type_name(v: Any) -> str:
    if v is None:
        return "null"
    if isinstance(v, bool):
        return "boolean"
    if isinstance(v, int):
        return "integer"
    if isinstance(v, float):
        return "number"
    if isinstance(v, str):
        return "string"
    if isinstance(v, list):
        return "array"
    if isinstance(v, dict):
        return "object"
    return type(v).__name__


def _require_object(value: Any, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise PassSchemaError(path, f"expected object, got {_json_type_name(value)}")
    return value


def _require_list(value: Any, path: str) -> list[Any]:
    if not isinstance(value, list):
        raise PassSchemaError(path, f"expected array, got {_json_type_name(value)}")
    return value


def _required(obj: dict[str, Any], key: str, path: str) -> Any:
    if key not in obj or obj[key] is None:
        raise PassSchemaError(f"{path}.{key}", "missing required key")
    return obj[key]


def _str(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise PassSchemaError(path, f"expected string, got {_json_type_name(value)}")
    return value


def _bool(value: Any, path: str) -> bool:
    if not isinstance(value, bool):
        raise PassSchemaError(path, f"expected boolean, got {_json_type_name(value)}")
    return value


def _int(value: Any, path: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise PassSchemaError(path, f"expected integer, got {_json_type_name(value)}")
    return value


def _float(value: Any, path: str) -> float:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise PassSchemaError(path, f"expected number, got {_json_type_name(value)}")
    return float(value)


def _enum(enum_cls: type[E], value: Any, path: str) -> E:
    raw = _str(value, path)
    try:
        return enum_cls(raw)
    except ValueError:
        raise PassSchemaError(path, f"unrecognized {enum_cls.__name__} {raw!r}") from None


def _opt_str(obj: dict[str, Any], key: str, path: str) -> str | None:
    value = obj.get(key)
    return None if value is None else _str(value, f"{path}.{key}")


def _opt_enum(enum_cls: type[E], obj: dict[str, Any], key: str, path: str) -> E | None:
    value = obj.get(key)
    return None if value is None else _enum(enum_cls, value, f"{path}.{key}")


def decode_value(value: Any, path: str) -> PassValue:
    """Decode a field value.

    JSON integers become PassInt and JSON floats PassDouble. Strings that match
    the date profile exactly become PassDate, every other string PassText. Text
    that happens to look like a date therefore comes back as a date.
    """

    if isinstance(value, bool):
        raise PassSchemaError(path, "expected string, date or number, got boolean")
    if isinstance(value, int):
        return PassInt(value)
    if isinstance(value, float):
        return PassDouble(value)
    if isinstance(value, str):
        parsed = parse_pass_datetime(value)
        if parsed is not None:
            return PassDate(parsed)
        return PassText(value)
    raise PassSchemaError(path, f"expected string, date or number, got {_json_type_name(value)}")


def decode_rgb(value: Any, path: str) -> RGBColor:
    raw = _str(value, path)
    m = _RGB_RE.match(raw)
    if m is None:
        raise PassSchemaError(path, f"expected rgb(R,G,B), got {raw!r}")
    try:
        return RGBColor(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError as e:
        raise PassSchemaError(path, str(e)) from None


def decode_field(value: Any, path: str) -> PassField:
    obj = _require_object(value, path)
    is_relative = obj.get("isRelative")
    return PassField(
        key=_str(_required(obj, "key", path), f"{path}.key"),
        value=decode_value(_required(obj, "value", path), f"{path}.value"),
        change_message=_opt_str(obj, "changeMessage", path),
        label=_opt_str(obj, "label", path),
        text_alignment=_opt_enum(Alignment, obj, "textAlignment", path),
        date_style=_opt_enum(DateTimeStyle, obj, "dateStyle", path),
        time_style=_opt_enum(DateTimeStyle, obj, "timeStyle", path),
        is_relative=None if is_relative is None else _bool(is_relative, f"{path}.isRelative"),
        currency_code=_opt_str(obj, "currencyCode", path),
        number_style=_opt_enum(NumberStyle, obj, "numberStyle", path),
    )


def _decode_field_list(obj: dict[str, Any], key: str, path: str) -> tuple[PassField, ...]:
    value = obj.get(key)
    if value is None:
        return ()
    items = _require_list(value, f"{path}.{key}")
    return tuple(decode_field(item, f"{path}.{key}[{i}]") for i, item in enumerate(items))


def decode_content(value: Any, path: str) -> PassContent:
    obj = _require_object(value, path)
    lists = {key: _decode_field_list(obj, key, path) for key in _CONTENT_KEYS}
    return PassContent(
        header_fields=lists["headerFields"],
        primary_fields=lists["primaryFields"],
        secondary_fields=lists["secondaryFields"],
        auxiliary_fields=lists["auxiliaryFields"],
        back_fields=lists["backFields"],
    )


def decode_pass_type(doc: dict[str, Any], path: str = "pass") -> PassType:
    """Pick the pass category from whichever tag key is present.

    Fail-closed:
      - no tag key at all is an error
      - the body under the matched key must be a valid content object
    """

    for tag in PASS_TYPE_DECODE_ORDER:
        if tag not in doc:
            continue
        tag_path = f"{path}.{tag}"
        content = decode_content(doc[tag], tag_path)
        if tag == "boardingPass":
            body = _require_object(doc[tag], tag_path)
            transit = _enum(TransitType, _required(body, "transitType", tag_path), f"{tag_path}.transitType")
            return BoardingPass(transit_type=transit, content=content)
        if tag == "coupon":
            return Coupon(content)
        if tag == "eventTicket":
            return EventTicket(content)
        if tag == "storeCard":
            return StoreCard(content)
        return GenericPass(content)

    raise PassSchemaError(path, f"missing pass category key (one of {', '.join(PASS_TYPE_DECODE_ORDER)})")


def decode_location(value: Any, path: str) -> Location:
    obj = _require_object(value, path)
    altitude = obj.get("altitude")
    return Location(
        latitude=_float(_required(obj, "latitude", path), f"{path}.latitude"),
        longitude=_float(_required(obj, "longitude", path), f"{path}.longitude"),
        altitude=None if altitude is None else _float(altitude, f"{path}.altitude"),
        relevant_text=_opt_str(obj, "relevantText", path),
    )


def decode_barcode(value: Any, path: str) -> Barcode:
    obj = _require_object(value, path)
    return Barcode(
        message=_str(_required(obj, "message", path), f"{path}.message"),
        format=_enum(BarcodeFormat, _required(obj, "format", path), f"{path}.format"),
        message_encoding=_str(_required(obj, "messageEncoding", path), f"{path}.messageEncoding"),
        alt_text=_opt_str(obj, "altText", path),
    )


def decode_web_service(obj: dict[str, Any], path: str) -> WebService | None:
    """Both keys or nothing: a lone token or URL decodes as no web service."""

    token = obj.get("authenticationToken")
    url = obj.get("webServiceURL")
    if token is None or url is None:
        return None
    return WebService(
        authentication_token=_str(token, f"{path}.authenticationToken"),
        web_service_url=_str(url, f"{path}.webServiceURL"),
    )


def decode_pass(value: Any) -> Pass:
    """Decode a pass.json object into a Pass.

    Raises PassSchemaError naming the offending field; never returns a partially
    built pass.
    """

    path = "pass"
    doc = _require_object(value, path)

    format_version = doc.get("formatVersion")
    if format_version is not None and _int(format_version, f"{path}.formatVersion") != FORMAT_VERSION:
        raise PassSchemaError(f"{path}.formatVersion", f"unsupported format version {format_version!r}")

    store_ids = doc.get("associatedStoreIdentifiers")
    locations = doc.get("locations")
    relevant_date = doc.get("relevantDate")
    if relevant_date is not None:
        raw_date = _str(relevant_date, f"{path}.relevantDate")
        relevant_date = parse_pass_datetime(raw_date)
        if relevant_date is None:
            raise PassSchemaError(f"{path}.relevantDate", f"not a date in the pass date format: {raw_date!r}")

    barcode = doc.get("barcode")
    suppress = doc.get("suppressStripShine")

    def opt_rgb(key: str) -> RGBColor | None:
        raw = doc.get(key)
        return None if raw is None else decode_rgb(raw, f"{path}.{key}")

    return Pass(
        description=_str(_required(doc, "description", path), f"{path}.description"),
        organization_name=_str(_required(doc, "organizationName", path), f"{path}.organizationName"),
        pass_type_identifier=_str(_required(doc, "passTypeIdentifier", path), f"{path}.passTypeIdentifier"),
        serial_number=_str(_required(doc, "serialNumber", path), f"{path}.serialNumber"),
        team_identifier=_str(_required(doc, "teamIdentifier", path), f"{path}.teamIdentifier"),
        pass_type=decode_pass_type(doc, path),
        associated_store_identifiers=()
        if store_ids is None
        else tuple(
            _int(x, f"{path}.associatedStoreIdentifiers[{i}]")
            for i, x in enumerate(_require_list(store_ids, f"{path}.associatedStoreIdentifiers"))
        ),
        locations=()
        if locations is None
        else tuple(
            decode_location(x, f"{path}.locations[{i}]")
            for i, x in enumerate(_require_list(locations, f"{path}.locations"))
        ),
        relevant_date=relevant_date,
        barcode=None if barcode is None else decode_barcode(barcode, f"{path}.barcode"),
        background_color=opt_rgb("backgroundColor"),
        foreground_color=opt_rgb("foregroundColor"),
        label_color=opt_rgb("labelColor"),
        logo_text=_opt_str(doc, "logoText", path),
        suppress_strip_shine=None if suppress is None else _bool(suppress, f"{path}.suppressStripShine"),
        web_service=decode_web_service(doc, path),
    )


def parse_pass_bytes(data: bytes) -> Pass:
    """Decode raw pass.json bytes."""

    try:
        doc = load_json_bytes(data)
    except (UnicodeDecodeError, ValueError) as e:
        raise PassSchemaError("pass", f"not valid UTF-8 JSON: {e}") from e
    return decode_pass(doc)
