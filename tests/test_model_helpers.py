"""Tests for the pass model construction helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from conftest import make_pass
from passforge.model import (
    Barcode,
    BarcodeFormat,
    GenericPass,
    Pass,
    PassContent,
    PassDate,
    PassDouble,
    PassText,
    RGBColor,
    mk_barcode,
    mk_simple_field,
    rgb,
    update_barcode,
)


class TestRgb:
    def test_in_range(self) -> None:
        assert rgb(0, 128, 255) == RGBColor(0, 128, 255)

    @pytest.mark.parametrize("channels", [(256, 0, 0), (0, 256, 0), (0, 0, 256), (-1, 0, 0), (0, -1, 0), (0, 0, -1)])
    def test_any_channel_out_of_range_is_none(self, channels: tuple[int, int, int]) -> None:
        assert rgb(*channels) is None

    def test_str_is_wire_form(self) -> None:
        assert str(rgb(1, 2, 3)) == "rgb(1,2,3)"

    @pytest.mark.parametrize("channels", [(-1, 0, 0), (0, 256, 0), (0, 0, 300)])
    def test_direct_construction_checks_range(self, channels: tuple[int, int, int]) -> None:
        with pytest.raises(ValueError):
            RGBColor(*channels)


class TestBarcodeHelpers:
    def test_mk_barcode_mirrors_message(self) -> None:
        b = mk_barcode("hello", BarcodeFormat.PDF417)
        assert b == Barcode(message="hello", format=BarcodeFormat.PDF417, message_encoding="iso-8859-1", alt_text="hello")

    def test_update_barcode_sets_message_and_alt_text(self) -> None:
        p = make_pass(barcode=mk_barcode("old", BarcodeFormat.AZTEC))
        updated = update_barcode("abc123", p)
        assert updated.barcode is not None
        assert updated.barcode.message == "abc123"
        assert updated.barcode.alt_text == "abc123"
        assert updated.barcode.format is BarcodeFormat.AZTEC
        # The input is untouched.
        assert p.barcode.message == "old"

    def test_update_barcode_without_barcode_is_identity(self) -> None:
        p = make_pass(barcode=None)
        assert update_barcode("abc123", p) is p


class TestFields:
    def test_mk_simple_field_has_no_styling(self) -> None:
        f = mk_simple_field("k", PassText("v"))
        assert f.label is None
        assert f.change_message is None
        assert f.text_alignment is None
        assert f.date_style is None
        assert f.time_style is None
        assert f.is_relative is None
        assert f.currency_code is None
        assert f.number_style is None

    def test_mk_simple_field_label(self) -> None:
        assert mk_simple_field("k", PassText("v"), label="L").label == "L"

    def test_double_is_coerced_to_float(self) -> None:
        assert isinstance(PassDouble(3).value, float)


class TestDates:
    def test_naive_is_taken_as_utc(self) -> None:
        d = PassDate(datetime(2024, 1, 2, 3, 4, 5))
        assert d.value == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    def test_offset_is_converted_and_microseconds_dropped(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        d = PassDate(datetime(2024, 1, 2, 5, 4, 5, 999, tzinfo=plus_two))
        assert d.value == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    def test_relevant_date_is_normalised(self) -> None:
        p = make_pass(relevant_date=datetime(2024, 1, 2, 3, 4, 5, 123456))
        assert p.relevant_date == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


class TestPass:
    def test_passes_are_hashable_values(self) -> None:
        assert hash(make_pass()) == hash(make_pass())
        assert len({make_pass(), make_pass()}) == 1

    def test_lists_are_stored_as_tuples(self) -> None:
        fields = [mk_simple_field("a", PassText("x"))]
        content = PassContent(back_fields=fields)
        fields.append(mk_simple_field("b", PassText("y")))
        assert content.back_fields == (mk_simple_field("a", PassText("x")),)
        assert isinstance(make_pass().locations, tuple)
        assert isinstance(make_pass().associated_store_identifiers, tuple)

    def test_update_barcode_copy_shares_no_mutable_state(self) -> None:
        original = make_pass()
        updated = update_barcode("abc123", original)
        with pytest.raises(AttributeError):
            updated.pass_type.content.back_fields.append(mk_simple_field("extra", PassText("z")))  # type: ignore[attr-defined]
        assert len(original.pass_type.content.back_fields) == 1

    def test_pass_type_must_be_a_category(self) -> None:
        with pytest.raises(TypeError):
            make_pass(pass_type=PassContent())

    def test_optional_defaults(self) -> None:
        p = Pass(
            description="d",
            organization_name="o",
            pass_type_identifier="pass.x",
            serial_number="s",
            team_identifier="t",
            pass_type=GenericPass(PassContent()),
        )
        assert p.associated_store_identifiers == ()
        assert p.locations == ()
        assert p.barcode is None
        assert p.web_service is None
