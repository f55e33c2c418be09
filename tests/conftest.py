from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from passforge.model import (
    BarcodeFormat,
    EventTicket,
    Location,
    Pass,
    PassContent,
    PassDate,
    PassDouble,
    PassInt,
    PassText,
    WebService,
    mk_barcode,
    mk_simple_field,
    rgb,
)


def make_pass(**overrides) -> Pass:
    """A small but fully populated event ticket."""

    content = PassContent(
        header_fields=[mk_simple_field("seat", PassText("12A"), label="Seat")],
        primary_fields=[mk_simple_field("event", PassText("Concert"))],
        secondary_fields=[mk_simple_field("doors", PassDate(datetime(2024, 5, 1, 19, 30, tzinfo=timezone.utc)))],
        auxiliary_fields=[mk_simple_field("row", PassInt(7)), mk_simple_field("price", PassDouble(12.5))],
        back_fields=[mk_simple_field("terms", PassText("No refunds"))],
    )
    kwargs = dict(
        description="Concert ticket",
        organization_name="Example Org",
        pass_type_identifier="pass.com.example.ticket",
        serial_number="placeholder",
        team_identifier="TEAM123456",
        pass_type=EventTicket(content),
        associated_store_identifiers=[123456789],
        locations=[Location(latitude=52.37, longitude=4.89, relevant_text="Venue")],
        relevant_date=datetime(2024, 5, 1, 18, 0, tzinfo=timezone.utc),
        barcode=mk_barcode("placeholder", BarcodeFormat.QR),
        background_color=rgb(10, 20, 30),
        foreground_color=rgb(255, 255, 255),
        label_color=rgb(0, 0, 0),
        logo_text="Example",
        suppress_strip_shine=True,
        web_service=WebService(authentication_token="0123456789abcdef", web_service_url="https://example.com/passes"),
    )
    kwargs.update(overrides)
    return Pass(**kwargs)


@pytest.fixture
def sample_pass() -> Pass:
    return make_pass()


@pytest.fixture
def asset_dir(tmp_path: Path) -> Path:
    d = tmp_path / "assets"
    d.mkdir()
    (d / "icon.png").write_bytes(b"abc")
    (d / "logo.png").write_bytes(b"logo-bytes")
    return d


@pytest.fixture
def dest_dir(tmp_path: Path) -> Path:
    d = tmp_path / "out"
    d.mkdir()
    return d
