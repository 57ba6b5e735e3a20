"""Testing guidance for every Pydantic model and form.

Each test below exercises both the happy-path construction and the validation
errors for a specific model. When introducing a new Pydantic model, add a new
test that instantiates it with valid data and asserts the validators by feeding
invalid payloads as well.
"""

from datetime import date
from pathlib import Path
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from Hotels.booking import PriceQuote, Reservation  # noqa: E402
from Hotels.errors import ValidationError  # noqa: E402
from Hotels.forms import ReservationForm, RoomForm, parse_form  # noqa: E402
from Hotels.structure import Room  # noqa: E402
from utils import are_overlapping, nights, uid  # noqa: E402


def test_room_rejects_non_positive_price() -> None:
    """Ensure the Room validator enforces positive pricing."""
    with pytest.raises(ValueError, match="Room price must be positive"):
        Room(number=101, type="Double", price=0)


def test_room_rejects_non_positive_number() -> None:
    with pytest.raises(ValueError, match="Room number must be a positive integer"):
        Room(number=0, type="Double", price=100)


def test_room_accepts_valid_payload() -> None:
    """Ensure Room creation succeeds with a valid payload and defaults to available."""
    room = Room(number=101, type="Double", price=150)

    assert room.price == 150
    assert room.status == "available"
    assert room.is_available
    assert room.to_dict() == {
        "id": room.id,
        "number": 101,
        "type": "Double",
        "price": 150,
        "status": "available",
    }


def test_room_id_is_frozen() -> None:
    room = Room(number=101, type="Double", price=150)

    with pytest.raises(ValueError):
        room.id = "other"  # type: ignore[misc]


def test_reservation_rejects_check_out_before_check_in() -> None:
    """Ensure Reservation enforces strictly increasing stay dates."""
    with pytest.raises(ValueError, match="has invalid dates"):
        Reservation(
            client_name="Ada Lovelace",
            room_number=101,
            check_in=date(2025, 6, 5),
            check_out=date(2025, 6, 5),
        )


def test_reservation_serializes_with_camel_case_keys() -> None:
    """Ensure the persisted layout uses camelCase keys and ISO dates."""
    reservation = Reservation(
        client_name="Ada Lovelace",
        room_number=101,
        check_in=date(2025, 6, 1),
        check_out=date(2025, 6, 5),
        total=1400,
    )

    assert reservation.to_dict() == {
        "id": reservation.id,
        "clientName": "Ada Lovelace",
        "roomNumber": 101,
        "checkIn": "2025-06-01",
        "checkOut": "2025-06-05",
        "total": 1400,
    }
    assert Reservation.model_validate(reservation.to_dict()) == reservation
    assert reservation.nights == 4


def test_reservation_activity_is_inclusive_of_check_out_day() -> None:
    reservation = Reservation(
        client_name="Ada Lovelace",
        room_number=101,
        check_in=date(2025, 6, 1),
        check_out=date(2025, 6, 5),
    )

    assert reservation.is_active(date(2025, 6, 5))
    assert not reservation.is_active(date(2025, 6, 6))
    assert reservation.covers(date(2025, 6, 4))
    assert not reservation.covers(date(2025, 6, 5))


def test_price_quote_holds_values() -> None:
    quote = PriceQuote(nights=4, nightly_rate=550, total=2200)

    assert quote.total == quote.nights * quote.nightly_rate


def test_room_form_reports_every_invalid_field() -> None:
    """Ensure all failing room fields are reported together."""
    with pytest.raises(ValidationError) as excinfo:
        parse_form(RoomForm, {"number": 0, "type": "  ", "price": -5})

    assert set(excinfo.value.errors) == {"number", "type", "price"}
    assert excinfo.value.errors["type"] == "Please select a room type"


def test_room_form_checks_configured_categories() -> None:
    with pytest.raises(ValidationError) as excinfo:
        parse_form(
            RoomForm,
            {"number": "12", "type": "Penthouse", "price": "90.5"},
            context={"room_types": ("Simple", "Double")},
        )

    assert excinfo.value.errors == {"type": "Unknown room type 'Penthouse'"}


def test_room_form_coerces_form_strings() -> None:
    form = parse_form(
        RoomForm,
        {"number": "12", "type": " Double ", "price": "90.5", "status": "occupied"},
        context={"room_types": ("Simple", "Double")},
    )

    assert form.number == 12
    assert form.type == "Double"
    assert form.price == 90.5
    assert form.status == "occupied"


def test_reservation_form_reports_every_invalid_field() -> None:
    """Ensure all failing reservation fields are reported together."""
    with pytest.raises(ValidationError) as excinfo:
        parse_form(
            ReservationForm,
            {"client_name": " A ", "room_number": "", "check_in": None, "check_out": None},
        )

    assert excinfo.value.errors == {
        "client_name": "Invalid name (min. 2 characters)",
        "room_number": "Please select a room",
        "check_in": "Check-in date is required",
        "check_out": "Check-out date is required",
    }


def test_reservation_form_requires_check_out_after_check_in() -> None:
    with pytest.raises(ValidationError) as excinfo:
        parse_form(
            ReservationForm,
            {
                "clientName": "Ada",
                "roomNumber": 101,
                "checkIn": "2025-06-05",
                "checkOut": "2025-06-05",
            },
        )

    assert excinfo.value.errors == {"check_out": "Check-out must be after check-in"}


def test_reservation_form_rejects_unknown_room() -> None:
    with pytest.raises(ValidationError) as excinfo:
        parse_form(
            ReservationForm,
            {"client_name": "Ada", "room_number": 999, "check_in": "2025-06-01", "check_out": "2025-06-02"},
            context={"room_numbers": {101, 102}},
        )

    assert excinfo.value.errors == {"room_number": "Room #999 does not exist"}


def test_reservation_form_rejects_room_that_is_not_selectable() -> None:
    with pytest.raises(ValidationError) as excinfo:
        parse_form(
            ReservationForm,
            {"client_name": "Ada", "room_number": 102, "check_in": "2025-06-01", "check_out": "2025-06-02"},
            context={"room_numbers": {101, 102}, "selectable": {101}},
        )

    assert excinfo.value.errors == {"room_number": "Room #102 is not available"}


def test_reservation_form_reports_invalid_calendar_dates() -> None:
    with pytest.raises(ValidationError) as excinfo:
        parse_form(
            ReservationForm,
            {"client_name": "Ada", "room_number": 101, "check_in": "2025-02-30", "check_out": ""},
        )

    assert excinfo.value.errors == {
        "check_in": "Invalid check-in date",
        "check_out": "Check-out date is required",
    }


def test_nights_and_overlap_helpers() -> None:
    """Ensure stays are half-open: back-to-back stays do not overlap."""
    assert nights(date(2025, 6, 1), date(2025, 6, 5)) == 4
    assert nights(date(2025, 6, 5), date(2025, 6, 1)) == 0
    assert not are_overlapping(date(2025, 6, 1), date(2025, 6, 5), date(2025, 6, 5), date(2025, 6, 8))
    assert are_overlapping(date(2025, 6, 1), date(2025, 6, 5), date(2025, 6, 4), date(2025, 6, 8))


def test_uid_is_unique_and_roughly_ordered() -> None:
    first = uid()
    identifiers = {uid() for _ in range(500)}

    assert len(identifiers) == 500
    assert all(identifier.isalnum() for identifier in identifiers)
    assert max(identifiers)[:8] >= first[:8]
