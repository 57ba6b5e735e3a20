"""Demo data installed the first time the inventory starts with empty storage."""

from datetime import date

from Hotels.booking import Reservation
from Hotels.structure import AVAILABLE, OCCUPIED, Room


def demo_rooms() -> list[Room]:
    return [
        Room(number=101, type="Simple", price=350, status=AVAILABLE),
        Room(number=102, type="Double", price=550, status=OCCUPIED),
        Room(number=201, type="Suite", price=1200, status=AVAILABLE),
        Room(number=202, type="Deluxe", price=800, status=OCCUPIED),
        Room(number=301, type="Presidential", price=2500, status=AVAILABLE),
    ]


def demo_reservations() -> list[Reservation]:
    return [
        Reservation(
            client_name="Ahmed Benali",
            room_number=102,
            check_in=date(2025, 6, 1),
            check_out=date(2025, 6, 5),
            total=2200,
        ),
        Reservation(
            client_name="Sara El Fassi",
            room_number=202,
            check_in=date(2025, 6, 3),
            check_out=date(2025, 6, 7),
            total=3200,
        ),
    ]
