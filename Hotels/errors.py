"""Failures raised by the hotel inventory."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from Hotels.booking import Reservation


class HotelOSError(Exception):
    """Base class for every inventory failure."""


class ValidationError(HotelOSError):
    """One or more form fields are invalid.

    Attributes:
        errors: Mapping of field name to a user-facing message, one entry per failing field.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = errors
        super().__init__("; ".join(f"{field}: {message}" for field, message in errors.items()))


class DuplicateRoomNumber(HotelOSError):
    def __init__(self, number: int) -> None:
        self.number = number
        super().__init__(f"Room #{number} already exists")


class RoomNotFound(HotelOSError):
    def __init__(self, room_id: str) -> None:
        self.room_id = room_id
        super().__init__(f"No room found with id {room_id}")


class ReservationNotFound(HotelOSError):
    def __init__(self, reservation_id: str) -> None:
        self.reservation_id = reservation_id
        super().__init__(f"No reservation found with id {reservation_id}")


class BookingConflict(HotelOSError):
    """The requested stay overlaps an existing reservation of the same room."""

    def __init__(self, conflicting: "Reservation") -> None:
        self.conflicting = conflicting
        super().__init__(
            f"Conflicts with the reservation of {conflicting.client_name} "
            f"({conflicting.check_in.isoformat()} -> {conflicting.check_out.isoformat()})"
        )


class PersistenceWriteFailure(HotelOSError):
    """The storage backend refused a write; the in-memory state is still valid."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Unable to save '{key}': {reason}")
