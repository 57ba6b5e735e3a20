"""Search, filter and sort over rooms and reservations."""

from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Literal, Optional, Sequence, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_snake

from Hotels.booking import Reservation
from Hotels.structure import Room

RecordT = TypeVar("RecordT", bound=BaseModel)
Activity = Literal["", "active", "past"]

ROOM_SORT_FIELDS = ("number", "type", "price", "status")
RESERVATION_SORT_FIELDS = ("client_name", "room_number", "check_in", "check_out", "total")


def filter_rooms(rooms: Iterable[Room], query: str = "", status: str = "") -> list[Room]:
    """Rooms whose number, type or status contains `query`, optionally with an exact status."""
    needle = query.strip().lower()
    return [
        room
        for room in rooms
        if (
            needle in str(room.number)
            or needle in room.type.lower()
            or needle in room.status.lower()
        )
        and (not status or room.status == status)
    ]


def filter_reservations(
    reservations: Iterable[Reservation],
    query: str = "",
    activity: Activity = "",
    today: Optional[date] = None,
) -> list[Reservation]:
    """Reservations whose client name or room number contains `query`.

    `activity` keeps only active ("active") or finished ("past") stays; a stay
    checking out today is still active.
    """
    if activity not in ("", "active", "past"):
        raise ValueError(f"Unknown activity filter: {activity!r}")
    needle = query.strip().lower()
    today = today or date.today()
    return [
        reservation
        for reservation in reservations
        if (needle in reservation.client_name.lower() or needle in str(reservation.room_number))
        and (not activity or reservation.is_active(today) == (activity == "active"))
    ]


def _sort_key(field: str):
    def key(record: BaseModel) -> Any:
        value = getattr(record, field)
        if isinstance(value, str):
            return value.lower()
        return value

    return key


def normalize_field(field: str, allowed: Sequence[str]) -> str:
    """Accept camelCase or snake_case field names."""
    name = to_snake(field)
    if name not in allowed:
        raise ValueError(f"Cannot sort by {field!r}; expected one of {', '.join(allowed)}")
    return name


def sort_records(records: Iterable[RecordT], field: str, ascending: bool = True) -> list[RecordT]:
    """Stable sort on one field; equal keys keep their relative order in both directions."""
    return sorted(records, key=_sort_key(to_snake(field)), reverse=not ascending)


@dataclass
class SortState:
    """Current sort column of a table."""

    field: str
    ascending: bool = True

    def select(self, field: str) -> "SortState":
        # reselecting the column flips direction, a new column starts ascending
        if field == self.field:
            self.ascending = not self.ascending
        else:
            self.field = field
            self.ascending = True
        return self

    def apply(self, records: Iterable[RecordT]) -> list[RecordT]:
        return sort_records(records, self.field, self.ascending)
