"""Room and reservation inventory: the single owner of both collections."""

import logging
from datetime import date
from typing import Any, Callable, Optional

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from config import Settings, get_settings
from Database.db import RESERVATIONS_KEY, ROOMS_KEY, KeyValueStorage, MemoryStorage, load, save
from Hotels.booking import PriceQuote, Reservation
from Hotels.errors import (
    BookingConflict,
    DuplicateRoomNumber,
    PersistenceWriteFailure,
    ReservationNotFound,
    RoomNotFound,
)
from Hotels.forms import ReservationForm, RoomForm, parse_form
from Hotels.seed import demo_reservations, demo_rooms
from Hotels.structure import AVAILABLE, OCCUPIED, Room, RoomStatus
from utils import are_overlapping, nights

logger = logging.getLogger(__name__)

_ROOM = TypeAdapter(Room)
_RESERVATION = TypeAdapter(Reservation)


class DashboardStats(BaseModel):
    """Aggregates shown on the dashboard."""

    total_rooms: int
    available: int
    occupied: int
    reservation_count: int
    revenue: float


class HotelInventory:
    """Owns the rooms and reservations and keeps them consistent.

    Every mutation runs all of its checks before touching the collections, then
    saves the affected storage slots. A failed save leaves the in-memory state
    as it is and is reported to ``on_write_failure``.
    """

    def __init__(
        self,
        storage: Optional[KeyValueStorage] = None,
        settings: Optional[Settings] = None,
        rooms: Optional[list[Room]] = None,
        reservations: Optional[list[Reservation]] = None,
        on_write_failure: Optional[Callable[[PersistenceWriteFailure], None]] = None,
    ) -> None:
        self._storage = storage if storage is not None else MemoryStorage()
        self._settings = settings or get_settings()
        self._rooms: list[Room] = list(rooms or [])
        self._reservations: list[Reservation] = list(reservations or [])
        self.on_write_failure = on_write_failure
        self.last_write_failure: Optional[PersistenceWriteFailure] = None

    @classmethod
    def open(
        cls,
        storage: KeyValueStorage,
        settings: Optional[Settings] = None,
        on_write_failure: Optional[Callable[[PersistenceWriteFailure], None]] = None,
    ) -> "HotelInventory":
        """
        Load both collections from storage, seeding the demo set on first start.

        Args:
            storage: Backend holding the rooms and reservations slots.
            settings: Application settings; defaults to the environment.
            on_write_failure: Called when a save fails.

        Returns:
            HotelInventory: The ready inventory.
        """
        settings = settings or get_settings()
        stored_rooms = load(storage, ROOMS_KEY, [])
        stored_reservations = load(storage, RESERVATIONS_KEY, [])
        rooms = _parse_records(_ROOM, stored_rooms, ROOMS_KEY)
        reservations = _parse_records(_RESERVATION, stored_reservations, RESERVATIONS_KEY)
        inventory = cls(
            storage=storage,
            settings=settings,
            rooms=rooms,
            reservations=reservations,
            on_write_failure=on_write_failure,
        )
        # seed only a truly empty store, never over records that failed to parse
        if not stored_rooms and not stored_reservations and settings.seed_demo:
            inventory._rooms = demo_rooms()
            inventory._reservations = demo_reservations()
            inventory._persist(ROOMS_KEY, RESERVATIONS_KEY)
            logger.info("Seeded demo data")
        logger.info(
            "Inventory loaded",
            extra={"rooms": len(inventory._rooms), "reservations": len(inventory._reservations)},
        )
        return inventory

    # read accessors

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def rooms(self) -> list[Room]:
        return list(self._rooms)

    @property
    def reservations(self) -> list[Reservation]:
        return list(self._reservations)

    def get_room(self, room_id: str) -> Room:
        for room in self._rooms:
            if room.id == room_id:
                return room
        raise RoomNotFound(room_id)

    def get_reservation(self, reservation_id: str) -> Reservation:
        for reservation in self._reservations:
            if reservation.id == reservation_id:
                return reservation
        raise ReservationNotFound(reservation_id)

    def room_by_number(self, number: int) -> Optional[Room]:
        return next((room for room in self._rooms if room.number == number), None)

    def dependent_reservations(self, room: Room) -> list[Reservation]:
        return [r for r in self._reservations if r.room_number == room.number]

    def is_orphaned(self, reservation: Reservation) -> bool:
        return self.room_by_number(reservation.room_number) is None

    def selectable_rooms(self, editing: Optional[Reservation] = None) -> list[Room]:
        """Rooms offered by the reservation form: available ones plus the room being edited."""
        return [
            room
            for room in self._rooms
            if room.is_available or (editing is not None and room.number == editing.room_number)
        ]

    def stats(self) -> DashboardStats:
        return DashboardStats(
            total_rooms=len(self._rooms),
            available=sum(1 for room in self._rooms if room.status == AVAILABLE),
            occupied=sum(1 for room in self._rooms if room.status == OCCUPIED),
            reservation_count=len(self._reservations),
            revenue=sum(r.total for r in self._reservations),
        )

    def recent_reservations(self, limit: Optional[int] = None) -> list[Reservation]:
        limit = limit if limit is not None else self._settings.recent_limit
        return sorted(self._reservations, key=lambda r: r.id, reverse=True)[:limit]

    # pricing

    def room_price(self, number: int) -> float:
        room = self.room_by_number(number)
        return room.price if room else 0

    def calc_total(self, room_number: int, check_in: date, check_out: date) -> float:
        return nights(check_in, check_out) * self.room_price(room_number)

    def quote(
        self,
        room_number: Optional[int],
        check_in: Optional[date],
        check_out: Optional[date],
    ) -> Optional[PriceQuote]:
        """Price preview for a stay; None until the inputs describe a valid stay."""
        if not room_number or check_in is None or check_out is None or check_out <= check_in:
            return None
        rate = self.room_price(room_number)
        stay = nights(check_in, check_out)
        return PriceQuote(nights=stay, nightly_rate=rate, total=stay * rate)

    def find_conflict(
        self,
        room_number: int,
        check_in: date,
        check_out: date,
        exclude_id: Optional[str] = None,
    ) -> Optional[Reservation]:
        for reservation in self._reservations:
            if reservation.id == exclude_id or reservation.room_number != room_number:
                continue
            if are_overlapping(check_in, check_out, reservation.check_in, reservation.check_out):
                return reservation
        return None

    # room mutations

    def create_room(
        self,
        number: Any,
        room_type: Any,
        price: Any,
        status: RoomStatus = AVAILABLE,
    ) -> Room:
        form = self._room_form(number, room_type, price, status)
        if self.room_by_number(form.number) is not None:
            raise DuplicateRoomNumber(form.number)

        room = Room(number=form.number, type=form.type, price=form.price, status=form.status)
        self._rooms.append(room)
        self._persist(ROOMS_KEY)
        logger.info("Room created", extra={"room_id": room.id, "number": room.number})
        return room

    def update_room(
        self,
        room_id: str,
        number: Any,
        room_type: Any,
        price: Any,
        status: Optional[RoomStatus] = None,
    ) -> Room:
        current = self.get_room(room_id)
        form = self._room_form(number, room_type, price, status or current.status)
        other = self.room_by_number(form.number)
        if other is not None and other.id != room_id:
            raise DuplicateRoomNumber(form.number)

        updated = Room(
            id=current.id, number=form.number, type=form.type, price=form.price, status=form.status
        )
        self._rooms[self._rooms.index(current)] = updated
        self._persist(ROOMS_KEY)
        logger.info("Room updated", extra={"room_id": room_id, "number": updated.number})
        return updated

    def delete_room(self, room_id: str) -> Room:
        room = self.get_room(room_id)
        dependents = self.dependent_reservations(room)
        if dependents:
            logger.warning(
                "Deleting room with reservations; they become orphaned",
                extra={"room_id": room_id, "number": room.number, "reservations": len(dependents)},
            )
        self._rooms.remove(room)
        self._persist(ROOMS_KEY)
        logger.info("Room deleted", extra={"room_id": room_id, "number": room.number})
        return room

    # reservation mutations

    def create_reservation(
        self,
        client_name: Any,
        room_number: Any,
        check_in: Any,
        check_out: Any,
    ) -> Reservation:
        form = self._reservation_form(client_name, room_number, check_in, check_out)
        conflict = self.find_conflict(form.room_number, form.check_in, form.check_out)
        if conflict is not None:
            raise BookingConflict(conflict)

        reservation = Reservation(
            client_name=form.client_name,
            room_number=form.room_number,
            check_in=form.check_in,
            check_out=form.check_out,
            total=self.calc_total(form.room_number, form.check_in, form.check_out),
        )
        self._reservations.append(reservation)
        self._set_room_status(form.room_number, OCCUPIED)
        self._persist(ROOMS_KEY, RESERVATIONS_KEY)
        logger.info(
            "Reservation created",
            extra={"reservation_id": reservation.id, "room_number": reservation.room_number},
        )
        return reservation

    def update_reservation(
        self,
        reservation_id: str,
        client_name: Any,
        room_number: Any,
        check_in: Any,
        check_out: Any,
    ) -> Reservation:
        current = self.get_reservation(reservation_id)
        form = self._reservation_form(
            client_name, room_number, check_in, check_out, editing=current
        )
        conflict = self.find_conflict(
            form.room_number, form.check_in, form.check_out, exclude_id=reservation_id
        )
        if conflict is not None:
            raise BookingConflict(conflict)

        updated = Reservation(
            id=current.id,
            client_name=form.client_name,
            room_number=form.room_number,
            check_in=form.check_in,
            check_out=form.check_out,
            total=self.calc_total(form.room_number, form.check_in, form.check_out),
        )
        if current.room_number != updated.room_number:
            self._set_room_status(current.room_number, AVAILABLE)
        self._set_room_status(updated.room_number, OCCUPIED)
        self._reservations[self._reservations.index(current)] = updated
        self._persist(ROOMS_KEY, RESERVATIONS_KEY)
        logger.info(
            "Reservation updated",
            extra={"reservation_id": reservation_id, "room_number": updated.room_number},
        )
        return updated

    def delete_reservation(self, reservation_id: str) -> Reservation:
        reservation = self.get_reservation(reservation_id)
        today = date.today()
        still_covered = [
            other
            for other in self._reservations
            if other.id != reservation_id
            and other.room_number == reservation.room_number
            and other.covers(today)
        ]
        if still_covered:
            logger.warning(
                "Room marked available while another reservation covers today",
                extra={"room_number": reservation.room_number, "reservation_id": still_covered[0].id},
            )
        self._reservations.remove(reservation)
        self._set_room_status(reservation.room_number, AVAILABLE)
        self._persist(ROOMS_KEY, RESERVATIONS_KEY)
        logger.info(
            "Reservation deleted",
            extra={"reservation_id": reservation_id, "room_number": reservation.room_number},
        )
        return reservation

    # private interface

    def _room_form(self, number: Any, room_type: Any, price: Any, status: Any) -> RoomForm:
        return parse_form(
            RoomForm,
            {"number": number, "type": room_type, "price": price, "status": status},
            context={"room_types": self._settings.room_types},
        )

    def _reservation_form(
        self,
        client_name: Any,
        room_number: Any,
        check_in: Any,
        check_out: Any,
        editing: Optional[Reservation] = None,
    ) -> ReservationForm:
        return parse_form(
            ReservationForm,
            {
                "client_name": client_name,
                "room_number": room_number,
                "check_in": check_in,
                "check_out": check_out,
            },
            context={
                "room_numbers": {room.number for room in self._rooms},
                "selectable": {room.number for room in self.selectable_rooms(editing)},
            },
        )

    def _set_room_status(self, number: int, status: RoomStatus) -> None:
        room = self.room_by_number(number)
        if room is not None:
            room.status = status

    def _serialize(self, key: str) -> list[dict[str, Any]]:
        if key == ROOMS_KEY:
            return [room.to_dict() for room in self._rooms]
        return [reservation.to_dict() for reservation in self._reservations]

    def _persist(self, *keys: str) -> None:
        for key in keys:
            try:
                save(self._storage, key, self._serialize(key))
            except PersistenceWriteFailure as exc:
                self.last_write_failure = exc
                if self.on_write_failure is not None:
                    self.on_write_failure(exc)


def _parse_records(adapter: TypeAdapter, records: list[Any], key: str) -> list:
    parsed = []
    for index, record in enumerate(records):
        try:
            parsed.append(adapter.validate_python(record))
        except PydanticValidationError:
            logger.warning(
                "Skipping malformed record from storage", extra={"key": key, "index": index}
            )
    return parsed
