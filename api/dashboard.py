"""View-model used by the presentation layer: tables, dashboard, forms and confirmations."""

import logging
from dataclasses import dataclass
from datetime import date
from threading import RLock
from typing import Any, Callable, Literal, Mapping, Optional

from pydantic.alias_generators import to_snake

from Hotels.booking import PriceQuote, Reservation
from Hotels.errors import PersistenceWriteFailure
from Hotels.inventory import DashboardStats, HotelInventory
from Hotels.queries import (
    RESERVATION_SORT_FIELDS,
    ROOM_SORT_FIELDS,
    Activity,
    SortState,
    filter_reservations,
    filter_rooms,
    normalize_field,
)
from Hotels.structure import AVAILABLE, Room

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    level: Literal["success", "error", "info"]
    message: str


@dataclass(frozen=True)
class Confirmation:
    """A destructive action waiting for the operator to confirm it."""

    message: str
    action: Callable[[], Any]


class HotelDashboard:
    """Coordinates table views, edits and confirmations over one inventory."""

    def __init__(self, inventory: HotelInventory) -> None:
        self.inventory = inventory
        self.inventory.on_write_failure = self._on_write_failure
        self.room_sort = SortState("number")
        self.reservation_sort = SortState("check_in", ascending=False)
        self.pending: Optional[Confirmation] = None
        self.notifications: list[Notification] = []
        self._lock = RLock()

    @property
    def lock(self) -> RLock:
        return self._lock

    @property
    def currency(self) -> str:
        return self.inventory.settings.currency

    # tables

    def room_rows(self, query: str = "", status: str = "") -> list[Room]:
        return self.room_sort.apply(filter_rooms(self.inventory.rooms, query, status))

    def reservation_rows(
        self, query: str = "", activity: Activity = "", today: Optional[date] = None
    ) -> list[Reservation]:
        rows = filter_reservations(self.inventory.reservations, query, activity, today)
        return self.reservation_sort.apply(rows)

    def sort_rooms(self, field: str) -> SortState:
        return self.room_sort.select(normalize_field(field, ROOM_SORT_FIELDS))

    def sort_reservations(self, field: str) -> SortState:
        return self.reservation_sort.select(normalize_field(field, RESERVATION_SORT_FIELDS))

    # dashboard

    def stats(self) -> DashboardStats:
        return self.inventory.stats()

    def recent_reservations(self) -> list[Reservation]:
        return self.inventory.recent_reservations()

    def selectable_rooms(self, editing_id: Optional[str] = None) -> list[Room]:
        editing = self.inventory.get_reservation(editing_id) if editing_id else None
        return self.inventory.selectable_rooms(editing)

    def price_preview(
        self,
        room_number: Optional[int],
        check_in: Optional[date],
        check_out: Optional[date],
    ) -> Optional[PriceQuote]:
        return self.inventory.quote(room_number, check_in, check_out)

    # forms

    def save_room(self, form: Mapping[str, Any], room_id: Optional[str] = None) -> Room:
        fields = _snake_keys(form)
        values = (fields.get("number"), fields.get("type"), fields.get("price"))
        # a blank status keeps the current one on edit
        status = fields.get("status") or None
        if room_id:
            room = self.inventory.update_room(room_id, *values, status)
            self._notify("success", "Room updated")
        else:
            room = self.inventory.create_room(*values, status or AVAILABLE)
            self._notify("success", "Room added")
        return room

    def save_reservation(
        self, form: Mapping[str, Any], reservation_id: Optional[str] = None
    ) -> Reservation:
        fields = _snake_keys(form)
        values = (
            fields.get("client_name"),
            fields.get("room_number"),
            fields.get("check_in"),
            fields.get("check_out"),
        )
        if reservation_id:
            reservation = self.inventory.update_reservation(reservation_id, *values)
            self._notify("success", "Reservation updated")
        else:
            reservation = self.inventory.create_reservation(*values)
            self._notify("success", "Reservation confirmed")
        return reservation

    # confirmations

    def request_delete_room(self, room_id: str) -> Confirmation:
        room = self.inventory.get_room(room_id)
        if self.inventory.dependent_reservations(room):
            message = f"Delete room #{room.number}? It still has reservations."
        else:
            message = f"Delete room #{room.number} ({room.type})?"

        def action() -> Room:
            deleted = self.inventory.delete_room(room_id)
            self._notify("success", "Room deleted")
            return deleted

        return self._ask(message, action)

    def request_delete_reservation(self, reservation_id: str) -> Confirmation:
        reservation = self.inventory.get_reservation(reservation_id)
        message = (
            f"Delete the reservation of {reservation.client_name} "
            f"(room #{reservation.room_number})?"
        )

        def action() -> Reservation:
            deleted = self.inventory.delete_reservation(reservation_id)
            self._notify("success", "Reservation deleted")
            return deleted

        return self._ask(message, action)

    def confirm(self) -> Any:
        """Run the pending action, if any, and clear it."""
        pending, self.pending = self.pending, None
        if pending is None:
            return None
        return pending.action()

    def cancel(self) -> None:
        self.pending = None

    def drain_notifications(self) -> list[Notification]:
        drained, self.notifications = self.notifications, []
        return drained

    # private interface

    def _ask(self, message: str, action: Callable[[], Any]) -> Confirmation:
        if self.pending is not None:
            logger.info("Replacing pending confirmation", extra={"previous": self.pending.message})
        self.pending = Confirmation(message=message, action=action)
        return self.pending

    def _notify(self, level: Literal["success", "error", "info"], message: str) -> None:
        self.notifications.append(Notification(level=level, message=message))

    def _on_write_failure(self, exc: PersistenceWriteFailure) -> None:
        logger.warning("Changes kept in memory only", extra={"key": exc.key})
        self._notify("error", f"Changes could not be saved: {exc.reason}")


def _snake_keys(form: Mapping[str, Any]) -> dict[str, Any]:
    return {to_snake(str(key)): value for key, value in form.items()}
