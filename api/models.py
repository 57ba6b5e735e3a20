"""Shared API request and response models for HotelOS."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from Hotels.booking import PriceQuote, Reservation
from Hotels.inventory import DashboardStats
from Hotels.structure import Room


class RoomFields(BaseModel):
    """Payload of the room form; values are validated by the inventory."""

    number: Optional[Union[int, str]] = None
    type: Optional[str] = None
    price: Optional[Union[float, str]] = None
    status: Optional[str] = None


class ReservationFields(BaseModel):
    """Payload of the reservation form; accepts camelCase or snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    client_name: Optional[str] = None
    room_number: Optional[Union[int, str]] = None
    check_in: Optional[str] = None
    check_out: Optional[str] = None


class MessageResponse(BaseModel):
    """Envelope for simple string responses."""

    status: int
    message: str


class ConfirmationResponse(BaseModel):
    """Envelope for a destructive action awaiting confirmation."""

    status: int
    pending: bool
    message: Optional[str] = None


class RoomResponse(BaseModel):
    """Envelope for responses that include a room resource."""

    status: int
    room: Room


class RoomListResponse(BaseModel):
    """Envelope for responses that include a list of rooms resource."""

    status: int
    rooms: list[Room]
    sort_field: Optional[str] = None
    ascending: Optional[bool] = None


class ReservationRow(BaseModel):
    """Reservation as displayed in tables."""

    reservation: Reservation
    active: bool
    orphaned: bool


class ReservationResponse(BaseModel):
    """Envelope for responses that include a reservation resource."""

    status: int
    reservation: Reservation


class ReservationListResponse(BaseModel):
    """Envelope for responses that include a list of reservation rows."""

    status: int
    reservations: list[ReservationRow]
    sort_field: Optional[str] = None
    ascending: Optional[bool] = None


class QuoteResponse(BaseModel):
    """Live price preview; `quote` is null until the stay is complete."""

    status: int
    quote: Optional[PriceQuote]
    currency: str


class DashboardResponse(BaseModel):
    """Dashboard aggregates and the latest reservations."""

    status: int
    stats: DashboardStats
    recent: list[Reservation]
    currency: str


class NotificationItem(BaseModel):
    level: str
    message: str


class NotificationListResponse(BaseModel):
    status: int
    notifications: list[NotificationItem]

