"""Room-related FastAPI routes."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from Database.deps import get_dashboard
from Hotels.errors import HotelOSError
from Hotels.structure import Room

from .dashboard import HotelDashboard
from .models import ConfirmationResponse, MessageResponse, RoomFields, RoomListResponse, RoomResponse
from .utils import _raise_http_error

logger = logging.getLogger(__name__)

# mount api router
room_router = APIRouter()


def _room_list(dashboard: HotelDashboard, rooms: list[Room]) -> RoomListResponse:
    return RoomListResponse(
        status=status.HTTP_200_OK,
        rooms=rooms,
        sort_field=dashboard.room_sort.field,
        ascending=dashboard.room_sort.ascending,
    )


@room_router.get("/health", response_model=MessageResponse)
def health_check() -> MessageResponse:
    """Quick liveness probe for the room service."""

    return MessageResponse(status=status.HTTP_200_OK, message="Room service is healthy")


@room_router.get("", response_model=RoomListResponse)
def list_rooms(
    query: str = "",
    room_status: Optional[str] = Query(default=None, alias="status"),
    dashboard: HotelDashboard = Depends(get_dashboard),
) -> RoomListResponse:
    """
    List rooms matching the search box and status filter, in the current sort order.

    Args:
        query: Case-insensitive text matched against number, type and status.
        room_status: Exact status filter; empty keeps every room.
        dashboard: View-model injected via dependency.

    Returns:
        RoomListResponse with the visible rows.
    """

    with dashboard.lock:
        rows = dashboard.room_rows(query, room_status or "")
        return _room_list(dashboard, rows)


@room_router.post("/sort/{field}", response_model=RoomListResponse)
def sort_rooms(field: str, dashboard: HotelDashboard = Depends(get_dashboard)) -> RoomListResponse:
    """Select the sort column; selecting it again flips the direction."""

    with dashboard.lock:
        try:
            dashboard.sort_rooms(field)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
        return _room_list(dashboard, dashboard.room_rows())


@room_router.get("/selectable", response_model=RoomListResponse)
def selectable_rooms(
    reservation_id: Optional[str] = None,
    dashboard: HotelDashboard = Depends(get_dashboard),
) -> RoomListResponse:
    """Rooms offered by the reservation form."""

    with dashboard.lock:
        try:
            rooms = dashboard.selectable_rooms(reservation_id)
        except HotelOSError as exc:
            _raise_http_error(exc, logger)
        return RoomListResponse(status=status.HTTP_200_OK, rooms=rooms)


@room_router.get("/{room_id}", response_model=RoomResponse)
def get_room(room_id: str, dashboard: HotelDashboard = Depends(get_dashboard)) -> RoomResponse:
    with dashboard.lock:
        try:
            room = dashboard.inventory.get_room(room_id)
        except HotelOSError as exc:
            _raise_http_error(exc, logger)
        return RoomResponse(status=status.HTTP_200_OK, room=room)


@room_router.post(
    "",
    response_model=RoomResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_room(fields: RoomFields, dashboard: HotelDashboard = Depends(get_dashboard)) -> RoomResponse:
    """
    Add a room if its number is free.

    Args:
        fields: Room form values.
        dashboard: View-model injected via dependency.

    Returns:
        RoomResponse wrapping the created room.
    """

    with dashboard.lock:
        try:
            room = dashboard.save_room(fields.model_dump())
        except HotelOSError as exc:
            _raise_http_error(exc, logger)
    return RoomResponse(status=status.HTTP_201_CREATED, room=room)


@room_router.put("/{room_id}", response_model=RoomResponse)
def update_room(
    room_id: str,
    fields: RoomFields,
    dashboard: HotelDashboard = Depends(get_dashboard),
) -> RoomResponse:
    """
    Replace the mutable fields of an existing room.

    Args:
        room_id: Identifier of the room to update.
        fields: Room form values.
        dashboard: View-model injected via dependency.

    Returns:
        RoomResponse wrapping the updated room.
    """

    with dashboard.lock:
        try:
            room = dashboard.save_room(fields.model_dump(), room_id=room_id)
        except HotelOSError as exc:
            _raise_http_error(exc, logger)
    return RoomResponse(status=status.HTTP_200_OK, room=room)


@room_router.delete(
    "/{room_id}",
    response_model=ConfirmationResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
def delete_room(room_id: str, dashboard: HotelDashboard = Depends(get_dashboard)) -> ConfirmationResponse:
    """
    Ask for confirmation before deleting a room; POST /confirmation performs it.

    Args:
        room_id: Identifier of the room to delete.
        dashboard: View-model injected via dependency.

    Returns:
        ConfirmationResponse carrying the question to show.
    """

    with dashboard.lock:
        try:
            confirmation = dashboard.request_delete_room(room_id)
        except HotelOSError as exc:
            _raise_http_error(exc, logger)
    return ConfirmationResponse(
        status=status.HTTP_202_ACCEPTED, pending=True, message=confirmation.message
    )
