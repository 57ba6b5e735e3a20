"""Reservation-related FastAPI routes."""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from Database.deps import get_dashboard
from Hotels.booking import Reservation
from Hotels.errors import HotelOSError

from .dashboard import HotelDashboard
from .models import (
    ConfirmationResponse,
    QuoteResponse,
    ReservationFields,
    ReservationListResponse,
    ReservationResponse,
    ReservationRow,
)
from .utils import _raise_http_error

logger = logging.getLogger(__name__)

# mount api router
reservation_router = APIRouter()


def _reservation_list(
    dashboard: HotelDashboard, reservations: list[Reservation], today: date
) -> ReservationListResponse:
    rows = [
        ReservationRow(
            reservation=reservation,
            active=reservation.is_active(today),
            orphaned=dashboard.inventory.is_orphaned(reservation),
        )
        for reservation in reservations
    ]
    return ReservationListResponse(
        status=status.HTTP_200_OK,
        reservations=rows,
        sort_field=dashboard.reservation_sort.field,
        ascending=dashboard.reservation_sort.ascending,
    )


@reservation_router.get("", response_model=ReservationListResponse)
def list_reservations(
    query: str = "",
    activity: str = Query(default="", pattern="^(|active|past)$"),
    dashboard: HotelDashboard = Depends(get_dashboard),
) -> ReservationListResponse:
    """
    List reservations matching the search box and activity filter.

    Args:
        query: Case-insensitive text matched against client name and room number.
        activity: "active", "past" or empty for every reservation.
        dashboard: View-model injected via dependency.

    Returns:
        ReservationListResponse with the visible rows.
    """

    today = date.today()
    with dashboard.lock:
        rows = dashboard.reservation_rows(query, activity, today)  # type: ignore[arg-type]
        return _reservation_list(dashboard, rows, today)


@reservation_router.post("/sort/{field}", response_model=ReservationListResponse)
def sort_reservations(
    field: str, dashboard: HotelDashboard = Depends(get_dashboard)
) -> ReservationListResponse:
    """Select the sort column; selecting it again flips the direction."""

    today = date.today()
    with dashboard.lock:
        try:
            dashboard.sort_reservations(field)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
        return _reservation_list(dashboard, dashboard.reservation_rows(today=today), today)


@reservation_router.get("/quote", response_model=QuoteResponse)
def quote(
    room_number: Optional[int] = None,
    check_in: Optional[date] = None,
    check_out: Optional[date] = None,
    dashboard: HotelDashboard = Depends(get_dashboard),
) -> QuoteResponse:
    """Live price preview for the reservation form."""

    with dashboard.lock:
        preview = dashboard.price_preview(room_number, check_in, check_out)
        return QuoteResponse(status=status.HTTP_200_OK, quote=preview, currency=dashboard.currency)


@reservation_router.get("/{reservation_id}", response_model=ReservationResponse)
def get_reservation(
    reservation_id: str, dashboard: HotelDashboard = Depends(get_dashboard)
) -> ReservationResponse:
    with dashboard.lock:
        try:
            reservation = dashboard.inventory.get_reservation(reservation_id)
        except HotelOSError as exc:
            _raise_http_error(exc, logger)
        return ReservationResponse(status=status.HTTP_200_OK, reservation=reservation)


@reservation_router.post(
    "",
    response_model=ReservationResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_reservation(
    fields: ReservationFields, dashboard: HotelDashboard = Depends(get_dashboard)
) -> ReservationResponse:
    """
    Book a room for a stay that does not overlap any existing reservation.

    Args:
        fields: Reservation form values.
        dashboard: View-model injected via dependency.

    Returns:
        ReservationResponse wrapping the created reservation and its computed total.
    """

    with dashboard.lock:
        try:
            reservation = dashboard.save_reservation(fields.model_dump())
        except HotelOSError as exc:
            _raise_http_error(exc, logger)
    return ReservationResponse(status=status.HTTP_201_CREATED, reservation=reservation)


@reservation_router.put("/{reservation_id}", response_model=ReservationResponse)
def update_reservation(
    reservation_id: str,
    fields: ReservationFields,
    dashboard: HotelDashboard = Depends(get_dashboard),
) -> ReservationResponse:
    """
    Replace the fields of an existing reservation; the total is recomputed at today's price.

    Args:
        reservation_id: Identifier of the reservation to update.
        fields: Reservation form values.
        dashboard: View-model injected via dependency.

    Returns:
        ReservationResponse wrapping the updated reservation.
    """

    with dashboard.lock:
        try:
            reservation = dashboard.save_reservation(fields.model_dump(), reservation_id=reservation_id)
        except HotelOSError as exc:
            _raise_http_error(exc, logger)
    return ReservationResponse(status=status.HTTP_200_OK, reservation=reservation)


@reservation_router.delete(
    "/{reservation_id}",
    response_model=ConfirmationResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
def delete_reservation(
    reservation_id: str, dashboard: HotelDashboard = Depends(get_dashboard)
) -> ConfirmationResponse:
    """Ask for confirmation before deleting a reservation; POST /confirmation performs it."""

    with dashboard.lock:
        try:
            confirmation = dashboard.request_delete_reservation(reservation_id)
        except HotelOSError as exc:
            _raise_http_error(exc, logger)
    return ConfirmationResponse(
        status=status.HTTP_202_ACCEPTED, pending=True, message=confirmation.message
    )
