"""Dashboard, notification and confirmation routes."""

import logging

from fastapi import APIRouter, Depends, status

from Database.deps import get_dashboard
from Hotels.errors import HotelOSError

from .dashboard import HotelDashboard
from .models import (
    ConfirmationResponse,
    DashboardResponse,
    MessageResponse,
    NotificationItem,
    NotificationListResponse,
)
from .utils import _raise_http_error

logger = logging.getLogger(__name__)

# mount api routers
dashboard_router = APIRouter()
confirmation_router = APIRouter()


@dashboard_router.get("", response_model=DashboardResponse)
def get_dashboard_view(dashboard: HotelDashboard = Depends(get_dashboard)) -> DashboardResponse:
    """Room counts by status, reservation count, revenue and the latest bookings."""

    with dashboard.lock:
        return DashboardResponse(
            status=status.HTTP_200_OK,
            stats=dashboard.stats(),
            recent=dashboard.recent_reservations(),
            currency=dashboard.currency,
        )


@dashboard_router.get("/notifications", response_model=NotificationListResponse)
def pop_notifications(dashboard: HotelDashboard = Depends(get_dashboard)) -> NotificationListResponse:
    """Return and clear the notifications produced since the last call."""

    with dashboard.lock:
        items = [
            NotificationItem(level=notification.level, message=notification.message)
            for notification in dashboard.drain_notifications()
        ]
    return NotificationListResponse(status=status.HTTP_200_OK, notifications=items)


@confirmation_router.get("", response_model=ConfirmationResponse)
def get_pending(dashboard: HotelDashboard = Depends(get_dashboard)) -> ConfirmationResponse:
    with dashboard.lock:
        pending = dashboard.pending
        return ConfirmationResponse(
            status=status.HTTP_200_OK,
            pending=pending is not None,
            message=pending.message if pending else None,
        )


@confirmation_router.post("", response_model=MessageResponse)
def confirm(dashboard: HotelDashboard = Depends(get_dashboard)) -> MessageResponse:
    """Run the pending destructive action."""

    with dashboard.lock:
        if dashboard.pending is None:
            return MessageResponse(status=status.HTTP_200_OK, message="Nothing to confirm")
        message = dashboard.pending.message
        try:
            dashboard.confirm()
        except HotelOSError as exc:
            _raise_http_error(exc, logger)
    logger.info("Confirmed action", extra={"confirmation": message})
    return MessageResponse(status=status.HTTP_200_OK, message=f"Confirmed: {message}")


@confirmation_router.delete("", response_model=MessageResponse)
def cancel(dashboard: HotelDashboard = Depends(get_dashboard)) -> MessageResponse:
    with dashboard.lock:
        dashboard.cancel()
    return MessageResponse(status=status.HTTP_200_OK, message="Cancelled")
