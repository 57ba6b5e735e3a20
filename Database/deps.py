'''
FastAPI dependency providing the dashboard built at startup.
'''
from fastapi import HTTPException, Request, status

from api.dashboard import HotelDashboard


def get_dashboard(request: Request) -> HotelDashboard:
    dashboard = getattr(request.app.state, "dashboard", None)
    if dashboard is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Inventory is not initialized",
        )
    return dashboard
