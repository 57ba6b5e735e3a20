'''
FastAPI application for HotelOS, a single-operator hotel management tool.

The app exposes the inventory to the presentation layer:
- /rooms: list, search, sort, create, update and delete rooms.
- /reservations: list, search, sort, quote, create, update and delete reservations.
- /dashboard: room occupancy, revenue and latest reservations.
- /confirmation: confirm or cancel the pending destructive action.

Deletes only take effect once POST /confirmation is called.
'''

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from config import Settings, get_settings
from Database.db import KeyValueStorage, LocalStorage
from Hotels.inventory import HotelInventory

# routers
from api.dashboard import HotelDashboard
from api.dashboard_routes import confirmation_router, dashboard_router
from api.reservation_routes import reservation_router
from api.room_routes import room_router

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStorage] = None,
) -> FastAPI:
    """Build the app; the inventory is loaded once at startup."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # --- Startup ---
        backend = storage if storage is not None else LocalStorage(settings.storage_dir)
        inventory = HotelInventory.open(backend, settings)
        app.state.dashboard = HotelDashboard(inventory)   # create ONCE
        logger.info("HotelOS started", extra={"storage_dir": str(settings.storage_dir)})
        yield

    app = FastAPI(title="HotelOS API", version="1.0.0", lifespan=lifespan)

    app.include_router(room_router, prefix="/rooms", tags=["Rooms"])
    app.include_router(reservation_router, prefix="/reservations", tags=["Reservations"])
    app.include_router(dashboard_router, prefix="/dashboard", tags=["Dashboard"])
    app.include_router(confirmation_router, prefix="/confirmation", tags=["Confirmation"])

    @app.get("/")
    async def root():
        return {"message": "Welcome to the HotelOS API"}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    uvicorn.run("main:app", host="localhost", port=8000, reload=True)
