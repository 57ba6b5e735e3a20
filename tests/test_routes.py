"""Endpoint tests for the HotelOS routers using in-memory storage."""

from __future__ import annotations

from pathlib import Path
import sys
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from api.dashboard import HotelDashboard  # noqa: E402
from api.dashboard_routes import confirmation_router, dashboard_router  # noqa: E402
from api.reservation_routes import reservation_router  # noqa: E402
from api.room_routes import room_router  # noqa: E402
from config import Settings  # noqa: E402
from Database.db import MemoryStorage  # noqa: E402
from Database.deps import get_dashboard  # noqa: E402
from Hotels.inventory import HotelInventory  # noqa: E402
from main import create_app  # noqa: E402


@pytest.fixture()
def client_and_dashboard() -> tuple[TestClient, HotelDashboard]:
    """Create a TestClient over an empty inventory with a dependency override."""

    dashboard = HotelDashboard(HotelInventory(storage=MemoryStorage(), settings=Settings(seed_demo=False)))
    app = FastAPI()
    app.dependency_overrides[get_dashboard] = lambda: dashboard  # type: ignore[assignment]
    app.include_router(room_router, prefix="/rooms")
    app.include_router(reservation_router, prefix="/reservations")
    app.include_router(dashboard_router, prefix="/dashboard")
    app.include_router(confirmation_router, prefix="/confirmation")
    return TestClient(app), dashboard


def _build_room_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "number": 101,
        "type": "Double",
        "price": 550,
    }
    payload.update(overrides)
    return payload


def _build_reservation_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "clientName": "Ahmed Benali",
        "roomNumber": 101,
        "checkIn": "2025-06-01",
        "checkOut": "2025-06-05",
    }
    payload.update(overrides)
    return payload


def test_health_check(client_and_dashboard: tuple[TestClient, HotelDashboard]) -> None:
    client, _ = client_and_dashboard

    response = client.get("/rooms/health")

    assert response.status_code == 200
    assert response.json()["message"] == "Room service is healthy"


def test_create_room_returns_room_payload(client_and_dashboard: tuple[TestClient, HotelDashboard]) -> None:
    client, _ = client_and_dashboard

    response = client.post("/rooms", json=_build_room_payload())

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == 201
    assert body["room"]["number"] == 101
    assert body["room"]["status"] == "available"


def test_create_room_rejects_duplicate_number(client_and_dashboard: tuple[TestClient, HotelDashboard]) -> None:
    client, _ = client_and_dashboard
    first = client.post("/rooms", json=_build_room_payload())
    assert first.status_code == 201

    duplicate = client.post("/rooms", json=_build_room_payload(type="Suite"))

    assert duplicate.status_code == 409
    assert "already exists" in duplicate.json()["detail"]["errors"]["number"]


def test_create_room_reports_field_errors(client_and_dashboard: tuple[TestClient, HotelDashboard]) -> None:
    client, _ = client_and_dashboard

    response = client.post("/rooms", json={"number": "abc", "type": "", "price": -1})

    assert response.status_code == 422
    assert set(response.json()["detail"]["errors"]) == {"number", "type", "price"}


def test_update_room_and_missing_room(client_and_dashboard: tuple[TestClient, HotelDashboard]) -> None:
    client, _ = client_and_dashboard
    room_id = client.post("/rooms", json=_build_room_payload()).json()["room"]["id"]

    update = client.put(f"/rooms/{room_id}", json=_build_room_payload(price=600, status="occupied"))
    missing = client.put("/rooms/missing", json=_build_room_payload())

    assert update.status_code == 200
    assert update.json()["room"]["id"] == room_id
    assert update.json()["room"]["price"] == 600
    assert missing.status_code == 404


def test_update_room_without_status_keeps_occupancy(client_and_dashboard: tuple[TestClient, HotelDashboard]) -> None:
    client, _ = client_and_dashboard
    room_id = client.post("/rooms", json=_build_room_payload()).json()["room"]["id"]
    client.post("/reservations", json=_build_reservation_payload())

    response = client.put(f"/rooms/{room_id}", json=_build_room_payload(price=600))

    assert response.status_code == 200
    assert response.json()["room"]["status"] == "occupied"


def test_list_rooms_searches_and_sorts(client_and_dashboard: tuple[TestClient, HotelDashboard]) -> None:
    client, _ = client_and_dashboard
    client.post("/rooms", json=_build_room_payload(number=101, type="Simple", price=350))
    client.post("/rooms", json=_build_room_payload(number=201, type="Suite", price=1200))
    client.post("/rooms", json=_build_room_payload(number=102, type="Double", price=550))

    search = client.get("/rooms", params={"query": "SUI"})
    first_sort = client.post("/rooms/sort/price")
    second_sort = client.post("/rooms/sort/price")
    bad_sort = client.post("/rooms/sort/colour")

    assert [room["number"] for room in search.json()["rooms"]] == [201]
    assert [room["number"] for room in first_sort.json()["rooms"]] == [101, 102, 201]
    assert second_sort.json()["ascending"] is False
    assert [room["number"] for room in second_sort.json()["rooms"]] == [201, 102, 101]
    assert bad_sort.status_code == 400


def test_create_reservation_computes_total(client_and_dashboard: tuple[TestClient, HotelDashboard]) -> None:
    client, dashboard = client_and_dashboard
    client.post("/rooms", json=_build_room_payload())

    response = client.post("/reservations", json=_build_reservation_payload())

    assert response.status_code == 201
    reservation = response.json()["reservation"]
    assert reservation["total"] == 2200
    assert reservation["checkIn"] == "2025-06-01"
    assert dashboard.inventory.room_by_number(101).status == "occupied"


def test_conflicting_reservation_returns_409(client_and_dashboard: tuple[TestClient, HotelDashboard]) -> None:
    client, _ = client_and_dashboard
    room_id = client.post("/rooms", json=_build_room_payload()).json()["room"]["id"]
    first = client.post("/reservations", json=_build_reservation_payload()).json()["reservation"]
    booked = client.post(
        "/reservations",
        json=_build_reservation_payload(clientName="Sara El Fassi", checkIn="2025-06-05", checkOut="2025-06-07"),
    )
    client.put(f"/rooms/{room_id}", json=_build_room_payload(status="available"))

    adjacent = client.post(
        "/reservations",
        json=_build_reservation_payload(clientName="Sara El Fassi", checkIn="2025-06-05", checkOut="2025-06-07"),
    )
    client.put(f"/rooms/{room_id}", json=_build_room_payload(status="available"))
    overlapping = client.post(
        "/reservations",
        json=_build_reservation_payload(clientName="Sara El Fassi", checkIn="2025-06-04", checkOut="2025-06-07"),
    )

    assert booked.status_code == 422
    assert booked.json()["detail"]["errors"]["room_number"] == "Room #101 is not available"
    assert adjacent.status_code == 201
    assert overlapping.status_code == 409
    detail = overlapping.json()["detail"]
    assert detail["conflicting_reservation"]["id"] == first["id"]
    assert "room_number" in detail["errors"]


def test_invalid_reservation_reports_field_errors(client_and_dashboard: tuple[TestClient, HotelDashboard]) -> None:
    client, _ = client_and_dashboard

    response = client.post(
        "/reservations",
        json={"clientName": "A", "roomNumber": "", "checkIn": "2025-06-05", "checkOut": "2025-06-01"},
    )

    assert response.status_code == 422
    assert set(response.json()["detail"]["errors"]) == {"client_name", "room_number", "check_out"}


def test_quote_previews_price(client_and_dashboard: tuple[TestClient, HotelDashboard]) -> None:
    client, _ = client_and_dashboard
    client.post("/rooms", json=_build_room_payload())

    complete = client.get(
        "/reservations/quote",
        params={"room_number": 101, "check_in": "2025-06-01", "check_out": "2025-06-05"},
    )
    incomplete = client.get("/reservations/quote", params={"room_number": 101})

    assert complete.json()["quote"] == {"nights": 4, "nightly_rate": 550, "total": 2200}
    assert complete.json()["currency"] == "MAD"
    assert incomplete.json()["quote"] is None


def test_delete_room_requires_confirmation(client_and_dashboard: tuple[TestClient, HotelDashboard]) -> None:
    client, _ = client_and_dashboard
    room_id = client.post("/rooms", json=_build_room_payload()).json()["room"]["id"]
    client.post("/reservations", json=_build_reservation_payload())

    request = client.delete(f"/rooms/{room_id}")

    assert request.status_code == 202
    assert request.json()["pending"] is True
    assert client.get(f"/rooms/{room_id}").status_code == 200
    assert client.get("/confirmation").json()["pending"] is True

    confirmed = client.post("/confirmation")

    assert confirmed.status_code == 200
    assert client.get(f"/rooms/{room_id}").status_code == 404
    rows = client.get("/reservations").json()["reservations"]
    assert rows[0]["orphaned"] is True
    assert rows[0]["reservation"]["roomNumber"] == 101


def test_cancel_confirmation_keeps_reservation(client_and_dashboard: tuple[TestClient, HotelDashboard]) -> None:
    client, _ = client_and_dashboard
    client.post("/rooms", json=_build_room_payload())
    reservation_id = client.post("/reservations", json=_build_reservation_payload()).json()["reservation"]["id"]

    assert client.delete(f"/reservations/{reservation_id}").status_code == 202
    assert client.delete("/confirmation").status_code == 200
    assert client.post("/confirmation").json()["message"] == "Nothing to confirm"
    assert client.get(f"/reservations/{reservation_id}").status_code == 200


def test_delete_unknown_reservation_returns_404(client_and_dashboard: tuple[TestClient, HotelDashboard]) -> None:
    client, _ = client_and_dashboard

    response = client.delete("/reservations/missing")

    assert response.status_code == 404
    assert "No reservation found" in response.json()["detail"]


def test_notifications_are_drained(client_and_dashboard: tuple[TestClient, HotelDashboard]) -> None:
    client, _ = client_and_dashboard
    client.post("/rooms", json=_build_room_payload())

    first = client.get("/dashboard/notifications").json()["notifications"]
    second = client.get("/dashboard/notifications").json()["notifications"]

    assert first == [{"level": "success", "message": "Room added"}]
    assert second == []


def test_app_startup_seeds_demo_inventory() -> None:
    """The full app loads (and seeds) the inventory during startup."""
    app = create_app(settings=Settings(), storage=MemoryStorage())

    with TestClient(app) as client:
        response = client.get("/dashboard")

    assert response.status_code == 200
    body = response.json()
    assert body["stats"]["total_rooms"] == 5
    assert body["stats"]["revenue"] == 5400
    assert len(body["recent"]) == 2
    assert body["currency"] == "MAD"
