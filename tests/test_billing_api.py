# tests/test_billing_api.py

"""
Tests for the billing endpoints.
"""

from unittest.mock import Mock, patch

import pytest
from fastapi.testclient import TestClient


BILL_PAYLOAD = {
    "room": {"water_rate": 18, "electric_rate": 7, "rate_monthly": 4000, "rate_daily": 500},
    "previous": {"water_meter": 100, "electric_meter": 500},
    "current": {"water_meter": 110, "electric_meter": 550},
    "booking": {"booking_type": "monthly"},
    "billing_date": "2024-03-06T00:00:00",
}


def table_returning(rows):
    """Mock a PostgREST query chain that ends in execute() → rows."""
    query = Mock()
    query.select.return_value = query
    query.eq.return_value = query
    query.order.return_value = query
    query.limit.return_value = query
    query.execute.return_value = Mock(data=rows)
    return query


@pytest.fixture
def rental_tables():
    return {
        "rooms": table_returning([{
            "id": "room-1", "number": "101", "status": "occupied",
            "water_rate": 18, "electric_rate": 7, "rate_monthly": 4000, "rate_daily": 500,
        }]),
        "bookings": table_returning([{
            "id": "booking-1", "room_id": "room-1", "tenant_id": "t-1",
            "booking_type": "monthly", "status": "checked_in",
        }]),
        "meter_readings": table_returning([
            {"id": "r2", "room_id": "room-1", "reading_date": "2024-03-01", "water_meter": 110, "electric_meter": 550},
            {"id": "r1", "room_id": "room-1", "reading_date": "2024-02-01", "water_meter": 100, "electric_meter": 500},
        ]),
    }


@pytest.fixture
def mock_rental_db(rental_tables):
    mock_client = Mock()
    mock_client.table.side_effect = lambda name: rental_tables[name]
    with patch("core.repository.get_supabase_client", return_value=mock_client):
        yield mock_client


# -----------------------------------------------------
# POST /billing/calculate
# -----------------------------------------------------
def test_calculate_inline_bill(client: TestClient, login_as, mock_support_user):
    login_as(mock_support_user)

    response = client.post("/billing/calculate", json=BILL_PAYLOAD)

    assert response.status_code == 200
    data = response.json()
    assert data["water_cost"] == 180
    assert data["electric_cost"] == 350
    assert data["late_fee"] == 0
    assert data["total"] == 4530


def test_calculate_with_due_day_and_charges(client: TestClient, login_as, mock_admin_user):
    login_as(mock_admin_user)

    payload = {
        **BILL_PAYLOAD,
        "rent_due_day": 5,
        "additional_charges": [{"description": "Parking", "amount": 300}],
    }
    response = client.post("/billing/calculate", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert data["late_fee"] == 100
    assert data["additional_total"] == 300
    assert data["total"] == 4930


def test_calculate_rejects_invalid_due_day(client: TestClient, login_as, mock_admin_user):
    login_as(mock_admin_user)

    response = client.post("/billing/calculate", json={**BILL_PAYLOAD, "rent_due_day": 40})

    assert response.status_code == 422


@pytest.mark.parametrize("reading", ["previous", "current"])
def test_calculate_rejects_missing_meter_value(client: TestClient, login_as, mock_admin_user, reading):
    login_as(mock_admin_user)

    payload = {**BILL_PAYLOAD, reading: {"electric_meter": 550}}
    response = client.post("/billing/calculate", json=payload)

    assert response.status_code == 422


def test_tenant_cannot_calculate_bills(client: TestClient, login_as, mock_tenant_user):
    login_as(mock_tenant_user)

    response = client.post("/billing/calculate", json=BILL_PAYLOAD)

    assert response.status_code == 403
    assert "billing:read" in response.json()["detail"]


def test_calculate_requires_token(client: TestClient):
    response = client.post("/billing/calculate", json=BILL_PAYLOAD)
    assert response.status_code in (401, 403)


# -----------------------------------------------------
# POST /billing/rooms/{room_id}
# -----------------------------------------------------
def test_room_bill_from_stored_records(client: TestClient, login_as, mock_support_user, mock_rental_db):
    login_as(mock_support_user)

    response = client.post(
        "/billing/rooms/room-1",
        json={"booking_id": "booking-1", "billing_date": "2024-03-08T00:00:00", "rent_due_day": 5},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["water_usage"] == 10
    assert data["electric_usage"] == 50
    assert data["late_fee"] == 300
    assert data["total"] == 4830


def test_room_bill_room_not_found(client: TestClient, login_as, mock_support_user, mock_rental_db, rental_tables):
    login_as(mock_support_user)
    rental_tables["rooms"].execute.return_value = Mock(data=[])

    response = client.post("/billing/rooms/missing", json={"booking_id": "booking-1"})

    assert response.status_code == 404


def test_room_bill_needs_two_readings(client: TestClient, login_as, mock_support_user, mock_rental_db, rental_tables):
    login_as(mock_support_user)
    rental_tables["meter_readings"].execute.return_value = Mock(data=[
        {"id": "r1", "room_id": "room-1", "water_meter": 100, "electric_meter": 500},
    ])

    response = client.post("/billing/rooms/room-1", json={"booking_id": "booking-1"})

    assert response.status_code == 400


def test_room_bill_booking_for_other_room(client: TestClient, login_as, mock_support_user, mock_rental_db, rental_tables):
    login_as(mock_support_user)
    rental_tables["bookings"].execute.return_value = Mock(data=[
        {"id": "booking-9", "room_id": "room-9", "booking_type": "monthly"},
    ])

    response = client.post("/billing/rooms/room-1", json={"booking_id": "booking-9"})

    assert response.status_code == 400


def test_room_bill_cancelled_booking(client: TestClient, login_as, mock_support_user, mock_rental_db, rental_tables):
    login_as(mock_support_user)
    rental_tables["bookings"].execute.return_value = Mock(data=[
        {"id": "booking-1", "room_id": "room-1", "booking_type": "monthly", "status": "cancelled"},
    ])

    response = client.post("/billing/rooms/room-1", json={"booking_id": "booking-1"})

    assert response.status_code == 400


def test_room_bill_supabase_failure(client: TestClient, login_as, mock_support_user, mock_rental_db, rental_tables):
    login_as(mock_support_user)
    rental_tables["rooms"].execute.side_effect = Exception("connection refused")

    response = client.post("/billing/rooms/room-1", json={"booking_id": "booking-1"})

    assert response.status_code == 500


def test_room_bill_reading_without_meter_value(client: TestClient, login_as, mock_support_user, mock_rental_db, rental_tables):
    login_as(mock_support_user)
    rental_tables["meter_readings"].execute.return_value = Mock(data=[
        {"id": "r2", "room_id": "room-1", "electric_meter": 550},
        {"id": "r1", "room_id": "room-1", "water_meter": 100, "electric_meter": 500},
    ])

    response = client.post("/billing/rooms/room-1", json={"booking_id": "booking-1"})

    assert response.status_code == 500
