"""
Error handling and edge case tests.

This test suite covers how failures reach API clients:
- Coach identification (missing, malformed and unknown X-Coach-Id)
- Request validation errors
- Service errors mapped to their status codes
- Unexpected errors hidden behind a generic 500 body
"""

import pytest
import uuid
from fastapi.testclient import TestClient

from main import app
from services.food_item_service import FoodItemService
from domain.schemas.food_schemas import CustomFoodItemCreate
from app.exceptions import ConflictError
from test_fixtures import make_athlete
from test_helpers import error_code


# =============================================================================
# COACH IDENTIFICATION
# =============================================================================


@pytest.mark.parametrize(
    "coach_header, message",
    [
        ({}, "Missing X-Coach-Id header"),
        ({"X-Coach-Id": "coach-42"}, "Invalid X-Coach-Id header"),
        ({"X-Coach-Id": str(uuid.uuid4())}, "Unknown coach"),
    ],
)
def test_unidentified_coach_gets_401(client, coach_header, message):
    r = client.get("/athletes", headers=coach_header)

    assert r.status_code == 401
    body = r.json()
    assert body["success"] is False
    assert body["error"] == {"code": "UNAUTHORIZED", "message": message}
    assert "timestamp" in body


def test_athlete_cannot_act_as_coach(client, db_session, coach):
    athlete = make_athlete(db_session, coach)
    r = client.get("/athletes", headers={"X-Coach-Id": str(athlete.id)})
    assert r.status_code == 401


# =============================================================================
# VALIDATION AND SERVICE ERRORS
# =============================================================================


def test_validation_error_body(client, headers):
    r = client.post("/nutrition-plans", json={"total_calories": -5}, headers=headers)

    assert r.status_code == 422
    assert error_code(r) == "VALIDATION_ERROR"
    fields = {tuple(d["loc"]) for d in r.json()["error"]["details"]}
    assert ("body", "name") in fields
    assert ("body", "total_calories") in fields


def test_malformed_path_id(client, headers):
    r = client.get("/recipes/not-a-uuid", headers=headers)
    assert r.status_code == 422


def test_not_found_body(client, headers):
    missing = uuid.uuid4()
    r = client.get(f"/nutrition-plans/{missing}", headers=headers)

    assert r.status_code == 404
    assert r.json()["error"] == {
        "code": "NOT_FOUND",
        "message": f"Nutrition plan not found: {missing}",
    }


def test_unknown_route(client):
    r = client.get("/no-such-route")
    assert r.status_code == 404
    assert error_code(r) == "HTTP_404"


def test_duplicate_barcode_is_conflict(db_session, coach, client, headers):
    FoodItemService.create_custom(
        db_session, coach.id, CustomFoodItemCreate(food_name="Bar A", barcode="9400000000001")
    )
    with pytest.raises(ConflictError):
        FoodItemService.create_custom(
            db_session, coach.id, CustomFoodItemCreate(food_name="Bar B", barcode="9400000000001")
        )

    r = client.post(
        "/food-items", json={"food_name": "Bar C", "barcode": " 9400000000001 "}, headers=headers
    )
    assert r.status_code == 409
    assert error_code(r) == "CONFLICT"


def test_unexpected_error_is_hidden(client, headers, monkeypatch):
    def explode(db, coach_id, search=None):
        raise RuntimeError("connection reset by peer")

    monkeypatch.setattr("services.athlete_service.AthleteService.list_athletes", explode)
    safe_client = TestClient(app, raise_server_exceptions=False)

    r = safe_client.get("/athletes", headers=headers)

    assert r.status_code == 500
    assert r.json()["error"] == {
        "code": "INTERNAL_SERVER_ERROR",
        "message": "An unexpected error occurred",
    }


# =============================================================================
# REQUEST METADATA AND HEALTH
# =============================================================================


def test_request_id_header(client, headers):
    first = client.get("/athletes", headers=headers)
    second = client.get("/athletes", headers=headers)

    assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]
    assert float(first.headers["X-Process-Time"]) >= 0


def test_health_check(client):
    r = client.get("/health-check")

    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert body["service"] == "CoachDesk"
    assert body["database"] == "ok"


def test_init_db_script_creates_schema(db_session):
    from sqlalchemy import inspect
    from domain.models import engine
    from scripts.init_db import main

    assert main() == 0
    assert {"profiles", "food_items", "program_templates", "assigned_plans"} <= set(
        inspect(engine).get_table_names()
    )
