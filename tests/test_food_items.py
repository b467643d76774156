"""
Tests for the food catalogue: word search, custom items, barcode lookups
(local catalogue first, then Open Food Facts) and food groups.
"""

import pytest
import uuid
import httpx

from services.food_item_service import FoodItemService
from domain.schemas.food_schemas import CustomFoodItemCreate, CustomFoodItemUpdate
from domain.enums import FoodSource
from adapters.open_food_facts import product_to_food_item
from app.exceptions import ExternalServiceError, ForbiddenError
from test_constants import OFF_PRODUCT
from test_fixtures import make_coach, make_food
from test_helpers import error_code


# =============================================================================
# SEARCH
# =============================================================================


def test_search_requires_every_word(db_session):
    make_food(db_session, "chicken breast")
    make_food(db_session, "white rice cooked")
    make_food(db_session, "chicken thigh", food_group="Poultry")

    items, count = FoodItemService.search(db_session, "breast CHICKEN")
    assert count == 1
    assert items[0].food_name == "Chicken Breast"

    items, count = FoodItemService.search(db_session, "chicken")
    assert count == 2


def test_search_filters_by_group_and_paginates(db_session):
    for name in ("white rice cooked", "rolled oats", "banana"):
        make_food(db_session, name)

    items, count = FoodItemService.search(db_session, None, food_group="Cereals", limit=1)
    assert count == 2
    assert len(items) == 1

    second_page, _ = FoodItemService.search(
        db_session, None, food_group="Cereals", limit=1, offset=1
    )
    assert second_page[0].id != items[0].id


def test_search_filters_by_source_creator_and_verification(db_session, coach):
    make_food(db_session, "banana")
    mine = make_food(
        db_session, "banana bread", source=FoodSource.CUSTOM, created_by=coach.id, is_verified=False
    )
    make_food(
        db_session,
        "banana smoothie",
        source=FoodSource.CUSTOM,
        created_by=make_coach(db_session, "marco").id,
        is_verified=False,
    )

    items, count = FoodItemService.search(db_session, "banana", created_by=coach.id)
    assert count == 1
    assert items[0].id == mine.id

    _, count = FoodItemService.search(db_session, "banana", source=FoodSource.CUSTOM)
    assert count == 2

    items, count = FoodItemService.search(db_session, "banana", is_verified=True)
    assert [i.food_name for i in items] == ["Banana"]


def test_search_treats_like_wildcards_literally(db_session):
    make_food(db_session, "banana")
    make_food(db_session, "yogurt 2% fat")
    make_food(db_session, "peanut_butter")

    items, count = FoodItemService.search(db_session, "%")
    assert count == 1
    assert items[0].food_name == "Yogurt 2% Fat"

    items, _ = FoodItemService.search(db_session, "_")
    assert [i.food_name for i in items] == ["Peanut_Butter"]


def test_list_food_groups_sorted_distinct(db_session):
    for name in ("white rice cooked", "rolled oats", "banana", "chicken breast"):
        make_food(db_session, name)

    assert FoodItemService.list_food_groups(db_session) == ["Cereals", "Fruit", "Poultry"]


# =============================================================================
# CUSTOM FOOD ITEMS
# =============================================================================


def test_create_custom_food_item(db_session, coach):
    item = FoodItemService.create_custom(
        db_session,
        coach.id,
        CustomFoodItemCreate(food_name=" Protein Pancake Mix ", calories_per_100g=360, protein_per_100g=40),
    )

    assert item.food_name == "Protein Pancake Mix"
    assert item.source == FoodSource.CUSTOM
    assert item.created_by == coach.id
    assert item.is_verified is False


def test_only_creator_can_update_custom_food(db_session, coach):
    item = FoodItemService.create_custom(
        db_session, coach.id, CustomFoodItemCreate(food_name="Bulk Shake", calories_per_100g=400)
    )
    other = make_coach(db_session, "marco")

    with pytest.raises(ForbiddenError):
        FoodItemService.update_custom(
            db_session, other.id, item.id, CustomFoodItemUpdate(calories_per_100g=1)
        )

    updated = FoodItemService.update_custom(
        db_session, coach.id, item.id, CustomFoodItemUpdate(calories_per_100g=410)
    )
    assert updated.calories_per_100g == 410


def test_catalogue_items_cannot_be_edited(db_session, coach):
    item = make_food(db_session, "banana")
    with pytest.raises(ForbiddenError):
        FoodItemService.update_custom(
            db_session, coach.id, item.id, CustomFoodItemUpdate(food_name="Plantain")
        )


# =============================================================================
# BARCODE LOOKUP
# =============================================================================


def test_barcode_found_locally_skips_open_food_facts(db_session, off_transport):
    local = make_food(db_session, "greek yogurt", barcode="9300633000001")
    calls = off_transport(lambda request: httpx.Response(500))

    item = FoodItemService.lookup_barcode(db_session, "9300633000001")

    assert item.id == local.id
    assert calls == []


def test_barcode_miss_imports_open_food_facts_product(db_session, off_transport):
    calls = off_transport(lambda request: httpx.Response(200, json=OFF_PRODUCT))

    item = FoodItemService.lookup_barcode(db_session, "3017620422003")

    assert calls[0].url.path == "/api/v2/product/3017620422003.json"
    assert item.food_name == "Nutella"
    assert item.source == FoodSource.OPEN_FOOD_FACTS
    assert item.calories_per_100g == pytest.approx(539)
    assert item.brand == "Ferrero"

    # Second lookup is served from the local catalogue
    again = FoodItemService.lookup_barcode(db_session, "3017620422003")
    assert again.id == item.id
    assert len(calls) == 1


def test_barcode_unknown_everywhere_returns_none(db_session, off_transport):
    off_transport(lambda request: httpx.Response(404, json={"status": 0}))
    assert FoodItemService.lookup_barcode(db_session, "0000000000000") is None

    off_transport(lambda request: httpx.Response(200, json={"status": 0, "status_verbose": "product not found"}))
    assert FoodItemService.lookup_barcode(db_session, "0000000000000") is None


def test_barcode_upstream_failure_raises(db_session, off_transport):
    off_transport(lambda request: httpx.Response(502))
    with pytest.raises(ExternalServiceError):
        FoodItemService.lookup_barcode(db_session, "1234567890123")

    def boom(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    off_transport(boom)
    with pytest.raises(ExternalServiceError):
        FoodItemService.lookup_barcode(db_session, "1234567890123")


def test_blank_barcode_is_not_sent_upstream(db_session, off_transport):
    calls = off_transport(lambda request: httpx.Response(200, json=OFF_PRODUCT))

    assert FoodItemService.lookup_barcode(db_session, "   ") is None
    assert calls == []


def test_product_mapping_converts_kilojoules():
    product = {"product_name": "Oat Bar", "nutriments": {"energy_100g": 1674, "proteins_100g": "8"}}
    data = product_to_food_item("5000000000001", product)

    assert data["calories_per_100g"] == pytest.approx(400.1, abs=0.1)
    assert data["protein_per_100g"] == 8
    assert data["fat_per_100g"] == 0
    assert data["source_id"] == "5000000000001"


# =============================================================================
# HTTP API
# =============================================================================


def test_api_search_and_get(client, headers, db_session):
    food = make_food(db_session, "rolled oats")

    r = client.get("/food-items", params={"q": "oats"}, headers=headers)
    assert r.status_code == 200
    assert r.json()["count"] == 1
    assert r.json()["items"][0]["id"] == str(food.id)

    r = client.get(f"/food-items/{food.id}", headers=headers)
    assert r.status_code == 200
    assert r.json()["food_group"] == "Cereals"

    r = client.get("/food-items/groups", headers=headers)
    assert r.json() == ["Cereals"]


def test_api_custom_food_forbidden_for_other_coach(client, headers, db_session):
    r = client.post(
        "/food-items", json={"food_name": "Coach Bar", "calories_per_100g": 380}, headers=headers
    )
    assert r.status_code == 201
    item_id = r.json()["id"]

    other = make_coach(db_session, "marco")
    r = client.patch(
        f"/food-items/{item_id}", json={"calories_per_100g": 1}, headers={"X-Coach-Id": str(other.id)}
    )
    assert r.status_code == 403
    assert error_code(r) == "FORBIDDEN"


def test_api_custom_food_rejects_negative_macros(client, headers):
    r = client.post(
        "/food-items", json={"food_name": "Broken", "protein_per_100g": -1}, headers=headers
    )
    assert r.status_code == 422


def test_api_barcode_not_found_and_upstream_down(client, headers, off_transport):
    off_transport(lambda request: httpx.Response(404))
    r = client.get("/food-items/barcode/0000000000000", headers=headers)
    assert r.status_code == 404

    off_transport(lambda request: httpx.Response(503))
    r = client.get("/food-items/barcode/0000000000000", headers=headers)
    assert r.status_code == 503
    assert error_code(r) == "EXTERNAL_SERVICE_ERROR"


def test_api_unknown_food_item(client, headers):
    assert client.get(f"/food-items/{uuid.uuid4()}", headers=headers).status_code == 404
