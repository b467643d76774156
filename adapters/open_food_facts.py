"""Open Food Facts adapter for barcode lookups that miss the local catalogue.
"""

from typing import Optional, Dict, Any
import logging
import httpx

from app.config import settings
from app.exceptions import ExternalServiceError

logger = logging.getLogger("coachdesk.open_food_facts")

_client: Optional[httpx.Client] = None


# ------------------ Connection ------------------
def _get_client() -> httpx.Client:
    """Lazy init HTTP client from settings."""
    global _client
    if _client is None:
        connect()
    return _client


def connect(
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
    user_agent: Optional[str] = None,
    transport: Optional[httpx.BaseTransport] = None,
):
    """Create the shared client. `transport` lets tests route requests to a mock."""
    global _client
    close()
    _client = httpx.Client(
        base_url=base_url or settings.open_food_facts_url,
        timeout=timeout or settings.open_food_facts_timeout_sec,
        headers={
            "User-Agent": user_agent or settings.open_food_facts_user_agent,
            "Accept": "application/json",
        },
        transport=transport,
    )
    logger.info("Open Food Facts client ready base_url=%s", _client.base_url)


def close():
    """Close the HTTP client."""
    global _client
    if _client is not None:
        _client.close()
        logger.info("Open Food Facts client closed")
    _client = None


# ------------------ Mapping ------------------
def _number(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if number >= 0 else 0.0


def product_to_food_item(barcode: str, product: Dict[str, Any]) -> Dict[str, Any]:
    """Map an Open Food Facts product document to FoodItem column values.

    Energy is taken from `energy-kcal_100g`; when only kJ is reported it is
    converted at 4.184 kJ per kcal.
    """
    nutriments = product.get("nutriments") or {}

    calories = nutriments.get("energy-kcal_100g")
    if calories is None and nutriments.get("energy_100g") is not None:
        calories = _number(nutriments["energy_100g"]) / 4.184

    categories = product.get("categories_tags") or []
    serving_quantity = _number(product.get("serving_quantity"))

    return {
        "food_name": (product.get("product_name") or "").strip() or "Unknown product",
        "food_group": categories[0] if categories else None,
        "calories_per_100g": round(_number(calories), 2),
        "protein_per_100g": round(_number(nutriments.get("proteins_100g")), 2),
        "carbs_per_100g": round(_number(nutriments.get("carbohydrates_100g")), 2),
        "fat_per_100g": round(_number(nutriments.get("fat_100g")), 2),
        "fiber_per_100g": round(_number(nutriments.get("fiber_100g")), 2),
        "serving_size_g": serving_quantity or None,
        "serving_size_unit": product.get("serving_size"),
        "barcode": barcode,
        "brand": product.get("brands"),
        "source_id": product.get("_id") or product.get("code") or barcode,
        "nutrient_basis": "100g",
    }


# ------------------ Lookups ------------------
def fetch_product(barcode: str) -> Optional[Dict[str, Any]]:
    """Look a barcode up on Open Food Facts.

    Returns:
        FoodItem column values, or None when the product is unknown or has
        no nutrition data.

    Raises:
        ExternalServiceError: on transport errors, timeouts or 5xx answers
    """
    client = _get_client()
    try:
        response = client.get(f"/product/{barcode}.json")
    except httpx.HTTPError as exc:
        logger.warning("off_lookup_failed barcode=%s error=%s", barcode, exc)
        raise ExternalServiceError(f"Open Food Facts lookup failed: {exc}")

    if response.status_code == 404:
        logger.info("off_product_missing barcode=%s", barcode)
        return None

    try:
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPStatusError, ValueError) as exc:
        logger.warning("off_lookup_failed barcode=%s error=%s", barcode, exc)
        raise ExternalServiceError(f"Open Food Facts lookup failed: {exc}")

    product = data.get("product")
    # v2 answers status 0 with HTTP 200 for unknown codes
    if data.get("status") == 0 or not product or not product.get("nutriments"):
        logger.info("off_product_missing barcode=%s", barcode)
        return None

    return product_to_food_item(barcode, product)
