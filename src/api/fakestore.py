# src/api/fakestore.py
# read-only access to the FakeStore REST API, plus the derived order view
from __future__ import annotations

import asyncio
import random
from datetime import datetime
from typing import Any, Dict, List, Optional

import requests

from api import models
from utils.config import DEFAULT_API_URL
from utils.logger import get_logger

_logger = get_logger(__name__)

API_URL = DEFAULT_API_URL
HTTP_TIMEOUT: Optional[float] = None

UNKNOWN_CUSTOMER = "Unknown Customer"


class FetchError(Exception):
    """Raised when a collection cannot be fetched or decoded."""

    def __init__(self, collection: str, reason: str):
        super().__init__(f"Could not fetch {collection}: {reason}")
        self.collection = collection
        self.reason = reason


def configure(api_url: str, timeout: Optional[float] = None) -> None:
    """Point the module at another API base url (used by the app and tests)."""
    global API_URL, HTTP_TIMEOUT
    API_URL = api_url.rstrip("/")
    HTTP_TIMEOUT = timeout


def _get_json(collection: str) -> List[Dict[str, Any]]:
    url = f"{API_URL}/{collection}"
    headers = {"Accept": "application/json"}
    resp = None
    try:
        resp = requests.get(url, headers=headers, timeout=HTTP_TIMEOUT)
        resp.raise_for_status()
        data = resp.json()
    except requests.HTTPError as e:
        status = resp.status_code if resp is not None else "?"
        raise FetchError(collection, f"HTTP {status}") from e
    except ValueError as e:
        raise FetchError(collection, "response is not valid JSON") from e
    except requests.RequestException as e:
        raise FetchError(collection, str(e)) from e

    if not isinstance(data, list):
        raise FetchError(collection, "expected a JSON array")
    return data


async def _fetch(collection: str) -> List[Dict[str, Any]]:
    _logger.debug(f"GET {API_URL}/{collection}")
    data = await asyncio.to_thread(_get_json, collection)
    _logger.info(f"Fetched {len(data)} {collection}.")
    return data


# ---------------------------
# Decoding
# ---------------------------


def parse_date(raw: str) -> datetime:
    """Parse the API's ISO timestamps, e.g. '2020-03-02T00:00:00.000Z'."""
    return datetime.fromisoformat(raw.replace("Z", "+00:00"))


def parse_user(raw: Dict[str, Any]) -> models.UserRecord:
    name = raw["name"]
    address = raw.get("address") or {}
    geo = address.get("geolocation") or {}
    return models.UserRecord(
        id=int(raw["id"]),
        username=str(raw["username"]),
        email=str(raw["email"]),
        phone=str(raw.get("phone", "")),
        name=models.PersonName(
            firstname=str(name["firstname"]), lastname=str(name["lastname"])
        ),
        address=models.Address(
            city=str(address.get("city", "")),
            street=str(address.get("street", "")),
            number=int(address.get("number") or 0),
            zipcode=str(address.get("zipcode", "")),
            lat=str(geo.get("lat", "")),
            long=str(geo.get("long", "")),
        ),
    )


def parse_product(raw: Dict[str, Any]) -> models.ProductRecord:
    rating = raw.get("rating") or {}
    return models.ProductRecord(
        id=int(raw["id"]),
        title=str(raw["title"]),
        price=float(raw["price"]),
        description=str(raw.get("description", "")),
        category=str(raw["category"]),
        image=str(raw.get("image", "")),
        rating=models.Rating(
            rate=float(rating.get("rate", 0)), count=int(rating.get("count", 0))
        ),
    )


def parse_cart(raw: Dict[str, Any]) -> models.CartRecord:
    return models.CartRecord(
        id=int(raw["id"]),
        user_id=int(raw["userId"]),
        date=parse_date(str(raw["date"])),
        products=[
            models.CartLine(
                product_id=int(line["productId"]), quantity=int(line["quantity"])
            )
            for line in raw.get("products") or []
        ],
    )


def _decode(collection: str, rows: List[Dict[str, Any]], parse) -> list:
    for row in rows:
        if not isinstance(row, dict):
            raise FetchError(collection, f"malformed record ({row!r} is not an object)")
    try:
        return [parse(row) for row in rows]
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise FetchError(collection, f"malformed record ({e!r})") from e


# ---------------------------
# Collections
# ---------------------------


async def fetch_users() -> List[models.UserRecord]:
    return _decode("users", await _fetch("users"), parse_user)


async def fetch_products() -> List[models.ProductRecord]:
    return _decode("products", await _fetch("products"), parse_product)


async def fetch_carts() -> List[models.CartRecord]:
    return _decode("carts", await _fetch("carts"), parse_cart)


# ---------------------------
# Orders (derived from carts)
# ---------------------------


def derive_orders(
    carts: List[models.CartRecord],
    users: List[models.UserRecord],
    products: List[models.ProductRecord],
    rng: Optional[random.Random] = None,
) -> List[models.OrderRecord]:
    """
    Join carts with their user and price every line against the product list.

    The FakeStore API has no order status, so each order gets one drawn at
    random from ORDER_STATUSES; it changes on every reload.
    """
    rng = rng or random.Random()
    users_by_id = {u.id: u for u in users}
    price_by_id = {p.id: p.price for p in products}

    orders: List[models.OrderRecord] = []
    for cart in carts:
        user = users_by_id.get(cart.user_id)
        total = sum(
            price_by_id.get(line.product_id, 0) * line.quantity
            for line in cart.products
        )
        orders.append(
            models.OrderRecord(
                id=cart.id,
                user_id=cart.user_id,
                date=cart.date,
                items=list(cart.products),
                status=rng.choice(models.ORDER_STATUSES),
                total=round(total, 2),
                customer_name=user.full_name if user else UNKNOWN_CUSTOMER,
            )
        )
    return orders


async def fetch_orders(rng: Optional[random.Random] = None) -> List[models.OrderRecord]:
    """Fetch carts, users and products, then derive the order list."""
    carts, users, products = await asyncio.gather(
        fetch_carts(), fetch_users(), fetch_products()
    )
    return derive_orders(carts, users, products, rng)
