# dataclass snapshots of FakeStore API records

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Tuple

ORDER_STATUSES: Tuple[str, ...] = (
    "pending",
    "processing",
    "shipped",
    "delivered",
    "cancelled",
)


@dataclass(frozen=True)
class PersonName:
    firstname: str
    lastname: str


@dataclass(frozen=True)
class Address:
    city: str
    street: str
    number: int
    zipcode: str
    lat: str = ""
    long: str = ""


@dataclass(frozen=True)
class UserRecord:
    id: int
    username: str
    email: str
    phone: str
    name: PersonName
    address: Address

    @property
    def full_name(self) -> str:
        return f"{self.name.firstname} {self.name.lastname}"


@dataclass(frozen=True)
class Rating:
    rate: float
    count: int


@dataclass(frozen=True)
class ProductRecord:
    id: int
    title: str
    price: float
    description: str
    category: str
    image: str
    rating: Rating


@dataclass(frozen=True)
class CartLine:
    product_id: int
    quantity: int


@dataclass(frozen=True)
class CartRecord:
    id: int
    user_id: int
    date: datetime
    products: List[CartLine] = field(default_factory=list)


@dataclass(frozen=True)
class OrderRecord:
    """A cart joined with its customer and priced against the product list."""

    id: int
    user_id: int
    date: datetime
    items: List[CartLine]
    status: str
    total: float
    customer_name: str

    @property
    def item_count(self) -> int:
        return len(self.items)
