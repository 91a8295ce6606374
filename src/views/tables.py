# column, search and sort definitions of the three table screens
from __future__ import annotations

from enum import Enum

from api.models import OrderRecord, ProductRecord, UserRecord
from utils.pipeline import Column, SortDirection, TableSpec


def _num(value: float) -> str:
    """Render 56.0 as '56' and 22.3 as '22.3'."""
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)


def _money(value: float) -> str:
    return f"${_num(value)}"


def _clip(text: str, length: int) -> str:
    return text[:length] + "..."


# ---------------------------
# Users
# ---------------------------


class UserSortField(str, Enum):
    ID = "id"
    USERNAME = "username"
    EMAIL = "email"
    NAME = "name"


USERS_TABLE: TableSpec[UserRecord] = TableSpec(
    entity="users",
    title="Users Report",
    sort_keys={
        UserSortField.ID: lambda u: u.id,
        UserSortField.USERNAME: lambda u: u.username,
        UserSortField.EMAIL: lambda u: u.email,
        UserSortField.NAME: lambda u: u.full_name,
    },
    searchable=(
        lambda u: u.username,
        lambda u: u.email,
        lambda u: u.full_name,
    ),
    columns=(
        Column("ID", lambda u: u.id, UserSortField.ID),
        Column("Username", lambda u: u.username, UserSortField.USERNAME),
        Column("Name", lambda u: u.full_name, UserSortField.NAME),
        Column("Email", lambda u: u.email, UserSortField.EMAIL),
        Column("Phone", lambda u: u.phone),
        Column("City", lambda u: u.address.city),
    ),
    csv_columns=(
        Column("ID", lambda u: u.id),
        Column("Username", lambda u: u.username),
        Column("Email", lambda u: u.email),
        Column("Name", lambda u: u.full_name),
        Column("Phone", lambda u: u.phone),
        Column("City", lambda u: u.address.city),
        Column("Street", lambda u: f"{u.address.number} {u.address.street}"),
        Column("Zipcode", lambda u: u.address.zipcode),
    ),
    report_columns=(
        Column("ID", lambda u: u.id),
        Column("Username", lambda u: u.username),
        Column("Email", lambda u: u.email),
        Column("Name", lambda u: u.full_name),
        Column("Phone", lambda u: u.phone),
        Column("City", lambda u: u.address.city),
    ),
    default_sort=UserSortField.ID,
)


# ---------------------------
# Products
# ---------------------------


class ProductSortField(str, Enum):
    ID = "id"
    TITLE = "title"
    PRICE = "price"
    CATEGORY = "category"
    RATING = "rating"


PRODUCTS_TABLE: TableSpec[ProductRecord] = TableSpec(
    entity="products",
    title="Products Report",
    sort_keys={
        ProductSortField.ID: lambda p: p.id,
        ProductSortField.TITLE: lambda p: p.title,
        ProductSortField.PRICE: lambda p: p.price,
        ProductSortField.CATEGORY: lambda p: p.category,
        ProductSortField.RATING: lambda p: p.rating.rate,
    },
    searchable=(
        lambda p: p.title,
        lambda p: p.category,
        lambda p: p.description,
    ),
    columns=(
        Column("ID", lambda p: p.id, ProductSortField.ID),
        Column("Title", lambda p: p.title, ProductSortField.TITLE),
        Column("Price", lambda p: _money(p.price), ProductSortField.PRICE),
        Column("Category", lambda p: p.category, ProductSortField.CATEGORY),
        Column(
            "Rating",
            lambda p: f"★ {p.rating.rate} ({p.rating.count})",
            ProductSortField.RATING,
        ),
    ),
    csv_columns=(
        Column("ID", lambda p: p.id),
        Column("Title", lambda p: p.title),
        Column("Price", lambda p: p.price),
        Column("Category", lambda p: p.category),
        Column("Rating", lambda p: p.rating.rate),
        Column("Rating Count", lambda p: p.rating.count),
        Column("Description", lambda p: _clip(p.description, 100)),
    ),
    report_columns=(
        Column("ID", lambda p: p.id),
        Column("Title", lambda p: _clip(p.title, 30)),
        Column("Price", lambda p: _money(p.price)),
        Column("Category", lambda p: p.category),
        Column("Rating", lambda p: p.rating.rate),
        Column("Reviews", lambda p: p.rating.count),
    ),
    default_sort=ProductSortField.ID,
)


# ---------------------------
# Orders
# ---------------------------


class OrderSortField(str, Enum):
    ID = "id"
    CUSTOMER = "customer"
    DATE = "date"
    STATUS = "status"
    TOTAL = "total"


def _order_date(o: OrderRecord) -> str:
    return o.date.strftime("%Y-%m-%d")


ORDERS_TABLE: TableSpec[OrderRecord] = TableSpec(
    entity="orders",
    title="Orders Report",
    sort_keys={
        OrderSortField.ID: lambda o: o.id,
        OrderSortField.CUSTOMER: lambda o: o.customer_name,
        OrderSortField.DATE: lambda o: o.date.timestamp(),
        OrderSortField.STATUS: lambda o: o.status,
        OrderSortField.TOTAL: lambda o: o.total,
    },
    searchable=(
        lambda o: str(o.id),
        lambda o: o.customer_name,
        lambda o: o.status,
    ),
    columns=(
        Column("Order ID", lambda o: f"#{o.id}", OrderSortField.ID),
        Column("Customer", lambda o: o.customer_name, OrderSortField.CUSTOMER),
        Column("Date", _order_date, OrderSortField.DATE),
        Column("Status", lambda o: o.status, OrderSortField.STATUS),
        Column("Items", lambda o: f"{o.item_count} items"),
        Column("Total", lambda o: _money(o.total), OrderSortField.TOTAL),
    ),
    csv_columns=(
        Column("Order ID", lambda o: o.id),
        Column("Customer", lambda o: o.customer_name),
        Column("Date", _order_date),
        Column("Status", lambda o: o.status),
        Column("Items", lambda o: o.item_count),
        Column("Total", lambda o: o.total),
    ),
    report_columns=(
        Column("Order ID", lambda o: o.id),
        Column("Customer", lambda o: o.customer_name),
        Column("Date", _order_date),
        Column("Status", lambda o: o.status),
        Column("Items", lambda o: o.item_count),
        Column("Total", lambda o: _money(o.total)),
    ),
    default_sort=OrderSortField.ID,
    default_direction=SortDirection.DESC,
)
