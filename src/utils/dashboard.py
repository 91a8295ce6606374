from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from api.models import ProductRecord, UserRecord

# The FakeStore API has no order or revenue totals; the dashboard cards show
# these fixed stand-ins until a real source exists.
PLACEHOLDER_TOTAL_ORDERS = 150
PLACEHOLDER_TOTAL_REVENUE = 25000

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun")


@dataclass(frozen=True)
class DashboardStats:
    total_users: int
    total_products: int
    total_orders: int = PLACEHOLDER_TOTAL_ORDERS
    total_revenue: int = PLACEHOLDER_TOTAL_REVENUE


@dataclass(frozen=True)
class MonthlyPoint:
    month: str
    users: int
    orders: int
    revenue: int


@dataclass(frozen=True)
class DashboardData:
    stats: DashboardStats
    categories: List[Tuple[str, int]]
    monthly: List[MonthlyPoint]


def category_histogram(products: Iterable[ProductRecord]) -> List[Tuple[str, int]]:
    """Count products per category, in order of first appearance."""
    counts: Dict[str, int] = {}
    for product in products:
        counts[product.category] = counts.get(product.category, 0) + 1
    return list(counts.items())


def category_shares(histogram: List[Tuple[str, int]]) -> List[Tuple[str, int, int]]:
    """(name, count, whole percent) for each category of a histogram."""
    total = sum(count for _, count in histogram)
    if not total:
        return []
    return [(name, count, round(count * 100 / total)) for name, count in histogram]


def monthly_series(rng: Optional[random.Random] = None) -> List[MonthlyPoint]:
    """
    Six synthetic months of activity. Not derived from any data; drawn anew on
    every call.
    """
    rng = rng or random.Random()
    return [
        MonthlyPoint(
            month=month,
            users=rng.randrange(20, 70),
            orders=rng.randrange(50, 150),
            revenue=rng.randrange(2000, 7000),
        )
        for month in MONTHS
    ]


def build_dashboard(
    users: List[UserRecord],
    products: List[ProductRecord],
    rng: Optional[random.Random] = None,
) -> DashboardData:
    return DashboardData(
        stats=DashboardStats(total_users=len(users), total_products=len(products)),
        categories=category_histogram(products),
        monthly=monthly_series(rng),
    )
