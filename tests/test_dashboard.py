import random
import unittest

from utils.dashboard import (
    MONTHS,
    PLACEHOLDER_TOTAL_ORDERS,
    PLACEHOLDER_TOTAL_REVENUE,
    build_dashboard,
    category_histogram,
    category_shares,
    monthly_series,
)
from views.scr_dashboard import render_dashboard_markdown

from factories import product, user


class DashboardTestCase(unittest.TestCase):
    def test_histogram_keeps_first_seen_order(self):
        products = [product(1, category="a"), product(2, category="a"), product(3, category="b")]
        self.assertEqual(category_histogram(products), [("a", 2), ("b", 1)])

    def test_histogram_of_nothing(self):
        self.assertEqual(category_histogram([]), [])
        self.assertEqual(category_shares([]), [])

    def test_shares(self):
        self.assertEqual(
            category_shares([("a", 1), ("b", 3)]),
            [("a", 1, 25), ("b", 3, 75)],
        )

    def test_monthly_series_ranges(self):
        rng = random.Random(3)
        for _ in range(50):
            series = monthly_series(rng)
            self.assertEqual([p.month for p in series], list(MONTHS))
            for p in series:
                self.assertTrue(20 <= p.users < 70)
                self.assertTrue(50 <= p.orders < 150)
                self.assertTrue(2000 <= p.revenue < 7000)

    def test_totals_use_placeholders_for_orders_and_revenue(self):
        data = build_dashboard([user(1), user(2)], [product(1)], random.Random(0))
        self.assertEqual(data.stats.total_users, 2)
        self.assertEqual(data.stats.total_products, 1)
        self.assertEqual(data.stats.total_orders, PLACEHOLDER_TOTAL_ORDERS)
        self.assertEqual(data.stats.total_revenue, PLACEHOLDER_TOTAL_REVENUE)
        self.assertEqual(len(data.monthly), 6)

    def test_markdown_summary(self):
        products = [product(1, category="electronics"), product(2, category="jewelery")]
        md = render_dashboard_markdown(build_dashboard([user(1)], products, random.Random(0)))
        self.assertIn("$25,000", md)
        self.assertIn("| electronics | 1 | 50% |", md)
        self.assertIn("| Jan |", md)


if __name__ == "__main__":
    unittest.main()
