import unittest

from utils.pipeline import SortDirection, TablePipeline
from views.tables import (
    ORDERS_TABLE,
    PRODUCTS_TABLE,
    USERS_TABLE,
    OrderSortField,
    ProductSortField,
    UserSortField,
)

from factories import order, product, user


class UsersTableTestCase(unittest.TestCase):
    def test_default_sort_is_id_ascending(self):
        table = TablePipeline(USERS_TABLE)
        table.load([user(2, "b"), user(1, "a")])
        self.assertEqual([u.id for u in table.rows], [1, 2])
        self.assertIs(table.direction, SortDirection.ASC)

    def test_search_covers_username_email_and_full_name(self):
        users = [
            user(1, "johnd", "john", "doe"),
            user(2, "mor_2314", "david", "morrison", email="morrison@gmail.com"),
            user(3, "kevinryan", "kevin", "ryan", city="Cullman"),
        ]
        table = TablePipeline(USERS_TABLE)
        table.load(users)
        for query, expected in (("JOHND", [1]), ("gmail", [2]), ("kevin ryan", [3]), ("cullman", [])):
            table.search(query)
            self.assertEqual([u.id for u in table.rows], expected, query)

    def test_sort_by_name_is_case_insensitive(self):
        table = TablePipeline(USERS_TABLE)
        table.load([user(1, first="bob"), user(2, first="Alice"), user(3, first="carl")])
        table.sort_by(UserSortField.NAME)
        self.assertEqual([u.id for u in table.rows], [2, 1, 3])

    def test_csv_street_joins_number_and_name(self):
        table = TablePipeline(USERS_TABLE)
        table.load([user(1)])
        (row,) = table.csv_rows()
        self.assertEqual(row["Street"], "7682 new road")
        self.assertEqual(row["Name"], "john doe")
        self.assertEqual(table.csv_headers[-1], "Zipcode")


class ProductsTableTestCase(unittest.TestCase):
    def test_search_includes_description_and_category(self):
        products = [product(1, "Backpack", category="men's clothing"), product(2, "Ring", category="jewelery")]
        table = TablePipeline(PRODUCTS_TABLE)
        table.load(products)
        table.search("JEWEL")
        self.assertEqual([p.id for p in table.rows], [2])
        table.search("everyday")
        self.assertEqual([p.id for p in table.rows], [1, 2])

    def test_sort_by_price_and_rating(self):
        products = [product(1, price=22.3, rate=4.1), product(2, price=9.99, rate=4.7), product(3, price=109.95, rate=3.9)]
        table = TablePipeline(PRODUCTS_TABLE)
        table.load(products)
        table.sort_by(ProductSortField.PRICE)
        self.assertEqual([p.id for p in table.rows], [2, 1, 3])
        table.sort_by(ProductSortField.PRICE)
        self.assertEqual([p.id for p in table.rows], [3, 1, 2])
        table.sort_by(ProductSortField.RATING)
        self.assertIs(table.direction, SortDirection.ASC)
        self.assertEqual([p.id for p in table.rows], [3, 1, 2])

    def test_display_and_export_projections(self):
        table = TablePipeline(PRODUCTS_TABLE)
        table.load([product(1, title="A" * 40, price=56.0)])
        (display,) = table.table_rows()
        self.assertEqual(display[2], "$56")
        (csv_row,) = table.csv_rows()
        self.assertEqual(csv_row["Description"], "Your perfect pack for everyday use...")
        self.assertEqual(csv_row["Price"], 56.0)
        (report_row,) = table.report_rows()
        self.assertEqual(report_row[1], "A" * 30 + "...")
        self.assertEqual(table.report_headers, ["ID", "Title", "Price", "Category", "Rating", "Reviews"])


class OrdersTableTestCase(unittest.TestCase):
    def test_default_sort_is_id_descending(self):
        table = TablePipeline(ORDERS_TABLE)
        table.load([order(1), order(3), order(2)])
        self.assertEqual([o.id for o in table.rows], [3, 2, 1])

    def test_search_matches_id_customer_and_status(self):
        orders = [order(12, "john doe", "shipped"), order(7, "kate hale", "pending")]
        table = TablePipeline(ORDERS_TABLE)
        table.load(orders)
        table.search("12")
        self.assertEqual([o.id for o in table.rows], [12])
        table.search("HALE")
        self.assertEqual([o.id for o in table.rows], [7])
        table.search("ship")
        self.assertEqual([o.id for o in table.rows], [12])

    def test_sort_by_date(self):
        table = TablePipeline(ORDERS_TABLE)
        table.load([order(1, day=9), order(2, day=1), order(3, day=5)])
        table.sort_by(OrderSortField.DATE)
        self.assertEqual([o.id for o in table.rows], [2, 3, 1])

    def test_row_projection(self):
        table = TablePipeline(ORDERS_TABLE)
        table.load([order(5, total=21.5, items=3)])
        self.assertEqual(
            table.table_rows(),
            [["#5", "john doe", "2020-03-02", "pending", "3 items", "$21.5"]],
        )
        (row,) = table.csv_rows()
        self.assertEqual(row["Items"], 3)
        self.assertEqual(row["Total"], 21.5)


if __name__ == "__main__":
    unittest.main()
