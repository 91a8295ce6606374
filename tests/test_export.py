import csv
import io
import os
import tempfile
import unittest
from datetime import date, datetime
from pathlib import Path

from utils.export import (
    ExportError,
    csv_field,
    csv_filename,
    export_csv,
    print_report,
    report_path,
    to_csv,
    to_html_report,
)


class CsvTestCase(unittest.TestCase):
    def test_field_escaping(self):
        self.assertEqual(csv_field('a,"b"'), '"a,""b"""')
        self.assertEqual(csv_field("plain"), "plain")
        self.assertEqual(csv_field('say "hi"'), '"say ""hi"""')
        self.assertEqual(csv_field(None), "")
        self.assertEqual(csv_field(109.95), "109.95")
        self.assertEqual(csv_field(7), "7")

    def test_escaped_field_parses_back(self):
        value = 'a,"b"'
        text = to_csv(["Value", "Other"], [{"Value": value, "Other": 1}])
        rows = list(csv.reader(io.StringIO(text)))
        self.assertEqual(rows, [["Value", "Other"], [value, "1"]])

    def test_header_then_one_line_per_row(self):
        headers = ["ID", "Name", "Missing"]
        rows = [{"ID": 1, "Name": "Ann"}, {"ID": 2, "Name": "Bo, Jr."}]
        self.assertEqual(
            to_csv(headers, rows),
            'ID,Name,Missing\n1,Ann,\n2,"Bo, Jr.",',
        )

    def test_filename_uses_iso_date(self):
        self.assertEqual(csv_filename("users", date(2024, 3, 9)), "users-2024-03-09.csv")

    def test_export_writes_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            out_dir = os.path.join(tmp, "exports")
            path = export_csv(
                "orders",
                ["Order ID", "Customer"],
                [{"Order ID": 1, "Customer": "Zoë"}],
                out_dir,
                today=date(2025, 1, 2),
            )
            self.assertEqual(path, os.path.join(out_dir, "orders-2025-01-02.csv"))
            with open(path, encoding="utf-8") as f:
                self.assertEqual(f.read(), "Order ID,Customer\n1,Zoë")

    def test_export_into_a_file_path_fails_cleanly(self):
        with tempfile.NamedTemporaryFile() as blocker:
            with self.assertRaises(ExportError) as ctx:
                export_csv("users", ["ID"], [{"ID": 1}], blocker.name)
        self.assertTrue(ctx.exception.path.endswith(".csv"))

    def test_export_skips_empty_rows(self):
        with tempfile.TemporaryDirectory() as tmp:
            self.assertIsNone(export_csv("users", ["ID"], [], tmp))
            self.assertEqual(os.listdir(tmp), [])


class HtmlReportTestCase(unittest.TestCase):
    def test_document_structure(self):
        doc = to_html_report(
            "Users Report",
            ["ID", "Name"],
            [["1", "Ann"], ["2", "Bo"]],
            generated=datetime(2025, 5, 6, 7, 8),
        )
        self.assertTrue(doc.startswith("<!DOCTYPE html>"))
        self.assertIn("<h1>Users Report</h1>", doc)
        self.assertIn("<th>ID</th><th>Name</th>", doc)
        self.assertIn("<tr><td>2</td><td>Bo</td></tr>", doc)
        self.assertIn("Generated on: 2025-05-06 07:08", doc)
        self.assertIn("window.print()", doc)
        # self-contained: no external resources
        self.assertNotIn("<link", doc)
        self.assertNotIn("src=", doc)

    def test_every_header_and_cell_is_escaped(self):
        doc = to_html_report(
            "<Report>",
            ["A&B"],
            [["<script>alert('x')</script>"], ['"quoted"'], [None]],
            auto_print=False,
        )
        self.assertIn("<h1>&lt;Report&gt;</h1>", doc)
        self.assertIn("<th>A&amp;B</th>", doc)
        self.assertIn("<td>&lt;script&gt;alert(&#x27;x&#x27;)&lt;/script&gt;</td>", doc)
        self.assertIn("<td>&quot;quoted&quot;</td>", doc)
        self.assertIn("<td></td>", doc)
        self.assertNotIn("<script>", doc)

    def test_print_report_opens_browser(self):
        opened = []

        def opener(url):
            opened.append(url)
            return True

        with tempfile.TemporaryDirectory() as tmp:
            self.assertTrue(
                print_report("Orders Report", ["ID"], [["1"]], "orders", opener, tmp)
            )
            self.assertEqual(len(opened), 1)
            self.assertEqual(opened[0], Path(report_path("orders", tmp)).resolve().as_uri())
            with open(report_path("orders", tmp), encoding="utf-8") as f:
                self.assertIn("<h1>Orders Report</h1>", f.read())

    def test_print_report_reuses_one_file_per_entity(self):
        with tempfile.TemporaryDirectory() as tmp:
            opener = lambda url: True
            print_report("Orders Report", ["ID"], [["1"]], "orders", opener, tmp)
            print_report("Orders Report", ["ID"], [["2"]], "orders", opener, tmp)
            print_report("Users Report", ["ID"], [["3"]], "users", opener, tmp)
            self.assertEqual(
                sorted(os.listdir(tmp)), ["orders-report.html", "users-report.html"]
            )
            with open(report_path("orders", tmp), encoding="utf-8") as f:
                self.assertIn("<td>2</td>", f.read())

    def test_print_report_aborts_silently_without_browser(self):
        with tempfile.TemporaryDirectory() as tmp:
            self.assertFalse(
                print_report("Orders Report", ["ID"], [["1"]], "orders", lambda url: False, tmp)
            )
            self.assertEqual(os.listdir(tmp), [])

    def test_print_report_unwritable_directory(self):
        with tempfile.NamedTemporaryFile() as blocker:
            with self.assertRaises(ExportError):
                print_report("Orders Report", ["ID"], [["1"]], "orders", lambda url: True, blocker.name)


if __name__ == "__main__":
    unittest.main()
