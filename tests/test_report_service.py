import unittest
from datetime import date

from shopkeeper.services.dashboard_service import dashboard_summary
from shopkeeper.services.listing_service import (
    filter_sales,
    paginate,
    product_name,
    search_products,
    sort_sales,
)
from shopkeeper.services.report_service import (
    daily_sales_report,
    payments_report,
    products_report,
    purchases_summary,
    sale_invoice,
    sales_report,
)
from shopkeeper.store import load_store

TODAY = date(2025, 6, 9)


class FixtureCase(unittest.TestCase):
    def setUp(self):
        self.store = load_store()
        self.products = self.store.get_products()
        self.sales = self.store.get_sales()
        self.purchases = self.store.get_purchases()


class DashboardTest(FixtureCase):
    def test_summary(self):
        summary = dashboard_summary(self.products, self.sales, self.purchases, TODAY)

        self.assertEqual(summary["total_products"], 10)
        self.assertEqual(summary["low_stock_count"], 4)
        self.assertEqual(summary["out_of_stock_count"], 1)
        self.assertAlmostEqual(summary["total_revenue"], 943.88)
        self.assertEqual(summary["today_sales_count"], 1)
        self.assertAlmostEqual(summary["today_revenue"], 203.99)
        self.assertAlmostEqual(summary["yesterday_revenue"], 69.9)
        self.assertAlmostEqual(summary["revenue_trend"], 191.83, places=2)
        self.assertEqual(summary["top_products"][0]["product_id"], "3")
        self.assertEqual(summary["top_products"][0]["name"], "Office Chair")
        self.assertEqual(summary["recent_sales"][0]["id"], "10")
        self.assertEqual(summary["recent_activity"][0]["type"], "sale")

    def test_quiet_day(self):
        summary = dashboard_summary(self.products, self.sales, self.purchases, "2025-07-01")
        self.assertEqual(summary["today_revenue"], 0.0)
        self.assertEqual(summary["revenue_trend"], 0.0)

    def test_empty_store(self):
        summary = dashboard_summary([], [], [], TODAY)
        self.assertEqual(summary["total_revenue"], 0.0)
        self.assertEqual(summary["top_products"], [])
        self.assertEqual(summary["recent_activity"], [])


class SalesReportTest(FixtureCase):
    def test_daily_sales(self):
        report = daily_sales_report(self.sales, "2025-06-01")
        self.assertEqual(report["count"], 2)
        self.assertAlmostEqual(report["total"], 263.48)
        self.assertAlmostEqual(report["average"], 131.74)

    def test_sales_report(self):
        report = sales_report(self.sales)
        self.assertAlmostEqual(report["total_revenue"], 943.88)
        self.assertEqual(report["count"], 10)
        self.assertEqual(report["best_day"]["date"], date(2025, 6, 1))
        self.assertEqual(report["top_customers"][0]["customer"], "Ahmed Khan")
        self.assertAlmostEqual(report["top_customers"][0]["total"], 308.89)
        self.assertEqual(report["sales_by_date"][0]["date"], TODAY)
        self.assertEqual(report["page"]["total_pages"], 1)

    def test_sort_orders(self):
        cases = [
            ("amount", "asc", "5"),
            ("amount", "desc", "10"),
            ("saleRef", "desc", "10"),
            ("customer", "asc", "4"),
        ]
        for sort_by, order, first in cases:
            with self.subTest(sort_by=sort_by, order=order):
                self.assertEqual(sort_sales(self.sales, sort_by, order)[0].id, first)
        with self.assertRaises(ValueError):
            sort_sales(self.sales, "bogus")

    def test_pagination(self):
        page = paginate(list(range(10)), page=4, per_page=3)
        self.assertEqual(page["results"], [9])
        self.assertEqual((page["start"], page["end"], page["total_pages"]), (10, 10, 4))
        self.assertEqual(paginate([], page=2, per_page=3)["page"], 1)

    def test_filters(self):
        self.assertEqual([s.id for s in filter_sales(self.sales, "maria")], ["2", "7"])
        self.assertEqual([s.id for s in filter_sales(self.sales, day="2025-06-03")], ["4", "5"])
        self.assertEqual([s.id for s in filter_sales(self.sales, payment_method="Due")], ["9"])
        self.assertEqual(len(filter_sales(self.sales, payment_method="all")), 10)
        self.assertEqual([p.id for p in search_products(self.products, "furn")], ["3", "4"])

    def test_invoice_uses_placeholder_for_missing_product(self):
        sale = self.sales[0]
        invoice = sale_invoice(sale, [])
        self.assertEqual(invoice["sale_ref"], "SALE/POS0001")
        self.assertEqual({line["name"] for line in invoice["lines"]}, {"Unknown Product"})
        self.assertEqual(product_name(self.products, "1"), "Wireless Mouse")


class PaymentsReportTest(FixtureCase):
    def test_all_time(self):
        report = payments_report(self.sales, TODAY, date_range="all")
        methods = {entry["payment_method"]: entry for entry in report["methods"]}

        self.assertEqual(report["transactions"], 10)
        self.assertEqual(methods["Cash"]["count"], 3)
        self.assertAlmostEqual(methods["Cash"]["total"], 164.45)
        self.assertAlmostEqual(methods["Cash"]["min"], 44.97)
        self.assertAlmostEqual(methods["Cash"]["max"], 74.48)
        self.assertEqual(methods["Cash"]["fee"], 0.0)
        self.assertAlmostEqual(methods["Bank Transfer"]["fee"], 1.37)
        self.assertAlmostEqual(methods["Due"]["fee"], 2.03, places=2)
        self.assertEqual(report["most_used"], {"payment_method": "Cash", "count": 3})
        self.assertTrue(report["fees_are_estimates"])

    def test_ranges(self):
        cases = [("month", 10), ("week", 8), ("year", 10)]
        for date_range, expected in cases:
            with self.subTest(date_range=date_range):
                report = payments_report(self.sales, TODAY, date_range=date_range)
                self.assertEqual(report["transactions"], expected)
        self.assertEqual(payments_report(self.sales, "2025-08-01")["transactions"], 0)


class InventoryReportTest(FixtureCase):
    def test_products_report(self):
        report = products_report(self.products)
        statuses = {row["id"]: row["status"] for row in report["products"]}

        self.assertEqual(report["total_items"], 353)
        self.assertEqual(report["low_stock"], ["2", "4", "6", "10"])
        self.assertEqual(statuses["1"], "In Stock")
        self.assertEqual(statuses["2"], "Low Stock")
        self.assertEqual(statuses["4"], "Out of Stock")

    def test_purchases_summary(self):
        summary = purchases_summary(self.purchases)
        self.assertAlmostEqual(summary["total_spent"], 4365.0)
        self.assertEqual(summary["transactions"], 6)
        self.assertEqual(summary["top_suppliers"][0]["supplier"], "TechSupply Co.")
        self.assertAlmostEqual(summary["top_suppliers"][0]["total"], 1650.0)


if __name__ == "__main__":
    unittest.main()
