import csv
import io
import unittest

from fastapi.testclient import TestClient

from shopkeeper.main import create_app
from shopkeeper.models import Product
from shopkeeper.services.export_service import CSV_MEDIA_TYPE, XLSX_MEDIA_TYPE
from shopkeeper.store import Store, load_store


class ApiTestCase(unittest.TestCase):
    def setUp(self):
        self.store = load_store()
        self.client = TestClient(create_app(store=self.store))


class ReadEndpointsTest(ApiTestCase):
    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ok")
        self.assertEqual(
            response.json()["records"],
            {"products": 10, "sales": 10, "purchases": 6, "notifications": 4},
        )

    def test_root_redirects_to_dashboard(self):
        response = self.client.get("/", follow_redirects=False)
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.headers["location"], "/dashboard/summary")

    def test_dashboard(self):
        response = self.client.get("/dashboard/summary", params={"today": "2025-06-09"})
        body = response.json()
        self.assertEqual(response.status_code, 200)
        self.assertEqual(body["date"], "2025-06-09")
        self.assertEqual(body["total_products"], 10)
        self.assertAlmostEqual(body["today_revenue"], 203.99)

    def test_bad_today(self):
        response = self.client.get("/dashboard/summary", params={"today": "yesterday"})
        self.assertEqual(response.status_code, 400)

    def test_products(self):
        self.assertEqual(len(self.client.get("/products").json()), 10)
        body = self.client.get("/products/2").json()
        self.assertEqual(body["minStock"], 15)
        self.assertEqual(self.client.get("/products/missing").status_code, 404)
        self.assertEqual(self.client.get("/products/categories").json()[0], "Electronics")
        self.assertEqual(
            self.client.get("/products/profit", params={"cost": 10, "price": 15}).json(),
            {"profit": 5.0, "margin": 50.0},
        )
        self.assertRegex(
            self.client.get("/products/generate-code", params={"category": "Groceries"}).json()["code"],
            r"^GRO-\d{4}$",
        )

    def test_sales_listing(self):
        body = self.client.get("/sales", params={"search": "john"}).json()
        self.assertEqual([sale["id"] for sale in body], ["5", "1"])
        self.assertEqual(body[0]["paymentMethod"], "Mobile Payment")
        invoice = self.client.get("/sales/4/invoice").json()
        self.assertEqual(invoice["sale_ref"], "SALE/POS0004")
        self.assertEqual(self.client.get("/sales/404").status_code, 404)

    def test_report_choices_are_validated(self):
        cases = [
            ("/reports/sales", {"sort_by": "bogus"}),
            ("/reports/sales", {"order": "sideways"}),
            ("/reports/payments", {"date_range": "decade"}),
            ("/reports/sales/export", {"format": "pdf"}),
        ]
        for path, params in cases:
            with self.subTest(path=path, params=params):
                self.assertEqual(self.client.get(path, params=params).status_code, 400)
        self.assertEqual(self.client.get("/reports/inventory/export").status_code, 404)

    def test_reports(self):
        payments = self.client.get(
            "/reports/payments", params={"date_range": "all", "today": "2025-06-09"}
        ).json()
        self.assertEqual(payments["most_used"]["payment_method"], "Cash")
        products = self.client.get("/reports/products").json()
        self.assertEqual(products["low_stock_count"], 4)
        daily = self.client.get("/reports/daily-sales", params={"today": "2025-06-01"}).json()
        self.assertEqual(daily["count"], 2)


class ExportEndpointTest(ApiTestCase):
    def test_csv(self):
        response = self.client.get("/reports/sales/export", params={"today": "2025-06-09"})
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.headers["content-type"].startswith(CSV_MEDIA_TYPE))
        self.assertIn('filename="sales-2025-06-09.csv"', response.headers["content-disposition"])
        self.assertEqual(len(list(csv.reader(io.StringIO(response.text)))), 11)

    def test_xlsx(self):
        response = self.client.get("/reports/products/export", params={"format": "xlsx"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["content-type"], XLSX_MEDIA_TYPE)
        self.assertTrue(response.content.startswith(b"PK"))


class MutationEndpointsTest(ApiTestCase):
    def test_record_sale(self):
        response = self.client.post(
            "/sales",
            json={
                "customer": "Jane",
                "products": [{"productId": "1", "quantity": 3}],
                "paymentMethod": "Cash",
                "date": "2025-06-10",
            },
        )
        body = response.json()

        self.assertEqual(response.status_code, 201)
        self.assertAlmostEqual(body["tax"], 7.8)
        self.assertAlmostEqual(body["total"], 85.77)
        self.assertEqual(body["date"], "2025-06-10")
        self.assertEqual(self.client.get("/products/1").json()["stock"], 42)
        self.assertEqual(len(self.store.get_sales()), 11)

    def test_oversell_is_rejected(self):
        response = self.client.post(
            "/sales",
            json={"customer": "Jane", "products": [{"productId": "10", "quantity": 4}]},
        )
        self.assertEqual(response.status_code, 422)
        self.assertEqual(
            response.json()["detail"]["errors"]["items.0.quantity"],
            "Only 3 units available",
        )
        self.assertEqual(self.store.find_product("10").stock, 3)

    def test_sale_defaults_to_walk_in_customer(self):
        response = self.client.post("/sales", json={"products": [{"productId": "1", "quantity": 1}]})
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["customer"], "Walk-in Customer")
        self.assertEqual(response.json()["paymentMethod"], "Cash")

        blank = self.client.post("/sales", json={"customer": "  ", "products": [{"productId": "1", "quantity": 1}]})
        self.assertEqual(blank.status_code, 422)
        self.assertEqual(blank.json()["detail"]["errors"]["customer"], "Customer name is required")

    def test_sale_price_comes_from_product(self):
        response = self.client.post(
            "/sales",
            json={"customer": "Jane", "products": [{"productId": "3", "quantity": 1, "price": 0}]},
        )
        self.assertEqual(response.status_code, 422)
        self.assertIn("items.0.price", response.json()["detail"]["errors"])
        self.assertEqual(len(self.store.get_sales()), 10)

    def test_sub_cent_product_price(self):
        store = Store(products=[Product(id="1", name="Sticker", sku="ST-1", price=0.125, stock=5, min_stock=1)])
        client = TestClient(create_app(store=store))

        response = client.post(
            "/sales",
            json={"customer": "Jane", "products": [{"productId": "1", "quantity": 1, "price": 0.125}]},
        )
        body = response.json()

        self.assertEqual(response.status_code, 201)
        self.assertEqual(body["products"][0]["price"], 0.12)
        self.assertAlmostEqual(body["total"], 0.13)

    def test_add_sale_item(self):
        response = self.client.post("/sales/items", json={"products": [], "productId": "10", "quantity": 2})
        body = response.json()
        self.assertEqual(response.status_code, 200)
        self.assertEqual(body["products"], [{"productId": "10", "quantity": 2, "price": 49.5}])
        self.assertEqual((body["subtotal"], body["tax"], body["total"]), (99.0, 9.9, 108.9))

        over = self.client.post("/sales/items", json={"products": body["products"], "productId": "10", "quantity": 2})
        self.assertEqual(over.status_code, 422)

    def test_create_product(self):
        payload = {"name": "Monitor", "code": "mn-100", "category": "Electronics", "cost": 100, "price": 150}
        created = self.client.post("/products", json=payload)
        self.assertEqual(created.status_code, 201)
        self.assertEqual(created.json()["sku"], "MN-100")
        self.assertEqual(created.json()["stock"], 0)

        duplicate = self.client.post("/products", json=payload)
        self.assertEqual(duplicate.status_code, 422)
        self.assertEqual(duplicate.json()["detail"]["errors"]["code"], "Product code already exists")

    def test_record_purchase_clears_notification(self):
        response = self.client.post(
            "/purchases",
            json={
                "supplier": "Outdoor Gear Ltd",
                "products": [{"productId": "10", "quantity": 10, "cost": 30}],
                "date": "2025-06-10",
            },
        )
        self.assertEqual(response.status_code, 201)
        self.assertAlmostEqual(response.json()["total"], 300.0)
        ids = [item["id"] for item in self.client.get("/notifications").json()]
        self.assertNotIn("notif-10", ids)
        self.assertEqual(self.client.get("/purchases").json()[0]["id"], response.json()["id"])

    def test_purchase_helpers(self):
        self.assertEqual(self.client.get("/purchases/suppliers").json()[0], "TechSupply Co.")
        self.assertEqual(self.client.get("/purchases/suggested-cost/2").json()["cost"], 7.5)
        estimate = self.client.post(
            "/purchases/estimate",
            json={"products": [{"productId": "2", "quantity": 10, "cost": 6}]},
        ).json()
        self.assertEqual(estimate, {"subtotal": 60.0, "estimated_profit": 65.0, "profit_margin": 108.33})

    def test_notifications(self):
        self.assertEqual(len(self.client.get("/notifications").json()), 4)
        read = self.client.post("/notifications/notif-2/read")
        self.assertTrue(read.json()["read"])
        self.assertEqual(self.client.delete("/notifications/notif-2").status_code, 204)
        self.assertEqual(len(self.client.get("/notifications").json()), 3)
        self.assertEqual(self.client.delete("/notifications/notif-2").status_code, 404)
        self.assertEqual(self.client.post("/notifications/read-all").json(), {"updated": 3})


if __name__ == "__main__":
    unittest.main()
