import unittest
from datetime import date

from pydantic import ValidationError

from shopkeeper.models import Notification, Product, Purchase, Sale, SaleItem, round_money


class ProductModelTest(unittest.TestCase):
    def test_sku_is_trimmed_and_uppercased(self):
        product = Product(id="1", name="Mouse", sku="  wm-001 ", price=10.0)
        self.assertEqual(product.sku, "WM-001")
        self.assertEqual(product.stock, 0)
        self.assertEqual(product.min_stock, 10)

    def test_rejects_non_positive_price_and_negative_stock(self):
        with self.assertRaises(ValidationError):
            Product(id="1", name="Mouse", sku="WM-001", price=0)
        with self.assertRaises(ValidationError):
            Product(id="1", name="Mouse", sku="WM-001", price=5.0, stock=-1)

    def test_stock_flags(self):
        cases = [
            (0, 5, True, True),
            (4, 5, True, False),
            (5, 5, False, False),
        ]
        for stock, min_stock, low, out in cases:
            with self.subTest(stock=stock, min_stock=min_stock):
                product = Product(id="1", name="Lamp", sku="DL", price=3.0, stock=stock, min_stock=min_stock)
                self.assertEqual(product.is_low_stock, low)
                self.assertEqual(product.is_out_of_stock, out)

    def test_records_are_frozen(self):
        product = Product(id="1", name="Mouse", sku="WM-001", price=10.0)
        with self.assertRaises(ValidationError):
            product.stock = 3
        updated = product.model_copy(update={"stock": 3})
        self.assertEqual(updated.stock, 3)
        self.assertEqual(product.stock, 0)

    def test_camel_case_round_trip(self):
        product = Product.model_validate(
            {"id": "2", "name": "Cable", "sku": "uc-2", "price": 12.5, "stock": 8, "minStock": 15}
        )
        self.assertEqual(product.min_stock, 15)
        self.assertIn("minStock", product.model_dump(by_alias=True))


class SaleModelTest(unittest.TestCase):
    def _payload(self, **overrides):
        payload = {
            "id": "1",
            "date": "2025-06-01",
            "customer": "John Smith",
            "products": [
                {"productId": "1", "quantity": 2, "price": 25.99},
                {"productId": "5", "quantity": 5, "price": 4.5},
            ],
            "total": 74.48,
            "paymentMethod": "Cash",
        }
        payload.update(overrides)
        return payload

    def test_parses_fixture_shape(self):
        sale = Sale.model_validate(self._payload())
        self.assertEqual(sale.date, date(2025, 6, 1))
        self.assertEqual(len(sale.items), 2)
        self.assertAlmostEqual(sale.subtotal, 74.48)
        self.assertEqual(sale.tax, 0.0)

    def test_total_must_match_lines_plus_tax(self):
        with self.assertRaises(ValidationError):
            Sale.model_validate(self._payload(total=80.0))
        sale = Sale.model_validate(self._payload(total=81.93, tax=7.45))
        self.assertAlmostEqual(sale.total, 81.93)

    def test_requires_at_least_one_item(self):
        with self.assertRaises(ValidationError):
            Sale.model_validate(self._payload(products=[], total=0.0))

    def test_item_quantity_must_be_positive(self):
        with self.assertRaises(ValidationError):
            SaleItem(product_id="1", quantity=0, price=3.0)


class PurchaseModelTest(unittest.TestCase):
    def test_units_and_total(self):
        purchase = Purchase.model_validate(
            {
                "id": "1",
                "date": "2025-05-28",
                "supplier": "TechSupply Co.",
                "products": [
                    {"productId": "1", "quantity": 50, "cost": 15.0},
                    {"productId": "2", "quantity": 30, "cost": 6.0},
                ],
                "total": 930.0,
            }
        )
        self.assertEqual(purchase.units, 80)
        with self.assertRaises(ValidationError):
            Purchase.model_validate(
                {
                    "id": "2",
                    "date": "2025-05-28",
                    "supplier": "TechSupply Co.",
                    "products": [{"productId": "1", "quantity": 1, "cost": 15.0}],
                    "total": 20.0,
                }
            )


class MiscModelTest(unittest.TestCase):
    def test_notification_defaults(self):
        notification = Notification(id="notif-1", message="Low stock")
        self.assertEqual(notification.type, "warning")
        self.assertFalse(notification.read)

    def test_round_money(self):
        self.assertEqual(round_money(7.797), 7.8)
        self.assertEqual(round_money(66), 66.0)


if __name__ == "__main__":
    unittest.main()
