from shopkeeper.models.base import Record, round_money
from shopkeeper.models.notification import Notification
from shopkeeper.models.product import Product
from shopkeeper.models.purchase import Purchase, PurchaseItem
from shopkeeper.models.sale import Sale, SaleItem

__all__ = [
    "Notification",
    "Product",
    "Purchase",
    "PurchaseItem",
    "Record",
    "Sale",
    "SaleItem",
    "round_money",
]
