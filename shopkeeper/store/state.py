import threading
import time
from contextlib import contextmanager
from typing import Iterable, List, NamedTuple, Optional, Set

from shopkeeper.models import Notification, Product, Purchase, Sale


class StoreSnapshot(NamedTuple):
    products: List[Product]
    sales: List[Sale]
    purchases: List[Purchase]
    notifications: List[Notification]


class Store:
    """
    Process-local holder for the shop's collections.

    Collections are only ever replaced as a whole and every read takes the
    lock. Callers that need more than one collection use ``snapshot()`` so
    they never see a half-applied commit.
    """

    def __init__(
        self,
        products: Iterable[Product] = (),
        sales: Iterable[Sale] = (),
        purchases: Iterable[Purchase] = (),
        notifications: Iterable[Notification] = (),
        categories: Iterable[str] = (),
    ):
        self._lock = threading.RLock()
        self._products: List[Product] = list(products)
        self._sales: List[Sale] = list(sales)
        self._purchases: List[Purchase] = list(purchases)
        self._notifications: List[Notification] = list(notifications)
        self._dismissed_notification_ids: Set[str] = set()
        self._categories: List[str] = list(categories)
        self._last_id = 0

        self.show_notifications = False
        self.show_user_menu = False

    @contextmanager
    def transaction(self):
        with self._lock:
            yield self

    def next_id(self) -> str:
        """Timestamp-based id, strictly increasing within this store."""
        with self._lock:
            candidate = time.time_ns() // 1_000_000
            if candidate <= self._last_id:
                candidate = self._last_id + 1
            self._last_id = candidate
            return str(candidate)

    def snapshot(self) -> StoreSnapshot:
        with self._lock:
            return StoreSnapshot(
                products=list(self._products),
                sales=list(self._sales),
                purchases=list(self._purchases),
                notifications=list(self._notifications),
            )

    def get_products(self) -> List[Product]:
        with self._lock:
            return list(self._products)

    def replace_products(self, products: Iterable[Product]) -> None:
        next_products = list(products)
        with self._lock:
            self._products = next_products

    def get_sales(self) -> List[Sale]:
        with self._lock:
            return list(self._sales)

    def replace_sales(self, sales: Iterable[Sale]) -> None:
        next_sales = list(sales)
        with self._lock:
            self._sales = next_sales

    def get_purchases(self) -> List[Purchase]:
        with self._lock:
            return list(self._purchases)

    def replace_purchases(self, purchases: Iterable[Purchase]) -> None:
        next_purchases = list(purchases)
        with self._lock:
            self._purchases = next_purchases

    def get_notifications(self) -> List[Notification]:
        with self._lock:
            return list(self._notifications)

    def replace_notifications(self, notifications: Iterable[Notification]) -> None:
        next_notifications = list(notifications)
        with self._lock:
            self._notifications = next_notifications

    def get_dismissed_notification_ids(self) -> Set[str]:
        with self._lock:
            return set(self._dismissed_notification_ids)

    def replace_dismissed_notification_ids(self, ids: Iterable[str]) -> None:
        next_ids = set(ids)
        with self._lock:
            self._dismissed_notification_ids = next_ids

    def get_categories(self) -> List[str]:
        with self._lock:
            return list(self._categories)

    def find_product(self, product_id: str) -> Optional[Product]:
        for product in self.get_products():
            if product.id == product_id:
                return product
        return None

    def set_show_notifications(self, show: bool) -> None:
        self.show_notifications = bool(show)

    def set_show_user_menu(self, show: bool) -> None:
        self.show_user_menu = bool(show)

    def close_menus(self) -> None:
        self.show_notifications = False
        self.show_user_menu = False
