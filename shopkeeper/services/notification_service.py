import logging
from typing import Iterable, List, Optional

from shopkeeper.models import Notification, Product

logger = logging.getLogger(__name__)


def notification_id(product_id: str) -> str:
    return f"notif-{product_id}"


def low_stock_message(product: Product) -> str:
    return f"Low stock alert: {product.name} ({product.stock} units remaining)"


def derive_notifications(
    products: Iterable[Product],
    previous: Iterable[Notification] = (),
    dismissed_ids: Iterable[str] = (),
) -> List[Notification]:
    """
    Rebuild low-stock notifications from the product collection.

    Read flags carry over for notifications whose id survives the rebuild and
    dismissed ids stay hidden. A product that recovers drops its notification,
    so it starts unread the next time it runs low.
    """
    read_ids = {item.id for item in previous if item.read}
    hidden = set(dismissed_ids)
    notifications = []
    for product in products:
        if not product.is_low_stock:
            continue
        notif_id = notification_id(product.id)
        if notif_id in hidden:
            continue
        notifications.append(
            Notification(
                id=notif_id,
                message=low_stock_message(product),
                type="warning",
                read=notif_id in read_ids,
            )
        )
    return notifications


def refresh_notifications(store) -> List[Notification]:
    products = store.get_products()
    low_ids = {notification_id(product.id) for product in products if product.is_low_stock}
    dismissed = store.get_dismissed_notification_ids() & low_ids
    notifications = derive_notifications(
        products,
        previous=store.get_notifications(),
        dismissed_ids=dismissed,
    )
    store.replace_dismissed_notification_ids(dismissed)
    store.replace_notifications(notifications)
    return notifications


def unread_count(notifications: Iterable[Notification]) -> int:
    return sum(1 for item in notifications if not item.read)


def mark_read(store, notif_id: str) -> Optional[Notification]:
    with store.transaction():
        updated = None
        notifications = []
        for item in store.get_notifications():
            if item.id == notif_id:
                item = item.model_copy(update={"read": True})
                updated = item
            notifications.append(item)
        if updated is not None:
            store.replace_notifications(notifications)
    return updated


def mark_all_read(store) -> int:
    with store.transaction():
        notifications = store.get_notifications()
        changed = unread_count(notifications)
        store.replace_notifications(
            [item.model_copy(update={"read": True}) for item in notifications]
        )
    return changed


def dismiss(store, notif_id: str) -> bool:
    with store.transaction():
        notifications = store.get_notifications()
        remaining = [item for item in notifications if item.id != notif_id]
        if len(remaining) == len(notifications):
            return False
        store.replace_notifications(remaining)
        store.replace_dismissed_notification_ids(
            store.get_dismissed_notification_ids() | {notif_id}
        )
    logger.info("Notification dismissed: %s", notif_id)
    return True
