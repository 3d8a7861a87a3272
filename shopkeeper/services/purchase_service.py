import logging
from datetime import date
from typing import Dict, Iterable, List, Optional

from shopkeeper.config import get_settings
from shopkeeper.core.dates import resolve_today
from shopkeeper.models import Product, Purchase, PurchaseItem, round_money
from shopkeeper.services.notification_service import refresh_notifications
from shopkeeper.services.results import ItemsResult, MutationResult, ValidationErrors

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = ("quantity", "cost")


def _index_products(products: Iterable[Product]) -> Dict[str, Product]:
    return {product.id: product for product in products}


def _item_errors(product_id, quantity, cost, by_id, prefix="") -> ValidationErrors:
    errors = {}
    if not product_id:
        errors[f"{prefix}product"] = "Please select a product"
    elif product_id not in by_id:
        errors[f"{prefix}product"] = "Product not found"
    if quantity is None or quantity <= 0:
        errors[f"{prefix}quantity"] = "Quantity must be greater than 0"
    if cost is None or round_money(cost) <= 0:
        errors[f"{prefix}cost"] = "Cost must be greater than 0"
    return errors


def add_purchase_item(
    items: List[PurchaseItem],
    products: Iterable[Product],
    product_id: str,
    quantity: Optional[int],
    cost: Optional[float],
) -> ItemsResult:
    """Add a line to the purchase order; repeat lines merge and take the latest cost."""
    errors = _item_errors(product_id, quantity, cost, _index_products(products))
    if errors:
        return ItemsResult(items=list(items), errors=errors)

    merged = []
    found = False
    for item in items:
        if item.product_id == product_id and not found:
            item = item.model_copy(update={"quantity": item.quantity + quantity, "cost": round_money(cost)})
            found = True
        merged.append(item)
    if not found:
        merged.append(PurchaseItem(product_id=product_id, quantity=quantity, cost=round_money(cost)))
    return ItemsResult(items=merged)


def update_purchase_item(items: List[PurchaseItem], index: int, field: str, value) -> List[PurchaseItem]:
    if field not in _EDITABLE_FIELDS or not 0 <= index < len(items):
        return list(items)
    if value is None or value <= 0:
        return list(items)
    if field == "quantity":
        value = int(value)
    updated = list(items)
    updated[index] = updated[index].model_copy(update={field: value})
    return updated


def suggest_purchase_cost(product: Optional[Product], ratio: Optional[float] = None) -> Optional[float]:
    if product is None:
        return None
    if ratio is None:
        ratio = get_settings().PURCHASE_COST_SUGGESTION_RATIO
    return round_money(product.price * ratio)


def suggested_suppliers(purchases: Iterable[Purchase], limit: Optional[int] = None) -> List[str]:
    if limit is None:
        limit = get_settings().SUGGESTED_SUPPLIERS_LIMIT
    seen = []
    for purchase in purchases:
        if purchase.supplier not in seen:
            seen.append(purchase.supplier)
    return seen[:limit]


def purchase_estimate(items: Iterable[PurchaseItem], products: Iterable[Product]) -> dict:
    by_id = _index_products(products)
    subtotal = 0.0
    profit = 0.0
    for item in items:
        subtotal += item.cost * item.quantity
        product = by_id.get(item.product_id)
        if product is not None:
            profit += (product.price - item.cost) * item.quantity
    margin = (profit / subtotal) * 100 if subtotal > 0 else 0.0
    return {
        "subtotal": round_money(subtotal),
        "estimated_profit": round_money(profit),
        "profit_margin": round_money(margin),
    }


def validate_purchase(supplier: str, items: List, products: Iterable[Product]) -> ValidationErrors:
    errors = {}
    if not (supplier or "").strip():
        errors["supplier"] = "Supplier name is required"
    if not items:
        errors["items"] = "Please add at least one product"

    by_id = _index_products(products)
    for index, item in enumerate(items):
        errors.update(
            _item_errors(item.product_id, item.quantity, item.cost, by_id, prefix=f"items.{index}.")
        )
    return errors


def record_purchase(
    products: List[Product],
    supplier: str,
    items: List,
    *,
    purchase_id: str,
    purchase_date: date,
) -> MutationResult:
    errors = validate_purchase(supplier, items, products)
    if errors:
        return MutationResult.failed(errors)

    lines = [
        PurchaseItem(product_id=item.product_id, quantity=item.quantity, cost=round_money(item.cost))
        for item in items
    ]
    purchase = Purchase(
        id=purchase_id,
        date=purchase_date,
        supplier=supplier.strip(),
        items=lines,
        total=round_money(sum(line.subtotal for line in lines)),
    )

    received: Dict[str, int] = {}
    for line in lines:
        received[line.product_id] = received.get(line.product_id, 0) + line.quantity
    updated = [
        product.model_copy(update={"stock": product.stock + received[product.id]})
        if product.id in received
        else product
        for product in products
    ]
    return MutationResult(record=purchase, products=updated)


def submit_purchase(store, supplier: str, items: List, *, purchase_date=None) -> MutationResult:
    with store.transaction():
        result = record_purchase(
            store.get_products(),
            supplier,
            items,
            purchase_id=store.next_id(),
            purchase_date=resolve_today(purchase_date),
        )
        if not result.ok:
            logger.info("Purchase rejected: %s", ", ".join(sorted(result.errors)))
            return result
        store.replace_purchases([*store.get_purchases(), result.record])
        store.replace_products(result.products)
        refresh_notifications(store)
    logger.info(
        "Purchase recorded: %s supplier=%s total=%.2f",
        result.record.id,
        result.record.supplier,
        result.record.total,
        extra={"event": "purchase_recorded", "record_id": result.record.id},
    )
    return result
