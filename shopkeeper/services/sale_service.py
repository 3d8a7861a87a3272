import logging
from datetime import date
from typing import Dict, Iterable, List, Optional

from shopkeeper.config import get_settings
from shopkeeper.core.dates import resolve_today
from shopkeeper.models import Product, Sale, SaleItem, round_money
from shopkeeper.models.base import MONEY_TOLERANCE
from shopkeeper.services.notification_service import refresh_notifications
from shopkeeper.services.results import ItemsResult, MutationResult, ValidationErrors

logger = logging.getLogger(__name__)


def _index_products(products: Iterable[Product]) -> Dict[str, Product]:
    return {product.id: product for product in products}


def unit_price(product: Product) -> float:
    """Selling price snapshot for a sale line, in whole cents."""
    return round_money(product.price)


def available_products(products: Iterable[Product]) -> List[Product]:
    return [product for product in products if product.stock > 0]


def add_sale_item(
    items: List[SaleItem],
    products: Iterable[Product],
    product_id: str,
    quantity: Optional[int],
) -> ItemsResult:
    """
    Add ``quantity`` of a product to the sale being entered.

    The stock check covers what is already on the sale for that product, so
    an order can never be built up past the stock on hand.
    """
    errors = {}
    by_id = _index_products(products)
    product = by_id.get(product_id) if product_id else None

    if not product_id:
        errors["product"] = "Please select a product"
    elif product is None:
        errors["product"] = "Product not found"

    if quantity is None or quantity <= 0:
        errors["quantity"] = "Quantity must be greater than 0"
    elif product is not None:
        already_added = sum(item.quantity for item in items if item.product_id == product_id)
        if already_added + quantity > product.stock:
            errors["quantity"] = f"Only {product.stock} units available"

    if errors:
        return ItemsResult(items=list(items), errors=errors)

    merged = []
    found = False
    for item in items:
        if item.product_id == product_id and not found:
            item = item.model_copy(update={"quantity": item.quantity + quantity})
            found = True
        merged.append(item)
    if not found:
        merged.append(SaleItem(product_id=product_id, quantity=quantity, price=unit_price(product)))
    return ItemsResult(items=merged)


def update_sale_item_quantity(
    items: List[SaleItem],
    index: int,
    quantity: Optional[int],
    products: Iterable[Product],
) -> List[SaleItem]:
    if quantity is None or quantity <= 0 or not 0 <= index < len(items):
        return list(items)
    product = _index_products(products).get(items[index].product_id)
    if product is None or quantity > product.stock:
        return list(items)
    updated = list(items)
    updated[index] = updated[index].model_copy(update={"quantity": quantity})
    return updated


def sale_totals(items: Iterable, tax_rate: float, include_tax: bool = True) -> dict:
    subtotal = round_money(sum(item.price * item.quantity for item in items))
    tax = round_money(subtotal * tax_rate) if include_tax else 0.0
    return {
        "subtotal": subtotal,
        "tax": tax,
        "total": round_money(subtotal + tax),
    }


def validate_sale(customer: str, items: List, products: Iterable[Product]) -> ValidationErrors:
    errors = {}
    if not (customer or "").strip():
        errors["customer"] = "Customer name is required"
    if not items:
        errors["items"] = "Please add at least one product"

    by_id = _index_products(products)
    requested: Dict[str, int] = {}
    for index, item in enumerate(items):
        key = f"items.{index}"
        if not item.product_id:
            errors[f"{key}.product"] = "Please select a product"
            continue
        product = by_id.get(item.product_id)
        if product is None:
            errors[f"{key}.product"] = "Product not found"
            continue
        if item.quantity is None or item.quantity <= 0:
            errors[f"{key}.quantity"] = "Quantity must be greater than 0"
            continue
        if item.price is not None and abs(item.price - product.price) > MONEY_TOLERANCE:
            errors[f"{key}.price"] = "Price does not match the current product price"
        requested[product.id] = requested.get(product.id, 0) + item.quantity
        if requested[product.id] > product.stock:
            errors[f"{key}.quantity"] = f"Only {product.stock} units available"
    return errors


def record_sale(
    products: List[Product],
    customer: str,
    items: List,
    payment_method: str,
    *,
    sale_id: str,
    sale_date: date,
    tax_rate: float,
    include_tax: bool = True,
) -> MutationResult:
    errors = validate_sale(customer, items, products)
    if errors:
        return MutationResult.failed(errors)

    by_id = _index_products(products)
    lines = [
        SaleItem(
            product_id=item.product_id,
            quantity=item.quantity,
            price=unit_price(by_id[item.product_id]),
        )
        for item in items
    ]
    totals = sale_totals(lines, tax_rate, include_tax)
    sale = Sale(
        id=sale_id,
        date=sale_date,
        customer=customer.strip(),
        items=lines,
        tax=totals["tax"],
        total=totals["total"],
        payment_method=payment_method,
    )

    sold: Dict[str, int] = {}
    for line in lines:
        sold[line.product_id] = sold.get(line.product_id, 0) + line.quantity
    updated = [
        product.model_copy(update={"stock": product.stock - sold[product.id]})
        if product.id in sold
        else product
        for product in products
    ]
    return MutationResult(record=sale, products=updated)


def submit_sale(
    store,
    customer: str,
    items: List,
    payment_method: str,
    *,
    sale_date=None,
    include_tax: Optional[bool] = None,
) -> MutationResult:
    settings = get_settings()
    if include_tax is None:
        include_tax = settings.TAX_INCLUSIVE_TOTALS
    with store.transaction():
        result = record_sale(
            store.get_products(),
            customer,
            items,
            payment_method,
            sale_id=store.next_id(),
            sale_date=resolve_today(sale_date),
            tax_rate=settings.TAX_RATE,
            include_tax=include_tax,
        )
        if not result.ok:
            logger.info("Sale rejected: %s", ", ".join(sorted(result.errors)))
            return result
        store.replace_sales([*store.get_sales(), result.record])
        store.replace_products(result.products)
        refresh_notifications(store)
    logger.info(
        "Sale recorded: %s customer=%s total=%.2f",
        result.record.id,
        result.record.customer,
        result.record.total,
        extra={"event": "sale_recorded", "record_id": result.record.id},
    )
    return result


def sale_reference(sale: Sale) -> str:
    return "SALE/POS{}".format(sale.id.rjust(4, "0"))
