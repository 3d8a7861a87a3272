import logging
import random
from typing import Iterable, List, Optional

from shopkeeper.config import get_settings
from shopkeeper.core.constants import DEFAULT_CODE_PREFIX
from shopkeeper.models import Product, round_money
from shopkeeper.services.notification_service import refresh_notifications
from shopkeeper.services.results import MutationResult, ValidationErrors

logger = logging.getLogger(__name__)

_MAX_CODE_ATTEMPTS = 10_000


def normalize_sku(value) -> str:
    return str(value or "").strip().upper()


def find_product(products: Iterable[Product], product_id: str) -> Optional[Product]:
    for product in products:
        if product.id == product_id:
            return product
    return None


def sku_exists(products: Iterable[Product], code) -> bool:
    sku = normalize_sku(code)
    return any(normalize_sku(product.sku) == sku for product in products)


def _is_positive(value) -> bool:
    return value is not None and value > 0


def validate_product_input(data, products: Iterable[Product]) -> ValidationErrors:
    errors = {}

    if not (data.name or "").strip():
        errors["name"] = "Product name is required"

    if not (data.code or "").strip():
        errors["code"] = "Product code is required"
    elif sku_exists(products, data.code):
        errors["code"] = "Product code already exists"

    if not (data.category or "").strip():
        errors["category"] = "Category is required"

    if not _is_positive(data.cost):
        errors["cost"] = "Cost must be greater than 0"

    if not _is_positive(data.price):
        errors["price"] = "Price must be greater than 0"
    elif _is_positive(data.cost) and data.price < data.cost:
        errors["price"] = "Selling price should be greater than cost"

    return errors


def create_product(
    products: List[Product],
    data,
    *,
    product_id: str,
    min_stock: int,
) -> MutationResult:
    errors = validate_product_input(data, products)
    if errors:
        return MutationResult.failed(errors)

    product = Product(
        id=product_id,
        name=data.name.strip(),
        sku=normalize_sku(data.code),
        price=round_money(data.price),
        stock=0,
        min_stock=min_stock,
        category=data.category.strip(),
        cost=round_money(data.cost),
        description=(data.description or "").strip(),
        image=data.image or None,
    )
    return MutationResult(record=product, products=[*products, product])


def submit_product(store, data) -> MutationResult:
    settings = get_settings()
    with store.transaction():
        result = create_product(
            store.get_products(),
            data,
            product_id=store.next_id(),
            min_stock=settings.DEFAULT_MIN_STOCK,
        )
        if not result.ok:
            logger.info("Product rejected: %s", ", ".join(sorted(result.errors)))
            return result
        store.replace_products(result.products)
        refresh_notifications(store)
    logger.info(
        "Product created: %s (%s)",
        result.record.sku,
        result.record.id,
        extra={"event": "product_created", "record_id": result.record.id},
    )
    return result


def generate_product_code(
    category: Optional[str],
    products: Iterable[Product],
    rng: Optional[random.Random] = None,
) -> str:
    """Random ``<CAT>-NNNN`` code that does not collide with an existing SKU."""
    rng = rng or random.Random()
    category_text = (category or "").strip()
    prefix = category_text[:3].upper() if category_text else DEFAULT_CODE_PREFIX
    existing = {normalize_sku(product.sku) for product in products}

    for _ in range(_MAX_CODE_ATTEMPTS):
        code = "{}-{:04d}".format(prefix, rng.randrange(10_000))
        if code not in existing:
            return code
    raise RuntimeError(f"No free product code left for prefix {prefix}")


def profit_margin(cost: Optional[float], price: Optional[float]) -> dict:
    cost = cost or 0.0
    price = price or 0.0
    profit = price - cost
    margin = (profit / cost) * 100 if cost > 0 else 0.0
    return {"profit": round_money(profit), "margin": round_money(margin)}
