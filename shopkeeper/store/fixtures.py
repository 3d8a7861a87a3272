import json
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import TypeAdapter

from shopkeeper.core.constants import DATA_DIR
from shopkeeper.models import Product, Purchase, Sale
from shopkeeper.services.notification_service import refresh_notifications
from shopkeeper.store.state import Store

logger = logging.getLogger(__name__)

_PRODUCTS = TypeAdapter(List[Product])
_SALES = TypeAdapter(List[Sale])
_PURCHASES = TypeAdapter(List[Purchase])
_CATEGORIES = TypeAdapter(List[str])


def resolve_fixtures_dir(value=None) -> Path:
    if not value:
        return DATA_DIR
    return Path(value).expanduser().resolve()


def _read_json(path: Path):
    if not path.exists():
        logger.warning("Fixture file missing: %s", path)
        return []
    with path.open("r", encoding="utf-8") as handle:
        text = handle.read().strip()
    if not text:
        return []
    return json.loads(text)


def load_store(fixtures_dir: Optional[str] = None) -> Store:
    """Build a store seeded from the JSON fixtures in ``fixtures_dir``."""
    base = resolve_fixtures_dir(fixtures_dir)
    store = Store(
        products=_PRODUCTS.validate_python(_read_json(base / "products.json")),
        sales=_SALES.validate_python(_read_json(base / "sales.json")),
        purchases=_PURCHASES.validate_python(_read_json(base / "purchases.json")),
        categories=_CATEGORIES.validate_python(_read_json(base / "categories.json")),
    )
    refresh_notifications(store)
    logger.info(
        "Loaded fixtures from %s: %d products, %d sales, %d purchases",
        base,
        len(store.get_products()),
        len(store.get_sales()),
        len(store.get_purchases()),
    )
    return store
