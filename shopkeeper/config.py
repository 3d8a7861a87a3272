from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "Shopkeeper"
    ENVIRONMENT: str = "local"

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ==============================
    # Fixtures
    # ==============================
    FIXTURES_DIR: Optional[str] = None
    SEED_FIXTURES: bool = True

    # ==============================
    # Sales
    # ==============================
    TAX_RATE: float = 0.10
    TAX_INCLUSIVE_TOTALS: bool = True

    # ==============================
    # Products & Purchases
    # ==============================
    DEFAULT_MIN_STOCK: int = 10
    SUGGESTED_SUPPLIERS_LIMIT: int = 5
    PURCHASE_COST_SUGGESTION_RATIO: float = 0.6

    # ==============================
    # Reports
    # ==============================
    TOP_PRODUCTS_LIMIT: int = 5
    TOP_CUSTOMERS_LIMIT: int = 5
    TOP_SUPPLIERS_LIMIT: int = 3
    RECENT_ACTIVITY_LIMIT: int = 5
    PAYMENT_TREND_DAYS: int = 30
    SALES_PAGE_SIZE: int = 10


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
