import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from shopkeeper.config import Settings, get_settings
from shopkeeper.core.logging import setup_logging
from shopkeeper.routers import (
    dashboard_router,
    health_router,
    notifications_router,
    products_router,
    purchases_router,
    reports_router,
    sales_router,
)
from shopkeeper.store import Store, load_store

logger = logging.getLogger(__name__)

DEFAULT_LANDING_PATH = "/dashboard/summary"


def _initial_store(settings: Settings) -> Store:
    if settings.SEED_FIXTURES:
        return load_store(settings.FIXTURES_DIR)
    return Store()


@asynccontextmanager
async def lifespan(app: FastAPI):
    snapshot = app.state.store.snapshot()
    logger.info(
        "%s ready with %d products, %d sales, %d purchases",
        app.title,
        len(snapshot.products),
        len(snapshot.sales),
        len(snapshot.purchases),
    )
    yield


def create_app(store: Optional[Store] = None) -> FastAPI:
    settings: Settings = get_settings()
    application = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    application.state.store = store if store is not None else _initial_store(settings)

    application.include_router(health_router)
    application.include_router(dashboard_router)
    application.include_router(products_router)
    application.include_router(sales_router)
    application.include_router(purchases_router)
    application.include_router(reports_router)
    application.include_router(notifications_router)

    @application.get("/", include_in_schema=False)
    def root():
        return RedirectResponse(url=DEFAULT_LANDING_PATH, status_code=302)

    return application


setup_logging()
app = create_app()


__all__ = ["app", "create_app"]
