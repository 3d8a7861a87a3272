from shopkeeper.routers.dashboard import router as dashboard_router
from shopkeeper.routers.health import router as health_router
from shopkeeper.routers.notifications import router as notifications_router
from shopkeeper.routers.products import router as products_router
from shopkeeper.routers.purchases import router as purchases_router
from shopkeeper.routers.reports import router as reports_router
from shopkeeper.routers.sales import router as sales_router

__all__ = [
    "dashboard_router",
    "health_router",
    "notifications_router",
    "products_router",
    "purchases_router",
    "reports_router",
    "sales_router",
]
