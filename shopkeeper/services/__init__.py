from shopkeeper.services.dashboard_service import dashboard_summary
from shopkeeper.services.export_service import export_report
from shopkeeper.services.notification_service import derive_notifications, refresh_notifications
from shopkeeper.services.product_service import create_product, submit_product
from shopkeeper.services.purchase_service import record_purchase, submit_purchase
from shopkeeper.services.report_service import (
    daily_sales_report,
    payments_report,
    products_report,
    sales_report,
)
from shopkeeper.services.sale_service import record_sale, submit_sale

__all__ = [
    "create_product",
    "daily_sales_report",
    "dashboard_summary",
    "derive_notifications",
    "export_report",
    "payments_report",
    "products_report",
    "record_purchase",
    "record_sale",
    "refresh_notifications",
    "sales_report",
    "submit_product",
    "submit_purchase",
    "submit_sale",
]
