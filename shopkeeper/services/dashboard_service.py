from shopkeeper.config import get_settings
from shopkeeper.core.aggregation import (
    inventory_value,
    low_stock,
    out_of_stock,
    product_sales,
    recent_activity,
    revenue_on,
    revenue_total,
    sales_on,
    top_n,
    trend_delta,
)
from shopkeeper.core.dates import normalize_date, previous_day
from shopkeeper.models import round_money
from shopkeeper.services.listing_service import product_name, sort_by_date_desc


def _low_stock_row(product):
    return {
        "id": product.id,
        "name": product.name,
        "sku": product.sku,
        "stock": product.stock,
        "min_stock": product.min_stock,
    }


def _activity_row(activity):
    return {**activity, "amount": round_money(activity["amount"])}


def dashboard_summary(products, sales, purchases, today, *, top_limit=None, recent_limit=None):
    settings = get_settings()
    if top_limit is None:
        top_limit = settings.TOP_PRODUCTS_LIMIT
    if recent_limit is None:
        recent_limit = settings.RECENT_ACTIVITY_LIMIT

    today = normalize_date(today)
    yesterday = previous_day(today)
    low = low_stock(products)

    top_products = [
        {
            "product_id": product_id,
            "name": product_name(products, product_id),
            "quantity": data["quantity"],
            "revenue": round_money(data["revenue"]),
        }
        for product_id, data in top_n(product_sales(sales), top_limit, by="revenue")
    ]

    recent_sales = [
        {
            "id": sale.id,
            "date": sale.date,
            "customer": sale.customer,
            "total": round_money(sale.total),
        }
        for sale in sort_by_date_desc(sales)[:recent_limit]
    ]

    return {
        "date": today,
        "total_revenue": round_money(revenue_total(sales)),
        "total_products": len(products),
        "low_stock_count": len(low),
        "out_of_stock_count": len(out_of_stock(products)),
        "today_sales_count": len(sales_on(sales, today)),
        "today_revenue": round_money(revenue_on(sales, today)),
        "yesterday_revenue": round_money(revenue_on(sales, yesterday)),
        "revenue_trend": round_money(trend_delta(sales, today, yesterday)),
        "inventory_value": round_money(inventory_value(products)),
        "recent_sales": recent_sales,
        "low_stock_products": [_low_stock_row(product) for product in low[:recent_limit]],
        "top_products": top_products,
        "recent_activity": [
            _activity_row(activity)
            for activity in recent_activity(sales, purchases, recent_limit)
        ],
    }
