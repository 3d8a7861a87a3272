from shopkeeper.config import get_settings
from shopkeeper.core.aggregation import (
    average,
    best_group,
    filter_by_range,
    group_by_key,
    inventory_value,
    low_stock,
    most_used,
    payment_breakdown,
    payment_trends,
    revenue_total,
    sales_on,
    share_percent,
    top_n,
    total_fees,
    total_units,
)
from shopkeeper.core.constants import (
    STATUS_IN_STOCK,
    STATUS_LOW_STOCK,
    STATUS_OUT_OF_STOCK,
)
from shopkeeper.core.dates import normalize_date
from shopkeeper.models import round_money
from shopkeeper.services.listing_service import paginate, product_name, sort_sales
from shopkeeper.services.sale_service import sale_reference

_SALES_BY_DATE_LIMIT = 10


def _group_rows(groups, key_name):
    return [
        {key_name: key, "count": data["count"], "total": round_money(data["total"])}
        for key, data in groups
    ]


def sale_row(sale):
    return {
        "id": sale.id,
        "sale_ref": sale_reference(sale),
        "date": sale.date,
        "customer": sale.customer,
        "items": len(sale.items),
        "payment_method": sale.payment_method,
        "tax": round_money(sale.tax),
        "total": round_money(sale.total),
    }


def purchase_row(purchase):
    return {
        "id": purchase.id,
        "date": purchase.date,
        "supplier": purchase.supplier,
        "items": len(purchase.items),
        "units": purchase.units,
        "total": round_money(purchase.total),
    }


def product_status(product):
    if product.is_out_of_stock:
        return STATUS_OUT_OF_STOCK
    if product.is_low_stock:
        return STATUS_LOW_STOCK
    return STATUS_IN_STOCK


def sale_invoice(sale, products):
    lines = [
        {
            "product_id": item.product_id,
            "name": product_name(products, item.product_id),
            "quantity": item.quantity,
            "price": round_money(item.price),
            "subtotal": round_money(item.subtotal),
        }
        for item in sale.items
    ]
    return {
        "id": sale.id,
        "sale_ref": sale_reference(sale),
        "date": sale.date,
        "customer": sale.customer,
        "payment_method": sale.payment_method,
        "lines": lines,
        "subtotal": round_money(sale.subtotal),
        "tax": round_money(sale.tax),
        "total": round_money(sale.total),
    }


def daily_sales_report(sales, today):
    today = normalize_date(today)
    todays = sales_on(sales, today)
    total = revenue_total(todays)
    methods = group_by_key(todays, lambda sale: sale.payment_method)
    return {
        "date": today,
        "count": len(todays),
        "total": round_money(total),
        "average": round_money(average(total, len(todays))),
        "payment_methods": _group_rows(methods.items(), "payment_method"),
        "sales": [sale_row(sale) for sale in todays],
    }


def sales_report(
    sales,
    *,
    sort_by="date",
    order="desc",
    page=1,
    per_page=None,
    top_customers_limit=None,
):
    settings = get_settings()
    if per_page is None:
        per_page = settings.SALES_PAGE_SIZE
    if top_customers_limit is None:
        top_customers_limit = settings.TOP_CUSTOMERS_LIMIT

    total = revenue_total(sales)
    by_date = group_by_key(sales, lambda sale: sale.date)
    by_customer = group_by_key(sales, lambda sale: sale.customer)
    best_day, best = best_group(by_date)

    paged = paginate(sort_sales(sales, sort_by, order), page, per_page)
    paged["results"] = [sale_row(sale) for sale in paged["results"]]

    recent_dates = sorted(by_date.items(), key=lambda pair: pair[0], reverse=True)
    return {
        "total_revenue": round_money(total),
        "count": len(sales),
        "average_sale": round_money(average(total, len(sales))),
        "sort_by": sort_by,
        "order": order,
        "page": paged,
        "sales_by_date": _group_rows(recent_dates[:_SALES_BY_DATE_LIMIT], "date"),
        "best_day": {
            "date": best_day,
            "count": best["count"] if best else 0,
            "total": round_money(best["total"]) if best else 0.0,
        },
        "top_customers": _group_rows(top_n(by_customer, top_customers_limit), "customer"),
    }


def payments_report(
    sales,
    today,
    *,
    date_range="month",
    month=None,
    year=None,
    trend_days=None,
):
    """
    Payment method breakdown for a reporting window.

    Processing fees are simulated estimates from a fixed rate table; they are
    flagged as such in the payload and must not be read as actual charges.
    """
    if trend_days is None:
        trend_days = get_settings().PAYMENT_TREND_DAYS

    filtered = filter_by_range(sales, date_range, today, month=month, year=year)
    total = revenue_total(filtered)
    breakdown = payment_breakdown(filtered)
    method, most = most_used(breakdown)

    methods = [
        {
            "payment_method": name,
            "count": data["count"],
            "total": round_money(data["total"]),
            "avg": round_money(data["avg"]),
            "min": round_money(data["min"]),
            "max": round_money(data["max"]),
            "fee": round_money(data["fee"]),
            "share": round_money(share_percent(data["total"], total)),
        }
        for name, data in breakdown.items()
    ]

    trends = [
        {
            "date": day,
            "total": round_money(sum(entry["total"] for entry in by_method.values())),
            "methods": {
                name: {"count": entry["count"], "total": round_money(entry["total"])}
                for name, entry in by_method.items()
            },
        }
        for day, by_method in payment_trends(filtered, trend_days).items()
    ]

    return {
        "date_range": date_range,
        "total_revenue": round_money(total),
        "transactions": len(filtered),
        "methods": methods,
        "most_used": {"payment_method": method, "count": most["count"] if most else 0},
        "total_fees": round_money(total_fees(breakdown)),
        "fees_are_estimates": True,
        "trends": trends,
        "recent": [sale_row(sale) for sale in reversed(filtered[-20:])],
    }


def products_report(products):
    return {
        "total_value": round_money(inventory_value(products)),
        "total_items": total_units(products),
        "product_count": len(products),
        "low_stock_count": len(low_stock(products)),
        "low_stock": [product.id for product in low_stock(products)],
        "products": [
            {
                "id": product.id,
                "name": product.name,
                "sku": product.sku,
                "category": product.category,
                "price": round_money(product.price),
                "stock": product.stock,
                "min_stock": product.min_stock,
                "value": round_money(product.price * product.stock),
                "status": product_status(product),
            }
            for product in products
        ],
    }


def purchases_summary(purchases, *, top_suppliers_limit=None):
    if top_suppliers_limit is None:
        top_suppliers_limit = get_settings().TOP_SUPPLIERS_LIMIT
    purchases = list(purchases)
    total = sum(purchase.total for purchase in purchases)
    suppliers = group_by_key(purchases, lambda purchase: purchase.supplier)
    return {
        "total_spent": round_money(total),
        "transactions": len(purchases),
        "units": sum(purchase.units for purchase in purchases),
        "average": round_money(average(total, len(purchases))),
        "top_suppliers": _group_rows(top_n(suppliers, top_suppliers_limit), "supplier"),
    }
