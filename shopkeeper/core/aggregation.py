from datetime import timedelta

from shopkeeper.core.constants import DEFAULT_FEE_RATE, FEE_RATES
from shopkeeper.core.dates import normalize_date


def _sale_total(record):
    return record.total


def revenue_total(sales):
    return sum(sale.total for sale in sales)


def revenue_on(sales, day):
    day = normalize_date(day)
    return sum(sale.total for sale in sales if sale.date == day)


def sales_on(sales, day):
    day = normalize_date(day)
    return [sale for sale in sales if sale.date == day]


def trend_delta(sales, day_a, day_b):
    """Percent change of revenue on ``day_a`` against ``day_b``; 0 when ``day_b`` had none."""
    baseline = revenue_on(sales, day_b)
    if baseline == 0:
        return 0.0
    return (revenue_on(sales, day_a) - baseline) / baseline * 100


def average(total, count):
    return total / count if count else 0.0


def group_by_key(records, key_fn, value_fn=_sale_total):
    groups = {}
    for record in records:
        key = key_fn(record)
        entry = groups.get(key)
        if entry is None:
            entry = {"count": 0, "total": 0.0}
            groups[key] = entry
        entry["count"] += 1
        entry["total"] += value_fn(record)
    return groups


def top_n(groups, n, by="total"):
    # sorted() is stable, so equal values keep first-encountered order.
    ranked = sorted(groups.items(), key=lambda pair: pair[1][by], reverse=True)
    return ranked[:n]


def best_group(groups, by="total"):
    best_key = None
    best = None
    for key, data in groups.items():
        if best is None or data[by] > best[by]:
            best_key, best = key, data
    return best_key, best


def most_used(groups):
    return best_group(groups, by="count")


def low_stock(products):
    return [product for product in products if product.stock < product.min_stock]


def out_of_stock(products):
    return [product for product in products if product.stock == 0]


def inventory_value(products):
    return sum(product.price * product.stock for product in products)


def total_units(products):
    return sum(product.stock for product in products)


def fee_rate(method, fee_rates=None):
    rates = FEE_RATES if fee_rates is None else fee_rates
    return rates.get(method, DEFAULT_FEE_RATE)


def payment_breakdown(sales, fee_rates=None):
    """
    Per payment method: count, total, average, min, max and estimated fee.

    Fees come from a fixed simulated rate table and are estimates only, not
    actual processor charges.
    """
    breakdown = {}
    for sale in sales:
        entry = breakdown.get(sale.payment_method)
        if entry is None:
            entry = {"count": 0, "total": 0.0, "min": sale.total, "max": sale.total}
            breakdown[sale.payment_method] = entry
        entry["count"] += 1
        entry["total"] += sale.total
        entry["min"] = min(entry["min"], sale.total)
        entry["max"] = max(entry["max"], sale.total)

    for method, entry in breakdown.items():
        entry["avg"] = average(entry["total"], entry["count"])
        entry["fee"] = entry["total"] * fee_rate(method, fee_rates)
    return breakdown


def total_fees(breakdown):
    return sum(entry["fee"] for entry in breakdown.values())


def daily_trend(sales, window_days):
    groups = group_by_key(sales, lambda sale: sale.date)
    days = sorted(groups)
    if window_days is not None:
        days = days[-window_days:] if window_days > 0 else []
    return [
        {"date": day, "count": groups[day]["count"], "total": groups[day]["total"]}
        for day in days
    ]


def payment_trends(sales, last_days=None):
    trends = {}
    for sale in sales:
        by_method = trends.setdefault(sale.date, {})
        entry = by_method.setdefault(sale.payment_method, {"count": 0, "total": 0.0})
        entry["count"] += 1
        entry["total"] += sale.total
    days = sorted(trends)
    if last_days is not None:
        days = days[-last_days:] if last_days > 0 else []
    return {day: trends[day] for day in days}


def product_sales(sales):
    totals = {}
    for sale in sales:
        for item in sale.items:
            entry = totals.setdefault(item.product_id, {"quantity": 0, "revenue": 0.0})
            entry["quantity"] += item.quantity
            entry["revenue"] += item.quantity * item.price
    return totals


def recent_activity(sales, purchases, limit):
    activities = [
        {
            "type": "sale",
            "id": sale.id,
            "date": sale.date,
            "description": f"Sale to {sale.customer}",
            "amount": sale.total,
        }
        for sale in sales
    ]
    activities.extend(
        {
            "type": "purchase",
            "id": purchase.id,
            "date": purchase.date,
            "description": f"Purchase from {purchase.supplier}",
            "amount": purchase.total,
        }
        for purchase in purchases
    )
    activities.sort(key=lambda entry: entry["date"], reverse=True)
    return activities[:limit]


def filter_by_range(sales, date_range, today, month=None, year=None):
    """
    Restrict sales to a reporting window.

    ``week`` keeps sales dated seven days before ``today`` or later; ``month`` and ``year``
    default to the month and year of ``today``.
    """
    today = normalize_date(today)
    month = today.month if month is None else month
    year = today.year if year is None else year

    if date_range == "week":
        start = today - timedelta(days=7)
        return [sale for sale in sales if sale.date >= start]
    if date_range == "month":
        return [sale for sale in sales if sale.date.month == month and sale.date.year == year]
    if date_range == "year":
        return [sale for sale in sales if sale.date.year == year]
    return list(sales)


def share_percent(part, whole):
    return part / whole * 100 if whole else 0.0
