import math

from shopkeeper.core.constants import UNKNOWN_PRODUCT_LABEL
from shopkeeper.core.dates import normalize_date
from shopkeeper.services.sale_service import sale_reference

_SALE_SORT_KEYS = {
    "date": lambda sale: sale.date,
    "saleRef": sale_reference,
    "customer": lambda sale: sale.customer.lower(),
    "payment": lambda sale: sale.payment_method.lower(),
    "amount": lambda sale: sale.total,
}


def _normalize_term(term):
    return str(term).strip().lower() if term else ""


def product_name(products, product_id):
    for product in products:
        if product.id == product_id:
            return product.name
    return UNKNOWN_PRODUCT_LABEL


def search_products(products, term=None):
    query_text = _normalize_term(term)
    if not query_text:
        return list(products)
    return [
        product
        for product in products
        if query_text in product.name.lower()
        or query_text in product.sku.lower()
        or query_text in product.category.lower()
    ]


def filter_sales(sales, term=None, day=None, payment_method=None):
    query_text = _normalize_term(term)
    day = normalize_date(day)
    results = []
    for sale in sales:
        if query_text and query_text not in sale.customer.lower() and query_text not in sale.id:
            continue
        if day is not None and sale.date != day:
            continue
        if payment_method and payment_method != "all" and sale.payment_method != payment_method:
            continue
        results.append(sale)
    return results


def filter_purchases(purchases, term=None, day=None):
    query_text = _normalize_term(term)
    day = normalize_date(day)
    results = []
    for purchase in purchases:
        if query_text and query_text not in purchase.supplier.lower() and query_text not in purchase.id:
            continue
        if day is not None and purchase.date != day:
            continue
        results.append(purchase)
    return results


def distinct_payment_methods(sales):
    methods = []
    for sale in sales:
        if sale.payment_method not in methods:
            methods.append(sale.payment_method)
    return methods


def sort_by_date_desc(records):
    return sorted(records, key=lambda record: record.date, reverse=True)


def sort_sales(sales, sort_by="date", order="desc"):
    key = _SALE_SORT_KEYS.get(sort_by)
    if key is None:
        raise ValueError(f"Unsupported sort field: {sort_by}")
    return sorted(sales, key=key, reverse=order != "asc")


def paginate(items, page=1, per_page=10):
    items = list(items)
    total_pages = math.ceil(len(items) / per_page) if per_page > 0 else 0
    page = max(1, min(page, total_pages or 1))
    start = (page - 1) * per_page
    end = start + per_page
    return {
        "page": page,
        "per_page": per_page,
        "total": len(items),
        "total_pages": total_pages,
        "start": start + 1 if items else 0,
        "end": min(end, len(items)),
        "results": items[start:end],
    }


def remove_at(items, index):
    return [item for position, item in enumerate(items) if position != index]
