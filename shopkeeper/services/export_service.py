import csv
import io
import logging

from openpyxl import Workbook
from openpyxl.styles import Font

from shopkeeper.core.dates import normalize_date
from shopkeeper.services.listing_service import (
    filter_purchases,
    filter_sales,
    sort_by_date_desc,
)
from shopkeeper.services.report_service import payments_report, product_status

logger = logging.getLogger(__name__)

CSV_MEDIA_TYPE = "text/csv"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
EXPORT_FORMATS = ("csv", "xlsx")
EXPORTABLE_REPORTS = ("sales", "daily-sales", "purchases", "payments", "products")

_MONEY_FORMAT = "0.00"


def format_money(value) -> str:
    return "{:.2f}".format(value)


def sales_table(sales):
    headers = ["Date", "ID", "Customer", "Items", "Payment Method", "Total"]
    rows = [
        [sale.date.isoformat(), sale.id, sale.customer, len(sale.items), sale.payment_method, sale.total]
        for sale in sort_by_date_desc(sales)
    ]
    return headers, rows, {5}


def purchases_table(purchases):
    headers = ["Date", "ID", "Supplier", "Items", "Total Cost"]
    rows = [
        [purchase.date.isoformat(), purchase.id, purchase.supplier, len(purchase.items), purchase.total]
        for purchase in sort_by_date_desc(purchases)
    ]
    return headers, rows, {4}


def payments_table(report):
    headers = ["Payment Method", "Transactions", "Total Amount", "Average", "Min", "Max", "Est. Fees"]
    rows = [
        [
            entry["payment_method"],
            entry["count"],
            entry["total"],
            entry["avg"],
            entry["min"],
            entry["max"],
            entry["fee"],
        ]
        for entry in report["methods"]
    ]
    return headers, rows, {2, 3, 4, 5, 6}


def products_table(products):
    headers = ["Name", "SKU", "Category", "Price", "Stock", "Min Stock", "Value", "Status"]
    rows = [
        [
            product.name,
            product.sku,
            product.category,
            product.price,
            product.stock,
            product.min_stock,
            product.price * product.stock,
            product_status(product),
        ]
        for product in products
    ]
    return headers, rows, {3, 6}


def report_table(name, store, today, **options):
    """Headers, rows and money column indexes for a named report."""
    today = normalize_date(today)
    snapshot = store.snapshot()
    if name == "sales":
        sales = filter_sales(
            snapshot.sales,
            term=options.get("search"),
            day=options.get("date"),
            payment_method=options.get("payment_method"),
        )
        return sales_table(sales)
    if name == "daily-sales":
        return sales_table([sale for sale in snapshot.sales if sale.date == today])
    if name == "purchases":
        purchases = filter_purchases(
            snapshot.purchases,
            term=options.get("search"),
            day=options.get("date"),
        )
        return purchases_table(purchases)
    if name == "payments":
        report = payments_report(
            snapshot.sales,
            today,
            date_range=options.get("date_range") or "month",
            month=options.get("month"),
            year=options.get("year"),
        )
        return payments_table(report)
    if name == "products":
        return products_table(snapshot.products)
    raise ValueError(f"Unknown report: {name}")


def to_csv(headers, rows, money_columns=()) -> str:
    """Header row plus one row per record; money columns use two decimals."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow(
            [
                format_money(value) if index in money_columns else value
                for index, value in enumerate(row)
            ]
        )
    return buffer.getvalue()


def build_workbook(tables) -> Workbook:
    workbook = Workbook()
    workbook.remove(workbook.active)
    for title, (headers, rows, money_columns) in tables.items():
        worksheet = workbook.create_sheet(title=str(title)[:31])
        worksheet.append(list(headers))
        for cell in worksheet[1]:
            cell.font = Font(bold=True)
        for row in rows:
            worksheet.append(list(row))
        for index in money_columns:
            for (cell,) in worksheet.iter_rows(
                min_row=2,
                min_col=index + 1,
                max_col=index + 1,
            ):
                cell.number_format = _MONEY_FORMAT
    return workbook


def workbook_bytes(tables) -> bytes:
    buffer = io.BytesIO()
    build_workbook(tables).save(buffer)
    return buffer.getvalue()


def export_report(name, store, today, fmt="csv", **options):
    """Render a report as ``(content, media_type, filename)``."""
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {fmt}")
    today = normalize_date(today)
    headers, rows, money_columns = report_table(name, store, today, **options)
    filename = f"{name}-{today.isoformat()}.{fmt}"
    logger.info("Exporting %s report (%d rows) as %s", name, len(rows), fmt)
    if fmt == "csv":
        return to_csv(headers, rows, money_columns), CSV_MEDIA_TYPE, filename
    content = workbook_bytes({name: (headers, rows, money_columns)})
    return content, XLSX_MEDIA_TYPE, filename
