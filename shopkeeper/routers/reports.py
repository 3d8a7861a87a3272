from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from shopkeeper.core.constants import DATE_RANGES, SALE_SORT_FIELDS, SORT_ORDERS
from shopkeeper.dependencies import get_store, get_today
from shopkeeper.services.export_service import EXPORT_FORMATS, EXPORTABLE_REPORTS, export_report
from shopkeeper.services.report_service import (
    daily_sales_report,
    payments_report,
    products_report,
    sales_report,
)

router = APIRouter(prefix="/reports", tags=["Reports"])


def _check_choice(name, value, choices):
    if value not in choices:
        raise HTTPException(
            status_code=400,
            detail="{} must be one of: {}".format(name, ", ".join(choices)),
        )


@router.get("/daily-sales")
def daily_sales(store=Depends(get_store), today: date = Depends(get_today)):
    return daily_sales_report(store.get_sales(), today)


@router.get("/sales")
def sales(
    sort_by: str = Query("date", description="date | saleRef | customer | payment | amount"),
    order: str = Query("desc", description="asc | desc"),
    page: int = Query(1, ge=1),
    store=Depends(get_store),
):
    _check_choice("sort_by", sort_by, SALE_SORT_FIELDS)
    _check_choice("order", order, SORT_ORDERS)
    return sales_report(store.get_sales(), sort_by=sort_by, order=order, page=page)


@router.get("/payments")
def payments(
    date_range: str = Query("month", description="week | month | year | all"),
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=1),
    store=Depends(get_store),
    today: date = Depends(get_today),
):
    _check_choice("date_range", date_range, DATE_RANGES)
    return payments_report(
        store.get_sales(),
        today,
        date_range=date_range,
        month=month,
        year=year,
    )


@router.get("/products")
def products(store=Depends(get_store)):
    return products_report(store.get_products())


@router.get("/{name}/export")
def export(
    name: str,
    fmt: str = Query("csv", alias="format", description="csv | xlsx"),
    search: Optional[str] = Query(None),
    export_date: Optional[date] = Query(None, alias="date"),
    payment_method: Optional[str] = Query(None),
    date_range: str = Query("month"),
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=1),
    store=Depends(get_store),
    today: date = Depends(get_today),
):
    if name not in EXPORTABLE_REPORTS:
        raise HTTPException(status_code=404, detail="Report not found.")
    _check_choice("format", fmt, EXPORT_FORMATS)
    _check_choice("date_range", date_range, DATE_RANGES)

    content, media_type, filename = export_report(
        name,
        store,
        today,
        fmt,
        search=search,
        date=export_date,
        payment_method=payment_method,
        date_range=date_range,
        month=month,
        year=year,
    )
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


__all__ = ["router"]
